"""
Document Service — plain text out of uploaded RFP files.

Supported inputs:
  • PDF  (PyMuPDF, page order preserved, one line per text line)
  • DOCX (python-docx, one line per non-empty paragraph)
  • plain text / markdown (UTF-8, undecodable bytes replaced)

Does NOT:
  • OCR scanned pages
  • Parse table cells
  • Interpret content (that is the extraction pipeline's job)
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import PurePath
from typing import Any

from rfp_requirements.errors import UnsupportedDocumentFormat
from rfp_requirements.models.schemas import ExtractedDocument
from rfp_requirements.utils.hashing import sha256_hash

logger = logging.getLogger(__name__)

_TEXT_SUFFIXES = {".txt", ".text", ".md", ".markdown"}
_MIME_RE = re.compile(r"^(?:application|text|image|audio|video|multipart)/[\w.+\-]+$")

# ── Regex patterns for metadata extraction ───────────────

_RFP_NUMBER_RE = re.compile(
    r"(?:RFP|Solicitation|NOFO)\s*(?:Number|No\.?|#)[\s:]*([A-Z0-9][\w\-./]{2,})",
    re.IGNORECASE,
)
_ISSUE_DATE_RE = re.compile(
    r"(?:Issue\s+Date|Date\s+of\s+Issue|Release\s+Date)[\s:]+(.+)",
    re.IGNORECASE,
)
_DEADLINE_RE = re.compile(
    r"(?:Submission\s+Deadline|Due\s+Date|Closing\s+Date|Application\s+Deadline)[\s:]+(.+)",
    re.IGNORECASE,
)
_EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+\.[\w.-]+")
_PHONE_RE = re.compile(
    r"(?:Phone|Tel|Telephone)[\s:]*([+\d(][\d \t\-().]{7,}\d)", re.IGNORECASE
)


class DocumentService:
    """
    Text-extraction collaborator for the requirement pipeline.

        doc = DocumentService.extract_text(file_bytes, "rfp.pdf")
        reqs = extract_requirements(doc.text)
    """

    @staticmethod
    def detect_format(file_name_or_mime: str) -> str:
        """Map a file name or MIME type to "pdf" | "docx" | "text"."""
        hint = (file_name_or_mime or "").strip().lower()
        if not hint:
            return "text"

        if _MIME_RE.match(hint):
            if hint == "application/pdf":
                return "pdf"
            if "wordprocessingml" in hint:
                return "docx"
            if hint.startswith("text/") or hint == "application/octet-stream":
                return "text"
            raise UnsupportedDocumentFormat(f"Unsupported file type: {file_name_or_mime}")

        suffix = PurePath(hint).suffix
        if suffix == ".pdf":
            return "pdf"
        if suffix == ".docx":
            return "docx"
        if suffix in _TEXT_SUFFIXES:
            return "text"
        raise UnsupportedDocumentFormat(f"Unsupported file type: {file_name_or_mime}")

    @staticmethod
    def extract_text(file_bytes: bytes, file_name_or_mime: str = "") -> ExtractedDocument:
        """Decode ``file_bytes`` and return its text plus metadata."""
        fmt = DocumentService.detect_format(file_name_or_mime)

        if fmt == "pdf":
            text, metadata = DocumentService._parse_pdf(file_bytes)
        elif fmt == "docx":
            text, metadata = DocumentService._parse_docx(file_bytes)
        else:
            text, metadata = file_bytes.decode("utf-8", errors="replace"), {}

        metadata.update({
            "format": fmt,
            "textHash": sha256_hash(text),
            "charCount": len(text),
            **DocumentService.extract_metadata(text),
        })
        logger.info(
            f"Extracted {len(text)} chars from {file_name_or_mime or 'upload'} ({fmt})"
        )
        return ExtractedDocument(text=text, metadata=metadata)

    # ── Metadata extraction ──────────────────────────────

    @staticmethod
    def extract_metadata(text: str) -> dict[str, str | None]:
        """
        Pull RFP header facts with regex.

        Keys: rfpNumber, issueDate, deadline, contactEmail, contactPhone.
        Values are None when not found.
        """
        metadata: dict[str, str | None] = {
            "rfpNumber": None,
            "issueDate": None,
            "deadline": None,
            "contactEmail": None,
            "contactPhone": None,
        }

        m = _RFP_NUMBER_RE.search(text)
        if m:
            metadata["rfpNumber"] = m.group(1).strip()

        m = _ISSUE_DATE_RE.search(text)
        if m:
            metadata["issueDate"] = m.group(1).strip()

        m = _DEADLINE_RE.search(text)
        if m:
            metadata["deadline"] = m.group(1).strip()

        m = _EMAIL_RE.search(text)
        if m:
            metadata["contactEmail"] = m.group(0).strip()

        m = _PHONE_RE.search(text)
        if m:
            metadata["contactPhone"] = m.group(1).strip()

        return metadata

    # ── Format readers ───────────────────────────────────

    @staticmethod
    def _parse_pdf(file_bytes: bytes) -> tuple[str, dict[str, Any]]:
        """Extract text from a PDF using PyMuPDF."""
        import fitz  # PyMuPDF

        try:
            doc = fitz.open(stream=file_bytes, filetype="pdf")
        except Exception as exc:
            raise UnsupportedDocumentFormat(f"Could not open PDF: {exc}") from exc

        try:
            pages = [page.get_text("text") for page in doc]
            page_count = doc.page_count
        finally:
            doc.close()

        return "\n".join(pages), {"pages": page_count}

    @staticmethod
    def _parse_docx(file_bytes: bytes) -> tuple[str, dict[str, Any]]:
        """Extract text from DOCX using python-docx."""
        from docx import Document

        try:
            doc = Document(io.BytesIO(file_bytes))
        except Exception as exc:
            raise UnsupportedDocumentFormat(f"Could not open DOCX: {exc}") from exc

        paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]
        return "\n".join(paragraphs), {"paragraphs": len(paragraphs)}
