"""
Redaction Filter — heuristic PII masking for text leaving the pipeline.

Must be applied to any text handed to the keyword/suggestion collaborator.
Substitutions run in a fixed order (email, phone, street address, company,
person name, city/state/zip) and are repeated until the text stops changing,
so redacting already-redacted text is a no-op.

False positives are expected: any two adjacent capitalised words look like
a person's name.
"""

from __future__ import annotations

import re
from typing import Callable, Union

EMAIL_MASK = "[REDACTED_EMAIL]"
PHONE_MASK = "[REDACTED_PHONE]"
ADDRESS_MASK = "[REDACTED_ADDRESS]"
COMPANY_MASK = "[REDACTED_COMPANY]"
NAME_MASK = "[REDACTED_NAME]"
LOCATION_MASK = "[REDACTED_LOCATION]"

_EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.I)
_PHONE_RE = re.compile(
    r"(?<!\w)(?:\+?\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}\b"
)
_ADDRESS_RE = re.compile(
    r"\b\d{1,6}\s+(?:[A-Za-z0-9'.\-]+\s+){1,3}?"
    r"(?:Street|St|Road|Rd|Avenue|Ave|Boulevard|Blvd|Lane|Ln|Drive|Dr|Court|Ct|Way|Terrace|Ter)\b\.?"
)
_COMPANY_RE = re.compile(
    r"\b[A-Z][A-Za-z&'\-]*(?:[ \t]+[A-Z][A-Za-z&'\-]*){0,5},?[ \t]+"
    r"(?:Inc|LLC|L\.L\.C|Corp|Corporation|Co|Ltd|PLC|GmbH|Pty|AG)\b\.?"
)
_PERSON_RE = re.compile(r"\b([A-Z][a-z]{2,})\s+([A-Z][a-z]{2,})\b")
_LOCATION_RE = re.compile(
    r"(?:\[REDACTED_NAME\]|\b[A-Z][a-zA-Z]+),\s*[A-Z]{2}\s*\d{5}(?:-\d{4})?\b"
)

# Capitalised pairs that open common RFP headings, not names.
_NAME_EXEMPT_PREFIXES = ("Request For", "Terms And", "Statement Of", "Table Of", "Scope Of")

_MAX_PASSES = 5


def _mask_person(match: re.Match[str]) -> str:
    if match.group(0).startswith(_NAME_EXEMPT_PREFIXES):
        return match.group(0)
    return NAME_MASK


_SUBSTITUTIONS: tuple[tuple[re.Pattern[str], Union[str, Callable[[re.Match[str]], str]]], ...] = (
    (_EMAIL_RE, EMAIL_MASK),
    (_PHONE_RE, PHONE_MASK),
    (_ADDRESS_RE, ADDRESS_MASK),
    (_COMPANY_RE, COMPANY_MASK),
    (_PERSON_RE, _mask_person),
    (_LOCATION_RE, LOCATION_MASK),
)


def redact_text(text: str) -> str:
    """Mask emails, phones, addresses, companies, names and locations."""
    if not text:
        return ""
    current = text
    for _ in range(_MAX_PASSES):
        updated = _redact_once(current)
        if updated == current:
            break
        current = updated
    return current


def _redact_once(text: str) -> str:
    for pattern, replacement in _SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text


def condense_for_enrichment(text: str, max_chars: int = 3000) -> str:
    """Collapse whitespace and truncate, for prompts to the enrichment service."""
    condensed = re.sub(r"\s+", " ", text or "").strip()
    return condensed[:max_chars]
