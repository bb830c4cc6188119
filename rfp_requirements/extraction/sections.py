"""
Section Detector — split raw RFP text into titled sections.

A line opens a new section when it looks like a heading:
  • a known heading keyword, optionally behind "1.", "B." or "IV."
  • an outline-numbered title ("2.3 Applicant Registration") or a bare
    number in front of a Title Case phrase ("4 Budget Narrative")
  • an ALL-CAPS line of four or more characters

Blank lines are dropped. A heading met before any content has accumulated
renames the in-progress section instead of emitting an empty one.
"""

from __future__ import annotations

import logging
import re

from rfp_requirements.models.schemas import Section

logger = logging.getLogger(__name__)

DEFAULT_SECTION_TITLE = "General"

SECTION_HEADERS: tuple[str, ...] = (
    "Eligibility",
    "Submission Requirements",
    "Scope of Work",
    "Scope",
    "Budget",
    "Funding",
    "Timeline",
    "Schedule",
    "Evaluation Criteria",
    "Compliance",
    "Contact",
    "Instructions",
    "Deliverables",
    "Proposal Format",
    "Administrative",
    "Terms and Conditions",
)

# ── Heading patterns ─────────────────────────────────────

_ENUM_PREFIX = r"(?:\d+\.|[A-Z]{1,3}\.|[IVX]{1,4}\.)"

_KEYWORD_HEADING_RE = re.compile(
    rf"^(?P<prefix>{_ENUM_PREFIX})?\s*"
    rf"(?P<title>(?:{'|'.join(re.escape(h) for h in SECTION_HEADERS)})\b.*)$",
    re.IGNORECASE,
)
_DECIMAL_HEADING_RE = re.compile(r"^\d+(?:\.\d+)+\.?\s+[A-Z]\S*(?:\s+\S+)*$")
_NUMBERED_TITLE_RE = re.compile(
    r"^\d+\s+[A-Z][\w&/\-]*"
    r"(?:\s+(?:[A-Z][\w&/\-]*|of|and|the|for|to|in|on|&))*$"
)
_ALL_CAPS_HEADING_RE = re.compile(r"^[A-Z][A-Z\s&/\-]{3,}$")

_MAX_KEYWORD_HEADING_WORDS = 10
_MAX_DECIMAL_HEADING_CHARS = 80
_SENTENCE_END = (".", ";", ",", "?", "!")


def detect_sections(text: str) -> list[Section]:
    """Split ``text`` into an ordered list of sections with non-empty content."""
    sections: list[Section] = []
    title = DEFAULT_SECTION_TITLE
    content: list[str] = []
    headings = 0

    for raw in (text or "").splitlines():
        line = raw.strip()
        if not line:
            continue

        heading = heading_title(line)
        if heading is None:
            content.append(line)
            continue

        headings += 1
        if content:
            sections.append(Section(title=title, content=content))
            content = []
        title = heading

    if content:
        sections.append(Section(title=title, content=content))

    logger.debug(
        f"Detected {len(sections)} sections from {headings} heading lines"
    )
    return sections


def heading_title(line: str) -> str | None:
    """Return the section title if ``line`` is a heading, else None."""
    stripped = line.strip()
    if not stripped:
        return None

    m = _KEYWORD_HEADING_RE.match(stripped)
    if m and _is_heading_shaped(m.group("title")):
        return m.group("title").strip().rstrip(":").strip()

    if (
        (_DECIMAL_HEADING_RE.match(stripped) or _NUMBERED_TITLE_RE.match(stripped))
        and len(stripped) <= _MAX_DECIMAL_HEADING_CHARS
        and not stripped.endswith(".")
    ):
        return stripped.rstrip(":").strip()

    if _ALL_CAPS_HEADING_RE.match(stripped):
        return re.sub(r"\s+", " ", stripped)

    return None


def _is_heading_shaped(title: str) -> bool:
    """Short and not punctuated like a sentence."""
    title = title.strip()
    if len(title.split()) > _MAX_KEYWORD_HEADING_WORDS:
        return False
    return not title.endswith(_SENTENCE_END)
