"""
Clause Splitter — break a section into requirement-bearing items.

Two strategies:
  • items (default): bullets, numbered and lettered list markers at line
    starts. Text before the first marker is an item of its own. No markers
    means no items; the assembler then treats the whole section as one.
  • sentences: sentence boundaries, keeping only sentences that carry a
    modal requirement verb.
"""

from __future__ import annotations

import re

from rfp_requirements.models.enums import ExtractionStrategy
from rfp_requirements.models.schemas import Clause, Section

_ITEM_MARKER_RE = re.compile(r"^[ \t]*(?:[-•*]|\d+\.|[a-z]\))[ \t]+", re.MULTILINE)
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_MODAL_RE = re.compile(
    r"\b(?:must|shall|required|need to|is required to|will)\b", re.IGNORECASE
)


def split_clauses(
    section: Section,
    strategy: ExtractionStrategy | str = ExtractionStrategy.ITEMS,
) -> list[Clause]:
    """Split a section into clauses using the chosen strategy."""
    if ExtractionStrategy(strategy) == ExtractionStrategy.SENTENCES:
        pieces = split_sentences(section.text)
    else:
        pieces = split_items(section.text)

    return [
        Clause(section_title=section.title, index=i, raw_text=piece)
        for i, piece in enumerate(pieces)
    ]


def split_items(text: str) -> list[str]:
    """Split on list markers at line starts; [] when there are none."""
    markers = list(_ITEM_MARKER_RE.finditer(text))
    if not markers:
        return []

    items: list[str] = []
    lead = text[: markers[0].start()].strip()
    if lead:
        items.append(lead)

    for current, following in zip(markers, markers[1:] + [None]):
        end = following.start() if following else len(text)
        body = text[current.end():end].strip()
        if body:
            items.append(body)
    return items


def split_sentences(text: str) -> list[str]:
    """Sentences containing a modal requirement verb, in input order."""
    flat = re.sub(r"\s+", " ", text).strip()
    if not flat:
        return []
    return [
        s.strip()
        for s in _SENTENCE_SPLIT_RE.split(flat)
        if s.strip() and _MODAL_RE.search(s)
    ]
