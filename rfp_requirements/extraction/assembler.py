"""
Requirement Assembler — turn sections and their clauses into Requirement records.

Per section: category, evidence, submission format, budget caps and due
dates are computed once and copied onto every requirement from that section.
Priority is computed per clause. Ids are ``req-{section}-{item}`` (1-based),
so identical input always yields identical ids.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from rfp_requirements.extraction.attributes import (
    classify_category,
    classify_priority,
    extract_budget_caps,
    extract_due_dates,
    extract_evidence,
    extract_submission_format,
)
from rfp_requirements.models.enums import (
    ExtractionStrategy,
    Priority,
    RequirementCategory,
    SubmissionFormatMode,
)
from rfp_requirements.models.schemas import Clause, Requirement, RubricSection, Section

logger = logging.getLogger(__name__)

PLACEHOLDER_TITLE = "General requirement (placeholder)"
PLACEHOLDER_SNIPPET = (
    "Could not auto-detect requirements; review the RFP and annotate manually."
)


def make_id(section_index: int, item_index: int) -> str:
    return f"req-{section_index + 1}-{item_index + 1}"


def assemble(
    sections: Sequence[Section],
    clauses_per_section: Sequence[Sequence[Clause]],
    strategy: ExtractionStrategy | str = ExtractionStrategy.ITEMS,
    rubric: Optional[Sequence[RubricSection]] = None,
    format_mode: SubmissionFormatMode | str = SubmissionFormatMode.STRUCTURED,
    snippet_max_chars: int = 500,
    title_max_chars: int = 120,
) -> list[Requirement]:
    """Build requirements for every section; may return an empty list."""
    strategy = ExtractionStrategy(strategy)
    requirements: list[Requirement] = []

    for si, (section, clauses) in enumerate(zip(sections, clauses_per_section)):
        lines = section.content
        content = section.text
        shared = {
            "category": classify_category(section.title, content, rubric),
            "evidence_required": extract_evidence(lines),
            "submission_format": extract_submission_format(lines, format_mode),
            "budget_caps": extract_budget_caps(lines),
            "due_dates": extract_due_dates(lines),
        }

        if clauses:
            for clause in clauses:
                text = clause.raw_text
                requirements.append(Requirement(
                    id=make_id(si, clause.index),
                    clause_ref=f"{section.title} > Item {clause.index + 1}",
                    title=_first_line(text)[:title_max_chars],
                    priority=classify_priority(text),
                    text_snippet=text[:snippet_max_chars],
                    **shared,
                ))
            continue

        if strategy == ExtractionStrategy.SENTENCES:
            # No requirement-bearing sentences: one soft requirement, only
            # when the section carries a category signal.
            if shared["category"] == RequirementCategory.GENERAL:
                continue
            priority = Priority.MEDIUM
        else:
            priority = classify_priority(content)

        requirements.append(Requirement(
            id=make_id(si, 0),
            clause_ref=section.title,
            title=section.title[:title_max_chars],
            priority=priority,
            text_snippet=content[:snippet_max_chars],
            **shared,
        ))

    logger.debug(
        f"Assembled {len(requirements)} requirements from {len(sections)} sections"
    )
    return requirements


def placeholder_requirement(text: str, snippet_max_chars: int = 500) -> Requirement:
    """The single record emitted when nothing else was found.

    Blank input gets an instructional snippet and low priority; otherwise
    the snippet and priority come from the raw text.
    """
    stripped = (text or "").strip()
    return Requirement(
        id=make_id(0, 0),
        clause_ref="General",
        title=PLACEHOLDER_TITLE,
        category=RequirementCategory.GENERAL,
        priority=classify_priority(stripped) if stripped else Priority.LOW,
        text_snippet=stripped[:snippet_max_chars] if stripped else PLACEHOLDER_SNIPPET,
    )


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""
