"""
Extraction pipeline — raw RFP text in, Requirement records out.

    text → detect_sections → split_clauses → assemble → [placeholder]

Every call is self-contained: no module state is read or written, so
independent documents can be processed concurrently (see extract_batch).
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from rfp_requirements.config import Settings, get_settings
from rfp_requirements.extraction.assembler import assemble, placeholder_requirement
from rfp_requirements.extraction.clauses import split_clauses
from rfp_requirements.extraction.sections import detect_sections
from rfp_requirements.models.enums import ExtractionStrategy
from rfp_requirements.models.schemas import Requirement, RubricSection

logger = logging.getLogger(__name__)


def extract_requirements(
    document_text: str,
    rubric: Optional[Sequence[RubricSection]] = None,
    strategy: ExtractionStrategy | str | None = None,
    settings: Optional[Settings] = None,
) -> list[Requirement]:
    """Extract requirements from ``document_text``; never returns an empty list."""
    settings = settings or get_settings()
    strategy = ExtractionStrategy(strategy or settings.extraction_strategy)
    text = document_text or ""
    t0 = time.perf_counter()

    sections = detect_sections(text)
    clauses = [split_clauses(s, strategy) for s in sections]
    requirements = assemble(
        sections,
        clauses,
        strategy=strategy,
        rubric=rubric,
        format_mode=settings.submission_format_mode,
        snippet_max_chars=settings.snippet_max_chars,
        title_max_chars=settings.title_max_chars,
    )

    if not requirements:
        logger.info("No requirements detected — emitting placeholder")
        requirements = [placeholder_requirement(text, settings.snippet_max_chars)]

    elapsed = time.perf_counter() - t0
    logger.info(
        f"Extracted {len(requirements)} requirements from {len(sections)} sections "
        f"({len(text)} chars, strategy={strategy.value}) in {elapsed:.3f}s"
    )
    for req in requirements:
        logger.debug(
            f"  {req.id} | {req.category.value} | {req.priority.value} | "
            f"{req.title[:60]}"
        )
    return requirements


def extract_batch(
    documents: Sequence[str],
    rubric: Optional[Sequence[RubricSection]] = None,
    strategy: ExtractionStrategy | str | None = None,
    max_workers: Optional[int] = None,
) -> list[list[Requirement]]:
    """Run extract_requirements over many documents on a thread pool.

    Results keep the order of ``documents``.
    """
    settings = get_settings()
    workers = max_workers or settings.extraction_workers
    with ThreadPoolExecutor(max_workers=max(1, workers)) as pool:
        return list(pool.map(
            lambda text: extract_requirements(text, rubric, strategy, settings),
            documents,
        ))
