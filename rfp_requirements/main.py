"""
RFP Requirement Extraction — Main Entry Point

Extract requirements from a file (CLI):
    python -m rfp_requirements path/to/rfp.pdf

Run as an API server:
    python -m rfp_requirements --serve
    # or: uvicorn rfp_requirements.api:app --reload --port 8000

Or import and run programmatically:
    from rfp_requirements.main import run
    result = run("path/to/rfp.pdf")
"""

from __future__ import annotations

import logging
import sys
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path

from rfp_requirements.config import get_settings
from rfp_requirements.extraction import extract_requirements
from rfp_requirements.models.schemas import AccuracyResult, Requirement
from rfp_requirements.scoring import score_coverage
from rfp_requirements.services import DocumentService, RubricStore
from rfp_requirements.utils.logger import setup_logging


def run(file_path: str) -> dict:
    """Extract and score requirements for one file; returns a JSON-ready dict."""
    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info("  RFP REQUIREMENT EXTRACTION")
    logger.info(f"  File: {file_path} | Started: {datetime.now(timezone.utc).isoformat()}")
    logger.info("=" * 60)

    path = Path(file_path)
    document = DocumentService.extract_text(path.read_bytes(), path.name)
    rubric = RubricStore().load()
    requirements = extract_requirements(document.text, rubric=rubric)
    accuracy = score_coverage(requirements, rubric=rubric)

    _print_summary(requirements, accuracy)

    return {
        "metadata": document.metadata,
        "requirements": [r.model_dump(by_alias=True, mode="json") for r in requirements],
        "accuracy": accuracy.model_dump(by_alias=True),
    }


def _print_summary(requirements: list[Requirement], accuracy: AccuracyResult) -> None:
    """Print a human-readable summary of the extraction result."""
    logger = logging.getLogger(__name__)

    by_category = Counter(r.category.value for r in requirements)
    by_priority = Counter(r.priority.value for r in requirements)

    logger.info("")
    logger.info("-" * 60)
    logger.info("  EXTRACTION SUMMARY")
    logger.info("-" * 60)
    logger.info(f"  Requirements:   {len(requirements)} extracted")
    logger.info(
        "  Priorities:     "
        + ", ".join(f"{p}={by_priority.get(p, 0)}" for p in ("high", "medium", "low"))
    )
    logger.info(f"  Accuracy:       {accuracy.accuracy}%")
    logger.info(f"  Missing:        {', '.join(accuracy.missing_categories) or 'none'}")
    logger.info("-" * 60)

    logger.info("  By category:")
    for category, count in by_category.most_common():
        logger.info(f"    {category:<28} {count}")
    logger.info("")


def serve(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Start the FastAPI server."""
    import uvicorn

    setup_logging(get_settings().log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run("rfp_requirements.api:app", host=host, port=port, reload=get_settings().debug)


def cli(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if "--serve" in args:
        serve()
        return 0
    if not args:
        print("usage: python -m rfp_requirements <file> | --serve", file=sys.stderr)
        return 2
    run(args[0])
    return 0


if __name__ == "__main__":
    sys.exit(cli())
