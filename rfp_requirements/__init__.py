"""
RFP requirement extraction.

    from rfp_requirements import extract_requirements, score_coverage, redact_text

    reqs = extract_requirements(text)
    result = score_coverage(reqs)
"""

from rfp_requirements.extraction.pipeline import extract_requirements
from rfp_requirements.redaction.filter import redact_text
from rfp_requirements.scoring.coverage import score_coverage

__all__ = ["extract_requirements", "score_coverage", "redact_text"]
