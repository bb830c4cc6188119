"""Scoring — category coverage against an expected rubric."""

from rfp_requirements.scoring.coverage import normalize_category, score_coverage

__all__ = ["normalize_category", "score_coverage"]
