"""
Coverage Scorer — how many expected RFP categories the extraction found.

    accuracy = round(min(1, matched / expected + keyword_bonus) * 100)

``expected`` comes from a reference rubric when one is supplied, otherwise
from settings. Category labels are alias-normalised on both sides so that
"Compliance", "submission_requirements" and "Submission & Compliance" all
count as the same category.

This is a coverage heuristic for the UI, not a quality score.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Optional, Sequence

from rfp_requirements.config import Settings, get_settings
from rfp_requirements.models.enums import RequirementCategory
from rfp_requirements.models.schemas import AccuracyResult, Requirement, RubricSection

logger = logging.getLogger(__name__)

_C = RequirementCategory

CATEGORY_ALIASES: dict[str, str] = {
    "compliance": _C.SUBMISSION.value,
    "submission": _C.SUBMISSION.value,
    "submission requirements": _C.SUBMISSION.value,
    "submission and compliance": _C.SUBMISSION.value,
    "submission compliance": _C.SUBMISSION.value,
    "proposal format": _C.SUBMISSION.value,
    "instructions": _C.SUBMISSION.value,
    "terms and conditions": _C.SUBMISSION.value,
    "scope": _C.SCOPE.value,
    "scope/activities": _C.SCOPE.value,
    "scope and activities": _C.SCOPE.value,
    "scope activities": _C.SCOPE.value,
    "scope of work": _C.SCOPE.value,
    "deliverables": _C.SCOPE.value,
    "activities": _C.SCOPE.value,
    "deliverable": _C.SCOPE.value,
    "funding": _C.BUDGET.value,
    "budget narrative": _C.BUDGET.value,
    "cost": _C.BUDGET.value,
    "schedule": _C.TIMELINE.value,
    "key dates": _C.TIMELINE.value,
    "evaluation criteria": _C.EVALUATION.value,
    "review criteria": _C.EVALUATION.value,
    "capacity": _C.ORGANIZATIONAL_CAPACITY.value,
    "organizational capacity": _C.ORGANIZATIONAL_CAPACITY.value,
    "qualifications": _C.ORGANIZATIONAL_CAPACITY.value,
    "outcomes": _C.OUTCOMES.value,
    "impact": _C.OUTCOMES.value,
    "outcomes and impact": _C.OUTCOMES.value,
    "outcomes impact": _C.OUTCOMES.value,
    "risk": _C.RISK.value,
    "risks": _C.RISK.value,
    "risk management": _C.RISK.value,
    "risk and mitigation": _C.RISK.value,
    "risk mitigation": _C.RISK.value,
    "summary": _C.EXECUTIVE_SUMMARY.value,
    "abstract": _C.EXECUTIVE_SUMMARY.value,
    "goals": _C.GOALS.value,
    "objectives": _C.GOALS.value,
    "goals and objectives": _C.GOALS.value,
    "goals objectives": _C.GOALS.value,
    "contact": _C.GENERAL.value,
    "introduction": _C.GENERAL.value,
}

_CANONICAL: dict[str, str] = {
    re.sub(r"\s+", " ", c.value.lower()): c.value for c in RequirementCategory
}


def normalize_category(label: Any) -> str:
    """Collapse a category label or rubric key onto its canonical name.

    Unknown labels come back stripped but otherwise unchanged.
    """
    raw = label.value if isinstance(label, RequirementCategory) else str(label or "")
    raw = raw.strip()
    key = re.sub(r"[_\-]+", " ", raw).lower()
    key = re.sub(r"\s+", " ", key).strip()
    if key in _CANONICAL:
        return _CANONICAL[key]
    if key in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[key]
    key_and = key.replace("&", "and")
    if key_and in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[key_and]
    return raw


def expected_categories(
    rubric: Optional[Sequence[RubricSection | dict[str, Any]]] = None,
    settings: Optional[Settings] = None,
) -> list[str]:
    """Rubric keys when available, otherwise the configured default list."""
    settings = settings or get_settings()
    source: Iterable[str]
    if rubric:
        source = [_as_rubric_section(r).key for r in rubric]
    else:
        source = settings.expected_categories

    expected = _unique(normalize_category(c) for c in source)
    if not expected:
        expected = _unique(normalize_category(c) for c in settings.expected_categories)
    return expected


def score_coverage(
    requirements: Sequence[Requirement],
    keywords: Optional[Sequence[str]] = None,
    rubric: Optional[Sequence[RubricSection | dict[str, Any]]] = None,
    settings: Optional[Settings] = None,
) -> AccuracyResult:
    """Compare detected categories against the expected list.

    When ``keywords`` is omitted the keywords already broadcast onto the
    requirements are used for the bonus.
    """
    settings = settings or get_settings()
    expected = expected_categories(rubric, settings)
    present = _unique(normalize_category(r.category) for r in requirements)

    if keywords is None:
        keywords = [k for r in requirements for k in r.keywords]
    has_keywords = any(str(k).strip() for k in keywords)

    present_set = set(present)
    matched = [c for c in expected if c in present_set]
    missing = [c for c in expected if c not in present_set]

    ratio = len(matched) / len(expected) if expected else 0.0
    bonus = settings.keyword_bonus if has_keywords else 0.0
    score = min(1.0, ratio + bonus)

    if settings.critical_penalty > 0:
        critical = {normalize_category(c) for c in settings.critical_categories}
        missing_critical = sum(1 for c in missing if c in critical)
        score -= settings.critical_penalty * missing_critical
    score = max(0.0, score)

    accuracy = _round_half_up(score * 100)
    logger.debug(
        f"Coverage {accuracy}% — matched {len(matched)}/{len(expected)}, "
        f"keyword bonus {bonus}, missing {missing}"
    )
    return AccuracyResult(
        accuracy=accuracy,
        missing_categories=missing,
        expected_categories=expected,
        present_categories=present,
    )


# ── Private helpers ──────────────────────────────────────


def _as_rubric_section(entry: RubricSection | dict[str, Any]) -> RubricSection:
    if isinstance(entry, RubricSection):
        return entry
    return RubricSection.model_validate(entry)


def _unique(values: Iterable[str]) -> list[str]:
    seen: list[str] = []
    for v in values:
        if v and v not in seen:
            seen.append(v)
    return seen


def _round_half_up(value: float) -> int:
    # 1e-9 absorbs float error such as 5/6 * 100 = 83.33333333333334
    return int(math.floor(value + 0.5 + 1e-9))
