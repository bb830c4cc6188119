"""
Attribute Extractors — independent lexical rules over section or clause text.

Every function here is pure and total: any string in, a value out.
Rule lists are ordered ``(pattern, label)`` pairs evaluated first-match-wins,
so their order is part of the behaviour.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence, Union

from rfp_requirements.models.enums import (
    BudgetCapType,
    Priority,
    RequirementCategory,
    SubmissionFormatMode,
)
from rfp_requirements.models.schemas import (
    BudgetCaps,
    FreeformFormat,
    RubricSection,
    StructuredFormat,
)
from rfp_requirements.scoring.coverage import normalize_category

TextInput = Union[str, Sequence[str]]

# ── Category ─────────────────────────────────────────────

_C = RequirementCategory

# Matched against the section title.
TITLE_CATEGORY_RULES: tuple[tuple[re.Pattern[str], RequirementCategory], ...] = (
    (re.compile(r"eligib", re.I), _C.ELIGIBILITY),
    (re.compile(r"budget|funding|cost|pric", re.I), _C.BUDGET),
    (re.compile(r"timeline|schedule|key dates|deadline", re.I), _C.TIMELINE),
    (re.compile(r"evaluation|scoring|review criteria", re.I), _C.EVALUATION),
    (re.compile(r"compliance|terms", re.I), _C.SUBMISSION),
    (re.compile(r"deliverable|scope|activities|statement of work|tasks", re.I), _C.SCOPE),
    (re.compile(r"submission|\bformat|instructions|application", re.I), _C.SUBMISSION),
    (re.compile(r"contact", re.I), _C.GENERAL),
    (re.compile(r"executive summary|abstract", re.I), _C.EXECUTIVE_SUMMARY),
    (re.compile(r"goals?\b|objectives?", re.I), _C.GOALS),
    (re.compile(r"outcomes?|impact|performance measures", re.I), _C.OUTCOMES),
    (re.compile(r"organi[sz]ational|capacity|qualifications|key personnel|staffing", re.I),
     _C.ORGANIZATIONAL_CAPACITY),
    (re.compile(r"\brisks?\b|mitigation", re.I), _C.RISK),
)

# Matched against section content when the title says nothing.
CONTENT_CATEGORY_RULES: tuple[tuple[re.Pattern[str], RequirementCategory], ...] = (
    (re.compile(r"\beligib|501\(c\)\(3\)|non-?profit", re.I), _C.ELIGIBILITY),
    (re.compile(r"\bbudget\b|not to exceed \$|award amount|available funding", re.I), _C.BUDGET),
    (re.compile(r"\bsubmit|submission|page limit|\bfont\b", re.I), _C.SUBMISSION),
    (re.compile(r"\bevaluat|scoring rubric|\bscored\b", re.I), _C.EVALUATION),
    (re.compile(r"\bdeliverables?\b|\bscope of work\b|\btasks?\b|\bactivities\b", re.I), _C.SCOPE),
    (re.compile(r"\bmilestones?\b|\bperiod of performance\b|\bproject period\b", re.I), _C.TIMELINE),
    (re.compile(r"\bgoals?\b|\bobjectives?\b", re.I), _C.GOALS),
    (re.compile(r"\boutcomes?\b|\bimpact\b", re.I), _C.OUTCOMES),
)


def classify_category(
    title: str,
    content: TextInput = "",
    rubric: Optional[Sequence[RubricSection]] = None,
) -> RequirementCategory:
    """Pick one category for a section: title rules, content rules, then rubric."""
    title = title or ""
    for pattern, category in TITLE_CATEGORY_RULES:
        if pattern.search(title):
            return category

    body = _join(content)
    for pattern, category in CONTENT_CATEGORY_RULES:
        if pattern.search(body):
            return category

    if rubric:
        return _category_from_rubric(f"{title}\n{body}", rubric)
    return _C.GENERAL


def _category_from_rubric(
    text: str, rubric: Sequence[RubricSection]
) -> RequirementCategory:
    """First rubric entry whose key or element appears in the text."""
    lowered = text.lower()
    for entry in rubric:
        terms = [entry.key, *entry.elements]
        if not any(t.strip() and t.strip().lower() in lowered for t in terms):
            continue
        label = normalize_category(entry.key)
        try:
            return RequirementCategory(label)
        except ValueError:
            continue
    return _C.GENERAL


# ── Priority ─────────────────────────────────────────────

PRIORITY_RULES: tuple[tuple[re.Pattern[str], Priority], ...] = (
    (re.compile(r"\b(?:must|shall|required|mandatory)\b", re.I), Priority.HIGH),
    (re.compile(r"\b(?:should|recommended|strongly encouraged|expected)\b", re.I),
     Priority.MEDIUM),
)


def classify_priority(text: TextInput) -> Priority:
    """high for must/shall/required/mandatory, medium for should-language, else low."""
    body = _join(text)
    for pattern, priority in PRIORITY_RULES:
        if pattern.search(body):
            return priority
    return Priority.LOW


# ── Evidence ─────────────────────────────────────────────

EVIDENCE_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("IRS letter", re.compile(
        r"\bIRS\b[^.\n]{0,40}\bletter\b|\bdetermination letter\b", re.I)),
    ("letters of support", re.compile(r"\bletters? of (?:support|commitment)\b", re.I)),
    ("resumes", re.compile(r"\bresumes?\b|\brésumés?\b|\bcvs?\b|\bcurricul(?:um|a) vitae\b", re.I)),
    ("certifications", re.compile(r"\bcertifications?\b|\blicen[cs]es?\b", re.I)),
    ("financial statements", re.compile(
        r"\bfinancial statements?\b|\baudited financials?\b|\bfinancial audit\b", re.I)),
    ("work samples", re.compile(r"\bwork samples?\b|\bportfolio\b", re.I)),
    ("past performance", re.compile(r"\bpast performance\b|\breferences?\b", re.I)),
    ("budget worksheet", re.compile(r"\bbudget (?:worksheet|breakdown|narrative|justification)\b", re.I)),
    ("compliance forms", re.compile(
        r"\bforms?\b|\b(?:affidavit|debarment|insurance) (?:form|certificate)\b", re.I)),
)


def extract_evidence(text: TextInput) -> list[str]:
    """Every evidence label whose rule matches, in vocabulary order."""
    body = _join(text)
    return [label for label, pattern in EVIDENCE_RULES if pattern.search(body)]


# ── Submission format ────────────────────────────────────

_PAGE_LIMIT_RE = re.compile(
    r"\b(?:maximum(?: of)?|max\.?|no more than|not to exceed|limited to)\s+"
    r"(?:of\s+)?(\d{1,4})\s*(?:-\s*)?pages?\b"
    r"|\bpage limit(?: of|:)?\s+(\d{1,4})\b"
    r"|\b(\d{1,4})[- ]page (?:limit|maximum)\b",
    re.I,
)
_FONT_RE = re.compile(
    r"\b(?:font|typeface)\b[^.\n]{0,40}?\b(\d{1,2}(?:\.\d)?)\s*-?\s*(?:pt|point)s?\b"
    r"|\b(\d{1,2}(?:\.\d)?)\s*-?\s*(?:pt|point)\s+(?:\w+\s+)?(?:font|typeface)\b",
    re.I,
)
_FILE_TYPE_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("PDF", re.compile(r"\bpdfs?\b", re.I)),
    ("DOCX", re.compile(r"\bdocx\b|\bms word\b|\bword document\b", re.I)),
    ("HTML", re.compile(r"\bhtml\b", re.I)),
)
_METHOD_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Online Portal", re.compile(r"\bportal\b|\bonline submission\b|\bwebsite\b|\burl\b", re.I)),
    ("Hard Copy", re.compile(r"\bhard ?cop(?:y|ies)\b|\bmailed\b|\bpostmarked\b", re.I)),
)


def extract_submission_format(
    text: TextInput,
    mode: SubmissionFormatMode | str = SubmissionFormatMode.STRUCTURED,
) -> StructuredFormat | FreeformFormat | None:
    """Page limits, font rules, file types and submission methods; None if absent."""
    body = _join(text)
    file_types = [label for label, p in _FILE_TYPE_RULES if p.search(body)]
    methods = [label for label, p in _METHOD_RULES if p.search(body)]

    if SubmissionFormatMode(mode) == SubmissionFormatMode.FREEFORM:
        items = file_types + methods
        return FreeformFormat(items=items) if items else None

    max_pages = None
    m = _PAGE_LIMIT_RE.search(body)
    if m:
        max_pages = int(next(g for g in m.groups() if g))

    font = None
    m = _FONT_RE.search(body)
    if m:
        size = next(g for g in m.groups() if g)
        font = f">={size}pt"

    if max_pages is None and font is None and not file_types and not methods:
        return None
    return StructuredFormat(
        max_pages=max_pages, font=font, file_types=file_types, methods=methods
    )


# ── Budget caps ──────────────────────────────────────────

MONEY_RE = re.compile(r"\$\s?((?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?)")
_CAP_LANGUAGE_RE = re.compile(
    r"\bnot to exceed\b|\bmaximum\b|\bcap(?:s|ped)?\b", re.I
)
_BUDGET_LANGUAGE_RE = re.compile(
    r"\btotal budget\b|\baward amount\b|\bavailable funding\b|\btotal funding\b", re.I
)


def extract_budget_caps(text: TextInput) -> BudgetCaps | None:
    """Dollar amounts in the text, framed as cap, budget or plain amounts."""
    body = _join(text)
    numbers = [m.group(1) for m in MONEY_RE.finditer(body)]
    if not numbers:
        return None

    if _CAP_LANGUAGE_RE.search(body):
        cap_type = BudgetCapType.CAP
    elif _BUDGET_LANGUAGE_RE.search(body):
        cap_type = BudgetCapType.BUDGET
    else:
        cap_type = BudgetCapType.AMOUNTS

    return BudgetCaps(
        type=cap_type,
        values=[f"${n}" for n in numbers],
        amounts=[parse_amount(n) for n in numbers],
    )


def parse_amount(token: str) -> float:
    """'$1,200.00' -> 1200.0"""
    return float(token.replace("$", "").replace(",", "").strip())


# ── Due dates ────────────────────────────────────────────

DATE_RE = re.compile(
    r"\b("
    r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)[a-z]*\.?\s+\d{1,2},\s+\d{4}"
    r"|\d{1,2}/\d{1,2}/(?:\d{4}|\d{2})"
    r"|\d{4}-\d{2}-\d{2}"
    r")\b",
    re.I,
)
_DEADLINE_ANCHOR_RE = re.compile(r"\b(?:by|deadline|due)\b[^.\n]{0,40}$", re.I)


def extract_due_dates(text: TextInput, anchored: bool = False) -> list[str]:
    """Date tokens as written, first occurrence order, no duplicates.

    With ``anchored=True`` only dates preceded by by/deadline/due in the same
    sentence are kept.
    """
    body = _join(text)
    dates: list[str] = []
    for m in DATE_RE.finditer(body):
        if anchored and not _DEADLINE_ANCHOR_RE.search(body[: m.start()]):
            continue
        token = m.group(1)
        if token not in dates:
            dates.append(token)
    return dates


# ── Private helpers ──────────────────────────────────────


def _join(text: TextInput | Iterable[str]) -> str:
    if isinstance(text, str):
        return text
    return " ".join(text or [])
