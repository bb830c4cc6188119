from enum import Enum


class RequirementCategory(str, Enum):
    ELIGIBILITY = "Eligibility"
    BUDGET = "Budget"
    TIMELINE = "Timeline"
    EVALUATION = "Evaluation"
    SCOPE = "Scope & Activities"
    SUBMISSION = "Submission & Compliance"
    ORGANIZATIONAL_CAPACITY = "Organizational Capacity"
    OUTCOMES = "Outcomes & Impact"
    RISK = "Risk & Mitigation"
    EXECUTIVE_SUMMARY = "Executive Summary"
    GOALS = "Goals & Objectives"
    GENERAL = "General"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# must / should / nice lexicon used by older records
PRIORITY_ALIASES: dict[str, Priority] = {
    "must": Priority.HIGH,
    "should": Priority.MEDIUM,
    "nice": Priority.LOW,
}


class CoverageStatus(str, Enum):
    UNCOVERED = "uncovered"
    PARTIAL = "partial"
    COVERED = "covered"


class BudgetCapType(str, Enum):
    CAP = "cap"
    BUDGET = "budget"
    AMOUNTS = "amounts"


class ExtractionStrategy(str, Enum):
    ITEMS = "items"
    SENTENCES = "sentences"


class SubmissionFormatMode(str, Enum):
    STRUCTURED = "structured"
    FREEFORM = "freeform"
