"""
Data schemas for the extraction pipeline.

Section and Clause only live for the duration of one extraction call.
Requirement and AccuracyResult are the records handed to callers; they
serialise to JSON with camelCase field names (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .enums import (
    PRIORITY_ALIASES,
    BudgetCapType,
    CoverageStatus,
    Priority,
    RequirementCategory,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Pipeline intermediates ───────────────────────────────


class Section(_CamelModel):
    """A titled run of raw lines produced by the section detector."""
    title: str
    content: list[str] = []

    @property
    def text(self) -> str:
        return "\n".join(self.content)


class Clause(_CamelModel):
    """An enumerable item inside a section."""
    section_title: str
    index: int
    raw_text: str


# ── Attribute variants ───────────────────────────────────


class StructuredFormat(_CamelModel):
    """Submission rules found as discrete facts."""
    kind: Literal["structured"] = "structured"
    max_pages: Optional[int] = None
    font: Optional[str] = None  # e.g. ">=12pt"
    file_types: list[str] = []
    methods: list[str] = []  # "Online Portal" | "Hard Copy"


class FreeformFormat(_CamelModel):
    """Submission rules as a flat list of labels."""
    kind: Literal["freeform"] = "freeform"
    items: list[str] = []


SubmissionFormat = Annotated[
    Union[StructuredFormat, FreeformFormat], Field(discriminator="kind")
]


class BudgetCaps(_CamelModel):
    """Dollar amounts found in a section and how they are framed."""
    type: BudgetCapType
    values: list[str] = []  # as written, e.g. "$1,200.00"
    amounts: list[float] = []


# ── Output records ───────────────────────────────────────


class Requirement(_CamelModel):
    """A single requirement extracted from the RFP."""
    id: str
    clause_ref: str
    title: str
    category: RequirementCategory = RequirementCategory.GENERAL
    priority: Priority = Priority.LOW
    text_snippet: str = ""
    evidence_required: list[str] = []
    submission_format: Optional[SubmissionFormat] = None
    budget_caps: Optional[BudgetCaps] = None
    due_dates: list[str] = []
    keywords: list[str] = []
    coverage_status: CoverageStatus = CoverageStatus.UNCOVERED

    @field_validator("priority", mode="before")
    @classmethod
    def _accept_legacy_priority(cls, value: Any) -> Any:
        if isinstance(value, str):
            v = value.strip().lower()
            return PRIORITY_ALIASES.get(v, v)
        return value


class AccuracyResult(_CamelModel):
    """Coverage heuristic: how many expected categories were detected."""
    accuracy: int = Field(0, ge=0, le=100)
    missing_categories: list[str] = []
    expected_categories: list[str] = []
    present_categories: list[str] = []


class RubricSection(_CamelModel):
    """One expected section of a reference rubric."""
    key: str
    elements: list[str] = []


# ── Collaborator payloads ────────────────────────────────


class ExtractedDocument(_CamelModel):
    """Plain text pulled out of an uploaded file."""
    text: str = ""
    metadata: dict[str, Any] = {}
