"""Extraction — section detection, clause splitting, attribute rules, assembly."""

from rfp_requirements.extraction.sections import detect_sections
from rfp_requirements.extraction.clauses import split_clauses
from rfp_requirements.extraction.assembler import assemble
from rfp_requirements.extraction.pipeline import extract_requirements, extract_batch

__all__ = [
    "detect_sections",
    "split_clauses",
    "assemble",
    "extract_requirements",
    "extract_batch",
]
