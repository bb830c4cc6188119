"""
Exception taxonomy.

The extraction core itself never raises for string input; these errors
belong to the collaborator edge (document decoding, LLM enrichment).
Empty input is not an error: it yields a placeholder requirement.
"""

from __future__ import annotations


class RfpRequirementsError(Exception):
    """Base class for errors raised by this package."""


class UnsupportedDocumentFormat(RfpRequirementsError, ValueError):
    """The uploaded file is not PDF, DOCX or plain text, or cannot be decoded."""


class EnrichmentUnavailable(RfpRequirementsError):
    """The keyword/suggestion collaborator is not configured or failed."""
