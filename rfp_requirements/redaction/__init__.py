"""Redaction — PII masking applied before text reaches external services."""

from rfp_requirements.redaction.filter import condense_for_enrichment, redact_text

__all__ = ["condense_for_enrichment", "redact_text"]
