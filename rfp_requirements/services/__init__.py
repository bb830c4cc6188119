"""Services — DocumentService, EnrichmentService, RubricStore."""

from rfp_requirements.services.document_service import DocumentService
from rfp_requirements.services.enrichment_service import EnrichmentService
from rfp_requirements.services.rubric_store import RubricStore

__all__ = ["DocumentService", "EnrichmentService", "RubricStore"]
