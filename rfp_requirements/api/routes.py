"""
API routes — thin HTTP layer over the extraction pipeline.

Routes:
  GET  /health                       → API health check
  POST /api/requirements/extract     → Extract requirements from posted text
  POST /api/requirements/analyze     → Upload a PDF/DOCX/text file, extract and score
  POST /api/requirements/score       → Coverage score for a requirement list
  POST /api/requirements/redact      → Redacted copy of a text
  POST /api/requirements/keywords    → Keyword suggestions broadcast onto requirements
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from rfp_requirements.config import get_settings
from rfp_requirements.errors import UnsupportedDocumentFormat
from rfp_requirements.extraction import extract_requirements
from rfp_requirements.models.enums import ExtractionStrategy
from rfp_requirements.models.schemas import AccuracyResult, Requirement, RubricSection
from rfp_requirements.redaction import redact_text
from rfp_requirements.scoring import score_coverage
from rfp_requirements.services import DocumentService, EnrichmentService, RubricStore

logger = logging.getLogger(__name__)

# ── Routers ──────────────────────────────────────────────
health_router = APIRouter()
requirements_router = APIRouter()


# ── Service dependencies ─────────────────────────────────

@lru_cache()
def get_enrichment_service() -> EnrichmentService:
    return EnrichmentService()


@lru_cache()
def get_rubric_store() -> RubricStore:
    return RubricStore()


# ── Request / response schemas ───────────────────────────
class ExtractRequest(BaseModel):
    text: str
    strategy: Optional[ExtractionStrategy] = None
    rubric: Optional[list[RubricSection]] = None


class ExtractResponse(BaseModel):
    requirements: list[Requirement]
    accuracy: AccuracyResult
    metadata: dict[str, Any] = {}


class ScoreRequest(BaseModel):
    requirements: list[Requirement]
    keywords: Optional[list[str]] = None
    rubric: Optional[list[RubricSection]] = None


class RedactRequest(BaseModel):
    text: str


class RedactResponse(BaseModel):
    text: str


class KeywordsRequest(BaseModel):
    text: str = ""
    summary: str = ""
    goal_hint: Optional[str] = None
    requirements: list[Requirement] = []


class KeywordsResponse(BaseModel):
    keywords: list[str]
    requirements: list[Requirement]


# ── Health ───────────────────────────────────────────────

@health_router.get("/health")
async def health_check():
    settings = get_settings()
    return {
        "status": "ok",
        "app": settings.app_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Extraction ───────────────────────────────────────────

@requirements_router.post("/extract", response_model=ExtractResponse)
def extract(body: ExtractRequest, store: RubricStore = Depends(get_rubric_store)):
    rubric = body.rubric if body.rubric is not None else store.load()
    requirements = extract_requirements(body.text, rubric=rubric, strategy=body.strategy)
    accuracy = score_coverage(requirements, rubric=rubric)
    return ExtractResponse(requirements=requirements, accuracy=accuracy)


@requirements_router.post("/analyze", response_model=ExtractResponse)
async def analyze(
    file: UploadFile = File(...),
    store: RubricStore = Depends(get_rubric_store),
):
    """Upload an RFP document, extract its text, requirements and coverage."""
    settings = get_settings()
    filename = file.filename or "upload"
    file_bytes = await file.read()
    logger.info(f"Received upload: {filename} ({len(file_bytes)} bytes)")

    if len(file_bytes) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds {settings.max_upload_bytes} bytes",
        )

    try:
        document = DocumentService.extract_text(
            file_bytes, file.filename or file.content_type or ""
        )
    except UnsupportedDocumentFormat as e:
        logger.warning(f"Rejected upload {filename}: {e}")
        raise HTTPException(status_code=415, detail=str(e))

    rubric = store.load()
    requirements = extract_requirements(document.text, rubric=rubric)
    accuracy = score_coverage(requirements, rubric=rubric)
    return ExtractResponse(
        requirements=requirements,
        accuracy=accuracy,
        metadata={"filename": filename, **document.metadata},
    )


# ── Scoring ──────────────────────────────────────────────

@requirements_router.post("/score", response_model=AccuracyResult)
def score(body: ScoreRequest, store: RubricStore = Depends(get_rubric_store)):
    rubric = body.rubric if body.rubric is not None else store.load()
    return score_coverage(body.requirements, keywords=body.keywords, rubric=rubric)


# ── Redaction & enrichment ───────────────────────────────

@requirements_router.post("/redact", response_model=RedactResponse)
def redact(body: RedactRequest):
    return RedactResponse(text=redact_text(body.text))


@requirements_router.post("/keywords", response_model=KeywordsResponse)
def keywords(
    body: KeywordsRequest,
    service: EnrichmentService = Depends(get_enrichment_service),
):
    if not (body.text or body.summary or body.goal_hint):
        raise HTTPException(status_code=400, detail="Provide text, summary or goal_hint")

    found, enriched = service.enrich(
        body.requirements,
        rfp_text=body.text,
        summary=body.summary,
        goal_hint=body.goal_hint,
    )
    return KeywordsResponse(keywords=found, requirements=enriched)
