"""
FastAPI application factory and API package.

Run with:
    uvicorn rfp_requirements.api:app --reload --port 8000

Or via main.py:
    python -m rfp_requirements --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rfp_requirements.config import get_settings
from rfp_requirements.api.routes import requirements_router, health_router

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="RFP Requirement Extraction API",
        description="Turns RFP documents into categorised requirement records",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS — allow the frontend (adjust origins in production)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(
        requirements_router, prefix="/api/requirements", tags=["Requirements"]
    )

    logger.info(f"Created {settings.app_name} API")
    return application


# Module-level instance for `uvicorn rfp_requirements.api:app`
app = create_app()
