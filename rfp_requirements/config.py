"""
Application configuration using Pydantic Settings.
All environment-specific values are centralized here.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ── App ──────────────────────────────────────────────
    app_name: str = "RFP Requirement Extraction"
    debug: bool = True

    # ── Extraction ───────────────────────────────────────
    extraction_strategy: str = "items"  # "items" | "sentences"
    submission_format_mode: str = "structured"  # "structured" | "freeform"
    snippet_max_chars: int = 500
    title_max_chars: int = 120
    extraction_workers: int = 4

    # ── Coverage scoring ─────────────────────────────────
    expected_categories: list[str] = [
        "Eligibility",
        "Submission & Compliance",
        "Timeline",
        "Budget",
        "Evaluation",
        "Scope & Activities",
    ]
    critical_categories: list[str] = [
        "Eligibility",
        "Submission & Compliance",
        "Timeline",
        "Budget",
        "Evaluation",
    ]
    critical_penalty: float = 0.0  # subtracted per missing critical category
    keyword_bonus: float = 0.1

    # ── LLM (keyword enrichment) ─────────────────────────
    groq_api_key: str = ""
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 1024
    enrichment_excerpt_chars: int = 4000
    keyword_cache_ttl_seconds: int = 3600

    # ── Reference rubric ─────────────────────────────────
    reference_rubric_path: str = ""
    rubric_cache_ttl_seconds: int = 600

    # ── Uploads ──────────────────────────────────────────
    max_upload_bytes: int = 20 * 1024 * 1024

    # ── Logging ──────────────────────────────────────────
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
