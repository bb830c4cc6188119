"""
Enrichment Service — keyword suggestions for extracted requirements.

Flow:
  1. Redact the summary, goal hint and RFP text
  2. Condense the redacted RFP text into a short excerpt
  3. Ask the keyword generator (Groq by default)
  4. Cache the result by a hash of the redacted inputs
  5. Broadcast the keywords onto every requirement

A failing or unconfigured generator never fails the pipeline: the
requirements come back unchanged with an empty keyword list.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from rfp_requirements.config import Settings, get_settings
from rfp_requirements.errors import EnrichmentUnavailable
from rfp_requirements.models.schemas import Requirement
from rfp_requirements.redaction import condense_for_enrichment, redact_text
from rfp_requirements.services import llm_service
from rfp_requirements.utils.cache import TTLCache
from rfp_requirements.utils.hashing import sha256_hash

logger = logging.getLogger(__name__)

KeywordGenerator = Callable[[str, Optional[str]], list[str]]


class EnrichmentService:
    """
    Owns the keyword generator and its cache.

        service = EnrichmentService()
        keywords, reqs = service.enrich(reqs, rfp_text, goal_hint="youth literacy")
    """

    def __init__(
        self,
        keyword_generator: Optional[KeywordGenerator] = None,
        cache: Optional[TTLCache[list[str]]] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self._generate = keyword_generator or llm_service.generate_keywords
        self._cache = cache if cache is not None else TTLCache(
            ttl_seconds=self.settings.keyword_cache_ttl_seconds
        )

    def build_prompt_inputs(
        self,
        rfp_text: str = "",
        summary: str = "",
        goal_hint: Optional[str] = None,
    ) -> tuple[str, Optional[str]]:
        """Redacted (summary, goal) pair exactly as the generator will see it."""
        parts = [
            redact_text(summary).strip(),
            condense_for_enrichment(
                redact_text(rfp_text), self.settings.enrichment_excerpt_chars
            ),
        ]
        safe_summary = "\n\n".join(p for p in parts if p)
        safe_goal = redact_text(goal_hint).strip() if goal_hint else None
        return safe_summary, safe_goal or None

    def suggest_keywords(
        self,
        rfp_text: str = "",
        summary: str = "",
        goal_hint: Optional[str] = None,
    ) -> list[str]:
        """Keyword suggestions, or [] when the generator is unavailable."""
        safe_summary, safe_goal = self.build_prompt_inputs(rfp_text, summary, goal_hint)
        if not safe_summary and not safe_goal:
            logger.info("Nothing to enrich — skipping keyword generation")
            return []

        key = sha256_hash(f"{safe_goal or ''}\n{safe_summary}")
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Keyword cache hit ({key[:12]})")
            return list(cached)

        try:
            keywords = list(self._generate(safe_summary, safe_goal))
        except EnrichmentUnavailable as exc:
            logger.warning(f"Keyword enrichment unavailable: {exc}")
            return []

        if keywords:
            self._cache.set(key, keywords)
        logger.info(f"Generated {len(keywords)} keywords")
        return list(keywords)

    def enrich(
        self,
        requirements: Sequence[Requirement],
        rfp_text: str = "",
        summary: str = "",
        goal_hint: Optional[str] = None,
    ) -> tuple[list[str], list[Requirement]]:
        """Attach the same keyword list to every requirement."""
        keywords = self.suggest_keywords(rfp_text, summary, goal_hint)
        if not keywords:
            return [], list(requirements)
        enriched = [
            req.model_copy(update={"keywords": list(keywords)}) for req in requirements
        ]
        return keywords, enriched

    def clear_cache(self) -> None:
        self._cache.invalidate()
