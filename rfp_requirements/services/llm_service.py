"""
LLM Service — Groq Cloud client for keyword suggestions.

Provides:
  - get_llm()                → configured Groq ChatModel (singleton)
  - llm_text_call()          → raw text response
  - generate_keywords()      → keyword list for a redacted RFP summary
  - parse_keyword_response() → tolerant parser for the model's reply

Callers must pass text through redact_text() first; nothing here redacts.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Optional

from rfp_requirements.config import get_settings
from rfp_requirements.errors import EnrichmentUnavailable

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 20

KEYWORD_PROMPT = (
    "You are assisting in preparing a grant proposal. Based on the project goal, "
    "a short summary, and redacted RFP text, propose a focused set of business-style "
    "keywords and phrases suitable for search and alignment (including sector, impact "
    "areas, compliance, and common grant tags).\n\n"
    "Return ONLY a JSON array of unique lowercase keyword strings, 8-20 items, "
    "no explanations.\n\n"
    "project_goal:\n{goal}\n\n"
    "redacted_rfp_summary:\n{summary}\n"
)

_llm_instance = None


def get_llm():
    """
    Return a configured Groq LLM client (singleton).
    Uses langchain-groq's ChatGroq.
    """
    global _llm_instance
    if _llm_instance is not None:
        return _llm_instance

    settings = get_settings()

    if not settings.groq_api_key:
        raise EnrichmentUnavailable("GROQ_API_KEY is not set in environment / .env file")

    from langchain_groq import ChatGroq

    _llm_instance = ChatGroq(
        api_key=settings.groq_api_key,
        model=settings.llm_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
    logger.info(f"Initialized Groq LLM: {settings.llm_model}")
    return _llm_instance


def llm_text_call(prompt: str) -> str:
    """Call the LLM and return the raw text response."""
    logger.debug(f"[LLM-TEXT] Prompt length: {len(prompt)} chars")

    llm = get_llm()
    t0 = time.perf_counter()
    try:
        response = llm.invoke(prompt)
    except Exception as exc:
        raise EnrichmentUnavailable(f"LLM call failed: {exc}") from exc
    elapsed = time.perf_counter() - t0

    content = response.content or ""
    meta = getattr(response, "response_metadata", {}) or {}
    logger.info(
        f"[LLM-TEXT] Response received in {elapsed:.2f}s | "
        f"Response length: {len(content)} chars | "
        f"finish_reason={meta.get('finish_reason', 'unknown')}"
    )
    return content


def generate_keywords(redacted_summary: str, goal_hint: Optional[str] = None) -> list[str]:
    """Ask the LLM for proposal keywords. Inputs must already be redacted."""
    settings = get_settings()
    prompt = KEYWORD_PROMPT.format(
        goal=goal_hint or "",
        summary=(redacted_summary or "")[: settings.enrichment_excerpt_chars],
    )
    return parse_keyword_response(llm_text_call(prompt))


def parse_keyword_response(text: str) -> list[str]:
    """
    Lowercased, trimmed, unique keywords from a model reply.

    Prefers the first JSON array in the text; falls back to splitting on
    commas. At most MAX_KEYWORDS items.
    """
    text = text or ""
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end > start:
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError as exc:
            logger.warning(f"Keyword response is not valid JSON, using comma split: {exc}")
        else:
            if isinstance(data, list):
                return _unique_keywords(str(x) for x in data)

    return _unique_keywords(text.replace("\n", " ").split(","))


def _unique_keywords(items) -> list[str]:
    out: list[str] = []
    for item in items:
        kw = item.strip().strip("\"'`").strip().lower()
        if kw and kw not in out:
            out.append(kw)
    return out[:MAX_KEYWORDS]
