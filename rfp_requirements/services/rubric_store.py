"""
Rubric Store — optional reference rubric loaded from a JSON file.

Expected shape:
    [{"key": "Eligibility", "elements": ["501(c)(3) status", ...]}, ...]

A missing path, unreadable file or malformed JSON yields None, and callers
fall back to the configured expected categories.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from rfp_requirements.config import Settings, get_settings
from rfp_requirements.models.schemas import RubricSection
from rfp_requirements.utils.cache import TTLCache

logger = logging.getLogger(__name__)

_CACHE_KEY = "rubric"


class RubricStore:
    def __init__(
        self,
        path: Optional[str | Path] = None,
        settings: Optional[Settings] = None,
        cache: Optional[TTLCache[list[RubricSection]]] = None,
    ):
        self.settings = settings or get_settings()
        raw_path = path if path is not None else self.settings.reference_rubric_path
        self.path = Path(raw_path) if raw_path else None
        self._cache = cache if cache is not None else TTLCache(
            ttl_seconds=self.settings.rubric_cache_ttl_seconds, max_entries=1
        )

    def load(self) -> Optional[list[RubricSection]]:
        """Return the rubric sections, or None when no usable rubric exists."""
        if self.path is None:
            return None

        cached = self._cache.get(_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            logger.warning(f"Reference rubric not found: {self.path}")
            return None
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Could not read reference rubric {self.path}: {exc}")
            return None

        if not isinstance(raw, list):
            logger.warning(f"Reference rubric {self.path} is not a JSON list")
            return None

        try:
            sections = [RubricSection.model_validate(item) for item in raw]
        except ValidationError as exc:
            logger.warning(f"Invalid reference rubric {self.path}: {exc.error_count()} errors")
            return None

        self._cache.set(_CACHE_KEY, sections)
        logger.info(f"Loaded reference rubric with {len(sections)} sections")
        return sections

    def reload(self) -> Optional[list[RubricSection]]:
        self._cache.invalidate()
        return self.load()
