"""
Tests: Keyword enrichment service and LLM response parsing.
Generators are stubbed — no network calls.

Run with:
    pytest rfp_requirements/tests/test_enrichment.py -v
"""

import json

import pytest

from rfp_requirements.config import Settings
from rfp_requirements.errors import EnrichmentUnavailable
from rfp_requirements.extraction import extract_requirements
from rfp_requirements.services import EnrichmentService, llm_service
from rfp_requirements.services.llm_service import parse_keyword_response
from rfp_requirements.utils.cache import TTLCache

RFP_TEXT = (
    "ELIGIBILITY\n"
    "Applicants must be nonprofits. Contact Maria Lopez at maria@example.org.\n"
    "BUDGET\n"
    "Awards are not to exceed $50,000.\n"
)


class RecordingGenerator:
    def __init__(self, keywords=None, error=None):
        self.keywords = keywords if keywords is not None else ["literacy", "youth"]
        self.error = error
        self.calls = []

    def __call__(self, summary, goal_hint=None):
        self.calls.append((summary, goal_hint))
        if self.error:
            raise self.error
        return list(self.keywords)


@pytest.fixture
def settings():
    return Settings()


class TestParseKeywordResponse:
    def test_json_array_inside_prose(self):
        text = 'Here you go: ["Literacy", " youth ", "literacy"] Enjoy!'
        assert parse_keyword_response(text) == ["literacy", "youth"]

    def test_comma_fallback(self):
        assert parse_keyword_response('STEM, "after-school",\n mentoring') == [
            "stem", "after-school", "mentoring",
        ]

    def test_capped_at_twenty(self):
        text = json.dumps([f"kw{i}" for i in range(30)])
        assert len(parse_keyword_response(text)) == 20

    def test_empty(self):
        assert parse_keyword_response("") == []
        assert parse_keyword_response(None) == []


class TestEnrichmentService:
    def test_generator_only_sees_redacted_text(self, settings):
        generator = RecordingGenerator()
        service = EnrichmentService(keyword_generator=generator, settings=settings)
        service.suggest_keywords(RFP_TEXT, goal_hint="support for Acme Widgets, Inc. growth")

        summary, goal = generator.calls[0]
        assert "maria@example.org" not in summary
        assert "Maria Lopez" not in summary
        assert "[REDACTED_EMAIL]" in summary
        assert goal == "support for [REDACTED_COMPANY] growth"

    def test_keywords_broadcast_to_every_requirement(self, settings):
        reqs = extract_requirements(RFP_TEXT)
        service = EnrichmentService(keyword_generator=RecordingGenerator(), settings=settings)
        keywords, enriched = service.enrich(reqs, RFP_TEXT)

        assert keywords == ["literacy", "youth"]
        assert len(enriched) == len(reqs)
        assert all(r.keywords == ["literacy", "youth"] for r in enriched)
        assert all(r.keywords == [] for r in reqs)

    def test_unavailable_generator_is_swallowed(self, settings):
        reqs = extract_requirements(RFP_TEXT)
        generator = RecordingGenerator(error=EnrichmentUnavailable("no key"))
        service = EnrichmentService(keyword_generator=generator, settings=settings)
        keywords, enriched = service.enrich(reqs, RFP_TEXT)

        assert keywords == []
        assert [r.model_dump() for r in enriched] == [r.model_dump() for r in reqs]

    def test_nothing_to_enrich(self, settings):
        generator = RecordingGenerator()
        service = EnrichmentService(keyword_generator=generator, settings=settings)
        assert service.suggest_keywords("   ") == []
        assert generator.calls == []

    def test_results_cached_until_ttl(self, settings):
        now = [0.0]
        cache = TTLCache(ttl_seconds=10, clock=lambda: now[0])
        generator = RecordingGenerator()
        service = EnrichmentService(keyword_generator=generator, cache=cache, settings=settings)

        service.suggest_keywords(RFP_TEXT)
        service.suggest_keywords(RFP_TEXT)
        assert len(generator.calls) == 1

        now[0] = 11.0
        service.suggest_keywords(RFP_TEXT)
        assert len(generator.calls) == 2

    def test_empty_results_not_cached(self, settings):
        generator = RecordingGenerator(keywords=[])
        service = EnrichmentService(keyword_generator=generator, settings=settings)
        service.suggest_keywords(RFP_TEXT)
        service.suggest_keywords(RFP_TEXT)
        assert len(generator.calls) == 2


class TestDefaultGenerator:
    def test_uses_llm_text_call(self, monkeypatch, settings):
        prompts = []

        def fake_call(prompt):
            prompts.append(prompt)
            return '["grant readiness", "Literacy"]'

        monkeypatch.setattr(llm_service, "llm_text_call", fake_call)
        service = EnrichmentService(settings=settings)

        assert service.suggest_keywords(RFP_TEXT, goal_hint="reading") == [
            "grant readiness", "literacy",
        ]
        assert "project_goal:\nreading" in prompts[0]
        assert "maria@example.org" not in prompts[0]

    def test_llm_failure_returns_empty(self, monkeypatch, settings):
        def failing_call(prompt):
            raise EnrichmentUnavailable("LLM call failed: timeout")

        monkeypatch.setattr(llm_service, "llm_text_call", failing_call)
        assert EnrichmentService(settings=settings).suggest_keywords(RFP_TEXT) == []

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(llm_service, "_llm_instance", None)
        monkeypatch.setattr(llm_service, "get_settings", lambda: Settings(groq_api_key=""))
        with pytest.raises(EnrichmentUnavailable):
            llm_service.get_llm()
