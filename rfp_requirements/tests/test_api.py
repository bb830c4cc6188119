"""
Tests: HTTP routes (FastAPI TestClient, stubbed services).

Run with:
    pytest rfp_requirements/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from rfp_requirements.api import create_app
from rfp_requirements.api import routes
from rfp_requirements.config import Settings
from rfp_requirements.errors import EnrichmentUnavailable
from rfp_requirements.services import EnrichmentService, RubricStore

SAMPLE_RFP = (
    "REQUEST FOR PROPOSALS\n\n"
    "ELIGIBILITY\nApplicants must be a 501(c)(3) nonprofit.\n\n"
    "BUDGET\nAwards are not to exceed $50,000.\n"
)


@pytest.fixture
def generator_calls():
    return []


@pytest.fixture
def client(generator_calls):
    settings = Settings(reference_rubric_path="")

    def generator(summary, goal_hint=None):
        generator_calls.append((summary, goal_hint))
        return ["literacy", "youth"]

    app = create_app()
    app.dependency_overrides[routes.get_rubric_store] = lambda: RubricStore(settings=settings)
    app.dependency_overrides[routes.get_enrichment_service] = lambda: EnrichmentService(
        keyword_generator=generator, settings=settings
    )
    return TestClient(app)


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestExtract:
    def test_extract_text(self, client):
        resp = client.post("/api/requirements/extract", json={"text": SAMPLE_RFP})
        assert resp.status_code == 200
        body = resp.json()
        assert [r["category"] for r in body["requirements"]] == ["Eligibility", "Budget"]
        assert body["requirements"][0]["priority"] == "high"
        assert body["requirements"][1]["budgetCaps"]["values"] == ["$50,000"]
        assert body["accuracy"]["accuracy"] == 33
        assert "Timeline" in body["accuracy"]["missingCategories"]

    def test_extract_with_rubric(self, client):
        payload = {
            "text": SAMPLE_RFP,
            "rubric": [{"key": "Eligibility", "elements": []}, {"key": "funding", "elements": []}],
        }
        body = client.post("/api/requirements/extract", json=payload).json()
        assert body["accuracy"]["accuracy"] == 100

    def test_unknown_strategy_rejected(self, client):
        resp = client.post("/api/requirements/extract", json={"text": "x", "strategy": "magic"})
        assert resp.status_code == 422


class TestAnalyze:
    def test_text_upload(self, client):
        files = {"file": ("rfp.txt", SAMPLE_RFP.encode("utf-8"), "text/plain")}
        resp = client.post("/api/requirements/analyze", files=files)
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["requirements"]) == 2
        assert body["metadata"]["filename"] == "rfp.txt"
        assert body["metadata"]["format"] == "text"

    def test_text_upload_with_pdf_in_name(self, client):
        files = {"file": ("rfp_pdf_notes.txt", SAMPLE_RFP.encode("utf-8"), "text/plain")}
        resp = client.post("/api/requirements/analyze", files=files)
        assert resp.status_code == 200
        assert resp.json()["metadata"]["format"] == "text"

    def test_unsupported_upload(self, client):
        files = {"file": ("scan.png", b"\x89PNG", "image/png")}
        assert client.post("/api/requirements/analyze", files=files).status_code == 415

    def test_oversized_upload(self, client, monkeypatch):
        monkeypatch.setattr(routes, "get_settings", lambda: Settings(max_upload_bytes=10))
        files = {"file": ("rfp.txt", SAMPLE_RFP.encode("utf-8"), "text/plain")}
        assert client.post("/api/requirements/analyze", files=files).status_code == 413


class TestScore:
    def test_score_round_trip(self, client):
        reqs = client.post("/api/requirements/extract", json={"text": SAMPLE_RFP}).json()["requirements"]
        resp = client.post("/api/requirements/score", json={"requirements": reqs, "keywords": ["x"]})
        assert resp.status_code == 200
        assert resp.json()["accuracy"] == 43
        assert resp.json()["presentCategories"] == ["Eligibility", "Budget"]


class TestRedactAndKeywords:
    def test_redact(self, client):
        resp = client.post("/api/requirements/redact", json={"text": "Email grants@city.gov"})
        assert resp.json()["text"] == "Email [REDACTED_EMAIL]"

    def test_keywords_broadcast(self, client, generator_calls):
        reqs = client.post("/api/requirements/extract", json={"text": SAMPLE_RFP}).json()["requirements"]
        resp = client.post(
            "/api/requirements/keywords",
            json={"text": SAMPLE_RFP, "goal_hint": "literacy", "requirements": reqs},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["keywords"] == ["literacy", "youth"]
        assert all(r["keywords"] == ["literacy", "youth"] for r in body["requirements"])
        assert generator_calls[0][1] == "literacy"

    def test_keywords_need_input(self, client):
        assert client.post("/api/requirements/keywords", json={}).status_code == 400

    def test_keywords_unavailable(self, client):
        def failing(summary, goal_hint=None):
            raise EnrichmentUnavailable("no key")

        client.app.dependency_overrides[routes.get_enrichment_service] = lambda: EnrichmentService(
            keyword_generator=failing, settings=Settings()
        )
        resp = client.post("/api/requirements/keywords", json={"text": SAMPLE_RFP})
        assert resp.status_code == 200
        assert resp.json() == {"keywords": [], "requirements": []}
