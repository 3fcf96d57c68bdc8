import pytest
from fastapi.testclient import TestClient

from conftest import FakeClient, message, text, tool_use
from market_research.errors import ServiceError
from market_research.orchestrator import SessionOrchestrator
from market_research.prompts import PRESET_QUERIES
from research_api.api.research import get_orchestrator
from research_api.main import app


client = TestClient(app)

ANSWER = "## Market Overview\nGrowing.\n\n## Customer Pain Points\n- Cost\n"


@pytest.fixture
def fake_service():
    fake = FakeClient(
        message(text("Searching"), tool_use("t1"), stop_reason="tool_use"),
        message(text(ANSWER)),
    )
    app.dependency_overrides[get_orchestrator] = lambda: SessionOrchestrator(client=fake)
    yield fake
    app.dependency_overrides.clear()


class FailingOrchestrator:
    def __init__(self, error):
        self.error = error

    def run(self, request):
        raise self.error


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_presets():
    response = client.get("/v1/presets")
    assert response.status_code == 200
    assert response.json() == PRESET_QUERIES


def test_research_returns_report(fake_service):
    response = client.post(
        "/v1/research",
        json={"subject_description": "Energy SaaS", "query": "Pain points?"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["overview"] == "## Market Overview\nGrowing."
    assert data["pain_points"] == "## Customer Pain Points\n- Cost"
    assert data["competitors"] == ""
    assert data["raw_text"] == ANSWER
    assert len(fake_service.calls) == 2


def test_research_empty_fields_rejected(fake_service):
    response = client.post("/v1/research", json={"subject_description": "", "query": "q"})
    assert response.status_code == 422
    assert "startup description" in response.json()["detail"]
    assert fake_service.calls == []


def test_research_missing_field():
    response = client.post("/v1/research", json={"query": "q"})
    assert response.status_code == 422


def test_research_service_error():
    app.dependency_overrides[get_orchestrator] = lambda: FailingOrchestrator(
        ServiceError("API request failed: 503", status_code=503)
    )
    try:
        response = client.post("/v1/research", json={"subject_description": "d", "query": "q"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    data = response.json()
    assert data["status_code"] == 503
    assert "503" in data["detail"]


def test_extract():
    response = client.post("/v1/extract", json={"raw_text": ANSWER})
    assert response.status_code == 200
    data = response.json()
    assert data["overview"] == "## Market Overview\nGrowing."
    assert data["raw_text"] == ANSWER


def test_extract_empty_text():
    response = client.post("/v1/extract", json={"raw_text": ""})
    assert response.status_code == 200
    data = response.json()
    assert all(value == "" for value in data.values())


def test_openapi_metadata():
    schema = client.get("/openapi.json").json()
    assert schema["info"]["title"] == "Market Research Agent"
    assert "report sections" in schema["info"]["description"]
    assert "/v1/research" in schema["paths"]
