"""
Integration tests for the wizard API (api/main.py + api/wizard_router.py).

Runs against the offline template generator and an in-memory subscription
directory injected through FastAPI dependency overrides.
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from api.main import app
from api.wizard_service import WizardService, get_wizard_service
from config.settings import Settings
from leadgen.entitlements import InMemorySubscriptionDirectory

PREFIX = "/api/wizard"

CAMPAIGN = {
    "operator_name": "Dana Lee",
    "operator_title": "Founder",
    "brand_name": "Acme",
    "audience_description": "small retailers",
    "niche_label": "retail marketing",
    "problem_statement": "foot traffic is down",
    "desired_outcome": "more repeat customers",
    "tone": "friendly",
}


@pytest.fixture
def service():
    return WizardService(
        settings=Settings(use_template_generator=True),
        directory=InMemorySubscriptionDirectory(),
    )


@pytest.fixture
def client(service):
    app.dependency_overrides[get_wizard_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _start(client, user_id="user-1"):
    response = client.post(f"{PREFIX}/sessions", json={"user_id": user_id})
    assert response.status_code == 201
    return response.json()["session_id"]


def _to_review(client, session_id, customization=None):
    submitted = client.post(f"{PREFIX}/sessions/{session_id}/submit", json=CAMPAIGN).json()
    body = {"concept_id": submitted["state"]["concepts"][1]["id"]}
    if customization is not None:
        body["customization"] = customization
    response = client.post(f"{PREFIX}/sessions/{session_id}/select", json=body)
    assert response.status_code == 200
    return response.json()


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["generator"] == "TemplateContentGenerator"
        assert data["active_sessions"] == 0

    def test_health_lists_providers_with_keys(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        service = WizardService(
            settings=Settings(use_template_generator=True, openai_api_key="", anthropic_api_key="sk-ant-test"),
            directory=InMemorySubscriptionDirectory(),
        )
        app.dependency_overrides[get_wizard_service] = lambda: service
        try:
            data = TestClient(app).get("/health").json()
        finally:
            app.dependency_overrides.clear()

        assert data["available_providers"] == ["claude"]

    def test_provider_health(self, client, service, monkeypatch):
        check = AsyncMock(return_value={"openai": True, "claude": False})
        monkeypatch.setattr(service.providers, "health_check", check)

        data = client.get("/health/providers").json()

        assert data == {"healthy": False, "providers": {"openai": True, "claude": False}}
        check.assert_awaited_once()


class TestSessions:

    def test_create_session_starts_in_input(self, client):
        response = client.post(f"{PREFIX}/sessions", json={"user_id": "user-1"})
        data = response.json()
        assert data["stage"] == "input"
        assert data["busy"] is False

    def test_unknown_session(self, client):
        response = client.get(f"{PREFIX}/sessions/does-not-exist")
        assert response.status_code == 404
        assert response.json() == {
            "error": "session_not_found",
            "message": "Session not found: does-not-exist",
        }

    def test_delete_session(self, client):
        session_id = _start(client)
        assert client.delete(f"{PREFIX}/sessions/{session_id}").status_code == 200
        assert client.get(f"{PREFIX}/sessions/{session_id}").status_code == 404


class TestWizardFlow:

    def test_submit_returns_concepts(self, client):
        session_id = _start(client)
        response = client.post(f"{PREFIX}/sessions/{session_id}/submit", json=CAMPAIGN)

        assert response.status_code == 200
        data = response.json()
        assert data["stage"] == "concepts"
        ids = [c["id"] for c in data["state"]["concepts"]]
        assert len(set(ids)) == 3
        assert all(i.startswith("concept-") for i in ids)

    def test_blank_field_is_422(self, client):
        session_id = _start(client)
        response = client.post(
            f"{PREFIX}/sessions/{session_id}/submit",
            json={**CAMPAIGN, "brand_name": " "},
        )
        assert response.status_code == 422
        assert response.json()["field"] == "brandName"
        assert client.get(f"{PREFIX}/sessions/{session_id}").json()["stage"] == "input"

    def test_stale_concept_is_409(self, client):
        session_id = _start(client)
        client.post(f"{PREFIX}/sessions/{session_id}/submit", json=CAMPAIGN)
        response = client.post(f"{PREFIX}/sessions/{session_id}/select", json={"concept_id": "concept-7"})
        assert response.status_code == 409
        assert response.json()["error"] == "stale_selection"

    def test_concept_id_from_earlier_submit_is_409(self, client):
        session_id = _start(client)
        first = client.post(f"{PREFIX}/sessions/{session_id}/submit", json=CAMPAIGN).json()
        old_id = first["state"]["concepts"][1]["id"]

        assert client.post(f"{PREFIX}/sessions/{session_id}/back").json()["stage"] == "input"
        client.post(f"{PREFIX}/sessions/{session_id}/submit", json=CAMPAIGN)

        response = client.post(f"{PREFIX}/sessions/{session_id}/select", json={"concept_id": old_id})
        assert response.status_code == 409
        assert response.json()["error"] == "stale_selection"

    def test_out_of_order_is_409(self, client):
        session_id = _start(client)
        response = client.post(f"{PREFIX}/sessions/{session_id}/approve", json={})
        assert response.status_code == 409
        assert response.json()["error"] == "invalid_transition"

    def test_free_user_blocked_then_upgraded(self, client, service):
        session_id = _start(client, "free-user")
        _to_review(client, session_id)

        blocked = client.post(f"{PREFIX}/sessions/{session_id}/approve", json={}).json()
        assert blocked["stage"] == "gate_blocked"
        assert blocked["state"]["reason"] == "not_entitled"
        assert client.get(f"{PREFIX}/sessions/{session_id}/render").status_code == 409

        upgraded = client.post(f"{PREFIX}/subscriptions/free-user/upgrade").json()
        assert upgraded["effective_tier"] == "premium"

        complete = client.post(f"{PREFIX}/sessions/{session_id}/recheck").json()
        assert complete["stage"] == "complete"
        assert complete["record_id"]
        assert len(service.sink.list_for_user("free-user")) == 1

        usage = client.get(f"{PREFIX}/subscriptions/free-user").json()
        assert usage["used_campaigns"] == 1

    def test_outline_edits_applied(self, client, service):
        service.directory.upgrade_to_premium("user-1")
        session_id = _start(client)
        review = _to_review(client, session_id)

        response = client.post(f"{PREFIX}/sessions/{session_id}/approve", json={
            "review_token": review["state"]["reviewToken"],
            "title": "Acme Loyalty Sprint",
            "core_points": ["Core Point 1: Know your regulars", "Core Point 2: Reward them"],
        })

        data = response.json()
        assert data["stage"] == "complete"
        assert data["state"]["outline"]["title"] == "Acme Loyalty Sprint"
        assert len(data["state"]["document"]["sections"]) == 2

    def test_stale_review_token_is_409(self, client, service):
        service.directory.upgrade_to_premium("user-1")
        session_id = _start(client)
        _to_review(client, session_id)

        response = client.post(f"{PREFIX}/sessions/{session_id}/approve", json={
            "review_token": "from-an-earlier-review",
        })
        assert response.status_code == 409

    def test_invalid_customization_blocks_approve(self, client, service):
        service.directory.upgrade_to_premium("user-1")
        session_id = _start(client)
        _to_review(client, session_id, customization={"booking_url": "not a url"})

        response = client.post(f"{PREFIX}/sessions/{session_id}/approve", json={})

        assert response.status_code == 422
        assert response.json()["field"] == "bookingUrl"
        assert client.get(f"{PREFIX}/sessions/{session_id}").json()["stage"] == "outline_review"

    def test_back_and_reset(self, client):
        session_id = _start(client)
        _to_review(client, session_id)

        back = client.post(f"{PREFIX}/sessions/{session_id}/back").json()
        assert back["stage"] == "concepts"
        assert len(back["state"]["concepts"]) == 3

        reset = client.post(f"{PREFIX}/sessions/{session_id}/reset").json()
        assert reset["stage"] == "input"
        assert reset["state"]["previousInput"] is None


class TestRender:

    @pytest.fixture
    def completed_session(self, client, service):
        service.directory.upgrade_to_premium("user-1")
        session_id = _start(client)
        _to_review(client, session_id, customization={
            "cta_text": "Book your Acme audit",
            "booking_url": "https://cal.example.com/acme",
            "primary_color": "#b71c1c",
        })
        client.post(f"{PREFIX}/sessions/{session_id}/approve", json={})
        return session_id

    def test_render_json(self, client, completed_session):
        response = client.get(f"{PREFIX}/sessions/{completed_session}/render")

        assert response.status_code == 200
        data = response.json()
        blocks = data["blocks"]
        assert blocks[0]["blockType"] == "title"
        assert blocks[-1]["blockType"] == "call_to_action"
        assert blocks[-1]["style"]["backgroundColor"] == "#b71c1c"
        assert data["page_count"] == blocks[-1]["page"]

    def test_render_is_stable(self, client, completed_session):
        url = f"{PREFIX}/sessions/{completed_session}/render"
        assert client.get(url).content == client.get(url).content

    def test_render_markdown(self, client, completed_session):
        response = client.get(f"{PREFIX}/sessions/{completed_session}/render", params={"format": "markdown"})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/markdown")
        assert "Book your Acme audit" in response.text
        assert "https://cal.example.com/acme" in response.text
