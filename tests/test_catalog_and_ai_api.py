from types import SimpleNamespace

import pytest

from app.api import deps
from app.main import app
from app.schemas.ai import ChatTurn
from app.services.text_generation import TextGenerationService, history_to_messages
from conftest import bearer


class FakeLLM:
    def __init__(self, reply="Generated text", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error:
            raise self.error
        return SimpleNamespace(content=self.reply)


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def ai_client(api_client, llm):
    app.dependency_overrides[deps.get_text_generation_service] = lambda: TextGenerationService(llm)
    return api_client


def test_root(api_client):
    assert api_client.get("/").json() == {"message": "BZBookit Backend Running"}


def test_list_businesses_is_public(api_client):
    resp = api_client.get("/api/businesses")
    assert resp.status_code == 200
    assert {"id": 10, "name": "Shear Joy"} in resp.json()


def test_list_services_exposes_id(api_client):
    resp = api_client.get("/api/services")
    assert resp.status_code == 200
    by_id = {s["id"]: s for s in resp.json()}
    assert by_id[1] == {"id": 1, "name": "Haircut", "price": 10}
    assert by_id[3]["price"] is None


def test_notifications_are_empty_for_authenticated_users(api_client):
    assert api_client.get("/api/notifications/me", headers=bearer("client-token")).json() == []
    assert api_client.get("/api/notifications/me").status_code == 401


def test_generate_description(ai_client, llm):
    resp = ai_client.post("/api/ai/generate-description", json={"prompt": "A barber in Leeds"}, headers=bearer("owner-token"))
    assert resp.status_code == 200
    assert resp.json() == {"description": "Generated text"}
    assert llm.calls[0][-1].content == "A barber in Leeds"


def test_generate_description_requires_prompt(ai_client):
    resp = ai_client.post("/api/ai/generate-description", json={}, headers=bearer("owner-token"))
    assert resp.status_code == 400
    assert resp.json() == {"message": "A prompt is required."}


def test_chat_passes_history(ai_client, llm):
    resp = ai_client.post(
        "/api/chat",
        json={
            "history": [
                {"role": "model", "content": "Hi! How can I help?"},
                {"role": "user", "content": "Can I move my booking?"},
                {"role": "model", "content": "Yes, from My Appointments."},
            ],
            "message": "Thanks, and cancel?",
        },
        headers=bearer("client-token"),
    )
    assert resp.status_code == 200
    assert resp.json() == {"reply": "Generated text"}
    sent = llm.calls[0]
    # system prompt + 2 kept history turns + new message
    assert [m.type for m in sent] == ["system", "human", "ai", "human"]


def test_chat_provider_failure_is_500(api_client):
    failing = TextGenerationService(FakeLLM(error=RuntimeError("quota exceeded")))
    app.dependency_overrides[deps.get_text_generation_service] = lambda: failing
    resp = api_client.post("/api/chat", json={"message": "hello"}, headers=bearer("client-token"))
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to get response from AI."}


def test_chat_requires_message(ai_client):
    assert ai_client.post("/api/chat", json={"history": []}, headers=bearer("client-token")).status_code == 400


def test_history_before_first_user_turn_is_dropped():
    assert history_to_messages([ChatTurn(role="model", content="welcome")]) == []
    assert history_to_messages(None) == []
