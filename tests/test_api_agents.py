"""Tests for agent chat API endpoints."""

import asyncio
import time
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from relay_agents.api.routes.agents import (
    ChatRequest,
    chat as chat_endpoint,
    get_orchestrator,
    reset_orchestrator,
    set_orchestrator,
)
from relay_agents.api.server import app
from relay_agents.core import AgentRegistry, ChatResult, ErrorKind
from relay_agents.orchestrator import (
    OrchestratorConfig,
    ProviderAdapter,
    ProviderOptions,
    ProviderReply,
    create_orchestrator,
)


class ScriptedProvider(ProviderAdapter):
    """Provider that waits ``delay`` seconds, then answers."""

    def __init__(self, name: str, delay: float = 0.0, text: str = "provider reply"):
        self._name = name
        self._delay = delay
        self._text = text

    @property
    def name(self):
        return self._name

    async def send(self, prompt: str, options: ProviderOptions) -> ProviderReply:
        if self._delay:
            await asyncio.sleep(self._delay)
        return ProviderReply.ok(self._text)


class HangingProvider(ProviderAdapter):
    """Provider that never answers and records whether it was cancelled."""

    def __init__(self):
        self.started = False
        self.cancelled = False

    @property
    def name(self):
        return "hanging"

    async def send(self, prompt: str, options: ProviderOptions) -> ProviderReply:
        self.started = True
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return ProviderReply.ok("unreachable")


def install(providers=None, **config_kwargs):
    config = OrchestratorConfig(providers=[], **config_kwargs)
    orchestrator = create_orchestrator(config=config, providers=providers or [])
    set_orchestrator(orchestrator)
    return orchestrator


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset orchestrator and registry singletons around each test."""
    reset_orchestrator()
    AgentRegistry.reset_instance()
    yield
    reset_orchestrator()
    AgentRegistry.reset_instance()


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def degraded(client):
    """Orchestrator with no providers configured."""
    install()
    return client


def chat(client, agent_id, **body):
    return client.post(f"/api/v1/agents/{agent_id}/chat", json=body)


class TestChatValidation:
    """Test suite for request validation."""

    def test_empty_message_returns_400(self, degraded):
        response = chat(degraded, "carebot", message="")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Message cannot be empty"}

    def test_whitespace_message_returns_400(self, degraded):
        response = chat(degraded, "carebot", message="   ")
        assert response.status_code == 400

    def test_missing_message_returns_400(self, degraded):
        response = chat(degraded, "carebot", user_id="u1")

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_missing_body_returns_400(self, degraded):
        response = degraded.post("/api/v1/agents/carebot/chat")
        assert response.status_code == 400

    def test_invalid_json_returns_422(self, degraded):
        response = degraded.post(
            "/api/v1/agents/carebot/chat",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422

    def test_unknown_agent_returns_404(self, degraded):
        response = chat(degraded, "nobody", message="hello")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert "nobody" in response.json()["error"]

    def test_disabled_agent_returns_404(self, client):
        install(enabled_agents={"authwise": False})

        response = chat(client, "authwise", message="hello")

        assert response.status_code == 404


class TestChat:
    """Test suite for POST /api/v1/agents/{agent_id}/chat."""

    def test_degraded_symptoms(self, degraded):
        response = chat(
            degraded, "carebot", message="I have a headache and fever", user_id="u1"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["intent"] == "symptoms"
        assert data["provenance"] == "degraded"
        assert data["response"].strip()
        assert data["agent_name"] == "CareBot"
        assert data["user_id"] == "u1"
        assert data["session_id"]
        assert data["sentiment"] in {"positive", "negative", "neutral"}
        assert isinstance(data["processing_time"], float)
        for key in ("health_assessment", "recommendations", "urgency_level", "disclaimer"):
            assert key in data
        assert "timestamp" in data

    def test_session_continuity(self, degraded):
        first = chat(degraded, "neochat", message="Hello!", user_id="u1").json()
        session_id = first["session_id"]
        second = chat(
            degraded, "neochat", message="Tell me a story", user_id="u1", session_id=session_id
        ).json()

        assert second["session_id"] == session_id

        history = degraded.get(
            "/api/v1/agents/neochat/history", params={"user_id": "u1"}
        ).json()
        assert history["count"] == 4
        assert [m["role"] for m in history["messages"]] == ["user", "agent", "user", "agent"]
        assert history["messages"][0]["content"] == "Hello!"

    def test_third_call_sees_four_prior_entries(self, client):
        orchestrator = install()
        first = chat(client, "carebot", message="one", user_id="u1").json()
        session_id = first["session_id"]
        chat(client, "carebot", message="two", user_id="u1", session_id=session_id)

        with patch.object(
            orchestrator._chain, "invoke", wraps=orchestrator._chain.invoke
        ) as spy:
            chat(client, "carebot", message="three", user_id="u1", session_id=session_id)

        context = spy.call_args.args[0]
        assert [m.content for m in context.history][0::2] == ["one", "two"]
        assert len(context.history) == 4

    def test_provider_reply(self, client):
        install(providers=[ScriptedProvider("primary", text="Hi from the provider")])

        data = chat(client, "configai", message="deploy our app", user_id="u1").json()

        assert data["response"] == "Hi from the provider"
        assert data["provenance"] == "provider:primary"
        assert data["intent"] == "deployment_automation"
        assert "config_analysis" in data

    def test_slow_providers_fall_through(self, client):
        slow = [ScriptedProvider(f"slow{i}", delay=10) for i in range(4)]
        install(
            providers=slow + [ScriptedProvider("fast", text="finally")],
            provider_timeout_seconds=0.05,
        )

        start = time.perf_counter()
        response = chat(client, "neochat", message="hello", user_id="u1")
        elapsed = time.perf_counter() - start

        assert response.status_code == 200
        assert response.json()["provenance"] == "provider:fast"
        assert elapsed < 5 * 0.05 + 1.0

    def test_internal_error_returns_500(self, degraded):
        with patch(
            "relay_agents.orchestrator.synthesizer.DegradedResponseSynthesizer.synthesize",
            side_effect=RuntimeError("boom"),
        ):
            response = chat(degraded, "carebot", message="hello", user_id="u1")

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"]
        assert data["fallback_response"]

    def test_status_codes_follow_error_kind(self, client):
        mock_orchestrator = MagicMock()
        mock_orchestrator.handle = AsyncMock(
            return_value=ChatResult.failure(ErrorKind.AGENT_NOT_FOUND, "missing")
        )
        set_orchestrator(mock_orchestrator)

        response = chat(client, "carebot", message="hello")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "missing"}

    def test_guest_user(self, degraded):
        data = chat(degraded, "neochat", message="hello").json()
        assert data["user_id"].startswith("guest-")

    def test_guest_continues_session_by_id(self, degraded):
        first = chat(degraded, "neochat", message="one").json()
        second = chat(
            degraded, "neochat", message="two", session_id=first["session_id"]
        ).json()

        assert second["session_id"] == first["session_id"]
        assert second["user_id"] == first["user_id"]

        history = degraded.get(
            "/api/v1/agents/neochat/history", params={"user_id": first["user_id"]}
        ).json()
        assert [m["content"] for m in history["messages"]][0::2] == ["one", "two"]

    def test_guest_cannot_take_over_named_session(self, degraded):
        owned = chat(degraded, "neochat", message="mine", user_id="u1").json()

        data = chat(
            degraded, "neochat", message="hi", session_id=owned["session_id"]
        ).json()

        assert data["user_id"].startswith("guest-")
        assert data["session_id"] != owned["session_id"]

    @pytest.mark.asyncio
    async def test_client_disconnect_cancels_request(self):
        provider = HangingProvider()
        orchestrator = install(providers=[provider])
        request = MagicMock()
        request.app.state.disconnect_poll_seconds = 0.01
        request.is_disconnected = AsyncMock(side_effect=[False, True])

        response = await chat_endpoint(
            "neochat", request, ChatRequest(message="hello", user_id="u1")
        )

        assert response.status_code == 499
        assert provider.started is True
        assert provider.cancelled is True
        session_id, messages = orchestrator.history("neochat", "u1")
        assert messages == []

    def test_chat_request_defaults(self):
        request = ChatRequest()
        assert request.message is None
        assert request.session_id is None
        assert request.user_id is None


class TestAgentEndpoints:
    """Test suite for list, status, clear and history endpoints."""

    def test_list_agents(self, degraded):
        data = degraded.get("/api/v1/agents").json()

        assert data["count"] == 6
        ids = {agent["agent_id"] for agent in data["agents"]}
        assert ids == {"carebot", "configai", "authwise", "documind", "taskmaster", "neochat"}
        carebot = next(a for a in data["agents"] if a["agent_id"] == "carebot")
        assert carebot["name"] == "CareBot"
        assert carebot["domain"] == "health"
        assert carebot["capabilities"]

    def test_status(self, degraded):
        chat(degraded, "carebot", message="hello", user_id="u1")

        data = degraded.get("/api/v1/agents/carebot/status").json()

        assert data["success"] is True
        assert data["status"] == "active"
        assert data["mode"] == "degraded"
        assert data["agent"]["history_window"] == 5
        assert data["last_activity"] is not None

    def test_status_unknown_agent(self, degraded):
        response = degraded.get("/api/v1/agents/nobody/status")
        assert response.status_code == 404

    def test_clear(self, degraded):
        first = chat(degraded, "carebot", message="hello", user_id="u1").json()

        response = degraded.post("/api/v1/agents/carebot/clear", json={"user_id": "u1"})

        assert response.status_code == 200
        new_id = response.json()["session_id"]
        assert new_id != first["session_id"]

        after = chat(degraded, "carebot", message="hello", user_id="u1").json()
        assert after["session_id"] == new_id

        old = degraded.get(
            "/api/v1/agents/carebot/history",
            params={"user_id": "u1", "session_id": first["session_id"]},
        ).json()
        assert old["count"] == 2

    def test_clear_requires_user(self, degraded):
        response = degraded.post("/api/v1/agents/carebot/clear", json={})
        assert response.status_code == 400

    def test_clear_unknown_agent(self, degraded):
        response = degraded.post("/api/v1/agents/nobody/clear", json={"user_id": "u1"})
        assert response.status_code == 404

    def test_history_empty(self, degraded):
        data = degraded.get("/api/v1/agents/carebot/history", params={"user_id": "u9"}).json()

        assert data["session_id"] is None
        assert data["messages"] == []

    def test_history_limit(self, degraded):
        for i in range(3):
            chat(degraded, "neochat", message=f"message {i}", user_id="u1")

        data = degraded.get(
            "/api/v1/agents/neochat/history", params={"user_id": "u1", "limit": 2}
        ).json()

        assert data["count"] == 2
        assert data["messages"][0]["content"] == "message 2"

    def test_history_invalid_limit(self, degraded):
        response = degraded.get(
            "/api/v1/agents/neochat/history", params={"user_id": "u1", "limit": 0}
        )
        assert response.status_code == 400

    def test_preferences(self, degraded):
        response = degraded.put(
            "/api/v1/users/u1/preferences", json={"preferences": {"tone": "casual"}}
        )

        assert response.status_code == 200
        assert response.json()["preferences"] == {"tone": "casual"}
        assert get_orchestrator().get_preferences("u1") == {"tone": "casual"}
