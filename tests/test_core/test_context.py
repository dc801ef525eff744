"""Tests for request context assembly."""

import pytest

from relay_agents.core import (
    ClientStateStore,
    ContextAssembler,
    InMemorySessionStore,
    Message,
    RequestContext,
)


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def clients():
    return ClientStateStore()


@pytest.fixture
def assembler(sessions, clients):
    return ContextAssembler(sessions, clients, default_window=5)


class TestContextAssembler:
    """Test suite for ContextAssembler.build."""

    def test_creates_session_and_persists_id(self, assembler, clients):
        context = assembler.build("user-1", "carebot", "hello")

        assert context.new_session is True
        assert context.message == "hello"
        assert context.history == []
        assert context.preferences == {}
        assert clients.get_session_id("user-1", "carebot") == context.session_id

    def test_reuses_assigned_session(self, assembler):
        first = assembler.build("user-1", "carebot", "hello")
        second = assembler.build("user-1", "carebot", "again")

        assert second.session_id == first.session_id
        assert second.new_session is False

    def test_sessions_are_per_agent(self, assembler):
        health = assembler.build("user-1", "carebot", "hello")
        chat = assembler.build("user-1", "neochat", "hello")

        assert health.session_id != chat.session_id

    def test_honours_supplied_owned_session(self, assembler, sessions):
        session = sessions.create("user-1", "carebot")

        context = assembler.build("user-1", "carebot", "hi", session_id=session.session_id)

        assert context.session_id == session.session_id
        assert context.new_session is False

    def test_ignores_session_of_another_user(self, assembler, sessions):
        session = sessions.create("user-2", "carebot")

        context = assembler.build("user-1", "carebot", "hi", session_id=session.session_id)

        assert context.session_id != session.session_id
        assert context.new_session is True

    def test_unknown_supplied_id_is_created(self, assembler, clients):
        context = assembler.build("user-1", "carebot", "hi", session_id="client-token")

        assert context.session_id == "client-token"
        assert context.new_session is True
        assert clients.get_session_id("user-1", "carebot") == "client-token"

    def test_loads_bounded_history(self, assembler, sessions):
        first = assembler.build("user-1", "carebot", "hi")
        for i in range(8):
            sessions.append(first.session_id, Message(role="user", content=f"m{i}"))

        context = assembler.build("user-1", "carebot", "next")
        assert [m.content for m in context.history] == ["m3", "m4", "m5", "m6", "m7"]

        wider = assembler.build("user-1", "carebot", "next", window=7)
        assert len(wider.history) == 7

    def test_includes_preferences(self, assembler, clients):
        clients.set_preferences("user-1", {"tone": "casual"})

        context = assembler.build("user-1", "carebot", "hi")

        assert context.preferences == {"tone": "casual"}

    def test_reset_starts_new_session_and_keeps_old(self, assembler, sessions, clients):
        first = assembler.build("user-1", "carebot", "hi")
        sessions.append(first.session_id, Message(role="user", content="old"))

        new_id = assembler.reset("user-1", "carebot")

        assert new_id != first.session_id
        assert clients.get_session_id("user-1", "carebot") == new_id
        assert sessions.count(first.session_id) == 1
        assert assembler.build("user-1", "carebot", "hi").history == []


class TestRequestContext:
    """Test suite for RequestContext."""

    def test_recent_context_formatting(self):
        context = RequestContext(
            user_id="u",
            agent_id="a",
            message="now",
            session_id="s",
            history=[
                Message(role="user", content="Hello"),
                Message(role="agent", content="Hi there"),
                Message(role="user", content="How are you?"),
            ],
        )

        assert context.get_recent_context() == (
            "User: Hello\nAgent: Hi there\nUser: How are you?"
        )
        assert context.get_recent_context(n=1) == "User: How are you?"

    def test_empty_history(self):
        context = RequestContext(user_id="u", agent_id="a", message="m", session_id="s")
        assert context.get_recent_context() == ""
