"""Request context assembly for the Relay multi-agent front end."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .session_store import ClientStateStore, Message, SessionStore

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_WINDOW = 5


@dataclass
class RequestContext:
    """Everything the pipeline needs to know about one inbound message."""

    user_id: str
    agent_id: str
    message: str
    session_id: str
    history: list[Message] = field(default_factory=list)
    preferences: dict[str, Any] = field(default_factory=dict)
    new_session: bool = False

    def get_recent_context(self, n: Optional[int] = None) -> str:
        """Get formatted string of recent conversation messages.

        Args:
            n: Maximum number of recent messages to include. Defaults to the
               whole loaded window.

        Returns:
            Formatted string with recent conversation history.
        """
        recent = self.history if n is None else self.history[-n:]
        lines = []
        for message in recent:
            speaker = "User" if message.role == "user" else "Agent"
            lines.append(f"{speaker}: {message.content}")
        return "\n".join(lines)


class ContextAssembler:
    """Builds a bounded RequestContext from stored session state."""

    def __init__(
        self,
        session_store: SessionStore,
        client_store: ClientStateStore,
        default_window: int = DEFAULT_HISTORY_WINDOW,
    ) -> None:
        self._sessions = session_store
        self._clients = client_store
        self._default_window = default_window

    def build(
        self,
        user_id: str,
        agent_id: str,
        raw_message: str,
        session_id: Optional[str] = None,
        window: Optional[int] = None,
    ) -> RequestContext:
        """Assemble the context for a message.

        The session id is resolved in order: the id supplied by the caller,
        the id already assigned to the caller for this agent, a new session.
        A newly created id is written back to the client state store.

        Args:
            user_id: Caller identity.
            agent_id: Target agent.
            raw_message: The inbound message, echoed into the context.
            session_id: Optional session id supplied by the caller.
            window: Number of history messages to load. Defaults to the
                assembler's default window.

        Returns:
            RequestContext with at most ``window`` history messages.
        """
        requested = session_id or self._clients.get_session_id(user_id, agent_id)
        existing = self._sessions.get(requested) if requested else None
        session = self._sessions.open(user_id, agent_id, requested)
        new_session = existing is None or existing.session_id != session.session_id

        if self._clients.get_session_id(user_id, agent_id) != session.session_id:
            self._clients.set_session_id(user_id, agent_id, session.session_id)

        limit = self._default_window if window is None else window
        history = self._sessions.recent(session.session_id, limit)

        logger.debug(
            f"Context for {user_id}/{agent_id}: session={session.session_id} "
            f"history={len(history)} new={new_session}"
        )

        return RequestContext(
            user_id=user_id,
            agent_id=agent_id,
            message=raw_message,
            session_id=session.session_id,
            history=history,
            preferences=self._clients.get_preferences(user_id),
            new_session=new_session,
        )

    def reset(self, user_id: str, agent_id: str) -> str:
        """Start a fresh session for the caller.

        The previous session is left in the store untouched.

        Returns:
            The new session id.
        """
        session = self._sessions.create(user_id, agent_id)
        self._clients.set_session_id(user_id, agent_id, session.session_id)
        logger.info(f"Started new session {session.session_id} for {user_id}/{agent_id}")
        return session.session_id
