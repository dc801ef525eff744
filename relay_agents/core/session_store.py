"""Conversation session storage for the Relay multi-agent front end.

Sessions are append-only. Windowing happens at read time: ``recent`` returns
only the newest entries while the full history stays stored.
"""

import json
import logging
import re
import uuid
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Iterator, Literal, Optional

logger = logging.getLogger(__name__)

MessageRole = Literal["user", "agent"]

_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


@dataclass(frozen=True)
class Message:
    """A single exchanged message. Immutable once created."""

    role: MessageRole
    content: str
    metadata: Optional[dict[str, Any]] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "role": self.role,
            "content": self.content,
            "metadata": self.metadata,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """Create a Message from dictionary."""
        return cls(
            role=data["role"],
            content=data["content"],
            metadata=data.get("metadata"),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class ConversationSession:
    """Ordered conversation between one user and one agent."""

    session_id: str
    user_id: str
    agent_id: str
    messages: list[Message] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)

    def owned_by(self, user_id: str, agent_id: str) -> bool:
        """Check whether this session belongs to the (user, agent) pair."""
        return self.user_id == user_id and self.agent_id == agent_id


def new_session_id() -> str:
    """Generate an opaque session token."""
    return uuid.uuid4().hex


def is_valid_session_id(session_id: Optional[str]) -> bool:
    """Check that a client-supplied session id is a safe opaque token."""
    return bool(session_id) and bool(_SESSION_ID_PATTERN.match(session_id))


def _ordered(previous: Optional[datetime], message: Message) -> Message:
    """Return the message with a timestamp strictly after ``previous``."""
    if previous is not None and message.timestamp <= previous:
        return replace(message, timestamp=previous + timedelta(microseconds=1))
    return message


class SessionStore(ABC):
    """Append-only store of conversation sessions."""

    @abstractmethod
    def get(self, session_id: str) -> Optional[ConversationSession]:
        """Get a session (without its messages loaded) by id."""
        ...

    @abstractmethod
    def create(
        self, user_id: str, agent_id: str, session_id: Optional[str] = None
    ) -> ConversationSession:
        """Create a session for a (user, agent) pair.

        Args:
            user_id: Owning user.
            agent_id: Agent the conversation is held with.
            session_id: Optional token to use. Invalid or taken tokens are
                replaced by a fresh one.
        """
        ...

    @abstractmethod
    def append(self, session_id: str, message: Message) -> Message:
        """Append a message to a session.

        Returns:
            The stored message. Its timestamp may have been moved forward to
            keep the session strictly time-ordered.

        Raises:
            KeyError: If the session does not exist.
        """
        ...

    @abstractmethod
    def recent(self, session_id: str, limit: int) -> list[Message]:
        """Return the last ``limit`` messages, oldest first."""
        ...

    @abstractmethod
    def count(self, session_id: str) -> int:
        """Return the total number of stored messages in a session."""
        ...

    def open(
        self, user_id: str, agent_id: str, session_id: Optional[str] = None
    ) -> ConversationSession:
        """Get the session if it belongs to the pair, otherwise create one.

        Args:
            user_id: Owning user.
            agent_id: Agent the conversation is held with.
            session_id: Optional token supplied by the client.

        Returns:
            The existing or newly created session.
        """
        if session_id and is_valid_session_id(session_id):
            session = self.get(session_id)
            if session is not None:
                if session.owned_by(user_id, agent_id):
                    return session
                logger.warning(
                    f"Session {session_id} belongs to another conversation, "
                    f"starting a new one"
                )
                session_id = None
        return self.create(user_id, agent_id, session_id)


class InMemorySessionStore(SessionStore):
    """Process-local session store.

    Appends are synchronous list appends with no await in between, so
    concurrent requests on one event loop never interleave inside an append.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, ConversationSession] = {}

    def get(self, session_id: str) -> Optional[ConversationSession]:
        return self._sessions.get(session_id)

    def create(
        self, user_id: str, agent_id: str, session_id: Optional[str] = None
    ) -> ConversationSession:
        if not is_valid_session_id(session_id) or session_id in self._sessions:
            session_id = new_session_id()

        session = ConversationSession(
            session_id=session_id, user_id=user_id, agent_id=agent_id
        )
        self._sessions[session_id] = session
        logger.debug(f"Created session {session_id} for {user_id}/{agent_id}")
        return session

    def append(self, session_id: str, message: Message) -> Message:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Unknown session: {session_id}")

        previous = session.messages[-1].timestamp if session.messages else None
        stored = _ordered(previous, message)
        session.messages.append(stored)
        session.last_activity = stored.timestamp
        return stored

    def recent(self, session_id: str, limit: int) -> list[Message]:
        session = self._sessions.get(session_id)
        if session is None or limit <= 0:
            return []
        return list(session.messages[-limit:])

    def count(self, session_id: str) -> int:
        session = self._sessions.get(session_id)
        return len(session.messages) if session else 0


class JsonlSessionStore(SessionStore):
    """File-based session store.

    Each session is a JSON-lines file: the first line describes the session,
    every following line is one message. Messages are only ever appended.
    Files are streamed line by line, so reads hold at most the requested
    window in memory. The last message timestamp of each session is cached
    to order appends without rereading the file.
    """

    def __init__(self, sessions_dir: Optional[Path] = None):
        """Initialize storage.

        Args:
            sessions_dir: Directory for session files. Defaults to
                ~/.relay/sessions/
        """
        self.sessions_dir = sessions_dir or (Path.home() / ".relay" / "sessions")
        self._last_timestamps: dict[str, Optional[datetime]] = {}
        self._ensure_dir()

    def _ensure_dir(self) -> None:
        """Ensure the sessions directory exists."""
        self.sessions_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Sessions directory: {self.sessions_dir}")

    def _get_session_path(self, session_id: str) -> Path:
        return self.sessions_dir / f"{session_id}.jsonl"

    def _iter_records(self, session_id: str) -> Iterator[dict]:
        """Yield the records of a session file, skipping corrupt lines."""
        if not is_valid_session_id(session_id):
            return
        path = self._get_session_path(session_id)
        if not path.exists():
            return

        with open(path, encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError as e:
                    logger.error(
                        f"Skipping corrupt line {line_number} in {path}: {e}"
                    )

    def _iter_message_records(self, session_id: str) -> Iterator[dict]:
        return (
            record
            for record in self._iter_records(session_id)
            if record.get("type") == "message"
        )

    def _read_header(self, session_id: str) -> Optional[dict]:
        records = self._iter_records(session_id)
        try:
            header = next(records, None)
        finally:
            records.close()
        if header is None or header.get("type") != "session":
            return None
        return header

    def _write_line(self, session_id: str, record: dict) -> None:
        path = self._get_session_path(session_id)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")

    def _last_timestamp(self, session_id: str) -> Optional[datetime]:
        """Timestamp of the newest stored message, scanning the file once."""
        if session_id not in self._last_timestamps:
            last = None
            for record in self._iter_message_records(session_id):
                last = record["timestamp"]
            self._last_timestamps[session_id] = (
                datetime.fromisoformat(last) if last else None
            )
        return self._last_timestamps[session_id]

    def get(self, session_id: str) -> Optional[ConversationSession]:
        header = self._read_header(session_id)
        if header is None:
            return None

        created_at = datetime.fromisoformat(header["created_at"])
        return ConversationSession(
            session_id=header["session_id"],
            user_id=header["user_id"],
            agent_id=header["agent_id"],
            created_at=created_at,
            last_activity=self._last_timestamp(session_id) or created_at,
        )

    def create(
        self, user_id: str, agent_id: str, session_id: Optional[str] = None
    ) -> ConversationSession:
        if (
            not is_valid_session_id(session_id)
            or self._get_session_path(session_id).exists()
        ):
            session_id = new_session_id()

        session = ConversationSession(
            session_id=session_id, user_id=user_id, agent_id=agent_id
        )
        self._write_line(
            session_id,
            {
                "type": "session",
                "session_id": session_id,
                "user_id": user_id,
                "agent_id": agent_id,
                "created_at": session.created_at.isoformat(),
            },
        )
        self._last_timestamps[session_id] = None
        logger.info(f"Created session file for {session_id}")
        return session

    def append(self, session_id: str, message: Message) -> Message:
        if self._read_header(session_id) is None:
            raise KeyError(f"Unknown session: {session_id}")

        stored = _ordered(self._last_timestamp(session_id), message)
        self._write_line(session_id, {"type": "message", **stored.to_dict()})
        self._last_timestamps[session_id] = stored.timestamp
        return stored

    def recent(self, session_id: str, limit: int) -> list[Message]:
        if limit <= 0:
            return []
        window = deque(self._iter_message_records(session_id), maxlen=limit)
        return [Message.from_dict(record) for record in window]

    def count(self, session_id: str) -> int:
        return sum(1 for _ in self._iter_message_records(session_id))


@dataclass
class ClientState:
    """What the front end remembers about one caller."""

    session_ids: dict[str, str] = field(default_factory=dict)
    preferences: dict[str, Any] = field(default_factory=dict)


class ClientStateStore:
    """Per-caller store of assigned session ids and preferences."""

    def __init__(self) -> None:
        self._clients: dict[str, ClientState] = {}

    def _state(self, user_id: str) -> ClientState:
        return self._clients.setdefault(user_id, ClientState())

    def get_session_id(self, user_id: str, agent_id: str) -> Optional[str]:
        """Return the session id assigned to the caller for an agent."""
        state = self._clients.get(user_id)
        return state.session_ids.get(agent_id) if state else None

    def set_session_id(self, user_id: str, agent_id: str, session_id: str) -> None:
        """Remember the session id assigned to the caller for an agent."""
        self._state(user_id).session_ids[agent_id] = session_id

    def get_preferences(self, user_id: str) -> dict[str, Any]:
        """Return a copy of the caller's flat preference map."""
        state = self._clients.get(user_id)
        return dict(state.preferences) if state else {}

    def set_preferences(self, user_id: str, preferences: dict[str, Any]) -> None:
        """Replace the caller's preference map."""
        self._state(user_id).preferences = dict(preferences)
