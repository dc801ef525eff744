"""Core abstractions for the Relay multi-agent front end."""

from .agent_registry import AgentRegistry
from .context import ContextAssembler, RequestContext
from .profile import AgentCapability, AgentProfile
from .result import ChatResult, ErrorKind
from .session_store import (
    ClientStateStore,
    ConversationSession,
    InMemorySessionStore,
    JsonlSessionStore,
    Message,
    SessionStore,
)

__all__ = [
    "AgentCapability",
    "AgentProfile",
    "AgentRegistry",
    "ChatResult",
    "ClientStateStore",
    "ContextAssembler",
    "ConversationSession",
    "ErrorKind",
    "InMemorySessionStore",
    "JsonlSessionStore",
    "Message",
    "RequestContext",
    "SessionStore",
]
