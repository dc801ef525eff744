"""Conversation orchestrator: one message in, one envelope out."""

import logging
import random
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Optional

from ..core import (
    AgentProfile,
    AgentRegistry,
    ChatResult,
    ClientStateStore,
    ContextAssembler,
    ErrorKind,
    InMemorySessionStore,
    JsonlSessionStore,
    Message,
    SessionStore,
)
from ..domains import DEFAULT_AGENTS, get_domain
from .classifier import IntentClassifier
from .config import OrchestratorConfig, load_config
from .envelope import EnvelopeBuilder
from .provider_chain import ProviderOrchestrator
from .providers import ProviderAdapter, create_providers
from .sentiment import analyze_tone
from .synthesizer import DegradedResponseSynthesizer

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I'm having trouble processing your request right now. Please try again in a moment."
)


GUEST_PREFIX = "guest-"


def guest_user_id() -> str:
    """Identity for callers that did not send a user id."""
    return f"{GUEST_PREFIX}{uuid.uuid4().hex[:12]}"


class ConversationOrchestrator:
    """Runs the chat pipeline for every registered agent.

    The pipeline is: validate, look up the agent, assemble context, classify
    intent, tag tone, invoke providers (or degrade), build the payload and
    append the user and agent messages to the session.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        session_store: SessionStore,
        client_store: ClientStateStore,
        provider_chain: ProviderOrchestrator,
        classifier: Optional[IntentClassifier] = None,
        envelope_builder: Optional[EnvelopeBuilder] = None,
        default_history_window: int = 5,
    ) -> None:
        self._registry = registry
        self._sessions = session_store
        self._clients = client_store
        self._chain = provider_chain
        self._classifier = classifier or IntentClassifier()
        self._envelopes = envelope_builder or EnvelopeBuilder()
        self._assembler = ContextAssembler(
            session_store, client_store, default_window=default_history_window
        )
        self._last_activity: dict[str, datetime] = {}

    @property
    def registry(self) -> AgentRegistry:
        return self._registry

    @property
    def provider_names(self) -> list[str]:
        return self._chain.provider_names

    async def handle(
        self,
        agent_id: str,
        message: Optional[str],
        user_id: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ChatResult:
        """Handle one chat message.

        Args:
            agent_id: Target agent.
            message: The user's message.
            user_id: Caller identity. When missing, the guest owning
                ``session_id`` is assumed, otherwise a new guest id is generated.
            session_id: Optional session to continue.

        Returns:
            ChatResult with the wire payload, or the error kind and message.
        """
        if message is None or not message.strip():
            return ChatResult.failure(ErrorKind.VALIDATION, "Message cannot be empty")

        profile = self._registry.get_available(agent_id)
        if profile is None:
            return ChatResult.failure(
                ErrorKind.AGENT_NOT_FOUND, f"Agent '{agent_id}' not found"
            )

        user_id = user_id or self._anonymous_caller(agent_id, session_id)
        intent = "unclassified"
        try:
            domain = get_domain(profile.domain)
            context = self._assembler.build(
                user_id, agent_id, message, session_id, window=profile.history_window
            )
            intent = self._classifier.classify(message, domain)
            tone = analyze_tone(message)

            result = await self._chain.invoke(context, intent, message, domain, profile)
            payload = self._envelopes.build(intent, result.envelope, context, profile, tone)

            self._sessions.append(
                context.session_id,
                Message(
                    role="user",
                    content=message,
                    metadata={"intent": intent, **tone.to_metadata()},
                ),
            )
            self._sessions.append(
                context.session_id,
                Message(
                    role="agent",
                    content=result.envelope.text,
                    metadata={"intent": intent, "provenance": result.provenance},
                ),
            )
        except Exception as e:
            logger.error(
                f"Error handling message for {agent_id} (intent={intent}, "
                f"input='{message[:50]}'): {e}",
                exc_info=True,
            )
            return ChatResult.failure(ErrorKind.INTERNAL, "Internal error processing message")

        self._last_activity[agent_id] = datetime.now()
        logger.info(
            f"{agent_id} answered {user_id} (intent={intent}, provenance={result.provenance})"
        )
        return ChatResult.success(payload)

    def _anonymous_caller(self, agent_id: str, session_id: Optional[str]) -> str:
        """Identify a caller that sent no user id.

        A guest continuing its own session is recognised by the session id
        alone. Sessions owned by named users are never adopted this way.
        """
        if session_id:
            session = self._sessions.get(session_id)
            if (
                session is not None
                and session.agent_id == agent_id
                and session.user_id.startswith(GUEST_PREFIX)
            ):
                return session.user_id
        return guest_user_id()

    def _resolve_session_id(
        self, agent_id: str, user_id: str, session_id: Optional[str]
    ) -> Optional[str]:
        if session_id:
            session = self._sessions.get(session_id)
            if session is not None and session.owned_by(user_id, agent_id):
                return session_id
        return self._clients.get_session_id(user_id, agent_id)

    def history(
        self,
        agent_id: str,
        user_id: str,
        session_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> tuple[Optional[str], list[Message]]:
        """Return the windowed history of the caller's session with an agent.

        Returns:
            Tuple of (session id or None, messages oldest first).
        """
        profile = self._registry.get(agent_id)
        window = limit or (profile.history_window if profile else 5)
        resolved = self._resolve_session_id(agent_id, user_id, session_id)
        if resolved is None:
            return None, []
        return resolved, self._sessions.recent(resolved, window)

    def clear(self, agent_id: str, user_id: str) -> str:
        """Start a fresh session for the caller. Old history stays stored."""
        return self._assembler.reset(user_id, agent_id)

    def set_preferences(self, user_id: str, preferences: dict[str, Any]) -> None:
        self._clients.set_preferences(user_id, preferences)

    def get_preferences(self, user_id: str) -> dict[str, Any]:
        return self._clients.get_preferences(user_id)

    def last_activity(self, agent_id: str) -> Optional[datetime]:
        return self._last_activity.get(agent_id)


def _configured_profile(profile: AgentProfile, config: OrchestratorConfig) -> AgentProfile:
    return replace(
        profile,
        enabled=config.is_agent_enabled(profile.agent_id),
        history_window=config.history_window_for(profile.agent_id, profile.history_window),
    )


def create_session_store(config: OrchestratorConfig) -> SessionStore:
    """Create the session store backend named in the configuration."""
    if config.storage_backend == "jsonl":
        return JsonlSessionStore(config.sessions_dir)
    if config.storage_backend != "memory":
        logger.warning(
            f"Unknown storage backend '{config.storage_backend}', using memory"
        )
    return InMemorySessionStore()


def create_orchestrator(
    config: Optional[OrchestratorConfig] = None,
    providers: Optional[list[ProviderAdapter]] = None,
    rng: Optional[random.Random] = None,
    session_store: Optional[SessionStore] = None,
) -> ConversationOrchestrator:
    """Create a fully wired ConversationOrchestrator.

    Args:
        config: Optional configuration. Defaults to loading from file.
        providers: Optional provider chain. Defaults to the configured
            providers whose API keys are set.
        rng: Optional random source for degraded responses.
        session_store: Optional session store. Defaults to the configured
            backend.

    Returns:
        Configured ConversationOrchestrator.
    """
    if config is None:
        config = load_config()

    registry = AgentRegistry()
    for profile in DEFAULT_AGENTS:
        registry.register(_configured_profile(profile, config))

    if providers is None:
        providers = create_providers(config.providers)

    chain = ProviderOrchestrator(
        providers,
        DegradedResponseSynthesizer(rng),
        timeout_seconds=config.provider_timeout_seconds,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
        log_attempts=config.log_provider_attempts,
    )

    logger.info(
        f"Orchestrator ready: {len(registry.list_agents())} agents, "
        f"providers={[p.name for p in providers] or 'none (degraded mode)'}"
    )

    return ConversationOrchestrator(
        registry=registry,
        session_store=session_store or create_session_store(config),
        client_store=ClientStateStore(),
        provider_chain=chain,
        default_history_window=config.default_history_window,
    )
