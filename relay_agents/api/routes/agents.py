"""Agent chat endpoints for Relay API."""

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...core import AgentProfile, ChatResult, ErrorKind
from ...orchestrator import ConversationOrchestrator, create_orchestrator
from ...orchestrator.agent import FALLBACK_RESPONSE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["agents"])

# Global orchestrator instance (lazy initialization for better startup)
_orchestrator: Optional[ConversationOrchestrator] = None

STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AGENT_NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

# Non-standard status used when the caller went away mid-request
CLIENT_CLOSED_REQUEST = 499


def get_orchestrator() -> ConversationOrchestrator:
    """Get or create the global orchestrator instance.

    Returns:
        ConversationOrchestrator: The singleton orchestrator instance.
    """
    global _orchestrator
    if _orchestrator is None:
        _orchestrator = create_orchestrator()
        logger.info("Orchestrator initialized")
    return _orchestrator


def set_orchestrator(orchestrator: Optional[ConversationOrchestrator]) -> None:
    """Install a pre-built orchestrator instance."""
    global _orchestrator
    _orchestrator = orchestrator


def reset_orchestrator() -> None:
    """Reset the global orchestrator instance (useful for testing)."""
    set_orchestrator(None)


class ChatRequest(BaseModel):
    """Request model for agent chat."""

    message: Optional[str] = None
    session_id: Optional[str] = None
    user_id: Optional[str] = None


class ClearRequest(BaseModel):
    """Request model for clearing a conversation."""

    user_id: Optional[str] = None


class PreferencesRequest(BaseModel):
    """Request model for storing caller preferences."""

    preferences: Dict[str, Any] = Field(default_factory=dict)


class AgentCapabilityInfo(BaseModel):
    """Information about an agent capability."""

    name: str
    description: str
    keywords: List[str]
    examples: List[str]


class AgentInfo(BaseModel):
    """Information about a registered agent."""

    agent_id: str
    name: str
    domain: str
    description: str
    specializations: List[str]
    capabilities: List[AgentCapabilityInfo]
    history_window: int
    enabled: bool


class AgentsListResponse(BaseModel):
    """Response model for listing agents."""

    agents: List[AgentInfo]
    count: int


class AgentStatusResponse(BaseModel):
    """Response model for an agent's status."""

    success: bool
    agent: AgentInfo
    status: str
    mode: str
    providers: List[str]
    last_activity: Optional[str] = None


class ClearResponse(BaseModel):
    """Response model for clearing a conversation."""

    success: bool
    agent_id: str
    user_id: str
    session_id: str
    message: str


class HistoryMessage(BaseModel):
    """One message of a conversation history."""

    role: str
    content: str
    metadata: Optional[Dict[str, Any]] = None
    timestamp: str


class HistoryResponse(BaseModel):
    """Response model for conversation history."""

    success: bool
    agent_id: str
    user_id: str
    session_id: Optional[str] = None
    messages: List[HistoryMessage]
    count: int


class PreferencesResponse(BaseModel):
    """Response model for stored preferences."""

    success: bool
    user_id: str
    preferences: Dict[str, Any]


def _agent_info(profile: AgentProfile) -> AgentInfo:
    return AgentInfo(
        agent_id=profile.agent_id,
        name=profile.display_name,
        domain=profile.domain,
        description=profile.tagline,
        specializations=profile.specializations,
        capabilities=[
            AgentCapabilityInfo(
                name=cap.name,
                description=cap.description,
                keywords=cap.keywords,
                examples=cap.examples,
            )
            for cap in profile.capabilities
        ],
        history_window=profile.history_window,
        enabled=profile.enabled,
    )


def _error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": error, **extra}
    )


def _chat_response(result: ChatResult) -> JSONResponse:
    if result.ok:
        return JSONResponse(status_code=200, content=result.payload)

    status_code = STATUS_CODES[result.error_kind]
    if result.error_kind is ErrorKind.INTERNAL:
        return _error_response(
            status_code, result.error, fallback_response=FALLBACK_RESPONSE
        )
    return _error_response(status_code, result.error)


async def _run_until_disconnected(
    request: Request, work: Awaitable[ChatResult], poll_seconds: float
) -> Optional[ChatResult]:
    """Run the pipeline, cancelling it if the client disconnects.

    Returns:
        The pipeline result, or None if the client went away first.
    """
    task = asyncio.ensure_future(work)
    while True:
        done, _ = await asyncio.wait({task}, timeout=poll_seconds)
        if done:
            return task.result()
        if await request.is_disconnected():
            task.cancel()
            await asyncio.wait({task})
            return None


@router.post("/agents/{agent_id}/chat")
async def chat(
    agent_id: str,
    request: Request,
    chat_request: Optional[ChatRequest] = None,
) -> JSONResponse:
    """
    Send a message to an agent.

    Args:
        agent_id: Target agent id.
        request: The raw request, watched for client disconnects.
        chat_request: Message plus optional session_id and user_id.

    Returns:
        The agent's response payload, or an error body with a matching
        status code.
    """
    chat_request = chat_request or ChatRequest()
    message = chat_request.message
    if message is None or not message.strip():
        return _error_response(400, "Message cannot be empty")

    logger.info(f"Received message for {agent_id}: {message[:100]}")

    orchestrator = get_orchestrator()
    poll_seconds = getattr(request.app.state, "disconnect_poll_seconds", 0.1)
    result = await _run_until_disconnected(
        request,
        orchestrator.handle(
            agent_id,
            message,
            user_id=chat_request.user_id,
            session_id=chat_request.session_id,
        ),
        poll_seconds,
    )

    if result is None:
        logger.info(f"Client disconnected, cancelled request for {agent_id}")
        return _error_response(CLIENT_CLOSED_REQUEST, "Client disconnected")

    return _chat_response(result)


@router.get("/agents", response_model=AgentsListResponse)
async def list_agents() -> AgentsListResponse:
    """
    List all registered agents and their capabilities.

    Returns:
        List of all registered agents with their details.
    """
    registry = get_orchestrator().registry
    agents_info = [
        _agent_info(profile)
        for profile in (registry.get(agent_id) for agent_id in registry.list_agents())
        if profile is not None
    ]
    return AgentsListResponse(agents=agents_info, count=len(agents_info))


@router.get("/agents/{agent_id}/status", response_model=AgentStatusResponse)
async def agent_status(agent_id: str):
    """
    Report an agent's profile, provider chain and last activity.

    Returns:
        Status of the agent, or 404 if it is not registered.
    """
    orchestrator = get_orchestrator()
    profile = orchestrator.registry.get(agent_id)
    if profile is None:
        return _error_response(404, f"Agent '{agent_id}' not found")

    providers = orchestrator.provider_names
    last_activity = orchestrator.last_activity(agent_id)
    return AgentStatusResponse(
        success=True,
        agent=_agent_info(profile),
        status="active" if profile.enabled else "disabled",
        mode="providers" if providers else "degraded",
        providers=providers,
        last_activity=last_activity.isoformat() if last_activity else None,
    )


@router.post("/agents/{agent_id}/clear", response_model=ClearResponse)
async def clear_conversation(agent_id: str, clear_request: Optional[ClearRequest] = None):
    """
    Start a fresh conversation with an agent.

    The previous session is kept in storage; only the caller's current
    session changes.
    """
    user_id = clear_request.user_id if clear_request else None
    if not user_id:
        return _error_response(400, "user_id is required")

    orchestrator = get_orchestrator()
    if orchestrator.registry.get_available(agent_id) is None:
        return _error_response(404, f"Agent '{agent_id}' not found")

    session_id = orchestrator.clear(agent_id, user_id)
    return ClearResponse(
        success=True,
        agent_id=agent_id,
        user_id=user_id,
        session_id=session_id,
        message="Conversation cleared",
    )


@router.get("/agents/{agent_id}/history", response_model=HistoryResponse)
async def conversation_history(
    agent_id: str,
    user_id: str,
    session_id: Optional[str] = None,
    limit: Optional[int] = None,
):
    """
    Return the windowed history of the caller's conversation with an agent.

    Args:
        agent_id: Agent id.
        user_id: Caller identity.
        session_id: Optional session to read instead of the caller's current one.
        limit: Optional window size, defaults to the agent's history window.
    """
    orchestrator = get_orchestrator()
    if orchestrator.registry.get(agent_id) is None:
        return _error_response(404, f"Agent '{agent_id}' not found")
    if limit is not None and limit < 1:
        return _error_response(400, "limit must be positive")

    resolved, messages = orchestrator.history(agent_id, user_id, session_id, limit)
    return HistoryResponse(
        success=True,
        agent_id=agent_id,
        user_id=user_id,
        session_id=resolved,
        messages=[
            HistoryMessage(
                role=message.role,
                content=message.content,
                metadata=message.metadata,
                timestamp=message.timestamp.isoformat(),
            )
            for message in messages
        ],
        count=len(messages),
    )


@router.put("/users/{user_id}/preferences", response_model=PreferencesResponse)
async def update_preferences(
    user_id: str, preferences_request: PreferencesRequest
) -> PreferencesResponse:
    """Store the caller's flat preference map."""
    orchestrator = get_orchestrator()
    orchestrator.set_preferences(user_id, preferences_request.preferences)
    logger.info(f"Updated preferences for {user_id}: {sorted(preferences_request.preferences)}")
    return PreferencesResponse(
        success=True,
        user_id=user_id,
        preferences=orchestrator.get_preferences(user_id),
    )
