"""Health check endpoints for Relay API."""

from fastapi import APIRouter

from .agents import get_orchestrator

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        Health status of the API, its agents and the provider chain
    """
    orchestrator = get_orchestrator()
    registry = orchestrator.registry
    agents = {}
    for agent_id in registry.list_agents():
        profile = registry.get(agent_id)
        agents[agent_id] = "available" if profile and profile.enabled else "disabled"

    providers = orchestrator.provider_names
    return {
        "status": "healthy",
        "version": "1.0.0",
        "mode": "providers" if providers else "degraded",
        "providers": providers,
        "agents": agents,
    }


@router.get("/")
async def root() -> dict:
    """
    Root endpoint.

    Returns:
        Basic API information
    """
    return {
        "name": "Relay API",
        "version": "1.0.0",
        "docs": "/docs"
    }
