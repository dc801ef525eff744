"""API routes package."""

from .agents import router as agents_router
from .health import router as health_router

__all__ = ["agents_router", "health_router"]
