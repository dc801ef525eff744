"""FastAPI server for Relay agents."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..orchestrator import load_config as load_orchestrator_config
from .config import load_config
from .routes import agents_router, health_router

# Setup logging
logging.basicConfig(
    level=getattr(logging, load_orchestrator_config().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logger.info("Relay API server starting up...")
    yield
    logger.info("Relay API server shutting down...")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    config = load_config()

    app = FastAPI(
        title="Relay API",
        description="Conversational API for Relay AI agents",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.disconnect_poll_seconds = config.server.disconnect_poll_seconds

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(agents_router)

    return app


# Create the default app instance
app = create_app()
