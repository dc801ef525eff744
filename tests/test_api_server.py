"""Tests for Relay API server and configuration."""

import json
import pytest
from pathlib import Path
import tempfile

from fastapi.testclient import TestClient

from relay_agents.api.server import create_app, app
from relay_agents.api.config import APIConfig, ServerConfig, load_config
from relay_agents.api.routes.agents import reset_orchestrator, set_orchestrator
from relay_agents.core import AgentRegistry
from relay_agents.orchestrator import OrchestratorConfig, create_orchestrator


class TestAPIConfig:
    """Test suite for API configuration."""

    def test_server_config_defaults(self):
        """Test ServerConfig default values."""
        config = ServerConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 8000
        assert config.cors_origins == ["*"]
        assert config.debug is False
        assert config.disconnect_poll_seconds == 0.1

    def test_api_config_defaults(self):
        """Test APIConfig default values."""
        config = APIConfig()
        assert isinstance(config.server, ServerConfig)

    def test_api_config_from_file(self):
        """Test loading APIConfig from a JSON file."""
        config_data = {
            "server": {
                "host": "127.0.0.1",
                "port": 9000,
                "cors_origins": ["http://localhost:3000"],
                "debug": True,
                "disconnect_poll_seconds": 0.5,
            }
        }

        with tempfile.NamedTemporaryFile(
            mode='w', suffix='.json', delete=False
        ) as f:
            json.dump(config_data, f)
            temp_path = Path(f.name)

        try:
            config = APIConfig.from_file(temp_path)

            assert config.server.host == "127.0.0.1"
            assert config.server.port == 9000
            assert config.server.cors_origins == ["http://localhost:3000"]
            assert config.server.debug is True
            assert config.server.disconnect_poll_seconds == 0.5
        finally:
            temp_path.unlink()

    def test_api_config_from_missing_file(self):
        """Test loading APIConfig from a non-existent file returns defaults."""
        config = APIConfig.from_file(Path("/nonexistent/path/config.json"))
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8000

    def test_api_config_from_corrupt_file(self):
        """Test a corrupt config file falls back to defaults."""
        with tempfile.NamedTemporaryFile(
            mode='w', suffix='.json', delete=False
        ) as f:
            f.write("{not json")
            temp_path = Path(f.name)

        try:
            config = APIConfig.from_file(temp_path)
            assert config.server.port == 8000
        finally:
            temp_path.unlink()

    def test_shipped_config(self):
        """Test the shipped api_config.json loads."""
        assert load_config().server.port == 8000


class TestHealthEndpoints:
    """Test suite for health check endpoints."""

    @pytest.fixture(autouse=True)
    def degraded_orchestrator(self):
        """Install an orchestrator without providers."""
        AgentRegistry.reset_instance()
        set_orchestrator(
            create_orchestrator(config=OrchestratorConfig(providers=[]), providers=[])
        )
        yield
        reset_orchestrator()
        AgentRegistry.reset_instance()

    @pytest.fixture
    def client(self):
        """Create test client."""
        return TestClient(app)

    def test_health_check(self, client):
        """Test health check endpoint returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["mode"] == "degraded"
        assert data["providers"] == []
        assert data["agents"]["carebot"] == "available"
        assert len(data["agents"]) == 6

    def test_root_endpoint(self, client):
        """Test root endpoint returns API info."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Relay API"
        assert data["docs"] == "/docs"

    def test_create_app(self):
        """Test create_app builds an app with the agent routes."""
        paths = {route.path for route in create_app().routes}
        assert "/api/v1/agents/{agent_id}/chat" in paths
        assert "/health" in paths

    def test_cors_headers(self, client):
        """Test CORS headers are present."""
        response = client.options(
            "/health",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert "access-control-allow-origin" in response.headers
