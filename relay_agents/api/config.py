"""Configuration for the Relay API server."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


@dataclass
class ServerConfig:
    """Configuration for the API server."""

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    debug: bool = False
    disconnect_poll_seconds: float = 0.1


@dataclass
class APIConfig:
    """Configuration for the Relay API."""

    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "APIConfig":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            APIConfig instance, with defaults if the file is missing or corrupt
        """
        if not config_path.exists():
            return cls()

        try:
            with open(config_path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not read {config_path}, using defaults: {e}")
            return cls()

        server_data = data.get("server", {})
        server = ServerConfig(
            host=server_data.get("host", "0.0.0.0"),
            port=server_data.get("port", 8000),
            cors_origins=server_data.get("cors_origins", ["*"]),
            debug=server_data.get("debug", False),
            disconnect_poll_seconds=server_data.get("disconnect_poll_seconds", 0.1),
        )

        return cls(server=server)

    @classmethod
    def default_config_path(cls) -> Path:
        """Return the default configuration file path."""
        return Path(__file__).parent.parent.parent / "configs" / "api_config.json"


def load_config() -> APIConfig:
    """Load the API configuration from the default path."""
    return APIConfig.from_file(APIConfig.default_config_path())
