"""Configuration for the orchestrator."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_KEY_ENVS = {
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "gemini": "GOOGLE_AI_API_KEY",
}


@dataclass
class ProviderConfig:
    """Settings for one AI provider in the fallback chain."""

    type: str
    enabled: bool = True
    model: Optional[str] = None
    api_key_env: str = ""
    timeout_seconds: float = 3.0
    base_url: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.api_key_env:
            self.api_key_env = DEFAULT_API_KEY_ENVS.get(self.type, "")

    @classmethod
    def from_dict(cls, data: dict, default_timeout: float) -> "ProviderConfig":
        return cls(
            type=data["type"],
            enabled=data.get("enabled", True),
            model=data.get("model"),
            api_key_env=data.get("api_key_env", ""),
            timeout_seconds=data.get("timeout_seconds", default_timeout),
            base_url=data.get("base_url"),
            name=data.get("name"),
        )


def _default_providers() -> List[ProviderConfig]:
    return [
        ProviderConfig(type="anthropic"),
        ProviderConfig(type="openai"),
        ProviderConfig(type="gemini"),
    ]


@dataclass
class OrchestratorConfig:
    """Configuration for the conversational orchestration core."""

    # Provider settings
    providers: List[ProviderConfig] = field(default_factory=_default_providers)
    provider_timeout_seconds: float = 3.0
    max_tokens: int = 1000
    temperature: float = 0.7

    # Conversation settings
    default_history_window: int = 5
    history_windows: Dict[str, int] = field(default_factory=dict)
    enabled_agents: Dict[str, bool] = field(default_factory=dict)

    # Storage settings
    storage_backend: str = "memory"
    sessions_dir: Optional[Path] = None

    # Logging settings
    log_level: str = "INFO"
    log_provider_attempts: bool = True

    def history_window_for(self, agent_id: str, profile_window: int) -> int:
        """Resolve the history window for an agent, config overrides first."""
        return self.history_windows.get(agent_id, profile_window)

    def is_agent_enabled(self, agent_id: str) -> bool:
        return self.enabled_agents.get(agent_id, True)

    @classmethod
    def from_file(cls, path: Path) -> "OrchestratorConfig":
        """Load configuration from a JSON file.

        Supports both nested structure (sections: orchestrator, providers,
        agents, storage, logging) and flat structure with all fields at the
        root level.

        Args:
            path: Path to the configuration file.

        Returns:
            OrchestratorConfig instance with values from file,
            falling back to defaults for missing fields.
        """
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not read {path}, using defaults: {e}")
            return cls()

        is_nested = any(
            key in data for key in ("orchestrator", "agents", "storage", "logging")
        )

        if is_nested:
            return cls._from_nested(data)
        else:
            return cls._from_flat(data)

    @classmethod
    def _parse_providers(cls, raw: Optional[list], timeout: float) -> List[ProviderConfig]:
        if raw is None:
            providers = _default_providers()
            for provider in providers:
                provider.timeout_seconds = timeout
            return providers
        return [ProviderConfig.from_dict(item, timeout) for item in raw]

    @classmethod
    def _from_flat(cls, data: dict) -> "OrchestratorConfig":
        """Parse flat config format."""
        timeout = data.get("provider_timeout_seconds", 3.0)
        sessions_dir = data.get("sessions_dir")
        return cls(
            providers=cls._parse_providers(data.get("providers"), timeout),
            provider_timeout_seconds=timeout,
            max_tokens=data.get("max_tokens", 1000),
            temperature=data.get("temperature", 0.7),
            default_history_window=data.get("default_history_window", 5),
            history_windows=data.get("history_windows", {}),
            enabled_agents=data.get("enabled_agents", {}),
            storage_backend=data.get("storage_backend", "memory"),
            sessions_dir=Path(sessions_dir) if sessions_dir else None,
            log_level=data.get("log_level", "INFO"),
            log_provider_attempts=data.get("log_provider_attempts", True),
        )

    @classmethod
    def _from_nested(cls, data: dict) -> "OrchestratorConfig":
        """Parse nested config format."""
        orch = data.get("orchestrator", {})
        agents_section = data.get("agents", {})
        storage = data.get("storage", {})
        logging_section = data.get("logging", {})

        timeout = orch.get("provider_timeout_seconds", 3.0)

        # Parse agents section into enabled_agents and history_windows
        enabled_agents: Dict[str, bool] = {}
        history_windows: Dict[str, int] = {}

        for agent_id, agent_config in agents_section.items():
            if isinstance(agent_config, dict):
                enabled_agents[agent_id] = agent_config.get("enabled", True)
                if "history_window" in agent_config:
                    history_windows[agent_id] = agent_config["history_window"]

        sessions_dir = storage.get("sessions_dir")

        return cls(
            # Provider settings
            providers=cls._parse_providers(data.get("providers"), timeout),
            provider_timeout_seconds=timeout,
            max_tokens=orch.get("max_tokens", 1000),
            temperature=orch.get("temperature", 0.7),
            # Conversation settings
            default_history_window=orch.get("default_history_window", 5),
            history_windows=history_windows,
            enabled_agents=enabled_agents,
            # Storage settings
            storage_backend=storage.get("backend", "memory"),
            sessions_dir=Path(sessions_dir) if sessions_dir else None,
            # Logging settings
            log_level=logging_section.get("level", "INFO"),
            log_provider_attempts=logging_section.get("log_provider_attempts", True),
        )

    @classmethod
    def default_config_path(cls) -> Path:
        """Return the default configuration file path."""
        return (
            Path(__file__).parent.parent.parent / "configs" / "orchestrator_config.json"
        )


def load_config() -> OrchestratorConfig:
    """Load the orchestrator configuration from the default path."""
    return OrchestratorConfig.from_file(OrchestratorConfig.default_config_path())
