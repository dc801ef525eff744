"""Agent registry for the Relay multi-agent front end."""

from typing import Optional

from .profile import AgentCapability, AgentProfile


class AgentRegistry:
    """Central registry for all available agent profiles (singleton)."""

    _instance: Optional["AgentRegistry"] = None
    _agents: dict[str, AgentProfile]

    def __new__(cls) -> "AgentRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._agents = {}
        return cls._instance

    def register(self, profile: AgentProfile) -> None:
        """Register an agent profile by its id.

        Args:
            profile: The profile to register.
        """
        self._agents[profile.agent_id] = profile

    def unregister(self, agent_id: str) -> None:
        """Remove an agent from the registry.

        Args:
            agent_id: The id of the agent to remove.
        """
        if agent_id in self._agents:
            del self._agents[agent_id]

    def get(self, agent_id: str) -> Optional[AgentProfile]:
        """Get an agent profile by id.

        Args:
            agent_id: The id of the agent to retrieve.

        Returns:
            The profile if found, None otherwise.
        """
        return self._agents.get(agent_id)

    def get_available(self, agent_id: str) -> Optional[AgentProfile]:
        """Get an agent profile only if it is registered and enabled."""
        profile = self._agents.get(agent_id)
        if profile is None or not profile.enabled:
            return None
        return profile

    def list_agents(self) -> list[str]:
        """List all registered agent ids.

        Returns:
            List of registered agent ids.
        """
        return list(self._agents.keys())

    def get_all_capabilities(self) -> dict[str, list[AgentCapability]]:
        """Get capabilities for all registered agents.

        Returns:
            Dictionary mapping agent ids to their capabilities.
        """
        return {
            agent_id: profile.capabilities
            for agent_id, profile in self._agents.items()
        }

    def clear(self) -> None:
        """Clear all registered agents (useful for testing)."""
        self._agents.clear()

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (useful for testing)."""
        cls._instance = None
