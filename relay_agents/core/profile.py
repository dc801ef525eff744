"""Agent descriptors for the Relay multi-agent front end."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class AgentCapability:
    """Describes what an agent can do."""

    name: str
    description: str
    keywords: list[str]
    examples: list[str]


@dataclass
class AgentProfile:
    """Static descriptor of a conversational agent.

    Profiles are owned by the agent registry. The orchestration core only
    reads them.
    """

    agent_id: str
    display_name: str
    domain: str
    tagline: str
    specializations: list[str]
    capabilities: list[AgentCapability] = field(default_factory=list)
    response_style: dict[str, Any] = field(default_factory=dict)
    system_prompt: Optional[str] = None
    emoji: str = "🌌"
    history_window: int = 5
    enabled: bool = True

    def build_system_prompt(self) -> str:
        """Return the provider system prompt for this agent."""
        if self.system_prompt:
            return self.system_prompt
        specializations = ", ".join(self.specializations)
        return (
            f"You are {self.display_name}, {self.tagline}. "
            f"You specialize in {specializations}. "
            "Respond in a helpful, accurate and well-structured manner."
        )
