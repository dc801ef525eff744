"""Response envelopes and their wire payloads."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..core import AgentProfile, RequestContext
from .sentiment import MessageTone

DEGRADED = "degraded"


def provider_provenance(provider_name: str) -> str:
    """Provenance tag for a response produced by an AI provider."""
    return f"provider:{provider_name}"


@dataclass
class ResponseEnvelope:
    """The answer to one message, before it is turned into a payload.

    Only ``text`` is persisted in the session history.
    """

    text: str
    processing_time: float
    insights: dict[str, Any] = field(default_factory=dict)
    provenance: str = DEGRADED

    def __post_init__(self) -> None:
        if not self.text or not self.text.strip():
            raise ValueError("Response envelope text must not be empty")

    @property
    def is_degraded(self) -> bool:
        return self.provenance == DEGRADED


class EnvelopeBuilder:
    """Assembles the success payload sent back to the caller."""

    def build(
        self,
        intent: str,
        envelope: ResponseEnvelope,
        context: RequestContext,
        profile: AgentProfile,
        tone: Optional[MessageTone] = None,
        now: Optional[datetime] = None,
    ) -> dict[str, Any]:
        """Merge an envelope and its request context into the wire payload.

        Insight keys are flattened into the top level. Reserved keys always
        win over an insight with the same name.

        Args:
            intent: Classified intent of the message.
            envelope: Response text, insights and provenance.
            context: The request context the response answers.
            profile: Agent that answered.
            tone: Optional sentiment and emotion of the inbound message.
            now: Timestamp override, defaults to the current time.

        Returns:
            JSON-serializable payload dict.
        """
        payload: dict[str, Any] = dict(envelope.insights)
        payload.update(
            {
                "success": True,
                "response": envelope.text,
                "processing_time": envelope.processing_time,
                "intent": intent,
                "provenance": envelope.provenance,
                "sentiment": tone.sentiment if tone else "neutral",
                "emotion": tone.emotion if tone else "neutral",
                "agent_name": profile.display_name,
                "agent_id": profile.agent_id,
                "session_id": context.session_id,
                "user_id": context.user_id,
                "timestamp": (now or datetime.now()).isoformat(),
            }
        )
        return payload
