"""Template-driven responses used when no AI provider is available."""

import logging
import random
from typing import Any, Optional

from ..core import AgentProfile
from ..domains import AgentDomain, IntentTemplate, MetricRange, Pick
from .envelope import DEGRADED, ResponseEnvelope

logger = logging.getLogger(__name__)


class DegradedResponseSynthesizer:
    """Builds a complete response from a domain's template tables.

    The body of a response depends only on the intent and the domain. The
    injected ``random.Random`` only drives the cosmetic metrics and the
    manufactured processing time, so seeding it makes output reproducible.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def render_text(self, template: IntentTemplate, profile: AgentProfile) -> str:
        """Render the multi-section body of a template."""
        lines = [f"{profile.emoji} **{template.title}**", ""]
        lines.append(template.intro.replace("{agent}", profile.display_name))

        for heading, items in template.sections:
            lines.append("")
            lines.append(f"**{heading}:**")
            lines.extend(f"• {item}" for item in items)

        lines.append("")
        lines.append(template.closing.replace("{agent}", profile.display_name))
        return "\n".join(lines)

    def _resolve(self, value: Any) -> Any:
        if isinstance(value, MetricRange):
            drawn = self._rng.uniform(value.low, value.high)
            return int(round(drawn)) if value.digits == 0 else round(drawn, value.digits)
        if isinstance(value, Pick):
            k = min(value.k, len(value.candidates))
            return self._rng.sample(list(value.candidates), k)
        if isinstance(value, dict):
            return {key: self._resolve(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._resolve(item) for item in value]
        return value

    def resolve_insights(self, template: IntentTemplate) -> dict[str, Any]:
        """Draw concrete values for a template's insight block."""
        return {key: self._resolve(value) for key, value in template.insights.items()}

    def insights_for(self, intent: str, domain: AgentDomain) -> dict[str, Any]:
        """Insight block for an intent, also attached to provider responses."""
        return self.resolve_insights(domain.template_for(intent))

    def synthesize(
        self,
        intent: str,
        raw_message: str,
        domain: AgentDomain,
        profile: AgentProfile,
    ) -> ResponseEnvelope:
        """Produce a degraded-mode envelope for an intent.

        Unknown intents use the domain's general template.

        Args:
            intent: Classified intent.
            raw_message: The inbound message.
            domain: Domain tables of the answering agent.
            profile: The answering agent.

        Returns:
            ResponseEnvelope with provenance ``degraded``.
        """
        template = domain.template_for(intent)
        low, high = template.processing_time
        logger.info(
            f"Synthesizing degraded response for {profile.agent_id} "
            f"(intent={intent}, input='{raw_message[:40]}')"
        )
        return ResponseEnvelope(
            text=self.render_text(template, profile),
            processing_time=round(self._rng.uniform(low, high), 2),
            insights=self.resolve_insights(template),
            provenance=DEGRADED,
        )
