"""Table types for agent domains.

A domain is pure data: an ordered list of intent rules and one response
template per intent. The orchestration core is parameterized by these tables
instead of carrying per-agent code.
"""

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class IntentRule:
    """Maps a regex (matched case-insensitively) to an intent."""

    intent: str
    pattern: str


@dataclass(frozen=True)
class MetricRange:
    """A cosmetic numeric value drawn uniformly from ``[low, high]``.

    ``digits == 0`` yields an integer.
    """

    low: float
    high: float
    digits: int = 0


@dataclass(frozen=True)
class Pick:
    """Draw ``k`` entries from a small fixed candidate list."""

    candidates: tuple[str, ...]
    k: int


InsightValue = Union[MetricRange, Pick, dict, list, str, int, float, bool]


@dataclass
class IntentTemplate:
    """Degraded-mode response for one intent."""

    title: str
    intro: str
    sections: list[tuple[str, list[str]]]
    closing: str
    insights: dict[str, InsightValue]
    processing_time: tuple[float, float] = (1.0, 2.5)


@dataclass
class AgentDomain:
    """Intent rules and response templates for one agent domain."""

    name: str
    rules: list[IntentRule]
    templates: dict[str, IntentTemplate]
    general_intent: str = "general"
    insight_keys: tuple[str, ...] = field(default_factory=tuple)

    @property
    def intents(self) -> list[str]:
        """All intents of the domain in declaration order, general last."""
        ordered: list[str] = []
        for rule in self.rules:
            if rule.intent not in ordered:
                ordered.append(rule.intent)
        if self.general_intent not in ordered:
            ordered.append(self.general_intent)
        return ordered

    def template_for(self, intent: str) -> IntentTemplate:
        """Return the intent's template, or the general one for unknown intents."""
        template = self.templates.get(intent)
        if template is None:
            template = self.templates[self.general_intent]
        return template

