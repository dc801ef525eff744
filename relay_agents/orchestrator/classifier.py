"""Rule-based intent classification."""

import re
from dataclasses import dataclass
from typing import Optional

from ..domains import AgentDomain


@dataclass
class ClassificationResult:
    """Result of intent classification."""

    intent: str
    domain: str
    matched_pattern: Optional[str] = None

    @property
    def is_general(self) -> bool:
        return self.matched_pattern is None


class IntentClassifier:
    """Fast code-based intent classification.

    Applies a domain's ordered rule list to the text. The first rule whose
    pattern matches wins. Rules are never ranked by specificity or match
    length, so declaration order decides ties. No match returns the domain's
    general intent.
    """

    def __init__(self) -> None:
        self._compiled_patterns: dict[str, list[tuple[str, re.Pattern[str]]]] = {}

    def _compile_patterns(self, domain: AgentDomain) -> list[tuple[str, re.Pattern[str]]]:
        """Pre-compile a domain's regex patterns, once per domain."""
        compiled = self._compiled_patterns.get(domain.name)
        if compiled is None:
            compiled = [
                (rule.intent, re.compile(rule.pattern, re.IGNORECASE))
                for rule in domain.rules
            ]
            self._compiled_patterns[domain.name] = compiled
        return compiled

    def classify_detailed(self, text: str, domain: AgentDomain) -> ClassificationResult:
        """Classify text and report which rule matched.

        Args:
            text: The user's message.
            domain: Domain whose rule table is applied.

        Returns:
            ClassificationResult with the intent and matched pattern.
        """
        for intent, pattern in self._compile_patterns(domain):
            if pattern.search(text):
                return ClassificationResult(
                    intent=intent, domain=domain.name, matched_pattern=pattern.pattern
                )
        return ClassificationResult(intent=domain.general_intent, domain=domain.name)

    def classify(self, text: str, domain: AgentDomain) -> str:
        """Classify text into one of the domain's intents."""
        return self.classify_detailed(text, domain).intent
