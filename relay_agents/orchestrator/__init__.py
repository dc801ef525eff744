"""Orchestrator module: classification, provider fallback and degraded synthesis."""

from .agent import ConversationOrchestrator, create_orchestrator
from .classifier import ClassificationResult, IntentClassifier
from .config import OrchestratorConfig, ProviderConfig, load_config
from .envelope import DEGRADED, EnvelopeBuilder, ResponseEnvelope
from .provider_chain import (
    AttemptOutcome,
    InvocationResult,
    ProviderAttempt,
    ProviderOrchestrator,
)
from .providers import (
    AnthropicProvider,
    GeminiProvider,
    OpenAIProvider,
    ProviderAdapter,
    ProviderOptions,
    ProviderReply,
    create_providers,
)
from .synthesizer import DegradedResponseSynthesizer

__all__ = [
    "AnthropicProvider",
    "AttemptOutcome",
    "ClassificationResult",
    "ConversationOrchestrator",
    "DEGRADED",
    "DegradedResponseSynthesizer",
    "EnvelopeBuilder",
    "GeminiProvider",
    "IntentClassifier",
    "InvocationResult",
    "OpenAIProvider",
    "OrchestratorConfig",
    "ProviderAdapter",
    "ProviderAttempt",
    "ProviderConfig",
    "ProviderOptions",
    "ProviderOrchestrator",
    "ProviderReply",
    "ResponseEnvelope",
    "create_orchestrator",
    "create_providers",
    "load_config",
]
