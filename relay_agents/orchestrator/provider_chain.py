"""Sequential provider fallback chain."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..core import AgentProfile, RequestContext
from ..domains import AgentDomain
from .envelope import DEGRADED, ResponseEnvelope, provider_provenance
from .prompts import build_system_prompt, build_user_prompt
from .providers import ProviderAdapter, ProviderOptions
from .synthesizer import DegradedResponseSynthesizer

logger = logging.getLogger(__name__)


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass
class ProviderAttempt:
    """One call to one provider. Logged, never persisted."""

    provider: str
    outcome: AttemptOutcome
    latency: float
    response: Optional[str] = None
    error: Optional[str] = None


@dataclass
class InvocationResult:
    """Envelope plus the trail of provider attempts that produced it."""

    envelope: ResponseEnvelope
    provenance: str
    attempts: list[ProviderAttempt] = field(default_factory=list)


class ProviderOrchestrator:
    """Tries providers in order and falls back to degraded synthesis.

    Each provider is called at most once per request, bounded by its own
    timeout or, when it has none, the chain default. There is no state
    shared between requests.
    """

    def __init__(
        self,
        providers: list[ProviderAdapter],
        synthesizer: DegradedResponseSynthesizer,
        timeout_seconds: float = 3.0,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        log_attempts: bool = True,
    ) -> None:
        self._providers = list(providers)
        self._synthesizer = synthesizer
        self._timeout = timeout_seconds
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._log_attempts = log_attempts

    @property
    def provider_names(self) -> list[str]:
        return [provider.name for provider in self._providers]

    async def _attempt(
        self, provider: ProviderAdapter, prompt: str, options: ProviderOptions
    ) -> ProviderAttempt:
        timeout = provider.timeout_seconds or self._timeout
        start = time.perf_counter()
        try:
            reply = await asyncio.wait_for(provider.send(prompt, options), timeout=timeout)
        except asyncio.TimeoutError:
            return ProviderAttempt(
                provider=provider.name,
                outcome=AttemptOutcome.TIMEOUT,
                latency=time.perf_counter() - start,
                error=f"timed out after {timeout}s",
            )
        except Exception as e:
            return ProviderAttempt(
                provider=provider.name,
                outcome=AttemptOutcome.ERROR,
                latency=time.perf_counter() - start,
                error=str(e) or type(e).__name__,
            )

        latency = time.perf_counter() - start
        if reply.success and reply.response and reply.response.strip():
            return ProviderAttempt(
                provider=provider.name,
                outcome=AttemptOutcome.SUCCESS,
                latency=latency,
                response=reply.response,
            )
        return ProviderAttempt(
            provider=provider.name,
            outcome=AttemptOutcome.ERROR,
            latency=latency,
            error=reply.error or "empty response",
        )

    def _log(self, attempt: ProviderAttempt) -> None:
        if not self._log_attempts:
            return
        if attempt.outcome is AttemptOutcome.SUCCESS:
            logger.info(f"Provider {attempt.provider} answered in {attempt.latency:.2f}s")
        else:
            logger.warning(
                f"Provider {attempt.provider} {attempt.outcome.value} after "
                f"{attempt.latency:.2f}s: {attempt.error}"
            )

    async def invoke(
        self,
        context: RequestContext,
        intent: str,
        raw_message: str,
        domain: AgentDomain,
        profile: AgentProfile,
    ) -> InvocationResult:
        """Answer a message with the first provider that succeeds.

        Args:
            context: Assembled request context.
            intent: Classified intent of the message.
            raw_message: The inbound message.
            domain: Domain tables of the answering agent.
            profile: The answering agent.

        Returns:
            InvocationResult with the envelope, its provenance and all attempts.
        """
        options = ProviderOptions(
            system_prompt=build_system_prompt(profile, context.preferences),
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        prompt = build_user_prompt(context)
        attempts: list[ProviderAttempt] = []

        for provider in self._providers:
            attempt = await self._attempt(provider, prompt, options)
            attempts.append(attempt)
            self._log(attempt)

            if attempt.outcome is AttemptOutcome.SUCCESS:
                provenance = provider_provenance(provider.name)
                envelope = ResponseEnvelope(
                    text=attempt.response,
                    processing_time=round(attempt.latency, 2),
                    insights=self._synthesizer.insights_for(intent, domain),
                    provenance=provenance,
                )
                return InvocationResult(envelope, provenance, attempts)

        if self._providers:
            logger.warning(
                f"All {len(self._providers)} providers failed for {profile.agent_id}, "
                f"using degraded response"
            )
        envelope = self._synthesizer.synthesize(intent, raw_message, domain, profile)
        return InvocationResult(envelope, DEGRADED, attempts)
