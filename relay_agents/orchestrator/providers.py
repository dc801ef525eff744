"""AI provider adapters.

Every adapter exposes ``send(prompt, options) -> ProviderReply``. Adapters
report failures through the reply instead of raising, so the provider chain
can fall through to the next backend. Cancellation is never caught.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx
from anthropic import AsyncAnthropic

from .config import ProviderConfig

logger = logging.getLogger(__name__)


@dataclass
class ProviderOptions:
    """Generation options passed to a provider."""

    system_prompt: str = "You are a helpful AI assistant."
    max_tokens: int = 1000
    temperature: float = 0.7


@dataclass
class ProviderReply:
    """Normalized provider outcome."""

    success: bool
    response: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, response: str) -> "ProviderReply":
        return cls(success=True, response=response)

    @classmethod
    def failed(cls, error: str) -> "ProviderReply":
        return cls(success=False, error=error)


class ProviderAdapter(ABC):
    """Abstract base class for external AI backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this provider."""
        ...

    @property
    def timeout_seconds(self) -> Optional[float]:
        """Per-call time limit, or None to use the chain default."""
        return None

    @abstractmethod
    async def send(self, prompt: str, options: ProviderOptions) -> ProviderReply:
        """Send a prompt and return the normalized reply.

        Args:
            prompt: The user-facing prompt, including any conversation context.
            options: System prompt and generation settings.

        Returns:
            ProviderReply with the response text or an error message.
        """
        ...


class AnthropicProvider(ProviderAdapter):
    """Claude models through the Anthropic SDK."""

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        client: Optional[AsyncAnthropic] = None,
        api_key_env: str = "ANTHROPIC_API_KEY",
        timeout_seconds: float = 3.0,
        name: str = "anthropic",
    ) -> None:
        self._model = model
        self._client = client
        self._api_key_env = api_key_env
        self._timeout = timeout_seconds
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def _get_client(self) -> AsyncAnthropic:
        """Get or create the Anthropic client.

        Raises:
            ValueError: If the API key environment variable is not set.
        """
        if self._client is None:
            api_key = os.environ.get(self._api_key_env)
            if not api_key:
                raise ValueError(f"{self._api_key_env} environment variable not set")
            self._client = AsyncAnthropic(api_key=api_key, timeout=self._timeout)
        return self._client

    async def send(self, prompt: str, options: ProviderOptions) -> ProviderReply:
        try:
            client = self._get_client()
            response = await client.messages.create(
                model=self._model,
                max_tokens=options.max_tokens,
                temperature=options.temperature,
                system=options.system_prompt,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.error(f"Anthropic API error: {e}")
            return ProviderReply.failed("Anthropic service temporarily unavailable")

        if not response.content:
            return ProviderReply.failed("Anthropic returned an empty response")

        content_block = response.content[0]
        return ProviderReply.ok(getattr(content_block, "text", str(content_block)))


class _HTTPProvider(ProviderAdapter):
    """Shared plumbing for REST providers called through httpx."""

    def __init__(
        self,
        model: str,
        base_url: str,
        api_key_env: str,
        name: str,
        timeout_seconds: float = 3.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._api_key_env = api_key_env
        self._timeout = timeout_seconds
        self._http_client = http_client
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    def _api_key(self) -> str:
        api_key = os.environ.get(self._api_key_env)
        if not api_key:
            raise ValueError(f"{self._api_key_env} environment variable not set")
        return api_key

    @abstractmethod
    def _build_request(
        self, prompt: str, options: ProviderOptions, api_key: str
    ) -> tuple[str, dict, dict, dict]:
        """Return (url, headers, params, json body)."""
        ...

    @abstractmethod
    def _extract_text(self, data: dict) -> Optional[str]:
        """Pull the response text out of the decoded JSON body."""
        ...

    async def _post(self, client: httpx.AsyncClient, prompt: str, options: ProviderOptions) -> dict:
        url, headers, params, body = self._build_request(prompt, options, self._api_key())
        response = await client.post(
            url, headers=headers, params=params, json=body, timeout=self._timeout
        )
        response.raise_for_status()
        return response.json()

    async def send(self, prompt: str, options: ProviderOptions) -> ProviderReply:
        try:
            if self._http_client is not None:
                data = await self._post(self._http_client, prompt, options)
            else:
                async with httpx.AsyncClient() as client:
                    data = await self._post(client, prompt, options)

        except httpx.TimeoutException:
            logger.error(f"Timeout calling {self.name}")
            return ProviderReply.failed(f"{self.name} request timed out")

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from {self.name}: {e.response.status_code}")
            return ProviderReply.failed(
                f"{self.name} returned status {e.response.status_code}"
            )

        except httpx.RequestError as e:
            logger.error(f"Request error calling {self.name}: {e}")
            return ProviderReply.failed(f"Unable to connect to {self.name}")

        except (ValueError, KeyError) as e:
            logger.error(f"Invalid {self.name} request or response: {e}")
            return ProviderReply.failed(f"{self.name} service temporarily unavailable")

        try:
            text = self._extract_text(data)
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"Malformed {self.name} response: {e}")
            return ProviderReply.failed(f"Malformed response from {self.name}")

        if not text:
            return ProviderReply.failed(f"{self.name} returned an empty response")
        return ProviderReply.ok(text)


class OpenAIProvider(_HTTPProvider):
    """OpenAI chat completions over REST."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        api_key_env: str = "OPENAI_API_KEY",
        timeout_seconds: float = 3.0,
        http_client: Optional[httpx.AsyncClient] = None,
        name: str = "openai",
    ) -> None:
        super().__init__(
            model, base_url, api_key_env, name, timeout_seconds, http_client
        )

    def _build_request(self, prompt, options, api_key):
        body = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": options.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": options.max_tokens,
            "temperature": options.temperature,
        }
        headers = {"Authorization": f"Bearer {api_key}"}
        return f"{self._base_url}/chat/completions", headers, {}, body

    def _extract_text(self, data):
        return data["choices"][0]["message"]["content"]


class GeminiProvider(_HTTPProvider):
    """Google Gemini generateContent over REST."""

    def __init__(
        self,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        api_key_env: str = "GOOGLE_AI_API_KEY",
        timeout_seconds: float = 3.0,
        http_client: Optional[httpx.AsyncClient] = None,
        name: str = "gemini",
    ) -> None:
        super().__init__(
            model, base_url, api_key_env, name, timeout_seconds, http_client
        )

    def _build_request(self, prompt, options, api_key):
        body = {
            "systemInstruction": {"parts": [{"text": options.system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": options.temperature,
                "maxOutputTokens": options.max_tokens,
            },
        }
        url = f"{self._base_url}/models/{self._model}:generateContent"
        return url, {}, {"key": api_key}, body

    def _extract_text(self, data):
        return data["candidates"][0]["content"]["parts"][0]["text"]


PROVIDER_TYPES = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
}


def create_providers(configs: list[ProviderConfig]) -> list[ProviderAdapter]:
    """Build the ordered provider chain from configuration.

    Disabled providers, unknown types and providers whose API key is missing
    from the environment are skipped. Each adapter is named after its
    ``name`` setting, or its type. Repeated names get the model appended.

    Args:
        configs: Provider settings in priority order.

    Returns:
        Adapters in the same order.
    """
    providers: list[ProviderAdapter] = []
    names: set[str] = set()
    for provider_config in configs:
        if not provider_config.enabled:
            continue

        provider_cls = PROVIDER_TYPES.get(provider_config.type)
        if provider_cls is None:
            logger.warning(f"Unknown provider type '{provider_config.type}', skipping")
            continue

        if not os.environ.get(provider_config.api_key_env):
            logger.info(
                f"Provider '{provider_config.type}' disabled: "
                f"{provider_config.api_key_env} not set"
            )
            continue

        name = provider_config.name or provider_config.type
        if name in names:
            name = f"{name}-{provider_config.model or len(providers) + 1}"
        if name in names:
            name = f"{name}-{len(providers) + 1}"
        names.add(name)

        kwargs = {
            "name": name,
            "api_key_env": provider_config.api_key_env,
            "timeout_seconds": provider_config.timeout_seconds,
        }
        if provider_config.model:
            kwargs["model"] = provider_config.model
        if provider_config.base_url and provider_cls is not AnthropicProvider:
            kwargs["base_url"] = provider_config.base_url

        providers.append(provider_cls(**kwargs))
        logger.info(f"Registered provider '{name}' ({provider_config.type})")

    return providers
