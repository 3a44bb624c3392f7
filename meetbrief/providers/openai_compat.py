"""Chat-completion provider for OpenAI and OpenAI-compatible APIs (Groq)."""

import logging
import time
from typing import Any

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    NotFoundError,
    OpenAI,
    OpenAIError,
    PermissionDeniedError,
    RateLimitError,
)

from ..config import ProviderSettings
from ..errors import ProviderError, ProviderErrorKind

logger = logging.getLogger(__name__)


def classify_error(provider: str, error: OpenAIError) -> ProviderError:
    """Map an SDK exception onto a ProviderError kind."""
    if isinstance(error, (AuthenticationError, PermissionDeniedError)):
        return ProviderError(
            provider,
            ProviderErrorKind.UNAUTHORIZED,
            "authentication failed, check the API key and its permissions",
        )
    if isinstance(error, RateLimitError):
        return ProviderError(
            provider, ProviderErrorKind.RATE_LIMITED, "rate limit exceeded, try again shortly"
        )
    if isinstance(error, NotFoundError) or (
        isinstance(error, APIStatusError) and error.status_code == 503
    ):
        return ProviderError(provider, ProviderErrorKind.MODEL_UNAVAILABLE, f"model unavailable: {error}")
    if isinstance(error, APITimeoutError):
        return ProviderError(provider, ProviderErrorKind.UNKNOWN, "request timed out")
    return ProviderError(provider, ProviderErrorKind.UNKNOWN, str(error) or type(error).__name__)


class OpenAICompatibleProvider:
    """
    Provider backed by the ``openai`` SDK.

    Groq exposes the same chat-completions API, so both providers share this
    class and differ only in ``base_url``, model and key.
    """

    def __init__(self, settings: ProviderSettings, client: OpenAI | None = None) -> None:
        self.settings = settings
        self.name = settings.name
        self.model = settings.model
        self._client = client

    @property
    def tag(self) -> str:
        return f"{self.name}-{self.model}"

    def is_configured(self) -> bool:
        return self._client is not None or self.settings.is_configured

    def _get_client(self) -> OpenAI:
        """Get the SDK client, checking for an API key."""
        if self._client is None:
            if not self.settings.api_key:
                raise ProviderError(
                    self.name,
                    ProviderErrorKind.NOT_CONFIGURED,
                    "API key is not configured in environment variables",
                )
            # Retries belong to the fallback policy, not the SDK
            self._client = OpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                max_retries=0,
            )
        return self._client

    def complete(
        self,
        system: str,
        user: str,
        *,
        max_tokens: int,
        temperature: float,
        top_p: float | None = None,
    ) -> str:
        """
        Call the chat-completions API, retrying dropped connections with backoff.

        Args:
            system: System instruction, or empty for a user-only request
            user: User message
            max_tokens: Output token limit
            temperature: Sampling temperature
            top_p: Nucleus-sampling parameter, omitted when None

        Raises:
            ProviderError: If the call fails or the provider is not configured
        """
        client = self._get_client()

        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": user})

        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_completion_tokens": max_tokens,
        }
        if top_p is not None:
            kwargs["top_p"] = top_p

        attempts = max(1, self.settings.max_attempts)
        last_error: APIConnectionError | None = None

        for attempt in range(attempts):
            try:
                response = client.chat.completions.create(**kwargs)
            except APITimeoutError as e:
                raise classify_error(self.name, e) from e
            except APIConnectionError as e:
                last_error = e
                if attempt < attempts - 1:
                    wait_time = 2 ** (attempt + 1)
                    logger.warning(
                        "%s connection failed (attempt %d/%d), retrying in %ds",
                        self.name,
                        attempt + 1,
                        attempts,
                        wait_time,
                    )
                    time.sleep(wait_time)
            except OpenAIError as e:
                raise classify_error(self.name, e) from e
            else:
                # Content-filtered responses can come back with no choices
                if not response.choices:
                    raise ProviderError(
                        self.name, ProviderErrorKind.UNKNOWN, "empty response (no choices)"
                    )
                return response.choices[0].message.content or ""

        raise classify_error(self.name, last_error) from last_error

    def probe(self) -> bool:
        """Send a one-token request to check the provider is reachable."""
        try:
            self.complete("", "Test", max_tokens=1, temperature=0.0)
        except ProviderError as e:
            logger.info("%s unavailable: %s", self.name, e)
            return False
        return True
