"""Configuration for providers and the summarization pipeline."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import ConfigError

GROQ_API_BASE = "https://api.groq.com/openai/v1"

# Whole transcripts up to this many estimated tokens go to a single call
DIRECT_TOKEN_CEILING = 8000
# Upper bound for each chunk on the chunked path
CHUNK_TOKEN_CEILING = 7000


@dataclass
class ProviderSettings:
    """Connection and model settings for one completion provider."""

    name: str
    model: str
    api_key: str | None = None
    base_url: str | None = None
    chunk_max_tokens: int = 2000
    timeout: float = 120.0
    max_attempts: int = 2

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


def _default_primary() -> ProviderSettings:
    return ProviderSettings(
        name="groq",
        model="llama-3.3-70b-versatile",
        base_url=GROQ_API_BASE,
        chunk_max_tokens=2000,
    )


def _default_fallback() -> ProviderSettings:
    return ProviderSettings(name="openai", model="gpt-4o-mini", chunk_max_tokens=1500)


@dataclass
class SummarizerConfig:
    """Options for the summarization pipeline."""

    primary: ProviderSettings = field(default_factory=_default_primary)
    fallback: ProviderSettings = field(default_factory=_default_fallback)
    direct_token_ceiling: int = DIRECT_TOKEN_CEILING
    chunk_token_ceiling: int = CHUNK_TOKEN_CEILING
    temperature: float = 0.3
    top_p: float = 0.9
    max_output_tokens: int = 4000
    reduce_max_tokens: int = 3000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SummarizerConfig":
        """
        Build configuration from environment variables.

        Reads GROQ_API_KEY, OPENAI_API_KEY, GROQ_API_BASE, OPENAI_API_BASE,
        MEETBRIEF_PRIMARY_MODEL, MEETBRIEF_FALLBACK_MODEL and
        MEETBRIEF_REQUEST_TIMEOUT. Unset variables keep their defaults.

        Raises:
            ConfigError: If MEETBRIEF_REQUEST_TIMEOUT is not a positive number
        """
        env = os.environ if environ is None else environ

        primary = _default_primary()
        primary.api_key = env.get("GROQ_API_KEY") or None
        primary.base_url = env.get("GROQ_API_BASE") or GROQ_API_BASE
        primary.model = env.get("MEETBRIEF_PRIMARY_MODEL") or primary.model

        fallback = _default_fallback()
        fallback.api_key = env.get("OPENAI_API_KEY") or None
        fallback.base_url = env.get("OPENAI_API_BASE") or None
        fallback.model = env.get("MEETBRIEF_FALLBACK_MODEL") or fallback.model

        raw_timeout = env.get("MEETBRIEF_REQUEST_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(
                    f"MEETBRIEF_REQUEST_TIMEOUT must be a number, got: {raw_timeout!r}"
                ) from e
            if timeout <= 0:
                raise ConfigError("MEETBRIEF_REQUEST_TIMEOUT must be greater than zero")
            primary.timeout = timeout
            fallback.timeout = timeout

        return cls(primary=primary, fallback=fallback)


@dataclass
class ConfigStatus:
    """Which providers have credentials."""

    primary: bool
    fallback: bool

    @property
    def has_at_least_one(self) -> bool:
        return self.primary or self.fallback


def validate_config(config: SummarizerConfig) -> ConfigStatus:
    """Report which providers have an API key configured."""
    return ConfigStatus(
        primary=config.primary.is_configured,
        fallback=config.fallback.is_configured,
    )
