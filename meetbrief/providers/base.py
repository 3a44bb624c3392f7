"""Completion provider interface."""

from enum import Enum
from typing import Protocol, runtime_checkable


class ProviderRole(str, Enum):
    """Position of a provider in the fallback order."""

    PRIMARY = "primary"
    FALLBACK = "fallback"


@runtime_checkable
class CompletionProvider(Protocol):
    """A chat-completion endpoint the pipeline can call."""

    name: str
    model: str

    @property
    def tag(self) -> str:
        """Identifier recorded on results, e.g. ``groq-llama-3.3-70b-versatile``."""
        ...

    def is_configured(self) -> bool: ...

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
        Run one completion and return the generated text.

        Raises:
            ProviderError: If the call fails for any reason
        """
        ...

    def probe(self) -> bool: ...
