"""Completion providers."""

from .base import CompletionProvider, ProviderRole
from .openai_compat import OpenAICompatibleProvider, classify_error

__all__ = [
    "CompletionProvider",
    "OpenAICompatibleProvider",
    "ProviderRole",
    "classify_error",
]
