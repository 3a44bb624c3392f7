"""Exceptions raised by the summarization pipeline."""

from enum import Enum


class ProviderErrorKind(str, Enum):
    """Why a single provider call failed."""

    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    NOT_CONFIGURED = "not_configured"
    MODEL_UNAVAILABLE = "model_unavailable"
    UNKNOWN = "unknown"


class SummarizationError(Exception):
    """Base class for summarization failures."""


class ConfigError(SummarizationError):
    """Raised when configuration values are invalid."""


class InputError(SummarizationError):
    """Raised when the transcript is empty or whitespace only."""


class ProviderError(SummarizationError):
    """Raised when one call to one provider fails."""

    def __init__(self, provider: str, kind: ProviderErrorKind, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.kind = kind
        self.message = message


class ChunkProcessingError(SummarizationError):
    """Both providers failed for one chunk."""

    def __init__(self, chunk_index: int, failures: list[ProviderError]) -> None:
        causes = "; ".join(str(f) for f in failures)
        super().__init__(f"Chunk {chunk_index + 1} failed on every provider ({causes})")
        self.chunk_index = chunk_index
        self.failures = failures


class ReduceError(SummarizationError):
    """The consolidation call failed on every provider."""

    def __init__(self, failures: list[ProviderError]) -> None:
        causes = "; ".join(str(f) for f in failures)
        super().__init__(f"Final consolidation failed ({causes})")
        self.failures = failures


class PipelineError(SummarizationError):
    """Both providers failed on the direct path."""

    def __init__(self, failures: list[ProviderError]) -> None:
        causes = "; ".join(str(f) for f in failures)
        super().__init__(f"All providers failed: {causes}")
        self.failures = failures
