"""Direct and chunked (map-reduce) summarization with provider fallback."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from ..config import ConfigStatus, SummarizerConfig, validate_config
from ..errors import (
    ChunkProcessingError,
    InputError,
    PipelineError,
    ProviderError,
    ProviderErrorKind,
    ReduceError,
)
from ..providers import CompletionProvider, OpenAICompatibleProvider, ProviderRole
from .chunking import TextChunk, chunk_text, estimate_token_count
from .prompts import CHUNK_SYSTEM, SUMMARY_SYSTEM, build_prompt, build_reduce_prompt
from .schema import SummaryResult

logger = logging.getLogger(__name__)

PLACEHOLDER = "[This section could not be processed]"


@dataclass
class ProviderStatus:
    """Configuration and reachability of both providers."""

    configured: ConfigStatus
    reachable: dict[ProviderRole, bool] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class Summarizer:
    """
    Summarize meeting transcripts with a primary and a fallback provider.

    Short transcripts go to one call. Long ones are chunked, each chunk is
    summarized on its own, and a final call merges the chunk summaries.
    """

    def __init__(
        self,
        config: SummarizerConfig | None = None,
        primary: CompletionProvider | None = None,
        fallback: CompletionProvider | None = None,
    ) -> None:
        self.config = config or SummarizerConfig.from_env()
        self.primary = primary or OpenAICompatibleProvider(self.config.primary)
        self.fallback = fallback or OpenAICompatibleProvider(self.config.fallback)

    def _provider(self, role: ProviderRole) -> CompletionProvider:
        return self.primary if role is ProviderRole.PRIMARY else self.fallback

    def _chunk_max_tokens(self, role: ProviderRole) -> int:
        settings = self.config.primary if role is ProviderRole.PRIMARY else self.config.fallback
        return settings.chunk_max_tokens

    def call_provider(
        self,
        role: ProviderRole,
        text: str,
        custom_prompt: str | None = None,
        is_chunk: bool = False,
        chunk_index: int = 0,
        total_chunks: int = 1,
        max_output_tokens: int | None = None,
    ) -> str:
        """
        Summarize one unit of text (a whole transcript or one chunk) with one provider.

        Args:
            role: Which provider to call
            text: Transcript or chunk text
            custom_prompt: Instructions replacing the default summary prompt
            is_chunk: Whether text is one part of a longer transcript
            chunk_index: 0-based position of the chunk
            total_chunks: Number of chunks in the transcript
            max_output_tokens: Output limit; defaults depend on is_chunk and role

        Returns:
            Raw model output

        Raises:
            ProviderError: If the call fails
        """
        if max_output_tokens is None:
            max_output_tokens = (
                self._chunk_max_tokens(role) if is_chunk else self.config.max_output_tokens
            )

        provider = self._provider(role)
        logger.debug("Calling %s (%s)", provider.tag, role.value)
        return provider.complete(
            CHUNK_SYSTEM if is_chunk else SUMMARY_SYSTEM,
            build_prompt(text, custom_prompt, is_chunk, chunk_index, total_chunks),
            max_tokens=max_output_tokens,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
        )

    def _with_fallback(
        self, call: Callable[[ProviderRole], str]
    ) -> tuple[str, CompletionProvider]:
        """
        Run call against the primary, then the fallback provider.

        Any exception from a provider counts as that provider failing;
        anything that is not a ProviderError is recorded as UNKNOWN.

        Raises:
            PipelineError: If both providers fail, carrying both errors
        """
        failures: list[ProviderError] = []

        for role in (ProviderRole.PRIMARY, ProviderRole.FALLBACK):
            provider = self._provider(role)
            try:
                return call(role), provider
            except ProviderError as e:
                logger.warning("%s provider failed: %s", role.value, e)
                failures.append(e)
            except Exception as e:
                logger.warning(
                    "%s provider raised %s: %s", role.value, type(e).__name__, e, exc_info=True
                )
                failures.append(
                    ProviderError(
                        provider.name,
                        ProviderErrorKind.UNKNOWN,
                        f"unexpected {type(e).__name__}: {e}",
                    )
                )

        raise PipelineError(failures)

    def summarize(
        self,
        transcript: str,
        custom_prompt: str | None = None,
        max_output_tokens: int | None = None,
    ) -> SummaryResult:
        """
        Summarize a transcript.

        Args:
            transcript: Full transcript text
            custom_prompt: Instructions replacing the default summary prompt
            max_output_tokens: Output limit for the direct path

        Raises:
            InputError: If the transcript is empty
            PipelineError: If both providers fail on the direct path
        """
        start = time.monotonic()

        if not transcript.strip():
            raise InputError("Transcript is empty")

        estimated = estimate_token_count(transcript)
        logger.info("Transcript: %d chars, ~%d tokens", len(transcript), estimated)

        if estimated <= self.config.direct_token_ceiling:
            logger.info("Using direct summarization")
            return self._summarize_direct(transcript, custom_prompt, max_output_tokens, start)

        chunks = chunk_text(transcript, self.config.chunk_token_ceiling)
        logger.info("Large transcript, split into %d chunks", len(chunks))
        return self._summarize_chunks(chunks, custom_prompt, start)

    def _summarize_direct(
        self,
        transcript: str,
        custom_prompt: str | None,
        max_output_tokens: int | None,
        start: float,
    ) -> SummaryResult:
        summary, provider = self._with_fallback(
            lambda role: self.call_provider(
                role, transcript, custom_prompt, max_output_tokens=max_output_tokens
            )
        )
        if provider is self.fallback:
            logger.info("Summary produced by fallback provider %s", provider.tag)

        return SummaryResult(
            summary=summary,
            model=provider.tag,
            token_count=estimate_token_count(summary),
            processing_time_ms=_elapsed_ms(start),
            chunk_count=1,
        )

    def _summarize_chunk(
        self, chunk: TextChunk, total_chunks: int, custom_prompt: str | None
    ) -> tuple[str, CompletionProvider]:
        """
        Raises:
            ChunkProcessingError: If both providers fail for this chunk
        """
        try:
            return self._with_fallback(
                lambda role: self.call_provider(
                    role,
                    chunk.text,
                    custom_prompt,
                    is_chunk=True,
                    chunk_index=chunk.index,
                    total_chunks=total_chunks,
                )
            )
        except PipelineError as e:
            raise ChunkProcessingError(chunk.index, e.failures) from e

    def _reduce(self, combined: str) -> tuple[str, CompletionProvider]:
        """
        Raises:
            ReduceError: If both providers fail
        """
        prompt = build_reduce_prompt(combined)
        try:
            return self._with_fallback(
                lambda role: self._provider(role).complete(
                    "",
                    prompt,
                    max_tokens=self.config.reduce_max_tokens,
                    temperature=self.config.temperature,
                    top_p=self.config.top_p,
                )
            )
        except PipelineError as e:
            raise ReduceError(e.failures) from e

    def _summarize_chunks(
        self, chunks: list[TextChunk], custom_prompt: str | None, start: float
    ) -> SummaryResult:
        chunk_summaries: list[str] = []
        total_tokens = 0
        last_provider: CompletionProvider | None = None

        for chunk in chunks:
            label = f"Chunk {chunk.index + 1}:"
            try:
                summary, provider = self._summarize_chunk(chunk, len(chunks), custom_prompt)
            except ChunkProcessingError as e:
                logger.error("%s", e)
                chunk_summaries.append(f"{label} {PLACEHOLDER}")
                continue

            chunk_summaries.append(f"{label}\n{summary}")
            total_tokens += estimate_token_count(summary)
            last_provider = provider
            logger.info("Chunk %d/%d summarized by %s", chunk.index + 1, len(chunks), provider.tag)

        combined = "\n\n".join(chunk_summaries)

        try:
            final, provider = self._reduce(combined)
        except ReduceError as e:
            logger.error("%s; returning chunk summaries", e)
            tag = (last_provider or self.primary).tag
            return SummaryResult(
                summary=combined,
                model=f"{tag}-chunked-fallback",
                token_count=total_tokens,
                processing_time_ms=_elapsed_ms(start),
                chunk_count=len(chunks),
            )

        final = final or combined
        return SummaryResult(
            summary=final,
            model=f"{provider.tag}-chunked",
            token_count=estimate_token_count(final),
            processing_time_ms=_elapsed_ms(start),
            chunk_count=len(chunks),
        )

    def status(self, probe: bool = True) -> ProviderStatus:
        """
        Report which providers are configured and, optionally, reachable.

        Probing sends one tiny request to each configured provider.
        """
        configured = validate_config(self.config)
        result = ProviderStatus(configured=configured)
        primary_name, fallback_name = self.primary.name, self.fallback.name

        if probe:
            for role in (ProviderRole.PRIMARY, ProviderRole.FALLBACK):
                provider = self._provider(role)
                result.reachable[role] = provider.is_configured() and provider.probe()

        if not configured.has_at_least_one:
            result.recommendations.append(
                f"No API keys are configured. Set a key for {primary_name} or {fallback_name}."
            )
        elif not configured.primary:
            result.recommendations.append(
                f"{primary_name} is not configured. Only {fallback_name} will be available."
            )
        elif not configured.fallback:
            result.recommendations.append(
                f"{fallback_name} is not configured. Only {primary_name} will be available."
            )

        if probe and configured.has_at_least_one and not any(result.reachable.values()):
            result.recommendations.append(
                "API keys are configured but connections failed. "
                "Check API key validity and network access."
            )

        return result


def summarize_transcript(
    transcript: str,
    custom_prompt: str | None = None,
    max_output_tokens: int | None = None,
    config: SummarizerConfig | None = None,
) -> SummaryResult:
    """Summarize a transcript with providers built from config (or the environment)."""
    return Summarizer(config).summarize(transcript, custom_prompt, max_output_tokens)
