"""Transcript sources."""

from .local_file import LocalTranscriptResult, load_local_transcript

__all__ = ["LocalTranscriptResult", "load_local_transcript"]
