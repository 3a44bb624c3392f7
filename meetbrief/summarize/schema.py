"""Pydantic schema for summarization results."""

from pydantic import BaseModel, Field


class SummaryResult(BaseModel):
    """Final output of one pipeline run."""

    summary: str
    model: str
    token_count: int = Field(ge=0)
    processing_time_ms: int = Field(ge=0)
    chunk_count: int = Field(ge=1)
