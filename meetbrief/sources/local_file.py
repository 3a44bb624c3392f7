"""Local file transcript loading."""

import sys
from dataclasses import dataclass
from pathlib import Path

SUPPORTED_SUFFIXES = {".txt", ".md"}


@dataclass
class LocalTranscriptResult:
    """Result of local file load."""

    text: str
    file_path: Path | None
    title: str


def load_local_transcript(source: str | Path, title: str | None = None) -> LocalTranscriptResult:
    """
    Load transcript text from a .txt/.md file, or from stdin when source is "-".

    Raises:
        FileNotFoundError: File doesn't exist
        ValueError: Unsupported file type
    """
    if str(source) == "-":
        return LocalTranscriptResult(text=sys.stdin.read(), file_path=None, title=title or "stdin")

    file_path = Path(source)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Expected .txt or .md file, got: {file_path.suffix or 'no extension'}")

    text = file_path.read_text(encoding="utf-8")
    resolved_title = title or file_path.stem

    return LocalTranscriptResult(
        text=text,
        file_path=file_path,
        title=resolved_title,
    )
