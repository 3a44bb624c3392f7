"""Tests for transcript loading."""

import io
from pathlib import Path

import pytest

from meetbrief.sources import load_local_transcript


class TestLoadLocalTranscript:
    """Tests for local file loading."""

    def test_loads_text_file(self, tmp_path: Path) -> None:
        path = tmp_path / "standup.txt"
        path.write_text("Alice: shipped the fix.", encoding="utf-8")

        result = load_local_transcript(path)

        assert result.text == "Alice: shipped the fix."
        assert result.title == "standup"
        assert result.file_path == path

    def test_custom_title(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.md"
        path.write_text("Notes", encoding="utf-8")

        assert load_local_transcript(str(path), title="Weekly sync").title == "Weekly sync"

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            load_local_transcript(tmp_path / "missing.txt")

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "recording.mp3"
        path.write_bytes(b"\x00\x01")

        with pytest.raises(ValueError, match="Expected .txt or .md"):
            load_local_transcript(path)

    def test_stdin(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("From a pipe."))

        result = load_local_transcript("-")

        assert result.text == "From a pipe."
        assert result.file_path is None
        assert result.title == "stdin"
