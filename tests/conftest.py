"""Shared fixtures: settings rooted in a temp dir and fake service clients."""

from __future__ import annotations

from pathlib import Path

import pytest

from config import Settings
from exceptions import ResponseError, TranscriptionError


class FakeTranscriber:
    """Records every call and checks the artifact exists while it is being read."""

    def __init__(self, text: str = "hello chat", error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[Path] = []
        self.existed: list[bool] = []

    def transcribe(self, audio_path) -> str:
        path = Path(audio_path)
        self.calls.append(path)
        self.existed.append(path.exists())
        if self.error is not None:
            raise self.error
        return self.text


class FakeChat:
    def __init__(self, reply: str = "viewer1: hi|viewer2: hey", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    def complete(self, text: str, instruction: str | None = None) -> str:
        self.calls.append((text, instruction))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        openai_api_key="sk-test",
        openai_base_url="https://api.test/v1",
        upload_dir=str(tmp_path / "uploads"),
        recording_path=str(tmp_path / "detected_audio.wav"),
        log_path=str(tmp_path / "logs" / "app.log"),
    )


@pytest.fixture
def artifact(tmp_path: Path) -> Path:
    path = tmp_path / "artifact.wav"
    path.write_bytes(b"RIFF0000WAVEfmt ")
    return path


@pytest.fixture
def fake_transcriber() -> FakeTranscriber:
    return FakeTranscriber()


@pytest.fixture
def fake_chat() -> FakeChat:
    return FakeChat()


@pytest.fixture
def failing_transcriber() -> FakeTranscriber:
    return FakeTranscriber(error=TranscriptionError("artifact.wav", "Invalid file format."))


@pytest.fixture
def failing_chat() -> FakeChat:
    return FakeChat(error=ResponseError("gpt-4o-mini", "Rate limit reached"))
