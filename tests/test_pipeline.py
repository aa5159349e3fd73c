"""Tests for the transcribe → respond → cleanup orchestrator."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from exceptions import ResponseError, TranscriptionError
from pipeline.conversation import PipelineResult, discard_artifact, process_artifact


def test_success_returns_both_texts_and_removes_artifact(artifact: Path, fake_transcriber, fake_chat) -> None:
    seen = []

    result = process_artifact(
        artifact, fake_transcriber, fake_chat, instruction="be brief", on_transcription=seen.append
    )

    assert result == PipelineResult(transcription="hello chat", response="viewer1: hi|viewer2: hey")
    assert seen == ["hello chat"]
    assert fake_chat.calls == [("hello chat", "be brief")]
    assert fake_transcriber.existed == [True]
    assert not artifact.exists()


def test_transcription_failure_skips_chat_and_removes_artifact(artifact: Path, failing_transcriber, fake_chat) -> None:
    with pytest.raises(TranscriptionError, match="Invalid file format."):
        process_artifact(artifact, failing_transcriber, fake_chat)

    assert fake_chat.calls == []
    assert not artifact.exists()


def test_response_failure_removes_artifact(artifact: Path, fake_transcriber, failing_chat) -> None:
    with pytest.raises(ResponseError, match="Rate limit reached"):
        process_artifact(artifact, fake_transcriber, failing_chat)

    assert not artifact.exists()


def test_cleanup_failure_does_not_mask_original_error(artifact: Path, fake_chat, caplog) -> None:
    class DeletingTranscriber:
        def transcribe(self, audio_path):
            os.remove(audio_path)
            raise TranscriptionError("artifact.wav", "upstream timeout")

    caplog.set_level(logging.WARNING)
    with pytest.raises(TranscriptionError, match="upstream timeout"):
        process_artifact(artifact, DeletingTranscriber(), fake_chat)

    assert "could not remove" in caplog.text


def test_discard_missing_file_is_logged(tmp_path: Path, caplog) -> None:
    caplog.set_level(logging.WARNING)
    discard_artifact(tmp_path / "gone.wav")
    assert "could not remove" in caplog.text
