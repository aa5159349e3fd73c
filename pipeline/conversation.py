from pathlib import Path
from typing import Callable, Optional, Union
import logging
import os

from pydantic import BaseModel

from services.chat_client import ChatClient
from services.transcription_client import TranscriptionClient

logger = logging.getLogger(__name__)


class PipelineResult(BaseModel):
    transcription: str
    response: str


def discard_artifact(path: Union[str, Path]) -> None:
    """Deletes the audio artifact. A failure is logged, never raised, so it cannot hide the original error."""
    try:
        os.remove(path)
        logger.info(f"removed artifact: {path}")
    except OSError as e:
        logger.warning(f"[cleanup] could not remove {path}: {e!r}")


def process_artifact(
    path: Union[str, Path],
    transcriber: TranscriptionClient,
    chat: ChatClient,
    instruction: Optional[str] = None,
    on_transcription: Optional[Callable[[str], None]] = None,
) -> PipelineResult:
    """
    1) 音声ファイルを文字起こし
    2) 文字をチャットモデルに渡して返答をもらう
    3) 成功でも失敗でも音声ファイルを消す
    """
    try:
        text = transcriber.transcribe(path)
        if on_transcription is not None:
            on_transcription(text)

        reply = chat.complete(text, instruction)
        return PipelineResult(transcription=text, response=reply)
    finally:
        discard_artifact(path)
