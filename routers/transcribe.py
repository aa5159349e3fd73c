"""Audio upload endpoint: transcribe an upload and reply as a simulated chat."""

from pathlib import Path
from typing import Annotated, Optional, Union
import logging
import os
import shutil
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from exceptions import UploadValidationError
from pipeline.conversation import discard_artifact, process_artifact
from pipeline.prompts import build_viewer_instruction
from routers.dependencies import SettingsDep, get_chat_client, get_transcriber
from services.chat_client import ChatClient
from services.transcription_client import TranscriptionClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["transcribe"])

TranscriberDep = Annotated[TranscriptionClient, Depends(get_transcriber)]
ChatDep = Annotated[ChatClient, Depends(get_chat_client)]


class TranscribeResponse(BaseModel):
    transcription: str
    response: str


class ErrorResponse(BaseModel):
    error: str


def parse_viewers(raw: Optional[str]) -> int:
    """Parses the ``viewers`` form field; defaults to 1 when omitted."""
    if raw is None or raw.strip() == "":
        return 1
    try:
        viewers = int(raw.strip())
    except ValueError:
        raise UploadValidationError("viewers must be a positive integer")
    if viewers < 1:
        raise UploadValidationError("viewers must be a positive integer")
    return viewers


def upload_path_for(upload_dir: Union[str, Path], filename: Optional[str]) -> Path:
    # ファイル名ではなくリクエストごとのUUIDで保存先を決める（同名アップロードの衝突防止）
    suffix = Path(filename or "").suffix or ".wav"
    return Path(upload_dir) / f"{uuid.uuid4().hex}{suffix}"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/transcribe",
    response_model=TranscribeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def transcribe(
    settings: SettingsDep,
    transcriber: TranscriberDep,
    chat: ChatDep,
    audio: Optional[UploadFile] = File(None),
    viewers: Optional[str] = Form(None),
):
    if audio is None:
        return _error(400, "Audio file is missing")
    try:
        viewer_count = parse_viewers(viewers)
    except UploadValidationError as e:
        return _error(400, str(e))

    audio_path = upload_path_for(settings.upload_dir, audio.filename)
    logger.info(f"Received upload: name={audio.filename} saved_as={audio_path.name} viewers={viewer_count}")

    try:
        os.makedirs(audio_path.parent, exist_ok=True)
        with open(audio_path, "wb") as f:
            shutil.copyfileobj(audio.file, f)
    except OSError as e:
        logger.error(f"[upload] write failed: {e!r}")
        if audio_path.exists():
            discard_artifact(audio_path)
        return _error(500, str(e))

    try:
        result = process_artifact(
            audio_path,
            transcriber,
            chat,
            instruction=build_viewer_instruction(viewer_count),
        )
    except Exception as e:
        logger.error(f"[transcribe] pipeline failed: {e}")
        return _error(500, str(e))

    return TranscribeResponse(transcription=result.transcription, response=result.response)
