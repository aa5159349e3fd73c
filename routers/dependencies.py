"""FastAPI dependency injection for the transcribe route."""

from typing import Annotated

from fastapi import Depends, Request

from config import Settings
from services.chat_client import ChatClient
from services.transcription_client import TranscriptionClient


def get_settings(request: Request) -> Settings:
    """Returns the settings the application was created with."""
    return request.app.state.settings


SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_transcriber(settings: SettingsDep) -> TranscriptionClient:
    return TranscriptionClient(settings)


def get_chat_client(settings: SettingsDep) -> ChatClient:
    return ChatClient(settings, model=settings.api_chat_model)
