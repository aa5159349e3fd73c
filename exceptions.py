"""Errors raised along the audio → transcription → chat pipeline."""

from typing import Optional


class VoiceRelayError(Exception):
    """Base class for every pipeline failure."""


class AudioCaptureError(VoiceRelayError, IOError):
    """Raised when the microphone stream or the recording file fails."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class TranscriptionError(VoiceRelayError):
    """Raised when the transcription service call fails."""

    def __init__(self, file_name: str, message: str, cause: Optional[Exception] = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(message)


class ResponseError(VoiceRelayError):
    """Raised when the chat-completion service call fails."""

    def __init__(self, model: str, message: str, cause: Optional[Exception] = None):
        self.model = model
        self.cause = cause
        super().__init__(message)


class UploadValidationError(VoiceRelayError):
    """Raised when an upload request is missing or carries invalid fields."""
