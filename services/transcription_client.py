from pathlib import Path
from typing import Union
import logging
import requests

from config import Settings
from exceptions import TranscriptionError
from services.openai_http import auth_headers, describe_error

logger = logging.getLogger(__name__)


class TranscriptionClient:
    """Sends one audio file to the OpenAI-compatible transcription endpoint.

    A single attempt is made per call. The caller owns the audio file and is
    responsible for deleting it whatever the outcome.
    """

    def __init__(self, settings: Settings):
        self._url = f"{settings.openai_base_url}/audio/transcriptions"
        self._api_key = settings.openai_api_key
        self._model = settings.transcription_model
        self._timeout = settings.request_timeout

    def transcribe(self, audio_path: Union[str, Path]) -> str:
        audio_path = Path(audio_path)
        logger.info(f"transcribe ready... file={audio_path.name} model={self._model}")
        try:
            with open(audio_path, "rb") as f:
                r = requests.post(
                    self._url,
                    headers=auth_headers(self._api_key),
                    files={"file": (audio_path.name, f, "audio/wav")},
                    data={"model": self._model},
                    timeout=self._timeout,
                )
            r.raise_for_status()
            text = r.json()["text"]
        except (OSError, requests.RequestException) as e:
            logger.error(f"[transcribe] request failed: {e!r}")
            raise TranscriptionError(audio_path.name, describe_error(e), e) from e
        except (ValueError, KeyError, TypeError) as e:
            raise TranscriptionError(
                audio_path.name, f"Malformed transcription response: {e!r}", e
            ) from e

        text = (text or "").strip()
        logger.info(f"transcribe_result: {text}")
        return text
