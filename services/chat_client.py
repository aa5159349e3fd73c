from typing import Optional
import logging
import requests

from config import Settings
from exceptions import ResponseError
from services.openai_http import auth_headers, describe_error

logger = logging.getLogger(__name__)


class ChatClient:
    def __init__(self, settings: Settings, model: str):
        self._url = f"{settings.openai_base_url}/chat/completions"
        self._api_key = settings.openai_api_key
        self._timeout = settings.request_timeout
        self.model = model

    def complete(self, text: str, instruction: Optional[str] = None) -> str:
        # system指示はモードごと（CLIはなしでもOK）
        messages = []
        if instruction:
            messages.append({"role": "system", "content": instruction})
        messages.append({"role": "user", "content": text})
        payload = {"model": self.model, "messages": messages}

        try:
            r = requests.post(
                self._url,
                headers=auth_headers(self._api_key),
                json=payload,
                timeout=self._timeout,
            )
            r.raise_for_status()
            reply_text = r.json()["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            logger.error(f"[chat] request failed: {e!r}")
            raise ResponseError(self.model, describe_error(e), e) from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ResponseError(self.model, f"Malformed chat response: {e!r}", e) from e

        return reply_text or ""
