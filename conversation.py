from audio import recorder
from pipeline.conversation import process_artifact
from services.chat_client import ChatClient
from services.transcription_client import TranscriptionClient
from logging_config import setup_logging
from typing import Optional
import config
import logging

logger = logging.getLogger(__name__)


def run(settings: Optional[config.Settings] = None) -> int:
    settings = settings or config.load_config()
    transcriber = TranscriptionClient(settings)
    chat = ChatClient(settings, model=settings.cli_chat_model)

    try:
        # 1) 発話を検出して録音
        wav_in = recorder.record_utterance(settings)
        # 2) 文字起こし → 3) 返答
        result = process_artifact(
            wav_in,
            transcriber,
            chat,
            instruction=settings.system_prompt,
            on_transcription=lambda text: logger.info(f"Transcription: {text}"),
        )
    except KeyboardInterrupt:
        logger.info("Ctrl+C received, exiting...")
        return 130
    except Exception as e:
        logger.error(f"Error: {e}")
        return 1

    logger.info(f"ChatGPT Response: {result.response}")
    return 0


def main() -> int:
    settings = config.load_config()
    setup_logging(settings.log_path, settings.log_level)
    return run(settings)


if __name__ == "__main__":
    raise SystemExit(main())
