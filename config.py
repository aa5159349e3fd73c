from dotenv import load_dotenv
from pathlib import Path
from typing import Optional
from pydantic import BaseModel
import os

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseModel, frozen=True):
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"
    transcription_model: str = "whisper-1"
    cli_chat_model: str = "gpt-3.5-turbo"
    api_chat_model: str = "gpt-4o-mini"
    request_timeout: float = 120.0
    health_timeout: float = 2.0

    # マイク入力 (16kHz mono)
    sample_rate: int = 16000
    channels: int = 1
    frame_ms: int = 20  # webrtcvad は 10/20/30 のみ
    silence_threshold: float = 0.5  # フルスケールに対する%
    silence_seconds: float = 2.0
    pre_roll_frames: int = 2  # 発話頭の取りこぼし防止
    speech_classifier: str = "energy"  # "energy" / "webrtc"
    vad_aggressiveness: int = 2
    input_device: Optional[str] = None
    recording_path: str = "detected_audio.wav"

    upload_dir: str = "uploads"
    system_prompt: Optional[str] = None

    log_path: str = "./app.log"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


def _read_system_prompt(path: str) -> Optional[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip() or None
    except FileNotFoundError:
        return None


def load_config() -> Settings:
    load_dotenv()

    system_prompt_path = os.getenv(
        "SYSTEM_PROMPT_PATH",
        str(BASE_DIR / "SYSTEM_PROMPT.md"),
    )
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_base_url=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        transcription_model=os.getenv("TRANSCRIPTION_MODEL", "whisper-1"),
        cli_chat_model=os.getenv("CLI_CHAT_MODEL", "gpt-3.5-turbo"),
        api_chat_model=os.getenv("API_CHAT_MODEL", "gpt-4o-mini"),
        request_timeout=float(os.getenv("REQUEST_TIMEOUT", "120")),
        health_timeout=float(os.getenv("HEALTH_TIMEOUT", "2.0")),
        sample_rate=int(os.getenv("SAMPLE_RATE", "16000")),
        channels=int(os.getenv("INPUT_CHANNELS", "1")),
        frame_ms=int(os.getenv("FRAME_MS", "20")),
        silence_threshold=float(os.getenv("SILENCE_THRESHOLD", "0.5")),
        silence_seconds=float(os.getenv("SILENCE_SECONDS", "2")),
        pre_roll_frames=int(os.getenv("PRE_ROLL_FRAMES", "2")),
        speech_classifier=os.getenv("SPEECH_CLASSIFIER", "energy"),
        vad_aggressiveness=int(os.getenv("VAD_AGGRESSIVENESS", "2")),
        input_device=os.getenv("INPUT_DEVICE") or None,
        recording_path=os.getenv("RECORDING_PATH", "detected_audio.wav"),
        upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        system_prompt=_read_system_prompt(system_prompt_path),
        log_path=os.getenv("LOG_PATH", "./app.log"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
