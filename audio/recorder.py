from pathlib import Path
from typing import Iterator, Optional, Union
import logging
import queue

import numpy as np

from audio.detector import SpeechDetector
from audio.silence import SilenceMonitor, build_classifier
from config import Settings
from exceptions import AudioCaptureError

logger = logging.getLogger(__name__)

_STREAM_CLOSED = None


def _sounddevice():
    # PortAudio が無い環境でも import だけは通るように遅延読み込み
    try:
        import sounddevice as sd
    except OSError as e:
        raise AudioCaptureError(f"PortAudio is not available: {e}", e) from e
    return sd


def resolve_input_device(selector: Optional[str]) -> Optional[Union[int, str]]:
    """INPUT_DEVICE を数字ならそのまま、名前なら部分一致でデバイス番号に解決する"""
    if not selector:
        return None
    try:
        return int(selector)
    except ValueError:
        pass

    sd = _sounddevice()
    for i, d in enumerate(sd.query_devices()):
        if (d.get("max_input_channels", 0) or 0) >= 1 and selector in d["name"]:
            return i
    raise AudioCaptureError(f"no input device matches {selector!r}")


class MicrophoneStream:
    """Reads int16 frames of ``frame_ms`` from the microphone through a queue."""

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        frame_ms: int = 20,
        device: Optional[Union[int, str]] = None,
    ):
        self.sample_rate = sample_rate
        self.channels = channels
        self.frame_len = int(sample_rate * frame_ms / 1000)
        self.device = device
        self._queue: "queue.Queue[Optional[np.ndarray]]" = queue.Queue()
        self._stream = None

    def _callback(self, indata, frames, time_info, status):
        if status:
            logger.warning(f"[mic] status={status}")
        self._queue.put(indata.copy())

    def _finished(self):
        self._queue.put(_STREAM_CLOSED)

    def __enter__(self) -> "MicrophoneStream":
        sd = _sounddevice()
        try:
            self._stream = sd.InputStream(
                device=self.device,
                channels=self.channels,
                samplerate=self.sample_rate,
                dtype="int16",
                blocksize=self.frame_len,
                callback=self._callback,
                finished_callback=self._finished,
            )
            self._stream.start()
        except Exception as e:
            raise AudioCaptureError(f"failed to open microphone: {e}", e) from e
        logger.info(
            f"[mic] device={self.device} rate={self.sample_rate} channels={self.channels}"
        )
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._stream is not None:
            # finished_callback の sentinel は読まれないまま捨てる
            self._stream.stop()
            self._stream.close()
            self._stream = None
        return False

    def frames(self) -> Iterator[np.ndarray]:
        while True:
            frame = self._queue.get()
            if frame is _STREAM_CLOSED:
                raise AudioCaptureError("microphone stream closed unexpectedly")
            yield frame


def record_utterance(settings: Settings) -> Path:
    classifier = build_classifier(
        settings.speech_classifier,
        settings.silence_threshold,
        settings.sample_rate,
        settings.vad_aggressiveness,
    )
    monitor = SilenceMonitor(classifier, settings.silence_seconds, settings.frame_ms)
    detector = SpeechDetector(
        monitor,
        settings.recording_path,
        sample_rate=settings.sample_rate,
        channels=settings.channels,
        pre_roll_frames=settings.pre_roll_frames,
    )

    mic = MicrophoneStream(
        sample_rate=settings.sample_rate,
        channels=settings.channels,
        frame_ms=settings.frame_ms,
        device=resolve_input_device(settings.input_device),
    )
    with mic:
        logger.info("Listening for speech...")
        return detector.detect(mic.frames())
