from enum import Enum
from typing import Optional, Protocol
import math
import numpy as np


class SpeechEvent(Enum):
    START = "start"
    SILENCE = "silence"


class FrameClassifier(Protocol):
    def is_speech(self, frame: np.ndarray) -> bool: ...


def rms_percent(frame: np.ndarray) -> float:
    """int16 フレームの RMS をフルスケールに対する%で返す"""
    if frame.size == 0:
        return 0.0
    x = frame.astype(np.float32) / 32768.0
    return 100.0 * math.sqrt(float((x * x).mean()))


class EnergyClassifier:
    """Fixed-threshold classifier: speech when the frame RMS exceeds ``threshold`` % of full scale."""

    def __init__(self, threshold: float = 0.5):
        self.threshold = threshold

    def is_speech(self, frame: np.ndarray) -> bool:
        return rms_percent(frame) > self.threshold


class WebRtcClassifier:
    def __init__(self, sample_rate: int, aggressiveness: int = 2):
        # C拡張なので使う時だけ読み込む
        import webrtcvad

        self._vad = webrtcvad.Vad(aggressiveness)
        self._sample_rate = sample_rate

    def is_speech(self, frame: np.ndarray) -> bool:
        mono = frame if frame.ndim == 1 else frame[:, 0]
        return self._vad.is_speech(mono.astype(np.int16).tobytes(), sample_rate=self._sample_rate)


class SilenceMonitor:
    """Turns a stream of audio frames into START / SILENCE events.

    START fires on the first speech frame after a quiet stretch. SILENCE fires
    every time ``silence_seconds`` worth of consecutive quiet frames has gone
    by, whether or not speech was heard before; deciding what to do with an
    early SILENCE is the detector's job.
    """

    def __init__(self, classifier: FrameClassifier, silence_seconds: float, frame_ms: int):
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive")
        self.classifier = classifier
        self.silence_frames = max(1, int(round(silence_seconds * 1000 / frame_ms)))
        self._in_speech = False
        self._quiet_frames = 0

    def feed(self, frame: np.ndarray) -> Optional[SpeechEvent]:
        if self.classifier.is_speech(frame):
            self._quiet_frames = 0
            if not self._in_speech:
                self._in_speech = True
                return SpeechEvent.START
            return None

        self._quiet_frames += 1
        if self._quiet_frames >= self.silence_frames:
            self._quiet_frames = 0
            self._in_speech = False
            return SpeechEvent.SILENCE
        return None


def build_classifier(kind: str, threshold: float, sample_rate: int, aggressiveness: int) -> FrameClassifier:
    if kind == "energy":
        return EnergyClassifier(threshold)
    if kind == "webrtc":
        return WebRtcClassifier(sample_rate, aggressiveness)
    raise ValueError(f"unknown speech classifier: {kind!r} (expected 'energy' or 'webrtc')")
