from collections import deque
from enum import Enum
from pathlib import Path
from typing import Iterable, Tuple, Union
import logging
import os

import numpy as np
import soundfile as sf

from audio.silence import SilenceMonitor, SpeechEvent
from exceptions import AudioCaptureError

logger = logging.getLogger(__name__)


class DetectorState(Enum):
    IDLE = "idle"
    RECORDING = "recording"


def advance(state: DetectorState, event) -> Tuple[DetectorState, bool]:
    """Returns ``(next_state, resolved)`` for one event.

    Only RECORDING + SILENCE resolves. A SILENCE while IDLE, a second START,
    and ``None`` (no event for this frame) leave the state unchanged.
    """
    if event is SpeechEvent.START and state is DetectorState.IDLE:
        return DetectorState.RECORDING, False
    if event is SpeechEvent.SILENCE and state is DetectorState.RECORDING:
        return DetectorState.IDLE, True
    return state, False


class SpeechDetector:
    def __init__(
        self,
        monitor: SilenceMonitor,
        path: Union[str, Path],
        sample_rate: int = 16000,
        channels: int = 1,
        pre_roll_frames: int = 2,
    ):
        self.monitor = monitor
        self.path = Path(path)
        self.sample_rate = sample_rate
        self.channels = channels
        self.pre_roll_frames = pre_roll_frames

    def detect(self, frames: Iterable[np.ndarray]) -> Path:
        """Consumes frames until one utterance is complete and returns the WAV path.

        Frames are written to disk as they arrive while recording, preceded by
        the last ``pre_roll_frames`` idle frames so a quiet word onset is kept.
        The partial file is removed on every exit except success, Ctrl+C
        included; ordinary failures surface as AudioCaptureError.
        """
        state = DetectorState.IDLE
        pre_roll = deque(maxlen=self.pre_roll_frames)
        completed = False
        try:
            with sf.SoundFile(
                str(self.path),
                mode="w",
                samplerate=self.sample_rate,
                channels=self.channels,
                subtype="PCM_16",
                format="WAV",
            ) as wf:
                for frame in frames:
                    event = self.monitor.feed(frame)
                    previous = state
                    state, resolved = advance(state, event)

                    if previous is DetectorState.IDLE and state is DetectorState.RECORDING:
                        logger.info("[vad] ▶ start speech")
                        for buffered in pre_roll:
                            wf.write(buffered)
                        pre_roll.clear()

                    if state is DetectorState.RECORDING or resolved:
                        wf.write(frame)
                    elif self.pre_roll_frames > 0:
                        pre_roll.append(frame)

                    if resolved:
                        logger.info("[vad] ■ silence detected, stopping recording")
                        completed = True
                        return self.path
        except AudioCaptureError:
            raise
        except Exception as e:
            raise AudioCaptureError(f"audio capture failed: {e}", e) from e
        finally:
            if not completed:
                self._remove_partial()

        raise AudioCaptureError("audio stream ended before an utterance was detected")

    def _remove_partial(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
