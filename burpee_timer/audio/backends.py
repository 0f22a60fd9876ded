"""Audio and speech output used by the cue dispatchers."""

from __future__ import annotations

import sys
import time
from typing import Callable, Protocol

from burpee_timer.cues.manifest import CalloutClip


# Rough speaking speed at rate 1.0, including the pause after a word.
SECONDS_PER_WORD = 0.4
MIN_UTTERANCE_SEC = 0.25


class AudioBackend(Protocol):
    def play_tone(self, frequency_hz: float, duration_ms: float, *, delay_ms: float = 0) -> None: ...

    def speak(
        self,
        text: str,
        *,
        rate: float = 1.2,
        pitch: float = 1.0,
        volume: float = 1.0,
    ) -> None: ...

    def cancel_speech(self) -> None: ...

    def is_speaking(self) -> bool: ...

    def play_clip(self, clip: CalloutClip) -> bool: ...


def estimate_speech_sec(text: str, rate: float = 1.0) -> float:
    words = max(1, len(text.split()))
    return max(MIN_UTTERANCE_SEC, words * SECONDS_PER_WORD / max(rate, 0.1))


class TerminalAudio:
    """Prints cues to stdout; optionally rings the terminal bell on tones."""

    def __init__(
        self,
        now: Callable[[], float] = time.monotonic,
        bell: bool = False,
    ) -> None:
        self._now = now
        self._bell = bell
        self._origin = now()
        self._speaking_text: str | None = None
        self._speaking_until = 0.0

    def play_tone(self, frequency_hz: float, duration_ms: float, *, delay_ms: float = 0) -> None:
        offset = f" +{delay_ms:.0f}ms" if delay_ms else ""
        self._emit(f"TONE {frequency_hz:.0f}Hz {duration_ms:.0f}ms{offset}")
        if self._bell:
            sys.stdout.write("\a")
            sys.stdout.flush()

    def speak(
        self,
        text: str,
        *,
        rate: float = 1.2,
        pitch: float = 1.0,
        volume: float = 1.0,
    ) -> None:
        self._speaking_text = text
        self._speaking_until = self._now() + estimate_speech_sec(text, rate)
        self._emit(f"SAY  {text!r} (rate={rate:g}, pitch={pitch:g})")

    def cancel_speech(self) -> None:
        self._speaking_text = None
        self._speaking_until = 0.0

    def is_speaking(self) -> bool:
        return self._speaking_text is not None and self._now() < self._speaking_until

    def play_clip(self, clip: CalloutClip) -> bool:
        # No audio device here; the dispatcher falls back to speech.
        return False

    def _emit(self, message: str) -> None:
        print(f"[{self._now() - self._origin:8.2f}s] {message}")
