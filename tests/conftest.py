from __future__ import annotations

from typing import Callable

import pytest

from burpee_timer.cues.dispatcher import CueDispatcher
from burpee_timer.cues.manifest import CalloutClip


class RecordingAudio:
    def __init__(self) -> None:
        self.events: list[tuple[object, ...]] = []
        self.speaking = False
        self.clips_ok = True

    def play_tone(self, frequency_hz: float, duration_ms: float, *, delay_ms: float = 0) -> None:
        self.events.append(("tone", frequency_hz, duration_ms, delay_ms))

    def speak(
        self,
        text: str,
        *,
        rate: float = 1.2,
        pitch: float = 1.0,
        volume: float = 1.0,
    ) -> None:
        self.events.append(("speak", text))
        self.speaking = True

    def cancel_speech(self) -> None:
        self.events.append(("cancel",))
        self.speaking = False

    def is_speaking(self) -> bool:
        return self.speaking

    def play_clip(self, clip: CalloutClip) -> bool:
        self.events.append(("clip", clip.kind, clip.value))
        return self.clips_ok

    def of_kind(self, kind: str) -> list[tuple[object, ...]]:
        return [event for event in self.events if event[0] == kind]


class RecordingDispatcher(CueDispatcher):
    def __init__(self) -> None:
        self.cues: list[tuple[str, int | None]] = []
        self.clock: Callable[[], float] | None = None
        self.stamps: list[tuple[str, float]] = []

    def get_ready(self, seconds: int) -> None:
        self._record("get_ready", seconds)

    def countdown(self, remaining: int) -> None:
        self._record("countdown", remaining)

    def go(self) -> None:
        self._record("go", None)

    def count(self, count: int) -> None:
        self._record("count", count)

    def rep(self, rep: int) -> None:
        self._record("rep", rep)

    def complete(self) -> None:
        self._record("complete", None)

    def cancel(self) -> None:
        self._record("cancel", None)

    def names(self) -> list[str]:
        return [name for name, _ in self.cues]

    def times_of(self, name: str) -> list[float]:
        return [at for cue, at in self.stamps if cue == name]

    def _record(self, name: str, value: int | None) -> None:
        self.cues.append((name, value))
        if self.clock is not None:
            self.stamps.append((name, self.clock()))


@pytest.fixture
def audio() -> RecordingAudio:
    return RecordingAudio()


@pytest.fixture
def cues() -> RecordingDispatcher:
    return RecordingDispatcher()
