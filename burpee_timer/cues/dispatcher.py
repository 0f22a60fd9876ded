"""Cue dispatch: tone beeps or spoken callouts for workout events."""

from __future__ import annotations

from typing import Callable

from burpee_timer.audio.backends import AudioBackend
from burpee_timer.cues.manifest import CalloutClip, CalloutManifest
from burpee_timer.workout.pacing import count_callout


# (frequency Hz, duration ms) per cue type.
TONE_GET_READY = (880.0, 200.0)
TONE_COUNTDOWN = (440.0, 100.0)
TONE_GO = (1320.0, 300.0)
TONE_COUNT = (440.0, 100.0)
TONE_REP = (880.0, 150.0)
TONE_COMPLETE = ((1320.0, 300.0, 0.0), (1760.0, 300.0, 200.0))

MAX_CLIP_COUNT = 5


class CueDispatcher:
    """Fire-and-forget workout cues. Holds no session state."""

    def get_ready(self, seconds: int) -> None:
        raise NotImplementedError

    def countdown(self, remaining: int) -> None:
        raise NotImplementedError

    def go(self) -> None:
        raise NotImplementedError

    def count(self, count: int) -> None:
        raise NotImplementedError

    def rep(self, rep: int) -> None:
        raise NotImplementedError

    def complete(self) -> None:
        raise NotImplementedError

    def cancel(self) -> None:
        """Drop any pending output (used when the workout stops)."""


def _guarded(action: str, call: Callable[[], object]) -> object:
    try:
        return call()
    except Exception as exc:
        print(f"[CUE] Warning: {action} failed ({exc}). Continuing without it.")
        return None


class ToneCueDispatcher(CueDispatcher):
    def __init__(self, audio: AudioBackend) -> None:
        self._audio = audio

    def get_ready(self, seconds: int) -> None:
        self._tone(*TONE_GET_READY)

    def countdown(self, remaining: int) -> None:
        self._tone(*TONE_COUNTDOWN)

    def go(self) -> None:
        self._tone(*TONE_GO)

    def count(self, count: int) -> None:
        self._tone(*TONE_COUNT)

    def rep(self, rep: int) -> None:
        self._tone(*TONE_REP)

    def complete(self) -> None:
        for frequency, duration, delay in TONE_COMPLETE:
            self._tone(frequency, duration, delay)

    def _tone(self, frequency_hz: float, duration_ms: float, delay_ms: float = 0.0) -> None:
        _guarded(
            f"tone {frequency_hz:.0f}Hz",
            lambda: self._audio.play_tone(frequency_hz, duration_ms, delay_ms=delay_ms),
        )


class SpeechChannel:
    """At most one in-flight utterance; an identical repeat is not re-spoken."""

    def __init__(self, audio: AudioBackend) -> None:
        self._audio = audio
        self._last_text: str | None = None

    def say(self, text: str, *, rate: float = 1.2, pitch: float = 1.0, volume: float = 1.0) -> bool:
        if text == self._last_text and _guarded("speech status", self._audio.is_speaking):
            return False

        _guarded("speech cancel", self._audio.cancel_speech)
        self._last_text = text
        _guarded(
            f"speech {text!r}",
            lambda: self._audio.speak(text, rate=rate, pitch=pitch, volume=volume),
        )
        return True

    def cancel(self) -> None:
        self._last_text = None
        _guarded("speech cancel", self._audio.cancel_speech)


class VoiceCueDispatcher(CueDispatcher):
    def __init__(
        self,
        audio: AudioBackend,
        manifest: CalloutManifest | None = None,
        *,
        prefer_clips: bool = True,
        rate: float = 1.3,
        pitch: float = 1.0,
    ) -> None:
        self._audio = audio
        self._manifest = manifest
        self._prefer_clips = prefer_clips
        self._rate = rate
        self._pitch = pitch
        self._speech = SpeechChannel(audio)

    @property
    def clips_available(self) -> bool:
        return self._prefer_clips and self._manifest is not None

    def get_ready(self, seconds: int) -> None:
        self._speech.say(f"Get ready! Starting in {seconds}", rate=1.2)

    def countdown(self, remaining: int) -> None:
        self._speech.say(str(remaining), rate=self._rate)

    def go(self) -> None:
        self._speech.say("Go!", rate=self._rate, pitch=self._pitch * 1.2)

    def count(self, count: int) -> None:
        if count <= MAX_CLIP_COUNT and self._play_clip(self._count_clip(count)):
            return
        self._speech.say(count_callout(count), rate=self._rate, pitch=self._pitch)

    def rep(self, rep: int) -> None:
        if self._play_clip(self._rep_clip(rep)):
            return
        # Slightly higher pitch so rep numbers stand out from counts.
        self._speech.say(str(rep), rate=self._rate, pitch=self._pitch * 1.2)

    def complete(self) -> None:
        self._speech.say("Workout complete!", rate=1.0, pitch=1.1)

    def cancel(self) -> None:
        self._speech.cancel()

    def _count_clip(self, count: int) -> CalloutClip | None:
        if not self.clips_available:
            return None
        assert self._manifest is not None
        return self._manifest.count_clip(count)

    def _rep_clip(self, rep: int) -> CalloutClip | None:
        if not self.clips_available:
            return None
        assert self._manifest is not None
        return self._manifest.rep_clip(rep)

    def _play_clip(self, clip: CalloutClip | None) -> bool:
        if clip is None:
            return False
        played = _guarded(f"clip {clip.clip_id}", lambda: self._audio.play_clip(clip))
        if not played:
            print(f"[CUE] clip {clip.clip_id} unavailable, using speech")
            return False
        return True


def build_dispatcher(
    voice_mode_enabled: bool,
    audio: AudioBackend,
    manifest: CalloutManifest | None = None,
) -> CueDispatcher:
    if voice_mode_enabled:
        return VoiceCueDispatcher(audio, manifest)
    return ToneCueDispatcher(audio)
