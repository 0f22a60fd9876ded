"""Audio backend that plays cues in the NiceGUI client's browser."""

from __future__ import annotations

import json
import time

from nicegui import Client

from burpee_timer.audio.backends import estimate_speech_sec
from burpee_timer.cues.manifest import CalloutClip, CalloutManifest


_AUDIO_CONTEXT_JS = (
    "window.__burpeeCtx = window.__burpeeCtx || "
    "new (window.AudioContext || window.webkitAudioContext)();"
)


class BrowserAudio:
    def __init__(self, client: Client) -> None:
        self._client = client
        self._speaking_text: str | None = None
        self._speaking_until = 0.0

    def unlock(self) -> None:
        """Resume the page's AudioContext; must follow a user gesture."""
        self._run(f"{_AUDIO_CONTEXT_JS} window.__burpeeCtx.resume();")

    def preload(self, manifest: CalloutManifest) -> None:
        sources = sorted(
            {
                clip.source
                for clip in (
                    *(manifest.count_clip(n) for n in manifest.count_numbers),
                    *(manifest.rep_clip(n) for n in manifest.rep_numbers),
                )
                if clip is not None
            }
        )
        self._run(
            "const cache = window.__burpeeClips = window.__burpeeClips || {};"
            f"for (const src of {json.dumps(sources)}) {{"
            "  if (!cache[src]) { const a = new Audio(src); a.preload = 'auto'; cache[src] = a; }"
            "}"
        )

    def play_tone(self, frequency_hz: float, duration_ms: float, *, delay_ms: float = 0) -> None:
        self._run(
            f"{_AUDIO_CONTEXT_JS}"
            "const ctx = window.__burpeeCtx;"
            f"const t = ctx.currentTime + {delay_ms / 1000.0:.3f};"
            f"const d = {duration_ms / 1000.0:.3f};"
            "const osc = ctx.createOscillator();"
            "const gain = ctx.createGain();"
            "osc.connect(gain); gain.connect(ctx.destination);"
            f"osc.frequency.value = {frequency_hz:.1f};"
            "gain.gain.setValueAtTime(0.3, t);"
            "gain.gain.exponentialRampToValueAtTime(0.01, t + d);"
            "osc.start(t); osc.stop(t + d);"
        )

    def speak(
        self,
        text: str,
        *,
        rate: float = 1.2,
        pitch: float = 1.0,
        volume: float = 1.0,
    ) -> None:
        self._speaking_text = text
        self._speaking_until = time.monotonic() + estimate_speech_sec(text, rate)
        self._run(
            "if (window.speechSynthesis) {"
            f"  const u = new SpeechSynthesisUtterance({json.dumps(text)});"
            f"  u.rate = {rate:g}; u.pitch = {pitch:g}; u.volume = {volume:g};"
            "  window.speechSynthesis.speak(u);"
            "}"
        )

    def cancel_speech(self) -> None:
        self._speaking_text = None
        self._speaking_until = 0.0
        self._run("if (window.speechSynthesis) { window.speechSynthesis.cancel(); }")

    def is_speaking(self) -> bool:
        return self._speaking_text is not None and time.monotonic() < self._speaking_until

    def play_clip(self, clip: CalloutClip) -> bool:
        if not self._client.has_socket_connection:
            return False
        self._run(
            "const cache = window.__burpeeClips = window.__burpeeClips || {};"
            f"const src = {json.dumps(clip.source)};"
            "let a = cache[src];"
            "if (!a) { a = new Audio(src); a.preload = 'auto'; cache[src] = a; }"
            "clearTimeout(a.__stopTimer);"
            f"a.currentTime = {clip.start:.3f};"
            "a.play().catch((e) => console.warn('clip playback failed', e));"
            f"a.__stopTimer = setTimeout(() => a.pause(), {clip.duration * 1000.0:.0f});"
        )
        return True

    def _run(self, code: str) -> None:
        self._client.run_javascript(f"(() => {{ {code} }})();")
