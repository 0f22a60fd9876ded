"""Async runtime that runs one workout in the terminal."""

from __future__ import annotations

import asyncio

from burpee_timer.audio.backends import AudioBackend, TerminalAudio
from burpee_timer.core.scheduler import VirtualScheduler
from burpee_timer.core.session import COUNTDOWN_SEC, WorkoutSession
from burpee_timer.core.state import SessionProgress
from burpee_timer.cues.dispatcher import build_dispatcher
from burpee_timer.cues.manifest import CalloutManifest
from burpee_timer.workout.model import WorkoutConfig
from burpee_timer.workout.pacing import format_time


STATUS_INTERVAL_SEC = 1.0


class BurpeeEngine:
    def __init__(
        self,
        config: WorkoutConfig,
        *,
        voice_mode_enabled: bool = False,
        manifest: CalloutManifest | None = None,
        audio: AudioBackend | None = None,
        countdown_sec: int = COUNTDOWN_SEC,
        status_interval_sec: float = STATUS_INTERVAL_SEC,
    ) -> None:
        self._config = config
        self._voice_mode_enabled = voice_mode_enabled
        self._manifest = manifest
        self._audio = audio or TerminalAudio()
        self._countdown_sec = countdown_sec
        self._status_interval_sec = status_interval_sec
        self._finished_event = asyncio.Event()
        self._completed = False
        self.session: WorkoutSession | None = None

    async def run(self) -> bool:
        self._finished_event = asyncio.Event()
        session = WorkoutSession(
            self._config,
            build_dispatcher(self._voice_mode_enabled, self._audio, self._manifest),
            countdown_sec=self._countdown_sec,
            voice_mode_enabled=self._voice_mode_enabled,
            on_finish=self._on_finish,
        )
        self.session = session
        try:
            session.start_workout()
            while not self._finished_event.is_set():
                try:
                    await asyncio.wait_for(
                        self._finished_event.wait(),
                        timeout=self._status_interval_sec,
                    )
                except asyncio.TimeoutError:
                    self._print_status_line(session.snapshot())
        finally:
            # Ctrl-C or cancellation: make sure no ticker outlives the run.
            session.stop_workout()
        return self._completed

    def stop(self) -> None:
        if self.session is not None:
            self.session.stop_workout()

    def toggle_pause(self) -> bool:
        if self.session is None:
            return False
        return self.session.pause_workout()

    def _on_finish(self, completed: bool) -> None:
        self._completed = completed
        self._finished_event.set()

    def _print_status_line(self, progress: SessionProgress) -> None:
        print(format_status_line(progress))


def format_status_line(progress: SessionProgress) -> str:
    if progress.paused:
        detail = "paused"
    elif progress.is_resting:
        detail = f"rest {progress.rest_display_sec}s"
    elif progress.countdown_remaining:
        detail = f"starting in {progress.countdown_remaining}"
    else:
        detail = f"count {progress.current_count}"
    return (
        f"Time: {format_time(progress.elapsed_ms)}/{format_time(progress.duration_ms)} | "
        f"Reps: {progress.current_rep}/{progress.target_reps} | "
        f"Set: {progress.current_set} | {detail}"
    )


def preview_workout(
    config: WorkoutConfig,
    *,
    voice_mode_enabled: bool = False,
    manifest: CalloutManifest | None = None,
    countdown_sec: int = COUNTDOWN_SEC,
    step_sec: float = 0.05,
) -> SessionProgress:
    """Run a whole session on virtual time, printing every cue as it fires."""
    scheduler = VirtualScheduler()
    audio = TerminalAudio(now=scheduler.now)
    session = WorkoutSession(
        config,
        build_dispatcher(voice_mode_enabled, audio, manifest),
        scheduler=scheduler,
        countdown_sec=countdown_sec,
        voice_mode_enabled=voice_mode_enabled,
    )
    session.start_workout()
    limit = countdown_sec + config.total_duration_sec + 1.0
    scheduler.run_until(lambda: not session.is_running, step=step_sec, limit=limit)
    session.stop_workout()
    return session.snapshot()
