"""Workout controller used by the web UI."""

from __future__ import annotations

from typing import Any, Callable, Optional

from burpee_timer.audio.backends import AudioBackend
from burpee_timer.core.scheduler import Scheduler
from burpee_timer.core.session import COUNTDOWN_SEC, WorkoutSession
from burpee_timer.core.state import Phase, SessionProgress
from burpee_timer.cues.dispatcher import build_dispatcher
from burpee_timer.cues.manifest import CalloutManifest
from burpee_timer.workout.model import PacingPlan, WorkoutConfig
from burpee_timer.workout.pacing import compute_pacing
from burpee_timer.workout.presets import DEFAULT_PRESET_KEY, get_preset


class UIController:
    def __init__(
        self,
        audio: AudioBackend,
        *,
        config: WorkoutConfig | None = None,
        voice_mode_enabled: bool = True,
        manifest: CalloutManifest | None = None,
        scheduler: Scheduler | None = None,
        countdown_sec: int = COUNTDOWN_SEC,
    ) -> None:
        self._audio = audio
        self._config = config or get_preset(DEFAULT_PRESET_KEY).config
        self._voice_mode_enabled = voice_mode_enabled
        self._manifest = manifest
        self._scheduler = scheduler
        self._countdown_sec = countdown_sec
        self._session: WorkoutSession | None = None

    @property
    def config(self) -> WorkoutConfig:
        return self._config

    @property
    def voice_mode_enabled(self) -> bool:
        return self._voice_mode_enabled

    @property
    def session(self) -> WorkoutSession | None:
        return self._session

    @property
    def workout_running(self) -> bool:
        return self._session is not None and self._session.is_running

    def update_config(self, **changes: Any) -> WorkoutConfig:
        self._ensure_idle("change the workout")
        self._config = self._config.with_changes(**changes)
        return self._config

    def set_config(self, config: WorkoutConfig) -> None:
        self._ensure_idle("change the workout")
        self._config = config

    def set_voice_mode(self, enabled: bool) -> None:
        self._ensure_idle("switch cue mode")
        self._voice_mode_enabled = enabled

    def pacing(self) -> PacingPlan:
        # Recomputed on every call: config and voice mode may have changed.
        return compute_pacing(self._config, self._voice_mode_enabled)

    def start_workout(self, on_finish: Optional[Callable[[bool], None]] = None) -> PacingPlan:
        if self.workout_running:
            raise RuntimeError("Workout already running")

        dispatcher = build_dispatcher(self._voice_mode_enabled, self._audio, self._manifest)
        session = WorkoutSession(
            self._config,
            dispatcher,
            scheduler=self._scheduler,
            countdown_sec=self._countdown_sec,
            voice_mode_enabled=self._voice_mode_enabled,
            on_finish=on_finish,
        )
        plan = session.start_workout()
        self._session = session
        return plan

    def pause_workout(self) -> bool:
        if self._session is None:
            return False
        return self._session.pause_workout()

    def stop_workout(self) -> None:
        if self._session is not None:
            self._session.stop_workout()

    def snapshot(self) -> SessionProgress:
        if self._session is not None:
            return self._session.snapshot()
        return SessionProgress(
            phase=Phase.IDLE,
            paused=False,
            countdown_remaining=0,
            current_count=0,
            current_rep=0,
            current_set=1,
            elapsed_ms=0.0,
            paused_accumulated_ms=0.0,
            rest_remaining_sec=0.0,
            completed=False,
            target_reps=self._config.target_reps,
            duration_ms=self._config.duration_ms,
        )

    def _ensure_idle(self, action: str) -> None:
        if self.workout_running:
            raise RuntimeError(f"Cannot {action} while a workout is running")
