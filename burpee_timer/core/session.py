"""Workout session state machine: countdown, counting, rests and completion."""

from __future__ import annotations

from typing import Callable, Optional

from burpee_timer.core.clock import PauseClock
from burpee_timer.core.scheduler import AsyncioScheduler, Scheduler, TickerSlots
from burpee_timer.core.state import (
    LIVE_PHASES,
    RESTING_PHASES,
    Phase,
    SessionProgress,
    SessionState,
)
from burpee_timer.cues.dispatcher import CueDispatcher
from burpee_timer.workout.model import PacingPlan, WorkoutConfig
from burpee_timer.workout.pacing import (
    compute_pacing,
    format_time,
    sets_mismatch_message,
)


FinishCallback = Callable[[bool], None]

COUNTDOWN_SEC = 5
COUNTDOWN_TICK_SEC = 1.0
ELAPSED_TICK_SEC = 0.1
REST_TICK_SEC = 0.1
FIRST_COUNT_DELAY_SEC = 0.1

# Ticker slots. Count cycling and rest countdown share "cue", so at most one
# of them can be armed at any time.
SLOT_COUNTDOWN = "countdown"
SLOT_ELAPSED = "elapsed"
SLOT_CUE = "cue"


class WorkoutSession:
    """Single active burpee workout.

    Every mutation of :class:`SessionState` happens inside this class, either
    from one of the control methods (``start_workout``, ``pause_workout``,
    ``stop_workout``) or from a tick callback. Display code reads
    :meth:`snapshot`.
    """

    def __init__(
        self,
        config: WorkoutConfig,
        dispatcher: CueDispatcher,
        *,
        scheduler: Scheduler | None = None,
        countdown_sec: int = COUNTDOWN_SEC,
        voice_mode_enabled: bool = False,
        on_finish: Optional[FinishCallback] = None,
    ) -> None:
        if countdown_sec < 0:
            raise ValueError("countdown_sec must be >= 0")
        self._config = config
        self._dispatcher = dispatcher
        self._scheduler = scheduler or AsyncioScheduler()
        self._countdown_sec = countdown_sec
        self._voice_mode_enabled = voice_mode_enabled
        self._on_finish = on_finish
        self._clock = PauseClock(now=self._scheduler.now)
        self._tickers = TickerSlots(self._scheduler)
        self._state = SessionState()
        self._plan: PacingPlan | None = None
        self._rest_ends_at_ms = 0.0
        self._resume_delays: dict[str, float] = {}

    @property
    def config(self) -> WorkoutConfig:
        return self._config

    @property
    def plan(self) -> PacingPlan | None:
        return self._plan

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def is_running(self) -> bool:
        return self._state.phase in LIVE_PHASES

    @property
    def is_paused(self) -> bool:
        return self._state.paused

    @property
    def armed_tickers(self) -> tuple[str, ...]:
        return self._tickers.armed_names()

    def snapshot(self) -> SessionProgress:
        state = self._state
        return SessionProgress(
            phase=state.phase,
            paused=state.paused,
            countdown_remaining=state.countdown_remaining,
            current_count=state.current_count,
            current_rep=state.current_rep,
            current_set=state.current_set,
            elapsed_ms=state.elapsed_ms,
            paused_accumulated_ms=state.paused_accumulated_ms,
            rest_remaining_sec=state.rest_remaining_sec,
            completed=state.completed,
            target_reps=self._config.target_reps,
            duration_ms=self._config.duration_ms,
        )

    # Control surface

    def start_workout(self) -> PacingPlan:
        if self.is_running:
            raise RuntimeError("Workout already running")

        # Validates the config; a bad config fails here, before any cue.
        plan = compute_pacing(self._config, self._voice_mode_enabled)
        self._plan = plan

        self._tickers.cancel_all()
        self._clock = PauseClock(now=self._scheduler.now)
        self._state = SessionState(
            phase=Phase.COUNTING_DOWN,
            countdown_remaining=self._countdown_sec,
        )
        self._rest_ends_at_ms = 0.0
        self._resume_delays = {}

        mismatch = sets_mismatch_message(self._config)
        if mismatch is not None:
            print(f"[CONFIG] {mismatch}")
        print(
            f"[SESSION] start: {self._config.target_reps} reps in "
            f"{self._config.duration_minutes:g} min, {plan.seconds_per_count:.2f}s/count, "
            f"{plan.rest_between_reps_sec:.2f}s rest between reps"
        )
        self._dispatcher.get_ready(self._countdown_sec)
        if self._countdown_sec == 0:
            self._begin_active()
        else:
            self._tickers.arm(SLOT_COUNTDOWN, COUNTDOWN_TICK_SEC, self._on_countdown_tick)
        return plan

    def pause_workout(self) -> bool:
        """Toggle pause. Returns the new paused flag."""
        state = self._state
        if state.phase not in LIVE_PHASES:
            return False

        if state.paused:
            self._clock.resume()
            state.paused = False
            # Pick the count (or countdown) rhythm up where the pause cut it.
            for name, delay in self._resume_delays.items():
                self._tickers.rearm(name, delay)
            self._resume_delays = {}
            print(f"[SESSION] resumed at {format_time(self._clock.elapsed_ms())}")
        else:
            self._resume_delays = {}
            for name in (SLOT_COUNTDOWN, SLOT_CUE):
                delay = self._tickers.until_next(name)
                if delay is not None:
                    self._resume_delays[name] = delay
            self._clock.pause()
            state.paused = True
            print(f"[SESSION] paused at {format_time(self._clock.elapsed_ms())}")
        state.paused_accumulated_ms = self._clock.paused_accumulated_ms
        return state.paused

    def stop_workout(self) -> None:
        if self._state.phase not in LIVE_PHASES:
            return
        self._finish(completed=False)

    # Tick callbacks

    def _on_countdown_tick(self) -> None:
        state = self._state
        if state.paused or state.phase is not Phase.COUNTING_DOWN:
            return

        state.countdown_remaining -= 1
        if state.countdown_remaining > 0:
            self._dispatcher.countdown(state.countdown_remaining)
            return

        self._tickers.cancel(SLOT_COUNTDOWN)
        self._begin_active()

    def _begin_active(self) -> None:
        assert self._plan is not None
        state = self._state
        state.countdown_remaining = 0
        state.phase = Phase.ACTIVE
        self._dispatcher.go()

        self._clock.start()
        self._tickers.arm(SLOT_ELAPSED, ELAPSED_TICK_SEC, self._on_elapsed_tick)
        self._tickers.arm(
            SLOT_CUE,
            self._plan.seconds_per_count,
            self._on_count_tick,
            delay_sec=FIRST_COUNT_DELAY_SEC,
        )

    def _on_elapsed_tick(self) -> None:
        state = self._state
        if state.paused or state.phase not in LIVE_PHASES:
            return

        state.elapsed_ms = self._clock.elapsed_ms()
        state.paused_accumulated_ms = self._clock.paused_accumulated_ms
        if state.elapsed_ms >= self._config.duration_ms:
            self._finish(completed=True)

    def _on_count_tick(self) -> None:
        state = self._state
        if state.paused or state.phase is not Phase.ACTIVE:
            return
        assert self._plan is not None

        counts_per_rep = self._config.counts_per_rep
        state.current_count = (state.current_count % counts_per_rep) + 1
        if state.current_count < counts_per_rep:
            self._dispatcher.count(state.current_count)
            return

        # Last count of the rep: call out the rep number instead of the count.
        self._dispatcher.rep(state.current_rep + 1)
        state.current_rep += 1

        if state.current_rep >= self._config.target_reps:
            self._finish(completed=True)
            return

        sets_config = self._config.sets_config
        if (
            self._config.mode == "sets"
            and sets_config is not None
            and state.current_rep % sets_config.reps_per_set == 0
            and state.current_rep < sets_config.total_reps
        ):
            state.current_set = state.current_rep // sets_config.reps_per_set + 1
            if sets_config.rest_between_sets_sec > 0:
                self._begin_rest(Phase.RESTING_BETWEEN_SETS, sets_config.rest_between_sets_sec)
                return

        if self._plan.rest_between_reps_sec > 0:
            self._begin_rest(Phase.RESTING_BETWEEN_REPS, self._plan.rest_between_reps_sec)

    def _begin_rest(self, phase: Phase, seconds: float) -> None:
        state = self._state
        state.phase = phase
        state.rest_remaining_sec = seconds
        self._rest_ends_at_ms = self._clock.elapsed_ms() + seconds * 1000.0
        self._tickers.arm(SLOT_CUE, REST_TICK_SEC, self._on_rest_tick)

    def _on_rest_tick(self) -> None:
        state = self._state
        if state.paused or state.phase not in RESTING_PHASES:
            return
        assert self._plan is not None

        # Remaining rest comes from the pause-adjusted clock, not from
        # counting ticks, so a late tick does not stretch the rest.
        remaining_ms = self._rest_ends_at_ms - self._clock.elapsed_ms()
        if remaining_ms > 0.5:
            state.rest_remaining_sec = remaining_ms / 1000.0
            return

        state.rest_remaining_sec = 0.0
        state.phase = Phase.ACTIVE
        self._tickers.arm(SLOT_CUE, self._plan.seconds_per_count, self._on_count_tick)

    def _finish(self, *, completed: bool) -> None:
        state = self._state
        if state.phase not in LIVE_PHASES:
            return

        self._tickers.cancel_all()
        if self._clock.is_started:
            self._clock.resume()
            state.elapsed_ms = self._clock.elapsed_ms()
            state.paused_accumulated_ms = self._clock.paused_accumulated_ms
        state.phase = Phase.STOPPED
        state.paused = False
        state.completed = completed
        state.current_count = 0
        state.countdown_remaining = 0
        state.rest_remaining_sec = 0.0

        self._dispatcher.cancel()
        self._dispatcher.complete()
        print(
            f"[SESSION] {'completed' if completed else 'stopped'}: "
            f"{state.current_rep}/{self._config.target_reps} reps in "
            f"{format_time(state.elapsed_ms)}"
        )
        if self._on_finish is not None:
            self._on_finish(completed)
