"""Mutable session state owned by the workout session."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    IDLE = "idle"
    COUNTING_DOWN = "counting_down"
    ACTIVE = "active"
    RESTING_BETWEEN_REPS = "resting_between_reps"
    RESTING_BETWEEN_SETS = "resting_between_sets"
    STOPPED = "stopped"


LIVE_PHASES = frozenset(
    {
        Phase.COUNTING_DOWN,
        Phase.ACTIVE,
        Phase.RESTING_BETWEEN_REPS,
        Phase.RESTING_BETWEEN_SETS,
    }
)
RESTING_PHASES = frozenset({Phase.RESTING_BETWEEN_REPS, Phase.RESTING_BETWEEN_SETS})


@dataclass
class SessionState:
    phase: Phase = Phase.IDLE
    paused: bool = False
    countdown_remaining: int = 0
    current_count: int = 0
    current_rep: int = 0
    current_set: int = 1
    elapsed_ms: float = 0.0
    paused_accumulated_ms: float = 0.0
    rest_remaining_sec: float = 0.0
    completed: bool = False


@dataclass(frozen=True)
class SessionProgress:
    phase: Phase
    paused: bool
    countdown_remaining: int
    current_count: int
    current_rep: int
    current_set: int
    elapsed_ms: float
    paused_accumulated_ms: float
    rest_remaining_sec: float
    completed: bool
    target_reps: int
    duration_ms: float

    @property
    def is_running(self) -> bool:
        return self.phase in LIVE_PHASES

    @property
    def is_resting(self) -> bool:
        return self.phase in RESTING_PHASES

    @property
    def rest_display_sec(self) -> int:
        # Whole seconds, rounded up, so "1" stays visible until rest ends.
        return int(math.ceil(round(self.rest_remaining_sec, 6)))

    @property
    def remaining_ms(self) -> float:
        return max(0.0, self.duration_ms - self.elapsed_ms)
