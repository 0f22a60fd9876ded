"""Workout domain models."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Literal


WorkoutMode = Literal["continuous", "sets"]
Pace = Literal["faster", "default", "slower"]

PACE_SETTINGS: dict[str, float] = {
    "faster": 0.55,
    "default": 0.65,
    "slower": 0.75,
}

DEFAULT_COUNTS_PER_REP = 6


class WorkoutConfigError(ValueError):
    """Raised when a workout configuration cannot produce valid timing."""


@dataclass(frozen=True)
class SetsConfig:
    sets: int
    reps_per_set: int
    rest_between_sets_sec: float = 0.0

    @property
    def total_reps(self) -> int:
        return self.sets * self.reps_per_set


@dataclass(frozen=True)
class WorkoutConfig:
    duration_minutes: float
    target_reps: int
    mode: WorkoutMode = "continuous"
    sets_config: SetsConfig | None = None
    counts_per_rep: int = DEFAULT_COUNTS_PER_REP
    pace: Pace = "default"
    custom_pace_sec: float | None = None

    @property
    def total_duration_sec(self) -> float:
        return self.duration_minutes * 60.0

    @property
    def duration_ms(self) -> float:
        return self.duration_minutes * 60_000.0

    @property
    def seconds_per_count(self) -> float:
        if self.custom_pace_sec is not None:
            return self.custom_pace_sec
        return PACE_SETTINGS[self.pace]

    def with_changes(self, **changes: Any) -> WorkoutConfig:
        return replace(self, **changes)


@dataclass(frozen=True)
class PacingPlan:
    seconds_per_count: float
    seconds_per_rep: float
    seconds_per_burpee: float
    rest_between_reps_sec: float
    counts_per_rep: int = DEFAULT_COUNTS_PER_REP

    @property
    def ms_per_count(self) -> float:
        return self.seconds_per_count * 1000.0

    @property
    def reps_per_minute(self) -> float | None:
        if self.seconds_per_rep <= 0:
            return None
        return 60.0 / self.seconds_per_rep
