"""Pacing calculator: workout configuration to per-count and rest timing."""

from __future__ import annotations

import math

from burpee_timer.workout.model import (
    PACE_SETTINGS,
    PacingPlan,
    WorkoutConfig,
    WorkoutConfigError,
)


COUNT_CALLOUTS: dict[int, str] = {
    1: "One",
    2: "Two",
    3: "Three",
    4: "Four",
    5: "Five",
    6: "Six",
}


def validate_config(config: WorkoutConfig) -> None:
    _require_positive(config.duration_minutes, "duration_minutes")
    _require_positive_int(config.target_reps, "target_reps")
    _require_positive_int(config.counts_per_rep, "counts_per_rep")

    if config.custom_pace_sec is not None:
        _require_positive(config.custom_pace_sec, "custom_pace_sec")
    elif config.pace not in PACE_SETTINGS:
        raise WorkoutConfigError(
            f"Unknown pace '{config.pace}'. Use one of: {', '.join(PACE_SETTINGS)}"
        )

    if config.mode == "continuous":
        return
    if config.mode != "sets":
        raise WorkoutConfigError(
            f"Unknown mode '{config.mode}'. Use 'continuous' or 'sets'"
        )

    sets_config = config.sets_config
    if sets_config is None:
        raise WorkoutConfigError("Sets mode requires a sets configuration")
    _require_positive_int(sets_config.sets, "sets")
    _require_positive_int(sets_config.reps_per_set, "reps_per_set")
    rest = sets_config.rest_between_sets_sec
    if not _is_finite_number(rest) or rest < 0:
        raise WorkoutConfigError(
            f"rest_between_sets_sec must be >= 0 (got {rest!r})"
        )


def compute_pacing(config: WorkoutConfig, voice_mode_enabled: bool = False) -> PacingPlan:
    """Derive the timing constants for a workout.

    ``voice_mode_enabled`` is part of the contract so that spoken cadence can
    diverge from tone cadence; both currently share the same plan.
    """
    validate_config(config)

    seconds_per_count = config.seconds_per_count
    seconds_per_burpee = seconds_per_count * config.counts_per_rep

    if config.mode == "sets":
        assert config.sets_config is not None
        sets_config = config.sets_config
        total_rest = (sets_config.sets - 1) * sets_config.rest_between_sets_sec
        active_time = config.total_duration_sec - total_rest
        seconds_per_rep = active_time / sets_config.total_reps
    else:
        seconds_per_rep = config.total_duration_sec / config.target_reps

    return PacingPlan(
        seconds_per_count=seconds_per_count,
        seconds_per_rep=seconds_per_rep,
        seconds_per_burpee=seconds_per_burpee,
        rest_between_reps_sec=max(0.0, seconds_per_rep - seconds_per_burpee),
        counts_per_rep=config.counts_per_rep,
    )


def sets_mismatch_message(config: WorkoutConfig) -> str | None:
    """Describe a Sets-mode config whose sets do not add up to the rep target."""
    sets_config = config.sets_config
    if config.mode != "sets" or sets_config is None:
        return None
    if sets_config.total_reps == config.target_reps:
        return None
    return (
        f"{sets_config.sets} sets x {sets_config.reps_per_set} reps "
        f"= {sets_config.total_reps}, target is {config.target_reps} reps"
    )


def count_callout(count: int) -> str:
    return COUNT_CALLOUTS.get(count, str(count))


def format_time(ms: float) -> str:
    total_seconds = int(max(0.0, ms) // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def _require_positive(value: object, field_name: str) -> None:
    if not _is_finite_number(value) or value <= 0:  # type: ignore[operator]
        raise WorkoutConfigError(f"{field_name} must be > 0 (got {value!r})")


def _require_positive_int(value: object, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise WorkoutConfigError(f"{field_name} must be an integer (got {value!r})")
    _require_positive(value, field_name)


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
