from __future__ import annotations

import math

import pytest

from burpee_timer.workout.model import SetsConfig, WorkoutConfig, WorkoutConfigError
from burpee_timer.workout.pacing import (
    compute_pacing,
    count_callout,
    format_time,
    sets_mismatch_message,
    validate_config,
)


def test_continuous_default_pace() -> None:
    config = WorkoutConfig(duration_minutes=1, target_reps=10)

    plan = compute_pacing(config)

    assert plan.seconds_per_count == 0.65
    assert plan.seconds_per_burpee == pytest.approx(3.9)
    assert plan.seconds_per_rep == pytest.approx(6.0)
    assert plan.rest_between_reps_sec == pytest.approx(2.1)
    assert plan.ms_per_count == pytest.approx(650.0)
    assert plan.reps_per_minute == pytest.approx(10.0)


def test_sets_mode_pacing() -> None:
    config = WorkoutConfig(
        duration_minutes=10,
        target_reps=100,
        mode="sets",
        sets_config=SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30),
    )

    plan = compute_pacing(config)

    assert plan.seconds_per_rep == pytest.approx(4.8)
    assert plan.seconds_per_burpee == pytest.approx(3.9)
    assert plan.rest_between_reps_sec == pytest.approx(0.9)


def test_custom_pace_takes_precedence() -> None:
    config = WorkoutConfig(
        duration_minutes=5, target_reps=50, pace="faster", custom_pace_sec=0.8
    )

    plan = compute_pacing(config)

    assert plan.seconds_per_count == 0.8
    assert plan.seconds_per_burpee == 0.8 * 6


@pytest.mark.parametrize(
    ("pace", "expected"),
    [("faster", 0.55), ("default", 0.65), ("slower", 0.75)],
)
def test_pace_presets(pace: str, expected: float) -> None:
    plan = compute_pacing(WorkoutConfig(duration_minutes=20, target_reps=200, pace=pace))  # type: ignore[arg-type]
    assert plan.seconds_per_count == expected


def test_rest_never_negative_and_burpee_is_exact_product() -> None:
    configs = [
        WorkoutConfig(duration_minutes=1, target_reps=100),
        WorkoutConfig(duration_minutes=60, target_reps=1, pace="slower"),
        WorkoutConfig(duration_minutes=3, target_reps=37, custom_pace_sec=0.73),
        WorkoutConfig(duration_minutes=2, target_reps=10, counts_per_rep=8),
        WorkoutConfig(
            duration_minutes=1,
            target_reps=100,
            mode="sets",
            sets_config=SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30),
        ),
    ]
    for config in configs:
        plan = compute_pacing(config)
        assert plan.rest_between_reps_sec >= 0
        assert plan.seconds_per_burpee == plan.seconds_per_count * config.counts_per_rep


def test_pace_too_slow_for_budget_collapses_rest() -> None:
    plan = compute_pacing(WorkoutConfig(duration_minutes=1, target_reps=100))

    assert plan.seconds_per_rep == pytest.approx(0.6)
    assert plan.rest_between_reps_sec == 0.0


def test_sets_rest_exceeding_duration_is_not_an_error() -> None:
    config = WorkoutConfig(
        duration_minutes=1,
        target_reps=100,
        mode="sets",
        sets_config=SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30),
    )

    plan = compute_pacing(config)

    assert plan.seconds_per_rep < 0
    assert plan.rest_between_reps_sec == 0.0
    assert plan.reps_per_minute is None


def test_compute_pacing_writes_nothing(capsys: pytest.CaptureFixture[str]) -> None:
    config = WorkoutConfig(
        duration_minutes=20,
        target_reps=200,
        mode="sets",
        sets_config=SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30),
    )

    for _ in range(10):
        compute_pacing(config)

    assert capsys.readouterr().out == ""


def test_sets_mismatch_message() -> None:
    sets_config = SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30)
    mismatched = WorkoutConfig(
        duration_minutes=10, target_reps=90, mode="sets", sets_config=sets_config
    )

    assert sets_mismatch_message(mismatched) == "5 sets x 20 reps = 100, target is 90 reps"
    assert sets_mismatch_message(mismatched.with_changes(target_reps=100)) is None
    assert sets_mismatch_message(WorkoutConfig(duration_minutes=10, target_reps=90)) is None


@pytest.mark.parametrize(
    "config",
    [
        WorkoutConfig(duration_minutes=0, target_reps=10),
        WorkoutConfig(duration_minutes=-5, target_reps=10),
        WorkoutConfig(duration_minutes=math.nan, target_reps=10),
        WorkoutConfig(duration_minutes=math.inf, target_reps=10),
        WorkoutConfig(duration_minutes=10, target_reps=0),
        WorkoutConfig(duration_minutes=10, target_reps=-3),
        WorkoutConfig(duration_minutes=10, target_reps=10, counts_per_rep=0),
        WorkoutConfig(duration_minutes=10, target_reps=10, custom_pace_sec=0),
        WorkoutConfig(duration_minutes=10, target_reps=10, pace="warp"),  # type: ignore[arg-type]
        WorkoutConfig(duration_minutes=10, target_reps=10, mode="sets"),
        WorkoutConfig(
            duration_minutes=10,
            target_reps=10,
            mode="sets",
            sets_config=SetsConfig(sets=0, reps_per_set=10),
        ),
        WorkoutConfig(
            duration_minutes=10,
            target_reps=10,
            mode="sets",
            sets_config=SetsConfig(sets=1, reps_per_set=10, rest_between_sets_sec=-1),
        ),
    ],
)
def test_invalid_config_fails_fast(config: WorkoutConfig) -> None:
    with pytest.raises(WorkoutConfigError):
        compute_pacing(config)


def test_validate_config_names_the_field() -> None:
    with pytest.raises(WorkoutConfigError, match="target_reps"):
        validate_config(WorkoutConfig(duration_minutes=10, target_reps=0))


def test_count_callout_and_format_time() -> None:
    assert count_callout(1) == "One"
    assert count_callout(5) == "Five"
    assert count_callout(12) == "12"
    assert format_time(0) == "00:00"
    assert format_time(65_999) == "01:05"
    assert format_time(20 * 60_000) == "20:00"
    assert format_time(-50) == "00:00"
