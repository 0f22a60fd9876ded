from __future__ import annotations

import json
from pathlib import Path

import pytest

from burpee_timer.workout.model import SetsConfig, WorkoutConfig, WorkoutConfigError
from burpee_timer.workout.parser import (
    WorkoutParseError,
    load_workout_config,
    parse_workout_config,
    save_workout_config,
)


def test_load_continuous_workout_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "classic.json"
    workout_file.write_text(
        '{"duration_minutes":20,"target_reps":200,"pace":"faster"}',
        encoding="utf-8",
    )

    config = load_workout_config(workout_file)

    assert config.duration_minutes == 20
    assert config.target_reps == 200
    assert config.mode == "continuous"
    assert config.pace == "faster"
    assert config.counts_per_rep == 6
    assert config.sets_config is None
    assert config.custom_pace_sec is None


def test_load_sets_workout_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "sets.json"
    workout_file.write_text(
        (
            '{"duration_minutes":"10","target_reps":100,"mode":"sets",'
            '"sets":{"sets":5,"reps_per_set":20,"rest_between_sets_sec":30},'
            '"custom_pace_sec":0.7}'
        ),
        encoding="utf-8",
    )

    config = load_workout_config(workout_file)

    assert config.duration_minutes == 10.0
    assert config.sets_config == SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30)
    assert config.custom_pace_sec == 0.7
    assert config.seconds_per_count == 0.7


def test_load_workout_invalid_extension(tmp_path: Path) -> None:
    workout_file = tmp_path / "workout.csv"
    workout_file.write_text("duration_minutes,target_reps\n20,200\n", encoding="utf-8")

    with pytest.raises(WorkoutParseError, match="Unsupported workout format"):
        load_workout_config(workout_file)


def test_load_workout_invalid_json(tmp_path: Path) -> None:
    workout_file = tmp_path / "broken.json"
    workout_file.write_text('{"duration_minutes": 20,', encoding="utf-8")

    with pytest.raises(WorkoutParseError, match="Invalid JSON"):
        load_workout_config(workout_file)


def test_load_workout_missing_file(tmp_path: Path) -> None:
    with pytest.raises(WorkoutParseError, match="Cannot read workout"):
        load_workout_config(tmp_path / "missing.json")


def test_load_workout_requires_object(tmp_path: Path) -> None:
    workout_file = tmp_path / "list.json"
    workout_file.write_text("[20, 200]", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_workout_config(workout_file)


@pytest.mark.parametrize(
    "data",
    [
        {"target_reps": 200},
        {"duration_minutes": 20},
        {"duration_minutes": 0, "target_reps": 200},
        {"duration_minutes": 20, "target_reps": 12.5},
        {"duration_minutes": 20, "target_reps": True},
        {"duration_minutes": "soon", "target_reps": 200},
        {"duration_minutes": 20, "target_reps": 200, "mode": "ladder"},
        {"duration_minutes": 20, "target_reps": 200, "pace": "turbo"},
        {"duration_minutes": 20, "target_reps": 200, "mode": "sets"},
        {"duration_minutes": 20, "target_reps": 200, "mode": "sets", "sets": [5, 40]},
        {"duration_minutes": 20, "target_reps": 200, "custom_pace_sec": -0.5},
    ],
)
def test_parse_invalid_values(data: dict[str, object]) -> None:
    with pytest.raises(WorkoutParseError):
        parse_workout_config(data)


def test_parse_error_is_a_config_error() -> None:
    with pytest.raises(WorkoutConfigError):
        parse_workout_config({"duration_minutes": 20, "target_reps": 0})


def test_save_and_reload(tmp_path: Path) -> None:
    config = WorkoutConfig(
        duration_minutes=15,
        target_reps=150,
        mode="sets",
        sets_config=SetsConfig(sets=3, reps_per_set=50, rest_between_sets_sec=45),
        pace="slower",
    )

    saved = save_workout_config(config, tmp_path / "nested" / "sprint.json")

    assert saved.exists()
    payload = json.loads(saved.read_text(encoding="utf-8"))
    assert payload["sets"] == {"sets": 3, "reps_per_set": 50, "rest_between_sets_sec": 45}
    assert load_workout_config(saved) == config
