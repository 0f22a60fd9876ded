"""Workout configuration file parser (JSON)."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from burpee_timer.workout.model import (
    DEFAULT_COUNTS_PER_REP,
    SetsConfig,
    WorkoutConfig,
    WorkoutConfigError,
)
from burpee_timer.workout.pacing import validate_config


class WorkoutParseError(WorkoutConfigError):
    """Raised when a workout configuration file is invalid."""


def load_workout_config(path: str | Path) -> WorkoutConfig:
    file_path = Path(path)
    if file_path.suffix.lower() != ".json":
        raise WorkoutParseError(
            f"Unsupported workout format '{file_path.suffix}'. Use .json"
        )

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise WorkoutParseError(f"Cannot read workout {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkoutParseError("Workout JSON must be an object")
    return parse_workout_config(data)


def parse_workout_config(data: dict[str, object]) -> WorkoutConfig:
    mode = data.get("mode", "continuous")
    if mode not in ("continuous", "sets"):
        raise WorkoutParseError("Field 'mode' must be 'continuous' or 'sets'")

    pace = data.get("pace", "default")
    if not isinstance(pace, str):
        raise WorkoutParseError("Field 'pace' must be a string")

    sets_config: SetsConfig | None = None
    sets_obj = data.get("sets")
    if sets_obj is not None:
        if not isinstance(sets_obj, dict):
            raise WorkoutParseError("Field 'sets' must be an object")
        sets_config = SetsConfig(
            sets=_parse_int_field(sets_obj.get("sets"), "sets.sets"),
            reps_per_set=_parse_int_field(sets_obj.get("reps_per_set"), "sets.reps_per_set"),
            rest_between_sets_sec=_parse_float_field(
                sets_obj.get("rest_between_sets_sec", 0), "sets.rest_between_sets_sec"
            ),
        )

    custom_pace_obj = data.get("custom_pace_sec")
    config = WorkoutConfig(
        duration_minutes=_parse_float_field(data.get("duration_minutes"), "duration_minutes"),
        target_reps=_parse_int_field(data.get("target_reps"), "target_reps"),
        mode=mode,  # type: ignore[arg-type]
        sets_config=sets_config,
        counts_per_rep=_parse_int_field(
            data.get("counts_per_rep", DEFAULT_COUNTS_PER_REP), "counts_per_rep"
        ),
        pace=pace,  # type: ignore[arg-type]
        custom_pace_sec=(
            None
            if custom_pace_obj is None
            else _parse_float_field(custom_pace_obj, "custom_pace_sec")
        ),
    )

    try:
        validate_config(config)
    except WorkoutConfigError as exc:
        raise WorkoutParseError(str(exc)) from exc
    return config


def save_workout_config(config: WorkoutConfig, path: str | Path) -> Path:
    target = Path(path)
    payload: dict[str, object] = {
        "duration_minutes": config.duration_minutes,
        "target_reps": config.target_reps,
        "mode": config.mode,
        "counts_per_rep": config.counts_per_rep,
        "pace": config.pace,
        "custom_pace_sec": config.custom_pace_sec,
    }
    if config.sets_config is not None:
        payload["sets"] = asdict(config.sets_config)

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(payload, indent=2, ensure_ascii=True) + "\n", encoding="utf-8")
    return target


def _parse_int_field(raw: object, field_name: str) -> int:
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"Invalid {field_name}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise WorkoutParseError(f"Invalid {field_name}: must be a whole number")
        return int(raw)
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"Invalid {field_name}") from exc


def _parse_float_field(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise WorkoutParseError(f"Invalid {field_name}")
    try:
        return float(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"Invalid {field_name}") from exc
