"""Built-in burpee workout presets."""

from __future__ import annotations

from dataclasses import dataclass

from burpee_timer.workout.model import SetsConfig, WorkoutConfig


@dataclass(frozen=True)
class WorkoutPreset:
    key: str
    name: str
    category: str
    config: WorkoutConfig


PRESETS: tuple[WorkoutPreset, ...] = (
    WorkoutPreset(
        key="starter_10",
        name="Starter 10",
        category="Continuous",
        config=WorkoutConfig(duration_minutes=10, target_reps=60, pace="slower"),
    ),
    WorkoutPreset(
        key="classic_20",
        name="Classic 20 x 200",
        category="Continuous",
        config=WorkoutConfig(duration_minutes=20, target_reps=200),
    ),
    WorkoutPreset(
        key="hundred_in_ten",
        name="100 in 10",
        category="Sets",
        config=WorkoutConfig(
            duration_minutes=10,
            target_reps=100,
            mode="sets",
            sets_config=SetsConfig(sets=5, reps_per_set=20, rest_between_sets_sec=30),
        ),
    ),
    WorkoutPreset(
        key="sprint_sets_15",
        name="Sprint Sets 15",
        category="Sets",
        config=WorkoutConfig(
            duration_minutes=15,
            target_reps=150,
            mode="sets",
            sets_config=SetsConfig(sets=3, reps_per_set=50, rest_between_sets_sec=45),
            pace="faster",
        ),
    ),
)

DEFAULT_PRESET_KEY = "classic_20"


def list_presets(category: str | None = None) -> tuple[WorkoutPreset, ...]:
    if category is None:
        return PRESETS
    return tuple(preset for preset in PRESETS if preset.category == category)


def get_preset(key: str) -> WorkoutPreset:
    preset = next((item for item in PRESETS if item.key == key), None)
    if preset is None:
        raise KeyError(f"Unknown workout preset '{key}'")
    return preset
