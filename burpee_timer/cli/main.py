"""Terminal CLI entrypoint for the burpee timer."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from burpee_timer.core.engine import BurpeeEngine, preview_workout
from burpee_timer.core.session import COUNTDOWN_SEC
from burpee_timer.cues.manifest import CalloutManifest, CalloutManifestError
from burpee_timer.workout.model import (
    PACE_SETTINGS,
    SetsConfig,
    WorkoutConfig,
    WorkoutConfigError,
)
from burpee_timer.workout.pacing import compute_pacing, sets_mismatch_message
from burpee_timer.workout.parser import load_workout_config
from burpee_timer.workout.presets import DEFAULT_PRESET_KEY, get_preset, list_presets


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="6-count burpee workout timer")
    parser.add_argument("--config", type=Path, default=None, help="Workout JSON file")
    parser.add_argument(
        "--preset",
        default=None,
        help=f"Built-in workout preset (default: {DEFAULT_PRESET_KEY})",
    )
    parser.add_argument("--duration", type=float, default=None, help="Duration in minutes")
    parser.add_argument("--reps", type=int, default=None, help="Target rep count")
    parser.add_argument(
        "--pace",
        choices=sorted(PACE_SETTINGS),
        default=None,
        help="Count pace preset",
    )
    parser.add_argument(
        "--custom-pace",
        type=float,
        default=None,
        help="Seconds per count; overrides --pace",
    )
    parser.add_argument("--sets", type=int, default=None, help="Number of sets (sets mode)")
    parser.add_argument("--reps-per-set", type=int, default=None, help="Reps in each set")
    parser.add_argument(
        "--set-rest",
        type=float,
        default=30.0,
        help="Rest between sets in seconds (sets mode)",
    )
    parser.add_argument("--voice", action="store_true", help="Spoken callouts instead of tones")
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Callout manifest JSON with pre-recorded count/rep clips",
    )
    parser.add_argument(
        "--countdown",
        type=int,
        default=COUNTDOWN_SEC,
        help="Get-ready countdown in seconds",
    )
    parser.add_argument("--plan", action="store_true", help="Print the pacing plan and exit")
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the full cue timeline instantly (virtual clock)",
    )
    parser.add_argument("--list-presets", action="store_true", help="List built-in presets")
    parser.add_argument("--ui-web", action="store_true", help="Launch the NiceGUI web UI")
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8088, help="Port for --ui-web")
    parser.add_argument(
        "--audio-dir",
        type=Path,
        default=None,
        help="Directory served at /audio for clip playback in --ui-web",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> WorkoutConfig:
    if args.config is not None:
        config = load_workout_config(args.config)
    else:
        try:
            config = get_preset(args.preset or DEFAULT_PRESET_KEY).config
        except KeyError as exc:
            raise WorkoutConfigError(str(exc.args[0])) from exc

    changes: dict[str, object] = {}
    if args.duration is not None:
        changes["duration_minutes"] = args.duration
    if args.reps is not None:
        changes["target_reps"] = args.reps
    if args.pace is not None:
        changes["pace"] = args.pace
        changes["custom_pace_sec"] = None
    if args.custom_pace is not None:
        changes["custom_pace_sec"] = args.custom_pace
    if args.sets is not None or args.reps_per_set is not None:
        if args.sets is None or args.reps_per_set is None:
            raise WorkoutConfigError("--sets and --reps-per-set must be given together")
        changes["mode"] = "sets"
        changes["sets_config"] = SetsConfig(
            sets=args.sets,
            reps_per_set=args.reps_per_set,
            rest_between_sets_sec=args.set_rest,
        )
        if args.reps is None:
            changes["target_reps"] = args.sets * args.reps_per_set
    return config.with_changes(**changes) if changes else config


def print_plan(config: WorkoutConfig, voice_mode_enabled: bool) -> None:
    plan = compute_pacing(config, voice_mode_enabled)
    print(f"Duration:        {config.duration_minutes:g} min")
    print(f"Target reps:     {config.target_reps}")
    if config.mode == "sets" and config.sets_config is not None:
        sets_config = config.sets_config
        print(
            f"Sets:            {sets_config.sets} x {sets_config.reps_per_set} "
            f"({sets_config.rest_between_sets_sec:g}s rest)"
        )
    print(f"Seconds/count:   {plan.seconds_per_count:.2f}")
    print(f"Seconds/burpee:  {plan.seconds_per_burpee:.2f}")
    print(f"Seconds/rep:     {plan.seconds_per_rep:.2f}")
    print(f"Rest/rep:        {plan.rest_between_reps_sec:.2f}")
    if plan.reps_per_minute is not None:
        print(f"Reps/minute:     {plan.reps_per_minute:.1f}")
    mismatch = sets_mismatch_message(config)
    if mismatch is not None:
        print(f"[CONFIG] {mismatch}")


def run_list_presets() -> int:
    for preset in list_presets():
        config = preset.config
        print(
            f"{preset.key:<16} {preset.name:<20} [{preset.category}] "
            f"{config.target_reps} reps / {config.duration_minutes:g} min"
        )
    return 0


async def run_terminal(
    config: WorkoutConfig,
    voice_mode_enabled: bool,
    manifest: CalloutManifest | None,
    countdown_sec: int,
) -> int:
    engine = BurpeeEngine(
        config,
        voice_mode_enabled=voice_mode_enabled,
        manifest=manifest,
        countdown_sec=countdown_sec,
    )
    completed = await engine.run()
    return 0 if completed else 1


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    if args.list_presets:
        return run_list_presets()
    if args.ui_web:
        from burpee_timer.ui.web_app import run_web_ui

        return run_web_ui(
            host=args.web_host,
            port=args.web_port,
            manifest_path=args.manifest,
            audio_dir=args.audio_dir,
            countdown_sec=max(0, args.countdown),
        )

    try:
        config = resolve_config(args)
        compute_pacing(config, args.voice)
        manifest = CalloutManifest.load(args.manifest) if args.manifest else None
    except (WorkoutConfigError, CalloutManifestError) as exc:
        print(f"Error: {exc}")
        return 2

    if args.plan:
        print_plan(config, args.voice)
        return 0
    if args.preview:
        progress = preview_workout(
            config,
            voice_mode_enabled=args.voice,
            manifest=manifest,
            countdown_sec=max(0, args.countdown),
        )
        return 0 if progress.completed else 1

    try:
        return asyncio.run(run_terminal(config, args.voice, manifest, max(0, args.countdown)))
    except KeyboardInterrupt:
        print("Workout interrupted")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
