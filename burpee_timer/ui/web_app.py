"""NiceGUI web UI for the burpee timer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import cast

from nicegui import Client, app, ui

from burpee_timer.core.state import Phase, SessionProgress
from burpee_timer.cues.manifest import CalloutManifest, CalloutManifestError
from burpee_timer.ui.browser_audio import BrowserAudio
from burpee_timer.ui.controller import UIController
from burpee_timer.workout.model import (
    PACE_SETTINGS,
    Pace,
    SetsConfig,
    WorkoutConfigError,
    WorkoutMode,
)
from burpee_timer.workout.pacing import format_time, sets_mismatch_message
from burpee_timer.workout.presets import list_presets


REFRESH_SEC = 0.1
MAX_DURATION_MIN = 60
MAX_TARGET_REPS = 1000
CUSTOM_PACE_MIN_SEC = 0.5
CUSTOM_PACE_MAX_SEC = 1.0


@dataclass
class WebState:
    status: str = "Ready"
    error: str | None = None


def _phase_caption(progress: SessionProgress) -> str:
    if progress.paused:
        return "PAUSED"
    return {
        Phase.IDLE: "READY",
        Phase.COUNTING_DOWN: "GET READY",
        Phase.ACTIVE: "GO",
        Phase.RESTING_BETWEEN_REPS: "REST",
        Phase.RESTING_BETWEEN_SETS: "SET BREAK",
        Phase.STOPPED: "DONE",
    }[progress.phase]


def _big_number(progress: SessionProgress) -> str:
    if progress.phase is Phase.COUNTING_DOWN:
        return str(progress.countdown_remaining)
    if progress.is_resting:
        return str(progress.rest_display_sec)
    if progress.phase is Phase.ACTIVE:
        return str(progress.current_count) if progress.current_count else "-"
    return str(progress.current_rep)


def run_web_ui(
    *,
    host: str = "127.0.0.1",
    port: int = 8088,
    manifest_path: Path | None = None,
    audio_dir: Path | None = None,
    countdown_sec: int = 5,
) -> int:
    manifest: CalloutManifest | None = None
    if manifest_path is not None:
        try:
            manifest = CalloutManifest.load(manifest_path)
        except CalloutManifestError as exc:
            print(f"[MANIFEST] Warning: {exc}. Voice mode will use speech only.")
    if audio_dir is not None:
        app.add_static_files("/audio", str(audio_dir))

    @ui.page("/")
    def index(client: Client) -> None:
        audio = BrowserAudio(client)
        controller = UIController(audio, manifest=manifest, countdown_sec=countdown_sec)
        state = WebState()
        presets = {preset.name: preset for preset in list_presets()}

        ui.add_head_html(
            """
            <style>
              body {
                background: radial-gradient(circle at top, #1e3a8a 0%, #0b1220 60%);
                color: #e5e7eb;
                font-family: Arial, "Segoe UI", sans-serif;
              }
              .bt-card {
                background: rgba(255, 255, 255, 0.08);
                border: 1px solid rgba(255, 255, 255, 0.2);
                border-radius: 18px;
              }
              .bt-big {
                font-size: 7rem;
                font-weight: 800;
                line-height: 1;
                color: #ffffff;
              }
              .bt-rest { color: #fbbf24; }
              .bt-muted { color: #9caecf; }
            </style>
            """
        )

        with ui.column().classes("w-full max-w-md mx-auto gap-3 p-4"):
            ui.label("Burpee Workout").classes("text-3xl font-bold self-center")
            status_label = ui.label("Ready").classes("text-sm bt-muted self-center")

            with ui.card().classes("w-full bt-card items-center") as display_card:
                phase_label = ui.label("READY").classes("text-lg font-semibold")
                big_label = ui.label("0").classes("bt-big")
                rep_label = ui.label("Reps: 0 / 0").classes("text-lg")
                set_label = ui.label("").classes("text-sm bt-muted")
                time_label = ui.label("00:00 / 00:00").classes("text-lg")
                progress_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-full")

            with ui.card().classes("w-full bt-card") as config_card:
                pacing_label = ui.label("").classes("text-xl font-semibold self-center")
                pacing_detail = ui.label("").classes("text-sm bt-muted self-center")
                preset_select = ui.select(list(presets), label="Preset").classes("w-full")
                with ui.row().classes("w-full gap-2"):
                    duration_input = ui.number(
                        "Duration (min)",
                        value=controller.config.duration_minutes,
                        min=1,
                        max=MAX_DURATION_MIN,
                    )
                    reps_input = ui.number(
                        "Target reps",
                        value=controller.config.target_reps,
                        min=1,
                        max=MAX_TARGET_REPS,
                        step=10,
                    )
                mode_select = ui.select(
                    {"continuous": "Continuous", "sets": "Sets"},
                    value=controller.config.mode,
                    label="Mode",
                ).classes("w-full")
                with ui.row().classes("w-full gap-2") as sets_row:
                    sets_input = ui.number("Sets", value=5, min=1, max=50)
                    reps_per_set_input = ui.number("Reps / set", value=20, min=1, max=500)
                    set_rest_input = ui.number("Set rest (s)", value=30, min=0, max=600)
                pace_select = ui.select(
                    {key: f"{key.capitalize()} ({value:.2f}s)" for key, value in PACE_SETTINGS.items()},
                    value=controller.config.pace,
                    label="Pace",
                ).classes("w-full")
                custom_pace_switch = ui.switch("Custom pace", value=False)
                custom_pace_slider = ui.slider(
                    min=CUSTOM_PACE_MIN_SEC,
                    max=CUSTOM_PACE_MAX_SEC,
                    step=0.025,
                    value=PACE_SETTINGS["default"],
                )
                voice_switch = ui.switch("Voice callouts", value=controller.voice_mode_enabled)

            with ui.row().classes("w-full gap-2 justify-center"):
                start_btn = ui.button("Start").props("color=positive size=lg")
                pause_btn = ui.button("Pause").props("color=warning size=lg")
                stop_btn = ui.button("Stop").props("color=negative size=lg")

        def apply_config() -> None:
            if controller.workout_running:
                return
            mode = cast(WorkoutMode, mode_select.value or "continuous")
            sets_config: SetsConfig | None = None
            if mode == "sets":
                sets_config = SetsConfig(
                    sets=int(sets_input.value or 1),
                    reps_per_set=int(reps_per_set_input.value or 1),
                    rest_between_sets_sec=float(set_rest_input.value or 0),
                )
            controller.update_config(
                duration_minutes=float(duration_input.value or 1),
                target_reps=int(reps_input.value or 1),
                mode=mode,
                sets_config=sets_config,
                pace=cast(Pace, pace_select.value or "default"),
                custom_pace_sec=(
                    float(custom_pace_slider.value) if custom_pace_switch.value else None
                ),
            )
            controller.set_voice_mode(bool(voice_switch.value))
            refresh_ui()

        def apply_preset() -> None:
            preset = presets.get(str(preset_select.value or ""))
            if preset is None or controller.workout_running:
                return
            config = preset.config
            duration_input.value = config.duration_minutes
            reps_input.value = config.target_reps
            mode_select.value = config.mode
            if config.sets_config is not None:
                sets_input.value = config.sets_config.sets
                reps_per_set_input.value = config.sets_config.reps_per_set
                set_rest_input.value = config.sets_config.rest_between_sets_sec
            pace_select.value = config.pace
            custom_pace_switch.value = config.custom_pace_sec is not None
            apply_config()

        def refresh_pacing() -> None:
            try:
                plan = controller.pacing()
            except WorkoutConfigError as exc:
                state.error = str(exc)
                pacing_label.text = "Invalid workout"
                pacing_detail.text = state.error
                return
            state.error = None
            pacing_label.text = f"{plan.seconds_per_rep:.1f}s per rep"
            per_minute = plan.reps_per_minute
            pacing_detail.text = (
                f"{per_minute:.1f} reps/min" if per_minute is not None else "-- reps/min"
            ) + (
                f" | {plan.seconds_per_burpee:.1f}s burpee"
                f" | {plan.rest_between_reps_sec:.1f}s rest"
            )
            mismatch = sets_mismatch_message(controller.config)
            if mismatch is not None:
                pacing_detail.text += f" | {mismatch}"

        def refresh_ui() -> None:
            progress = controller.snapshot()
            running = progress.is_running
            status_label.text = state.status
            phase_label.text = _phase_caption(progress)
            big_label.text = _big_number(progress)
            if progress.is_resting:
                big_label.classes(add="bt-rest")
            else:
                big_label.classes(remove="bt-rest")
            rep_label.text = f"Reps: {progress.current_rep} / {progress.target_reps}"
            config = controller.config
            if config.mode == "sets" and config.sets_config is not None:
                set_label.text = f"Set {progress.current_set} / {config.sets_config.sets}"
            else:
                set_label.text = ""
            time_label.text = (
                f"{format_time(progress.elapsed_ms)} / {format_time(progress.duration_ms)}"
            )
            progress_bar.value = (
                min(1.0, progress.current_rep / progress.target_reps)
                if progress.target_reps
                else 0.0
            )

            sets_row.set_visibility(mode_select.value == "sets")
            pace_select.set_enabled(not custom_pace_switch.value)
            custom_pace_slider.set_visibility(bool(custom_pace_switch.value))
            config_card.set_visibility(not running)
            display_card.set_visibility(running or progress.phase is Phase.STOPPED)
            start_btn.set_enabled(not running and state.error is None)
            pause_btn.set_enabled(running)
            pause_btn.text = "Resume" if progress.paused else "Pause"
            stop_btn.set_enabled(running)
            if not running:
                refresh_pacing()

        def on_finish(completed: bool) -> None:
            state.status = "Workout complete!" if completed else "Workout stopped"
            refresh_ui()

        def on_start() -> None:
            apply_config()
            audio.unlock()
            if manifest is not None and controller.voice_mode_enabled:
                audio.preload(manifest)
            try:
                controller.start_workout(on_finish=on_finish)
            except WorkoutConfigError as exc:
                ui.notify(str(exc), color="negative")
                return
            state.status = "Workout started"
            refresh_ui()

        def on_pause() -> None:
            paused = controller.pause_workout()
            state.status = "Paused" if paused else "Workout running"
            refresh_ui()

        def on_stop() -> None:
            controller.stop_workout()
            refresh_ui()

        for field in (
            duration_input,
            reps_input,
            mode_select,
            sets_input,
            reps_per_set_input,
            set_rest_input,
            pace_select,
            custom_pace_switch,
            custom_pace_slider,
            voice_switch,
        ):
            field.on_value_change(lambda _: apply_config())
        preset_select.on_value_change(lambda _: apply_preset())
        start_btn.on_click(on_start)
        pause_btn.on_click(on_pause)
        stop_btn.on_click(on_stop)
        client.on_disconnect(controller.stop_workout)

        refresh_ui()
        ui.timer(REFRESH_SEC, refresh_ui)

    ui.run(host=host, port=port, reload=False, title="Burpee Timer")
    return 0
