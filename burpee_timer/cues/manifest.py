"""Manifest of pre-recorded count and rep callouts cut from a workout video."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Literal


ClipKind = Literal["count", "rep"]


class CalloutManifestError(ValueError):
    """Raised when a callout manifest is invalid."""


@dataclass(frozen=True)
class CalloutClip:
    kind: ClipKind
    value: int
    source: str
    start: float
    end: float
    duration: float
    text: str

    @property
    def clip_id(self) -> str:
        return f"{self.kind}-{self.value}"


class CalloutManifest:
    def __init__(
        self,
        audio_file: str | None,
        counts: dict[int, CalloutClip],
        reps: dict[int, CalloutClip],
    ) -> None:
        self.audio_file = audio_file
        self._counts = dict(counts)
        self._reps = dict(reps)

    @classmethod
    def load(cls, path: str | Path) -> CalloutManifest:
        file_path = Path(path)
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CalloutManifestError(f"Cannot read manifest {file_path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise CalloutManifestError(f"Invalid JSON: {exc}") from exc
        manifest = cls.from_dict(data)
        print(
            f"[MANIFEST] loaded {len(manifest.count_numbers)} count clips and "
            f"{len(manifest.rep_numbers)} rep clips from {file_path.name}"
        )
        return manifest

    @classmethod
    def from_dict(cls, data: object) -> CalloutManifest:
        if not isinstance(data, dict):
            raise CalloutManifestError("Manifest must be an object")

        audio_file = data.get("audioFile")
        if audio_file is not None and not isinstance(audio_file, str):
            raise CalloutManifestError("Field 'audioFile' must be a string")

        return cls(
            audio_file=audio_file,
            counts=_parse_section(data.get("counts"), "count", audio_file),
            reps=_parse_section(data.get("reps"), "rep", audio_file),
        )

    @property
    def count_numbers(self) -> tuple[int, ...]:
        return tuple(sorted(self._counts))

    @property
    def rep_numbers(self) -> tuple[int, ...]:
        return tuple(sorted(self._reps))

    def has_count(self, count: int) -> bool:
        return count in self._counts

    def has_rep(self, rep: int) -> bool:
        return rep in self._reps

    def count_clip(self, count: int) -> CalloutClip | None:
        return self._counts.get(count)

    def rep_clip(self, rep: int) -> CalloutClip | None:
        return self._reps.get(rep)


def _parse_section(
    raw: object, kind: ClipKind, audio_file: str | None
) -> dict[int, CalloutClip]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise CalloutManifestError(f"Field '{kind}s' must be an object")

    clips: dict[int, CalloutClip] = {}
    for key, entry in raw.items():
        try:
            value = int(str(key).strip())
        except ValueError as exc:
            raise CalloutManifestError(f"{kind} key '{key}' is not a number") from exc
        if value <= 0:
            raise CalloutManifestError(f"{kind} {value}: number must be > 0")
        if not isinstance(entry, dict):
            raise CalloutManifestError(f"{kind} {value}: entry must be an object")

        source = entry.get("file", audio_file)
        if not isinstance(source, str) or not source:
            raise CalloutManifestError(f"{kind} {value}: no audio file for clip")

        start = _parse_seconds(entry.get("start", 0.0), kind, value, "start")
        end = _parse_seconds(entry.get("end"), kind, value, "end")
        if end < start:
            raise CalloutManifestError(f"{kind} {value}: end must be >= start")
        duration_obj = entry.get("duration")
        duration = (
            end - start
            if duration_obj is None
            else _parse_seconds(duration_obj, kind, value, "duration")
        )

        text = entry.get("text")
        clips[value] = CalloutClip(
            kind=kind,
            value=value,
            source=source,
            start=start,
            end=end,
            duration=duration,
            text=str(text).strip() if text is not None else str(value),
        )
    return clips


def _parse_seconds(raw: object, kind: str, value: int, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise CalloutManifestError(f"{kind} {value}: missing {field_name}")
    try:
        seconds = float(str(raw).strip())
    except ValueError as exc:
        raise CalloutManifestError(f"{kind} {value}: invalid {field_name}") from exc
    if seconds < 0:
        raise CalloutManifestError(f"{kind} {value}: {field_name} must be >= 0")
    return seconds
