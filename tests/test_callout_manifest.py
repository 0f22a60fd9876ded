from __future__ import annotations

import json
from pathlib import Path

import pytest

from burpee_timer.cues.manifest import CalloutManifest, CalloutManifestError


def test_load_manifest(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "callouts.json"
    path.write_text(
        json.dumps(
            {
                "audioFile": "/audio/burpee-callouts.mp3",
                "counts": {
                    "1": {"start": 0.4, "end": 0.9, "duration": 0.5, "text": "One"},
                    "2": {"start": 1.2, "end": 1.7, "duration": 0.5, "text": "Two"},
                },
                "reps": {
                    "1": {"start": 5.0, "end": 5.6, "text": "1"},
                    "10": {"start": 9.0, "end": 9.9, "file": "/audio/reps.mp3"},
                },
            }
        ),
        encoding="utf-8",
    )

    manifest = CalloutManifest.load(path)

    assert manifest.audio_file == "/audio/burpee-callouts.mp3"
    assert manifest.count_numbers == (1, 2)
    assert manifest.rep_numbers == (1, 10)
    assert manifest.has_count(2) and not manifest.has_count(3)
    assert manifest.has_rep(10) and not manifest.has_rep(2)

    count = manifest.count_clip(1)
    assert count is not None
    assert count.kind == "count"
    assert count.clip_id == "count-1"
    assert count.source == "/audio/burpee-callouts.mp3"
    assert count.text == "One"

    rep = manifest.rep_clip(10)
    assert rep is not None
    assert rep.source == "/audio/reps.mp3"
    assert rep.duration == pytest.approx(0.9)
    assert rep.text == "10"
    assert manifest.rep_clip(4) is None

    assert "[MANIFEST] loaded 2 count clips and 2 rep clips" in capsys.readouterr().out


def test_empty_sections_are_allowed() -> None:
    manifest = CalloutManifest.from_dict({"audioFile": "a.mp3"})

    assert manifest.count_numbers == ()
    assert manifest.rep_numbers == ()


@pytest.mark.parametrize(
    ("payload", "match"),
    [
        ([], "must be an object"),
        ({"audioFile": 3}, "audioFile"),
        ({"counts": []}, "counts"),
        ({"audioFile": "a.mp3", "counts": {"one": {"start": 0, "end": 1}}}, "not a number"),
        ({"audioFile": "a.mp3", "counts": {"0": {"start": 0, "end": 1}}}, "must be > 0"),
        ({"audioFile": "a.mp3", "counts": {"1": "clip"}}, "entry must be an object"),
        ({"counts": {"1": {"start": 0, "end": 1}}}, "no audio file"),
        ({"audioFile": "a.mp3", "counts": {"1": {"start": 0}}}, "missing end"),
        ({"audioFile": "a.mp3", "counts": {"1": {"start": 2, "end": 1}}}, "end must be >= start"),
        ({"audioFile": "a.mp3", "reps": {"1": {"start": -1, "end": 1}}}, "start must be >= 0"),
        ({"audioFile": "a.mp3", "reps": {"1": {"start": "x", "end": 1}}}, "invalid start"),
    ],
)
def test_invalid_manifest_rejected(payload: object, match: str) -> None:
    with pytest.raises(CalloutManifestError, match=match):
        CalloutManifest.from_dict(payload)


def test_load_reports_unreadable_and_malformed_files(tmp_path: Path) -> None:
    with pytest.raises(CalloutManifestError, match="Cannot read manifest"):
        CalloutManifest.load(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(CalloutManifestError, match="Invalid JSON"):
        CalloutManifest.load(broken)
