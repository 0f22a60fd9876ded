from __future__ import annotations

import pytest

from burpee_timer.core.clock import PauseClock


class FakeTime:
    def __init__(self) -> None:
        self.value = 100.0

    def __call__(self) -> float:
        return self.value


def test_elapsed_excludes_paused_interval() -> None:
    now = FakeTime()
    clock = PauseClock(now=now)
    clock.start()

    now.value += 2.0
    clock.pause()
    now.value += 10.0
    assert clock.elapsed_ms() == pytest.approx(2000.0)
    assert clock.paused_accumulated_ms == pytest.approx(10_000.0)

    clock.resume()
    now.value += 1.0

    assert clock.elapsed_ms() == pytest.approx(3000.0)
    assert clock.paused_accumulated_ms == pytest.approx(10_000.0)
    assert not clock.is_paused


def test_double_pause_and_resume_are_noops() -> None:
    now = FakeTime()
    clock = PauseClock(now=now)
    clock.start()
    now.value += 1.0
    clock.pause()
    now.value += 1.0
    clock.pause()
    now.value += 1.0
    clock.resume()
    clock.resume()
    now.value += 1.0

    assert clock.elapsed_ms() == pytest.approx(2000.0)
    assert clock.paused_accumulated_ms == pytest.approx(2000.0)


def test_clock_before_start() -> None:
    now = FakeTime()
    clock = PauseClock(now=now)
    clock.pause()
    now.value += 5.0

    assert not clock.is_started
    assert not clock.is_paused
    assert clock.elapsed_ms() == 0.0


def test_restart_clears_paused_accounting() -> None:
    now = FakeTime()
    clock = PauseClock(now=now)
    clock.start()
    clock.pause()
    now.value += 4.0
    clock.resume()

    clock.start()
    now.value += 0.5

    assert clock.elapsed_ms() == pytest.approx(500.0)
    assert clock.paused_accumulated_ms == 0.0
