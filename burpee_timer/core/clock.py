"""Elapsed-time clock that excludes paused intervals."""

from __future__ import annotations

import time
from typing import Callable


class PauseClock:
    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self._started_at: float | None = None
        self._paused_at: float | None = None
        self._paused_total_sec = 0.0

    @property
    def is_started(self) -> bool:
        return self._started_at is not None

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    @property
    def paused_accumulated_ms(self) -> float:
        paused = self._paused_total_sec
        if self._paused_at is not None:
            paused += self._now() - self._paused_at
        return paused * 1000.0

    def start(self) -> None:
        self._started_at = self._now()
        self._paused_at = None
        self._paused_total_sec = 0.0

    def pause(self) -> None:
        if self._started_at is None or self._paused_at is not None:
            return
        self._paused_at = self._now()

    def resume(self) -> None:
        if self._paused_at is None:
            return
        self._paused_total_sec += self._now() - self._paused_at
        self._paused_at = None

    def elapsed_ms(self) -> float:
        if self._started_at is None:
            return 0.0
        # While paused, time stops at the moment the pause began.
        reference = self._paused_at if self._paused_at is not None else self._now()
        elapsed = reference - self._started_at - self._paused_total_sec
        return max(0.0, elapsed * 1000.0)
