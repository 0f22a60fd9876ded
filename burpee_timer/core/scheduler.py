"""Periodic tickers on the asyncio loop, or on virtual time for previews."""

from __future__ import annotations

import asyncio
import itertools
import math
import time
from typing import Callable, Optional, Protocol


TickCallback = Callable[[], None]


class Ticker(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def now(self) -> float: ...

    def every(
        self,
        period_sec: float,
        callback: TickCallback,
        *,
        delay_sec: float | None = None,
    ) -> Ticker: ...


class AsyncioTicker:
    def __init__(self, period_sec: float, callback: TickCallback, delay_sec: float) -> None:
        if period_sec <= 0:
            raise ValueError("Ticker period must be > 0")
        self._period = period_sec
        self._callback = callback
        self._delay = max(0.0, delay_sec)
        self._cancelled = False
        self._task: Optional[asyncio.Task[None]] = asyncio.get_running_loop().create_task(
            self._run()
        )
        self._task.add_done_callback(_report_ticker_failure)

    @property
    def active(self) -> bool:
        return not self._cancelled and self._task is not None and not self._task.done()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        first_deadline = loop.time() + self._delay
        tick_index = 0
        while not self._cancelled:
            deadline = first_deadline + tick_index * self._period
            await asyncio.sleep(max(0.0, deadline - loop.time()))
            if self._cancelled:
                return
            self._callback()
            # Deadlines stay anchored to the first tick; ticks missed while
            # the loop was busy are dropped, not replayed.
            due_index = math.floor((loop.time() - first_deadline) / self._period)
            tick_index = max(tick_index + 1, due_index + 1)


def _report_ticker_failure(task: asyncio.Task[None]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        print(f"[TICKER] callback failed: {exc!r}")


class AsyncioScheduler:
    """Scheduler backed by tasks on the running asyncio loop."""

    def now(self) -> float:
        return time.monotonic()

    def every(
        self,
        period_sec: float,
        callback: TickCallback,
        *,
        delay_sec: float | None = None,
    ) -> AsyncioTicker:
        return AsyncioTicker(
            period_sec,
            callback,
            period_sec if delay_sec is None else delay_sec,
        )


class VirtualTicker:
    def __init__(
        self,
        period_sec: float,
        callback: TickCallback,
        first_deadline: float,
        order: int,
    ) -> None:
        if period_sec <= 0:
            raise ValueError("Ticker period must be > 0")
        self.period = period_sec
        self.callback = callback
        self.first_deadline = first_deadline
        self.order = order
        self.fired = 0
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled

    @property
    def next_deadline(self) -> float:
        return self.first_deadline + self.fired * self.period

    def cancel(self) -> None:
        self._cancelled = True


class VirtualScheduler:
    """Deterministic scheduler: time only moves when ``advance`` is called."""

    _EPSILON = 1e-9

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._order = itertools.count()
        self._tickers: list[VirtualTicker] = []

    def now(self) -> float:
        return self._now

    def every(
        self,
        period_sec: float,
        callback: TickCallback,
        *,
        delay_sec: float | None = None,
    ) -> VirtualTicker:
        delay = period_sec if delay_sec is None else max(0.0, delay_sec)
        ticker = VirtualTicker(period_sec, callback, self._now + delay, next(self._order))
        self._tickers.append(ticker)
        return ticker

    @property
    def pending(self) -> int:
        return sum(1 for ticker in self._tickers if ticker.active)

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("Cannot move virtual time backwards")
        target = self._now + seconds
        while True:
            due = [
                ticker
                for ticker in self._tickers
                if ticker.active and ticker.next_deadline <= target + self._EPSILON
            ]
            if not due:
                break
            ticker = min(due, key=lambda item: (item.next_deadline, item.order))
            self._now = max(self._now, ticker.next_deadline)
            ticker.fired += 1
            ticker.callback()
        self._tickers = [ticker for ticker in self._tickers if ticker.active]
        self._now = target

    def run_until(
        self,
        predicate: Callable[[], bool],
        *,
        step: float = 0.05,
        limit: float = 3600.0,
    ) -> bool:
        waited = 0.0
        while not predicate():
            if waited >= limit:
                return False
            self.advance(step)
            waited += step
        return True


class TickerSlots:
    """Named ticker handles; arming a slot always cancels its previous ticker."""

    # A tick due within this window counts as already fired.
    _DUE_EPSILON_SEC = 1e-6

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._slots: dict[str, Ticker] = {}
        self._timing: dict[str, tuple[float, TickCallback, float]] = {}

    def arm(
        self,
        name: str,
        period_sec: float,
        callback: TickCallback,
        *,
        delay_sec: float | None = None,
    ) -> Ticker:
        self.cancel(name)
        ticker = self._scheduler.every(period_sec, callback, delay_sec=delay_sec)
        delay = period_sec if delay_sec is None else max(0.0, delay_sec)
        self._slots[name] = ticker
        self._timing[name] = (period_sec, callback, self._scheduler.now() + delay)
        return ticker

    def until_next(self, name: str) -> float | None:
        """Seconds until the slot's next tick, or None when it is not armed."""
        if not self.is_armed(name):
            return None
        period, _, first_deadline = self._timing[name]
        now = self._scheduler.now()
        if now < first_deadline:
            return first_deadline - now
        remaining = period - (now - first_deadline) % period
        if remaining < self._DUE_EPSILON_SEC or remaining > period - self._DUE_EPSILON_SEC:
            return period
        return remaining

    def rearm(self, name: str, delay_sec: float) -> Ticker | None:
        """Restart a slot's ticker with its last period and callback."""
        timing = self._timing.get(name)
        if timing is None or not self.is_armed(name):
            return None
        period, callback, _ = timing
        return self.arm(name, period, callback, delay_sec=delay_sec)

    def cancel(self, name: str) -> None:
        self._timing.pop(name, None)
        ticker = self._slots.pop(name, None)
        if ticker is not None:
            ticker.cancel()

    def cancel_all(self) -> None:
        for name in list(self._slots):
            self.cancel(name)

    def is_armed(self, name: str) -> bool:
        ticker = self._slots.get(name)
        return ticker is not None and ticker.active

    def armed_names(self) -> tuple[str, ...]:
        return tuple(name for name, ticker in self._slots.items() if ticker.active)
