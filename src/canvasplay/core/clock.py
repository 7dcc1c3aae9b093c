"""Clock abstraction used to pace the host frame loop.

A Clock provides monotonic time and an async sleep. The real clock uses the
system monotonic timer; the simulated clock only moves when a test advances
it, which makes frame pacing deterministic.

Real-time usage:
    clock = RealClock()
    start = clock.monotonic()
    await clock.sleep(1 / 60)

Simulated usage:
    clock = SimClock()
    task = asyncio.create_task(clock.sleep(0.5))
    clock.advance(0.5)  # wakes the sleeper
    await task
"""

from __future__ import annotations

import asyncio
import heapq
import time
from typing import Protocol

__all__ = [
    "Clock",
    "RealClock",
    "SimClock",
]


class Clock(Protocol):
    """Monotonic time plus async sleep."""

    def monotonic(self) -> float:
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class RealClock:
    """Clock backed by :func:`time.monotonic` and :func:`asyncio.sleep`."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class SimClock:
    """Deterministic clock driven by :meth:`advance`.

    Sleepers are kept in a heap ordered by due time and resolved when the
    simulated time reaches them. ``sleep(0)`` only yields to the event loop.
    """

    def __init__(self, *, start: float = 0.0) -> None:
        self._now: float = float(start)
        # (due_time, seq, future); seq breaks ties in FIFO order
        self._sleepers: list[tuple[float, int, asyncio.Future[None]]] = []
        self._seq: int = 0

    def monotonic(self) -> float:
        return self._now

    def advance(self, dt: float) -> None:
        """Move simulated time forward by ``dt`` seconds.

        Raises:
            ValueError: If dt < 0
        """
        if dt < 0:
            raise ValueError(f"SimClock cannot go backwards (dt={dt})")
        self._now += dt
        self._wake_due()

    async def sleep(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError(f"negative sleep: {seconds}")
        if seconds == 0:
            await asyncio.sleep(0)
            return
        fut: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._seq += 1
        heapq.heappush(self._sleepers, (self._now + seconds, self._seq, fut))
        await fut

    def next_due(self) -> float | None:
        """Return the due time of the earliest sleeper, if any."""
        if not self._sleepers:
            return None
        return self._sleepers[0][0]

    def _wake_due(self) -> None:
        while self._sleepers and self._sleepers[0][0] <= self._now:
            _due, _seq, fut = heapq.heappop(self._sleepers)
            # Cancelled sleepers are already done
            if not fut.done():
                fut.set_result(None)
