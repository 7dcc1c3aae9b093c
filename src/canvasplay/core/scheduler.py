"""Display-refresh frame scheduler.

``FrameScheduler`` is the "run on the next display refresh" primitive the
game loop re-submits itself to. The host calls :meth:`FrameScheduler.pump`
once per refresh; every callback queued before that call runs, and any
callback queued while the pump is running waits for the following refresh.

Example:
    sched = FrameScheduler()
    handle = sched.schedule_next_frame(tick)
    sched.cancel(handle)   # tick will never run
    sched.pump()           # runs nothing
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

__all__ = ["FrameCallback", "FrameScheduler"]

logger = logging.getLogger(__name__)

FrameCallback = Callable[[], None]


class FrameScheduler:
    """Queue of callbacks waiting for the next display refresh.

    Handles are positive integers, unique for the lifetime of the scheduler,
    so a cancelled handle is never reused by a later request.
    """

    def __init__(self) -> None:
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle: int = 0
        self._frames: int = 0

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next refresh."""
        return len(self._pending)

    @property
    def frames(self) -> int:
        """Number of refreshes pumped so far."""
        return self._frames

    def schedule_next_frame(self, callback: FrameCallback) -> int:
        self._next_handle += 1
        handle = self._next_handle
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int | None) -> bool:
        """Drop a pending callback. Returns False if it was not pending."""
        if handle is None:
            return False
        return self._pending.pop(handle, None) is not None

    def is_pending(self, handle: int | None) -> bool:
        return handle is not None and handle in self._pending

    def pump(self) -> int:
        """Run one display refresh and return the number of callbacks run."""
        self._frames += 1
        due = sorted(self._pending)
        ran = 0
        for handle in due:
            # A callback earlier in this refresh may have cancelled this one
            cb = self._pending.pop(handle, None)
            if cb is None:
                continue
            cb()
            ran += 1
        if ran:
            logger.debug("frame %d ran %d callback(s)", self._frames, ran)
        return ran
