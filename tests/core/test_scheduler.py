"""Tests for the display refresh scheduler."""

from __future__ import annotations

from canvasplay.core.scheduler import FrameScheduler


class TestFrameScheduler:
    def test_pump_runs_scheduled_callbacks_once(self) -> None:
        sched = FrameScheduler()
        ran: list[str] = []
        sched.schedule_next_frame(lambda: ran.append("a"))
        sched.schedule_next_frame(lambda: ran.append("b"))
        assert sched.pending == 2
        assert sched.pump() == 2
        assert ran == ["a", "b"]
        assert sched.pump() == 0
        assert ran == ["a", "b"]

    def test_handles_are_unique(self) -> None:
        sched = FrameScheduler()
        h1 = sched.schedule_next_frame(lambda: None)
        sched.cancel(h1)
        h2 = sched.schedule_next_frame(lambda: None)
        assert h1 != h2

    def test_cancelled_callback_never_runs(self) -> None:
        sched = FrameScheduler()
        ran: list[int] = []
        h = sched.schedule_next_frame(lambda: ran.append(1))
        assert sched.cancel(h) is True
        assert sched.is_pending(h) is False
        sched.pump()
        assert ran == []

    def test_cancel_unknown_handle(self) -> None:
        sched = FrameScheduler()
        assert sched.cancel(None) is False
        assert sched.cancel(42) is False

    def test_callback_scheduled_during_pump_waits_for_next_refresh(self) -> None:
        sched = FrameScheduler()
        ran: list[int] = []

        def again() -> None:
            ran.append(sched.frames)
            sched.schedule_next_frame(again)

        sched.schedule_next_frame(again)
        sched.pump()
        sched.pump()
        sched.pump()
        assert ran == [1, 2, 3]
        assert sched.pending == 1

    def test_callback_can_cancel_later_one_in_same_refresh(self) -> None:
        sched = FrameScheduler()
        ran: list[str] = []
        later: dict[str, int] = {}

        def first() -> None:
            ran.append("first")
            sched.cancel(later["h"])

        sched.schedule_next_frame(first)
        later["h"] = sched.schedule_next_frame(lambda: ran.append("second"))
        assert sched.pump() == 1
        assert ran == ["first"]
