from __future__ import annotations

import logging

import pytest

from canvasplay.core.game_loop import GameLoop, LoopPhase
from canvasplay.core.scene import scene_factory
from canvasplay.core.scheduler import FrameScheduler


class CountingScheduler(FrameScheduler):
    """FrameScheduler that records every schedule and cancel request."""

    def __init__(self) -> None:
        super().__init__()
        self.scheduled: list[int] = []
        self.cancelled: list[int | None] = []

    def schedule_next_frame(self, callback):  # type: ignore[no-untyped-def]
        h = super().schedule_next_frame(callback)
        self.scheduled.append(h)
        return h

    def cancel(self, handle):  # type: ignore[no-untyped-def]
        self.cancelled.append(handle)
        return super().cancel(handle)


# Square heading straight down into the obstacle: x range overlaps, bottom
# edge at 100 + 46 = 146 and the obstacle top at 250 -> the gap of 104 px
# closes on tick 53 at speed 2.
_NEAR = {
    "square": {"x": 260, "y": 100, "speed": 2},
    "circle": {"x": 40, "y": 40},
    "obstacle": {"x": 250, "y": 250},
}


@pytest.fixture
def sched() -> CountingScheduler:
    return CountingScheduler()


def make_loop(surface, sched, entities=None, **kw) -> GameLoop:
    return GameLoop(
        surface=surface,
        scheduler=sched,
        scene_factory=scene_factory(entities),
        **kw,
    )


class TestLifecycle:
    def test_initial_state(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        assert loop.phase is LoopPhase.IDLE
        assert loop.running is False
        assert loop.frame_handle is None
        assert surface.calls == []

    def test_start_draws_first_frame_and_schedules_next(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        assert loop.start() is True
        assert loop.phase is LoopPhase.RUNNING
        assert loop.frames == 1
        assert sched.pending == 1
        assert loop.frame_handle == sched.scheduled[-1]

    def test_frame_order(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        assert surface.calls[0] == ("clear", 0, 0, 600, 600)
        # square, circle, obstacle
        assert [c[0] for c in surface.shapes()] == ["rect", "arc", "rect"]
        assert surface.shapes()[0][1:3] == (502, 52)
        assert surface.shapes()[2][1:3] == (250, 250)

    def test_move_happens_before_clear(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.on_key_down("a")
        loop.start()
        # first drawn square already moved
        assert surface.shapes()[0][1] == 500

    def test_each_pump_runs_one_tick(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        for _ in range(10):
            sched.pump()
        assert loop.frames == 11
        assert sched.pending == 1

    def test_invalid_restart_policy(self, surface, sched) -> None:
        with pytest.raises(ValueError, match="restart_policy"):
            make_loop(surface, sched, restart_policy="sometimes")


class TestGameOver:
    def test_collision_ends_session_on_first_overlapping_tick(
        self, surface, sched
    ) -> None:
        notified: list[int] = []
        loop = make_loop(surface, sched, _NEAR, on_game_over=notified.append)
        loop.on_key_down("s")
        loop.start()
        ticks = 1
        while loop.running:
            assert notified == []
            sched.pump()
            ticks += 1
            assert ticks < 1000
        assert ticks == 53
        assert loop.phase is LoopPhase.GAME_OVER
        assert loop.square.y + loop.square.height > loop.obstacle.y
        assert loop.frame_handle is None
        assert notified == [1]

    def test_no_tick_scheduled_after_game_over(self, surface, sched) -> None:
        loop = make_loop(surface, sched, _NEAR)
        loop.on_key_down("s")
        loop.start()
        while loop.running:
            sched.pump()
        count = len(sched.scheduled)
        for _ in range(5):
            sched.pump()
        assert len(sched.scheduled) == count
        assert sched.pending == 0

    def test_game_over_sink_called_exactly_once(self, surface, sched) -> None:
        notified: list[int] = []
        loop = make_loop(surface, sched, _NEAR, on_game_over=notified.append)
        loop.on_key_down("s")
        loop.start()
        for _ in range(200):
            sched.pump()
        loop.stop()
        loop.on_key_down("2")
        assert notified == [1]

    def test_collision_on_first_frame(self, surface, sched) -> None:
        notified: list[int] = []
        overlapping = {"square": {"x": 260, "y": 260}}
        loop = make_loop(surface, sched, overlapping, on_game_over=notified.append)
        loop.start()
        assert loop.phase is LoopPhase.GAME_OVER
        assert sched.pending == 0
        assert notified == [1]

    def test_game_over_logs_warning(self, surface, sched, caplog) -> None:
        loop = make_loop(surface, sched, {"square": {"x": 260, "y": 260}})
        with caplog.at_level(logging.WARNING, logger="canvasplay.core.game_loop"):
            loop.start()
        assert any("game over" in r.message for r in caplog.records)


class TestStop:
    def test_stop_cancels_pending_tick(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        handle = loop.frame_handle
        assert loop.stop() is True
        assert sched.cancelled == [handle]
        assert loop.frame_handle is None
        assert loop.phase is LoopPhase.IDLE

    def test_no_frame_drawn_after_stop(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        loop.stop()
        surface.reset()
        for _ in range(5):
            sched.pump()
        assert surface.calls == []
        assert loop.frames == 1

    def test_stale_tick_does_nothing(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        # Grab the pending callback, stop, then fire it by hand
        stale = next(iter(sched._pending.values()))
        loop.stop()
        surface.reset()
        stale()
        assert surface.calls == []
        assert sched.pending == 0

    def test_stop_does_not_touch_surface(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        surface.reset()
        loop.stop()
        assert surface.calls == []

    def test_stop_when_idle_is_noop(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        assert loop.stop() is False
        assert sched.cancelled == []

    def test_stop_after_game_over_is_noop(self, surface, sched) -> None:
        loop = make_loop(surface, sched, {"square": {"x": 260, "y": 260}})
        loop.start()
        assert loop.stop() is False
        assert loop.phase is LoopPhase.GAME_OVER

    def test_stop_then_restart_resumes_positions(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.on_key_down("a")
        loop.start()
        sched.pump()
        loop.stop()
        x = loop.square.x
        loop.on_key_down("1")
        assert loop.running
        assert loop.square.x == x - 2
        assert loop.session == 1


class TestRestart:
    def test_restart_while_running_keeps_single_handle(
        self, surface, sched, caplog
    ) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        with caplog.at_level(logging.INFO, logger="canvasplay.core.game_loop"):
            assert loop.restart() is False
            loop.on_key_down("1")
        assert sched.pending == 1
        assert len(sched.scheduled) == 1
        assert loop.frames == 1
        assert any("already running" in r.message for r in caplog.records)

    def test_reset_policy_starts_fresh_session(self, surface, sched) -> None:
        notified: list[int] = []
        loop = make_loop(
            surface, sched, _NEAR, on_game_over=notified.append, restart_policy="reset"
        )
        loop.on_key_down("s")
        loop.start()
        while loop.running:
            sched.pump()
        first_scene = loop.scene

        loop.on_key_down("1")
        assert loop.phase is LoopPhase.RUNNING
        assert loop.session == 2
        assert loop.scene is not first_scene
        # positions reset and held keys released
        assert (loop.square.x, loop.square.y) == (260, 100)
        assert loop.square.direction.held() == frozenset()
        assert sched.pending == 1

        loop.on_key_down("s")
        while loop.running:
            sched.pump()
        assert notified == [1, 2]

    def test_reject_policy_keeps_game_over(self, surface, sched) -> None:
        loop = make_loop(
            surface, sched, {"square": {"x": 260, "y": 260}}, restart_policy="reject"
        )
        loop.start()
        surface.reset()
        assert loop.restart() is False
        assert loop.start() is False
        assert loop.phase is LoopPhase.GAME_OVER
        assert loop.session == 1
        assert sched.pending == 0
        assert surface.calls == []


class TestKeyRouting:
    def test_wasd_drives_square(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.on_key_down("w")
        loop.on_key_down("d")
        assert loop.square.direction.held() == {"up", "right"}
        loop.on_key_up("w")
        assert loop.square.direction.held() == {"right"}

    def test_arrows_step_circle_even_when_idle(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.on_key_down("ArrowDown")
        assert loop.circle.y == 50
        assert surface.names()[0] == "clear"

    def test_arrows_ignored_after_game_over(self, surface, sched) -> None:
        loop = make_loop(surface, sched, {"square": {"x": 260, "y": 260}})
        loop.start()
        surface.reset()
        y = loop.circle.y
        loop.on_key_down("ArrowDown")
        assert loop.circle.y == y
        assert surface.calls == []

    def test_key_up_on_arrow_is_ignored(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.on_key_up("ArrowDown")
        assert surface.calls == []

    def test_stop_key(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        loop.on_key_down("2")
        assert loop.phase is LoopPhase.IDLE
        assert sched.pending == 0

    def test_unrecognized_keys_ignored(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        for key in ("x", "Enter", "3", "W"):
            loop.on_key_down(key)
            loop.on_key_up(key)
        assert loop.phase is LoopPhase.IDLE
        assert loop.square.direction.held() == frozenset()
        assert surface.calls == []

    def test_key_events_before_refresh_are_seen_by_tick(self, surface, sched) -> None:
        loop = make_loop(surface, sched)
        loop.start()
        x0 = loop.square.x
        loop.on_key_down("d")
        sched.pump()
        assert loop.square.x == x0 + 2
        loop.on_key_up("d")
        sched.pump()
        assert loop.square.x == x0 + 2
