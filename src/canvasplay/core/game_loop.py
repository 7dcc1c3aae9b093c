"""Animation loop: frame scheduling, redraw order and collision game over.

Each frame tick, in order:

1. advance the square from the held direction keys,
2. clear the whole surface,
3. draw square, circle, obstacle,
4. if the square overlaps the obstacle, end the session; otherwise
   schedule the next tick on the frame scheduler.

The loop never blocks. It re-submits itself to the :class:`FrameScheduler`
once per tick and keeps at most one pending handle. A token captured by each
scheduled tick lets a tick that fires after :meth:`GameLoop.stop` (or after
a newer tick was scheduled) return without drawing.

Example:
    sched = FrameScheduler()
    loop = GameLoop(surface=surface, scheduler=sched, scene_factory=scene_factory())
    loop.start()              # draws the first frame immediately
    loop.on_key_down("d")     # square starts moving right
    sched.pump()              # next display refresh
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

from canvasplay.core.collision import overlaps
from canvasplay.core.entities import Circle, Obstacle, Square
from canvasplay.core.input import (
    ARROW_KEYS,
    DIRECTION_KEYS,
    RECOGNIZED_KEYS,
    RESTART_KEY,
    STOP_KEY,
)
from canvasplay.core.scene import Scene, SceneFactory
from canvasplay.core.scheduler import FrameScheduler
from canvasplay.render.canvas import RenderSurface, clear_surface
from canvasplay.settings.values import RESTART_POLICIES

__all__ = ["GameLoop", "GameOverSink", "LoopPhase"]

logger = logging.getLogger(__name__)

# Receives the number of the session that just ended
GameOverSink = Callable[[int], None]


class LoopPhase(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    GAME_OVER = "game_over"


class GameLoop:
    """Owns the per-frame tick and the start/stop/restart state machine.

    Parameters
    ----------
    surface: Shared drawing surface for every entity.
    scheduler: Display refresh scheduler the tick re-submits itself to.
    scene_factory: Builds the entities of a session. Called once at
        construction and again for every session after a game over when
        ``restart_policy`` is ``"reset"``.
    on_game_over: Invoked exactly once per session, on the tick that
        detects the collision.
    restart_policy: ``"reset"`` lets the restart key start a fresh session
        after a game over; ``"reject"`` makes game over permanent.
    """

    def __init__(
        self,
        *,
        surface: RenderSurface,
        scheduler: FrameScheduler,
        scene_factory: SceneFactory,
        on_game_over: Optional[GameOverSink] = None,
        restart_policy: str = "reset",
    ) -> None:
        if restart_policy not in RESTART_POLICIES:
            raise ValueError(
                f"unknown restart_policy {restart_policy!r}; "
                f"expected one of {', '.join(RESTART_POLICIES)}"
            )
        self._surface = surface
        self._scheduler = scheduler
        self._scene_factory = scene_factory
        self._on_game_over = on_game_over
        self._restart_policy = restart_policy

        self._scene: Scene = scene_factory()
        self._session: int = 1
        self._phase = LoopPhase.IDLE
        self._running: bool = False
        self._frame_handle: int | None = None
        # Bumped on every schedule/stop; a tick only runs with the latest one
        self._token: int = 0
        self._frames: int = 0

    # State ---------------------------------------------------------------
    @property
    def phase(self) -> LoopPhase:
        return self._phase

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frame_handle(self) -> int | None:
        return self._frame_handle

    @property
    def session(self) -> int:
        return self._session

    @property
    def frames(self) -> int:
        """Ticks drawn in the current session."""
        return self._frames

    @property
    def restart_policy(self) -> str:
        return self._restart_policy

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def square(self) -> Square:
        return self._scene.square

    @property
    def circle(self) -> Circle:
        return self._scene.circle

    @property
    def obstacle(self) -> Obstacle:
        return self._scene.obstacle

    # Control -------------------------------------------------------------
    def start(self) -> bool:
        """Enter RUNNING and draw the first frame now.

        Returns False when the request was ignored: the loop is already
        running, or a game over is final under the ``reject`` policy.
        """
        if self._phase is LoopPhase.RUNNING:
            logger.info("start ignored: loop already running")
            return False
        if self._phase is LoopPhase.GAME_OVER:
            if self._restart_policy == "reject":
                logger.info(
                    "restart rejected: session %d ended in a game over", self._session
                )
                return False
            self._new_session()
        self._phase = LoopPhase.RUNNING
        self._running = True
        logger.info("loop running (session %d)", self._session)
        self._tick(self._token)
        return True

    def restart(self) -> bool:
        """Handle the restart key. Same rules as :meth:`start`."""
        return self.start()

    def stop(self) -> bool:
        """Cancel the pending tick and go back to IDLE.

        Does not clear or redraw the surface. No-op unless running.
        """
        if not self._running:
            return False
        self._scheduler.cancel(self._frame_handle)
        self._frame_handle = None
        self._token += 1
        self._running = False
        self._phase = LoopPhase.IDLE
        logger.info("loop stopped after %d frame(s)", self._frames)
        return True

    # Input ---------------------------------------------------------------
    def on_key_down(self, key: str) -> None:
        if key not in RECOGNIZED_KEYS:
            logger.debug("ignoring key down %r", key)
            return
        if key in DIRECTION_KEYS:
            self._scene.square.set_direction(key)
        elif key in ARROW_KEYS:
            if self._phase is LoopPhase.GAME_OVER:
                # Keep the game over screen intact
                return
            self._scene.circle.move(key, self._surface)
        elif key == RESTART_KEY:
            self.restart()
        elif key == STOP_KEY:
            self.stop()

    def on_key_up(self, key: str) -> None:
        if key in DIRECTION_KEYS:
            self._scene.square.unset_direction(key)

    # Internals -------------------------------------------------------------
    def _new_session(self) -> None:
        self._scene = self._scene_factory()
        self._session += 1
        self._frames = 0

    def _schedule(self) -> None:
        self._token += 1
        token = self._token
        self._frame_handle = self._scheduler.schedule_next_frame(
            lambda: self._tick(token)
        )

    def _tick(self, token: int) -> None:
        if not self._running or token != self._token:
            logger.debug("stale frame tick dropped")
            return
        self._frame_handle = None
        scene = self._scene

        scene.square.move()
        clear_surface(self._surface)
        scene.square.draw(self._surface)
        scene.circle.draw(self._surface)
        scene.obstacle.draw(self._surface)
        self._frames += 1

        if overlaps(scene.square, scene.obstacle):
            self._game_over()
            return
        self._schedule()

    def _game_over(self) -> None:
        self._running = False
        self._phase = LoopPhase.GAME_OVER
        logger.warning(
            "game over: square hit the obstacle at (%.1f, %.1f) after %d frame(s)",
            self._scene.square.x,
            self._scene.square.y,
            self._frames,
        )
        if self._on_game_over is not None:
            self._on_game_over(self._session)
