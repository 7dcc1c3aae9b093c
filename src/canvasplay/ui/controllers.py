"""
Interactive controller for the canvas sandbox.

Provides a SandboxController that owns the host display refresh: it pumps
input, routes keys to the GameLoop and clicks to the ButtonBar, runs the
frame callbacks due this refresh and presents the frame.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Iterable, Optional, Protocol

from canvasplay.config import RuntimeConfig
from canvasplay.core.clock import Clock
from canvasplay.core.game_loop import GameLoop, LoopPhase
from canvasplay.core.scene import scene_factory
from canvasplay.core.scheduler import FrameScheduler
from canvasplay.platform.input.pygame_input import (
    InputEvent,
    KeyEvent,
    PointerEvent,
    QuitEvent,
)
from canvasplay.render.canvas import DisplayBackend
from canvasplay.render.demos import DEMOS
from canvasplay.ui.buttons import ButtonBar
from canvasplay.ui.game_over import GameOverScreen

logger = logging.getLogger(__name__)

# Host keys handled here, never forwarded to the game loop
QUIT_KEYS = frozenset({"Escape", "q"})

# Button label -> demo name
_DEMO_BUTTONS = {
    "X": "x",
    "Grid": "grid",
    "Rect": "rect",
    "Circles": "circles",
    "Clear": "clear",
}


class InputSource(Protocol):
    def pump(self) -> Iterable[InputEvent]:
        ...


class SandboxController:
    """Owns the display refresh loop, input routing and the game loop."""

    def __init__(
        self,
        *,
        display: DisplayBackend,
        clock: Clock,
        cfg: RuntimeConfig,
        input_source: Optional[InputSource] = None,
        scheduler: Optional[FrameScheduler] = None,
    ) -> None:
        self._display = display
        self._clock = clock
        self._cfg = cfg
        self._input = input_source
        self._scheduler = scheduler or FrameScheduler()
        self._running: bool = False

        surface = display.surface()
        self.game_over_screen = GameOverScreen(
            surface,
            message=str(cfg.game_over.get("message", "GAME OVER")),
            hint=(
                str(cfg.game_over.get("hint"))
                if cfg.restart_policy == "reset" and cfg.game_over.get("hint")
                else None
            ),
            font_px=int(cfg.game_over.get("font_px", 22)),
        )
        self.loop = GameLoop(
            surface=surface,
            scheduler=self._scheduler,
            scene_factory=scene_factory(cfg.entities),
            on_game_over=self.game_over_screen,
            restart_policy=cfg.restart_policy,
        )

        self.buttons: ButtonBar | None = None
        chrome = display.chrome_surface()
        if chrome is not None:
            self.buttons = ButtonBar(
                chrome,
                actions=self._button_actions(cfg.buttons.get("labels", [])),
                font_px=int(cfg.buttons.get("font_px", 16)),
            )

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def running(self) -> bool:
        return self._running

    def _button_actions(self, labels: Iterable[str]) -> Dict[str, Callable[[], None]]:
        actions: Dict[str, Callable[[], None]] = {}
        for label in labels:
            if label in _DEMO_BUTTONS:
                actions[label] = self._demo_action(_DEMO_BUTTONS[label])
            elif label == "Stop":
                actions[label] = self.loop.stop
            else:
                logger.warning("ignoring unknown button label %r", label)
        return actions

    def _demo_action(self, name: str) -> Callable[[], None]:
        def _run() -> None:
            DEMOS[name](self._display.surface())

        return _run

    # Input ---------------------------------------------------------------
    def dispatch(self, ev: InputEvent) -> None:
        if isinstance(ev, QuitEvent):
            self._running = False
        elif isinstance(ev, KeyEvent):
            if ev.type == "down" and ev.key in QUIT_KEYS:
                self._running = False
            elif ev.type == "down":
                self.loop.on_key_down(ev.key)
            elif ev.type == "up":
                self.loop.on_key_up(ev.key)
        elif isinstance(ev, PointerEvent):
            if self.buttons is None or ev.button != 1:
                return
            _w, canvas_h = self._display.size()
            if ev.y >= canvas_h:
                self.buttons.on_mouse(ev.x, ev.y - canvas_h)

    # Frame -----------------------------------------------------------------
    def step(self) -> None:
        """Run one display refresh.

        Input is dispatched before the scheduler is pumped, so a frame tick
        always sees every key event delivered before its refresh.
        """
        if self._input is not None:
            for ev in self._input.pump():
                self.dispatch(ev)
        self._scheduler.pump()
        if self.buttons is not None:
            self.buttons.draw()
        self._display.end_frame()

    async def run(self, *, max_frames: int | None = None) -> None:
        """Start the game loop and refresh the display until stopped."""
        self._running = True
        dt_target = 1.0 / max(1e-6, float(self._cfg.target_fps))
        if self.loop.phase is LoopPhase.IDLE:
            self.loop.start()
        frames = 0
        try:
            while self._running:
                t0 = self._clock.monotonic()
                self.step()
                frames += 1
                if max_frames is not None and frames >= max_frames:
                    break
                remaining = dt_target - max(0.0, self._clock.monotonic() - t0)
                if remaining > 0:
                    await self._clock.sleep(remaining)
                else:
                    # Yield to avoid starving other tasks
                    await asyncio.sleep(0)
        except asyncio.CancelledError:  # pragma: no cover - cooperative cancel
            pass
        finally:
            self._running = False
            self.loop.stop()

    async def stop(self) -> None:
        self._running = False
        self.loop.stop()
