"""Shapes that live on the canvas.

Three independent classes share the same small interface (a position,
``draw(surface)``) but carry their own movement policy:

- :class:`Square` moves every frame while direction keys are held,
- :class:`Circle` moves one step per arrow key press and never leaves
  the surface,
- :class:`Obstacle` never moves.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Protocol, Tuple

from canvasplay.core.input import InputState
from canvasplay.render.canvas import Color, RenderSurface, clear_surface

__all__ = ["Entity", "Square", "Circle", "Obstacle"]

logger = logging.getLogger(__name__)


class Entity(Protocol):
    x: float
    y: float
    color: Color

    def draw(self, surface: RenderSurface) -> None:
        ...


def _fill_rect(
    surface: RenderSurface, x: float, y: float, w: float, h: float, color: Color
) -> None:
    surface.begin_path()
    surface.rect(x, y, w, h)
    surface.set_fill_color(color)
    surface.fill()


@dataclass(slots=True)
class Square:
    """Filled square driven by held direction keys.

    ``move`` is called once per frame regardless of elapsed time. Held
    directions are applied independently, so a diagonal covers ``speed`` on
    both axes (about 1.41x faster than straight movement). There is no
    bounds check; the square may leave the surface.
    """

    x: float
    y: float
    width: float = 46.0
    height: float = 46.0
    color: Color = "orange"
    speed: float = 2.0
    direction: InputState = field(default_factory=InputState)

    def draw(self, surface: RenderSurface) -> None:
        _fill_rect(surface, self.x, self.y, self.width, self.height, self.color)

    def set_direction(self, key: str) -> None:
        self.direction.set_direction(key)

    def unset_direction(self, key: str) -> None:
        self.direction.unset_direction(key)

    def move(self) -> None:
        d = self.direction
        if d.up:
            self.y -= self.speed
        if d.right:
            self.x += self.speed
        if d.down:
            self.y += self.speed
        if d.left:
            self.x -= self.speed

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(slots=True)
class Circle:
    """Filled disc moved one step per arrow key press.

    A step is taken only if the disc's edge stays strictly inside the
    surface after the step; otherwise the press is dropped. Every call
    clears the surface and redraws the disc so no trail is left behind.
    """

    x: float
    y: float
    r: float = 17.0
    color: Color = "cadetblue"
    speed: float = 10.0

    def draw(self, surface: RenderSurface) -> None:
        surface.begin_path()
        surface.arc(self.x, self.y, self.r, 0.0, 2 * math.pi)
        surface.set_fill_color(self.color)
        surface.fill()

    def move(self, key: str, surface: RenderSurface) -> bool:
        """Step toward *key* if it stays on *surface*; return True if moved."""
        reach = self.r + self.speed
        moved = False
        if key == "ArrowDown" and self.y + reach < surface.height:
            self.y += self.speed
            moved = True
        elif key == "ArrowUp" and self.y - reach > 0:
            self.y -= self.speed
            moved = True
        elif key == "ArrowLeft" and self.x - reach > 0:
            self.x -= self.speed
            moved = True
        elif key == "ArrowRight" and self.x + reach < surface.width:
            self.x += self.speed
            moved = True
        if not moved:
            logger.debug("circle step %s dropped at (%s, %s)", key, self.x, self.y)
        clear_surface(surface)
        self.draw(surface)
        return moved

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Obstacle:
    """Static filled rectangle. Touch it and the session ends."""

    x: float
    y: float
    width: float = 100.0
    height: float = 100.0
    color: Color = "black"

    def draw(self, surface: RenderSurface) -> None:
        _fill_rect(surface, self.x, self.y, self.width, self.height, self.color)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)
