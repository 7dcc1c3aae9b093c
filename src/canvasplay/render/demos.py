"""One-shot drawing demos.

Each demo issues a fixed set of drawing commands on a RenderSurface and
keeps no state. Styles set by a demo stick on the surface, as on any
path-based canvas.
"""

from __future__ import annotations

import math
from typing import Callable, Dict

from canvasplay.render.canvas import RenderSurface, clear_surface

__all__ = [
    "DEMOS",
    "GRID_SPACING",
    "clear_canvas",
    "make_circles",
    "make_grid",
    "make_rectangles",
    "make_x",
]

GRID_SPACING = 50


def make_x(surface: RenderSurface) -> None:
    """Two 6px blue diagonals crossing at (200, 200)."""
    surface.begin_path()
    surface.move_to(100, 100)
    surface.line_to(300, 300)
    surface.set_stroke_color("blue")
    surface.set_line_width(6)
    surface.stroke()

    surface.begin_path()
    surface.move_to(100, 300)
    surface.line_to(300, 100)
    surface.stroke()


def make_grid(surface: RenderSurface) -> None:
    """1px black lines every GRID_SPACING px, edges included."""
    surface.set_stroke_color("black")
    surface.set_line_width(1)

    for x in range(0, surface.width + 1, GRID_SPACING):
        surface.begin_path()
        surface.move_to(x, 0)
        surface.line_to(x, surface.height)
        surface.stroke()
    for y in range(0, surface.height + 1, GRID_SPACING):
        surface.begin_path()
        surface.move_to(0, y)
        surface.line_to(surface.width, y)
        surface.stroke()


def make_rectangles(surface: RenderSurface) -> None:
    """A maroon outlined rectangle and a green filled one."""
    surface.begin_path()
    surface.rect(300, 300, 80, 180)
    surface.set_stroke_color("maroon")
    surface.set_line_width(4)
    surface.stroke()

    surface.begin_path()
    surface.rect(70, 120, 170, 40)
    surface.set_fill_color("green")
    surface.fill()


def make_circles(surface: RenderSurface) -> None:
    """A red disc and an olive circle outline, radius 71."""
    surface.begin_path()
    surface.arc(75, 525, 71, 0, math.pi * 2)
    surface.set_fill_color("#ff0000")
    surface.fill()

    surface.begin_path()
    surface.arc(75, 325, 71, 0, math.pi * 2)
    surface.set_stroke_color("#999900")
    surface.stroke()


def clear_canvas(surface: RenderSurface) -> None:
    clear_surface(surface)


DEMOS: Dict[str, Callable[[RenderSurface], None]] = {
    "x": make_x,
    "grid": make_grid,
    "rect": make_rectangles,
    "circles": make_circles,
    "clear": clear_canvas,
}
