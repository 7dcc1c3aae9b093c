"""Framework-agnostic RenderSurface and DisplayBackend protocols.

The drawing model is path based: ``begin_path`` starts a new path,
``move_to``/``line_to``/``rect``/``arc`` add to it, and ``stroke``/``fill``
paint it with the current stroke or fill style. Styles stick until changed.
Colors are CSS-style strings such as ``"orange"`` or ``"#ff0000"``.
"""

from __future__ import annotations

from typing import Protocol, Tuple

Color = str


class RenderSurface(Protocol):
    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def clear(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        ...

    def arc(self, x: float, y: float, r: float, start: float, end: float) -> None:
        ...

    def set_stroke_color(self, color: Color) -> None:
        ...

    def set_fill_color(self, color: Color) -> None:
        ...

    def set_line_width(self, width: float) -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill(self) -> None:
        ...

    def fill_text(self, x: float, y: float, s: str, size_px: int = 16) -> None:
        ...


class DisplayBackend(Protocol):
    def size(self) -> Tuple[int, int]:
        ...

    def surface(self) -> RenderSurface:
        ...

    def chrome_surface(self) -> RenderSurface | None:
        ...

    def end_frame(self) -> None:
        ...

    def save_png(self, path: str) -> None:
        ...


def clear_surface(surface: RenderSurface) -> None:
    """Clear the whole drawable area of *surface*."""
    surface.clear(0, 0, surface.width, surface.height)
