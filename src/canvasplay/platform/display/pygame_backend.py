"""Pygame-based DisplayBackend with headless (offscreen) support.

Implements the path-based RenderSurface on top of ``pygame.draw``. Paths are
recorded as subpaths (polylines, rectangles, arcs) between ``begin_path``
calls and rasterized on ``stroke``/``fill``. Set SDL_VIDEODRIVER=dummy
before constructing the backend for deterministic, headless runs.

Example:
    import os
    os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
    from canvasplay.platform.display.pygame_backend import PygameDisplayBackend

    backend = PygameDisplayBackend(size=(600, 600))
    surface = backend.surface()
    surface.begin_path()
    surface.rect(10, 10, 46, 46)
    surface.set_fill_color("orange")
    surface.fill()
    backend.end_frame()
    backend.save_png("/tmp/frame.png")
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import pygame as pg

from canvasplay.render.canvas import Color, DisplayBackend, RenderSurface

logger = logging.getLogger(__name__)

# Segments used to flatten partial arcs
_ARC_SEGMENTS = 64


@dataclass(slots=True)
class _Polyline:
    points: List[Tuple[float, float]]


@dataclass(slots=True)
class _Rect:
    x: float
    y: float
    w: float
    h: float


@dataclass(slots=True)
class _Arc:
    x: float
    y: float
    r: float
    start: float
    end: float

    @property
    def full(self) -> bool:
        return abs(self.end - self.start) >= 2 * math.pi

    def points(self) -> List[Tuple[float, float]]:
        sweep = self.end - self.start
        n = max(2, int(_ARC_SEGMENTS * abs(sweep) / (2 * math.pi)) + 1)
        return [
            (
                self.x + self.r * math.cos(self.start + sweep * i / (n - 1)),
                self.y + self.r * math.sin(self.start + sweep * i / (n - 1)),
            )
            for i in range(n)
        ]


_Subpath = Union[_Polyline, _Rect, _Arc]


class _FontCache:
    def __init__(self) -> None:
        self.fonts: Dict[int, Any] = {}

    def get(self, size_px: int) -> Any:
        f = self.fonts.get(size_px)
        if f is None:
            # Default font for determinism across platforms
            f = pg.font.Font(None, size_px)
            self.fonts[size_px] = f
        return f


def _parse_color(c: Color) -> pg.Color | None:
    try:
        return pg.Color(c)
    except ValueError:
        return None


class PygameSurface(RenderSurface):
    """RenderSurface drawing into a pygame Surface.

    Styles (stroke color, fill color, line width) persist across paths,
    like an HTML canvas context.
    """

    def __init__(
        self,
        target: Any,
        font_cache: _FontCache,
        *,
        background: Color = "white",
    ) -> None:
        self._target = target
        self._font_cache = font_cache
        self._background = _parse_color(background) or pg.Color("white")
        self._path: List[_Subpath] = []
        self._stroke_color = pg.Color("black")
        self._fill_color = pg.Color("black")
        self._line_width = 1

    @property
    def width(self) -> int:
        return int(self._target.get_width())

    @property
    def height(self) -> int:
        return int(self._target.get_height())

    @property
    def target(self) -> Any:
        """The underlying pygame Surface."""
        return self._target

    # Path construction ---------------------------------------------------
    def clear(self, x: float, y: float, w: float, h: float) -> None:
        area = pg.Rect(round(x), round(y), round(w), round(h))
        self._target.fill(self._background, area)

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(_Polyline([(x, y)]))

    def line_to(self, x: float, y: float) -> None:
        if self._path and isinstance(self._path[-1], _Polyline):
            self._path[-1].points.append((x, y))
        else:
            # line_to with no current point behaves like move_to
            self._path.append(_Polyline([(x, y)]))

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        self._path.append(_Rect(x, y, w, h))

    def arc(self, x: float, y: float, r: float, start: float, end: float) -> None:
        self._path.append(_Arc(x, y, r, start, end))

    # Styles --------------------------------------------------------------
    def set_stroke_color(self, color: Color) -> None:
        parsed = _parse_color(color)
        if parsed is None:
            logger.warning("ignoring unknown stroke color %r", color)
            return
        self._stroke_color = parsed

    def set_fill_color(self, color: Color) -> None:
        parsed = _parse_color(color)
        if parsed is None:
            logger.warning("ignoring unknown fill color %r", color)
            return
        self._fill_color = parsed

    def set_line_width(self, width: float) -> None:
        if width > 0:
            self._line_width = max(1, round(width))

    # Painting --------------------------------------------------------------
    def stroke(self) -> None:
        color, lw = self._stroke_color, self._line_width
        for sp in self._path:
            if isinstance(sp, _Rect):
                pg.draw.rect(self._target, color, self._pg_rect(sp), lw)
            elif isinstance(sp, _Arc) and sp.full:
                pg.draw.circle(self._target, color, (sp.x, sp.y), sp.r, lw)
            else:
                pts = sp.points() if isinstance(sp, _Arc) else sp.points
                if len(pts) >= 2:
                    pg.draw.lines(self._target, color, False, pts, lw)

    def fill(self) -> None:
        color = self._fill_color
        for sp in self._path:
            if isinstance(sp, _Rect):
                pg.draw.rect(self._target, color, self._pg_rect(sp), 0)
            elif isinstance(sp, _Arc) and sp.full:
                pg.draw.circle(self._target, color, (sp.x, sp.y), sp.r, 0)
            else:
                pts = sp.points() if isinstance(sp, _Arc) else sp.points
                if len(pts) >= 3:
                    pg.draw.polygon(self._target, color, pts, 0)

    def fill_text(self, x: float, y: float, s: str, size_px: int = 16) -> None:
        font = self._font_cache.get(size_px)
        surf = font.render(s, True, self._fill_color)
        self._target.blit(surf, (round(x), round(y)))

    def text_size(self, s: str, size_px: int = 16) -> Tuple[int, int]:
        w, h = self._font_cache.get(size_px).size(s)
        return int(w), int(h)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        c = self._target.get_at((x, y))
        return (c.r, c.g, c.b, c.a)

    @staticmethod
    def _pg_rect(r: _Rect) -> pg.Rect:
        x, y, w, h = r.x, r.y, r.w, r.h
        # Negative sizes extend up/left, as on an HTML canvas
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        return pg.Rect(round(x), round(y), round(w), round(h))


class PygameDisplayBackend(DisplayBackend):
    """Pygame DisplayBackend with an offscreen frame buffer.

    The frame is ``size`` wide and ``size[1] + chrome_height`` tall: the
    canvas occupies the top ``size`` area and an optional chrome band
    (button bar) sits underneath it. A window is created only when
    ``create_window`` is set and SDL is not in dummy mode.
    """

    def __init__(
        self,
        size: Tuple[int, int] = (600, 600),
        *,
        chrome_height: int = 0,
        background: Color = "white",
        create_window: bool = False,
        caption: str = "canvasplay",
    ) -> None:
        if os.environ.get("SDL_VIDEODRIVER") == "dummy":
            os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

        if not pg.get_init():
            pg.init()
        if not pg.font.get_init():
            pg.font.init()

        self._width, self._height = int(size[0]), int(size[1])
        self._chrome_height = max(0, int(chrome_height))
        full = (self._width, self._height + self._chrome_height)

        self._window_surface = None
        if create_window and os.environ.get("SDL_VIDEODRIVER") != "dummy":
            try:
                self._window_surface = pg.display.set_mode(full)
                pg.display.set_caption(caption)
            except pg.error as e:
                logger.warning(
                    "window creation failed (%s); falling back to offscreen. "
                    "Check SDL_VIDEODRIVER and display permissions.",
                    e,
                )
                self._window_surface = None

        self._frame = pg.Surface(full, flags=pg.SRCALPHA)
        self._font_cache = _FontCache()
        canvas_area = self._frame.subsurface(pg.Rect(0, 0, self._width, self._height))
        self._surface = PygameSurface(
            canvas_area, self._font_cache, background=background
        )
        self._surface.clear(0, 0, self._width, self._height)

        self._chrome: PygameSurface | None = None
        if self._chrome_height:
            chrome_area = self._frame.subsurface(
                pg.Rect(0, self._height, self._width, self._chrome_height)
            )
            self._chrome = PygameSurface(
                chrome_area, self._font_cache, background=background
            )
            self._chrome.clear(0, 0, self._width, self._chrome_height)

    @property
    def has_window(self) -> bool:
        return self._window_surface is not None

    @property
    def chrome_height(self) -> int:
        return self._chrome_height

    def size(self) -> Tuple[int, int]:
        return (self._width, self._height)

    def surface(self) -> PygameSurface:
        return self._surface

    def chrome_surface(self) -> PygameSurface | None:
        return self._chrome

    def end_frame(self) -> None:
        if self._window_surface is not None:
            self._window_surface.blit(self._frame, (0, 0))
            pg.display.flip()

    def save_png(self, path: str) -> None:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        pg.image.save(self._frame, path)
