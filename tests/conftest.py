from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest

# Keep pygame off the real display for every test module
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


class RecordingSurface:
    """RenderSurface that records every call as ``(name, *args)``."""

    def __init__(self, width: int = 600, height: int = 600) -> None:
        self._width = width
        self._height = height
        self.calls: list[tuple[Any, ...]] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _rec(self, *call: Any) -> None:
        self.calls.append(call)

    def clear(self, x: float, y: float, w: float, h: float) -> None:
        self._rec("clear", x, y, w, h)

    def begin_path(self) -> None:
        self._rec("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._rec("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._rec("line_to", x, y)

    def rect(self, x: float, y: float, w: float, h: float) -> None:
        self._rec("rect", x, y, w, h)

    def arc(self, x: float, y: float, r: float, start: float, end: float) -> None:
        self._rec("arc", x, y, r, start, end)

    def set_stroke_color(self, color: str) -> None:
        self._rec("set_stroke_color", color)

    def set_fill_color(self, color: str) -> None:
        self._rec("set_fill_color", color)

    def set_line_width(self, width: float) -> None:
        self._rec("set_line_width", width)

    def stroke(self) -> None:
        self._rec("stroke")

    def fill(self) -> None:
        self._rec("fill")

    def fill_text(self, x: float, y: float, s: str, size_px: int = 16) -> None:
        self._rec("fill_text", x, y, s, size_px)

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    def shapes(self) -> list[tuple[Any, ...]]:
        """Rect and arc calls, in order."""
        return [c for c in self.calls if c[0] in ("rect", "arc")]

    def reset(self) -> None:
        self.calls.clear()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def canvasplay_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("CANVASPLAY_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def make_surface() -> type[RecordingSurface]:
    return RecordingSurface
