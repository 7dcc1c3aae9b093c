"""On-screen button bar drawn in the chrome band under the canvas."""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from canvasplay.render.canvas import Color, RenderSurface
from canvasplay.settings.values import BUTTONS_CONFIG, THEME

_BTN_THEME = THEME.get("colors", {}).get("buttons", {})

_COLOR_BG: Color = str(_BTN_THEME.get("bg", "#202020"))
_COLOR_TEXT: Color = str(_BTN_THEME.get("text", "white"))
_COLOR_BORDER: Color = str(_BTN_THEME.get("border", "#808080"))


class ButtonBar:
    """Row of equally sized buttons filling a chrome surface.

    Parameters
    ----------
    surface: Surface the bar owns; coordinates given to :meth:`on_mouse`
        are relative to it.
    actions: Mapping from button label to callback, in display order.
    font_px: Label font size.
    measure_fn: Optional ``(label, font_px) -> (w, h)`` used to center
        labels. Defaults to the surface's ``text_size`` when it has one,
        otherwise a monospace approximation.
    """

    def __init__(
        self,
        surface: RenderSurface,
        *,
        actions: Dict[str, Callable[[], None]],
        font_px: int = int(BUTTONS_CONFIG.get("font_px", 16)),
        measure_fn: Callable[[str, int], Tuple[int, int]] | None = None,
    ) -> None:
        self._surface = surface
        self.actions = dict(actions)
        self.font_px = max(1, int(font_px))
        if measure_fn is None:
            measure_fn = getattr(surface, "text_size", None) or self._approx_size
        self.measure_fn: Callable[[str, int], Tuple[int, int]] = measure_fn
        self._rects: List[Tuple[int, int, int, int]] = []

    @staticmethod
    def _approx_size(text: str, size_px: int) -> Tuple[int, int]:
        return (int(size_px * 0.6) * len(text), size_px)

    # Layout --------------------------------------------------------------
    def layout(self) -> None:
        """Split the surface width evenly; the last button takes the rest."""
        w, h = self._surface.width, self._surface.height
        n = max(1, len(self.actions))
        btn_w = w // n
        rects: List[Tuple[int, int, int, int]] = []
        for i in range(len(self.actions)):
            x = i * btn_w
            bw = btn_w if i < n - 1 else w - x
            rects.append((x, 0, bw, h))
        self._rects = rects

    @property
    def rects(self) -> List[Tuple[int, int, int, int]]:
        if not self._rects:
            self.layout()
        return list(self._rects)

    # Drawing -------------------------------------------------------------
    def draw(self) -> None:
        s = self._surface
        for (x, y, w, h), label in zip(self.rects, self.actions.keys()):
            s.begin_path()
            s.rect(x, y, w, h)
            s.set_fill_color(_COLOR_BG)
            s.fill()
            s.set_stroke_color(_COLOR_BORDER)
            s.set_line_width(1)
            s.stroke()

            try:
                text_w, text_h = self.measure_fn(label, self.font_px)
            except Exception:
                text_w, text_h = self._approx_size(label, self.font_px)
            s.set_fill_color(_COLOR_TEXT)
            s.fill_text(
                x + max(0, (w - text_w) // 2),
                y + max(0, (h - text_h) // 2),
                label,
                self.font_px,
            )

    # Interaction --------------------------------------------------------
    def hit(self, x: int, y: int) -> str | None:
        for (rx, ry, rw, rh), label in zip(self.rects, self.actions.keys()):
            if rx <= x < rx + rw and ry <= y < ry + rh:
                return label
        return None

    def on_mouse(self, x: int, y: int) -> bool:
        """Run the action under (x, y). Returns True if a button was hit."""
        label = self.hit(x, y)
        if label is None:
            return False
        self.actions[label]()
        return True
