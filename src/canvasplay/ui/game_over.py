"""Game over screen: replaces the canvas content with a terminal message."""

from __future__ import annotations

import logging

from canvasplay.render.canvas import Color, RenderSurface
from canvasplay.settings.values import GAME_OVER_CONFIG, THEME

logger = logging.getLogger(__name__)

_GO_THEME = THEME.get("colors", {}).get("game_over", {})


class GameOverScreen:
    """GameOverSink that paints the game over message over the canvas.

    Calling the instance with a session number clears the canvas to the
    theme background and writes the message (plus a restart hint when a
    new session is possible). ``sessions`` records every session it was
    notified for, in order.
    """

    def __init__(
        self,
        surface: RenderSurface,
        *,
        message: str = str(GAME_OVER_CONFIG["message"]),
        hint: str | None = str(GAME_OVER_CONFIG["hint"]),
        font_px: int = int(GAME_OVER_CONFIG["font_px"]),
        bg: Color = str(_GO_THEME.get("bg", "white")),
        text_color: Color = str(_GO_THEME.get("text", "darkred")),
    ) -> None:
        self._surface = surface
        self.message = message
        self.hint = hint
        self.font_px = font_px
        self.bg = bg
        self.text_color = text_color
        self.sessions: list[int] = []

    def __call__(self, session: int) -> None:
        self.sessions.append(session)
        logger.warning("session %d over: %s", session, self.message)
        self.draw()

    def draw(self) -> None:
        s = self._surface
        s.begin_path()
        s.rect(0, 0, s.width, s.height)
        s.set_fill_color(self.bg)
        s.fill()

        s.set_fill_color(self.text_color)
        pad = self.font_px
        y = s.height // 3
        max_chars = max(8, (s.width - 2 * pad) // self.font_px * 2)
        for line in _wrap(self.message, max_chars):
            s.fill_text(pad, y, line, self.font_px)
            y += int(self.font_px * 1.4)
        if self.hint:
            s.fill_text(pad, y + self.font_px, self.hint, max(8, self.font_px * 2 // 3))


def _wrap(text: str, max_chars: int) -> list[str]:
    """Greedy word wrap to at most *max_chars* per line."""
    lines: list[str] = []
    cur = ""
    for word in text.split():
        if cur and len(cur) + 1 + len(word) > max_chars:
            lines.append(cur)
            cur = word
        else:
            cur = f"{cur} {word}" if cur else word
    if cur:
        lines.append(cur)
    return lines
