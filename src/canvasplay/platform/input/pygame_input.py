"""Pygame input backend producing browser-style key events.

Pygame key codes are translated to the identifiers a browser reports in
``KeyboardEvent.key`` (``"w"``, ``"1"``, ``"ArrowUp"``...) so the game loop
does not depend on pygame. Mouse clicks are reported in frame coordinates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator, Union

import pygame as pg

# pygame.key.name() -> browser key identifier, where they differ
_KEY_NAMES = {
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "escape": "Escape",
    "return": "Enter",
    "space": " ",
}


@dataclass(slots=True)
class KeyEvent:
    type: str  # "down" | "up"
    key: str


@dataclass(slots=True)
class PointerEvent:
    x: int
    y: int
    button: int = 1


@dataclass(slots=True)
class QuitEvent:
    pass


InputEvent = Union[KeyEvent, PointerEvent, QuitEvent]


def key_identifier(key_code: int) -> str:
    """Return the browser-style identifier for a pygame key code."""
    name = pg.key.name(key_code)
    return _KEY_NAMES.get(name, name)


class PygameInputBackend:
    """Drains the pygame event queue into :data:`InputEvent` objects.

    Call :meth:`pump` once per display refresh. In headless mode (dummy
    video) nothing arrives from the OS; tests post pygame events directly.
    """

    def __init__(self) -> None:
        if not pg.get_init():
            pg.init()

    def pump(self) -> Generator[InputEvent, None, None]:
        for ev in pg.event.get():
            if ev.type == pg.QUIT:
                yield QuitEvent()
            elif ev.type == pg.KEYDOWN:
                yield KeyEvent("down", key_identifier(ev.key))
            elif ev.type == pg.KEYUP:
                yield KeyEvent("up", key_identifier(ev.key))
            elif ev.type == pg.MOUSEBUTTONDOWN:
                yield PointerEvent(int(ev.pos[0]), int(ev.pos[1]), int(ev.button))
