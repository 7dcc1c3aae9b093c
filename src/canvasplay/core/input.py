"""Held-direction input state and the recognized key set.

Key identifiers follow browser ``KeyboardEvent.key`` naming so the same
strings work for every input backend: lowercase letters, digits and
``ArrowUp``-style names for the cursor keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

__all__ = [
    "ARROW_KEYS",
    "DIRECTION_KEYS",
    "RECOGNIZED_KEYS",
    "RESTART_KEY",
    "STOP_KEY",
    "InputState",
]

# wasd keys drive the square; value is the InputState flag they control
DIRECTION_KEYS: dict[str, str] = {
    "w": "up",
    "a": "left",
    "s": "down",
    "d": "right",
}
ARROW_KEYS: FrozenSet[str] = frozenset(
    {"ArrowUp", "ArrowDown", "ArrowLeft", "ArrowRight"}
)
RESTART_KEY = "1"
STOP_KEY = "2"

RECOGNIZED_KEYS: FrozenSet[str] = frozenset(
    set(DIRECTION_KEYS) | ARROW_KEYS | {RESTART_KEY, STOP_KEY}
)


@dataclass(slots=True)
class InputState:
    """Which of the four direction keys are currently held.

    Setting an already-held direction is idempotent and each flag is
    independent, so two held keys give diagonal movement.
    """

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False

    def set_direction(self, key: str) -> None:
        flag = DIRECTION_KEYS.get(key)
        if flag is not None:
            setattr(self, flag, True)

    def unset_direction(self, key: str) -> None:
        flag = DIRECTION_KEYS.get(key)
        if flag is not None:
            setattr(self, flag, False)

    def held(self) -> FrozenSet[str]:
        """Return the names of the held directions."""
        return frozenset(
            name
            for name in ("up", "down", "left", "right")
            if getattr(self, name)
        )

    def release_all(self) -> None:
        self.up = self.down = self.left = self.right = False
