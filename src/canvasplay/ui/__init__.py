"""UI package: the sandbox controller and its on-canvas widgets."""

from .buttons import ButtonBar
from .controllers import SandboxController  # re-export for convenience
from .game_over import GameOverScreen

__all__ = ["ButtonBar", "GameOverScreen", "SandboxController"]
