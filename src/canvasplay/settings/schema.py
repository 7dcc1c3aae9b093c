"""Pydantic model for user-tunable sandbox settings."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .values import ENTITY_DEFAULTS, LOOP_DEFAULTS, RESTART_POLICIES, SURFACE


class Settings(BaseModel):
    """Settings read from ``settings.json``.

    Parameters
    ----------
    width / height: Canvas size in pixels.
    target_fps: Display refresh rate the host loop paces itself to.
    restart_policy: What the restart key does after a game over.
        ``reset`` starts a fresh session, ``reject`` keeps the game over.
    square_speed: Pixels the square moves per frame per held direction.
    circle_speed: Pixels the circle moves per arrow key press.
    """

    width: int = Field(default=int(SURFACE["width"]))
    height: int = Field(default=int(SURFACE["height"]))
    target_fps: float = Field(default=float(LOOP_DEFAULTS["target_fps"]))
    restart_policy: str = Field(default=str(LOOP_DEFAULTS["restart_policy"]))
    square_speed: float = Field(default=float(ENTITY_DEFAULTS["square"]["speed"]))
    circle_speed: float = Field(default=float(ENTITY_DEFAULTS["circle"]["speed"]))

    @field_validator("width", "height")
    @classmethod
    def _chk_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("surface size must be > 0 px")
        return v

    @field_validator("target_fps")
    @classmethod
    def _chk_fps(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("target_fps must be > 0")
        return v

    @field_validator("square_speed", "circle_speed")
    @classmethod
    def _chk_speed(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("speed must be > 0")
        return v

    @field_validator("restart_policy")
    @classmethod
    def _chk_policy(cls, v: str) -> str:
        if v not in set(RESTART_POLICIES):
            raise ValueError(
                "invalid restart_policy: must be one of " + ", ".join(RESTART_POLICIES)
            )
        return v
