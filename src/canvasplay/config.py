"""Runtime configuration helpers.

Merges three layers into a single :class:`RuntimeConfig`: packaged defaults
from ``settings.values``, the user's ``settings.json`` (via SettingsStore)
and CLI overrides from an argparse Namespace. Later layers win. The merged
values are validated through :class:`Settings` so a bad CLI flag fails the
same way as a bad settings file entry.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .settings.schema import Settings
from .settings.store import SettingsStore
from .settings.values import (
    BUTTONS_CONFIG,
    ENTITY_DEFAULTS,
    GAME_OVER_CONFIG,
    SURFACE,
    THEME,
)

# CLI attribute name -> Settings field
_CLI_OVERRIDES = {
    "width": "width",
    "height": "height",
    "fps": "target_fps",
    "restart_policy": "restart_policy",
}


@dataclass(slots=True)
class RuntimeConfig:
    width: int
    height: int
    target_fps: float
    restart_policy: str
    background: str = str(SURFACE["background"])
    entities: Dict[str, Dict[str, Any]] = field(
        default_factory=lambda: copy.deepcopy(ENTITY_DEFAULTS)
    )
    theme: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(THEME))
    game_over: Dict[str, Any] = field(default_factory=lambda: dict(GAME_OVER_CONFIG))
    buttons: Dict[str, Any] = field(default_factory=lambda: dict(BUTTONS_CONFIG))


def make_runtime_config(*, args: Optional[object] = None) -> RuntimeConfig:
    """Build a RuntimeConfig from defaults, stored settings and *args*.

    Raises:
        pydantic.ValidationError: if a CLI override is out of range.
    """
    settings = SettingsStore.load()
    if args is not None:
        updates: Dict[str, Any] = {}
        for attr, name in _CLI_OVERRIDES.items():
            value = getattr(args, attr, None)
            if value is not None:
                updates[name] = value
        if updates:
            settings = Settings.model_validate(settings.model_dump() | updates)

    rc = RuntimeConfig(
        width=settings.width,
        height=settings.height,
        target_fps=settings.target_fps,
        restart_policy=settings.restart_policy,
    )
    rc.entities["square"]["speed"] = float(settings.square_speed)
    rc.entities["circle"]["speed"] = float(settings.circle_speed)
    return rc
