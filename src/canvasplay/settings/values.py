"""Centralized default values loaded from YAML.

The master source is ``values.yml`` in this package. Each section is merged
over hard-coded fallbacks, so a missing key (or a missing/corrupt file)
leaves the historical defaults in place.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Sequence

import yaml

logger = logging.getLogger(__name__)

_PKG_DIR = Path(__file__).parent
_YAML_PATH = _PKG_DIR / "values.yml"

# --- Fallback literals ---------------------------------------------------
_FALLBACK_SURFACE: Dict[str, Any] = {"width": 600, "height": 600, "background": "white"}
_FALLBACK_LOOP: Dict[str, Any] = {"target_fps": 60.0, "restart_policy": "reset"}
_FALLBACK_ENTITIES: Dict[str, Dict[str, Any]] = {
    "square": {
        "x": 502.0,
        "y": 52.0,
        "width": 46.0,
        "height": 46.0,
        "color": "orange",
        "speed": 2.0,
    },
    "circle": {"x": 200.0, "y": 40.0, "r": 17.0, "color": "cadetblue", "speed": 10.0},
    "obstacle": {
        "x": 250.0,
        "y": 250.0,
        "width": 100.0,
        "height": 100.0,
        "color": "black",
    },
}
_FALLBACK_THEME: Dict[str, Any] = {
    "colors": {
        "game_over": {"bg": "white", "text": "darkred"},
        "buttons": {"bg": "#202020", "text": "white", "border": "#808080"},
    }
}
_FALLBACK_GAME_OVER: Dict[str, Any] = {
    "message": "YOU ARE DEAD YOU SHOULD NOT HAVE CRASHED INTO THAT",
    "font_px": 22,
    "hint": "press 1 to play again",
}
_FALLBACK_BUTTONS: Dict[str, Any] = {
    "bar_height": 36,
    "font_px": 16,
    "labels": ["X", "Grid", "Rect", "Circles", "Clear", "Stop"],
}

RESTART_POLICIES: Sequence[str] = ("reset", "reject")


def _merge(base: Dict[str, Any], override: object) -> Dict[str, Any]:
    """Recursively overlay *override* onto a copy of *base*.

    Keys unknown to *base* are ignored; nested dicts merge key by key.
    """
    out = copy.deepcopy(base)
    if not isinstance(override, dict):
        return out
    for k, v in override.items():
        if k not in out:
            continue
        if isinstance(out[k], dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _load(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("failed to read %s, using built-in defaults: %s", path, e)
        return {}
    if not isinstance(raw, dict):
        logger.warning("ignoring %s: top level is not a mapping", path)
        return {}
    return raw


_raw = _load(_YAML_PATH)

_entities = _merge(_FALLBACK_ENTITIES, _raw.get("entities"))
for _spec in _entities.values():
    for _k, _v in list(_spec.items()):
        if _k != "color":
            _spec[_k] = float(_v)

_buttons = _merge(_FALLBACK_BUTTONS, _raw.get("buttons"))
if not (
    isinstance(_buttons["labels"], list)
    and all(isinstance(x, str) for x in _buttons["labels"])
):
    _buttons["labels"] = list(_FALLBACK_BUTTONS["labels"])

# --- Public accessors ----------------------------------------------------
SURFACE: Dict[str, Any] = _merge(_FALLBACK_SURFACE, _raw.get("surface"))
LOOP_DEFAULTS: Dict[str, Any] = _merge(_FALLBACK_LOOP, _raw.get("loop"))
ENTITY_DEFAULTS: Dict[str, Dict[str, Any]] = _entities
THEME: Dict[str, Any] = _merge(_FALLBACK_THEME, _raw.get("theme"))
GAME_OVER_CONFIG: Dict[str, Any] = _merge(_FALLBACK_GAME_OVER, _raw.get("game_over"))
BUTTONS_CONFIG: Dict[str, Any] = _buttons

__all__ = [
    "SURFACE",
    "LOOP_DEFAULTS",
    "ENTITY_DEFAULTS",
    "THEME",
    "GAME_OVER_CONFIG",
    "BUTTONS_CONFIG",
    "RESTART_POLICIES",
]
