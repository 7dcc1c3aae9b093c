"""The set of entities that make up one play session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from canvasplay.core.entities import Circle, Obstacle, Square
from canvasplay.settings.values import ENTITY_DEFAULTS

__all__ = ["Scene", "SceneFactory", "make_scene", "scene_factory"]


@dataclass(slots=True)
class Scene:
    square: Square
    circle: Circle
    obstacle: Obstacle


SceneFactory = Callable[[], Scene]


def make_scene(entities: Mapping[str, Mapping[str, Any]] | None = None) -> Scene:
    """Build a Scene from per-entity keyword mappings.

    Missing entities or fields fall back to the packaged defaults.
    """
    merged: Dict[str, Dict[str, Any]] = {
        name: dict(values) for name, values in ENTITY_DEFAULTS.items()
    }
    for name, values in (entities or {}).items():
        if name in merged:
            merged[name].update(values)
    return Scene(
        square=Square(**merged["square"]),
        circle=Circle(**merged["circle"]),
        obstacle=Obstacle(**merged["obstacle"]),
    )


def scene_factory(
    entities: Mapping[str, Mapping[str, Any]] | None = None
) -> SceneFactory:
    """Return a zero-argument factory producing fresh, identical Scenes."""

    def _factory() -> Scene:
        return make_scene(entities)

    return _factory
