"""Axis-aligned bounding-box overlap test."""

from __future__ import annotations

from typing import Protocol

__all__ = ["Extent", "overlaps"]


class Extent(Protocol):
    x: float
    y: float
    width: float
    height: float


def overlaps(a: Extent, b: Extent) -> bool:
    """Return True when rectangles *a* and *b* overlap.

    Touching edges do not count. Only defined for positive width/height.
    """
    return (
        a.x + a.width > b.x
        and a.x < b.x + b.width
        and b.y < a.y + a.height
        and b.y + b.height > a.y
    )
