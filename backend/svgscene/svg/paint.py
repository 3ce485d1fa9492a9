"""Resolved paint state for fills and strokes."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from svgscene.utils.geometry import Rect

TRANSPARENT = 0x00000000
BLACK = 0xFF000000
WHITE = 0xFFFFFFFF

CAPS = ("butt", "round", "square")
JOINS = ("miter", "round", "bevel")


@dataclass(frozen=True)
class ShaderRef:
    """A gradient fill. ``bbox`` is set when the gradient maps onto the shape's box."""

    gradient_id: str
    bbox: Rect | None = None


@dataclass(frozen=True)
class DashPattern:
    intervals: tuple[float, ...]
    offset: float = 0.0


@dataclass
class Paint:
    color: int = 0x000000
    alpha: int = 255
    shader: ShaderRef | None = None
    # Stroke-only settings
    stroke_width: float = 1.0
    stroke_cap: str = "butt"
    stroke_join: str = "miter"
    dash: DashPattern | None = None

    @property
    def argb(self) -> int:
        return (self.alpha << 24) | self.color

    def set_argb(self, argb: int) -> None:
        self.color = argb & 0xFFFFFF
        self.alpha = (argb >> 24) & 0xFF

    @property
    def is_transparent(self) -> bool:
        return self.shader is None and self.argb == TRANSPARENT

    def copy(self) -> Paint:
        # Nested values are frozen, so a shallow copy is a full snapshot
        return dataclasses.replace(self)
