"""Geometric path segments emitted by the path interpreter.

Segments are in the path's own coordinate space. ``ArcTo`` mirrors the
primitive most 2D back ends expose: an arc on an axis-aligned oval, given as
a start angle and sweep in degrees (clockwise with y pointing down). Rotated
arcs carry the matrix that maps the oval's local frame into path space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

import numpy as np
from numpy.typing import NDArray

from svgscene.svg import transform as tf
from svgscene.utils.geometry import Rect


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float
    letter = "M"

    def points(self) -> NDArray[np.float64]:
        return np.array([[self.x, self.y]])

    def args(self) -> tuple[float, ...]:
        return (self.x, self.y)


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float
    letter = "L"

    def points(self) -> NDArray[np.float64]:
        return np.array([[self.x, self.y]])

    def args(self) -> tuple[float, ...]:
        return (self.x, self.y)


@dataclass(frozen=True)
class CubicTo:
    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float
    letter = "C"

    def points(self) -> NDArray[np.float64]:
        return np.array([[self.x1, self.y1], [self.x2, self.y2], [self.x, self.y]])

    def args(self) -> tuple[float, ...]:
        return (self.x1, self.y1, self.x2, self.y2, self.x, self.y)


@dataclass(frozen=True)
class QuadTo:
    x1: float
    y1: float
    x: float
    y: float
    letter = "Q"

    def points(self) -> NDArray[np.float64]:
        return np.array([[self.x1, self.y1], [self.x, self.y]])

    def args(self) -> tuple[float, ...]:
        return (self.x1, self.y1, self.x, self.y)


@dataclass(frozen=True)
class ArcTo:
    oval: Rect
    start_angle: float
    sweep_angle: float
    # Local oval frame -> path space; None when the oval is already axis-aligned in path space
    matrix: tf.Matrix | None = field(default=None, compare=False)
    letter = "A"

    def to_cubics(self) -> NDArray[np.float64]:
        """Cubic approximation, one piece per started 90 degrees: shape (n, 4, 2)."""
        n = max(1, math.ceil(abs(self.sweep_angle) / 90.0 - 1e-9))
        delta = math.radians(self.sweep_angle) / n
        k = 4.0 / 3.0 * math.tan(delta / 4.0)
        rx = self.oval.width / 2
        ry = self.oval.height / 2
        cx = self.oval.center_x
        cy = self.oval.center_y

        pieces = np.empty((n, 4, 2), dtype=np.float64)
        a = math.radians(self.start_angle)
        for i in range(n):
            b = a + delta
            ca, sa, cb, sb = math.cos(a), math.sin(a), math.cos(b), math.sin(b)
            unit = np.array(
                [
                    [ca, sa],
                    [ca - k * sa, sa + k * ca],
                    [cb + k * sb, sb - k * cb],
                    [cb, sb],
                ]
            )
            pieces[i] = unit * [rx, ry] + [cx, cy]
            a = b
        if self.matrix is not None:
            pieces = tf.map_points(self.matrix, pieces.reshape(-1, 2)).reshape(n, 4, 2)
        return pieces

    def points(self) -> NDArray[np.float64]:
        return self.to_cubics().reshape(-1, 2)

    def end_point(self) -> tuple[float, float]:
        x, y = self.to_cubics()[-1, 3]
        return float(x), float(y)

    def args(self) -> tuple[float, ...]:
        values = (*self.oval.as_tuple(), self.start_angle, self.sweep_angle)
        if self.matrix is not None:
            values += tf.to_values(self.matrix)
        return values


@dataclass(frozen=True)
class Close:
    letter = "Z"

    def points(self) -> NDArray[np.float64]:
        return np.empty((0, 2))

    def args(self) -> tuple[float, ...]:
        return ()


Segment = Union[MoveTo, LineTo, CubicTo, QuadTo, ArcTo, Close]


@dataclass(frozen=True)
class PathData:
    segments: tuple[Segment, ...] = ()
    # Current point after the last complete command
    last_point: tuple[float, float] = (0.0, 0.0)

    @property
    def closed(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], Close)

    def __len__(self) -> int:
        return len(self.segments)

    def control_bounds(self) -> Rect | None:
        """Box around every control point, the cheap bound 2D back ends compute."""
        chunks = [seg.points() for seg in self.segments]
        chunks = [c for c in chunks if len(c)]
        if not chunks:
            return None
        return Rect.from_points(np.concatenate(chunks))
