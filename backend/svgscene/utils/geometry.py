"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in (left, top, right, bottom) order, y pointing down."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_x(self) -> float:
        return (self.left + self.right) / 2

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2

    def corners(self) -> NDArray[np.float64]:
        return np.array(
            [
                [self.left, self.top],
                [self.right, self.top],
                [self.right, self.bottom],
                [self.left, self.bottom],
            ],
            dtype=np.float64,
        )

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)

    @classmethod
    def from_points(cls, points: NDArray[np.float64] | Iterable[tuple[float, float]]) -> Rect | None:
        pts = np.asarray(list(points) if not isinstance(points, np.ndarray) else points, dtype=np.float64)
        if pts.size == 0:
            return None
        pts = pts.reshape(-1, 2)
        return cls(
            float(np.min(pts[:, 0])),
            float(np.min(pts[:, 1])),
            float(np.max(pts[:, 0])),
            float(np.max(pts[:, 1])),
        )


class LimitsAccumulator:
    """Grows the tightest box around every point fed to it."""

    def __init__(self) -> None:
        self.left = math.inf
        self.top = math.inf
        self.right = -math.inf
        self.bottom = -math.inf

    def add_point(self, x: float, y: float) -> None:
        self.left = min(self.left, x)
        self.right = max(self.right, x)
        self.top = min(self.top, y)
        self.bottom = max(self.bottom, y)

    def add_rect(self, rect: Rect, half_width: float = 0.0) -> None:
        self.add_point(rect.left - half_width, rect.top - half_width)
        self.add_point(rect.right + half_width, rect.bottom + half_width)

    @property
    def is_empty(self) -> bool:
        # Nothing drawn yet
        return math.isinf(self.top)

    def to_rect(self) -> Rect | None:
        if self.is_empty:
            return None
        return Rect(self.left, self.top, self.right, self.bottom)
