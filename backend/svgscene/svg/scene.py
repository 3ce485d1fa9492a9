"""Scene description handed to a rendering back end.

Every op carries the matrix that was current when it was emitted. Geometry
stays in the element's local coordinates; the back end concatenates the
matrix itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from svgscene.svg import transform as tf
from svgscene.svg.gradients import ResolvedGradient
from svgscene.svg.paint import Paint
from svgscene.svg.segments import PathData
from svgscene.svg.text import TextStyle
from svgscene.utils.geometry import Rect


@dataclass(frozen=True)
class _Op:
    id: str | None
    fill: Paint | None
    stroke: Paint | None
    matrix: tf.Matrix = field(compare=False, repr=False)


@dataclass(frozen=True)
class RectOp(_Op):
    rect: Rect = Rect(0, 0, 0, 0)
    rx: float = 0.0
    ry: float = 0.0
    kind = "rect"


@dataclass(frozen=True)
class LineOp(_Op):
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    kind = "line"


@dataclass(frozen=True)
class EllipseOp(_Op):
    oval: Rect = Rect(0, 0, 0, 0)
    kind = "ellipse"


@dataclass(frozen=True)
class PolyOp(_Op):
    points: tuple[tuple[float, float], ...] = ()
    closed: bool = False
    kind = "poly"


@dataclass(frozen=True)
class PathOp(_Op):
    path: PathData = PathData()
    kind = "path"


@dataclass(frozen=True)
class TextOp(_Op):
    text: str = ""
    x: float = 0.0
    y: float = 0.0
    style: TextStyle = TextStyle()
    bounds: Rect | None = None
    kind = "text"


@dataclass(frozen=True)
class GroupBegin(_Op):
    # 255 means no transparency layer
    alpha: int = 255
    # In the coordinates of this op's matrix, like the group's children
    layer: Rect | None = None
    kind = "group_begin"


@dataclass(frozen=True)
class GroupEnd(_Op):
    kind = "group_end"


DrawOp = Union[RectOp, LineOp, EllipseOp, PolyOp, PathOp, TextOp, GroupBegin, GroupEnd]


@dataclass(frozen=True)
class Scene:
    width: float
    height: float
    ops: tuple[DrawOp, ...] = ()
    # Declared by a group with id "bounds"
    bounds: Rect | None = None
    # Computed from the drawn geometry
    limits: Rect | None = None
    gradients: dict[str, ResolvedGradient] = field(default_factory=dict, compare=False)

    @property
    def canvas(self) -> Rect:
        return Rect(0.0, 0.0, self.width, self.height)

    @property
    def effective_bounds(self) -> Rect:
        return self.bounds if self.bounds is not None else self.canvas

    def ops_of(self, kind: str) -> list[DrawOp]:
        return [op for op in self.ops if op.kind == kind]
