"""Affine transforms: ``transform`` / ``gradientTransform`` parsing and 3x3 helpers.

Matrices are 3x3 numpy arrays acting on column vectors ``(x, y, 1)``:

    [[a, c, e],
     [b, d, f],
     [0, 0, 1]]

"pre" concatenation applies the new operation first (``M = M @ X``),
"post" concatenation applies it last (``M = X @ M``).
"""

from __future__ import annotations

import logging
import math
import re

import numpy as np
from numpy.typing import NDArray

from svgscene.svg.numbers import parse_numbers
from svgscene.utils.geometry import Rect

logger = logging.getLogger(__name__)

Matrix = NDArray[np.float64]


def identity() -> Matrix:
    return np.eye(3, dtype=np.float64)


def from_values(a: float, b: float, c: float, d: float, e: float, f: float) -> Matrix:
    return np.array([[a, c, e], [b, d, f], [0.0, 0.0, 1.0]], dtype=np.float64)


def translate(tx: float, ty: float) -> Matrix:
    return from_values(1, 0, 0, 1, tx, ty)


def scale(sx: float, sy: float) -> Matrix:
    return from_values(sx, 0, 0, sy, 0, 0)


def rotate(degrees: float) -> Matrix:
    rad = math.radians(degrees)
    cos, sin = math.cos(rad), math.sin(rad)
    return from_values(cos, sin, -sin, cos, 0, 0)


def rotate_about(degrees: float, px: float, py: float) -> Matrix:
    return translate(px, py) @ rotate(degrees) @ translate(-px, -py)


def skew(kx: float, ky: float) -> Matrix:
    return from_values(1, ky, kx, 1, 0, 0)


def invert(m: Matrix) -> Matrix:
    return np.linalg.inv(m)


def to_values(m: Matrix) -> tuple[float, float, float, float, float, float]:
    """Back to SVG ``matrix(a b c d e f)`` order."""
    return (
        float(m[0, 0]),
        float(m[1, 0]),
        float(m[0, 1]),
        float(m[1, 1]),
        float(m[0, 2]),
        float(m[1, 2]),
    )


def frozen(m: Matrix) -> Matrix:
    """Read-only copy, for values handed out in a finished scene."""
    out = np.array(m, dtype=np.float64, copy=True)
    out.flags.writeable = False
    return out


def map_points(m: Matrix, points: NDArray[np.float64]) -> NDArray[np.float64]:
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    return pts @ m[:2, :2].T + m[:2, 2]


def map_point(m: Matrix, x: float, y: float) -> tuple[float, float]:
    px, py = map_points(m, np.array([[x, y]]))[0]
    return float(px), float(py)


def map_rect(m: Matrix, rect: Rect) -> Rect:
    """Bounding box of the four mapped corners."""
    mapped = Rect.from_points(map_points(m, rect.corners()))
    assert mapped is not None
    return mapped


_FUNCTION_RE = {
    name: re.compile(rf"{name}\s*\(([^)]*)\)")
    for name in ("matrix", "scale", "skewX", "skewY", "rotate", "translate")
}


def _read_function(s: str, name: str) -> list[float] | None:
    m = _FUNCTION_RE[name].search(s)
    if m is None:
        return None
    try:
        numbers = parse_numbers(m.group(1)).numbers
    except ValueError:
        logger.debug("Bad %s() arguments in transform %r", name, s)
        return None
    return numbers or None


def parse_transform(s: str) -> Matrix | None:
    """Compose the functions found in ``s`` into one matrix.

    Functions are applied in a fixed order regardless of where they appear:
    matrix, scale, skewX, skewY, rotate, translate. Returns None when nothing
    was recognized so callers can skip the push entirely.
    """
    matrix = identity()
    transformed = False

    values = _read_function(s, "matrix")
    if values is not None and len(values) == 6:
        matrix = from_values(*values)
        transformed = True

    values = _read_function(s, "scale")
    if values is not None:
        sx = values[0]
        sy = values[1] if len(values) > 1 else sx
        matrix = scale(sx, sy) @ matrix
        transformed = True

    values = _read_function(s, "skewX")
    if values is not None:
        matrix = matrix @ skew(math.tan(math.radians(values[0])), 0)
        transformed = True

    values = _read_function(s, "skewY")
    if values is not None:
        matrix = matrix @ skew(0, math.tan(math.radians(values[0])))
        transformed = True

    values = _read_function(s, "rotate")
    if values is not None:
        angle = values[0]
        if len(values) > 2:
            matrix = matrix @ rotate_about(angle, values[1], values[2])
        else:
            matrix = matrix @ rotate(angle)
        transformed = True

    values = _read_function(s, "translate")
    if values is not None:
        tx = values[0]
        ty = values[1] if len(values) > 1 else 0.0
        matrix = translate(tx, ty) @ matrix
        transformed = True

    return matrix if transformed else None
