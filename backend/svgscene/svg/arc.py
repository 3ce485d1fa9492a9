"""Elliptical arc resolution.

Converts SVG endpoint parameterization (``A rx ry rot large sweep x y``) into
center parameterization, following the W3C implementation notes:
https://www.w3.org/TR/SVG/implnote.html#ArcImplementationNotes
"""

from __future__ import annotations

import math

from svgscene.svg import transform as tf
from svgscene.svg.segments import ArcTo, LineTo, Segment
from svgscene.utils.geometry import Rect

# Radii are scaled up slightly more than needed so rounding cannot push the
# center computation outside the sqrt domain.
LAMBDA_SLACK = 1.001


def _angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle from u to v in degrees, in (-360, 360)."""
    return math.fmod(math.degrees(math.atan2(vy, vx) - math.atan2(uy, ux)), 360.0)


def resolve_arc(
    x0: float,
    y0: float,
    x: float,
    y: float,
    rx: float,
    ry: float,
    theta: float,
    large_arc: int,
    sweep: int,
) -> list[Segment]:
    """Segments drawing the arc from (x0, y0) to (x, y); empty when there is nothing to draw."""
    if rx == 0 or ry == 0:
        return [LineTo(x, y)]
    if x == x0 and y == y0:
        return []

    rx = abs(rx)
    ry = abs(ry)

    thrad = math.radians(theta)
    st = math.sin(thrad)
    ct = math.cos(thrad)

    xc = (x0 - x) / 2
    yc = (y0 - y) / 2
    x1t = ct * xc + st * yc
    y1t = -st * xc + ct * yc

    x1ts = x1t * x1t
    y1ts = y1t * y1t
    rxs = rx * rx
    rys = ry * ry

    lam = (x1ts / rxs + y1ts / rys) * LAMBDA_SLACK
    if lam > 1:
        lam_sqrt = math.sqrt(lam)
        rx *= lam_sqrt
        ry *= lam_sqrt
        rxs = rx * rx
        rys = ry * ry

    radicand = (rxs * rys - rxs * y1ts - rys * x1ts) / (rxs * y1ts + rys * x1ts)
    coef = math.sqrt(max(radicand, 0.0)) * (-1 if large_arc == sweep else 1)
    cxt = coef * rx * y1t / ry
    cyt = -coef * ry * x1t / rx
    cx = ct * cxt - st * cyt + (x0 + x) / 2
    cy = st * cxt + ct * cyt + (y0 + y) / 2

    th1 = _angle(1, 0, (x1t - cxt) / rx, (y1t - cyt) / ry)
    dth = _angle((x1t - cxt) / rx, (y1t - cyt) / ry, (-x1t - cxt) / rx, (-y1t - cyt) / ry)

    if sweep == 0 and dth > 0:
        dth -= 360
    elif sweep != 0 and dth < 0:
        dth += 360

    if math.fmod(theta, 360) == 0:
        return [ArcTo(Rect(cx - rx, cy - ry, cx + rx, cy + ry), th1, dth)]

    # Back ends only draw arcs on axis-aligned ovals, so draw about the
    # origin and hand over the frame that rotates and places it.
    frame = tf.translate(cx, cy) @ tf.rotate(theta)
    return [ArcTo(Rect(-rx, -ry, rx, ry), th1, dth, frame)]
