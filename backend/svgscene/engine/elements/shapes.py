"""Basic shapes: rect, line, circle, ellipse, polygon, polyline."""

from __future__ import annotations

import logging
from typing import Callable

from svgscene.engine.context import ElementNode, ParseSession
from svgscene.engine.registry import element
from svgscene.svg.numbers import parse_numbers
from svgscene.svg.paint import Paint
from svgscene.svg.scene import DrawOp, EllipseOp, LineOp, PolyOp, RectOp
from svgscene.svg.units import parse_length
from svgscene.utils.geometry import Rect

logger = logging.getLogger(__name__)


def skipped(session: ParseSession, node: ElementNode) -> bool:
    """Shapes are not drawn while hidden or while reading <defs>."""
    return session.hidden or session.reading_defs or session.style.overrides.forced_hidden(node.id)


def length(session: ParseSession, node: ElementNode, name: str, default: float | None = None) -> float | None:
    return parse_length(node.attrs.get(name), default, session.tracker)


def draw_shape(
    session: ParseSession,
    node: ElementNode,
    box: Rect,
    make_op: Callable[[Paint | None, Paint | None], DrawOp],
    fill: bool = True,
) -> DrawOp | None:
    """Resolve fill and stroke against ``box``, grow the limits and emit one op.

    Call inside the element's style and transform scopes.
    """
    style = session.style
    fill_paint = None
    if fill and style.do_fill(node.props, box):
        fill_paint = session.paint_for_op(style.fill, True)
        session.add_limits(box)
    stroke_paint = None
    if style.do_stroke(node.props, box):
        stroke_paint = session.paint_for_op(style.stroke, True)
        session.add_limits(box, style.stroke)
    if fill_paint is None and stroke_paint is None:
        return None
    return session.emit(make_op(fill_paint, stroke_paint))


@element("rect", description="Rectangles, optionally rounded; also read by the bounds layer")
def rect(session: ParseSession, node: ElementNode) -> None:
    x = length(session, node, "x", 0.0)
    y = length(session, node, "y", 0.0)
    width = length(session, node, "width")
    height = length(session, node, "height")

    if session.bounds_mode:
        if width is not None and height is not None:
            session.bounds = Rect(x, y, x + width, y + height)
        return
    if skipped(session, node):
        return
    if width is None or height is None:
        logger.debug("rect %r without width/height, skipped", node.id)
        return
    if width < 0 or height < 0:
        logger.debug("rect %r has a negative size, skipped", node.id)
        return

    rx = length(session, node, "rx")
    ry = length(session, node, "ry")
    if (rx is not None and rx < 0) or (ry is not None and ry < 0):
        logger.debug("rect %r has a negative corner radius, skipped", node.id)
        return
    if ry is None:
        ry = rx
    if rx is None:
        rx = ry
    rx = min(max(rx or 0.0, 0.0), width / 2)
    ry = min(max(ry or 0.0, 0.0), height / 2)

    box = Rect(x, y, x + width, y + height)
    with session.style_scope(), session.transform_scope(node.attrs):
        matrix = session.frozen_matrix()
        draw_shape(session, node, box, lambda f, s: RectOp(node.id, f, s, matrix, rect=box, rx=rx, ry=ry))


@element("line", description="Lines; drawn only when stroked")
def line(session: ParseSession, node: ElementNode) -> None:
    if skipped(session, node):
        return
    x1 = length(session, node, "x1", 0.0)
    y1 = length(session, node, "y1", 0.0)
    x2 = length(session, node, "x2", 0.0)
    y2 = length(session, node, "y2", 0.0)
    box = Rect.from_points([(x1, y1), (x2, y2)])
    with session.style_scope(), session.transform_scope(node.attrs):
        matrix = session.frozen_matrix()
        draw_shape(
            session,
            node,
            box,
            lambda f, s: LineOp(node.id, None, s, matrix, x1=x1, y1=y1, x2=x2, y2=y2),
            fill=False,
        )


@element("circle", "ellipse", description="Circles and ellipses")
def oval(session: ParseSession, node: ElementNode) -> None:
    if skipped(session, node):
        return
    cx = length(session, node, "cx")
    cy = length(session, node, "cy")
    if node.name == "ellipse":
        rx = length(session, node, "rx")
        ry = length(session, node, "ry")
    else:
        rx = ry = length(session, node, "r")
    if cx is None or cy is None or rx is None or ry is None:
        logger.debug("%s %r is missing its center or radius, skipped", node.name, node.id)
        return
    if rx < 0 or ry < 0:
        logger.debug("%s %r has a negative radius, skipped", node.name, node.id)
        return

    box = Rect(cx - rx, cy - ry, cx + rx, cy + ry)
    with session.style_scope(), session.transform_scope(node.attrs):
        matrix = session.frozen_matrix()
        draw_shape(session, node, box, lambda f, s: EllipseOp(node.id, f, s, matrix, oval=box))


@element("polygon", "polyline", description="Point lists; polygons close")
def poly(session: ParseSession, node: ElementNode) -> None:
    if skipped(session, node):
        return
    value = node.attrs.get("points")
    if value is None:
        return
    try:
        numbers = parse_numbers(value).numbers
    except ValueError as e:
        logger.debug("Bad points on %s %r: %s", node.name, node.id, e)
        return
    if len(numbers) < 2:
        return
    if len(numbers) % 2:
        logger.debug("Odd coordinate count on %s %r, last value dropped", node.name, node.id)
    points = tuple(zip(numbers[0::2], numbers[1::2]))
    closed = node.name == "polygon"

    box = Rect.from_points(points)
    with session.style_scope(), session.transform_scope(node.attrs):
        matrix = session.frozen_matrix()
        draw_shape(session, node, box, lambda f, s: PolyOp(node.id, f, s, matrix, points=points, closed=closed))
