"""Document structure: svg, defs, g, metadata."""

from __future__ import annotations

import logging
import math
from contextlib import ExitStack

import numpy as np

from svgscene.engine.context import ElementNode, ParseSession
from svgscene.engine.registry import element
from svgscene.svg import transform as tf
from svgscene.svg.numbers import parse_number_list
from svgscene.svg.scene import GroupBegin, GroupEnd
from svgscene.svg.text import TextContext
from svgscene.svg.units import parse_length
from svgscene.utils.geometry import Rect

logger = logging.getLogger(__name__)

BOUNDS_LAYER_ID = "bounds"


def _canvas_size(session: ParseSession, node: ElementNode) -> tuple[float, float] | None:
    view_box = node.attrs.get("viewBox")
    if view_box is not None:
        # Prefer viewBox
        try:
            coords = parse_number_list(view_box)
        except ValueError:
            logger.debug("Bad viewBox %r", view_box)
            return None
        if len(coords) == 4 and coords[2] >= 0 and coords[3] >= 0:
            return coords[2], coords[3]
        return None
    width = parse_length(node.attrs.get("width"), None, session.tracker)
    height = parse_length(node.attrs.get("height"), None, session.tracker)
    if width is None or height is None or width < 0 or height < 0:
        return None
    return float(math.ceil(width)), float(math.ceil(height))


@element("svg", description="Canvas size and document start/end hooks")
def svg(session: ParseSession, node: ElementNode):
    if session.width is not None:
        # Nested <svg>: contents are drawn, the canvas stays as declared
        yield True
        return

    size = _canvas_size(session, node)
    if size is None:
        size = (session.options.default_canvas_size, session.options.default_canvas_size)
        logger.warning(
            "element '%s' does not provide its dimensions; using %sx%s", node.name, size[0], size[1]
        )
    session.width, session.height = size
    session.listener.on_svg_start(Rect(0.0, 0.0, size[0], size[1]))

    # Presentation attributes on the root inherit like a group's
    with session.style_scope():
        session.style.do_fill(node.props, None)
        session.style.do_stroke(node.props)
        session.style.mark_declared(node.props)
        yield True
    session.listener.on_svg_end(session.bounds or Rect(0.0, 0.0, size[0], size[1]))


@element("defs", description="Definitions; gradients are resolved when it closes")
def defs(session: ParseSession, node: ElementNode):
    with session.defs_scope():
        yield True


def _opacity(node: ElementNode) -> float | None:
    value = node.attrs.get("opacity")
    if value is None:
        return node.props.get_float("opacity")
    try:
        return float(value)
    except ValueError:
        logger.debug("Bad opacity %r", value)
        return None


def _opacity_layer(session: ParseSession, node: ElementNode) -> tuple[int, Rect | None]:
    """Layer alpha and bounds, in the frame of the group's own matrix."""
    opacity = _opacity(node)
    if opacity is None or opacity >= 1:
        return 255, None
    # Full canvas mapped back through the current matrix, not the subtree's own box
    canvas = Rect(0.0, 0.0, session.width or 0.0, session.height or 0.0)
    try:
        layer = tf.map_rect(tf.invert(session.matrix), canvas)
    except np.linalg.LinAlgError:
        logger.debug("Singular matrix on group %r, layer left unmapped", node.id)
        layer = canvas
    return min(max(int(255 * opacity), 0), 255), layer


@element("g", description="Groups: paint inheritance, hiding, opacity layers, the bounds layer")
def group(session: ParseSession, node: ElementNode):
    props = node.props
    style = session.style
    bounds_layer = (node.id or "").lower() == BOUNDS_LAYER_ID
    hide = props.get_string("display") == "none" or style.overrides.forced_hidden(node.id)

    with ExitStack() as stack:
        stack.enter_context(session.bounds_scope(bounds_layer))
        stack.enter_context(session.hidden_scope(hide))
        stack.enter_context(session.transform_scope(node.attrs))
        alpha, layer = _opacity_layer(session, node)
        stack.enter_context(session.style_scope())

        # Groups carry text settings for the text elements inside them
        text_ctx = TextContext.open(
            node.attrs, props, session.text_parent, session.tracker, None, None, renders=False
        )
        stack.enter_context(session.text_scope(text_ctx))

        style.do_fill(props, None)
        style.do_stroke(props)
        style.mark_declared(props)

        emits = not (session.hidden or bounds_layer)
        if emits:
            session.emit_group(GroupBegin(node.id, None, None, session.frozen_matrix(), alpha=alpha, layer=layer))
        yield True
        if emits:
            end = GroupEnd(node.id, None, None, session.frozen_matrix())
            session.ops.append(end)
            session.listener.on_element_drawn(node.id, end)


@element("metadata", description="Ignored along with everything inside it")
def metadata(session: ParseSession, node: ElementNode):
    yield False
