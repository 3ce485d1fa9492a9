"""Text elements. Content is known only at close, so drawing happens there."""

from __future__ import annotations

import logging
from contextlib import ExitStack

from svgscene.engine.context import ElementNode, ParseSession
from svgscene.engine.registry import element
from svgscene.svg.scene import TextOp
from svgscene.svg.text import TextContext

logger = logging.getLogger(__name__)


def _render(session: ParseSession, ctx: TextContext) -> None:
    text = ctx.text(session.options.text_replacements)
    if text is None or not text.strip():
        return
    if ctx.fill is None and ctx.stroke is None:
        return
    x, y = ctx.align(text, session.measurer)
    session.emit(
        TextOp(
            ctx.id,
            ctx.fill,
            ctx.stroke,
            session.frozen_matrix(),
            text=text,
            x=x,
            y=y,
            style=ctx.style,
            bounds=ctx.bounds,
        )
    )


@element("text", "tspan", description="Text runs with inherited font and alignment")
def text(session: ParseSession, node: ElementNode):
    if session.hidden or session.reading_defs or session.style.overrides.forced_hidden(node.id):
        yield False
        return

    style = session.style
    props = node.props
    with ExitStack() as stack:
        # Only <text> establishes a coordinate system; tspans share it
        if node.name == "text":
            stack.enter_context(session.transform_scope(node.attrs))
        stack.enter_context(session.style_scope())

        filled = style.do_fill(props, None)
        stroked = style.do_stroke(props)
        style.mark_declared(props)
        ctx = TextContext.open(
            node.attrs,
            props,
            session.text_parent,
            session.tracker,
            session.paint_for_op(style.fill, filled),
            session.paint_for_op(style.stroke, stroked),
        )
        stack.enter_context(session.text_scope(ctx))
        yield True
        _render(session, ctx)
