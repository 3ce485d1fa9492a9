"""Path elements and ``use`` references to paths captured in <defs>."""

from __future__ import annotations

import logging

from svgscene.engine.context import ElementNode, ParseSession
from svgscene.engine.elements.shapes import draw_shape, skipped
from svgscene.engine.registry import element
from svgscene.svg.path import parse_path
from svgscene.svg.scene import PathOp
from svgscene.svg.segments import PathData

logger = logging.getLogger(__name__)


def _referenced(session: ParseSession, node: ElementNode) -> PathData | None:
    href = node.attrs.get("href")
    if href is None:
        return None
    href = href.strip().removeprefix("#")
    data = session.defs.get(href)
    if data is None:
        logger.debug("%s %r references unknown path %r", node.name, node.id, href)
    return data


@element("path", "use", description="Path data, inline or referenced from <defs>")
def path(session: ParseSession, node: ElementNode) -> None:
    if session.hidden or session.style.overrides.forced_hidden(node.id):
        return
    d = node.attrs.get("d")

    if session.reading_defs:
        if node.name == "path" and node.id and d is not None:
            session.defs[node.id] = parse_path(d)
        return
    if skipped(session, node):
        return

    # A use element is drawn as a path; its x/y offsets are not applied
    data = parse_path(d) if d is not None else _referenced(session, node)
    if data is None:
        return
    box = data.control_bounds()
    if box is None:
        logger.debug("Empty path %r, skipped", node.id)
        return

    with session.style_scope(), session.transform_scope(node.attrs):
        matrix = session.frozen_matrix()
        draw_shape(session, node, box, lambda f, s: PathOp(node.id, f, s, matrix, path=data))
