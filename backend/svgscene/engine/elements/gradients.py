"""Gradient definitions: linearGradient, radialGradient, stop."""

from __future__ import annotations

from svgscene.engine.context import ElementNode, ParseSession
from svgscene.engine.registry import element


@element("linearGradient", "radialGradient", description="Gradient definitions, resolved after <defs>")
def gradient(session: ParseSession, node: ElementNode):
    session.gradients.begin(node.name == "linearGradient", node.attrs)
    try:
        yield True
    finally:
        session.gradients.end()


@element("stop", description="Gradient stops")
def stop(session: ParseSession, node: ElementNode) -> None:
    session.gradients.add_stop(node.props)
