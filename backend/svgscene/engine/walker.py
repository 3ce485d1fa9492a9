"""Document walker: depth-first traversal that drives the element handlers."""

from __future__ import annotations

import logging
from xml.etree.ElementTree import Element

from svgscene.engine.context import ElementNode, ParseSession
from svgscene.engine.registry import ElementRegistry, load_element_handlers
from svgscene.svg.scene import Scene

logger = logging.getLogger(__name__)

# Only rectangles matter inside the "bounds" group
_BOUNDS_MODE_ELEMENTS = frozenset({"rect"})


class DocumentWalker:
    """Walks a parsed element tree and builds a Scene.

    Each element is handled inside its handler's scope, and the scope closes
    when the recursive call for that element returns, so every push made on
    open is popped exactly once even if a child raises.
    """

    def __init__(self, session: ParseSession | None = None, registry: ElementRegistry | None = None) -> None:
        self.session = session or ParseSession()
        self.registry = registry or load_element_handlers()

    def walk(self, root: Element) -> Scene:
        self._visit(root)
        return self.session.scene()

    def _visit(self, element: Element) -> None:
        # Comments and processing instructions have a callable tag
        if not isinstance(element.tag, str):
            return
        session = self.session
        node = ElementNode.from_xml(element)
        session.stats.elements += 1

        if session.bounds_mode and node.name not in _BOUNDS_MODE_ELEMENTS:
            return

        # Opacity never carries from one element to the next
        session.style.reset_alpha()

        spec = self.registry.find(node.name)
        if spec is None:
            if node.name not in session.stats.unknown_elements:
                logger.debug("Unrecognized SVG element: %s", node.name)
            session.stats.unknown_elements.add(node.name)
            self._children(element)
            return

        with spec.enter(session, node) as descend:
            if descend:
                self._children(element)

    def _children(self, element: Element) -> None:
        session = self.session
        if element.text and session.text_stack:
            session.text_stack[-1].append(element.text)
        for child in element:
            self._visit(child)
            if child.tail and session.text_stack:
                session.text_stack[-1].append(child.tail)
