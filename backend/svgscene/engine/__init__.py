"""svgscene document engine: per-parse state, element handlers and the walker."""

from svgscene.engine.config import ParseOptions
from svgscene.engine.context import ElementNode, ParseSession, TraversalStats
from svgscene.engine.listener import ElementListener
from svgscene.engine.registry import element, get_registry, load_element_handlers
from svgscene.engine.walker import DocumentWalker

__all__ = [
    "element",
    "get_registry",
    "load_element_handlers",
    "ParseOptions",
    "ParseSession",
    "ElementNode",
    "TraversalStats",
    "ElementListener",
    "DocumentWalker",
]
