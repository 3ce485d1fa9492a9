"""ParseSession: the single mutable state object for one document walk.

Per-element inputs → ElementNode
Everything that outlives an element (matrix, paints, hidden level, ops,
limits) → ParseSession. Each push is exposed as a context manager so the
matching pop runs on every exit path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from svgscene.engine.config import ParseOptions
from svgscene.engine.listener import ElementListener
from svgscene.svg import transform as tf
from svgscene.svg.attributes import Attributes, local_name
from svgscene.svg.gradients import GradientRegistry
from svgscene.svg.paint import Paint
from svgscene.svg.scene import DrawOp, Scene
from svgscene.svg.segments import PathData
from svgscene.svg.style import ColorOverrides, Properties, StyleResolver
from svgscene.svg.text import PillowTextMeasurer, TextContext
from svgscene.svg.units import UnitTracker
from svgscene.utils.geometry import LimitsAccumulator, Rect

logger = logging.getLogger(__name__)


@dataclass
class ElementNode:
    """One element as the handlers see it."""

    name: str
    attrs: Attributes
    props: Properties

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @classmethod
    def from_xml(cls, element: Element) -> ElementNode:
        attrs = Attributes(element.attrib)
        return cls(name=local_name(element.tag), attrs=attrs, props=Properties(attrs))


@dataclass
class TraversalStats:
    """Push/pop counters; equal pairs after a walk mean the stacks balanced."""

    elements: int = 0
    transform_pushes: int = 0
    transform_pops: int = 0
    style_pushes: int = 0
    style_pops: int = 0
    text_pushes: int = 0
    text_pops: int = 0
    hidden_enters: int = 0
    hidden_exits: int = 0
    unknown_elements: set[str] = field(default_factory=set)

    @property
    def balanced(self) -> bool:
        return (
            self.transform_pushes == self.transform_pops
            and self.style_pushes == self.style_pops
            and self.text_pushes == self.text_pops
            and self.hidden_enters == self.hidden_exits
        )


class ParseSession:
    """Shared state for one parse. Nothing here is shared between parses."""

    def __init__(self, options: ParseOptions | None = None) -> None:
        self.options = options or ParseOptions()
        self.tracker = UnitTracker(self.options.density)
        self.gradients = GradientRegistry(self.tracker)
        self.style = StyleResolver(
            self.gradients,
            ColorOverrides(
                search_color=self.options.search_color,
                replace_color=self.options.replace_color,
                id_to_color=dict(self.options.id_to_color),
                white_mode=self.options.white_mode,
            ),
        )
        self.listener = self.options.listener or ElementListener()
        self.measurer = self.options.text_measurer or PillowTextMeasurer()

        # Canvas size, set by the <svg> element
        self.width: float | None = None
        self.height: float | None = None

        self.matrix: tf.Matrix = tf.identity()
        self._matrix_stack: list[tf.Matrix] = []
        self.hidden_level = 0
        self.bounds_mode = False
        self.reading_defs = False
        # Path data captured inside <defs>, for <use> / href
        self.defs: dict[str, PathData] = {}
        self.text_stack: list[TextContext] = []

        self.ops: list[DrawOp] = []
        self.limits = LimitsAccumulator()
        # Declared by the "bounds" group
        self.bounds: Rect | None = None
        self.stats = TraversalStats()

    # -- scoped state ---------------------------------------------------

    @property
    def hidden(self) -> bool:
        return self.hidden_level > 0

    @contextmanager
    def transform_scope(self, attrs: Attributes) -> Iterator[bool]:
        """Concatenate the element's ``transform`` for the duration of the block."""
        value = attrs.get("transform")
        local = tf.parse_transform(value) if value is not None else None
        if local is None:
            yield False
            return
        self._matrix_stack.append(self.matrix)
        self.matrix = self.matrix @ local
        self.stats.transform_pushes += 1
        try:
            yield True
        finally:
            self.matrix = self._matrix_stack.pop()
            self.stats.transform_pops += 1

    @contextmanager
    def style_scope(self) -> Iterator[None]:
        """Paint changes inside the block never leak out of it."""
        frame = self.style.snapshot()
        self.stats.style_pushes += 1
        try:
            yield
        finally:
            self.style.restore(frame)
            self.stats.style_pops += 1

    @contextmanager
    def hidden_scope(self, hide: bool) -> Iterator[None]:
        """Count one level when already hidden or when this element hides."""
        counted = self.hidden or hide
        if counted:
            self.hidden_level += 1
            self.stats.hidden_enters += 1
        try:
            yield
        finally:
            if counted:
                self.hidden_level -= 1
                self.stats.hidden_exits += 1

    @contextmanager
    def text_scope(self, ctx: TextContext) -> Iterator[TextContext]:
        self.text_stack.append(ctx)
        self.stats.text_pushes += 1
        try:
            yield ctx
        finally:
            self.text_stack.pop()
            self.stats.text_pops += 1

    @contextmanager
    def bounds_scope(self, active: bool) -> Iterator[None]:
        if not active:
            yield
            return
        self.bounds_mode = True
        try:
            yield
        finally:
            self.bounds_mode = False

    @contextmanager
    def defs_scope(self) -> Iterator[None]:
        self.reading_defs = True
        try:
            yield
        finally:
            self.reading_defs = False
            # Forward references inside defs are settled now; the rest at document end
            self.gradients.resolve()

    @property
    def text_parent(self) -> TextContext | None:
        return self.text_stack[-1] if self.text_stack else None

    # -- output ---------------------------------------------------------

    def frozen_matrix(self) -> tf.Matrix:
        return tf.frozen(self.matrix)

    def paint_for_op(self, paint: Paint, applies: bool) -> Paint | None:
        if not applies or paint.is_transparent:
            return None
        return paint.copy()

    def emit(self, op: DrawOp) -> DrawOp | None:
        """Offer ``op`` to the listener and record whatever it returns."""
        result = self.listener.on_element(op.id, op)
        if result is None:
            logger.debug("Listener dropped %s %r", op.kind, op.id)
            return None
        self.ops.append(result)
        self.listener.on_element_drawn(op.id, result)
        return result

    def emit_group(self, op: DrawOp) -> None:
        self.listener.on_element(op.id, op)
        self.ops.append(op)

    def add_limits(self, rect: Rect, stroke: Paint | None = None) -> None:
        """Grow the limits by ``rect`` in canvas space, plus half the stroke when stroked."""
        mapped = tf.map_rect(self.matrix, rect)
        half_width = stroke.stroke_width / 2 if stroke is not None else 0.0
        self.limits.add_rect(mapped, half_width)

    def scene(self) -> Scene:
        gradients = self.gradients.resolve()
        width = self.width if self.width is not None else self.options.default_canvas_size
        height = self.height if self.height is not None else self.options.default_canvas_size
        return Scene(
            width=width,
            height=height,
            ops=tuple(self.ops),
            bounds=self.bounds,
            limits=self.limits.to_rect(),
            gradients=gradients,
        )
