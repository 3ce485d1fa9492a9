"""Linear and radial gradient definitions.

Gradients are collected while the document is walked and resolved in a
separate pass: an ``href`` may point at a gradient defined later in the
document, so inheritance cannot be settled when the referencing element is
read.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from svgscene.svg import transform as tf
from svgscene.svg.attributes import Attributes
from svgscene.svg.paint import BLACK, ShaderRef
from svgscene.svg.style import Properties
from svgscene.svg.units import UnitTracker, parse_length
from svgscene.utils.geometry import Rect

logger = logging.getLogger(__name__)

SPREAD_METHODS = ("pad", "reflect", "repeat")


@dataclass(frozen=True)
class GradientStop:
    offset: float
    argb: int


@dataclass
class Gradient:
    id: str | None
    linear: bool
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 1.0
    y2: float = 0.0
    cx: float = 0.5
    cy: float = 0.5
    r: float = 0.5
    stops: list[GradientStop] = field(default_factory=list)
    matrix: tf.Matrix | None = None
    spread: str = "pad"
    bounding_box: bool = True
    href: str | None = None
    # Set once the href chain has been followed
    inherited: bool = False

    def inherit(self, parent: Gradient) -> None:
        if not self.stops:
            self.stops = list(parent.stops)
        if self.matrix is None:
            self.matrix = parent.matrix
        elif parent.matrix is not None:
            self.matrix = parent.matrix @ self.matrix
        self.inherited = True


@dataclass(frozen=True)
class ResolvedGradient:
    id: str
    kind: str
    # (x1, y1, x2, y2) for linear, (cx, cy, r) for radial
    geometry: tuple[float, ...]
    stops: tuple[GradientStop, ...]
    spread: str
    bounding_box: bool
    matrix: tf.Matrix | None = field(default=None, compare=False)

    @property
    def offsets(self) -> tuple[float, ...]:
        return tuple(s.offset for s in self.stops)

    @property
    def colors(self) -> tuple[int, ...]:
        return tuple(s.argb for s in self.stops)

    def local_matrix(self, bbox: Rect | None = None) -> tf.Matrix:
        """Gradient space -> user space for a shape with bounding box ``bbox``."""
        m = tf.identity() if self.matrix is None else self.matrix.copy()
        if bbox is not None and self.bounding_box:
            m = m @ tf.translate(bbox.left, bbox.top) @ tf.scale(bbox.width, bbox.height)
        return m


def _parse_offset(value: str | None) -> float:
    if value is None:
        return 0.0
    value = value.strip()
    try:
        offset = float(value[:-1]) / 100 if value.endswith("%") else float(value)
    except ValueError:
        logger.debug("Bad stop offset %r", value)
        return 0.0
    return min(max(offset, 0.0), 1.0)


class GradientRegistry:
    """Gradient table for one document."""

    def __init__(self, tracker: UnitTracker) -> None:
        self._tracker = tracker
        self._gradients: dict[str, Gradient] = {}
        self.current: Gradient | None = None

    def __contains__(self, gradient_id: str) -> bool:
        return gradient_id in self._gradients

    def __len__(self) -> int:
        return len(self._gradients)

    def begin(self, linear: bool, attrs: Attributes) -> Gradient:
        def length(name: str, default: float) -> float:
            value = parse_length(attrs.get(name), default, self._tracker)
            return default if value is None else value

        gradient = Gradient(id=attrs.get("id"), linear=linear)
        if linear:
            gradient.x1 = length("x1", 0.0)
            gradient.y1 = length("y1", 0.0)
            gradient.x2 = length("x2", 1.0)
            gradient.y2 = length("y2", 0.0)
        else:
            gradient.cx = length("cx", 0.5)
            gradient.cy = length("cy", 0.5)
            gradient.r = length("r", 0.5)

        transform = attrs.get("gradientTransform")
        if transform is not None:
            gradient.matrix = tf.parse_transform(transform)

        spread = attrs.get("spreadMethod", "pad").strip()
        gradient.spread = spread if spread in SPREAD_METHODS else "pad"
        gradient.bounding_box = attrs.get("gradientUnits", "objectBoundingBox").strip() != "userSpaceOnUse"

        href = attrs.get("href")
        if href is not None:
            gradient.href = href.strip().removeprefix("#")

        self.current = gradient
        return gradient

    def add_stop(self, props: Properties) -> None:
        if self.current is None:
            return
        offset = _parse_offset(props.get_string("offset"))
        color = props.get_color("stop-color")
        if color is None:
            logger.debug("Unresolved stop-color %r, using black", props.get_string("stop-color"))
            color = BLACK
        alpha = props.get_float("stop-opacity", 1.0)
        alpha_int = min(max(int(math.floor(255 * alpha + 0.5)), 0), 255)
        self.current.stops.append(GradientStop(offset, (color & 0xFFFFFF) | (alpha_int << 24)))

    def end(self) -> None:
        gradient = self.current
        self.current = None
        if gradient is None:
            return
        if gradient.id is None:
            logger.debug("Dropping gradient without id")
            return
        self._gradients[gradient.id] = gradient

    def _in_cycle(self, gradient: Gradient) -> bool:
        """True when following hrefs from ``gradient`` leads back to it."""
        seen: set[str] = set()
        current = gradient
        while current.href is not None:
            current = self._gradients.get(current.href)
            if current is None or current.id in seen:
                return False
            if current is gradient:
                return True
            seen.add(current.id or "")
        return False

    def _follow(self, gradient: Gradient) -> None:
        if gradient.inherited or gradient.href is None:
            return
        parent = self._gradients.get(gradient.href)
        if parent is None:
            # May still be defined later; retried on the next pass
            return
        self._follow(parent)
        gradient.inherit(parent)

    def resolve(self) -> dict[str, ResolvedGradient]:
        """Settle href inheritance and freeze every gradient seen so far."""
        # Members of a reference cycle keep their own settings
        for gradient in self._gradients.values():
            if not gradient.inherited and gradient.href is not None and self._in_cycle(gradient):
                logger.warning("Gradient reference cycle through %r", gradient.id)
                gradient.inherited = True
        for gradient in self._gradients.values():
            self._follow(gradient)

        resolved: dict[str, ResolvedGradient] = {}
        for gid, gradient in self._gradients.items():
            if gradient.href is not None and not gradient.inherited:
                logger.warning("Gradient %r references unknown gradient %r", gid, gradient.href)
            if not gradient.stops:
                logger.warning("bad gradient, id=%s", gid)
            geometry = (
                (gradient.x1, gradient.y1, gradient.x2, gradient.y2)
                if gradient.linear
                else (gradient.cx, gradient.cy, gradient.r)
            )
            resolved[gid] = ResolvedGradient(
                id=gid,
                kind="linear" if gradient.linear else "radial",
                geometry=geometry,
                stops=tuple(gradient.stops),
                spread=gradient.spread,
                bounding_box=gradient.bounding_box,
                matrix=None if gradient.matrix is None else tf.frozen(gradient.matrix),
            )
        return resolved

    def shader_for(self, gradient_id: str, bbox: Rect | None) -> ShaderRef | None:
        if gradient_id not in self:
            return None
        return ShaderRef(gradient_id, bbox)
