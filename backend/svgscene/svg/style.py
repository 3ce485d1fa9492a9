"""Style lookup and fill/stroke resolution.

Properties come from two places: presentation attributes (``fill="red"``)
and the inline ``style`` attribute (``style="fill:red;stroke:none"``). The
inline style wins. Only the simple ``name:value`` form is understood; there
is no selector matching.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from svgscene.svg.attributes import Attributes
from svgscene.svg.colors import map_color
from svgscene.svg.paint import BLACK, CAPS, JOINS, TRANSPARENT, WHITE, DashPattern, Paint
from svgscene.utils.geometry import Rect

if TYPE_CHECKING:
    from svgscene.svg.gradients import GradientRegistry

logger = logging.getLogger(__name__)


class StyleSet:
    """Parsed inline ``style`` attribute."""

    def __init__(self, text: str) -> None:
        self.styles: dict[str, str] = {}
        for entry in text.split(";"):
            parts = entry.split(":")
            if len(parts) == 2:
                self.styles[parts[0].strip()] = parts[1].strip()

    def get(self, name: str) -> str | None:
        return self.styles.get(name)


def _channel(value: str) -> int:
    value = value.strip()
    if value.endswith("%"):
        return int(math.floor(float(value[:-1]) / 100 * 255 + 0.5))
    return int(value)


def parse_color(value: str | None) -> int | None:
    """0xRRGGBB for ``#rgb``, ``#rrggbb``, ``rgb(...)`` or a color keyword; None otherwise."""
    if value is None:
        return None
    value = value.strip()
    if value.startswith("#"):
        digits = value[1:]
        if len(digits) not in (3, 6):
            return None
        try:
            c = int(digits, 16)
        except ValueError:
            return None
        if len(digits) == 3:
            # Short form: each nibble doubles, #abc == #aabbcc
            c = (c & 0x00F) * 0x11 + (c & 0x0F0) * 0x110 + (c & 0xF00) * 0x1100
        return c
    if value.startswith("rgb(") and value.endswith(")"):
        channels = value[4:-1].split(",")
        if len(channels) != 3:
            return None
        try:
            r, g, b = (_channel(ch) & 0xFF for ch in channels)
        except ValueError:
            return None
        return (r << 16) | (g << 8) | b
    return map_color(value)


def _plain_float(value: str) -> float:
    value = value.strip()
    # px is the user unit; accept it on style values like stroke-width
    return float(value[:-2] if value.endswith("px") else value)


class Properties:
    """Style-then-attribute lookup for one element."""

    def __init__(self, attrs: Attributes) -> None:
        self.attrs = attrs
        style = attrs.get("style")
        self.styles = StyleSet(style) if style is not None else None

    def get_string(self, name: str) -> str | None:
        value = None
        if self.styles is not None:
            value = self.styles.get(name)
        if value is None:
            value = self.attrs.get(name)
        return value

    def get_float(self, name: str, default: float | None = None) -> float | None:
        value = self.get_string(name)
        if value is None:
            return default
        try:
            return _plain_float(value)
        except ValueError:
            logger.debug("Bad number for %s: %r", name, value)
            return default

    def get_color(self, name: str) -> int | None:
        return parse_color(self.get_string(name))


@dataclass
class ColorOverrides:
    """Per-parse color substitutions and the white-mode switch."""

    search_color: int | None = None
    replace_color: int | None = None
    id_to_color: dict[str, int] = field(default_factory=dict)
    white_mode: bool = False

    def replacement(self, color: int) -> int:
        if self.search_color is not None and self.replace_color is not None and self.search_color == color:
            return self.replace_color
        return color

    def color_for_id(self, element_id: str | None, color: int) -> int:
        if element_id and element_id in self.id_to_color:
            return self.id_to_color[element_id]
        return color

    def forced_hidden(self, element_id: str | None) -> bool:
        return bool(element_id) and self.color_for_id(element_id, -1) == TRANSPARENT


def dash_pattern(array: str | None, offset: str | None) -> DashPattern | None:
    """``stroke-dasharray`` / ``stroke-dashoffset``; odd interval lists repeat once."""
    if array is None or array.strip() == "none":
        return None
    tokens = [t for t in array.replace(",", " ").split() if t]
    if not tokens:
        return None
    intervals: list[float] = []
    current = 1.0
    for token in tokens:
        try:
            current = _plain_float(token)
        except ValueError:
            logger.debug("Bad dash interval %r, repeating %s", token, current)
        intervals.append(current)
    if len(intervals) % 2 == 1:
        intervals = intervals * 2

    total = sum(intervals)
    if total <= 0:
        return None
    off = 0.0
    if offset is not None:
        try:
            off = math.fmod(_plain_float(offset), total)
        except ValueError:
            logger.debug("Bad dash offset %r", offset)
    return DashPattern(tuple(intervals), off)


def _gradient_id(value: str) -> str:
    end = value.find(")")
    return value[len("url(#"): end if end >= 0 else len(value)].strip()


class StyleResolver:
    """Current fill and stroke paints for one traversal.

    ``fill_set`` / ``stroke_set`` record whether an ancestor declared the
    property; without it an element that omits ``fill`` gets the default
    black fill rather than the inherited paint.
    """

    def __init__(self, gradients: GradientRegistry, overrides: ColorOverrides | None = None) -> None:
        self.gradients = gradients
        self.overrides = overrides or ColorOverrides()
        self.fill = Paint()
        self.stroke = Paint()
        self.fill_set = False
        self.stroke_set = False

    # -- stack frames -------------------------------------------------

    def snapshot(self) -> tuple[Paint, Paint, bool, bool]:
        return self.fill.copy(), self.stroke.copy(), self.fill_set, self.stroke_set

    def restore(self, frame: tuple[Paint, Paint, bool, bool]) -> None:
        fill, stroke, self.fill_set, self.stroke_set = frame
        self.fill = fill.copy()
        self.stroke = stroke.copy()

    def mark_declared(self, props: Properties) -> None:
        self.fill_set |= props.get_string("fill") is not None
        self.stroke_set |= props.get_string("stroke") is not None

    def reset_alpha(self) -> None:
        """Opacity never carries over from one element to the next."""
        for paint in (self.fill, self.stroke):
            if not paint.is_transparent:
                paint.alpha = 255

    # -- resolution ---------------------------------------------------

    def do_color(self, props: Properties, color: int, fill_mode: bool, paint: Paint) -> None:
        c = (color & 0xFFFFFF) | 0xFF000000
        element_id = props.get_string("id")
        c = self.overrides.replacement(c)
        c = self.overrides.color_for_id(element_id, c)
        paint.shader = None
        paint.set_argb(c)

        opacity = props.get_float("opacity")
        own = props.get_float("fill-opacity" if fill_mode else "stroke-opacity")
        if opacity is None:
            opacity = own
        elif own is not None:
            opacity *= own
        if opacity is None:
            paint.alpha = 255
        else:
            paint.alpha = min(max(int(255 * opacity), 0), 255)

    def _apply_paint(self, props: Properties, name: str, value: str, bbox: Rect | None, paint: Paint) -> bool:
        """Shared url()/none/color handling; returns False for ``none``."""
        fill_mode = name == "fill"
        if value.startswith("url(#"):
            gradient_id = _gradient_id(value)
            shader = self.gradients.shader_for(gradient_id, bbox)
            if shader is not None:
                paint.shader = shader
                paint.alpha = 255
                return True
            logger.debug("Didn't find shader, using black: %s", gradient_id)
            self.do_color(props, BLACK, fill_mode, paint)
            return True
        if value.lower() == "none":
            paint.shader = None
            paint.set_argb(TRANSPARENT)
            return False
        color = props.get_color(name)
        if color is None:
            logger.debug("Unrecognized %s color, using black: %s", name, value)
            color = BLACK
        self.do_color(props, color, fill_mode, paint)
        return True

    def do_fill(self, props: Properties, bbox: Rect | None) -> bool:
        """Resolve the fill paint; False means the element is not filled at all."""
        if props.get_string("display") == "none":
            return False
        if self.overrides.white_mode:
            self.fill.shader = None
            self.fill.set_argb(WHITE)
            return True
        value = props.get_string("fill")
        if value is not None:
            self._apply_paint(props, "fill", value.strip(), bbox, self.fill)
            # An explicit none still "fills" with transparent
            return True
        if self.fill_set:
            return not self.fill.is_transparent
        self.fill.shader = None
        self.fill.set_argb(BLACK)
        return True

    def do_stroke(self, props: Properties, bbox: Rect | None = None) -> bool:
        """Resolve the stroke paint and its geometry settings; False means no stroke."""
        if self.overrides.white_mode:
            # Never stroke in white mode
            return False
        if props.get_string("display") == "none":
            return False
        value = props.get_string("stroke")
        if value is not None:
            if not self._apply_paint(props, "stroke", value.strip(), bbox, self.stroke):
                return False
        elif not self.stroke_set or self.stroke.is_transparent:
            return False

        width = props.get_float("stroke-width")
        if width is not None:
            self.stroke.stroke_width = width
        cap = props.get_string("stroke-linecap")
        if cap is not None and cap.strip() in CAPS:
            self.stroke.stroke_cap = cap.strip()
        join = props.get_string("stroke-linejoin")
        if join is not None and join.strip() in JOINS:
            self.stroke.stroke_join = join.strip()
        dasharray = props.get_string("stroke-dasharray")
        if dasharray is not None:
            self.stroke.dash = dash_pattern(dasharray, props.get_string("stroke-dashoffset"))
        return True
