"""Text contexts and measurement for ``text`` / ``tspan``.

Character data is collected while the element is open; alignment can only be
corrected once the whole string is known, so positioning happens at close.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from functools import lru_cache
from typing import Protocol

from PIL import ImageFont

from svgscene.svg.attributes import Attributes
from svgscene.svg.paint import Paint
from svgscene.svg.style import Properties
from svgscene.svg.units import UnitTracker, parse_length
from svgscene.utils.geometry import Rect

logger = logging.getLogger(__name__)

DEFAULT_FONT_SIZE = 12.0

H_ALIGNS = ("left", "center", "right")
V_ALIGNS = ("bottom", "middle", "top")
ANCHORS = {"start": "start", "middle": "middle", "end": "end"}


@dataclass(frozen=True)
class TextStyle:
    font_size: float = DEFAULT_FONT_SIZE
    font_family: str | None = None
    font_weight: str = "normal"
    font_style: str = "normal"
    text_anchor: str = "start"

    @property
    def bold(self) -> bool:
        return self.font_weight == "bold"

    @property
    def italic(self) -> bool:
        return self.font_style == "italic"


@dataclass(frozen=True)
class TextExtents:
    """Ink box relative to the baseline origin (``top`` is negative above it)."""

    width: float
    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center_y(self) -> float:
        return (self.top + self.bottom) / 2


class TextMeasurer(Protocol):
    def measure(self, text: str, style: TextStyle) -> TextExtents: ...


@lru_cache(maxsize=64)
def _font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size=size)
    except OSError:
        return ImageFont.load_default(size=size)


class PillowTextMeasurer:
    """Measures with Pillow's bundled fonts; family and weight are not loaded."""

    def measure(self, text: str, style: TextStyle) -> TextExtents:
        if not text:
            return TextExtents(0.0, 0.0, 0.0)
        font = _font(max(1, int(round(style.font_size))))
        left, top, right, bottom = font.getbbox(text, anchor="ls")
        return TextExtents(float(font.getlength(text)), float(top), float(bottom))


def _attr_first(attrs: Attributes, props: Properties, name: str) -> str | None:
    # Font properties prefer the dedicated attribute over the inline style
    value = attrs.get(name)
    if value is None:
        value = props.get_string(name)
    return value.strip() if value is not None else None


def text_style(attrs: Attributes, props: Properties, parent: TextStyle, tracker: UnitTracker) -> TextStyle:
    style = parent
    size = _attr_first(attrs, props, "font-size")
    if size is not None:
        value = parse_length(size, None, tracker)
        if value is not None:
            style = replace(style, font_size=value)
    family = _attr_first(attrs, props, "font-family")
    if family is not None:
        style = replace(style, font_family=family.strip("'\""))
    weight = _attr_first(attrs, props, "font-weight")
    if weight is not None:
        style = replace(style, font_weight=weight)
    font_style = _attr_first(attrs, props, "font-style")
    if font_style is not None:
        style = replace(style, font_style=font_style)
    anchor = attrs.get("text-anchor")
    if anchor is not None:
        style = replace(style, text_anchor=ANCHORS.get(anchor.strip(), "start"))
    return style


@dataclass
class TextContext:
    """One open ``g``, ``text`` or ``tspan`` element."""

    id: str | None
    x: float = 0.0
    y: float = 0.0
    fill: Paint | None = None
    stroke: Paint | None = None
    style: TextStyle = field(default_factory=TextStyle)
    h_align: str = "left"
    v_align: str = "bottom"
    # Groups only carry inherited settings; they never draw
    renders: bool = True
    chunks: list[str] = field(default_factory=list)
    bounds: Rect | None = None

    @classmethod
    def open(
        cls,
        attrs: Attributes,
        props: Properties,
        parent: TextContext | None,
        tracker: UnitTracker,
        fill: Paint | None,
        stroke: Paint | None,
        renders: bool = True,
    ) -> TextContext:
        ctx = cls(
            id=attrs.get("id"),
            x=parse_length(attrs.get("x"), 0.0, tracker) or 0.0,
            y=parse_length(attrs.get("y"), 0.0, tracker) or 0.0,
            fill=fill,
            stroke=stroke,
            style=text_style(attrs, props, parent.style if parent else TextStyle(), tracker),
            renders=renders,
        )

        halign = _attr_first(attrs, props, "text-align")
        if halign is None and parent is not None:
            ctx.h_align = parent.h_align
        elif halign in H_ALIGNS:
            ctx.h_align = halign

        valign = _attr_first(attrs, props, "alignment-baseline")
        if valign is None and parent is not None:
            ctx.v_align = parent.v_align
        elif valign in V_ALIGNS:
            ctx.v_align = valign
        return ctx

    def append(self, data: str) -> None:
        self.chunks.append(data)

    def text(self, replacements: dict[str, str] | None = None) -> str | None:
        if not self.chunks:
            return None
        text = "".join(self.chunks)
        if replacements and text in replacements:
            return replacements[text]
        return text

    def align(self, text: str, measurer: TextMeasurer) -> tuple[float, float]:
        """Shift the anchor point for the alignment settings; returns the drawing origin."""
        extents = measurer.measure(text, self.style)
        x, y = self.x, self.y
        if self.v_align == "top":
            y += extents.height
        elif self.v_align == "middle":
            y -= extents.center_y
        if self.h_align == "center":
            x -= extents.width / 2
        elif self.h_align == "right":
            x -= extents.width
        self.bounds = Rect(x, y, x + extents.width, y + extents.height)
        return x, y
