"""Parse configuration, per-call knobs for one document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from svgscene.config import settings

if TYPE_CHECKING:
    from svgscene.engine.listener import ElementListener
    from svgscene.svg.text import TextMeasurer


@dataclass
class ParseOptions:
    """Controls color substitution, text handling and fallbacks for one parse."""

    # Fill everything solid white and drop strokes
    white_mode: bool = False

    # Global color substitution, 0xAARRGGBB
    search_color: int | None = None
    replace_color: int | None = None

    # Forced colors by element id; fully transparent hides the element
    id_to_color: dict[str, int] = field(default_factory=dict)

    # Whole-string substitutions for text content
    text_replacements: dict[str, str] = field(default_factory=dict)

    # Multiplier for pt lengths
    density: float = field(default_factory=lambda: settings.density)

    # Canvas edge when <svg> declares no size
    default_canvas_size: float = field(default_factory=lambda: settings.default_canvas_size)

    listener: ElementListener | None = None
    text_measurer: TextMeasurer | None = None
