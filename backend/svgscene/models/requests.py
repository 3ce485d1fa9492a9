"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    svg: str = Field(..., description="Raw SVG code")
    white_mode: bool = Field(default=False, description="Fill everything white and drop strokes")
    search_color: str | None = Field(default=None, description="Color to substitute (#RRGGBB or name)")
    replace_color: str | None = Field(default=None, description="Substitute for search_color")
    id_to_color: dict[str, str] = Field(
        default_factory=dict,
        description="Forced colors by element id; 'transparent' hides the element",
    )
    text_replacements: dict[str, str] = Field(
        default_factory=dict,
        description="Whole-string substitutions for text content",
    )


class PathRequest(BaseModel):
    d: str = Field(..., description="Path data string")
