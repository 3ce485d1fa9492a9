"""API response models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    element_handlers: int = 0


class ParseResponse(BaseModel):
    scene: dict[str, Any]
    processing_time_ms: float = 0.0
    op_count: int = 0


class PathResponse(BaseModel):
    segments: list[list[Any]] = Field(default_factory=list)
    end_point: tuple[float, float] = (0.0, 0.0)
    closed: bool = False
    bounds: list[float] | None = None
