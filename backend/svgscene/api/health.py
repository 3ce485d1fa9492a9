"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from svgscene.engine.registry import get_registry
from svgscene.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        element_handlers=get_registry().count,
    )


@router.get("/elements")
async def elements() -> dict[str, str]:
    registry = get_registry()
    return {name: registry.get(name).description for name in registry.names()}
