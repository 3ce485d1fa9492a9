"""POST /api/parse and POST /api/path: run the interpreter over request data."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, HTTPException

from svgscene.config import settings
from svgscene.engine.config import ParseOptions
from svgscene.errors import SvgConfigurationError, SvgParseError
from svgscene.models.requests import ParseRequest, PathRequest
from svgscene.models.responses import ParseResponse, PathResponse
from svgscene.svg.paint import TRANSPARENT
from svgscene.svg.parser import load_path, parse_svg
from svgscene.svg.serializer import path_to_list, rect_list, scene_to_dict
from svgscene.svg.style import parse_color

router = APIRouter()
logger = logging.getLogger(__name__)


def _argb(value: str, field: str) -> int:
    """Request colors are opaque unless spelled ``transparent`` / ``none``."""
    if value.strip().lower() in ("transparent", "none"):
        return TRANSPARENT
    color = parse_color(value)
    if color is None:
        raise HTTPException(status_code=422, detail=f"Unrecognized color for {field}: {value!r}")
    return color | 0xFF000000


def _options(req: ParseRequest) -> ParseOptions:
    if (req.search_color is None) != (req.replace_color is None):
        raise HTTPException(status_code=422, detail="search_color and replace_color go together")
    return ParseOptions(
        white_mode=req.white_mode,
        search_color=_argb(req.search_color, "search_color") if req.search_color else None,
        replace_color=_argb(req.replace_color, "replace_color") if req.replace_color else None,
        id_to_color={eid: _argb(c, f"id_to_color[{eid}]") for eid, c in req.id_to_color.items()},
        text_replacements=dict(req.text_replacements),
    )


@router.post("/parse", response_model=ParseResponse)
def parse(req: ParseRequest) -> ParseResponse:
    if len(req.svg.encode("utf-8")) > settings.max_svg_bytes:
        raise HTTPException(status_code=413, detail="SVG exceeds the configured size limit")

    options = _options(req)
    start = time.perf_counter()
    try:
        scene = parse_svg(req.svg, options)
    except (SvgParseError, SvgConfigurationError) as e:
        logger.warning("Parse rejected: %s", e)
        raise HTTPException(status_code=422, detail=str(e)) from e
    elapsed = (time.perf_counter() - start) * 1000

    return ParseResponse(
        scene=scene_to_dict(scene),
        processing_time_ms=round(elapsed, 1),
        op_count=len(scene.ops),
    )


@router.post("/path", response_model=PathResponse)
def path(req: PathRequest) -> PathResponse:
    data = load_path(req.d)
    return PathResponse(
        segments=path_to_list(data),
        end_point=data.last_point,
        closed=data.closed,
        bounds=rect_list(data.control_bounds()),
    )
