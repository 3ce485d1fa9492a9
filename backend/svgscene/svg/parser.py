"""SVG parser: facade over xml.etree + the document walker.

Converts raw SVG text, bytes or a file into a Scene.
"""

from __future__ import annotations

import gzip
import logging
import time
import xml.etree.ElementTree as ET
import zlib
from pathlib import Path

from svgscene.engine.config import ParseOptions
from svgscene.engine.context import ParseSession
from svgscene.engine.walker import DocumentWalker
from svgscene.errors import SvgParseError
from svgscene.svg.path import parse_path
from svgscene.svg.scene import Scene
from svgscene.svg.segments import PathData

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def _parse_tree(source: str | bytes) -> ET.Element:
    try:
        return ET.fromstring(source)
    except ET.ParseError as e:
        raise SvgParseError(f"Malformed SVG: {e}") from e


def _walk(root: ET.Element, options: ParseOptions | None) -> Scene:
    start = time.perf_counter()
    session = ParseSession(options)
    scene = DocumentWalker(session).walk(root)
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Parsed SVG: %d elements, %d ops, canvas %gx%g in %.1fms",
        session.stats.elements,
        len(scene.ops),
        scene.width,
        scene.height,
        elapsed,
    )
    return scene


def parse_svg(svg_text: str, options: ParseOptions | None = None) -> Scene:
    """Parse raw SVG text into a Scene."""
    return _walk(_parse_tree(svg_text), options)


def parse_svg_bytes(data: bytes, options: ParseOptions | None = None) -> Scene:
    """Parse SVG bytes; gzip-compressed input (.svgz) is detected by its magic number."""
    if data[:2] == GZIP_MAGIC:
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as e:
            raise SvgParseError(f"Corrupt gzip stream: {e}") from e
    return _walk(_parse_tree(data), options)


def parse_svg_file(path: str | Path, options: ParseOptions | None = None) -> Scene:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise SvgParseError(f"Could not read {path}: {e}") from e
    return parse_svg_bytes(data, options)


def load_path(d: str) -> PathData:
    """Interpret a bare path ``d`` string."""
    return parse_path(d)
