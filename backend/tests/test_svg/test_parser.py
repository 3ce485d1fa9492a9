"""Tests for the SVG parser facade."""

import gzip
import logging

import pytest

from svgscene.errors import SvgParseError, UnitMismatchError
from svgscene.svg.parser import load_path, parse_svg, parse_svg_bytes, parse_svg_file
from svgscene.svg.scene import EllipseOp, LineOp, PathOp, RectOp
from svgscene.utils.geometry import Rect
from tests.conftest import BAR_CHART_SVG, FILLED_COMPLEX_SVG, FILLED_RECT_SVG, HOME_SVG, RED_SQUARE_SVG


def test_red_square():
    scene = parse_svg(RED_SQUARE_SVG)
    assert (scene.width, scene.height) == (10, 10)
    assert len(scene.ops) == 1
    op = scene.ops[0]
    assert isinstance(op, RectOp)
    assert op.rect == Rect(0, 0, 10, 10)
    assert op.fill.argb == 0xFFFF0000
    assert op.stroke is None
    assert scene.limits == Rect(0, 0, 10, 10)
    assert scene.bounds is None
    assert scene.effective_bounds == scene.canvas


def test_stroked_circle(circle_svg):
    scene = parse_svg(circle_svg)
    assert (scene.width, scene.height) == (24, 24)
    (op,) = scene.ops
    assert isinstance(op, EllipseOp)
    assert op.oval == Rect(2, 2, 22, 22)
    assert op.fill is None
    assert op.stroke.argb == 0xFF000000
    assert op.stroke.stroke_width == 2
    assert op.stroke.stroke_cap == "round"
    assert op.stroke.stroke_join == "round"
    assert scene.limits == Rect(1, 1, 23, 23)


def test_smiley(smiley_svg):
    scene = parse_svg(smiley_svg)
    assert len(scene.ops_of("ellipse")) == 3
    assert len(scene.ops_of("path")) == 1


def test_bar_chart_lines():
    scene = parse_svg(BAR_CHART_SVG)
    lines = scene.ops_of("line")
    assert len(lines) == 3
    assert all(isinstance(op, LineOp) and op.fill is None for op in lines)
    assert (lines[1].x1, lines[1].y1, lines[1].x2, lines[1].y2) == (12, 20, 12, 4)


def test_home_paths_use_arcs():
    scene = parse_svg(HOME_SVG)
    paths = scene.ops_of("path")
    assert len(paths) == 2
    assert all(isinstance(op, PathOp) for op in paths)
    assert any(seg.letter == "A" for seg in paths[0].path.segments)
    assert paths[1].path.closed


def test_filled_documents():
    scene = parse_svg(FILLED_RECT_SVG)
    assert [op.kind for op in scene.ops] == ["rect", "ellipse"]
    assert scene.ops[0].fill.argb == 0xFF4ECDC4
    assert scene.limits == Rect(10, 10, 90, 90)

    scene = parse_svg(FILLED_COMPLEX_SVG)
    assert (scene.width, scene.height) == (256, 259)
    assert len(scene.ops) == 5
    assert scene.limits == Rect(16, 10, 240, 249)


class TestInput:
    def test_gzip_bytes(self):
        scene = parse_svg_bytes(gzip.compress(RED_SQUARE_SVG.encode("utf-8")))
        assert len(scene.ops) == 1

    def test_plain_bytes(self):
        scene = parse_svg_bytes(RED_SQUARE_SVG.encode("utf-8"))
        assert len(scene.ops) == 1

    def test_malformed(self):
        with pytest.raises(SvgParseError):
            parse_svg("<svg><rect></svg>")

    def test_corrupt_gzip(self):
        with pytest.raises(SvgParseError):
            parse_svg_bytes(b"\x1f\x8b" + b"not really gzip")

    def test_missing_file(self, tmp_path):
        with pytest.raises(SvgParseError):
            parse_svg_file(tmp_path / "absent.svg")

    def test_file(self, tmp_path):
        target = tmp_path / "square.svgz"
        target.write_bytes(gzip.compress(RED_SQUARE_SVG.encode("utf-8")))
        scene = parse_svg_file(target)
        assert scene.ops[0].fill.argb == 0xFFFF0000


class TestCanvas:
    def test_mixed_units_raise(self):
        svg = '<svg width="10px" height="10px"><rect width="1mm" height="1mm"/></svg>'
        with pytest.raises(UnitMismatchError):
            parse_svg(svg)

    def test_missing_size_uses_default(self, caplog):
        with caplog.at_level(logging.WARNING, logger="svgscene.engine.elements.structure"):
            scene = parse_svg("<svg><rect width='1' height='1'/></svg>")
        assert (scene.width, scene.height) == (100, 100)
        assert "does not provide its dimensions" in caplog.text

    def test_view_box_with_commas(self):
        scene = parse_svg('<svg width="5" height="5" viewBox="0,0,30,40"/>')
        assert (scene.width, scene.height) == (30, 40)

    def test_fractional_size_rounds_up(self):
        scene = parse_svg('<svg width="10.2" height="3"/>')
        assert (scene.width, scene.height) == (11, 3)

    def test_mm_size_is_scaled(self):
        scene = parse_svg('<svg width="1mm" height="2mm"/>')
        assert (scene.width, scene.height) == (100, 200)


def test_load_path():
    data = load_path("M0 0H10V10Z")
    assert [seg.letter for seg in data.segments] == ["M", "L", "L", "Z"]
    assert data.last_point == (0, 0)
