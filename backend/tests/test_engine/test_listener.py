"""Tests for element listener hooks."""

import dataclasses

from svgscene.engine import ElementListener, ParseOptions
from svgscene.svg.parser import parse_svg
from svgscene.utils.geometry import Rect
from tests.conftest import GROUPS_SVG, RED_SQUARE_SVG


class Recorder(ElementListener):
    def __init__(self) -> None:
        self.events = []

    def on_svg_start(self, bounds):
        self.events.append(("start", bounds))

    def on_element(self, element_id, op):
        self.events.append(("element", element_id))
        return op

    def on_element_drawn(self, element_id, op):
        self.events.append(("drawn", element_id))

    def on_svg_end(self, bounds):
        self.events.append(("end", bounds))


def test_hook_order():
    recorder = Recorder()
    parse_svg(RED_SQUARE_SVG, ParseOptions(listener=recorder))
    assert recorder.events == [
        ("start", Rect(0, 0, 10, 10)),
        ("element", None),
        ("drawn", None),
        ("end", Rect(0, 0, 10, 10)),
    ]


def test_end_reports_declared_bounds():
    recorder = Recorder()
    parse_svg(GROUPS_SVG, ParseOptions(listener=recorder))
    assert recorder.events[0] == ("start", Rect(0, 0, 200, 100))
    assert recorder.events[-1] == ("end", Rect(5, 5, 195, 95))


class DropOwn(ElementListener):
    def on_element(self, element_id, op):
        if element_id in ("own", "tinted"):
            return None
        return op


def test_listener_can_drop_ops():
    scene = parse_svg(GROUPS_SVG, ParseOptions(listener=DropOwn()))
    ids = [op.id for op in scene.ops]
    assert "own" not in ids
    # Group markers are kept even when the listener declines them
    assert ids.count("tinted") == 2


class Recolor(ElementListener):
    def on_element(self, element_id, op):
        if op.kind == "rect" and op.fill is not None:
            fill = dataclasses.replace(op.fill)
            fill.set_argb(0xFF00FFFF)
            return dataclasses.replace(op, fill=fill)
        return op


def test_listener_can_replace_ops():
    scene = parse_svg(RED_SQUARE_SVG, ParseOptions(listener=Recolor()))
    assert scene.ops[0].fill.argb == 0xFF00FFFF
