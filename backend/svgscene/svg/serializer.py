"""JSON-safe rendering of a Scene for the HTTP surface."""

from __future__ import annotations

from typing import Any

from svgscene.svg import transform as tf
from svgscene.svg.gradients import ResolvedGradient
from svgscene.svg.paint import Paint
from svgscene.svg.scene import EllipseOp, GroupBegin, LineOp, PathOp, PolyOp, RectOp, Scene, TextOp
from svgscene.svg.segments import PathData
from svgscene.utils.geometry import Rect


def color_hex(argb: int) -> str:
    return f"#{argb & 0xFFFFFFFF:08X}"


def rect_list(rect: Rect | None) -> list[float] | None:
    return None if rect is None else list(rect.as_tuple())


def paint_to_dict(paint: Paint | None, stroke: bool = False) -> dict[str, Any] | None:
    if paint is None:
        return None
    out: dict[str, Any] = {"color": color_hex(paint.argb)}
    if paint.shader is not None:
        out["gradient"] = paint.shader.gradient_id
        out["gradient_bbox"] = rect_list(paint.shader.bbox)
    if stroke:
        out["width"] = paint.stroke_width
        out["cap"] = paint.stroke_cap
        out["join"] = paint.stroke_join
        if paint.dash is not None:
            out["dash"] = {"intervals": list(paint.dash.intervals), "offset": paint.dash.offset}
    return out


def path_to_list(path: PathData) -> list[list[Any]]:
    """Segments as ``[letter, *args]``."""
    return [[seg.letter, *seg.args()] for seg in path.segments]


def gradient_to_dict(gradient: ResolvedGradient) -> dict[str, Any]:
    return {
        "kind": gradient.kind,
        "geometry": list(gradient.geometry),
        "offsets": list(gradient.offsets),
        "colors": [color_hex(c) for c in gradient.colors],
        "spread": gradient.spread,
        "bounding_box": gradient.bounding_box,
        "matrix": None if gradient.matrix is None else list(tf.to_values(gradient.matrix)),
    }


def _geometry(op: Any) -> dict[str, Any]:
    if isinstance(op, RectOp):
        return {"rect": rect_list(op.rect), "rx": op.rx, "ry": op.ry}
    if isinstance(op, LineOp):
        return {"points": [[op.x1, op.y1], [op.x2, op.y2]]}
    if isinstance(op, EllipseOp):
        return {"oval": rect_list(op.oval)}
    if isinstance(op, PolyOp):
        return {"points": [list(p) for p in op.points], "closed": op.closed}
    if isinstance(op, PathOp):
        return {"segments": path_to_list(op.path), "closed": op.path.closed}
    if isinstance(op, TextOp):
        return {
            "text": op.text,
            "x": op.x,
            "y": op.y,
            "font_size": op.style.font_size,
            "font_family": op.style.font_family,
            "bold": op.style.bold,
            "italic": op.style.italic,
            "text_anchor": op.style.text_anchor,
            "bounds": rect_list(op.bounds),
        }
    if isinstance(op, GroupBegin):
        return {"alpha": op.alpha, "layer": rect_list(op.layer)}
    return {}


def op_to_dict(op: Any) -> dict[str, Any]:
    out: dict[str, Any] = {
        "kind": op.kind,
        "id": op.id,
        "matrix": list(tf.to_values(op.matrix)),
        "fill": paint_to_dict(op.fill),
        "stroke": paint_to_dict(op.stroke, stroke=True),
    }
    out.update(_geometry(op))
    return out


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    return {
        "width": scene.width,
        "height": scene.height,
        "bounds": rect_list(scene.bounds),
        "limits": rect_list(scene.limits),
        "ops": [op_to_dict(op) for op in scene.ops],
        "gradients": {gid: gradient_to_dict(g) for gid, g in scene.gradients.items()},
    }
