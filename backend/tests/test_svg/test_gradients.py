"""Tests for gradient collection and href inheritance."""

import numpy as np
import pytest

from svgscene.svg import transform as tf
from svgscene.svg.attributes import Attributes
from svgscene.svg.gradients import GradientRegistry, GradientStop
from svgscene.svg.paint import BLACK, ShaderRef
from svgscene.svg.parser import parse_svg
from svgscene.svg.style import Properties
from svgscene.svg.units import UnitTracker
from svgscene.utils.geometry import Rect
from tests.conftest import GRADIENT_SVG


def define(registry: GradientRegistry, stops=(), linear=True, **attrs):
    registry.begin(linear, Attributes(attrs))
    for offset, color in stops:
        registry.add_stop(Properties(Attributes({"offset": offset, "stop-color": color})))
    registry.end()


@pytest.fixture
def registry() -> GradientRegistry:
    return GradientRegistry(UnitTracker())


class TestRegistry:
    def test_defaults(self, registry):
        define(registry, id="lin")
        define(registry, id="rad", linear=False)
        resolved = registry.resolve()
        assert resolved["lin"].geometry == (0.0, 0.0, 1.0, 0.0)
        assert resolved["rad"].geometry == (0.5, 0.5, 0.5)
        assert resolved["rad"].kind == "radial"
        assert resolved["lin"].spread == "pad"
        assert resolved["lin"].bounding_box

    def test_gradient_without_id_is_dropped(self, registry):
        define(registry, stops=[("0", "red")])
        assert len(registry) == 0

    def test_stop_offsets_and_opacity(self, registry):
        registry.begin(True, Attributes({"id": "g"}))
        registry.add_stop(Properties(Attributes({"offset": "150%", "stop-color": "#00ff00", "stop-opacity": "0.5"})))
        registry.add_stop(Properties(Attributes({"offset": "-1", "style": "stop-color:bogus"})))
        registry.end()
        stops = registry.resolve()["g"].stops
        assert stops == (GradientStop(1.0, 0x8000FF00), GradientStop(0.0, BLACK))

    def test_stop_outside_gradient_is_ignored(self, registry):
        registry.add_stop(Properties(Attributes({"offset": "0", "stop-color": "red"})))
        assert len(registry) == 0

    def test_forward_reference(self, registry):
        define(registry, id="child", href="#parent")
        define(registry, id="parent", stops=[("0", "red"), ("1", "blue")])
        resolved = registry.resolve()
        assert resolved["child"].colors == (0xFFFF0000, 0xFF0000FF)
        assert resolved["child"].offsets == (0.0, 1.0)

    def test_chained_references(self, registry):
        define(registry, id="c", href="#b")
        define(registry, id="b", href="#a")
        define(registry, id="a", stops=[("0", "red")])
        assert registry.resolve()["c"].colors == (0xFFFF0000,)

    def test_own_stops_are_kept(self, registry):
        define(registry, id="parent", stops=[("0", "red")])
        define(registry, id="child", href="#parent", stops=[("0", "blue")])
        assert registry.resolve()["child"].colors == (0xFF0000FF,)

    def test_matrices_compose_parent_first(self, registry):
        define(registry, id="parent", gradientTransform="translate(5,0)")
        define(registry, id="child", href="#parent", gradientTransform="scale(2)")
        matrix = registry.resolve()["child"].matrix
        expected = tf.translate(5, 0) @ tf.scale(2, 2)
        np.testing.assert_allclose(matrix, expected)

    def test_missing_parent_is_left_alone(self, registry):
        define(registry, id="orphan", href="#ghost", stops=[("0", "red")])
        resolved = registry.resolve()
        assert resolved["orphan"].colors == (0xFFFF0000,)

    def test_reference_cycle_terminates(self, registry):
        define(registry, id="x", href="#y")
        define(registry, id="y", href="#x")
        resolved = registry.resolve()
        assert set(resolved) == {"x", "y"}
        assert resolved["x"].stops == ()

    def test_self_reference_keeps_own_matrix(self, registry):
        define(registry, id="a", href="#a", gradientTransform="scale(2)", stops=[("0", "red")])
        resolved = registry.resolve()
        np.testing.assert_allclose(resolved["a"].matrix, tf.scale(2, 2))
        assert resolved["a"].colors == (0xFFFF0000,)

    def test_cycle_members_keep_own_matrices(self, registry):
        define(registry, id="a", href="#b", gradientTransform="scale(2)")
        define(registry, id="b", href="#a", gradientTransform="scale(3)")
        resolved = registry.resolve()
        np.testing.assert_allclose(resolved["a"].matrix, tf.scale(2, 2))
        np.testing.assert_allclose(resolved["b"].matrix, tf.scale(3, 3))

    def test_chain_into_cycle_still_inherits(self, registry):
        define(registry, id="c", href="#a")
        define(registry, id="a", href="#b", stops=[("0", "red")])
        define(registry, id="b", href="#a")
        resolved = registry.resolve()
        assert resolved["c"].colors == (0xFFFF0000,)
        assert resolved["b"].stops == ()

    def test_self_reference_in_document(self):
        svg = """<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="10" height="10">
          <defs><linearGradient id="a" xlink:href="#a" gradientTransform="scale(2)"/></defs>
          <rect width="10" height="10" fill="url(#a)"/>
        </svg>"""
        scene = parse_svg(svg)
        np.testing.assert_allclose(scene.gradients["a"].matrix, tf.scale(2, 2))

    def test_resolve_is_idempotent(self, registry):
        define(registry, id="child", href="#parent", gradientTransform="scale(2)")
        define(registry, id="parent", stops=[("0", "red")], gradientTransform="translate(1,1)")
        first = registry.resolve()
        second = registry.resolve()
        assert first == second
        np.testing.assert_allclose(first["child"].matrix, second["child"].matrix)

    def test_unknown_spread_falls_back_to_pad(self, registry):
        define(registry, id="g", spreadMethod="mirror")
        assert registry.resolve()["g"].spread == "pad"

    def test_shader_lookup(self, registry):
        define(registry, id="g")
        box = Rect(0, 0, 1, 1)
        assert registry.shader_for("g", box) == ShaderRef("g", box)
        assert registry.shader_for("nope", box) is None

    def test_local_matrix_maps_unit_square_onto_box(self, registry):
        define(registry, id="g")
        resolved = registry.resolve()["g"]
        m = resolved.local_matrix(Rect(10, 20, 30, 60))
        assert tf.map_point(m, 0, 0) == pytest.approx((10, 20))
        assert tf.map_point(m, 1, 1) == pytest.approx((30, 60))


class TestDocumentGradients:
    @pytest.fixture
    def scene(self):
        return parse_svg(GRADIENT_SVG)

    def test_inherited_stops(self, scene):
        b = scene.gradients["b"]
        assert b.colors == (0xFFFF0000, 0x800000FF)
        assert b.offsets == (0.0, 1.0)

    def test_spread_is_not_inherited(self, scene):
        assert scene.gradients["a"].spread == "reflect"
        assert scene.gradients["b"].spread == "pad"

    def test_own_transform(self, scene):
        np.testing.assert_allclose(scene.gradients["b"].matrix, tf.scale(2, 2))
        assert scene.gradients["a"].matrix is None

    def test_user_space_radial(self, scene):
        glow = scene.gradients["glow"]
        assert glow.kind == "radial"
        assert glow.geometry == (50.0, 25.0, 20.0)
        assert not glow.bounding_box
        assert glow.colors == (0xFFFFFFFF, 0xFF000000)

    def test_shape_paint_references_gradient(self, scene):
        left, right = scene.ops
        assert left.fill.shader == ShaderRef("b", Rect(0, 0, 50, 50))
        m = scene.gradients["b"].local_matrix(left.fill.shader.bbox)
        np.testing.assert_allclose(m, np.diag([100.0, 100.0, 1.0]))

        assert right.fill.shader == ShaderRef("glow", Rect(50, 0, 100, 50))
        np.testing.assert_allclose(scene.gradients["glow"].local_matrix(right.fill.shader.bbox), np.eye(3))

    def test_missing_gradient_strokes_black(self, scene):
        right = scene.ops[1]
        assert right.stroke.shader is None
        assert right.stroke.argb == BLACK
