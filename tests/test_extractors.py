"""Tests for paint, gradient and geometry extractors."""
import pytest

from codegen.extractors import (
    border_radius, box_shadows, calculate_contrast_ratio, format_number,
    gradient_endpoints, layer_blur, linear_gradient, retrieve_top_fill, rgb_to_hex,
)
from codegen.nodes import (
    ColorValue, CornerRadii, Effect, GradientPaint, GradientStop, NodeKind,
    SceneNode, SolidPaint,
)

STOPS = (
    GradientStop(ColorValue(1, 0, 0), 0),
    GradientStop(ColorValue(0, 0, 1), 1),
)


class TestRetrieveTopFill:

    def test_empty_list_returns_none(self):
        assert retrieve_top_fill([]) is None

    def test_returns_first_paint(self):
        top = SolidPaint(ColorValue(1, 0, 0))
        assert retrieve_top_fill([top, SolidPaint(ColorValue(0, 1, 0))]) is top

    def test_hidden_top_paint_returns_none(self):
        """A hidden top paint is not replaced by the one below it."""
        paints = [SolidPaint(ColorValue(1, 0, 0), visible=False), SolidPaint(ColorValue(0, 1, 0))]
        assert retrieve_top_fill(paints) is None


class TestGradientEndpoints:

    def test_identity_transform_runs_left_to_right(self):
        start, end = gradient_endpoints(((1, 0, 0), (0, 1, 0)))
        assert start == (0, 0)
        assert end == (1, 0)

    def test_translated_and_scaled_transform(self):
        start, end = gradient_endpoints(((2, 0, 0.25), (0, 1, 0.5)))
        assert start == (0.25, 0.5)
        assert end == (2.25, 0.5)

    def test_rotated_transform_runs_top_to_bottom(self):
        start, end = gradient_endpoints(((0, 1, 0.5), (1, 0, 0)))
        assert start == (0.5, 0)
        assert end == (0.5, 1)

    def test_angle_follows_css_convention(self):
        horizontal = linear_gradient(GradientPaint('LINEAR', STOPS, ((1, 0, 0), (0, 1, 0))))
        vertical = linear_gradient(GradientPaint('LINEAR', STOPS, ((0, 1, 0.5), (1, 0, 0))))
        assert horizontal.angle == 90
        assert vertical.angle == 180

    def test_non_linear_gradient_is_not_converted(self):
        assert linear_gradient(GradientPaint('RADIAL', STOPS)) is None

    def test_solid_paint_is_not_converted(self):
        assert linear_gradient(SolidPaint(ColorValue(1, 0, 0))) is None


class TestColors:

    def test_rgb_to_hex(self):
        assert rgb_to_hex(ColorValue(1, 0.5, 0)) == 'ff8000'

    def test_contrast_black_white(self):
        ratio = calculate_contrast_ratio(ColorValue(0, 0, 0), ColorValue(1, 1, 1))
        assert ratio == pytest.approx(21.0)

    def test_contrast_is_symmetric_and_at_least_one(self):
        a, b = ColorValue(0.2, 0.4, 0.6), ColorValue(0.9, 0.9, 0.1)
        assert calculate_contrast_ratio(a, b) == calculate_contrast_ratio(b, a)
        assert calculate_contrast_ratio(a, a) == pytest.approx(1.0)

    def test_transparent_color_hex_has_alpha(self):
        assert ColorValue(1, 0, 0, 0.5).hex == '#ff000080'


class TestGeometry:

    def test_radius_clamped_to_half_shortest_side(self):
        node = SceneNode(NodeKind.RECTANGLE, width=100, height=40, corner_radii=CornerRadii(30, 30, 30, 30))
        assert border_radius(node) == CornerRadii(20, 20, 20, 20)

    def test_square_corners_return_none(self):
        assert border_radius(SceneNode(NodeKind.RECTANGLE, width=10, height=10)) is None

    def test_hidden_effects_are_ignored(self):
        node = SceneNode(NodeKind.RECTANGLE, effects=[
            Effect('DROP_SHADOW', radius=4, visible=False),
            Effect('INNER_SHADOW', radius=2),
            Effect('LAYER_BLUR', radius=6),
        ])
        assert [e.type for e in box_shadows(node)] == ['INNER_SHADOW']
        assert layer_blur(node) == 6


class TestFormatNumber:

    @pytest.mark.parametrize('value,expected', [(12.0, '12'), (0.5, '0.5'), (1.256, '1.26'), (-3, '-3')])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected
