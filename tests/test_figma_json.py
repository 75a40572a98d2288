"""Tests for Figma REST JSON conversion."""
import pytest

from codegen.extractors import linear_gradient
from codegen.figma_json import convert_node, convert_nodes_response
from codegen.nodes import GradientPaint, ImagePaint, NodeKind, SolidPaint
from codegen.walker import generate_code
from codegen.context import GenerationSettings


class TestPaints:

    def test_paints_are_topmost_first(self):
        node = convert_node({
            'type': 'RECTANGLE',
            'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 10, 'height': 10},
            'fills': [
                {'type': 'SOLID', 'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}},
                {'type': 'IMAGE', 'imageRef': 'abc', 'scaleMode': 'FIT'},
                {'type': 'EMOJI'},
            ],
        })
        assert isinstance(node.fills[0], ImagePaint)
        assert node.fills[0].scale_mode == 'FIT'
        assert isinstance(node.fills[1], SolidPaint)
        assert len(node.fills) == 2

    def test_gradient_from_handles(self, node_with_linear_gradient):
        paint = convert_node(node_with_linear_gradient).fills[0]
        assert isinstance(paint, GradientPaint)
        assert paint.kind == 'LINEAR'
        assert paint.transform == ((1.0, 0.0, 0.0), (0.0, 0.5, 0.5))
        assert linear_gradient(paint).angle == 90

    def test_gradient_transform_takes_precedence(self, node_with_linear_gradient):
        node_with_linear_gradient['fills'][0]['gradientTransform'] = [[0, 1, 0.5], [1, 0, 0]]
        paint = convert_node(node_with_linear_gradient).fills[0]
        assert linear_gradient(paint).angle == 180

    def test_dashed_stroke(self, node_with_dashed_stroke):
        node = convert_node(node_with_dashed_stroke)
        assert node.dashes == (5, 3)
        assert node.stroke_weight == 2
        assert isinstance(node.strokes[0], SolidPaint)

    def test_effects(self, node_with_shadows, node_with_background_blur):
        shadows = convert_node(node_with_shadows).effects
        assert [e.type for e in shadows] == ['DROP_SHADOW', 'INNER_SHADOW']
        assert shadows[0].offset_y == 4
        assert shadows[0].color.a == 0.25
        blur = convert_node(node_with_background_blur).effects[0]
        assert blur.type == 'BACKGROUND_BLUR'
        assert blur.radius == 10


class TestGeometry:

    def test_root_sits_at_origin(self, card_payload):
        card = convert_node(card_payload)
        assert (card.x, card.y, card.width, card.height) == (0, 0, 320, 120)

    def test_groups_share_the_frame_coordinate_space(self, card_payload):
        icon = convert_node(card_payload).children[1]
        assert icon.kind == NodeKind.GROUP
        assert (icon.x, icon.y) == (16, 60)
        circle, dot = icon.children
        assert (circle.x, circle.y) == (16, 60)
        assert (dot.x, dot.y) == (30, 74)

    def test_rotation_from_relative_transform(self):
        node = convert_node({
            'type': 'RECTANGLE',
            'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 10, 'height': 20},
            'size': {'x': 20, 'y': 10},
            'relativeTransform': [[0, 1, 0], [-1, 0, 0]],
        })
        assert node.rotation == 90
        # size is the unrotated size, not the bounding box
        assert (node.width, node.height) == (20, 10)

    def test_rotated_child_is_placed_by_its_transform(self):
        frame = convert_node({
            'type': 'FRAME',
            'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 300, 'height': 300},
            'children': [{
                'type': 'RECTANGLE',
                'absoluteBoundingBox': {'x': 50, 'y': 50, 'width': 40, 'height': 100},
                'size': {'x': 100, 'y': 40},
                'relativeTransform': [[0, 1, 50], [-1, 0, 150]],
                'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}}],
            }],
        })
        child = frame.children[0]
        assert (child.x, child.y) == (50, 150)
        assert child.rotation == 90
        assert 'left: 50px; top: 150px' in generate_code([frame], GenerationSettings())

    def test_mixed_radii(self):
        node = convert_node({'type': 'RECTANGLE', 'rectangleCornerRadii': [1, 2, 3, 4]})
        radii = node.corner_radii
        assert (radii.top_left, radii.top_right, radii.bottom_right, radii.bottom_left) == (1, 2, 3, 4)

    def test_unknown_type_is_other(self):
        assert convert_node({'type': 'STICKY'}).kind == NodeKind.OTHER
        assert convert_node({'type': 'INSTANCE'}).kind == NodeKind.FRAME


class TestText:

    def test_segments_split_on_overrides(self, card_payload):
        title = convert_node(card_payload).children[0]
        assert [s.characters for s in title.segments] == ['Hello ', 'world']
        assert [s.font_weight for s in title.segments] == [400, 700]
        assert title.segments[0].line_height_px == 24
        # overrides without fills keep the node fills
        assert title.segments[1].fills == title.segments[0].fills

    def test_short_override_list_uses_base_style_for_tail(self):
        node = convert_node({
            'type': 'TEXT', 'characters': 'abcd',
            'style': {'fontSize': 12},
            'characterStyleOverrides': [1, 1],
            'styleOverrideTable': {'1': {'fontSize': 20}},
        })
        assert [(s.characters, s.font_size) for s in node.segments] == [('ab', 20), ('cd', 12)]

    def test_override_indices_count_utf16_units(self):
        # the emoji takes two override slots
        node = convert_node({
            'type': 'TEXT', 'characters': '\U0001F600ab',
            'characterStyleOverrides': [0, 0, 0, 1],
            'styleOverrideTable': {'1': {'fontWeight': 700}},
        })
        assert [(s.characters, s.font_weight) for s in node.segments] == [('\U0001F600a', 400), ('b', 700)]

    def test_intrinsic_line_height_is_dropped(self):
        node = convert_node({
            'type': 'TEXT', 'characters': 'x',
            'style': {'lineHeightPx': 19.36, 'lineHeightUnit': 'INTRINSIC_%'},
        })
        assert node.segments[0].line_height_px is None

    def test_override_fills(self):
        node = convert_node({
            'type': 'TEXT', 'characters': 'ab',
            'fills': [{'type': 'SOLID', 'color': {'r': 0, 'g': 0, 'b': 0}}],
            'characterStyleOverrides': [0, 2],
            'styleOverrideTable': {'2': {'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 0, 'b': 0}}]}},
        })
        assert node.segments[0].fills[0].color.r == 0
        assert node.segments[1].fills[0].color.r == 1


class TestLayout:

    def test_inferred_layout_from_geometry(self, card_payload):
        hint = convert_node(card_payload).inferred_auto_layout
        assert hint.layout_mode == 'VERTICAL'
        assert hint.item_spacing == 20
        assert (hint.padding.top, hint.padding.right, hint.padding.bottom, hint.padding.left) == (16, 104, 20, 16)

    def test_payload_hint_wins(self, card_payload):
        card_payload['inferredAutoLayout'] = {'layoutMode': 'HORIZONTAL', 'itemSpacing': 4}
        hint = convert_node(card_payload).inferred_auto_layout
        assert hint.layout_mode == 'HORIZONTAL'
        assert hint.item_spacing == 4

    def test_declared_layout(self):
        node = convert_node({
            'type': 'FRAME', 'layoutMode': 'HORIZONTAL', 'itemSpacing': 12,
            'paddingLeft': 8, 'primaryAxisAlignItems': 'SPACE_BETWEEN', 'children': [],
        })
        assert node.own_layout.item_spacing == 12
        assert node.own_layout.padding.left == 8
        assert node.own_layout.primary_axis_align == 'SPACE_BETWEEN'


class TestNodesResponse:

    def test_convert_response(self, nodes_response):
        nodes = convert_nodes_response(nodes_response)
        assert [n.name for n in nodes] == ['Profile Card']

    def test_missing_documents_are_skipped(self):
        assert convert_nodes_response({'nodes': {'1:1': None, '1:2': {'document': None}}}) == []
        assert convert_nodes_response({}) == []

    @pytest.mark.parametrize('framework,marker', [
        ('html', 'flex-direction: column'),
        ('tailwind', 'flex-col'),
        ('flutter', 'Column('),
        ('swiftui', 'VStack('),
    ])
    def test_card_end_to_end(self, nodes_response, framework, marker):
        code = generate_code(convert_nodes_response(nodes_response), GenerationSettings(framework=framework))
        assert marker in code
        assert 'Hidden' not in code
