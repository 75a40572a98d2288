"""Shared fixtures: Figma REST payloads and scene graphs."""
import pytest

from codegen.context import GenerationContext, GenerationSettings
from codegen.nodes import ColorValue, NodeKind, SceneNode, SolidPaint

BLUE = ColorValue(0x3b / 255, 0x82 / 255, 0xf6 / 255)   # tailwind blue-500
RED = ColorValue(1, 0, 0)


def solid(color=BLUE, **kwargs):
    return SolidPaint(color=color, **kwargs)


def rect(name='Box', x=0, y=0, width=100, height=40, fills=None, **kwargs):
    return SceneNode(
        kind=NodeKind.RECTANGLE, name=name, x=x, y=y, width=width, height=height,
        fills=[solid()] if fills is None else fills, **kwargs
    )


@pytest.fixture
def make_context():
    """Factory for a generation context with the given settings."""
    def _make(framework='html', preview=False, **settings):
        return GenerationContext(GenerationSettings(framework=framework, **settings), preview=preview)
    return _make


@pytest.fixture
def flow_frame():
    """Horizontal auto-layout frame with two fixed-size boxes."""
    return SceneNode(
        kind=NodeKind.FRAME, name='Row', width=200, height=100,
        layout_mode='HORIZONTAL', item_spacing=8,
        children=[
            rect('A', x=10, y=10, width=50, height=50),
            rect('B', x=68, y=10, width=50, height=50, fills=[solid(RED)]),
        ],
    )


@pytest.fixture
def absolute_frame():
    """Freeform frame with two boxes at explicit coordinates."""
    return SceneNode(
        kind=NodeKind.FRAME, name='Canvas', width=300, height=200,
        children=[
            rect('A', x=10, y=20, width=50, height=50),
            rect('B', x=100, y=40, width=50, height=50, fills=[solid(RED)]),
        ],
    )


@pytest.fixture
def node_with_dashed_stroke():
    """Figma node with dashed border stroke."""
    return {
        'id': '1:10',
        'name': 'Dashed',
        'type': 'RECTANGLE',
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 200, 'height': 100},
        'fills': [{'type': 'SOLID', 'visible': True, 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}, 'opacity': 1}],
        'strokes': [{'type': 'SOLID', 'visible': True, 'color': {'r': 0, 'g': 0, 'b': 0, 'a': 1}, 'opacity': 1}],
        'strokeWeight': 2,
        'strokeAlign': 'INSIDE',
        'strokeDashes': [5, 3],
        'effects': [],
        'children': [],
    }


@pytest.fixture
def node_with_shadows():
    """Figma node with a drop shadow and an inner shadow."""
    return {
        'id': '1:11',
        'name': 'Shadowed',
        'type': 'RECTANGLE',
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 200, 'height': 100},
        'fills': [{'type': 'SOLID', 'visible': True, 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}}],
        'strokes': [],
        'effects': [
            {
                'type': 'DROP_SHADOW', 'visible': True, 'radius': 8, 'spread': 0,
                'color': {'r': 0, 'g': 0, 'b': 0, 'a': 0.25},
                'offset': {'x': 0, 'y': 4}
            },
            {
                'type': 'INNER_SHADOW', 'visible': True, 'radius': 4, 'spread': 0,
                'color': {'r': 0, 'g': 0, 'b': 0, 'a': 0.25},
                'offset': {'x': 0, 'y': 2}
            },
        ],
        'children': [],
    }


@pytest.fixture
def node_with_background_blur():
    """Figma node with BACKGROUND_BLUR effect."""
    return {
        'id': '1:12',
        'name': 'Glass',
        'type': 'RECTANGLE',
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 200, 'height': 100},
        'fills': [{'type': 'SOLID', 'visible': True, 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 0.5}}],
        'strokes': [],
        'effects': [{'type': 'BACKGROUND_BLUR', 'visible': True, 'radius': 10}],
        'children': [],
    }


@pytest.fixture
def node_with_linear_gradient():
    """Figma node with a left-to-right linear gradient (handles only)."""
    return {
        'id': '1:13',
        'name': 'Gradient',
        'type': 'RECTANGLE',
        'absoluteBoundingBox': {'x': 0, 'y': 0, 'width': 300, 'height': 150},
        'fills': [{
            'type': 'GRADIENT_LINEAR', 'visible': True, 'opacity': 1,
            'gradientStops': [
                {'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}, 'position': 0},
                {'color': {'r': 0, 'g': 0, 'b': 1, 'a': 1}, 'position': 1},
            ],
            'gradientHandlePositions': [
                {'x': 0.0, 'y': 0.5},
                {'x': 1.0, 'y': 0.5},
                {'x': 0.0, 'y': 1.0},
            ]
        }],
        'strokes': [],
        'effects': [],
        'children': [],
    }


@pytest.fixture
def card_payload():
    """Freeform card frame: a title with two style runs and a grouped icon."""
    return {
        'id': '1:2',
        'name': 'Profile Card',
        'type': 'FRAME',
        'absoluteBoundingBox': {'x': 100, 'y': 200, 'width': 320, 'height': 120},
        'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}}],
        'strokes': [],
        'effects': [],
        'cornerRadius': 12,
        'clipsContent': True,
        'children': [
            {
                'id': '1:3',
                'name': 'Title',
                'type': 'TEXT',
                'absoluteBoundingBox': {'x': 116, 'y': 216, 'width': 200, 'height': 24},
                'characters': 'Hello world',
                'style': {
                    'fontFamily': 'Inter', 'fontWeight': 400, 'fontSize': 16,
                    'lineHeightPx': 24, 'textAlignHorizontal': 'LEFT',
                },
                'characterStyleOverrides': [0, 0, 0, 0, 0, 0, 1, 1, 1, 1, 1],
                'styleOverrideTable': {'1': {'fontWeight': 700}},
                'fills': [{'type': 'SOLID', 'color': {'r': 0, 'g': 0, 'b': 0, 'a': 1}}],
            },
            {
                'id': '1:4',
                'name': 'Icon',
                'type': 'GROUP',
                'absoluteBoundingBox': {'x': 116, 'y': 260, 'width': 40, 'height': 40},
                'children': [
                    {
                        'id': '1:5',
                        'name': 'Circle',
                        'type': 'ELLIPSE',
                        'absoluteBoundingBox': {'x': 116, 'y': 260, 'width': 40, 'height': 40},
                        'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 0, 'b': 0, 'a': 1}}],
                    },
                    {
                        'id': '1:6',
                        'name': 'Dot',
                        'type': 'RECTANGLE',
                        'absoluteBoundingBox': {'x': 130, 'y': 274, 'width': 12, 'height': 12},
                        'fills': [{'type': 'SOLID', 'color': {'r': 1, 'g': 1, 'b': 1, 'a': 1}}],
                    },
                ],
            },
            {
                'id': '1:7',
                'name': 'Hidden',
                'type': 'RECTANGLE',
                'visible': False,
                'absoluteBoundingBox': {'x': 100, 'y': 200, 'width': 10, 'height': 10},
            },
        ],
    }


@pytest.fixture
def nodes_response(card_payload):
    """``/v1/files/:key/nodes`` response wrapping the card."""
    return {
        'name': 'Design System',
        'nodes': {
            '1:2': {'document': card_payload, 'components': {}, 'styles': {}},
        },
    }
