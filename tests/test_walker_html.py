"""Tests for tree walking with the HTML emitter."""
from codegen.nodes import (
    AutoLayoutHint, ColorValue, Effect, GradientPaint, GradientStop, ImagePaint,
    NodeKind, SceneNode, SolidPaint, TextSegment,
)
from codegen.walker import generate, generate_code
from codegen.context import GenerationSettings

from conftest import RED, rect, solid


def group(children, x=0, y=0, width=200, height=100, **kwargs):
    return SceneNode(kind=NodeKind.GROUP, name='Group', x=x, y=y, width=width, height=height,
                     children=children, **kwargs)


def text(segments, **kwargs):
    kwargs.setdefault('width', 120)
    kwargs.setdefault('height', 20)
    return SceneNode(
        kind=NodeKind.TEXT, name='Label', characters=''.join(s.characters for s in segments),
        segments=segments, **kwargs
    )


class TestShapes:

    def test_rectangle(self, make_context):
        assert generate([rect()], make_context()) == (
            '<div style="width: 100px; height: 40px; background: #3B82F6"></div>'
        )

    def test_rectangle_jsx(self, make_context):
        assert generate([rect()], make_context(jsx=True)) == (
            "<div style={{width: 100, height: 40, background: '#3B82F6'}} />"
        )

    def test_preview_forces_plain_markup(self, make_context):
        code = generate([rect(name='Box')], make_context(jsx=True, show_layer_name=True, preview=True))
        assert 'class="box"' in code
        assert 'className' not in code
        assert 'style="' in code

    def test_ellipse_is_fully_rounded(self, make_context):
        node = SceneNode(kind=NodeKind.ELLIPSE, width=40, height=40, fills=[solid()])
        assert 'border-radius: 9999px' in generate([node], make_context())

    def test_image_fill_becomes_img(self, make_context):
        code = generate([rect(fills=[ImagePaint('ref')])], make_context())
        assert code == '<img style="width: 100px; height: 40px" src="https://placehold.co/100x40" />'

    def test_dashed_outside_stroke(self, make_context):
        node = rect(strokes=[SolidPaint(ColorValue(0, 0, 0))], stroke_weight=2,
                    stroke_align='OUTSIDE', dashes=(4, 2))
        assert 'outline: 2px dashed #000000' in generate([node], make_context())

    def test_shadows_and_blur(self, make_context):
        node = rect(effects=[
            Effect('DROP_SHADOW', radius=8, offset_y=4, color=ColorValue(0, 0, 0, 0.25)),
            Effect('INNER_SHADOW', radius=2, color=ColorValue(0, 0, 0, 0.25)),
            Effect('BACKGROUND_BLUR', radius=10),
        ])
        code = generate([node], make_context())
        assert 'box-shadow: 0px 4px 8px 0px rgba(0, 0, 0, 0.25), inset 0px 0px 2px 0px rgba(0, 0, 0, 0.25)' in code
        assert 'backdrop-filter: blur(10px)' in code

    def test_line(self, make_context):
        line = SceneNode(kind=NodeKind.LINE, width=100, height=0, stroke_weight=2,
                         strokes=[SolidPaint(ColorValue(0, 0, 0))])
        assert generate([line], make_context()) == (
            '<div style="width: 100px; height: 0px; border-top: 2px solid #000000"></div>'
        )

    def test_vector_with_image_fill(self, make_context):
        vector = SceneNode(kind=NodeKind.VECTOR, width=24, height=24, fills=[ImagePaint('icon')])
        assert generate([vector], make_context()) == (
            '<img style="width: 24px; height: 24px" src="https://placehold.co/24x24" />'
        )


class TestSkippedNodes:

    def test_zero_size_rectangle(self, make_context):
        assert generate([rect(width=0)], make_context()) == ''
        assert generate([rect(height=-0.000004)], make_context()) == ''

    def test_hidden_and_unsupported_nodes(self, make_context):
        nodes = [rect(visible=False), SceneNode(kind=NodeKind.OTHER, width=10, height=10)]
        assert generate(nodes, make_context()) == ''

    def test_empty_group(self, make_context):
        assert generate([group([])], make_context()) == ''

    def test_degenerate_frame_keeps_children(self, make_context):
        frame = SceneNode(kind=NodeKind.FRAME, width=0, height=100, children=[rect()])
        assert generate([frame], make_context()) == (
            '<div style="width: 100px; height: 40px; position: absolute; left: 0px; top: 0px; '
            'background: #3B82F6"></div>'
        )

    def test_empty_selection(self, make_context):
        assert generate([], make_context()) == ''

    def test_unsupported_sibling_does_not_abort(self, make_context):
        nodes = [SceneNode(kind=NodeKind.OTHER, width=10, height=10), rect()]
        assert generate(nodes, make_context()).startswith('<div')


class TestFrames:

    def test_flow_frame(self, make_context, flow_frame):
        assert generate([flow_frame], make_context()) == (
            '<div style="width: 200px; height: 100px; display: inline-flex; flex-direction: row; '
            'justify-content: flex-start; align-items: flex-start; gap: 8px">\n'
            '  <div style="width: 50px; height: 50px; background: #3B82F6"></div>\n'
            '  <div style="width: 50px; height: 50px; background: #FF0000"></div>\n'
            '</div>'
        )

    def test_absolute_frame(self, make_context, absolute_frame):
        code = generate([absolute_frame], make_context())
        assert code.startswith('<div style="width: 300px; height: 200px; position: relative">')
        assert 'position: absolute; left: 10px; top: 20px' in code
        assert 'position: absolute; left: 100px; top: 40px' in code

    def test_flow_children_never_carry_coordinates(self, make_context, flow_frame):
        code = generate([flow_frame], make_context())
        assert 'left:' not in code
        assert 'top:' not in code

    def test_nested_indentation(self, make_context, flow_frame):
        outer = SceneNode(kind=NodeKind.FRAME, width=400, height=300, layout_mode='VERTICAL',
                          children=[flow_frame])
        lines = generate([outer], make_context()).split('\n')
        assert lines[1].startswith('  <div')
        assert lines[2].startswith('    <div')
        assert lines[-1] == '</div>'

    def test_inferred_layout_used(self, make_context, absolute_frame):
        absolute_frame.inferred_auto_layout = AutoLayoutHint('VERTICAL', item_spacing=12)
        code = generate([absolute_frame], make_context())
        assert 'flex-direction: column' in code
        assert 'gap: 12px' in code
        assert 'position: absolute' not in code

    def test_fill_child_grows(self, make_context, flow_frame):
        flow_frame.children[0].layout_grow = 1
        flow_frame.children[1].layout_align = 'STRETCH'
        code = generate([flow_frame], make_context())
        assert 'flex: 1 1 0; height: 50px' in code
        assert 'width: 50px; align-self: stretch' in code


class TestGroups:

    def test_group_inlined_into_absolute_parent(self, make_context):
        frame = SceneNode(kind=NodeKind.FRAME, width=300, height=300, children=[
            group([rect(x=50, y=60), rect(x=120, y=60)], x=50, y=60),
        ])
        code = generate([frame], make_context())
        # coordinates stay in the frame's space
        assert 'left: 50px; top: 60px' in code
        assert 'left: 120px; top: 60px' in code
        assert code.count('<div') == 3

    def test_top_level_group_wraps_once(self, make_context):
        node = group([rect(x=30, y=20), rect(x=80, y=20, fills=[solid(RED)])], x=10, y=10)
        code = generate([node], make_context())
        assert code.count('<div') == 3
        assert code.startswith('<div style="width: 200px; height: 100px; position: relative">')
        # children are offset from the group origin
        assert 'left: 20px; top: 10px' in code
        assert 'left: 70px; top: 10px' in code

    def test_single_child_group_is_flattened(self, make_context):
        node = group([rect()])
        assert generate([node], make_context()) == generate([rect()], make_context())

    def test_group_with_opacity_wraps(self, make_context):
        node = group([rect(x=0, y=0)], opacity=0.5)
        code = generate([node], make_context())
        assert code.count('<div') == 2
        assert 'opacity: 0.5' in code.split('\n')[0]


class TestText:

    def test_single_run(self, make_context):
        node = text([TextSegment('Hello', font_size=16, fills=(SolidPaint(ColorValue(0, 0, 0)),))])
        assert generate([node], make_context()) == (
            '<div style="width: 120px; height: 20px; color: #000000; font-size: 16px; '
            'font-family: Inter; font-weight: 400">Hello</div>'
        )

    def test_multiple_runs_become_spans(self, make_context):
        node = text([TextSegment('Hello '), TextSegment('world', font_weight=700)])
        code = generate([node], make_context())
        wrapper = code.split('>')[0]
        assert 'font-weight' not in wrapper
        assert code.count('<span') == 2
        assert code.index('Hello ') < code.index('world')
        assert '<span style="font-size: 14px; font-family: Inter; font-weight: 700">world</span>' in code

    def test_text_is_escaped(self, make_context):
        node = text([TextSegment('a < b\nc')])
        assert 'a &lt; b<br/>c' in generate([node], make_context())

    def test_braces_are_literal_in_jsx(self, make_context):
        node = text([TextSegment('a {b}')])
        assert "a {'{'}b{'}'}" in generate([node], make_context(jsx=True))
        assert 'a {b}' in generate([node], make_context())

    def test_braces_in_jsx_spans(self, make_context):
        node = text([TextSegment('{x} '), TextSegment('y', font_weight=700)])
        code = generate([node], make_context(jsx=True))
        assert "{'{'}x{'}'} </span>" in code

    def test_gradient_text_fill_has_no_color(self, make_context):
        gradient = GradientPaint('LINEAR', (GradientStop(RED, 0), GradientStop(ColorValue(0, 0, 1), 1)))
        code = generate([text([TextSegment('Hi', fills=(gradient,))])], make_context())
        assert 'linear-gradient' not in code
        assert 'color:' not in code

    def test_text_alignment_and_case(self, make_context):
        node = text([TextSegment('Title', text_case='UPPER')], text_align_horizontal='CENTER')
        code = generate([node], make_context())
        assert 'text-align: center' in code
        assert 'text-transform: uppercase' in code


class TestGenerateCode:

    def test_settings_are_not_shared_between_passes(self, flow_frame):
        settings = GenerationSettings(framework='html')
        html = generate_code([flow_frame], settings)
        settings.framework = 'tailwind'
        tailwind = generate_code([flow_frame], settings)
        assert 'style="' in html
        assert 'class="' in tailwind

    def test_layer_names(self, flow_frame):
        code = generate_code([flow_frame], GenerationSettings(show_layer_name=True))
        assert code.startswith('<div class="row" style=')
