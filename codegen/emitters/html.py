"""
HTML emitter - markup with inline CSS.

Plain HTML writes ``style="width: 100px; height: 40px"``; JSX writes
``style={{width: 100, height: 40}}`` with camelCased keys and unitless pixel
numbers.
"""

import re
from typing import Optional

from codegen.context import Framework, GenerationContext
from codegen.emitters.base import StyleDescriptor, placeholder_url
from codegen.emitters.markup import MarkupEmitter, layer_class_name
from codegen.extractors import (
    LinearGradient, background_blur, border_radius, box_shadows, format_number,
    layer_blur, linear_gradient, retrieve_top_fill, top_stroke,
)
from codegen.layout import Dimension, ExplicitFlow, LayoutDecision
from codegen.nodes import ColorValue, NodeKind, Paint, SceneNode, SolidPaint, TextSegment

PRIMARY_ALIGN = {
    'MIN': 'flex-start',
    'CENTER': 'center',
    'MAX': 'flex-end',
    'SPACE_BETWEEN': 'space-between',
}

COUNTER_ALIGN = {
    'MIN': 'flex-start',
    'CENTER': 'center',
    'MAX': 'flex-end',
    'BASELINE': 'baseline',
}

BLEND_MODES = {
    'DARKEN': 'darken',
    'MULTIPLY': 'multiply',
    'LINEAR_BURN': 'color-burn',
    'COLOR_BURN': 'color-burn',
    'LIGHTEN': 'lighten',
    'SCREEN': 'screen',
    'LINEAR_DODGE': 'color-dodge',
    'COLOR_DODGE': 'color-dodge',
    'OVERLAY': 'overlay',
    'SOFT_LIGHT': 'soft-light',
    'HARD_LIGHT': 'hard-light',
    'DIFFERENCE': 'difference',
    'EXCLUSION': 'exclusion',
    'HUE': 'hue',
    'SATURATION': 'saturation',
    'COLOR': 'color',
    'LUMINOSITY': 'luminosity',
}

TEXT_ALIGN = {'CENTER': 'center', 'RIGHT': 'right', 'JUSTIFIED': 'justify'}

TEXT_CASE = {'UPPER': 'uppercase', 'LOWER': 'lowercase', 'TITLE': 'capitalize'}

TEXT_DECORATION = {'UNDERLINE': 'underline', 'STRIKETHROUGH': 'line-through'}

_PX_VALUE = re.compile(r'^-?\d+(\.\d+)?px$')


def px(value: float) -> str:
    return f"{format_number(value)}px"


def format_with_jsx(prop: str, value: str, jsx: bool) -> str:
    """One declaration, ``prop: value`` in CSS or ``propName: value`` in JSX."""
    if not jsx:
        return f"{prop}: {value}"
    key = re.sub(r'-([a-z])', lambda m: m.group(1).upper(), prop)
    if _PX_VALUE.match(value):
        return f"{key}: {value[:-2]}"
    return f"{key}: '{value}'"


class HtmlEmitter(MarkupEmitter):
    framework = Framework.HTML

    # -- values ---------------------------------------------------------------

    def color(self, color: ColorValue, opacity: float = 1.0) -> str:
        alpha = color.a * opacity
        if alpha >= 1:
            return ColorValue(color.r, color.g, color.b).hex.upper()
        return ColorValue(color.r, color.g, color.b, alpha).rgba

    def gradient(self, gradient: LinearGradient) -> str:
        stops = ', '.join(
            f"{self.color(stop.color, gradient.opacity)} {format_number(stop.position * 100)}%"
            for stop in gradient.stops
        )
        return f"linear-gradient({format_number(gradient.angle)}deg, {stops})"

    def paint(self, paint: Optional[Paint]) -> Optional[str]:
        if isinstance(paint, SolidPaint):
            return self.color(paint.color, paint.opacity)
        if paint is not None:
            gradient = linear_gradient(paint)
            if gradient:
                return self.gradient(gradient)
        return None

    # -- style concerns -------------------------------------------------------

    def size_styles(self, node: SceneNode, width: Dimension, height: Dimension,
                    parent: Optional[LayoutDecision]) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        for prop, value, horizontal in (('width', width, True), ('height', height, False)):
            if value is None:
                continue
            if value == "fill":
                if isinstance(parent, ExplicitFlow) and parent.is_row == horizontal:
                    styles['flex'] = '1 1 0'
                else:
                    styles['align-self'] = 'stretch'
                continue
            styles[prop] = px(value)
        return styles

    def position_styles(self, x: float, y: float) -> StyleDescriptor:
        return {'position': 'absolute', 'left': px(x), 'top': px(y)}

    def relative_styles(self) -> StyleDescriptor:
        return {'position': 'relative'}

    def blend_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        if node.opacity < 1:
            styles['opacity'] = format_number(node.opacity)
        if node.rotation:
            # design tools rotate counter-clockwise, CSS clockwise
            styles['transform'] = f"rotate({format_number(-node.rotation)}deg)"
            styles['transform-origin'] = 'top left'
        if node.blend_mode in BLEND_MODES:
            styles['mix-blend-mode'] = BLEND_MODES[node.blend_mode]
        return styles

    def shape_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        background = self.paint(retrieve_top_fill(node.fills))
        if background:
            styles['background'] = background

        stroke = top_stroke(node)
        stroke_color = self.paint(stroke) if isinstance(stroke, SolidPaint) else None
        if stroke_color:
            style = 'dashed' if node.dashes else 'solid'
            value = f"{px(node.stroke_weight)} {style} {stroke_color}"
            if node.stroke_align == 'OUTSIDE':
                styles['outline'] = value
            else:
                styles['border'] = value

        if node.kind == NodeKind.ELLIPSE:
            styles['border-radius'] = '9999px'
        else:
            radii = border_radius(node)
            if radii and radii.is_uniform:
                styles['border-radius'] = px(radii.top_left)
            elif radii:
                styles['border-radius'] = ' '.join(
                    px(r) for r in (radii.top_left, radii.top_right, radii.bottom_right, radii.bottom_left)
                )

        shadows = box_shadows(node)
        if shadows:
            styles['box-shadow'] = ', '.join(
                f"{'inset ' if s.type == 'INNER_SHADOW' else ''}"
                f"{px(s.offset_x)} {px(s.offset_y)} {px(s.radius)} {px(s.spread)} {self.color(s.color)}"
                for s in shadows
            )

        blur = layer_blur(node)
        if blur:
            styles['filter'] = f"blur({px(blur)})"
        backdrop = background_blur(node)
        if backdrop:
            styles['backdrop-filter'] = f"blur({px(backdrop)})"

        if node.clips_content:
            styles['overflow'] = 'hidden'
        return styles

    def background_image_styles(self, node: SceneNode) -> StyleDescriptor:
        return {
            'background-image': f"url({placeholder_url(node)})",
            'background-size': 'cover',
        }

    def line_styles(self, node: SceneNode) -> StyleDescriptor:
        stroke = top_stroke(node)
        color = self.paint(stroke) if isinstance(stroke, SolidPaint) else None
        if not color:
            return {}
        return {'height': '0px', 'border-top': f"{px(node.stroke_weight)} solid {color}"}

    def text_styles(self, segment: TextSegment) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        # CSS color takes no gradients
        fill = retrieve_top_fill(segment.fills)
        if isinstance(fill, SolidPaint):
            styles['color'] = self.color(fill.color, fill.opacity)
        styles['font-size'] = px(segment.font_size)
        styles['font-family'] = segment.font_family
        if segment.italic:
            styles['font-style'] = 'italic'
        styles['font-weight'] = str(segment.font_weight)
        if segment.line_height_px:
            styles['line-height'] = px(segment.line_height_px)
        if segment.letter_spacing:
            styles['letter-spacing'] = px(segment.letter_spacing)
        if segment.text_decoration in TEXT_DECORATION:
            styles['text-decoration'] = TEXT_DECORATION[segment.text_decoration]
        if segment.text_case in TEXT_CASE:
            styles['text-transform'] = TEXT_CASE[segment.text_case]
        return styles

    def text_align_styles(self, node: SceneNode) -> StyleDescriptor:
        if node.text_align_horizontal in TEXT_ALIGN:
            return {'text-align': TEXT_ALIGN[node.text_align_horizontal]}
        return {}

    def flow_styles(self, flow: ExplicitFlow) -> StyleDescriptor:
        styles: StyleDescriptor = {
            'display': 'inline-flex',
            'flex-direction': 'row' if flow.is_row else 'column',
            'justify-content': PRIMARY_ALIGN.get(flow.primary_align, 'flex-start'),
            'align-items': COUNTER_ALIGN.get(flow.counter_align, 'flex-start'),
        }
        if flow.gap:
            styles['gap'] = px(flow.gap)
        padding = flow.padding
        if not padding.is_zero:
            if padding.top == padding.right == padding.bottom == padding.left:
                styles['padding'] = px(padding.top)
            else:
                styles['padding'] = ' '.join(
                    px(p) for p in (padding.top, padding.right, padding.bottom, padding.left)
                )
        return styles

    # -- serialization --------------------------------------------------------

    def serialize_attributes(self, styles: StyleDescriptor, layer_name: str,
                             context: GenerationContext) -> str:
        jsx = context.jsx
        parts = []
        if layer_name:
            parts.append(f' {self.class_attribute(jsx)}="{layer_class_name(layer_name)}"')
        if styles:
            declarations = [format_with_jsx(prop, value, jsx) for prop, value in styles.items()]
            if jsx:
                parts.append(f" style={{{{{', '.join(declarations)}}}}}")
            else:
                parts.append(f' style="{"; ".join(declarations)}"')
        return "".join(parts)
