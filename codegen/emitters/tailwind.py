"""
Tailwind emitter - markup with utility classes.

Colors snap to the nearest palette color (``bg-blue-500``, ``/NN`` for
opacity); sizes use the spacing scale when they match it and arbitrary values
(``w-[13px]``) otherwise.
"""

from typing import Optional, Tuple

from codegen.context import Framework, GenerationContext
from codegen.emitters.base import StyleDescriptor, placeholder_url
from codegen.emitters.markup import MarkupEmitter, layer_class_name
from codegen.emitters.tailwind_palette import (
    TAILWIND_COLORS, TAILWIND_FONT_SIZES, TAILWIND_FONT_WEIGHTS, TAILWIND_RADII,
    TAILWIND_SPACING,
)
from codegen.extractors import (
    LinearGradient, background_blur, border_radius, box_shadows, format_number,
    layer_blur, linear_gradient, retrieve_top_fill, rgb_to_hex, top_stroke,
)
from codegen.layout import Dimension, ExplicitFlow, LayoutDecision
from codegen.nodes import ColorValue, NodeKind, Paint, SceneNode, SolidPaint, TextSegment

PRIMARY_ALIGN = {
    'MIN': 'justify-start',
    'CENTER': 'justify-center',
    'MAX': 'justify-end',
    'SPACE_BETWEEN': 'justify-between',
}

COUNTER_ALIGN = {
    'MIN': 'items-start',
    'CENTER': 'items-center',
    'MAX': 'items-end',
    'BASELINE': 'items-baseline',
}

GRADIENT_DIRECTIONS = ('t', 'tr', 'r', 'br', 'b', 'bl', 'l', 'tl')

BLEND_MODES = {
    'DARKEN': 'darken', 'MULTIPLY': 'multiply', 'COLOR_BURN': 'color-burn',
    'LIGHTEN': 'lighten', 'SCREEN': 'screen', 'COLOR_DODGE': 'color-dodge',
    'OVERLAY': 'overlay', 'SOFT_LIGHT': 'soft-light', 'HARD_LIGHT': 'hard-light',
    'DIFFERENCE': 'difference', 'EXCLUSION': 'exclusion', 'HUE': 'hue',
    'SATURATION': 'saturation', 'COLOR': 'color', 'LUMINOSITY': 'luminosity',
}

TEXT_ALIGN = {'CENTER': 'text-center', 'RIGHT': 'text-right', 'JUSTIFIED': 'text-justify'}
TEXT_CASE = {'UPPER': 'uppercase', 'LOWER': 'lowercase', 'TITLE': 'capitalize'}
TEXT_DECORATION = {'UNDERLINE': 'underline', 'STRIKETHROUGH': 'line-through'}


def nearest_tailwind_color(color: ColorValue) -> Tuple[str, str]:
    """Closest palette entry as (hex, class suffix)."""
    r, g, b = (c * 255 for c in (color.r, color.g, color.b))

    def distance(hex_value: str) -> float:
        pr, pg, pb = (int(hex_value[i:i + 2], 16) for i in (1, 3, 5))
        return (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2

    hex_value = min(TAILWIND_COLORS, key=distance)
    return hex_value, TAILWIND_COLORS[hex_value]


def arbitrary(value: float, unit: str = 'px') -> str:
    return f"[{format_number(value)}{unit}]"


class TailwindEmitter(MarkupEmitter):
    framework = Framework.TAILWIND

    def scale(self, value: float) -> str:
        """Spacing scale key for a pixel value, or an arbitrary value."""
        rounded = round(value)
        if abs(value - rounded) < 0.01 and rounded in TAILWIND_SPACING:
            return TAILWIND_SPACING[rounded]
        if self.settings.round_tailwind_values:
            nearest = min(TAILWIND_SPACING, key=lambda px: abs(px - value))
            if abs(nearest - value) <= 1:
                return TAILWIND_SPACING[nearest]
        return arbitrary(value)

    # -- values ---------------------------------------------------------------

    def color(self, color: ColorValue, opacity: float = 1.0) -> str:
        if self.settings.round_tailwind_colors:
            _, name = nearest_tailwind_color(color)
        else:
            name = f"[#{rgb_to_hex(color)}]"
        alpha = color.a * opacity
        if alpha < 1:
            return f"{name}/{round(alpha * 100)}"
        return name

    def color_name(self, color: ColorValue, opacity: float = 1.0) -> str:
        return nearest_tailwind_color(color)[1]

    def gradient(self, gradient: LinearGradient) -> str:
        direction = GRADIENT_DIRECTIONS[round(gradient.angle / 45) % 8]
        stops = gradient.stops
        classes = [
            f"bg-gradient-to-{direction}",
            f"from-{self.color(stops[0].color, gradient.opacity)}",
        ]
        if len(stops) > 2:
            classes.append(f"via-{self.color(stops[len(stops) // 2].color, gradient.opacity)}")
        classes.append(f"to-{self.color(stops[-1].color, gradient.opacity)}")
        return ' '.join(classes)

    def paint(self, prefix: str, paint: Optional[Paint]) -> Optional[str]:
        if isinstance(paint, SolidPaint):
            return f"{prefix}-{self.color(paint.color, paint.opacity)}"
        if paint is not None and prefix == 'bg':
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
                    styles['flex'] = 'flex-1'
                else:
                    styles['align-self'] = 'self-stretch'
                continue
            styles[prop] = f"{prop[0]}-{self.scale(value)}"
        return styles

    def position_styles(self, x: float, y: float) -> StyleDescriptor:
        return {
            'position': 'absolute',
            'left': f"left-{self.scale(x)}",
            'top': f"top-{self.scale(y)}",
        }

    def relative_styles(self) -> StyleDescriptor:
        return {'position': 'relative'}

    def blend_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        if node.opacity < 1:
            percent = round(node.opacity * 100)
            if percent % 5 == 0:
                styles['opacity'] = f"opacity-{percent}"
            else:
                styles['opacity'] = f"opacity-[{format_number(node.opacity)}]"
        if node.rotation:
            styles['rotate'] = f"rotate-[{format_number(-node.rotation)}deg]"
            styles['transform-origin'] = 'origin-top-left'
        if node.blend_mode in BLEND_MODES:
            styles['mix-blend-mode'] = f"mix-blend-{BLEND_MODES[node.blend_mode]}"
        return styles

    def _radius(self, corner: str, value: float) -> str:
        named = TAILWIND_RADII.get(value)
        if named:
            return named.replace('rounded', f"rounded{corner}", 1)
        return f"rounded{corner}-{arbitrary(value)}"

    def shape_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        background = self.paint('bg', retrieve_top_fill(node.fills))
        if background:
            styles['background'] = background

        stroke = top_stroke(node)
        stroke_color = self.paint('border', stroke) if isinstance(stroke, SolidPaint) else None
        if stroke_color:
            weight = node.stroke_weight
            if node.stroke_align == 'OUTSIDE':
                styles['outline'] = f"outline outline-{arbitrary(weight)}"
                styles['outline-color'] = stroke_color.replace('border-', 'outline-', 1)
            else:
                if weight == 1:
                    styles['border-width'] = 'border'
                elif weight in (2, 4, 8):
                    styles['border-width'] = f"border-{int(weight)}"
                else:
                    styles['border-width'] = f"border-{arbitrary(weight)}"
                styles['border-color'] = stroke_color
            if node.dashes:
                styles['border-style'] = 'border-dashed'

        if node.kind == NodeKind.ELLIPSE:
            styles['border-radius'] = 'rounded-full'
        else:
            radii = border_radius(node)
            if radii and radii.is_uniform:
                styles['border-radius'] = self._radius('', radii.top_left)
            elif radii:
                corners = (('-tl', radii.top_left), ('-tr', radii.top_right),
                           ('-br', radii.bottom_right), ('-bl', radii.bottom_left))
                styles['border-radius'] = ' '.join(
                    self._radius(corner, value) for corner, value in corners if value
                )

        shadows = box_shadows(node)
        if shadows:
            parts = []
            for s in shadows:
                c = s.color
                rgba = f"rgba({round(c.r * 255)},{round(c.g * 255)},{round(c.b * 255)},{format_number(c.a)})"
                inset = 'inset_' if s.type == 'INNER_SHADOW' else ''
                parts.append(
                    f"{inset}{format_number(s.offset_x)}px_{format_number(s.offset_y)}px_"
                    f"{format_number(s.radius)}px_{format_number(s.spread)}px_{rgba}"
                )
            styles['box-shadow'] = f"shadow-[{','.join(parts)}]"

        blur = layer_blur(node)
        if blur:
            styles['filter'] = f"blur-{arbitrary(blur)}"
        backdrop = background_blur(node)
        if backdrop:
            styles['backdrop-filter'] = f"backdrop-blur-{arbitrary(backdrop)}"

        if node.clips_content:
            styles['overflow'] = 'overflow-hidden'
        return styles

    def background_image_styles(self, node: SceneNode) -> StyleDescriptor:
        return {'background-image': f"bg-[url({placeholder_url(node)})] bg-cover"}

    def line_styles(self, node: SceneNode) -> StyleDescriptor:
        stroke = top_stroke(node)
        color = self.paint('border', stroke) if isinstance(stroke, SolidPaint) else None
        if not color:
            return {}
        weight = node.stroke_weight
        width = 'border-t' if weight == 1 else f"border-t-{arbitrary(weight)}"
        return {'height': 'h-0', 'border-width': width, 'border-color': color}

    def text_styles(self, segment: TextSegment) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        color = self.paint('text', retrieve_top_fill(segment.fills))
        if color:
            styles['color'] = color
        size = TAILWIND_FONT_SIZES.get(segment.font_size)
        styles['font-size'] = f"text-{size}" if size else f"text-{arbitrary(segment.font_size)}"
        family = segment.font_family.replace(' ', '_')
        styles['font-family'] = f"font-['{family}']"
        if segment.italic:
            styles['font-style'] = 'italic'
        styles['font-weight'] = TAILWIND_FONT_WEIGHTS.get(
            segment.font_weight, f"font-[{segment.font_weight}]"
        )
        if segment.line_height_px:
            styles['line-height'] = f"leading-{arbitrary(segment.line_height_px)}"
        if segment.letter_spacing:
            styles['letter-spacing'] = f"tracking-{arbitrary(segment.letter_spacing)}"
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
            'flex-direction': 'flex-row' if flow.is_row else 'flex-col',
            'justify-content': PRIMARY_ALIGN.get(flow.primary_align, 'justify-start'),
            'align-items': COUNTER_ALIGN.get(flow.counter_align, 'items-start'),
        }
        if flow.gap:
            styles['gap'] = f"gap-{self.scale(flow.gap)}"
        p = flow.padding
        if p.is_zero:
            return styles
        if p.top == p.right == p.bottom == p.left:
            styles['padding'] = f"p-{self.scale(p.top)}"
        elif p.top == p.bottom and p.left == p.right:
            styles['padding'] = f"px-{self.scale(p.left)} py-{self.scale(p.top)}"
        else:
            sides = (('pt', p.top), ('pr', p.right), ('pb', p.bottom), ('pl', p.left))
            styles['padding'] = ' '.join(f"{side}-{self.scale(v)}" for side, v in sides if v)
        return styles

    # -- serialization --------------------------------------------------------

    def serialize_attributes(self, styles: StyleDescriptor, layer_name: str,
                             context: GenerationContext) -> str:
        classes = [layer_class_name(layer_name)] if layer_name else []
        classes.extend(value for value in styles.values() if value)
        if not classes:
            return ""
        return f' {self.class_attribute(context.jsx)}="{" ".join(classes)}"'
