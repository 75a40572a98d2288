"""
SwiftUI emitter - a view expression followed by a modifier chain.

Style descriptors map a modifier name to the finished modifier call
(``'frame': '.frame(width: 100, height: 40)'``). Modifier order matters in
SwiftUI, so descriptors are written out in a fixed precedence order rather
than insertion order.
"""

from typing import TYPE_CHECKING, List, Optional

from codegen.context import Framework, GenerationContext
from codegen.emitters.base import (
    Emitter, StyleDescriptor, TextSpans, indent_string, placeholder_url,
)
from codegen.extractors import (
    LinearGradient, border_radius, box_shadows, format_number, layer_blur,
    linear_gradient, retrieve_top_fill, top_stroke,
)
from codegen.layout import Dimension, ExplicitFlow, LayoutDecision
from codegen.nodes import ColorValue, ImagePaint, NodeKind, SceneNode, SolidPaint, TextSegment

if TYPE_CHECKING:
    from codegen.builder import StyleBuilder

# ---------------------------------------------------------------------------
# Modifier order
# ---------------------------------------------------------------------------

MODIFIER_ORDER = (
    'font', 'italic', 'kerning', 'underline', 'strikethrough', 'foregroundColor',
    'lineSpacing', 'multilineTextAlignment',
    'padding', 'frame', 'background', 'clipShape', 'cornerRadius', 'overlay',
    'clipped', 'shadow', 'blur', 'blendMode', 'opacity', 'rotationEffect', 'offset',
)

# modifiers defined on Text that return Text, usable inside a concatenation
TEXT_SPAN_MODIFIERS = ('font', 'italic', 'kerning', 'underline', 'strikethrough', 'foregroundColor')

HSTACK_ALIGN = {'MIN': '.top', 'CENTER': '.center', 'MAX': '.bottom', 'BASELINE': '.firstTextBaseline'}
VSTACK_ALIGN = {'MIN': '.leading', 'CENTER': '.center', 'MAX': '.trailing'}

BLEND_MODES = {
    'MULTIPLY': '.multiply', 'SCREEN': '.screen', 'OVERLAY': '.overlay',
    'DARKEN': '.darken', 'LIGHTEN': '.lighten', 'COLOR_DODGE': '.colorDodge',
    'COLOR_BURN': '.colorBurn', 'SOFT_LIGHT': '.softLight', 'HARD_LIGHT': '.hardLight',
    'DIFFERENCE': '.difference', 'EXCLUSION': '.exclusion', 'HUE': '.hue',
    'SATURATION': '.saturation', 'COLOR': '.color', 'LUMINOSITY': '.luminosity',
}

FONT_WEIGHTS = {
    100: '.ultraLight', 200: '.thin', 300: '.light', 400: '.regular', 500: '.medium',
    600: '.semibold', 700: '.bold', 800: '.heavy', 900: '.black',
}

TEXT_ALIGN = {'CENTER': '.center', 'RIGHT': '.trailing'}


def ordered_modifiers(styles: StyleDescriptor) -> List[str]:
    rank = {name: i for i, name in enumerate(MODIFIER_ORDER)}
    keys = sorted(styles, key=lambda key: rank.get(key, len(MODIFIER_ORDER)))
    return [styles[key] for key in keys if styles[key]]


def swift_string(text: str) -> str:
    escaped = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
    return f'"{escaped}"'


class SwiftUIEmitter(Emitter):
    framework = Framework.SWIFTUI

    # -- values ---------------------------------------------------------------

    def color(self, color: ColorValue, opacity: float = 1.0) -> str:
        alpha = color.a * opacity
        hex_value = ColorValue(color.r, color.g, color.b).hex
        if hex_value == '#000000':
            code = 'Color.black'
        elif hex_value == '#ffffff':
            code = 'Color.white'
        else:
            code = f"Color(red: {color.r:.3f}, green: {color.g:.3f}, blue: {color.b:.3f})"
        if alpha < 1:
            code += f".opacity({alpha:.2f})"
        return code

    def gradient(self, gradient: LinearGradient) -> str:
        stops = ', '.join(
            f".init(color: {self.color(stop.color, gradient.opacity)}, location: {format_number(stop.position)})"
            for stop in gradient.stops
        )
        (x0, y0), (x1, y1) = gradient.start, gradient.end
        return (
            f"LinearGradient(stops: [{stops}], "
            f"startPoint: UnitPoint(x: {format_number(x0)}, y: {format_number(y0)}), "
            f"endPoint: UnitPoint(x: {format_number(x1)}, y: {format_number(y1)}))"
        )

    def paint(self, node: SceneNode) -> Optional[str]:
        fill = retrieve_top_fill(node.fills)
        if isinstance(fill, SolidPaint):
            return self.color(fill.color, fill.opacity)
        if isinstance(fill, ImagePaint):
            return f"AsyncImage(url: URL(string: {swift_string(placeholder_url(node))}))"
        if fill is not None:
            gradient = linear_gradient(fill)
            if gradient:
                return self.gradient(gradient)
        return None

    # -- style concerns -------------------------------------------------------

    def size_styles(self, node: SceneNode, width: Dimension, height: Dimension,
                    parent: Optional[LayoutDecision]) -> StyleDescriptor:
        parts = []
        for prop, value in (('width', width), ('height', height)):
            if value is None:
                continue
            if value == "fill":
                parts.append(f"max{prop.capitalize()}: .infinity")
            else:
                parts.append(f"{prop}: {format_number(value)}")
        if not parts:
            return {}
        return {'frame': f".frame({', '.join(parts)})"}

    def position_styles(self, x: float, y: float) -> StyleDescriptor:
        return {'offset': f".offset(x: {format_number(x)}, y: {format_number(y)})"}

    def blend_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        if node.opacity < 1:
            styles['opacity'] = f".opacity({format_number(node.opacity)})"
        if node.rotation:
            styles['rotationEffect'] = (
                f".rotationEffect(.degrees({format_number(-node.rotation)}), anchor: .topLeading)"
            )
        if node.blend_mode in BLEND_MODES:
            styles['blendMode'] = f".blendMode({BLEND_MODES[node.blend_mode]})"
        return styles

    def _outline_shape(self, node: SceneNode) -> str:
        if node.kind == NodeKind.ELLIPSE:
            return 'Ellipse()'
        radii = border_radius(node)
        if radii and not radii.is_uniform:
            return (
                f"UnevenRoundedRectangle(topLeadingRadius: {format_number(radii.top_left)}, "
                f"bottomLeadingRadius: {format_number(radii.bottom_left)}, "
                f"bottomTrailingRadius: {format_number(radii.bottom_right)}, "
                f"topTrailingRadius: {format_number(radii.top_right)})"
            )
        return f"RoundedRectangle(cornerRadius: {format_number(radii.top_left if radii else 0)})"

    def shape_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        background = self.paint(node)
        if background:
            styles['background'] = f".background({background})"

        if node.kind == NodeKind.ELLIPSE:
            styles['clipShape'] = '.clipShape(Ellipse())'
        else:
            radii = border_radius(node)
            if radii and radii.is_uniform:
                styles['cornerRadius'] = f".cornerRadius({format_number(radii.top_left)})"
            elif radii:
                styles['clipShape'] = f".clipShape({self._outline_shape(node)})"

        stroke = top_stroke(node)
        if isinstance(stroke, SolidPaint):
            weight = node.stroke_weight
            color = self.color(stroke.color, stroke.opacity)
            if node.dashes:
                dash = ', '.join(format_number(d) for d in node.dashes)
                stroke_call = f".stroke({color}, style: StrokeStyle(lineWidth: {format_number(weight)}, dash: [{dash}]))"
            else:
                stroke_call = f".stroke({color}, lineWidth: {format_number(weight)})"
            inset = {'INSIDE': weight / 2, 'OUTSIDE': -weight / 2}.get(node.stroke_align)
            lines = [self._outline_shape(node)]
            if inset:
                lines.append(f".inset(by: {format_number(inset)})")
            lines.append(stroke_call)
            body = ''.join(f"\n{line}" for line in lines)
            styles['overlay'] = f".overlay({indent_string(body)}\n)"

        # SwiftUI has no inner shadow modifier
        shadows = [
            f".shadow(color: {self.color(s.color)}, radius: {format_number(s.radius)}, "
            f"x: {format_number(s.offset_x)}, y: {format_number(s.offset_y)})"
            for s in box_shadows(node) if s.type == 'DROP_SHADOW'
        ]
        if shadows:
            styles['shadow'] = '\n'.join(shadows)

        blur = layer_blur(node)
        if blur:
            styles['blur'] = f".blur(radius: {format_number(blur)})"
        if node.clips_content:
            styles['clipped'] = '.clipped()'
        return styles

    def line_styles(self, node: SceneNode) -> StyleDescriptor:
        stroke = top_stroke(node)
        if not isinstance(stroke, SolidPaint):
            return {}
        return {
            'frame': f".frame(width: {format_number(node.width)}, height: {format_number(node.stroke_weight)})",
            'background': f".background({self.color(stroke.color, stroke.opacity)})",
        }

    def text_styles(self, segment: TextSegment) -> StyleDescriptor:
        weight = FONT_WEIGHTS.get(segment.font_weight, '.regular')
        styles: StyleDescriptor = {
            'font': (
                f".font(.custom({swift_string(segment.font_family)}, "
                f"size: {format_number(segment.font_size)}).weight({weight}))"
            ),
        }
        if segment.italic:
            styles['italic'] = '.italic()'
        if segment.letter_spacing:
            styles['kerning'] = f".kerning({format_number(segment.letter_spacing)})"
        if segment.text_decoration == 'UNDERLINE':
            styles['underline'] = '.underline()'
        elif segment.text_decoration == 'STRIKETHROUGH':
            styles['strikethrough'] = '.strikethrough()'
        fill = retrieve_top_fill(segment.fills)
        if isinstance(fill, SolidPaint):
            styles['foregroundColor'] = f".foregroundColor({self.color(fill.color, fill.opacity)})"
        if segment.line_height_px and segment.line_height_px > segment.font_size:
            styles['lineSpacing'] = f".lineSpacing({format_number(segment.line_height_px - segment.font_size)})"
        return styles

    def text_align_styles(self, node: SceneNode) -> StyleDescriptor:
        if node.text_align_horizontal in TEXT_ALIGN:
            return {'multilineTextAlignment': f".multilineTextAlignment({TEXT_ALIGN[node.text_align_horizontal]})"}
        return {}

    def flow_styles(self, flow: ExplicitFlow) -> StyleDescriptor:
        p = flow.padding
        if p.is_zero:
            return {}
        if p.top == p.right == p.bottom == p.left:
            return {'padding': f".padding({format_number(p.top)})"}
        return {'padding': (
            f".padding(EdgeInsets(top: {format_number(p.top)}, leading: {format_number(p.left)}, "
            f"bottom: {format_number(p.bottom)}, trailing: {format_number(p.right)}))"
        )}

    def serialize_attributes(self, styles: StyleDescriptor, layer_name: str,
                             context: GenerationContext) -> str:
        return ''.join(f"\n{modifier}" for modifier in ordered_modifiers(styles))

    # -- structure ------------------------------------------------------------

    def _fragment(self, builder: "StyleBuilder", view: str, styles: StyleDescriptor) -> str:
        comment = f"\n// {builder.layer_name}" if builder.layer_name else ""
        modifiers = self.serialize_attributes(styles, builder.layer_name, builder.context)
        return f"{comment}\n{view}{modifiers}"

    def _stack(self, children: str, layout: Optional[LayoutDecision]) -> str:
        if isinstance(layout, ExplicitFlow):
            if layout.is_row:
                name, align = 'HStack', HSTACK_ALIGN.get(layout.counter_align, '.top')
            else:
                name, align = 'VStack', VSTACK_ALIGN.get(layout.counter_align, '.leading')
            args = f"alignment: {align}"
            if layout.gap:
                args += f", spacing: {format_number(layout.gap)}"
        else:
            name, args = 'ZStack', 'alignment: .topLeading'
        return f"{name}({args}) {{{indent_string(children)}\n}}"

    def text_content(self, segment: TextSegment) -> str:
        text = segment.characters
        if segment.text_case == 'UPPER':
            text = text.upper()
        elif segment.text_case == 'LOWER':
            text = text.lower()
        elif segment.text_case == 'TITLE':
            text = text.title()
        return text

    def container(self, builder: "StyleBuilder", children: str,
                  extra: Optional[StyleDescriptor] = None,
                  layout: Optional[LayoutDecision] = None) -> str:
        node = builder.node
        if node.width <= 0 or node.height <= 0:
            return children

        styles = dict(builder.styles)
        styles.update(extra or {})
        if children:
            view = self._stack(children, layout)
        elif not styles:
            return ""
        else:
            shape = 'Ellipse()' if node.kind == NodeKind.ELLIPSE else 'Rectangle()'
            view = f"{shape}\n.foregroundColor(.clear)"
        return self._fragment(builder, view, styles)

    def text(self, builder: "StyleBuilder", content: Optional[str],
             spans: Optional[TextSpans] = None) -> str:
        if spans is None:
            return self._fragment(builder, f"Text({swift_string(content or '')})", builder.styles)
        parts = []
        for text, span_styles in spans:
            inline = {key: value for key, value in span_styles.items() if key in TEXT_SPAN_MODIFIERS}
            parts.append(f"Text({swift_string(text)}){''.join(ordered_modifiers(inline))}")
        return self._fragment(builder, f"({' + '.join(parts)})", builder.styles)

    def line(self, builder: "StyleBuilder") -> str:
        return self._fragment(builder, 'Rectangle()', builder.styles)

    def image(self, builder: "StyleBuilder") -> str:
        url = swift_string(placeholder_url(builder.node))
        return self._fragment(builder, f"AsyncImage(url: URL(string: {url}))", builder.styles)

    # -- generation modes -----------------------------------------------------

    def wrap_output(self, code: str, context: GenerationContext, component_name: str) -> str:
        mode = context.settings.swiftui_generation_mode
        if mode == 'snippet' or not code:
            return code
        result = (
            "import SwiftUI\n"
            "\n"
            f"struct {component_name}: View {{\n"
            "  var body: some View {\n"
            f"    {indent_string(code, 4)}\n"
            "  }\n"
            "}"
        )
        if mode == 'preview':
            result += f"\n\n#Preview {{\n  {component_name}()\n}}"
        return result

