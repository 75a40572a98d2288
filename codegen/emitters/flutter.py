"""
Flutter emitter - Dart widget constructor calls.

Style descriptors hold finished Dart argument values keyed by the argument
name (``width``, ``decoration``, ``style``...). A few keys are not Container
arguments but wrappers applied around the widget, outermost first:
Positioned (``left``/``top``) or Expanded (``flex``), Opacity, Transform.
"""

import math
import re
from typing import TYPE_CHECKING, Dict, List, Optional

from codegen.context import Framework, GenerationContext
from codegen.emitters.base import (
    Emitter, StyleDescriptor, TextSpans, indent_string, placeholder_url,
)
from codegen.extractors import (
    LinearGradient, border_radius, box_shadows, format_number, linear_gradient,
    retrieve_top_fill, top_stroke,
)
from codegen.layout import Dimension, ExplicitFlow, LayoutDecision
from codegen.nodes import (
    ColorValue, CornerRadii, ImagePaint, NodeKind, SceneNode, SolidPaint,
    TextSegment,
)

if TYPE_CHECKING:
    from codegen.builder import StyleBuilder

MAIN_AXIS_ALIGN = {
    'MIN': 'MainAxisAlignment.start',
    'CENTER': 'MainAxisAlignment.center',
    'MAX': 'MainAxisAlignment.end',
    'SPACE_BETWEEN': 'MainAxisAlignment.spaceBetween',
}

CROSS_AXIS_ALIGN = {
    'MIN': 'CrossAxisAlignment.start',
    'CENTER': 'CrossAxisAlignment.center',
    'MAX': 'CrossAxisAlignment.end',
    'BASELINE': 'CrossAxisAlignment.baseline',
}

STROKE_ALIGN = {
    'INSIDE': 'BorderSide.strokeAlignInside',
    'CENTER': 'BorderSide.strokeAlignCenter',
    'OUTSIDE': 'BorderSide.strokeAlignOutside',
}

TEXT_ALIGN = {'CENTER': 'TextAlign.center', 'RIGHT': 'TextAlign.right', 'JUSTIFIED': 'TextAlign.justify'}

TEXT_DECORATION = {'UNDERLINE': 'TextDecoration.underline', 'STRIKETHROUGH': 'TextDecoration.lineThrough'}

CONTAINER_ARGS = ('width', 'height', 'padding', 'clipBehavior', 'decoration')
WRAPPER_KEYS = ('left', 'top', 'flex', 'opacity', 'rotation')


def widget(name: str, *positional: str, **named: Optional[str]) -> str:
    """Dart constructor call, one argument per line. None arguments are skipped."""
    args = [f"\n{value}," for value in positional]
    args.extend(f"\n{key}: {value}," for key, value in named.items() if value is not None)
    if not args:
        return f"{name}()"
    return f"{name}({indent_string(''.join(args))}\n)"


def widget_list(fragments: str) -> str:
    """``[...]`` literal around already joined child widgets."""
    return f"[{indent_string(fragments)}\n]"


def dart_string(text: str) -> str:
    escaped = (
        text.replace('\\', '\\\\')
        .replace("'", "\\'")
        .replace('$', '\\$')
        .replace('\n', '\\n')
    )
    return f"'{escaped}'"


class FlutterEmitter(Emitter):
    framework = Framework.FLUTTER

    # -- values ---------------------------------------------------------------

    def color(self, color: ColorValue, opacity: float = 1.0) -> str:
        alpha = color.a * opacity
        hex_value = ColorValue(color.r, color.g, color.b).hex[1:].upper()
        if alpha >= 1 and hex_value == '000000':
            return 'Colors.black'
        if alpha >= 1 and hex_value == 'FFFFFF':
            return 'Colors.white'
        return f"Color(0x{round(alpha * 255):02X}{hex_value})"

    def gradient(self, gradient: LinearGradient) -> str:
        def alignment(point):
            x, y = point
            return f"Alignment({format_number(x * 2 - 1)}, {format_number(y * 2 - 1)})"

        colors = ', '.join(self.color(stop.color, gradient.opacity) for stop in gradient.stops)
        stops = ', '.join(format_number(stop.position) for stop in gradient.stops)
        return widget(
            'LinearGradient',
            begin=alignment(gradient.start),
            end=alignment(gradient.end),
            colors=f"[{colors}]",
            stops=f"[{stops}]",
        )

    # -- style concerns -------------------------------------------------------

    def size_styles(self, node: SceneNode, width: Dimension, height: Dimension,
                    parent: Optional[LayoutDecision]) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        for prop, value, horizontal in (('width', width, True), ('height', height, False)):
            if value is None:
                continue
            if value == "fill":
                if isinstance(parent, ExplicitFlow) and parent.is_row == horizontal:
                    styles['flex'] = '1'
                else:
                    styles[prop] = 'double.infinity'
                continue
            styles[prop] = format_number(value)
        return styles

    def position_styles(self, x: float, y: float) -> StyleDescriptor:
        return {'left': format_number(x), 'top': format_number(y)}

    def blend_styles(self, node: SceneNode) -> StyleDescriptor:
        styles: StyleDescriptor = {}
        if node.opacity < 1:
            styles['opacity'] = format_number(node.opacity)
        if node.rotation:
            styles['rotation'] = format_number(math.radians(-node.rotation), 4)
        return styles

    def _radius(self, radii: CornerRadii) -> str:
        if radii.is_uniform:
            return f"BorderRadius.circular({format_number(radii.top_left)})"
        corners = {
            'topLeft': radii.top_left,
            'topRight': radii.top_right,
            'bottomLeft': radii.bottom_left,
            'bottomRight': radii.bottom_right,
        }
        return widget('BorderRadius.only', **{
            key: f"Radius.circular({format_number(value)})" for key, value in corners.items()
        })

    def _border_side(self, node: SceneNode) -> Optional[str]:
        stroke = top_stroke(node)
        if not isinstance(stroke, SolidPaint):
            return None
        return widget(
            'BorderSide',
            width=format_number(node.stroke_weight),
            strokeAlign=STROKE_ALIGN.get(node.stroke_align, STROKE_ALIGN['INSIDE']),
            color=self.color(stroke.color, stroke.opacity),
        )

    def _shadows(self, node: SceneNode) -> Optional[str]:
        # inner shadows have no BoxShadow equivalent
        shadows = [
            widget(
                'BoxShadow',
                color=self.color(s.color),
                blurRadius=format_number(s.radius),
                offset=f"Offset({format_number(s.offset_x)}, {format_number(s.offset_y)})",
                spreadRadius=format_number(s.spread),
            )
            for s in box_shadows(node) if s.type == 'DROP_SHADOW'
        ]
        if not shadows:
            return None
        return widget_list(''.join(f"\n{shadow}," for shadow in shadows))

    def shape_styles(self, node: SceneNode) -> StyleDescriptor:
        fill = retrieve_top_fill(node.fills)
        args: Dict[str, Optional[str]] = {}
        if isinstance(fill, SolidPaint):
            args['color'] = self.color(fill.color, fill.opacity)
        elif isinstance(fill, ImagePaint):
            args['image'] = widget(
                'DecorationImage',
                image=f"NetworkImage({dart_string(placeholder_url(node))})",
                fit='BoxFit.cover',
            )
        elif fill is not None:
            gradient = linear_gradient(fill)
            if gradient:
                args['gradient'] = self.gradient(gradient)

        side = self._border_side(node)
        if node.kind == NodeKind.ELLIPSE:
            shape = widget('OvalBorder', side=side)
        else:
            radii = border_radius(node)
            shape = widget(
                'RoundedRectangleBorder',
                side=side,
                borderRadius=self._radius(radii) if radii else None,
            )
        shadows = self._shadows(node)

        styles: StyleDescriptor = {}
        if args or side or shadows or shape != 'RoundedRectangleBorder()':
            styles['decoration'] = widget('ShapeDecoration', **args, shape=shape, shadows=shadows)
        if node.clips_content:
            styles['clipBehavior'] = 'Clip.antiAlias'
        return styles

    def line_styles(self, node: SceneNode) -> StyleDescriptor:
        stroke = top_stroke(node)
        if not isinstance(stroke, SolidPaint):
            return {}
        side = widget(
            'BorderSide',
            width=format_number(node.stroke_weight),
            color=self.color(stroke.color, stroke.opacity),
        )
        return {'decoration': widget('BoxDecoration', border=widget('Border', top=side))}

    def text_styles(self, segment: TextSegment) -> StyleDescriptor:
        fill = retrieve_top_fill(segment.fills)
        line_height = None
        if segment.line_height_px and segment.font_size:
            line_height = format_number(segment.line_height_px / segment.font_size)
        style = widget(
            'TextStyle',
            color=self.color(fill.color, fill.opacity) if isinstance(fill, SolidPaint) else None,
            fontSize=format_number(segment.font_size),
            fontFamily=dart_string(segment.font_family),
            fontStyle='FontStyle.italic' if segment.italic else None,
            fontWeight=f"FontWeight.w{segment.font_weight}",
            height=line_height,
            letterSpacing=format_number(segment.letter_spacing) if segment.letter_spacing else None,
            decoration=TEXT_DECORATION.get(segment.text_decoration),
        )
        return {'style': style}

    def text_align_styles(self, node: SceneNode) -> StyleDescriptor:
        if node.text_align_horizontal in TEXT_ALIGN:
            return {'textAlign': TEXT_ALIGN[node.text_align_horizontal]}
        return {}

    def flow_styles(self, flow: ExplicitFlow) -> StyleDescriptor:
        p = flow.padding
        if p.is_zero:
            return {}
        if p.top == p.right == p.bottom == p.left:
            return {'padding': f"const EdgeInsets.all({format_number(p.top)})"}
        if p.top == p.bottom and p.left == p.right:
            return {'padding': (
                f"const EdgeInsets.symmetric(horizontal: {format_number(p.left)}, "
                f"vertical: {format_number(p.top)})"
            )}
        return {'padding': (
            f"const EdgeInsets.only(top: {format_number(p.top)}, left: {format_number(p.left)}, "
            f"right: {format_number(p.right)}, bottom: {format_number(p.bottom)})"
        )}

    def serialize_attributes(self, styles: StyleDescriptor, layer_name: str,
                             context: GenerationContext) -> str:
        return ''.join(f"\n{key}: {value}," for key, value in styles.items())

    # -- structure ------------------------------------------------------------

    def _wrap(self, styles: StyleDescriptor, body: str) -> str:
        if 'rotation' in styles:
            body = widget('Transform.rotate', angle=styles['rotation'],
                          alignment='Alignment.topLeft', child=body)
        if 'opacity' in styles:
            body = widget('Opacity', opacity=styles['opacity'], child=body)
        if 'flex' in styles:
            body = widget('Expanded', child=body)
        if 'left' in styles or 'top' in styles:
            body = widget('Positioned', left=styles.get('left'), top=styles.get('top'), child=body)
        return body

    def _fragment(self, builder: "StyleBuilder", body: str) -> str:
        comment = f"\n// {builder.layer_name}" if builder.layer_name else ""
        return f"{comment}\n{body}"

    def text_content(self, segment: TextSegment) -> str:
        text = segment.characters
        if segment.text_case == 'UPPER':
            text = text.upper()
        elif segment.text_case == 'LOWER':
            text = text.lower()
        elif segment.text_case == 'TITLE':
            text = text.title()
        return text

    def _flow_child(self, children: str, layout: Optional[LayoutDecision]) -> str:
        if isinstance(layout, ExplicitFlow):
            return widget(
                'Row' if layout.is_row else 'Column',
                mainAxisSize='MainAxisSize.min',
                mainAxisAlignment=MAIN_AXIS_ALIGN.get(layout.primary_align, MAIN_AXIS_ALIGN['MIN']),
                crossAxisAlignment=CROSS_AXIS_ALIGN.get(layout.counter_align, CROSS_AXIS_ALIGN['MIN']),
                spacing=format_number(layout.gap) if layout.gap else None,
                children=widget_list(children),
            )
        return widget('Stack', children=widget_list(children))

    def container(self, builder: "StyleBuilder", children: str,
                  extra: Optional[StyleDescriptor] = None,
                  layout: Optional[LayoutDecision] = None) -> str:
        node = builder.node
        if node.width <= 0 or node.height <= 0:
            return children

        styles = dict(builder.styles)
        styles.update(extra or {})
        args = {key: styles[key] for key in CONTAINER_ARGS if key in styles}
        child = self._flow_child(children, layout) if children else None
        if not args and not any(key in styles for key in WRAPPER_KEYS):
            if child is None:
                return ""
            return self._fragment(builder, child)
        body = widget('Container', child=child, **args)
        return self._fragment(builder, self._wrap(styles, body))

    def text(self, builder: "StyleBuilder", content: Optional[str],
             spans: Optional[TextSpans] = None) -> str:
        styles = builder.styles
        if spans is not None:
            rich = widget('TextSpan', children=widget_list(''.join(
                f"\n{widget('TextSpan', text=dart_string(text), style=span.get('style'))},"
                for text, span in spans
            )))
            body = widget('Text.rich', rich, textAlign=styles.get('textAlign'))
        else:
            body = widget(
                'Text',
                dart_string(content or ''),
                textAlign=styles.get('textAlign'),
                style=styles.get('style'),
            )
        if 'width' in styles or 'height' in styles:
            body = widget('SizedBox', width=styles.get('width'), height=styles.get('height'), child=body)
        return self._fragment(builder, self._wrap(styles, body))

    def line(self, builder: "StyleBuilder") -> str:
        styles = builder.styles
        args = {key: styles[key] for key in ('width', 'decoration') if key in styles}
        return self._fragment(builder, self._wrap(styles, widget('Container', **args)))

    def image(self, builder: "StyleBuilder") -> str:
        styles = builder.styles
        body = widget(
            'Image.network',
            dart_string(placeholder_url(builder.node)),
            width=styles.get('width'),
            height=styles.get('height'),
            fit='BoxFit.cover',
        )
        return self._fragment(builder, self._wrap(styles, body))

    def join_children(self, fragments: List[str]) -> str:
        # an inlined group arrives already joined
        return ''.join(
            fragment if fragment.endswith(',') else f"{fragment},"
            for fragment in fragments if fragment
        )

    # -- generation modes -----------------------------------------------------

    def wrap_output(self, code: str, context: GenerationContext, component_name: str) -> str:
        mode = context.settings.flutter_generation_mode
        if mode == 'snippet' or not code:
            return code
        body = code.rstrip(',')
        if len(re.findall(r'^[A-Z][\w.]*\(', code, re.M)) > 1:
            body = widget('Column', children=widget_list('\n' + code))
        component = (
            f"class {component_name} extends StatelessWidget {{\n"
            f"  const {component_name}({{super.key}});\n"
            f"\n"
            f"  @override\n"
            f"  Widget build(BuildContext context) {{\n"
            f"    return {indent_string(body, 4)};\n"
            f"  }}\n"
            f"}}"
        )
        if mode == 'stateless':
            return component
        home = widget('Scaffold', body=widget('ListView', children=f"[{component_name}()]"))
        app = widget('MaterialApp', home=home)
        return (
            "import 'package:flutter/material.dart';\n"
            "\n"
            "void main() {\n"
            "  runApp(const FigmaToCodeApp());\n"
            "}\n"
            "\n"
            "class FigmaToCodeApp extends StatelessWidget {\n"
            "  const FigmaToCodeApp({super.key});\n"
            "\n"
            "  @override\n"
            "  Widget build(BuildContext context) {\n"
            f"    return {indent_string(app, 4)};\n"
            "  }\n"
            "}\n"
            "\n"
            f"{component}"
        )
