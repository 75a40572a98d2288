"""
Tree walker - recursive generation over the scene graph.

One dispatch point per node kind. Each handler returns a newline-prefixed
fragment (or "" when the node produces nothing); parents indent and join the
fragments of their children through the active emitter.
"""

from typing import Callable, Dict, List, Optional, Sequence

from codegen.builder import StyleBuilder
from codegen.context import Framework, GenerationContext, GenerationSettings
from codegen.emitters.base import StyleDescriptor
from codegen.extractors import retrieve_top_fill
from codegen.layout import Absolute, ExplicitFlow, LayoutDecision, node_position, resolve_layout
from codegen.log import get_logger
from codegen.nodes import ImagePaint, NodeKind, SceneNode, TextSegment
from codegen.postprocess import add_class_prefix, component_identifier

logger = get_logger(__name__)

Handler = Callable[[SceneNode, GenerationContext, Optional[LayoutDecision]], str]


def _is_degenerate(node: SceneNode) -> bool:
    if node.kind == NodeKind.LINE:
        # a line is zero-height by nature
        return node.width <= 0
    return node.width <= 0 or node.height <= 0


def _layout_styles(node: SceneNode, context: GenerationContext, layout: LayoutDecision,
                   parent_layout: Optional[LayoutDecision]) -> StyleDescriptor:
    """Properties that make ``node`` host children laid out per ``layout``."""
    emitter = context.emitter
    if isinstance(layout, ExplicitFlow):
        return emitter.flow_styles(layout)
    # an absolutely positioned element already hosts absolute children
    if node_position(node, parent_layout) is None:
        return emitter.relative_styles()
    return {}


# ---------------------------------------------------------------------------
# Node handlers
# ---------------------------------------------------------------------------

def _shape(node: SceneNode, context: GenerationContext, parent: Optional[LayoutDecision]) -> str:
    builder = StyleBuilder(node, context, parent).common_position_styles().common_shape_styles()
    return context.emitter.container(builder, "")


def _frame(node: SceneNode, context: GenerationContext, parent: Optional[LayoutDecision]) -> str:
    layout = resolve_layout(node, context)
    children = render_children(node.children, context, layout)
    builder = StyleBuilder(node, context, parent).common_position_styles().common_shape_styles()
    extra = _layout_styles(node, context, layout, parent)
    return context.emitter.container(builder, children, extra, layout)


def _group(node: SceneNode, context: GenerationContext, parent: Optional[LayoutDecision]) -> str:
    if not node.children:
        return ""

    visual = StyleBuilder(node, context, parent).blend_styles().common_shape_styles()
    visible_children = [child for child in node.children if child.visible]
    needs_wrapper = bool(visual.styles) or (
        len(visible_children) > 1 and not isinstance(parent, Absolute)
    )
    if not needs_wrapper:
        # children share the parent's coordinate space, so they can be inlined
        return render_children(node.children, context, parent)

    layout = Absolute(origin_x=node.x, origin_y=node.y)
    children = render_children(node.children, context, layout)
    builder = StyleBuilder(node, context, parent).common_position_styles().common_shape_styles()
    extra = _layout_styles(node, context, layout, parent)
    return context.emitter.container(builder, children, extra, layout)


def _text(node: SceneNode, context: GenerationContext, parent: Optional[LayoutDecision]) -> str:
    emitter = context.emitter
    builder = StyleBuilder(node, context, parent).common_position_styles().text_align()
    segments = node.segments or [TextSegment(characters=node.characters)]

    if len(segments) == 1:
        segment = segments[0]
        builder.text_styles(segment)
        return emitter.text(builder, emitter.text_content(segment))

    spans = [(emitter.text_content(segment), emitter.text_styles(segment)) for segment in segments]
    return emitter.text(builder, None, spans)


def _line(node: SceneNode, context: GenerationContext, parent: Optional[LayoutDecision]) -> str:
    builder = StyleBuilder(node, context, parent).common_position_styles().line_styles()
    return context.emitter.line(builder)


def _vector(node: SceneNode, context: GenerationContext, parent: Optional[LayoutDecision]) -> str:
    builder = StyleBuilder(node, context, parent).common_position_styles()
    if isinstance(retrieve_top_fill(node.fills), ImagePaint):
        return context.emitter.image(builder)
    builder.common_shape_styles()
    return context.emitter.container(builder, "")


HANDLERS: Dict[NodeKind, Handler] = {
    NodeKind.FRAME: _frame,
    NodeKind.GROUP: _group,
    NodeKind.RECTANGLE: _shape,
    NodeKind.ELLIPSE: _shape,
    NodeKind.TEXT: _text,
    NodeKind.LINE: _line,
    NodeKind.VECTOR: _vector,
}


# ---------------------------------------------------------------------------
# Recursion
# ---------------------------------------------------------------------------

def render_node(node: SceneNode, context: GenerationContext,
                parent_layout: Optional[LayoutDecision] = None) -> str:
    if not node.visible:
        logger.debug("skipping hidden node %r", node.name)
        return ""
    handler = HANDLERS.get(node.kind)
    if handler is None:
        logger.debug("skipping unsupported node %r (%s)", node.name, node.kind)
        return ""
    # frames fall back to their children instead of disappearing
    if node.kind != NodeKind.FRAME and _is_degenerate(node):
        logger.debug("skipping degenerate node %r (%sx%s)", node.name, node.width, node.height)
        return ""
    return handler(node, context, parent_layout)


def render_children(nodes: Sequence[SceneNode], context: GenerationContext,
                    parent_layout: Optional[LayoutDecision]) -> str:
    fragments = [render_node(node, context, parent_layout) for node in nodes]
    return context.emitter.join_children([fragment for fragment in fragments if fragment])


def generate(nodes: Sequence[SceneNode], context: GenerationContext) -> str:
    """Generate code for ``nodes`` (top-level siblings) in one pass."""
    code = render_children(nodes, context, None)
    if code.startswith("\n"):
        code = code[1:]
    return code


def generate_code(
    nodes: List[SceneNode],
    settings: Optional[GenerationSettings] = None,
    preview: bool = False,
    component_name: Optional[str] = None,
) -> str:
    """Full generation: walk the nodes, apply the generation mode and the
    Tailwind class prefix.

    Settings are copied, so later changes to ``settings`` never leak into a
    pass that is already running.
    """
    settings = (settings or GenerationSettings()).model_copy()
    context = GenerationContext(settings=settings, preview=preview)
    code = generate(nodes, context)

    if component_name is None:
        component_name = nodes[0].name if nodes else ""
    code = context.emitter.wrap_output(code, context, component_identifier(component_name))

    if context.framework == Framework.TAILWIND:
        code = add_class_prefix(code, settings.custom_tailwind_prefix)
    logger.debug("generated %d characters of %s", len(code), context.framework.value)
    return code
