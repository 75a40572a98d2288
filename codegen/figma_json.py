"""
Figma REST JSON -> scene graph conversion.

The REST API describes nodes as nested dicts (``/v1/files/:key/nodes``).
This module maps them onto SceneNode so the generator never touches raw JSON.
Differences from the REST shape that matter downstream:

- paint lists are reversed (REST lists the bottom paint first);
- x/y are relative to the nearest frame ancestor, groups are transparent;
- gradient handles are folded into a 2x3 transform;
- text style overrides are split into TextSegment runs.
"""

import math
from typing import Any, Dict, List, Optional, Tuple

from codegen.inference import infer_auto_layout
from codegen.log import get_logger
from codegen.nodes import (
    IDENTITY_TRANSFORM, AutoLayoutHint, ColorValue, CornerRadii, Effect,
    GradientPaint, GradientStop, ImagePaint, NodeKind, Padding, Paint,
    SceneNode, SolidPaint, TextSegment, Transform,
)

logger = get_logger(__name__)

NODE_KINDS = {
    'FRAME': NodeKind.FRAME,
    'COMPONENT': NodeKind.FRAME,
    'COMPONENT_SET': NodeKind.FRAME,
    'INSTANCE': NodeKind.FRAME,
    'SECTION': NodeKind.FRAME,
    'GROUP': NodeKind.GROUP,
    'RECTANGLE': NodeKind.RECTANGLE,
    'ELLIPSE': NodeKind.ELLIPSE,
    'TEXT': NodeKind.TEXT,
    'LINE': NodeKind.LINE,
    'VECTOR': NodeKind.VECTOR,
    'BOOLEAN_OPERATION': NodeKind.VECTOR,
    'STAR': NodeKind.VECTOR,
    'REGULAR_POLYGON': NodeKind.VECTOR,
}

Point = Tuple[float, float]


# ============================================================================
# Paints
# ============================================================================

def _color(data: Dict[str, Any]) -> ColorValue:
    return ColorValue(
        r=data.get('r', 0),
        g=data.get('g', 0),
        b=data.get('b', 0),
        a=data.get('a', 1),
    )


def _gradient_transform(fill: Dict[str, Any]) -> Transform:
    """2x3 transform of a gradient, from ``gradientTransform`` or the handles.

    The first column maps the start handle onto the end handle, the second
    onto the width handle, the third is the start handle itself.
    """
    if 'gradientTransform' in fill:
        (a, c, e), (b, d, f) = fill['gradientTransform']
        return (a, c, e), (b, d, f)
    handles = fill.get('gradientHandlePositions') or []
    if len(handles) < 3:
        return IDENTITY_TRANSFORM
    h0, h1, h2 = handles[:3]
    return (
        (h1['x'] - h0['x'], h2['x'] - h0['x'], h0['x']),
        (h1['y'] - h0['y'], h2['y'] - h0['y'], h0['y']),
    )


def _extract_paint(fill: Dict[str, Any]) -> Optional[Paint]:
    paint_type = fill.get('type', '')
    opacity = fill.get('opacity', 1)
    visible = fill.get('visible', True)

    if paint_type == 'SOLID':
        return SolidPaint(color=_color(fill.get('color', {})), opacity=opacity, visible=visible)

    if paint_type.startswith('GRADIENT_'):
        stops = tuple(
            GradientStop(color=_color(stop.get('color', {})), position=stop.get('position', 0))
            for stop in fill.get('gradientStops', [])
        )
        return GradientPaint(
            kind=paint_type[len('GRADIENT_'):],
            stops=stops,
            transform=_gradient_transform(fill),
            opacity=opacity,
            visible=visible,
        )

    if paint_type == 'IMAGE':
        return ImagePaint(
            image_ref=fill.get('imageRef', ''),
            scale_mode=fill.get('scaleMode', 'FILL'),
            opacity=opacity,
            visible=visible,
        )

    logger.debug("ignoring unsupported paint type %s", paint_type)
    return None


def _extract_paints(paints: Optional[List[Dict[str, Any]]]) -> List[Paint]:
    """Paints topmost-first."""
    converted = [_extract_paint(paint) for paint in reversed(paints or [])]
    return [paint for paint in converted if paint is not None]


# ============================================================================
# Geometry and effects
# ============================================================================

def _extract_corner_radii(node: Dict[str, Any]) -> CornerRadii:
    radii = node.get('rectangleCornerRadii')
    if radii and len(radii) == 4:
        return CornerRadii(*radii)
    radius = node.get('cornerRadius', 0)
    return CornerRadii(radius, radius, radius, radius)


def _extract_effects(node: Dict[str, Any]) -> List[Effect]:
    effects = []
    for effect in node.get('effects', []):
        offset = effect.get('offset') or {}
        effects.append(Effect(
            type=effect.get('type', ''),
            radius=effect.get('radius', 0),
            color=_color(effect.get('color', {'a': 0.25})),
            offset_x=offset.get('x', 0),
            offset_y=offset.get('y', 0),
            spread=effect.get('spread', 0),
            visible=effect.get('visible', True),
        ))
    return effects


def _bounding_box(node: Dict[str, Any]) -> Dict[str, float]:
    return node.get('absoluteBoundingBox') or {}


def _extract_geometry(
    node: Dict[str, Any], origin: Point, root: bool = False,
) -> Tuple[float, float, float, float, float]:
    """(x, y, width, height, rotation) of a node, x/y relative to ``origin``.

    A rotated node's bounding box no longer starts at its own origin, so
    children prefer the translation of ``relativeTransform``.
    """
    bbox = _bounding_box(node)
    size = node.get('size') or {}
    width = size.get('x', bbox.get('width', 0))
    height = size.get('y', bbox.get('height', 0))

    transform = node.get('relativeTransform')
    rotation = 0.0
    if transform:
        # [[cos, sin, x], [-sin, cos, y]] for a counter-clockwise rotation
        rotation = round(math.degrees(math.atan2(transform[0][1], transform[0][0])), 2)
    if transform and not root:
        x, y = transform[0][2], transform[1][2]
    else:
        x = bbox.get('x', 0) - origin[0]
        y = bbox.get('y', 0) - origin[1]
    return x, y, width, height, rotation


def _extract_padding(node: Dict[str, Any]) -> Padding:
    return Padding(
        top=node.get('paddingTop', 0),
        right=node.get('paddingRight', 0),
        bottom=node.get('paddingBottom', 0),
        left=node.get('paddingLeft', 0),
    )


def _extract_inferred_layout(node: Dict[str, Any]) -> Optional[AutoLayoutHint]:
    inferred = node.get('inferredAutoLayout')
    if not inferred or inferred.get('layoutMode', 'NONE') == 'NONE':
        return None
    return AutoLayoutHint(
        layout_mode=inferred['layoutMode'],
        item_spacing=inferred.get('itemSpacing', 0),
        padding=_extract_padding(inferred),
        primary_axis_align=inferred.get('primaryAxisAlignItems', 'MIN'),
        counter_axis_align=inferred.get('counterAxisAlignItems', 'MIN'),
    )


# ============================================================================
# Text
# ============================================================================

def _text_segment(characters: str, style: Dict[str, Any], fills: List[Paint]) -> TextSegment:
    line_height = None
    if style.get('lineHeightUnit', 'PIXELS') != 'INTRINSIC_%':
        line_height = style.get('lineHeightPx')
    return TextSegment(
        characters=characters,
        font_family=style.get('fontFamily', 'Inter'),
        font_style='Italic' if style.get('italic') else style.get('fontStyle', 'Regular'),
        font_weight=int(style.get('fontWeight', 400)),
        font_size=style.get('fontSize', 14),
        fills=tuple(fills),
        line_height_px=line_height,
        letter_spacing=style.get('letterSpacing', 0),
        text_decoration=style.get('textDecoration', 'NONE'),
        text_case=style.get('textCase', 'ORIGINAL'),
    )


def _extract_segments(node: Dict[str, Any], fills: List[Paint]) -> List[TextSegment]:
    """Split text into runs of characters sharing one style override."""
    characters = node.get('characters', '')
    style = node.get('style', {})
    overrides = node.get('characterStyleOverrides') or []
    table = node.get('styleOverrideTable') or {}
    if not characters:
        return []
    if not overrides:
        return [_text_segment(characters, style, fills)]

    # overrides are indexed by UTF-16 code unit and may be shorter than the
    # text; the tail uses the base style
    ids = []
    offset = 0
    for ch in characters:
        ids.append(overrides[offset] if offset < len(overrides) else 0)
        offset += 2 if ord(ch) > 0xFFFF else 1
    segments = []
    start = 0
    for i in range(1, len(characters) + 1):
        if i < len(characters) and ids[i] == ids[start]:
            continue
        override = table.get(str(ids[start])) or {}
        segment_fills = _extract_paints(override['fills']) if 'fills' in override else fills
        segments.append(_text_segment(characters[start:i], {**style, **override}, segment_fills))
        start = i
    return segments


# ============================================================================
# Nodes
# ============================================================================

def convert_node(node: Dict[str, Any], origin: Optional[Point] = None) -> SceneNode:
    """Convert one REST node (and its subtree) into a SceneNode.

    ``origin`` is the absolute position of the nearest frame ancestor; it
    defaults to the node's own position, so a converted root sits at 0, 0.
    """
    bbox = _bounding_box(node)
    root = origin is None
    if root:
        origin = (bbox.get('x', 0), bbox.get('y', 0))

    node_type = node.get('type', '')
    kind = NODE_KINDS.get(node_type, NodeKind.OTHER)
    if kind == NodeKind.OTHER:
        logger.debug("unsupported node type %s for %r", node_type, node.get('name'))

    x, y, width, height, rotation = _extract_geometry(node, origin, root)
    fills = _extract_paints(node.get('fills'))
    style = node.get('style', {})

    # frames start a new coordinate space; groups share their parent's
    child_origin = (bbox.get('x', 0), bbox.get('y', 0)) if kind == NodeKind.FRAME else origin

    scene = SceneNode(
        kind=kind,
        name=node.get('name', ''),
        id=node.get('id', ''),
        visible=node.get('visible', True),
        x=x,
        y=y,
        width=width,
        height=height,
        rotation=rotation,
        opacity=node.get('opacity', 1),
        blend_mode=node.get('blendMode', 'PASS_THROUGH'),
        fills=fills,
        strokes=_extract_paints(node.get('strokes')),
        stroke_weight=node.get('strokeWeight', 0),
        stroke_align=node.get('strokeAlign', 'INSIDE'),
        dashes=tuple(node.get('strokeDashes', [])),
        corner_radii=_extract_corner_radii(node),
        effects=_extract_effects(node),
        clips_content=node.get('clipsContent', False),
        layout_mode=node.get('layoutMode', 'NONE'),
        item_spacing=node.get('itemSpacing', 0),
        padding=_extract_padding(node),
        primary_axis_align=node.get('primaryAxisAlignItems', 'MIN'),
        counter_axis_align=node.get('counterAxisAlignItems', 'MIN'),
        layout_grow=node.get('layoutGrow', 0),
        layout_align=node.get('layoutAlign', 'INHERIT'),
        layout_sizing_horizontal=node.get('layoutSizingHorizontal', 'FIXED'),
        layout_sizing_vertical=node.get('layoutSizingVertical', 'FIXED'),
        characters=node.get('characters', ''),
        text_align_horizontal=style.get('textAlignHorizontal', 'LEFT'),
        text_auto_resize=style.get('textAutoResize', 'NONE'),
        children=[convert_node(child, child_origin) for child in node.get('children', [])],
    )
    if kind == NodeKind.TEXT:
        scene.segments = _extract_segments(node, fills)
    if kind == NodeKind.FRAME:
        scene.inferred_auto_layout = _extract_inferred_layout(node) or infer_auto_layout(scene)
    return scene


def convert_nodes_response(data: Dict[str, Any]) -> List[SceneNode]:
    """SceneNodes for every document of a ``/v1/files/:key/nodes`` response."""
    nodes = []
    for node_id, entry in (data.get('nodes') or {}).items():
        document = (entry or {}).get('document')
        if document is None:
            logger.debug("node %s missing from response", node_id)
            continue
        nodes.append(convert_node(document))
    return nodes
