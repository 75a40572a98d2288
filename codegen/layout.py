"""
Layout resolution - explicit flow vs absolute positioning.

A container's decision controls how its direct children are positioned: under
an ExplicitFlow children carry no coordinates and size relative to the flow,
under Absolute every child carries explicit left/top offsets.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from codegen.context import GenerationContext
from codegen.log import get_logger
from codegen.nodes import AutoLayoutHint, NodeKind, Padding, SceneNode

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExplicitFlow:
    direction: str  # HORIZONTAL | VERTICAL
    gap: float = 0
    padding: Padding = Padding()
    primary_align: str = "MIN"
    counter_align: str = "MIN"

    @property
    def is_row(self) -> bool:
        return self.direction == "HORIZONTAL"


@dataclass(frozen=True)
class Absolute:
    """Children are placed at their coordinates minus this origin."""
    origin_x: float = 0
    origin_y: float = 0


LayoutDecision = Union[ExplicitFlow, Absolute]


def _flow_from_hint(hint: AutoLayoutHint) -> ExplicitFlow:
    return ExplicitFlow(
        direction=hint.layout_mode,
        gap=hint.item_spacing,
        padding=hint.padding,
        primary_align=hint.primary_axis_align,
        counter_align=hint.counter_axis_align,
    )


def resolve_layout(node: SceneNode, context: GenerationContext) -> LayoutDecision:
    """Decide how the children of ``node`` are laid out.

    1. a declared auto layout wins;
    2. otherwise, with layout optimization on, the inferred hint is used as-is,
       even when its direction disagrees with the children's geometry;
    3. otherwise children are absolutely positioned.
    """
    own = node.own_layout
    if own is not None:
        decision: LayoutDecision = _flow_from_hint(own)
    elif context.optimize_layout and node.inferred_auto_layout is not None:
        decision = _flow_from_hint(node.inferred_auto_layout)
    else:
        decision = Absolute()
    logger.debug("layout of %r resolved to %s", node.name, decision)
    return decision


# ---------------------------------------------------------------------------
# Child sizing under a parent decision
# ---------------------------------------------------------------------------

# A dimension is a fixed pixel value, "fill" (grow/stretch inside a flow) or
# None (hug contents, nothing emitted).
Dimension = Union[float, str, None]


def _axis_sizing(node: SceneNode, horizontal: bool, parent: Optional[LayoutDecision]) -> Dimension:
    sizing = node.layout_sizing_horizontal if horizontal else node.layout_sizing_vertical
    value = node.width if horizontal else node.height

    if isinstance(parent, ExplicitFlow):
        primary = parent.is_row == horizontal
        if primary and node.layout_grow > 0:
            return "fill"
        if not primary and node.layout_align == "STRETCH":
            return "fill"
        if sizing == "FILL":
            return "fill"

    if sizing == "HUG" and (node.own_layout is not None or node.kind == NodeKind.TEXT):
        return None
    if node.kind == NodeKind.TEXT and horizontal and node.text_auto_resize == "WIDTH_AND_HEIGHT":
        return None
    if node.kind == NodeKind.TEXT and not horizontal and node.text_auto_resize in ("HEIGHT", "WIDTH_AND_HEIGHT"):
        return None
    return value


def node_size(node: SceneNode, parent: Optional[LayoutDecision]) -> Tuple[Dimension, Dimension]:
    """Width and height of ``node`` as seen from its parent's layout."""
    return _axis_sizing(node, True, parent), _axis_sizing(node, False, parent)


def node_position(node: SceneNode, parent: Optional[LayoutDecision]) -> Optional[Tuple[float, float]]:
    """Offset inside the parent, or None when the parent does not use
    absolute positioning (flow layout, or a top-level node)."""
    if not isinstance(parent, Absolute):
        return None
    return node.x - parent.origin_x, node.y - parent.origin_y
