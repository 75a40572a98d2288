"""
Auto-layout inference for freeform frames.

Used when the host payload carries no inferred layout of its own. A frame
qualifies when its visible children form a single non-overlapping row or
column, in document order, with a uniform gap and a consistent counter-axis
alignment.
"""

from typing import List, Optional

from codegen.nodes import AutoLayoutHint, NodeKind, Padding, SceneNode

TOLERANCE = 1.0


def _spread(values: List[float]) -> float:
    return max(values) - min(values)


def _counter_align(starts: List[float], sizes: List[float]) -> Optional[str]:
    if _spread(starts) <= TOLERANCE:
        return "MIN"
    centers = [start + size / 2 for start, size in zip(starts, sizes)]
    if _spread(centers) <= TOLERANCE:
        return "CENTER"
    ends = [start + size for start, size in zip(starts, sizes)]
    if _spread(ends) <= TOLERANCE:
        return "MAX"
    return None


def _infer_axis(node: SceneNode, children: List[SceneNode], horizontal: bool) -> Optional[AutoLayoutHint]:
    if horizontal:
        pos = [c.x for c in children]
        size = [c.width for c in children]
        cross_pos = [c.y for c in children]
        cross_size = [c.height for c in children]
        extent, cross_extent = node.width, node.height
    else:
        pos = [c.y for c in children]
        size = [c.height for c in children]
        cross_pos = [c.x for c in children]
        cross_size = [c.width for c in children]
        extent, cross_extent = node.height, node.width

    gaps = [pos[i + 1] - (pos[i] + size[i]) for i in range(len(children) - 1)]
    if any(gap < -TOLERANCE for gap in gaps) or _spread(gaps) > TOLERANCE:
        return None

    align = _counter_align(cross_pos, cross_size)
    if align is None:
        return None

    leading = pos[0]
    trailing = extent - (pos[-1] + size[-1])
    cross_leading = min(cross_pos)
    cross_trailing = cross_extent - max(p + s for p, s in zip(cross_pos, cross_size))
    if min(leading, trailing, cross_leading, cross_trailing) < -TOLERANCE:
        return None

    if horizontal:
        padding = Padding(top=cross_leading, right=trailing, bottom=cross_trailing, left=leading)
    else:
        padding = Padding(top=leading, right=cross_trailing, bottom=trailing, left=cross_leading)
    return AutoLayoutHint(
        layout_mode="HORIZONTAL" if horizontal else "VERTICAL",
        item_spacing=round(max(0.0, sum(gaps) / len(gaps))),
        padding=padding,
        primary_axis_align="MIN",
        counter_axis_align=align,
    )


def infer_auto_layout(node: SceneNode) -> Optional[AutoLayoutHint]:
    """Flow arrangement that reproduces the children's geometry, or None."""
    if node.kind != NodeKind.FRAME or node.layout_mode != "NONE":
        return None
    children = [child for child in node.children if child.visible]
    if len(children) < 2 or any(child.rotation for child in children):
        return None
    return _infer_axis(node, children, True) or _infer_axis(node, children, False)
