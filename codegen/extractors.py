"""
Style/geometry extractors.

Pure functions that read a node's paints, strokes, radii and effects and turn
them into framework-neutral descriptors. Emitters translate the descriptors into
their own syntax.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from codegen.nodes import (
    ColorValue, CornerRadii, Effect, GradientPaint, GradientStop, Paint,
    SceneNode, Transform,
)

Point = Tuple[float, float]


# ---------------------------------------------------------------------------
# Paints
# ---------------------------------------------------------------------------

def retrieve_top_fill(paints: Sequence[Paint]) -> Optional[Paint]:
    """Return the topmost paint, or None when it is missing or hidden.

    Paint lists are ordered topmost-first, so only the first entry is
    considered; a hidden top paint means nothing is drawn on top.
    """
    if not paints:
        return None
    top = paints[0]
    if not top.visible:
        return None
    return top


def rgb_to_hex(color: ColorValue) -> str:
    """Six-digit lowercase hex, without the leading '#'."""
    r, g, b = (round(c * 255) for c in (color.r, color.g, color.b))
    return f"{r:02x}{g:02x}{b:02x}"


# ---------------------------------------------------------------------------
# Gradients
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LinearGradient:
    stops: Tuple[GradientStop, ...]
    start: Point
    end: Point
    opacity: float = 1.0

    @property
    def angle(self) -> float:
        """CSS angle in degrees (0deg points up, clockwise)."""
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        angle = math.degrees(math.atan2(dy, dx)) + 90
        return round(angle % 360, 2)


def gradient_endpoints(transform: Transform) -> Tuple[Point, Point]:
    """Start and end handle of a gradient in normalized node space.

    start = translation column, end = translation + first column.
    """
    (a, _c, e), (b, _d, f) = transform
    return (e, f), (a + e, b + f)


def linear_gradient(paint: Paint) -> Optional[LinearGradient]:
    """Linear gradient descriptor, or None for any other paint kind."""
    if not isinstance(paint, GradientPaint) or paint.kind != "LINEAR":
        return None
    if not paint.stops:
        return None
    start, end = gradient_endpoints(paint.transform)
    return LinearGradient(stops=paint.stops, start=start, end=end, opacity=paint.opacity)


# ---------------------------------------------------------------------------
# Strokes, radii, effects
# ---------------------------------------------------------------------------

def top_stroke(node: SceneNode) -> Optional[Paint]:
    """Topmost visible stroke paint when the node has a stroke weight."""
    if node.stroke_weight <= 0:
        return None
    return retrieve_top_fill(node.strokes)


def border_radius(node: SceneNode) -> Optional[CornerRadii]:
    """Corner radii, or None when every corner is square.

    Radii larger than half the shortest side are clamped, which is how design
    tools render them.
    """
    radii = node.corner_radii
    if radii.is_zero:
        return None
    limit = min(node.width, node.height) / 2
    if limit <= 0:
        return radii
    return CornerRadii(
        top_left=min(radii.top_left, limit),
        top_right=min(radii.top_right, limit),
        bottom_right=min(radii.bottom_right, limit),
        bottom_left=min(radii.bottom_left, limit),
    )


def box_shadows(node: SceneNode) -> List[Effect]:
    """Visible drop and inner shadows, in declaration order."""
    return [
        effect for effect in node.effects
        if effect.visible and effect.type in ("DROP_SHADOW", "INNER_SHADOW")
    ]


def layer_blur(node: SceneNode) -> Optional[float]:
    for effect in node.effects:
        if effect.visible and effect.type == "LAYER_BLUR" and effect.radius > 0:
            return effect.radius
    return None


def background_blur(node: SceneNode) -> Optional[float]:
    for effect in node.effects:
        if effect.visible and effect.type == "BACKGROUND_BLUR" and effect.radius > 0:
            return effect.radius
    return None


# ---------------------------------------------------------------------------
# Contrast
# ---------------------------------------------------------------------------

def _linearize(channel: float) -> float:
    if channel <= 0.03928:
        return channel / 12.92
    return ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(color: ColorValue) -> float:
    return (
        0.2126 * _linearize(color.r)
        + 0.7152 * _linearize(color.g)
        + 0.0722 * _linearize(color.b)
    )


def calculate_contrast_ratio(color1: ColorValue, color2: ColorValue) -> float:
    """WCAG contrast ratio between two colors, always >= 1.0."""
    l1 = relative_luminance(color1)
    l2 = relative_luminance(color2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


# ---------------------------------------------------------------------------
# Small numeric helpers shared by the emitters
# ---------------------------------------------------------------------------

def format_number(value: float, digits: int = 2) -> str:
    """Round and drop a trailing '.0' so 12.0 prints as 12."""
    rounded = round(value, digits)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{digits}f}".rstrip('0').rstrip('.')
