"""
Scene graph model - the read-only input of the code generator.

Nodes mirror the subset of the Figma document model the generator needs.
Paint lists are ordered topmost-first (index 0 is drawn on top).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class NodeKind(str, Enum):
    """Closed set of node kinds the tree walker dispatches on."""
    FRAME = "FRAME"
    GROUP = "GROUP"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    TEXT = "TEXT"
    LINE = "LINE"
    VECTOR = "VECTOR"
    OTHER = "OTHER"


# ---------------------------------------------------------------------------
# Colors and paints
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ColorValue:
    """RGB(A) color with channels in [0, 1]."""
    r: float
    g: float
    b: float
    a: float = 1.0

    @property
    def hex(self) -> str:
        r, g, b = (round(c * 255) for c in (self.r, self.g, self.b))
        if self.a < 1:
            return f"#{r:02x}{g:02x}{b:02x}{round(self.a * 255):02x}"
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def rgba(self) -> str:
        r, g, b = (round(c * 255) for c in (self.r, self.g, self.b))
        return f"rgba({r}, {g}, {b}, {self.a:.2f})"


# [[a, c, tx], [b, d, ty]]
Transform = Tuple[Tuple[float, float, float], Tuple[float, float, float]]

IDENTITY_TRANSFORM: Transform = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0))


@dataclass(frozen=True)
class SolidPaint:
    color: ColorValue
    opacity: float = 1.0
    visible: bool = True
    type: str = "SOLID"


@dataclass(frozen=True)
class GradientStop:
    color: ColorValue
    position: float


@dataclass(frozen=True)
class GradientPaint:
    """Gradient fill. ``kind`` is LINEAR, RADIAL, ANGULAR or DIAMOND."""
    kind: str
    stops: Tuple[GradientStop, ...]
    transform: Transform = IDENTITY_TRANSFORM
    opacity: float = 1.0
    visible: bool = True

    @property
    def type(self) -> str:
        return f"GRADIENT_{self.kind}"


@dataclass(frozen=True)
class ImagePaint:
    image_ref: str = ""
    scale_mode: str = "FILL"
    opacity: float = 1.0
    visible: bool = True
    type: str = "IMAGE"


Paint = Union[SolidPaint, GradientPaint, ImagePaint]


# ---------------------------------------------------------------------------
# Geometry, effects, layout
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CornerRadii:
    top_left: float = 0
    top_right: float = 0
    bottom_right: float = 0
    bottom_left: float = 0

    @property
    def is_uniform(self) -> bool:
        return self.top_left == self.top_right == self.bottom_right == self.bottom_left

    @property
    def is_zero(self) -> bool:
        return self.is_uniform and self.top_left == 0


@dataclass(frozen=True)
class Effect:
    """DROP_SHADOW, INNER_SHADOW, LAYER_BLUR or BACKGROUND_BLUR."""
    type: str
    radius: float = 0
    color: ColorValue = ColorValue(0, 0, 0, 0.25)
    offset_x: float = 0
    offset_y: float = 0
    spread: float = 0
    visible: bool = True


@dataclass(frozen=True)
class Padding:
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0

    @property
    def is_zero(self) -> bool:
        return not (self.top or self.right or self.bottom or self.left)


@dataclass(frozen=True)
class AutoLayoutHint:
    """Flow arrangement, either declared on a frame or inferred by the host."""
    layout_mode: str
    item_spacing: float = 0
    padding: Padding = Padding()
    primary_axis_align: str = "MIN"
    counter_axis_align: str = "MIN"


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TextSegment:
    """A maximal run of characters sharing one typographic style."""
    characters: str
    font_family: str = "Inter"
    font_style: str = "Regular"
    font_weight: int = 400
    font_size: float = 14
    fills: Tuple[Paint, ...] = ()
    line_height_px: Optional[float] = None
    letter_spacing: float = 0
    text_decoration: str = "NONE"
    text_case: str = "ORIGINAL"

    @property
    def italic(self) -> bool:
        return "italic" in self.font_style.lower()


# ---------------------------------------------------------------------------
# Scene node
# ---------------------------------------------------------------------------

@dataclass
class SceneNode:
    kind: NodeKind
    name: str = ""
    id: str = ""
    visible: bool = True
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    rotation: float = 0
    opacity: float = 1.0
    blend_mode: str = "PASS_THROUGH"
    fills: List[Paint] = field(default_factory=list)
    strokes: List[Paint] = field(default_factory=list)
    stroke_weight: float = 0
    stroke_align: str = "INSIDE"
    dashes: Tuple[float, ...] = ()
    corner_radii: CornerRadii = CornerRadii()
    effects: List[Effect] = field(default_factory=list)
    clips_content: bool = False
    # auto layout (containers)
    layout_mode: str = "NONE"
    item_spacing: float = 0
    padding: Padding = Padding()
    primary_axis_align: str = "MIN"
    counter_axis_align: str = "MIN"
    inferred_auto_layout: Optional[AutoLayoutHint] = None
    # participation in a parent's flow
    layout_grow: float = 0
    layout_align: str = "INHERIT"
    layout_sizing_horizontal: str = "FIXED"
    layout_sizing_vertical: str = "FIXED"
    # text
    characters: str = ""
    text_align_horizontal: str = "LEFT"
    text_auto_resize: str = "NONE"
    segments: List[TextSegment] = field(default_factory=list)
    children: List["SceneNode"] = field(default_factory=list)

    @property
    def own_layout(self) -> Optional[AutoLayoutHint]:
        """Declared auto layout, or None when the frame is freeform."""
        if self.layout_mode == "NONE":
            return None
        return AutoLayoutHint(
            layout_mode=self.layout_mode,
            item_spacing=self.item_spacing,
            padding=self.padding,
            primary_axis_align=self.primary_axis_align,
            counter_axis_align=self.counter_axis_align,
        )
