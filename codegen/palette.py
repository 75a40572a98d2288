"""
Selection palette - the colors and gradients used by a selection, each with
its literal in the target framework.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from codegen.context import Framework, GenerationSettings
from codegen.emitters import get_emitter
from codegen.emitters.html import HtmlEmitter
from codegen.extractors import calculate_contrast_ratio, linear_gradient, rgb_to_hex
from codegen.nodes import ColorValue, GradientPaint, Paint, SceneNode, SolidPaint

BLACK = ColorValue(0, 0, 0)
WHITE = ColorValue(1, 1, 1)


@dataclass(frozen=True)
class SolidColorConversion:
    hex: str
    color_name: str
    export_value: str
    contrast_black: float
    contrast_white: float


@dataclass(frozen=True)
class LinearGradientConversion:
    css_preview: str
    export_value: str


def retrieve_solid_colors(paints: Iterable[Paint], framework: Framework,
                          settings: Optional[GenerationSettings] = None) -> List[SolidColorConversion]:
    """Solid paints converted for ``framework``.

    Paints with the same export value are reported once (the first one wins);
    the result is sorted by hex.
    """
    emitter = get_emitter(framework, settings)
    colors: List[SolidColorConversion] = []
    seen = set()
    for paint in paints:
        if not isinstance(paint, SolidPaint):
            continue
        export_value = emitter.color(paint.color, paint.opacity)
        if export_value in seen:
            continue
        seen.add(export_value)
        colors.append(SolidColorConversion(
            hex=rgb_to_hex(paint.color).upper(),
            color_name=emitter.color_name(paint.color, paint.opacity),
            export_value=export_value,
            contrast_black=calculate_contrast_ratio(paint.color, BLACK),
            contrast_white=calculate_contrast_ratio(paint.color, WHITE),
        ))
    return sorted(colors, key=lambda color: color.hex)


def retrieve_linear_gradients(paints: Iterable[Paint], framework: Framework,
                              settings: Optional[GenerationSettings] = None) -> List[LinearGradientConversion]:
    """Linear gradients in encounter order, with a CSS preview of each."""
    emitter = get_emitter(framework, settings)
    preview = HtmlEmitter()
    gradients = []
    for paint in paints:
        if not isinstance(paint, GradientPaint):
            continue
        gradient = linear_gradient(paint)
        if gradient is None:
            continue
        gradients.append(LinearGradientConversion(
            css_preview=preview.gradient(gradient),
            export_value=emitter.gradient(gradient),
        ))
    return gradients


def selection_paints(nodes: Iterable[SceneNode]) -> List[Paint]:
    """Visible fills and strokes of ``nodes`` and all their descendants,
    text run fills included, in document order."""
    paints: List[Paint] = []
    for node in nodes:
        if not node.visible:
            continue
        paints.extend(paint for paint in node.fills if paint.visible)
        paints.extend(paint for paint in node.strokes if paint.visible)
        for segment in node.segments:
            paints.extend(paint for paint in segment.fills if paint.visible)
        paints.extend(selection_paints(node.children))
    return paints
