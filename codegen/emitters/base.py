"""
Emitter interface shared by every target framework.

An emitter translates framework-neutral descriptors (colors, gradients, layout
decisions) into one language's literal syntax, and knows how that language
nests elements. The tree walker and the style builder only talk to this
interface.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from codegen.context import Framework, GenerationContext, GenerationSettings
from codegen.extractors import LinearGradient
from codegen.layout import Dimension, ExplicitFlow, LayoutDecision
from codegen.nodes import ColorValue, SceneNode, TextSegment

if TYPE_CHECKING:
    from codegen.builder import StyleBuilder

StyleDescriptor = Dict[str, str]

# (text, styles) for each span of a multi-run text node
TextSpans = List[Tuple[str, StyleDescriptor]]

PLACEHOLDER_IMAGE_URL = "https://placehold.co/{width}x{height}"


def indent_string(text: str, spaces: int = 2) -> str:
    """Indent every line break of ``text`` by ``spaces``."""
    return text.replace("\n", "\n" + " " * spaces)


def placeholder_url(node: SceneNode) -> str:
    return PLACEHOLDER_IMAGE_URL.format(width=round(node.width), height=round(node.height))


class Emitter(ABC):
    """One target language."""

    framework: Framework

    def __init__(self, settings: Optional[GenerationSettings] = None):
        self.settings = settings or GenerationSettings(framework=self.framework)

    # -- values ---------------------------------------------------------------

    @abstractmethod
    def color(self, color: ColorValue, opacity: float = 1.0) -> str:
        """Literal for a solid color; ``opacity`` multiplies the color alpha."""

    @abstractmethod
    def gradient(self, gradient: LinearGradient) -> str:
        """Literal for a linear gradient."""

    def color_name(self, color: ColorValue, opacity: float = 1.0) -> str:
        """Human readable name of a color, when the language has one."""
        return ""

    # -- style concerns -------------------------------------------------------

    @abstractmethod
    def size_styles(self, node: SceneNode, width: Dimension, height: Dimension,
                    parent: Optional[LayoutDecision]) -> StyleDescriptor:
        ...

    @abstractmethod
    def position_styles(self, x: float, y: float) -> StyleDescriptor:
        ...

    @abstractmethod
    def blend_styles(self, node: SceneNode) -> StyleDescriptor:
        """Opacity, rotation and blend mode."""

    @abstractmethod
    def shape_styles(self, node: SceneNode) -> StyleDescriptor:
        """Background, border, corner radius, shadows and blur."""

    @abstractmethod
    def line_styles(self, node: SceneNode) -> StyleDescriptor:
        ...

    @abstractmethod
    def text_styles(self, segment: TextSegment) -> StyleDescriptor:
        ...

    @abstractmethod
    def text_align_styles(self, node: SceneNode) -> StyleDescriptor:
        ...

    @abstractmethod
    def flow_styles(self, flow: ExplicitFlow) -> StyleDescriptor:
        """Properties a container needs to lay its children out as a flow."""

    def relative_styles(self) -> StyleDescriptor:
        """Properties a container needs to host absolutely positioned children."""
        return {}

    @abstractmethod
    def serialize_attributes(self, styles: StyleDescriptor, layer_name: str,
                             context: GenerationContext) -> str:
        ...

    # -- structure ------------------------------------------------------------

    @abstractmethod
    def text_content(self, segment: TextSegment) -> str:
        """Characters of a run, escaped for the language."""

    @abstractmethod
    def container(self, builder: "StyleBuilder", children: str,
                  extra: Optional[StyleDescriptor] = None,
                  layout: Optional[LayoutDecision] = None) -> str:
        ...

    @abstractmethod
    def text(self, builder: "StyleBuilder", content: Optional[str],
             spans: Optional[TextSpans] = None) -> str:
        """Text element: ``content`` for a single run, ``spans`` otherwise."""

    @abstractmethod
    def line(self, builder: "StyleBuilder") -> str:
        ...

    @abstractmethod
    def image(self, builder: "StyleBuilder") -> str:
        ...

    def join_children(self, fragments: List[str]) -> str:
        return "".join(fragments)

    def wrap_output(self, code: str, context: GenerationContext, component_name: str) -> str:
        """Wrap a finished snippet according to the generation mode."""
        return code
