"""
Style builder - per-node accumulator of serialized style properties.

Every step adds the properties of one concern and returns the builder, so any
subset of steps can be chained in any order:

    StyleBuilder(node, context, parent_layout)
        .common_position_styles()
        .common_shape_styles()
        .build()

Properties are kept in insertion order; re-adding a key overwrites it.
"""

from typing import Mapping, Optional

from codegen.context import GenerationContext
from codegen.emitters.base import Emitter, StyleDescriptor
from codegen.layout import LayoutDecision, node_position, node_size
from codegen.nodes import SceneNode, TextSegment


class StyleBuilder:
    def __init__(
        self,
        node: SceneNode,
        context: GenerationContext,
        parent_layout: Optional[LayoutDecision] = None,
        emitter: Optional[Emitter] = None,
    ):
        self.node = node
        self.context = context
        self.parent_layout = parent_layout
        self.emitter = emitter or context.emitter
        self.styles: StyleDescriptor = {}

    @property
    def layer_name(self) -> str:
        return self.node.name if self.context.show_layer_name else ""

    def add_styles(self, styles: Optional[Mapping[str, str]]) -> "StyleBuilder":
        if styles:
            self.styles.update(styles)
        return self

    # -- position -------------------------------------------------------------

    def size_styles(self) -> "StyleBuilder":
        width, height = node_size(self.node, self.parent_layout)
        return self.add_styles(
            self.emitter.size_styles(self.node, width, height, self.parent_layout)
        )

    def position_styles(self) -> "StyleBuilder":
        # coordinates only exist inside an absolutely positioned parent
        position = node_position(self.node, self.parent_layout)
        if position is None:
            return self
        return self.add_styles(self.emitter.position_styles(*position))

    def blend_styles(self) -> "StyleBuilder":
        return self.add_styles(self.emitter.blend_styles(self.node))

    def common_position_styles(self) -> "StyleBuilder":
        return self.size_styles().position_styles().blend_styles()

    # -- shape ----------------------------------------------------------------

    def common_shape_styles(self) -> "StyleBuilder":
        return self.add_styles(self.emitter.shape_styles(self.node))

    def line_styles(self) -> "StyleBuilder":
        return self.add_styles(self.emitter.line_styles(self.node))

    # -- text -----------------------------------------------------------------

    def text_styles(self, segment: TextSegment) -> "StyleBuilder":
        return self.add_styles(self.emitter.text_styles(segment))

    def text_align(self) -> "StyleBuilder":
        return self.add_styles(self.emitter.text_align_styles(self.node))

    # -- output ---------------------------------------------------------------

    def build(self, extra: Optional[Mapping[str, str]] = None) -> str:
        """Serialize the collected properties (plus ``extra``) as attributes.

        Returns an empty string when there is nothing to serialize.
        """
        styles = dict(self.styles)
        if extra:
            styles.update(extra)
        if not styles and not self.layer_name:
            return ""
        return self.emitter.serialize_attributes(styles, self.layer_name, self.context)
