"""
Design-to-code generation for Figma scene graphs.

Targets: HTML (inline CSS or JSX), Tailwind, Flutter and SwiftUI.
"""

from codegen.context import Framework, GenerationContext, GenerationSettings
from codegen.figma_json import convert_node, convert_nodes_response
from codegen.layout import Absolute, ExplicitFlow, resolve_layout
from codegen.nodes import NodeKind, SceneNode
from codegen.palette import (
    LinearGradientConversion, SolidColorConversion, retrieve_linear_gradients,
    retrieve_solid_colors, selection_paints,
)
from codegen.postprocess import add_class_prefix
from codegen.walker import generate, generate_code

__version__ = "0.1.0"

__all__ = [
    "Absolute",
    "ExplicitFlow",
    "Framework",
    "GenerationContext",
    "GenerationSettings",
    "LinearGradientConversion",
    "NodeKind",
    "SceneNode",
    "SolidColorConversion",
    "add_class_prefix",
    "convert_node",
    "convert_nodes_response",
    "generate",
    "generate_code",
    "resolve_layout",
    "retrieve_linear_gradients",
    "retrieve_solid_colors",
    "selection_paints",
]
