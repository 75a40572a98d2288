"""
Per-framework emitters.

Adding a target means adding an Emitter subclass and registering it here.
"""

from typing import Dict, Optional, Type

from codegen.context import Framework, GenerationSettings
from codegen.emitters.base import Emitter
from codegen.emitters.flutter import FlutterEmitter
from codegen.emitters.html import HtmlEmitter
from codegen.emitters.swiftui import SwiftUIEmitter
from codegen.emitters.tailwind import TailwindEmitter

EMITTERS: Dict[Framework, Type[Emitter]] = {
    Framework.HTML: HtmlEmitter,
    Framework.TAILWIND: TailwindEmitter,
    Framework.FLUTTER: FlutterEmitter,
    Framework.SWIFTUI: SwiftUIEmitter,
}


def get_emitter(framework: Framework, settings: Optional[GenerationSettings] = None) -> Emitter:
    """New emitter for ``framework``, bound to ``settings``."""
    try:
        emitter_class = EMITTERS[Framework(framework)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported framework: {framework}") from None
    return emitter_class(settings)


__all__ = [
    "EMITTERS", "Emitter", "FlutterEmitter", "HtmlEmitter", "SwiftUIEmitter",
    "TailwindEmitter", "get_emitter",
]
