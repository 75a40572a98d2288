"""
Generation settings and the per-pass generation context.

Settings are validated with pydantic; the context is an immutable snapshot of
them that is threaded through every call of one generation pass.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from codegen.emitters.base import Emitter


class Framework(str, Enum):
    """Target language of a generation pass."""
    HTML = "html"
    TAILWIND = "tailwind"
    FLUTTER = "flutter"
    SWIFTUI = "swiftui"


class GenerationSettings(BaseModel):
    """User configuration for code generation."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    framework: Framework = Field(default=Framework.HTML, description="Target framework")
    jsx: bool = Field(default=False, description="Emit JSX attribute syntax (className, style={{}})")
    optimize_layout: bool = Field(
        default=True,
        description="Use the inferred auto layout of freeform frames when available"
    )
    show_layer_name: bool = Field(default=False, description="Carry layer names into the output")
    custom_tailwind_prefix: Optional[str] = Field(
        default=None,
        description="Prefix added to every Tailwind class (e.g. 'tw-')"
    )
    round_tailwind_values: bool = Field(
        default=True,
        description="Snap pixel values to the Tailwind spacing scale when close"
    )
    round_tailwind_colors: bool = Field(
        default=True,
        description="Map colors to the nearest Tailwind palette color instead of arbitrary hex values"
    )
    flutter_generation_mode: Literal["snippet", "stateless", "full_app"] = "snippet"
    swiftui_generation_mode: Literal["snippet", "struct", "preview"] = "snippet"

    @field_validator('custom_tailwind_prefix')
    @classmethod
    def validate_prefix(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if any(ch.isspace() or ch in '"\'' for ch in v):
            raise ValueError("Tailwind prefix must not contain whitespace or quotes")
        return v or None


@dataclass(frozen=True)
class GenerationContext:
    """State of one generation pass. Created per call, never mutated."""
    settings: GenerationSettings
    preview: bool = False

    @cached_property
    def emitter(self) -> "Emitter":
        """Emitter of the target framework, created once per pass."""
        from codegen.emitters import get_emitter
        return get_emitter(self.framework, self.settings)

    @property
    def framework(self) -> Framework:
        return self.settings.framework

    @property
    def jsx(self) -> bool:
        # preview output is rendered as-is, so it is always plain markup
        return self.settings.jsx and not self.preview

    @property
    def optimize_layout(self) -> bool:
        return self.settings.optimize_layout

    @property
    def show_layer_name(self) -> bool:
        return self.settings.show_layer_name
