#!/usr/bin/env python3
"""
Figma Codegen MCP Server - design-to-code generation over the Figma REST API.

Tools:
- figma_generate_code: HTML, Tailwind, Flutter or SwiftUI code for a node
- figma_get_colors: colors and linear gradients of a selection, with their
  literal in the target framework
"""

import json
import os
import re
from dataclasses import asdict
from typing import Any, Dict, List, Literal, Optional

import httpx
from mcp.server.fastmcp import FastMCP
from pydantic import BaseModel, ConfigDict, Field, field_validator

from codegen import (
    Framework, GenerationSettings, SceneNode, convert_node, convert_nodes_response,
    generate_code, retrieve_linear_gradients, retrieve_solid_colors, selection_paints,
)
from codegen.log import get_logger, setup_logging

# ============================================================================
# Constants
# ============================================================================

FIGMA_API_BASE = "https://api.figma.com/v1"
DEFAULT_TIMEOUT = 30.0

CODE_FENCES = {
    Framework.HTML: "html",
    Framework.TAILWIND: "html",
    Framework.FLUTTER: "dart",
    Framework.SWIFTUI: "swift",
}

logger = get_logger("figma-codegen.server")

# ============================================================================
# Initialize MCP Server
# ============================================================================

mcp = FastMCP("figma_codegen_mcp")

# ============================================================================
# Pydantic Input Models
# ============================================================================


def _extract_file_key(v: str) -> str:
    if 'figma.com' in v:
        match = re.search(r'figma\.com/(?:design|file)/([a-zA-Z0-9]+)', v)
        if match:
            return match.group(1)
    return v


class FigmaCodeGenInput(BaseModel):
    """Input model for code generation."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    file_key: str = Field(..., description="Figma file key or URL", min_length=10)
    node_ids: List[str] = Field(
        ...,
        description="Node IDs to convert, rendered as top-level siblings (e.g. ['1:2'] or ['1-2'])",
        min_length=1,
    )
    framework: Framework = Field(default=Framework.HTML, description="Target framework")
    component_name: Optional[str] = Field(
        default=None,
        description="Component name (derived from the first node name if not provided)"
    )
    jsx: bool = Field(default=False, description="HTML/Tailwind: JSX attribute syntax")
    optimize_layout: bool = Field(default=True, description="Use inferred auto layout for freeform frames")
    show_layer_name: bool = Field(default=False, description="Carry layer names into the output")
    custom_tailwind_prefix: Optional[str] = Field(default=None, description="Prefix for every Tailwind class")
    round_tailwind_values: bool = Field(default=True, description="Snap values to the Tailwind scale")
    round_tailwind_colors: bool = Field(default=True, description="Use the nearest Tailwind palette color")
    flutter_generation_mode: Literal["snippet", "stateless", "full_app"] = "snippet"
    swiftui_generation_mode: Literal["snippet", "struct", "preview"] = "snippet"

    @field_validator('file_key')
    @classmethod
    def validate_file_key(cls, v: str) -> str:
        return _extract_file_key(v)

    @field_validator('node_ids')
    @classmethod
    def normalize_node_ids(cls, v: List[str]) -> List[str]:
        return [node_id.strip().replace('-', ':') for node_id in v]

    def settings(self) -> GenerationSettings:
        return GenerationSettings(
            framework=self.framework,
            jsx=self.jsx,
            optimize_layout=self.optimize_layout,
            show_layer_name=self.show_layer_name,
            custom_tailwind_prefix=self.custom_tailwind_prefix,
            round_tailwind_values=self.round_tailwind_values,
            round_tailwind_colors=self.round_tailwind_colors,
            flutter_generation_mode=self.flutter_generation_mode,
            swiftui_generation_mode=self.swiftui_generation_mode,
        )


class FigmaColorsInput(BaseModel):
    """Input model for selection color extraction."""
    model_config = ConfigDict(str_strip_whitespace=True, validate_assignment=True)

    file_key: str = Field(..., description="Figma file key or URL", min_length=10)
    node_id: Optional[str] = Field(
        default=None,
        description="Optional node ID; the whole file is scanned when omitted"
    )
    framework: Framework = Field(default=Framework.HTML, description="Framework of the exported values")

    @field_validator('file_key')
    @classmethod
    def validate_file_key(cls, v: str) -> str:
        return _extract_file_key(v)

    @field_validator('node_id')
    @classmethod
    def normalize_node_id(cls, v: Optional[str]) -> Optional[str]:
        return v.replace('-', ':') if v else None


# ============================================================================
# Shared Utilities
# ============================================================================

def _get_figma_token() -> str:
    """Get Figma API token from environment."""
    token = os.environ.get("FIGMA_ACCESS_TOKEN") or os.environ.get("FIGMA_TOKEN")
    if not token:
        raise ValueError(
            "Figma API token not found. Set FIGMA_ACCESS_TOKEN or FIGMA_TOKEN environment variable. "
            "Get your token from: https://www.figma.com/developers/api#access-tokens"
        )
    return token


async def _make_figma_request(
    endpoint: str,
    method: str = "GET",
    params: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Make authenticated request to Figma API."""
    token = _get_figma_token()
    logger.info("%s %s", method, endpoint)

    async with httpx.AsyncClient() as client:
        response = await client.request(
            method=method,
            url=f"{FIGMA_API_BASE}/{endpoint}",
            headers={"X-Figma-Token": token},
            params=params,
            timeout=DEFAULT_TIMEOUT
        )
        response.raise_for_status()
        return response.json()


def _handle_api_error(e: Exception) -> str:
    """Format API errors for user-friendly messages."""
    logger.error("request failed: %s: %s", type(e).__name__, e)
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        if status == 401:
            return "Error: Invalid Figma API token. Check your FIGMA_ACCESS_TOKEN environment variable."
        elif status == 403:
            return "Error: Access denied. You don't have permission to view this file."
        elif status == 404:
            return "Error: File or node not found. Check the file key and node ID."
        elif status == 429:
            return "Error: Rate limit exceeded. Please wait before making more requests."
        return f"Error: Figma API returned status {status}"
    elif isinstance(e, httpx.TimeoutException):
        return "Error: Request timed out. The file might be too large."
    elif isinstance(e, ValueError):
        return f"Error: {str(e)}"
    return f"Error: {type(e).__name__}: {str(e)}"


async def _fetch_scene_nodes(file_key: str, node_ids: List[str]) -> List[SceneNode]:
    data = await _make_figma_request(
        f"files/{file_key}/nodes",
        params={"ids": ",".join(node_ids)},
    )
    return convert_nodes_response(data)


# ============================================================================
# Tool Implementations
# ============================================================================

@mcp.tool(
    name="figma_generate_code",
    annotations={
        "title": "Generate Code from Figma",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def figma_generate_code(params: FigmaCodeGenInput) -> str:
    """
    Generate code for one or more Figma nodes, children included.

    Supported frameworks:
    - html: HTML with inline styles (or JSX style objects)
    - tailwind: HTML with Tailwind utility classes (or JSX className)
    - flutter: Flutter widget tree (snippet, StatelessWidget or full app)
    - swiftui: SwiftUI view (snippet, struct or struct + #Preview)

    Args:
        params: FigmaCodeGenInput containing:
            - file_key (str): Figma file key or URL
            - node_ids (List[str]): Nodes to convert
            - framework: Target framework
            - component_name (Optional[str]): Custom component name
            - generation settings (jsx, optimize_layout, show_layer_name, ...)

    Returns:
        str: Markdown with the generated code
    """
    try:
        settings = params.settings()
        nodes = await _fetch_scene_nodes(params.file_key, params.node_ids)
        if not nodes:
            return f"Error: Node '{', '.join(params.node_ids)}' not found."

        code = generate_code(nodes, settings, component_name=params.component_name)
        component_name = params.component_name or nodes[0].name

        lines = [
            f"# Generated Code: {component_name}",
            f"**Framework:** {params.framework.value}",
            f"**Source Nodes:** {', '.join(f'`{node_id}`' for node_id in params.node_ids)}",
            "",
            "```" + ("tsx" if params.jsx and params.framework in (Framework.HTML, Framework.TAILWIND)
                     else CODE_FENCES[params.framework]),
            code,
            "```"
        ]
        return "\n".join(lines)

    except Exception as e:
        return _handle_api_error(e)


@mcp.tool(
    name="figma_get_colors",
    annotations={
        "title": "Extract Selection Colors from Figma",
        "readOnlyHint": True,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": True
    }
)
async def figma_get_colors(params: FigmaColorsInput) -> str:
    """
    Extract the solid colors and linear gradients of a Figma node or file.

    Solid colors are deduplicated by their exported value and sorted by hex;
    each carries its contrast ratio against black and white. Gradients are
    listed in document order with a CSS preview.

    Args:
        params: FigmaColorsInput containing:
            - file_key (str): Figma file key or URL
            - node_id (Optional[str]): Specific node to analyze
            - framework: Framework of the exported values

    Returns:
        str: JSON with "solid" and "gradients" lists
    """
    try:
        if params.node_id:
            nodes = await _fetch_scene_nodes(params.file_key, [params.node_id])
            if not nodes:
                return f"Error: Node '{params.node_id}' not found."
        else:
            data = await _make_figma_request(f"files/{params.file_key}")
            document = data.get('document', {})
            nodes = [convert_node(page) for page in document.get('children', [])]

        paints = selection_paints(nodes)
        result = {
            "framework": params.framework.value,
            "solid": [asdict(color) for color in retrieve_solid_colors(paints, params.framework)],
            "gradients": [asdict(gradient) for gradient in retrieve_linear_gradients(paints, params.framework)],
        }
        return json.dumps(result, indent=2)

    except Exception as e:
        return _handle_api_error(e)


# ============================================================================
# Entry Point
# ============================================================================

def main() -> None:
    setup_logging()
    mcp.run()


if __name__ == "__main__":
    main()
