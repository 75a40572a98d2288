"""Logging helpers. Output goes to stderr; stdout belongs to the MCP transport."""

import logging
import os
import sys
from typing import Optional

__all__ = ["get_logger", "setup_logging"]

LOG_LEVEL_ENV = "FIGMA_CODEGEN_LOG_LEVEL"


def setup_logging(level: Optional[int] = None, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level. Defaults to $FIGMA_CODEGEN_LOG_LEVEL, then INFO.
        stream: Output stream.
    """
    if level is None:
        name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
        level = getattr(logging, name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "figma-codegen")
