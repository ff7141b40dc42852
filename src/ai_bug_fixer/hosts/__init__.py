"""Concrete host environments for the analyze-error workflow."""

from .mcp import McpHost
from .terminal import TerminalHost

__all__ = [
    "McpHost",
    "TerminalHost",
]
