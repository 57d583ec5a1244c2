"""Agent tool definitions for conversational integrations."""

from deckinsight.mcp.tools import (
    TOOL_ARGUMENTS,
    TOOL_DEFINITIONS,
    TOOL_HANDLERS,
    ToolContext,
    ToolDefinition,
    ToolName,
    execute_tool,
)

__all__ = [
    "TOOL_ARGUMENTS",
    "TOOL_DEFINITIONS",
    "TOOL_HANDLERS",
    "ToolContext",
    "ToolDefinition",
    "ToolName",
    "execute_tool",
]
