"""
MCP integration layer for the YouTube MCP Server.
Tool registry, dispatcher and the stdio server binding.
"""

from .tool_registry import (
    MCPToolRegistry,
    ToolArgumentError,
    ToolDefinition,
    UnknownToolError,
    create_mcp_tool_registry,
)
from .dispatcher import ToolCallResponse, ToolDispatcher, create_tool_dispatcher

__all__ = [
    # Tool Registry
    'MCPToolRegistry',
    'ToolArgumentError',
    'ToolDefinition',
    'UnknownToolError',
    'create_mcp_tool_registry',

    # Dispatcher
    'ToolCallResponse',
    'ToolDispatcher',
    'create_tool_dispatcher',
]
