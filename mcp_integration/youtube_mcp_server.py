#!/usr/bin/env python3
"""
YouTube MCP Server

A Model Context Protocol server that provides access to YouTube data via the YouTube Data API v3.
Exposes video, search, transcript, playlist, channel and comment tools named
{service}_{operation}, with responses reduced to the fields an agent needs.
"""

import asyncio
import logging
import sys
from typing import List

import mcp.server.stdio
from mcp import types as mcp_types
from mcp.server.lowlevel import NotificationOptions, Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions

from config.logging_config import setup_logging
from config.settings import ConfigurationError, Settings, get_settings
from services import create_services
from .dispatcher import ToolDispatcher, create_tool_dispatcher
from .tool_registry import MCPToolRegistry, create_mcp_tool_registry

logger = logging.getLogger(__name__)

SERVER_VERSION = "0.1.0"
SERVER_INFO_URI = "youtube://server/info"


class ToolCallFailed(Exception):
    """Raised from the call_tool handler so the SDK marks the result as an error."""
    pass


class YouTubeMCPServer:
    """
    Binds the tool registry and dispatcher to an MCP low-level server.
    """

    def __init__(self, settings: Settings, registry: MCPToolRegistry, dispatcher: ToolDispatcher):
        self.settings = settings
        self.registry = registry
        self.dispatcher = dispatcher
        self.app = Server(settings.server_name)
        self._register_handlers()

    def _register_handlers(self) -> None:
        self.app.list_tools()(self.list_tools)
        self.app.call_tool()(self.call_tool)
        self.app.list_resources()(self.list_resources)
        self.app.read_resource()(self.read_resource)

    async def list_tools(self) -> List[mcp_types.Tool]:
        """MCP handler to list tools this server exposes."""
        logger.info("Received list_tools request")
        return [
            mcp_types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in self.registry.list_tools()
        ]

    async def call_tool(self, name: str, arguments: dict) -> List[mcp_types.TextContent]:
        """MCP handler to execute a tool call requested by an MCP client."""
        response = await self.dispatcher.dispatch(name, arguments)
        if response.is_error:
            raise ToolCallFailed(response.message)
        return [
            mcp_types.TextContent(type="text", text=item["text"])
            for item in response.content
        ]

    async def list_resources(self) -> List[mcp_types.Resource]:
        return [
            mcp_types.Resource(
                uri=SERVER_INFO_URI,
                name="server-info",
                description="Information about this YouTube MCP server",
                mimeType="text/plain",
            )
        ]

    async def read_resource(self, uri) -> List[ReadResourceContents]:
        if str(uri) != SERVER_INFO_URI:
            raise ValueError(f"Unknown resource: {uri}")
        return [ReadResourceContents(content=self.server_info(), mime_type="text/plain")]

    def server_info(self) -> str:
        """Get information about this YouTube MCP server."""
        tool_lines = "\n".join(
            f"- {definition.name}({', '.join(definition.input_schema['properties'])}): {definition.description}"
            for definition in self.registry.list_tools()
        )
        return f"""YouTube MCP Server

This server provides access to YouTube data via the YouTube Data API v3.
Responses are reduced to the fields an agent needs (comments, for example,
are returned as {{parentId, text}} pairs only).

Available Tools:
{tool_lines}

Supported URL formats:
- Videos: https://www.youtube.com/watch?v=VIDEO_ID, https://youtu.be/VIDEO_ID or an 11-character ID
- Playlists: https://www.youtube.com/playlist?list=PLAYLIST_ID or the ID
- Channels: https://www.youtube.com/channel/ID, https://www.youtube.com/@handle, @handle or the ID

Environment Requirements:
- YOUTUBE_API_KEY (or the 'youtube' key of credentials.yml)
"""

    async def run_stdio(self) -> None:
        """Runs the MCP server, listening for connections over standard input/output."""
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            logger.info("MCP Stdio Server: Starting handshake with client...")
            await self.app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=self.app.name,
                    server_version=SERVER_VERSION,
                    capabilities=self.app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )
            logger.info("MCP Stdio Server: Run loop finished or client disconnected.")


def create_youtube_mcp_server(settings: Settings) -> YouTubeMCPServer:
    """
    Factory function wiring services, registry and dispatcher into a server.

    Args:
        settings: Application settings

    Returns:
        Ready-to-run YouTubeMCPServer
    """
    services = create_services(settings)
    registry = create_mcp_tool_registry(services)
    dispatcher = create_tool_dispatcher(registry, validate=settings.validate_arguments)
    return YouTubeMCPServer(settings, registry, dispatcher)


def main() -> None:
    """Console entry point: validate configuration, then serve over stdio."""
    setup_logging("INFO")

    # A missing API key is fatal for the whole server, not a per-call error
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.critical("Cannot start YouTube MCP Server: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)
    server = create_youtube_mcp_server(settings)

    logger.info("Launching YouTube MCP Server via stdio with %d tools", len(server.registry))
    try:
        asyncio.run(server.run_stdio())
    except KeyboardInterrupt:
        logger.info("MCP Server (stdio) stopped by user.")


if __name__ == "__main__":
    main()
