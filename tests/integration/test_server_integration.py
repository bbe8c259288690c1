"""
Integration tests for the YouTube MCP Server.
Drives the registered MCP request handlers with a mocked YouTube API client.
"""

import json
from unittest.mock import patch

import pytest
from mcp import types as mcp_types

from conftest import make_comment_thread, VALID_VIDEO_ID
from config.settings import ConfigurationError
from mcp_integration.dispatcher import create_tool_dispatcher
from mcp_integration.tool_registry import create_mcp_tool_registry
from mcp_integration.youtube_mcp_server import (
    SERVER_INFO_URI,
    ToolCallFailed,
    YouTubeMCPServer,
    create_youtube_mcp_server,
    main,
)


@pytest.fixture
def server(settings, service_bundle):
    """YouTubeMCPServer wired to mocked services."""
    registry = create_mcp_tool_registry(service_bundle)
    return YouTubeMCPServer(settings, registry, create_tool_dispatcher(registry))


class TestServerConstruction:
    """Test startup wiring."""

    def test_startup_does_not_touch_youtube(self, settings):
        with patch('services.youtube_client.build') as mock_build:
            server = create_youtube_mcp_server(settings)

        mock_build.assert_not_called()
        assert len(server.registry) == 10
        assert server.app.name == "youtube-mcp-server"

    def test_missing_api_key_exits(self):
        with patch('mcp_integration.youtube_mcp_server.setup_logging'), \
             patch('mcp_integration.youtube_mcp_server.get_settings',
                   side_effect=ConfigurationError("YOUTUBE_API_KEY environment variable is not set.")):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1


class TestToolHandlers:
    """Test the list_tools and call_tool handlers."""

    @pytest.mark.asyncio
    async def test_list_tools(self, server):
        tools = await server.list_tools()

        names = [tool.name for tool in tools]
        assert "comments_getVideoComments" in names
        assert "comments_getCommentReplies" in names
        assert all(isinstance(tool, mcp_types.Tool) for tool in tools)
        comment_tool = tools[names.index("comments_getVideoComments")]
        assert comment_tool.inputSchema["required"] == ["videoId"]

    @pytest.mark.asyncio
    async def test_call_tool_returns_text_content(self, server, mock_client):
        mock_client.execute.return_value = {
            "items": [make_comment_thread("t1", "First!")],
            "pageInfo": {"totalResults": 1, "resultsPerPage": 20},
        }

        content = await server.call_tool("comments_getVideoComments", {"videoId": VALID_VIDEO_ID})

        assert len(content) == 1
        assert content[0].type == "text"
        assert json.loads(content[0].text) == {
            "comments": [{"parentId": "t1", "text": "First!"}],
            "pageInfo": {"totalResults": 1, "resultsPerPage": 20},
        }

    @pytest.mark.asyncio
    async def test_call_tool_error_raises(self, server):
        with pytest.raises(ToolCallFailed, match="Unknown tool: nonexistent_tool"):
            await server.call_tool("nonexistent_tool", {})

    @pytest.mark.asyncio
    async def test_list_tools_request_handler(self, server):
        handler = server.app.request_handlers[mcp_types.ListToolsRequest]

        result = await handler(mcp_types.ListToolsRequest(method="tools/list"))

        assert len(result.root.tools) == 10

    @pytest.mark.asyncio
    async def test_call_tool_request_handler_marks_errors(self, server):
        handler = server.app.request_handlers[mcp_types.CallToolRequest]
        request = mcp_types.CallToolRequest(
            method="tools/call",
            params=mcp_types.CallToolRequestParams(name="nonexistent_tool", arguments={}),
        )

        result = await handler(request)

        assert result.root.isError is True
        assert "Unknown tool" in result.root.content[0].text

    @pytest.mark.asyncio
    async def test_failed_call_then_successful_call(self, server, mock_client):
        mock_client.execute.side_effect = [
            RuntimeError("Service unavailable"),
            {"items": [], "pageInfo": {"totalResults": 0}},
        ]

        with pytest.raises(ToolCallFailed, match="Failed to get comments: Service unavailable"):
            await server.call_tool("comments_getVideoComments", {"videoId": VALID_VIDEO_ID})

        content = await server.call_tool("comments_getVideoComments", {"videoId": VALID_VIDEO_ID})
        assert json.loads(content[0].text)["comments"] == []


class TestServerInfoResource:
    """Test the server information resource."""

    @pytest.mark.asyncio
    async def test_list_resources(self, server):
        resources = await server.list_resources()

        assert [str(resource.uri) for resource in resources] == [SERVER_INFO_URI]

    @pytest.mark.asyncio
    async def test_read_server_info(self, server):
        contents = await server.read_resource(SERVER_INFO_URI)

        assert "comments_getVideoComments" in contents[0].content
        assert "YOUTUBE_API_KEY" in contents[0].content

    @pytest.mark.asyncio
    async def test_unknown_resource(self, server):
        with pytest.raises(ValueError, match="Unknown resource"):
            await server.read_resource("youtube://server/missing")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
