"""
MCP tool registry for the YouTube MCP Server.

Tool names follow the {service}_{operation} convention. The table is built
once at startup and never changes afterwards.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Type

from pydantic import ValidationError

from services import ServiceBundle
from .tool_arguments import (
    ChannelArguments,
    ChannelVideosArguments,
    CommentRepliesArguments,
    PlaylistArguments,
    PlaylistItemsArguments,
    RankPlaylistArguments,
    SearchVideosArguments,
    ToolArguments,
    TranscriptArguments,
    VideoArguments,
    VideoCommentsArguments,
)

Operation = Callable[..., Awaitable[Any]]


class UnknownToolError(KeyError):
    """Raised when a tool name has no registry entry."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown tool: {self.name}"


class ToolArgumentError(ValueError):
    """Raised when tool arguments do not match the tool's argument model."""
    pass


@dataclass(frozen=True)
class ToolDefinition:
    """Representation of an MCP tool and the operation backing it."""
    name: str
    description: str
    arguments: Type[ToolArguments]
    operation: Operation = field(compare=False, repr=False)

    @property
    def service(self) -> str:
        return service_of(self.name)

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON schema of the tool's camelCase arguments."""
        return self.arguments.model_json_schema(by_alias=True)

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))


def service_of(name: str) -> str:
    """Service prefix of a tool name: everything before the first underscore."""
    return name.split("_", 1)[0]


def to_parameter_name(argument: str) -> str:
    """Map a camelCase tool argument to the service's snake_case parameter."""
    return re.sub(r'(?<!^)(?=[A-Z])', '_', argument).lower()


def describe_validation_error(name: str, error: ValidationError) -> str:
    """One-line summary of a pydantic validation failure, keyed by argument name."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in item['loc']) or 'arguments'}: {item['msg']}"
        for item in error.errors()
    )
    return f"Invalid arguments for '{name}': {problems}"


def validate_arguments(definition: ToolDefinition, arguments: Any) -> Dict[str, Any]:
    """
    Validate arguments against a tool's argument model.

    Null values count as absent, so optional arguments fall back to their defaults.

    Args:
        definition: Registered tool
        arguments: Caller-supplied argument mapping

    Returns:
        Keyword arguments for the tool's operation, keyed by parameter name

    Raises:
        ToolArgumentError: On missing required fields, unknown fields, wrong types or out-of-range values
    """
    if isinstance(arguments, dict):
        arguments = {name: value for name, value in arguments.items() if value is not None}
    try:
        validated = definition.arguments.model_validate(arguments)
    except ValidationError as e:
        raise ToolArgumentError(describe_validation_error(definition.name, e)) from e
    return validated.model_dump(exclude_none=True)


class MCPToolRegistry:
    """
    Registry for MCP tools.

    Keeps insertion order so list_tools() is stable for discovery.
    """

    def __init__(self):
        """Initialize an empty MCP tool registry."""
        self.registered_tools: Dict[str, ToolDefinition] = {}

    def register(self, definition: ToolDefinition) -> None:
        """
        Register an MCP tool.

        Raises:
            ValueError: If the name breaks the {service}_{operation} convention or is taken
        """
        if not re.match(r'^[a-z]+_[A-Za-z]+$', definition.name):
            raise ValueError(f"Tool name must follow {{service}}_{{operation}}: {definition.name}")
        if definition.name in self.registered_tools:
            raise ValueError(f"Tool already registered: {definition.name}")
        self.registered_tools[definition.name] = definition

    def list_tools(self) -> List[ToolDefinition]:
        """Get all registered tools in registration order."""
        return list(self.registered_tools.values())

    def resolve(self, name: str) -> ToolDefinition:
        """
        Look up a tool by its exact name.

        Raises:
            UnknownToolError: If no tool has this name
        """
        try:
            return self.registered_tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def __contains__(self, name: str) -> bool:
        return name in self.registered_tools

    def __len__(self) -> int:
        return len(self.registered_tools)



def create_mcp_tool_registry(services: ServiceBundle) -> MCPToolRegistry:
    """
    Factory function building the static YouTube tool table.

    Args:
        services: Operation services the tools delegate to

    Returns:
        Populated MCP tool registry
    """
    registry = MCPToolRegistry()

    tools = [
        ToolDefinition(
            name="videos_getVideo",
            description="Get title, channel, duration and statistics of a YouTube video",
            arguments=VideoArguments,
            operation=services.videos.get_video,
        ),
        ToolDefinition(
            name="videos_searchVideos",
            description="Search YouTube for videos by keywords",
            arguments=SearchVideosArguments,
            operation=services.videos.search_videos,
        ),
        ToolDefinition(
            name="transcripts_getTranscript",
            description="Get the transcript of a YouTube video",
            arguments=TranscriptArguments,
            operation=services.transcripts.get_transcript,
        ),
        ToolDefinition(
            name="playlists_getPlaylist",
            description="Get details of a YouTube playlist",
            arguments=PlaylistArguments,
            operation=services.playlists.get_playlist,
        ),
        ToolDefinition(
            name="playlists_getPlaylistItems",
            description="List the videos in a YouTube playlist",
            arguments=PlaylistItemsArguments,
            operation=services.playlists.get_playlist_items,
        ),
        ToolDefinition(
            name="playlists_rankPlaylistItems",
            description="Rank the videos of a playlist by engagement, duration, views or title relevance",
            arguments=RankPlaylistArguments,
            operation=services.playlists.rank_playlist_items,
        ),
        ToolDefinition(
            name="channels_getChannel",
            description="Get details and statistics of a YouTube channel",
            arguments=ChannelArguments,
            operation=services.channels.get_channel,
        ),
        ToolDefinition(
            name="channels_listVideos",
            description="List the most recent videos of a YouTube channel",
            arguments=ChannelVideosArguments,
            operation=services.channels.list_channel_videos,
        ),
        ToolDefinition(
            name="comments_getVideoComments",
            description="Get top-level comments of a video as {parentId, text} pairs",
            arguments=VideoCommentsArguments,
            operation=services.comments.get_video_comments,
        ),
        ToolDefinition(
            name="comments_getCommentReplies",
            description="Get the reply texts of a comment thread",
            arguments=CommentRepliesArguments,
            operation=services.comments.get_comment_replies,
        ),
    ]

    for tool in tools:
        registry.register(tool)

    return registry
