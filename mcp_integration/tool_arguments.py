"""
Pydantic argument models for the YouTube MCP tools.

Each tool validates its camelCase arguments against one of these models and
publishes the model's JSON schema as its MCP inputSchema. Field names match
the snake_case parameters of the backing service operation.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SearchOrder = Literal["relevance", "date", "rating", "viewCount", "title"]
RankingType = Literal["engagement", "duration", "views", "relevance"]
TextFormat = Literal["plainText", "html"]

VIDEO_ID_DESCRIPTION = "YouTube video ID or URL"
PLAYLIST_ID_DESCRIPTION = "YouTube playlist ID or URL"
CHANNEL_ID_DESCRIPTION = "Channel ID, @handle, username or channel URL"


def _max_results(default: int, maximum: int):
    return Field(
        default,
        ge=1,
        le=maximum,
        description=f"Maximum number of results (default: {default}, max: {maximum})",
    )


class ToolArguments(BaseModel):
    """Base model: camelCase on the wire, unknown arguments rejected."""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")


class VideoArguments(ToolArguments):
    video_id: str = Field(description=VIDEO_ID_DESCRIPTION)


class SearchVideosArguments(ToolArguments):
    query: str = Field(description="Search query keywords")
    max_results: int = _max_results(10, 50)
    order: SearchOrder = Field("relevance", description="Sort order (default: relevance)")


class TranscriptArguments(ToolArguments):
    video_id: str = Field(description=VIDEO_ID_DESCRIPTION)
    language: str = Field("en", description="Language code for the transcript (default: en)")
    include_segments: bool = Field(False, description="Also return timed segments (default: false)")


class PlaylistArguments(ToolArguments):
    playlist_id: str = Field(description=PLAYLIST_ID_DESCRIPTION)


class PlaylistItemsArguments(ToolArguments):
    playlist_id: str = Field(description=PLAYLIST_ID_DESCRIPTION)
    max_results: int = _max_results(20, 50)
    page_token: Optional[str] = Field(None, description="nextPageToken from a previous call")


class RankPlaylistArguments(ToolArguments):
    playlist_id: str = Field(description=PLAYLIST_ID_DESCRIPTION)
    rank_by: RankingType = Field("engagement", description="Ranking criterion (default: engagement)")


class ChannelArguments(ToolArguments):
    channel_id: str = Field(description=CHANNEL_ID_DESCRIPTION)


class ChannelVideosArguments(ToolArguments):
    channel_id: str = Field(description=CHANNEL_ID_DESCRIPTION)
    max_results: int = _max_results(20, 50)


class VideoCommentsArguments(ToolArguments):
    video_id: str = Field(description=VIDEO_ID_DESCRIPTION)
    max_results: int = _max_results(20, 100)
    text_format: TextFormat = Field("plainText", description="Comment text format (default: plainText)")


class CommentRepliesArguments(ToolArguments):
    parent_id: str = Field(description="Comment thread ID (parentId from getVideoComments)")
    max_results: int = _max_results(20, 100)
    text_format: TextFormat = Field("plainText", description="Comment text format (default: plainText)")
