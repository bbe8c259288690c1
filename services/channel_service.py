"""
Channel lookup for the YouTube MCP Server.
"""

from typing import Any, Dict

from config.settings import ConfigurationError
from .identifiers import get_channel_reference
from .projections import ChannelSummary, project_all, project_channel, project_search_result
from .youtube_client import UpstreamError, YouTubeApiClient, clamp_max_results, describe_error

# channels.list filter parameter for each kind of channel reference
LOOKUP_PARAMETERS = {
    "id": "id",
    "handle": "forHandle",
    "username": "forUsername",
}


class ChannelServiceError(UpstreamError):
    """Custom exception for channel lookup errors."""
    pass


class ChannelService:
    """Handles channel details and recent uploads."""

    def __init__(self, client: YouTubeApiClient):
        self.client = client

    async def get_channel(self, channel_id: str) -> ChannelSummary:
        """
        Get details for a channel given its ID, @handle, legacy username or URL.

        Raises:
            ChannelServiceError: If the reference is invalid, the request fails or nothing matches
        """
        reference = get_channel_reference(channel_id)
        if not reference:
            raise ChannelServiceError(f"Failed to get channel: invalid channel '{channel_id}'")
        kind, value = reference

        try:
            response = await self.client.execute(
                "channels",
                part="snippet,contentDetails,statistics",
                **{LOOKUP_PARAMETERS[kind]: value},
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise ChannelServiceError(f"Failed to get channel: {describe_error(e)}") from e

        items = response.get("items") or []
        if not items:
            raise ChannelServiceError(f"Failed to get channel: channel '{value}' not found")
        return project_channel(items[0])

    async def list_channel_videos(self, channel_id: str, max_results: int = 20) -> Dict[str, Any]:
        """
        List a channel's most recent videos.

        Handles and usernames are resolved to a channel ID first, which costs one
        extra upstream request.

        Args:
            channel_id: Channel ID, @handle, username or channel URL
            max_results: Number of videos to return (1-50)

        Returns:
            {"videos": [...], "pageInfo": {...}} plus nextPageToken when present

        Raises:
            ChannelServiceError: If the channel cannot be resolved or the search fails
        """
        reference = get_channel_reference(channel_id)
        if not reference:
            raise ChannelServiceError(f"Failed to list channel videos: invalid channel '{channel_id}'")

        kind, resolved_id = reference
        if kind != "id":
            resolved_id = (await self.get_channel(channel_id)).channel_id

        try:
            response = await self.client.execute(
                "search",
                part="snippet",
                channelId=resolved_id,
                type="video",
                order="date",
                maxResults=clamp_max_results(max_results, "search"),
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise ChannelServiceError(f"Failed to list channel videos: {describe_error(e)}") from e

        result = {
            "videos": project_all(response.get("items"), project_search_result),
            "pageInfo": response.get("pageInfo"),
        }
        if response.get("nextPageToken"):
            result["nextPageToken"] = response["nextPageToken"]
        return result


def create_channel_service(client: YouTubeApiClient) -> ChannelService:
    """
    Factory function to create ChannelService instance.

    Args:
        client: Shared YouTube API client

    Returns:
        Configured ChannelService instance
    """
    return ChannelService(client)
