"""
Video lookup and search for the YouTube MCP Server.
"""

from typing import Any, Dict

from config.settings import ConfigurationError
from .identifiers import get_video_id_from_url
from .projections import VideoSummary, project_all, project_search_result, project_video
from .youtube_client import UpstreamError, YouTubeApiClient, clamp_max_results, describe_error

SEARCH_ORDERS = ["relevance", "date", "rating", "viewCount", "title"]


class VideoServiceError(UpstreamError):
    """Custom exception for video lookup and search errors."""
    pass


class VideoService:
    """Handles YouTube video details and keyword search."""

    def __init__(self, client: YouTubeApiClient):
        """
        Initialize VideoService with the shared API client.

        Args:
            client: Lazily constructed YouTube API client
        """
        self.client = client

    async def get_video(self, video_id: str) -> VideoSummary:
        """
        Get details for a single video.

        Args:
            video_id: YouTube video ID or URL

        Returns:
            Projected video record

        Raises:
            VideoServiceError: If the ID is invalid, the request fails or the video is missing
        """
        parsed_id = get_video_id_from_url(video_id)
        if not parsed_id:
            raise VideoServiceError(f"Failed to get video: invalid video ID '{video_id}'")

        try:
            response = await self.client.execute(
                "videos",
                part="snippet,contentDetails,statistics",
                id=parsed_id,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise VideoServiceError(f"Failed to get video: {describe_error(e)}") from e

        items = response.get("items") or []
        if not items:
            raise VideoServiceError(
                f"Failed to get video: video '{parsed_id}' not found or is not accessible"
            )
        return project_video(items[0])

    async def search_videos(
        self,
        query: str,
        max_results: int = 10,
        order: str = "relevance"
    ) -> Dict[str, Any]:
        """
        Search YouTube for videos by keywords.

        Args:
            query: Search query keywords
            max_results: Maximum number of results (1-50)
            order: One of relevance, date, rating, viewCount, title

        Returns:
            {"videos": [...], "pageInfo": {...}} plus nextPageToken when present

        Raises:
            VideoServiceError: If the query is empty or the search fails
        """
        if not query or not query.strip():
            raise VideoServiceError("Failed to search videos: query must not be empty")
        if order not in SEARCH_ORDERS:
            raise VideoServiceError(f"Failed to search videos: unsupported order '{order}'")

        try:
            response = await self.client.execute(
                "search",
                part="snippet",
                q=query.strip(),
                type="video",
                maxResults=clamp_max_results(max_results, "search"),
                order=order,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise VideoServiceError(f"Failed to search videos: {describe_error(e)}") from e

        result = {
            "videos": project_all(response.get("items"), project_search_result),
            "pageInfo": response.get("pageInfo"),
        }
        if response.get("nextPageToken"):
            result["nextPageToken"] = response["nextPageToken"]
        return result


def create_video_service(client: YouTubeApiClient) -> VideoService:
    """
    Factory function to create VideoService instance.

    Args:
        client: Shared YouTube API client

    Returns:
        Configured VideoService instance
    """
    return VideoService(client)
