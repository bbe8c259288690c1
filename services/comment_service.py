"""
Comment operations for the YouTube MCP Server.
Returns only parent IDs and comment text to keep tool responses small.
"""

import logging
from typing import Any, Dict, List

from config.settings import ConfigurationError
from .identifiers import get_video_id_from_url
from .projections import project_comments, project_replies
from .youtube_client import UpstreamError, YouTubeApiClient, clamp_max_results, describe_error

logger = logging.getLogger(__name__)

TEXT_FORMATS = ["plainText", "html"]


class CommentServiceError(UpstreamError):
    """Custom exception for comment retrieval errors."""
    pass


class CommentService:
    """
    Fetches comment threads and replies.

    Every operation issues exactly one upstream request and projects each
    returned item; a failed request fails the whole operation.
    """

    def __init__(self, client: YouTubeApiClient):
        self.client = client

    async def get_video_comments(
        self,
        video_id: str,
        max_results: int = 20,
        text_format: str = "plainText"
    ) -> Dict[str, Any]:
        """
        Fetch one page of top-level comment threads ordered by relevance.

        Args:
            video_id: YouTube video ID or URL
            max_results: Number of threads to return (1-100)
            text_format: "plainText" or "html"

        Returns:
            {"comments": [{parentId, text}], "pageInfo": {...}} with nextPageToken
            passed through when the API returns one

        Raises:
            CommentServiceError: If the video ID is invalid or the request fails
        """
        parsed_id = get_video_id_from_url(video_id)
        if not parsed_id:
            raise CommentServiceError(f"Failed to get comments: invalid video ID '{video_id}'")

        try:
            response = await self.client.execute(
                "commentThreads",
                part="snippet,replies",
                videoId=parsed_id,
                maxResults=clamp_max_results(max_results, "comments"),
                textFormat=text_format,
                order="relevance",
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise CommentServiceError(f"Failed to get comments: {describe_error(e)}") from e

        result = {
            "comments": project_comments(response.get("items")),
            "pageInfo": response.get("pageInfo"),
        }
        if response.get("nextPageToken"):
            result["nextPageToken"] = response["nextPageToken"]

        logger.debug("Fetched %d comments for %s", len(result["comments"]), parsed_id)
        return result

    async def get_comment_replies(
        self,
        parent_id: str,
        max_results: int = 20,
        text_format: str = "plainText"
    ) -> List[str]:
        """
        Fetch replies to one comment thread as plain reply texts.

        The parent is already known to the caller, so replies carry no linkage.

        Raises:
            CommentServiceError: If the request fails
        """
        if not parent_id:
            raise CommentServiceError("Failed to get replies: parentId is required")

        try:
            response = await self.client.execute(
                "comments",
                part="snippet",
                parentId=parent_id,
                maxResults=clamp_max_results(max_results, "comments"),
                textFormat=text_format,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise CommentServiceError(f"Failed to get replies: {describe_error(e)}") from e

        return project_replies(response.get("items"))


def create_comment_service(client: YouTubeApiClient) -> CommentService:
    """
    Factory function to create CommentService instance.

    Args:
        client: Shared YouTube API client

    Returns:
        Configured CommentService instance
    """
    return CommentService(client)
