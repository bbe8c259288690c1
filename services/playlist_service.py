"""
Playlist operations for the YouTube MCP Server.

Besides plain lookups, the service can rank a playlist's videos by engagement,
views, duration or title relevance. Ranking fans out one statistics request
per playlist item and is read-only: API-key access cannot reorder playlists.
"""

import asyncio
import logging
import re
import statistics
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from config.settings import ConfigurationError
from .identifiers import get_playlist_id_from_url, get_video_id_from_url
from .projections import (
    PlaylistItemSummary,
    PlaylistSummary,
    VideoSummary,
    project_all,
    project_playlist,
    project_playlist_item,
    project_video,
)
from .youtube_client import UpstreamError, YouTubeApiClient, clamp_max_results, describe_error

logger = logging.getLogger(__name__)

RANKING_TYPES = ["engagement", "duration", "views", "relevance"]

# Upper bound on the statistics fan-out of a single ranking call
MAX_RANKED_ITEMS = 50

RankedEntry = Tuple[PlaylistItemSummary, Optional[VideoSummary]]


class PlaylistServiceError(UpstreamError):
    """Custom exception for playlist related errors."""
    pass


def parse_duration_seconds(duration_iso: Optional[str]) -> int:
    """
    Convert an ISO 8601 duration to seconds.

    Args:
        duration_iso: Duration string such as "PT1H30M45S"

    Returns:
        Total seconds, 0 for missing or unparseable values
    """
    if not duration_iso:
        return 0
    match = re.fullmatch(r'P(?:(\d+)D)?T?(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?', duration_iso)
    if not match:
        return 0

    days, hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    return days * 86400 + hours * 3600 + minutes * 60 + seconds


def engagement_rate(video: Optional[VideoSummary]) -> float:
    """(likes + comments) / views, 0 when a video has no views or no details."""
    if video is None or video.view_count <= 0:
        return 0.0
    return (video.like_count + video.comment_count) / video.view_count


def _title_of(entry: RankedEntry) -> str:
    item, video = entry
    return video.title if video is not None and video.title else item.title


def _title_words(title: str) -> List[str]:
    return title.lower().split()


def rank_entries(entries: List[RankedEntry], rank_by: str) -> List[RankedEntry]:
    """
    Order playlist entries by the requested ranking.

    Sorting is stable, so ties keep their playlist order.
    """
    if rank_by == "engagement":
        return sorted(entries, key=lambda entry: engagement_rate(entry[1]), reverse=True)

    if rank_by == "views":
        return sorted(
            entries,
            key=lambda entry: entry[1].view_count if entry[1] is not None else 0,
            reverse=True,
        )

    if rank_by == "duration":
        return sorted(
            entries,
            key=lambda entry: parse_duration_seconds(entry[1].duration if entry[1] is not None else None),
        )

    if rank_by == "relevance":
        # Score each title by how common its words are across the whole playlist
        word_frequency = Counter(
            word for entry in entries for word in _title_words(_title_of(entry))
        )
        return sorted(
            entries,
            key=lambda entry: sum(word_frequency[word] for word in _title_words(_title_of(entry))),
            reverse=True,
        )

    raise ValueError(f"Unsupported ranking type: {rank_by}")


def calculate_ranking_metrics(entries: List[RankedEntry]) -> Dict[str, Any]:
    """Summary statistics over the ranked playlist."""
    videos = [video for _, video in entries]
    durations = [parse_duration_seconds(video.duration if video else None) for video in videos]

    return {
        "totalViews": sum(video.view_count for video in videos if video is not None),
        "averageEngagement": statistics.fmean(engagement_rate(video) for video in videos) if videos else 0.0,
        "durationSpread": statistics.pstdev(durations) if durations else 0.0,
    }


class PlaylistService:
    """Handles playlist details, playlist items and read-only ranking."""

    def __init__(self, client: YouTubeApiClient):
        """
        Initialize PlaylistService with the shared API client.

        Args:
            client: Lazily constructed YouTube API client
        """
        self.client = client

    def _require_playlist_id(self, playlist_id: str, action: str) -> str:
        parsed_id = get_playlist_id_from_url(playlist_id)
        if not parsed_id:
            raise PlaylistServiceError(f"Failed to {action}: invalid playlist ID '{playlist_id}'")
        return parsed_id

    async def get_playlist(self, playlist_id: str) -> PlaylistSummary:
        """
        Get playlist details.

        Raises:
            PlaylistServiceError: If the ID is invalid, the request fails or the playlist is missing
        """
        parsed_id = self._require_playlist_id(playlist_id, "get playlist")

        try:
            response = await self.client.execute(
                "playlists",
                part="snippet,contentDetails",
                id=parsed_id,
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise PlaylistServiceError(f"Failed to get playlist: {describe_error(e)}") from e

        items = response.get("items") or []
        if not items:
            raise PlaylistServiceError(f"Failed to get playlist: playlist '{parsed_id}' not found")
        return project_playlist(items[0])

    async def get_playlist_items(
        self,
        playlist_id: str,
        max_results: int = 20,
        page_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Get one page of videos in a playlist.

        Args:
            playlist_id: Playlist ID or URL
            max_results: Number of items to return (1-50)
            page_token: nextPageToken from a previous call

        Returns:
            {"items": [{videoId, title, position}], "pageInfo": {...}} plus nextPageToken

        Raises:
            PlaylistServiceError: If the ID is invalid or the request fails
        """
        parsed_id = self._require_playlist_id(playlist_id, "get playlist items")

        params = {
            "part": "snippet,contentDetails",
            "playlistId": parsed_id,
            "maxResults": clamp_max_results(max_results, "playlists"),
        }
        if page_token:
            params["pageToken"] = page_token

        try:
            response = await self.client.execute("playlistItems", **params)
        except ConfigurationError:
            raise
        except Exception as e:
            raise PlaylistServiceError(f"Failed to get playlist items: {describe_error(e)}") from e

        result = {
            "items": project_all(response.get("items"), project_playlist_item),
            "pageInfo": response.get("pageInfo"),
        }
        if response.get("nextPageToken"):
            result["nextPageToken"] = response["nextPageToken"]
        return result

    async def _get_video_stats(self, video_id: str) -> Optional[VideoSummary]:
        response = await self.client.execute(
            "videos",
            part="snippet,statistics,contentDetails",
            id=video_id,
        )
        items = response.get("items") or []
        return project_video(items[0]) if items else None

    async def rank_playlist_items(self, playlist_id: str, rank_by: str = "engagement") -> Dict[str, Any]:
        """
        Rank the videos of a playlist without modifying it.

        Fetches up to 50 playlist items, then the statistics of every video
        concurrently. If any statistics request fails the whole ranking fails;
        no partial ranking is returned.

        Items without a valid 11-character video ID (deleted or private
        videos) are left out of both orders and counted in
        metrics["skippedItems"].

        Args:
            playlist_id: Playlist ID or URL
            rank_by: engagement, duration, views or relevance

        Returns:
            {"playlistId", "rankBy", "originalOrder", "rankedOrder", "metrics"}

        Raises:
            PlaylistServiceError: If the playlist or any video request fails
        """
        if rank_by not in RANKING_TYPES:
            raise PlaylistServiceError(f"Failed to rank playlist: unsupported ranking '{rank_by}'")

        page = await self.get_playlist_items(playlist_id, max_results=MAX_RANKED_ITEMS)
        items = [item for item in page["items"] if get_video_id_from_url(item.video_id)]

        try:
            videos = await asyncio.gather(
                *(self._get_video_stats(item.video_id) for item in items)
            )
        except ConfigurationError:
            raise
        except Exception as e:
            raise PlaylistServiceError(f"Failed to rank playlist: {describe_error(e)}") from e

        entries = list(zip(items, videos))
        ranked = rank_entries(entries, rank_by)
        metrics = calculate_ranking_metrics(ranked)
        metrics["skippedItems"] = len(page["items"]) - len(items)
        logger.debug("Ranked %d playlist items by %s", len(ranked), rank_by)

        return {
            "playlistId": get_playlist_id_from_url(playlist_id),
            "rankBy": rank_by,
            "originalOrder": [item.video_id for item, _ in entries],
            "rankedOrder": [item.video_id for item, _ in ranked],
            "metrics": metrics,
        }


def create_playlist_service(client: YouTubeApiClient) -> PlaylistService:
    """
    Factory function to create PlaylistService instance.

    Args:
        client: Shared YouTube API client

    Returns:
        Configured PlaylistService instance
    """
    return PlaylistService(client)
