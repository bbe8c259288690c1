"""
Transcript retrieval for the YouTube MCP Server.
Uses youtube-transcript-api, which needs no Data API key.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from youtube_transcript_api import (
    NoTranscriptFound,
    TranscriptsDisabled,
    VideoUnavailable,
    YouTubeTranscriptApi,
)

from .identifiers import get_video_id_from_url
from .projections import project_all, project_transcript_segment
from .youtube_client import UpstreamError

logger = logging.getLogger(__name__)


class TranscriptServiceError(UpstreamError):
    """Custom exception for transcript retrieval errors."""
    pass


class TranscriptService:
    """
    Fetches video transcripts in a requested language.

    Falls back to the first available transcript when the requested language
    does not exist.
    """

    def __init__(self):
        self._api: Optional[YouTubeTranscriptApi] = None

    def _ensure_initialized(self) -> YouTubeTranscriptApi:
        if self._api is None:
            self._api = YouTubeTranscriptApi()
        return self._api

    def _fetch(self, video_id: str, language: str):
        api = self._ensure_initialized()
        try:
            return api.fetch(video_id, languages=[language])
        except NoTranscriptFound:
            logger.info("No '%s' transcript for %s, using first available", language, video_id)
            transcript_list = api.list(video_id)
            first_transcript = next(iter(transcript_list), None)
            if first_transcript is None:
                raise
            return first_transcript.fetch()

    async def get_transcript(
        self,
        video_id: str,
        language: str = "en",
        include_segments: bool = False
    ) -> Dict[str, Any]:
        """
        Get the transcript of a video.

        Args:
            video_id: YouTube video ID or URL
            language: Preferred language code
            include_segments: Also return per-segment timing

        Returns:
            {"videoId", "language", "isGenerated", "text"} and "segments" on request

        Raises:
            TranscriptServiceError: If no transcript can be retrieved
        """
        parsed_id = get_video_id_from_url(video_id)
        if not parsed_id:
            raise TranscriptServiceError(f"Failed to get transcript: invalid video ID '{video_id}'")

        try:
            transcript = await asyncio.to_thread(self._fetch, parsed_id, language)
        except TranscriptsDisabled as e:
            raise TranscriptServiceError(
                f"Failed to get transcript: transcripts are disabled for video '{parsed_id}'"
            ) from e
        except NoTranscriptFound as e:
            raise TranscriptServiceError(
                f"Failed to get transcript: no transcript available for video '{parsed_id}'"
            ) from e
        except VideoUnavailable as e:
            raise TranscriptServiceError(
                f"Failed to get transcript: video '{parsed_id}' is unavailable"
            ) from e
        except Exception as e:
            raise TranscriptServiceError(f"Failed to get transcript: {e}") from e

        segments = project_all(transcript, project_transcript_segment)
        result: Dict[str, Any] = {
            "videoId": parsed_id,
            "language": getattr(transcript, "language_code", language),
            "isGenerated": bool(getattr(transcript, "is_generated", False)),
            "text": " ".join(segment.text for segment in segments if segment.text),
        }
        if include_segments:
            result["segments"] = segments
        return result


def create_transcript_service() -> TranscriptService:
    """
    Factory function to create TranscriptService instance.

    Returns:
        TranscriptService whose transcript client is built on first use
    """
    return TranscriptService()
