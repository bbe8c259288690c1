"""
Shared YouTube Data API v3 client for the YouTube MCP Server.

The discovery resource is built on first use and reused for the life of the
process. Each request executes in a worker thread with its own HTTP transport,
so concurrent tool calls never share a connection.
"""

import asyncio
import logging
import threading
from typing import Any, Dict

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config.settings import Settings

logger = logging.getLogger(__name__)

# YouTube API limits for maxResults
MAX_RESULTS_LIMIT = {
    "search": 50,
    "comments": 100,
    "playlists": 50,
    "videos": 50,
    "channels": 50,
}


class UpstreamError(Exception):
    """Base exception for failed calls to the YouTube Data API."""
    pass


def describe_error(error: Exception) -> str:
    """
    Turn an upstream failure into a short human-readable message.

    Args:
        error: Exception raised while talking to the upstream API

    Returns:
        Message without stack trace or internal object details
    """
    if isinstance(error, HttpError):
        status = getattr(error.resp, "status", "unknown")
        reason = getattr(error, "reason", None) or "request failed"
        if status == 403:
            return f"YouTube API error (403): {reason}"
        if status == 404:
            return f"YouTube resource not found (404): {reason}"
        return f"YouTube API error ({status}): {reason}"
    if isinstance(error, (TimeoutError, OSError)):
        return f"Network error connecting to YouTube API: {error}"
    return str(error) or type(error).__name__


def clamp_max_results(value: int, resource: str) -> int:
    """Clamp a caller-supplied maxResults to the range the upstream API accepts."""
    return max(1, min(MAX_RESULTS_LIMIT[resource], int(value)))


class YouTubeApiClient:
    """
    Lazily constructed handle on the YouTube Data API.

    The handle is created by the first request, not by the constructor, so
    services can be wired up before credentials are checked. Creation raises
    ConfigurationError when no API key is configured.
    """

    def __init__(self, settings: Settings):
        """
        Initialize the client wrapper.

        Args:
            settings: Application settings containing the API key and timeout
        """
        self.settings = settings
        self._youtube = None
        self._lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        """Whether the discovery resource has been built."""
        return self._youtube is not None

    def ensure_initialized(self):
        """
        Build the discovery resource exactly once.

        Returns:
            The googleapiclient resource for youtube v3

        Raises:
            ConfigurationError: If the API key is not configured
        """
        if self._youtube is not None:
            return self._youtube

        with self._lock:
            if self._youtube is None:
                api_key = self.settings.require_api_key()
                self._youtube = build(
                    'youtube', 'v3', developerKey=api_key, cache_discovery=False
                )
                logger.info("YouTube Data API client initialized")
        return self._youtube

    async def execute(self, resource: str, method: str = "list", **params: Any) -> Dict[str, Any]:
        """
        Execute one YouTube Data API request.

        Args:
            resource: Collection name, e.g. "commentThreads" or "videos"
            method: Collection method, "list" for every read operation
            **params: Request parameters passed to the collection method

        Returns:
            Decoded JSON response

        Raises:
            ConfigurationError: If the client cannot be constructed
            HttpError: If the API rejects the request
        """
        youtube = self.ensure_initialized()
        request = getattr(getattr(youtube, resource)(), method)(**params)
        http = httplib2.Http(timeout=self.settings.request_timeout)

        logger.debug("YouTube API request %s.%s %s", resource, method, params)
        return await asyncio.to_thread(request.execute, http=http)


def create_youtube_client(settings: Settings) -> YouTubeApiClient:
    """
    Factory function to create the shared YouTubeApiClient.

    Args:
        settings: Application settings

    Returns:
        Client wrapper whose API handle is built on first use
    """
    return YouTubeApiClient(settings)
