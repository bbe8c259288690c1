"""
Operation services for the YouTube MCP Server.
Each service wraps one area of the YouTube Data API and projects its responses.
"""

from dataclasses import dataclass

from config.settings import Settings
from .youtube_client import UpstreamError, YouTubeApiClient, create_youtube_client
from .video_service import VideoService, VideoServiceError, create_video_service
from .transcript_service import TranscriptService, TranscriptServiceError, create_transcript_service
from .playlist_service import PlaylistService, PlaylistServiceError, create_playlist_service
from .channel_service import ChannelService, ChannelServiceError, create_channel_service
from .comment_service import CommentService, CommentServiceError, create_comment_service


@dataclass
class ServiceBundle:
    """All operation services, sharing one lazily constructed API client."""
    client: YouTubeApiClient
    videos: VideoService
    transcripts: TranscriptService
    playlists: PlaylistService
    channels: ChannelService
    comments: CommentService


def create_services(settings: Settings) -> ServiceBundle:
    """
    Factory function wiring every service to one shared API client.

    Args:
        settings: Application settings

    Returns:
        ServiceBundle; no upstream client is constructed yet
    """
    client = create_youtube_client(settings)
    return ServiceBundle(
        client=client,
        videos=create_video_service(client),
        transcripts=create_transcript_service(),
        playlists=create_playlist_service(client),
        channels=create_channel_service(client),
        comments=create_comment_service(client),
    )


__all__ = [
    # Shared client
    'UpstreamError',
    'YouTubeApiClient',
    'create_youtube_client',

    # Services
    'VideoService',
    'VideoServiceError',
    'TranscriptService',
    'TranscriptServiceError',
    'PlaylistService',
    'PlaylistServiceError',
    'ChannelService',
    'ChannelServiceError',
    'CommentService',
    'CommentServiceError',

    'ServiceBundle',
    'create_services',
]
