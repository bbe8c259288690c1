"""Shared fixtures for YouTube MCP Server tests."""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import pytest

from config.settings import Settings
from services import (
    ChannelService,
    CommentService,
    PlaylistService,
    ServiceBundle,
    TranscriptService,
    VideoService,
    YouTubeApiClient,
)

# Test Constants
TEST_YOUTUBE_API_KEY = "test_youtube_api_key_123456"
VALID_VIDEO_ID = "dQw4w9WgXcQ"
VALID_CHANNEL_ID = "UC_x5XG1OV2P6uZZ5FSM9Ttw"


def make_comment_thread(thread_id: str, text: Optional[str], likes: int = 0) -> Dict[str, Any]:
    """Build a commentThread resource shaped like a real API response."""
    snippet = {
        "channelId": VALID_CHANNEL_ID,
        "videoId": VALID_VIDEO_ID,
        "authorDisplayName": "@TestAuthor",
        "authorProfileImageUrl": "https://yt3.ggpht.com/ytc/test-author=s48-c-k-c0x00ffffff-no-rj",
        "authorChannelUrl": "http://www.youtube.com/@TestAuthor",
        "authorChannelId": {"value": "UCtestauthorchannel000001"},
        "canRate": True,
        "viewerRating": "none",
        "likeCount": likes,
        "publishedAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2023-01-01T00:00:00Z",
    }
    if text is not None:
        snippet["textDisplay"] = text
        snippet["textOriginal"] = text

    return {
        "kind": "youtube#commentThread",
        "etag": f"etag-{thread_id}",
        "id": thread_id,
        "snippet": {
            "channelId": VALID_CHANNEL_ID,
            "videoId": VALID_VIDEO_ID,
            "topLevelComment": {
                "kind": "youtube#comment",
                "etag": f"etag-comment-{thread_id}",
                "id": thread_id,
                "snippet": snippet,
            },
            "canReply": True,
            "totalReplyCount": 0,
            "isPublic": True,
        },
    }


def make_reply(reply_id: str, text: Optional[str]) -> Dict[str, Any]:
    """Build a reply comment resource."""
    snippet = {
        "authorDisplayName": "@Replier",
        "parentId": "parent",
        "likeCount": 0,
        "publishedAt": "2023-01-02T00:00:00Z",
    }
    if text is not None:
        snippet["textDisplay"] = text
    return {"kind": "youtube#comment", "etag": f"etag-{reply_id}", "id": reply_id, "snippet": snippet}


def make_video(video_id: str, title: str = "Test Video", views: int = 1000, likes: int = 50,
               comments: int = 10, duration: str = "PT4M13S") -> Dict[str, Any]:
    """Build a videos resource with snippet, contentDetails and statistics."""
    return {
        "kind": "youtube#video",
        "id": video_id,
        "snippet": {
            "title": title,
            "description": "Test description",
            "channelId": VALID_CHANNEL_ID,
            "channelTitle": "Test Channel",
            "publishedAt": "2023-01-01T00:00:00Z",
            "thumbnails": {"medium": {"url": "http://test.com/thumb.jpg"}},
            "categoryId": "28",
        },
        "contentDetails": {"duration": duration},
        "statistics": {
            "viewCount": str(views),
            "likeCount": str(likes),
            "commentCount": str(comments),
        },
    }


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(youtube_api_key=TEST_YOUTUBE_API_KEY)


@pytest.fixture
def mock_client() -> Mock:
    """YouTube API client whose execute() is an AsyncMock."""
    client = Mock(spec=YouTubeApiClient)
    client.execute = AsyncMock()
    return client


@pytest.fixture
def service_bundle(mock_client) -> ServiceBundle:
    """All services wired to the mocked client."""
    return ServiceBundle(
        client=mock_client,
        videos=VideoService(mock_client),
        transcripts=TranscriptService(),
        playlists=PlaylistService(mock_client),
        channels=ChannelService(mock_client),
        comments=CommentService(mock_client),
    )


@pytest.fixture
def comment_threads() -> List[Dict[str, Any]]:
    """Ten realistic comment threads."""
    return [make_comment_thread(f"Ugz-thread-{i}", f"Comment number {i}", likes=i) for i in range(10)]
