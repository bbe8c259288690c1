"""
Identifier parsing for YouTube URLs.

Tool arguments accept either bare IDs or the URLs users copy from a browser.
"""

import re
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse

YOUTUBE_HOSTS = ["www.youtube.com", "youtube.com", "m.youtube.com", "music.youtube.com"]

VIDEO_ID_PATTERN = re.compile(r'^[a-zA-Z0-9_-]{11}$')
CHANNEL_ID_PATTERN = re.compile(r'^UC[a-zA-Z0-9_-]{22}$')
NAME_PATTERN = re.compile(r'^[a-zA-Z0-9_.-]+$')


def _valid_video_id(candidate: Optional[str]) -> Optional[str]:
    if candidate and VIDEO_ID_PATTERN.match(candidate):
        return candidate
    return None


def get_video_id_from_url(url: str) -> Optional[str]:
    """
    Extract video ID from various YouTube URL formats.

    Supports:
    - https://www.youtube.com/watch?v=VIDEO_ID
    - https://youtu.be/VIDEO_ID
    - https://www.youtube.com/embed/VIDEO_ID
    - https://www.youtube.com/shorts/VIDEO_ID
    - https://m.youtube.com/watch?v=VIDEO_ID
    - VIDEO_ID (11 characters)
    """
    if not url or not isinstance(url, str):
        return None
    url = url.strip()

    # If it's already just an ID (11 characters, alphanumeric + - and _)
    if VIDEO_ID_PATTERN.match(url):
        return url

    if "youtu.be/" in url:
        return _valid_video_id(url.split("youtu.be/")[-1].split("?")[0].split("&")[0])

    parsed = urlparse(url)
    if parsed.hostname in YOUTUBE_HOSTS:
        for prefix in ("/embed/", "/shorts/", "/live/"):
            if parsed.path.startswith(prefix):
                return _valid_video_id(parsed.path[len(prefix):].split("/")[0])
        query_params = parse_qs(parsed.query)
        return _valid_video_id(query_params.get("v", [None])[0])

    return None


def get_playlist_id_from_url(url: str) -> Optional[str]:
    """
    Extract playlist ID from YouTube URL formats.

    Supports:
    - https://www.youtube.com/playlist?list=PLAYLIST_ID
    - https://www.youtube.com/watch?v=VIDEO_ID&list=PLAYLIST_ID
    - PLAYLIST_ID
    """
    if not url or not isinstance(url, str):
        return None
    url = url.strip()

    parsed = urlparse(url)
    if parsed.hostname in YOUTUBE_HOSTS:
        query_params = parse_qs(parsed.query)
        return query_params.get("list", [None])[0]

    if re.match(r'^[a-zA-Z0-9_-]+$', url):
        return url

    return None


def get_channel_reference(url: str) -> Optional[Tuple[str, str]]:
    """
    Work out how a channel should be looked up.

    Returns a (kind, value) pair where kind is "id", "handle" or "username":
    - https://www.youtube.com/channel/CHANNEL_ID -> ("id", CHANNEL_ID)
    - https://www.youtube.com/@handle, @handle   -> ("handle", "@handle")
    - https://www.youtube.com/c/customname       -> ("handle", "@customname")
    - https://www.youtube.com/user/username      -> ("username", username)
    - UC... (24 characters)                      -> ("id", ...)
    - anything else name-like                    -> ("handle", "@name")
    """
    if not url or not isinstance(url, str):
        return None
    url = url.strip()

    if url.startswith('@'):
        handle = url[1:]
        return ("handle", f"@{handle}") if NAME_PATTERN.match(handle) else None

    if CHANNEL_ID_PATTERN.match(url):
        return ("id", url)

    parsed = urlparse(url)
    if parsed.hostname in YOUTUBE_HOSTS:
        path = parsed.path

        if "/channel/" in path:
            return ("id", path.split("/channel/")[1].split("/")[0])
        elif "/@" in path:
            return ("handle", "@" + path.split("/@")[1].split("/")[0])
        elif "/c/" in path:
            return ("handle", "@" + path.split("/c/")[1].split("/")[0])
        elif "/user/" in path:
            return ("username", path.split("/user/")[1].split("/")[0])
        return None

    if NAME_PATTERN.match(url):
        return ("handle", f"@{url}")

    return None
