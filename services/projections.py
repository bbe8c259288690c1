"""
Response projection for the YouTube MCP Server.

Full YouTube Data API responses are large; agents only need a handful of
fields. Every projector here accepts either a raw upstream record (a dict
decoded from the API JSON) or an already projected record, either as an
object or in its camelCase to_dict() form, and returns the projected form.
Projected records pass through unchanged, so projection is idempotent.
Missing upstream fields resolve to defaults instead of raising: one
malformed item never aborts the rest of a batch.
"""

import json
from dataclasses import MISSING, dataclass, fields
from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar, Union

T = TypeVar("T")
Record = Dict[str, Any]
P = TypeVar("P", bound="_Projected")


def _nested(record: Any, *path: str) -> Record:
    """Walk a chain of nested dicts, returning {} as soon as a link is missing."""
    current = record
    for key in path:
        if not isinstance(current, dict):
            return {}
        current = current.get(key)
    return current if isinstance(current, dict) else {}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _count(value: Any) -> int:
    # The API returns statistics as decimal strings
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _optional_count(value: Any) -> Optional[int]:
    if value is None:
        return None
    return _count(value)


class _Projected:
    """Mixin giving projected dataclasses their camelCase wire form."""

    _wire_names: Dict[str, str] = {}

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            result[self._wire_names.get(field.name, field.name)] = value
        return result

    @classmethod
    def from_dict(cls, record: Any):
        """
        Rebuild a projected record from its to_dict() form.

        Returns None unless every key is a wire name of this type and every
        field without a default is present. Raw upstream records always carry
        keys such as snippet or kind, so they never match.
        """
        if not isinstance(record, dict) or not record:
            return None
        by_wire = {cls._wire_names.get(field.name, field.name): field for field in fields(cls)}
        if not set(record) <= set(by_wire):
            return None
        if any(field.default is MISSING and wire not in record for wire, field in by_wire.items()):
            return None
        return cls(**{by_wire[wire].name: value for wire, value in record.items()})


def _already_projected(record: Any, projected_type: Type[P]) -> Optional[P]:
    """The projected form of record if it is one already, in object or wire form."""
    if isinstance(record, projected_type):
        return record
    return projected_type.from_dict(record)


@dataclass(frozen=True)
class CommentSummary(_Projected):
    """Top-level comment reduced to its thread ID and display text."""
    parent_id: str
    text: str

    _wire_names = {"parent_id": "parentId"}


@dataclass(frozen=True)
class VideoSummary(_Projected):
    video_id: str
    title: str
    description: str
    channel_id: str
    channel_title: str
    published_at: str
    duration: Optional[str] = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0

    _wire_names = {
        "video_id": "id",
        "channel_id": "channelId",
        "channel_title": "channelTitle",
        "published_at": "publishedAt",
        "view_count": "viewCount",
        "like_count": "likeCount",
        "comment_count": "commentCount",
    }


@dataclass(frozen=True)
class SearchResult(_Projected):
    video_id: str
    title: str
    channel_title: str
    published_at: str
    description: str

    _wire_names = {
        "video_id": "videoId",
        "channel_title": "channelTitle",
        "published_at": "publishedAt",
    }


@dataclass(frozen=True)
class ChannelSummary(_Projected):
    channel_id: str
    title: str
    description: str
    published_at: str
    custom_url: Optional[str] = None
    subscriber_count: Optional[int] = None
    video_count: int = 0
    view_count: int = 0
    uploads_playlist_id: Optional[str] = None

    _wire_names = {
        "channel_id": "id",
        "published_at": "publishedAt",
        "custom_url": "customUrl",
        "subscriber_count": "subscriberCount",
        "video_count": "videoCount",
        "view_count": "viewCount",
        "uploads_playlist_id": "uploadsPlaylistId",
    }


@dataclass(frozen=True)
class PlaylistSummary(_Projected):
    playlist_id: str
    title: str
    description: str
    channel_title: str
    item_count: int = 0

    _wire_names = {
        "playlist_id": "id",
        "channel_title": "channelTitle",
        "item_count": "itemCount",
    }


@dataclass(frozen=True)
class PlaylistItemSummary(_Projected):
    video_id: str
    title: str
    position: Optional[int] = None

    _wire_names = {"video_id": "videoId"}


@dataclass(frozen=True)
class TranscriptSegment(_Projected):
    text: str
    start: float
    duration: float


def project_comment(record: Union[Record, CommentSummary]) -> CommentSummary:
    """
    Reduce a commentThread resource to {parentId, text}.

    The thread ID is the parent ID used when fetching replies. A thread without
    its snippet substructure projects to empty text.
    """
    projected = _already_projected(record, CommentSummary)
    if projected is not None:
        return projected
    snippet = _nested(record, "snippet", "topLevelComment", "snippet")
    thread_id = record.get("id") if isinstance(record, dict) else None
    return CommentSummary(parent_id=_text(thread_id), text=_text(snippet.get("textDisplay")))


def project_reply(record: Union[Record, str]) -> str:
    """Reduce a reply comment resource to its display text."""
    if isinstance(record, str):
        return record
    return _text(_nested(record, "snippet").get("textDisplay"))


def project_video(record: Union[Record, VideoSummary]) -> VideoSummary:
    projected = _already_projected(record, VideoSummary)
    if projected is not None:
        return projected
    snippet = _nested(record, "snippet")
    statistics = _nested(record, "statistics")
    return VideoSummary(
        video_id=_text(record.get("id") if isinstance(record, dict) else None),
        title=_text(snippet.get("title")),
        description=_text(snippet.get("description")),
        channel_id=_text(snippet.get("channelId")),
        channel_title=_text(snippet.get("channelTitle")),
        published_at=_text(snippet.get("publishedAt")),
        duration=_optional_text(_nested(record, "contentDetails").get("duration")),
        view_count=_count(statistics.get("viewCount")),
        like_count=_count(statistics.get("likeCount")),
        comment_count=_count(statistics.get("commentCount")),
    )


def project_search_result(record: Union[Record, SearchResult]) -> SearchResult:
    """Reduce a search result resource. The video ID lives under id.videoId."""
    projected = _already_projected(record, SearchResult)
    if projected is not None:
        return projected
    snippet = _nested(record, "snippet")
    return SearchResult(
        video_id=_text(_nested(record, "id").get("videoId")),
        title=_text(snippet.get("title")),
        channel_title=_text(snippet.get("channelTitle")),
        published_at=_text(snippet.get("publishedAt")),
        description=_text(snippet.get("description")),
    )


def project_channel(record: Union[Record, ChannelSummary]) -> ChannelSummary:
    projected = _already_projected(record, ChannelSummary)
    if projected is not None:
        return projected
    snippet = _nested(record, "snippet")
    statistics = _nested(record, "statistics")
    # Channels may hide their subscriber count
    hidden = statistics.get("hiddenSubscriberCount") is True
    return ChannelSummary(
        channel_id=_text(record.get("id") if isinstance(record, dict) else None),
        title=_text(snippet.get("title")),
        description=_text(snippet.get("description")),
        published_at=_text(snippet.get("publishedAt")),
        custom_url=_optional_text(snippet.get("customUrl")),
        subscriber_count=None if hidden else _optional_count(statistics.get("subscriberCount")),
        video_count=_count(statistics.get("videoCount")),
        view_count=_count(statistics.get("viewCount")),
        uploads_playlist_id=_optional_text(
            _nested(record, "contentDetails", "relatedPlaylists").get("uploads")
        ),
    )


def project_playlist(record: Union[Record, PlaylistSummary]) -> PlaylistSummary:
    projected = _already_projected(record, PlaylistSummary)
    if projected is not None:
        return projected
    snippet = _nested(record, "snippet")
    return PlaylistSummary(
        playlist_id=_text(record.get("id") if isinstance(record, dict) else None),
        title=_text(snippet.get("title")),
        description=_text(snippet.get("description")),
        channel_title=_text(snippet.get("channelTitle")),
        item_count=_count(_nested(record, "contentDetails").get("itemCount")),
    )


def project_playlist_item(record: Union[Record, PlaylistItemSummary]) -> PlaylistItemSummary:
    projected = _already_projected(record, PlaylistItemSummary)
    if projected is not None:
        return projected
    snippet = _nested(record, "snippet")
    video_id = (
        _nested(record, "contentDetails").get("videoId")
        or _nested(record, "snippet", "resourceId").get("videoId")
    )
    position = snippet.get("position")
    return PlaylistItemSummary(
        video_id=_text(video_id),
        title=_text(snippet.get("title")),
        position=position if isinstance(position, int) else None,
    )


def project_transcript_segment(record: Any) -> TranscriptSegment:
    """
    Reduce a transcript snippet to text and timing.

    Accepts the snippet objects returned by youtube-transcript-api as well as
    their raw dict form.
    """
    if isinstance(record, TranscriptSegment):
        return record
    if isinstance(record, dict):
        text, start, duration = record.get("text"), record.get("start"), record.get("duration")
    else:
        text = getattr(record, "text", None)
        start = getattr(record, "start", None)
        duration = getattr(record, "duration", None)
    return TranscriptSegment(
        text=_text(text),
        start=float(start) if isinstance(start, (int, float)) else 0.0,
        duration=float(duration) if isinstance(duration, (int, float)) else 0.0,
    )


def project_all(records: Optional[Iterable[Any]], projector: Callable[[Any], T]) -> List[T]:
    """Order-preserving map of a projector over a batch; None means an empty batch."""
    return [projector(record) for record in records or []]


def project_comments(records: Optional[Iterable[Any]]) -> List[CommentSummary]:
    return project_all(records, project_comment)


def project_replies(records: Optional[Iterable[Any]]) -> List[str]:
    return project_all(records, project_reply)


def to_jsonable(value: Any) -> Any:
    """Convert projected records (and containers of them) to plain JSON types."""
    if isinstance(value, _Projected):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def payload_size(value: Any) -> int:
    """Length of the compact JSON serialization of a payload."""
    return len(json.dumps(to_jsonable(value), separators=(",", ":"), ensure_ascii=False))
