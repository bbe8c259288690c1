"""
Unit tests for TranscriptService.
"""

from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest
from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, VideoUnavailable

from conftest import VALID_VIDEO_ID
from services.projections import TranscriptSegment
from services.transcript_service import TranscriptServiceError, create_transcript_service


class FakeTranscript(list):
    """Iterable of snippets carrying language metadata, like a fetched transcript."""

    def __init__(self, snippets, language_code="en", is_generated=False):
        super().__init__(snippets)
        self.language_code = language_code
        self.is_generated = is_generated


SNIPPETS = [
    SimpleNamespace(text="We're no strangers to love", start=18.64, duration=3.24),
    SimpleNamespace(text="You know the rules and so do I", start=22.64, duration=4.32),
]


@pytest.fixture
def mock_transcript_api():
    """Patch the transcript client class and return the instance it produces."""
    with patch('services.transcript_service.YouTubeTranscriptApi') as mock_class:
        yield mock_class.return_value


@pytest.fixture
def transcript_service():
    return create_transcript_service()


class TestGetTranscript:
    """Test transcript retrieval and fallbacks."""

    @pytest.mark.asyncio
    async def test_returns_joined_text(self, transcript_service, mock_transcript_api):
        mock_transcript_api.fetch.return_value = FakeTranscript(SNIPPETS)

        result = await transcript_service.get_transcript(VALID_VIDEO_ID)

        assert result == {
            "videoId": VALID_VIDEO_ID,
            "language": "en",
            "isGenerated": False,
            "text": "We're no strangers to love You know the rules and so do I",
        }
        mock_transcript_api.fetch.assert_called_once_with(VALID_VIDEO_ID, languages=["en"])

    @pytest.mark.asyncio
    async def test_includes_segments_on_request(self, transcript_service, mock_transcript_api):
        mock_transcript_api.fetch.return_value = FakeTranscript(SNIPPETS)

        result = await transcript_service.get_transcript(VALID_VIDEO_ID, include_segments=True)

        assert result["segments"] == [
            TranscriptSegment(text="We're no strangers to love", start=18.64, duration=3.24),
            TranscriptSegment(text="You know the rules and so do I", start=22.64, duration=4.32),
        ]

    @pytest.mark.asyncio
    async def test_falls_back_to_first_available_language(self, transcript_service, mock_transcript_api):
        mock_transcript_api.fetch.side_effect = NoTranscriptFound(VALID_VIDEO_ID, ["de"], "en (English)")
        first_transcript = Mock()
        first_transcript.fetch.return_value = FakeTranscript(SNIPPETS, language_code="en", is_generated=True)
        mock_transcript_api.list.return_value = [first_transcript]

        result = await transcript_service.get_transcript(VALID_VIDEO_ID, language="de")

        assert result["language"] == "en"
        assert result["isGenerated"] is True
        mock_transcript_api.list.assert_called_once_with(VALID_VIDEO_ID)

    @pytest.mark.asyncio
    async def test_no_transcript_at_all(self, transcript_service, mock_transcript_api):
        mock_transcript_api.fetch.side_effect = NoTranscriptFound(VALID_VIDEO_ID, ["en"], "")
        mock_transcript_api.list.return_value = []

        with pytest.raises(TranscriptServiceError, match="no transcript available"):
            await transcript_service.get_transcript(VALID_VIDEO_ID)

    @pytest.mark.parametrize("error,message", [
        (TranscriptsDisabled(VALID_VIDEO_ID), "transcripts are disabled"),
        (VideoUnavailable(VALID_VIDEO_ID), "is unavailable"),
        (RuntimeError("connection reset"), "Failed to get transcript: connection reset"),
    ])
    @pytest.mark.asyncio
    async def test_errors_are_wrapped(self, transcript_service, mock_transcript_api, error, message):
        mock_transcript_api.fetch.side_effect = error

        with pytest.raises(TranscriptServiceError, match=message):
            await transcript_service.get_transcript(VALID_VIDEO_ID)

    @pytest.mark.asyncio
    async def test_invalid_video_id(self, transcript_service, mock_transcript_api):
        with pytest.raises(TranscriptServiceError, match="invalid video ID"):
            await transcript_service.get_transcript("bad id")

        mock_transcript_api.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_client_created_once(self, transcript_service):
        with patch('services.transcript_service.YouTubeTranscriptApi') as mock_class:
            mock_class.return_value.fetch.return_value = FakeTranscript(SNIPPETS)

            await transcript_service.get_transcript(VALID_VIDEO_ID)
            await transcript_service.get_transcript(VALID_VIDEO_ID)

            mock_class.assert_called_once_with()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
