"""
Property-based tests for response projection using Hypothesis.
"""

import string

import pytest
from hypothesis import given, strategies as st

from conftest import make_comment_thread
from services.identifiers import get_video_id_from_url
from services.projections import (
    payload_size,
    project_comment,
    project_comments,
    project_replies,
    project_reply,
)

# Strategies
thread_id_strategy = st.text(
    alphabet=st.characters(whitelist_categories=("Lu", "Ll", "Nd"), whitelist_characters="-_"),
    min_size=1,
    max_size=30,
)

comment_text_strategy = st.text(max_size=500)

json_scalar = st.one_of(st.none(), st.booleans(), st.integers(), st.floats(allow_nan=False), st.text(max_size=20))

json_value = st.recursive(
    json_scalar,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(st.text(max_size=20), children, max_size=4),
    ),
    max_leaves=20,
)

# Arbitrary records that occasionally carry the keys projection looks for
arbitrary_record = st.dictionaries(
    st.sampled_from(["id", "snippet", "topLevelComment", "textDisplay", "kind", "etag"]),
    json_value,
    max_size=6,
)

video_id_strategy = st.text(
    alphabet=string.ascii_letters + string.digits + "-_",
    min_size=11,
    max_size=11,
)


class TestProjectionProperties:
    """Properties every comment projection must satisfy."""

    @given(arbitrary_record)
    def test_never_raises_on_arbitrary_records(self, record):
        projected = project_comment(record)

        assert isinstance(projected.parent_id, str)
        assert isinstance(projected.text, str)

    @given(arbitrary_record)
    def test_reply_projection_never_raises(self, record):
        assert isinstance(project_reply(record), str)

    @given(thread_id_strategy, comment_text_strategy)
    def test_idempotent(self, thread_id, text):
        once = project_comment(make_comment_thread(thread_id, text))

        assert project_comment(once) == once
        assert once.to_dict() == {"parentId": thread_id, "text": text}

    @given(thread_id_strategy, comment_text_strategy)
    def test_wire_form_reprojects_to_same_record(self, thread_id, text):
        once = project_comment(make_comment_thread(thread_id, text))

        assert project_comment(once.to_dict()) == once

    @given(st.lists(st.tuples(thread_id_strategy, comment_text_strategy), max_size=20))
    def test_order_and_length_preserved(self, threads):
        records = [make_comment_thread(thread_id, text) for thread_id, text in threads]

        projected = project_comments(records)

        assert [(c.parent_id, c.text) for c in projected] == threads

    @given(st.lists(comment_text_strategy, max_size=20))
    def test_reply_batches_keep_order(self, texts):
        records = [{"id": f"r{i}", "snippet": {"textDisplay": text}} for i, text in enumerate(texts)]

        assert project_replies(records) == texts

    @given(thread_id_strategy, comment_text_strategy)
    def test_projected_payload_is_smaller(self, thread_id, text):
        raw = make_comment_thread(thread_id, text)

        assert payload_size(project_comment(raw)) < payload_size(raw)


class TestVideoIdProperties:
    """Video ID parsing properties."""

    @given(video_id_strategy)
    def test_valid_video_ids_are_accepted(self, video_id):
        assert get_video_id_from_url(video_id) == video_id

    @given(video_id_strategy)
    def test_watch_urls_round_trip(self, video_id):
        assert get_video_id_from_url(f"https://www.youtube.com/watch?v={video_id}") == video_id


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
