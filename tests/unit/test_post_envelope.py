"""Tests for the flattened post envelope (NPFPost).

Covers:
- Decoding a recorded post: clusters, overflow keys, nested blocks
- Dual id handling (id authoritative, id_string mismatch logged)
- Cluster presence and the is_submission sentinel
- Re-flattening on encode and overflow/modelled key collisions
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import pytest

from tumblr_api.api import (
    BlazeInfo,
    InteractabilityInfo,
    NPFPost,
    PostState,
    ReblogInteractability,
    SourceInfo,
    SubmissionInfo,
    decode_post,
    encode_post,
)
from tumblr_api.core.exceptions import DecodeError, DecodeErrorKind, EncodeError
from tumblr_api.npf import AudioBlock, ImageBlock, TextBlock

_BLOG = {
    "name": "staff",
    "title": "Tumblr Staff",
    "description": "",
    "url": "https://staff.tumblr.com/",
    "uuid": "t:abc",
    "updated": 1700000000,
}


def _minimal_post(**overrides: Any) -> dict[str, Any]:
    post: dict[str, Any] = {
        "blog_name": "staff",
        "id": 1234567891234567,
        "id_string": "1234567891234567",
        "post_url": "https://staff.tumblr.com/post/1234567891234567",
        "type": "blocks",
        "timestamp": 1700000000,
        "date": "2023-11-14 22:13:20 GMT",
        "reblog_key": "AbCdEf12",
        "tags": [],
        "state": "published",
        "blog": dict(_BLOG),
        "content": [{"type": "text", "text": "Hello world!"}],
    }
    post.update(overrides)
    return post


@pytest.fixture
def recorded_post(load_fixture: Callable[[str], Any]) -> dict[str, Any]:
    return load_fixture("tumblr/post_npf.json")["response"]


# ---------------------------------------------------------------------------
# Recorded post
# ---------------------------------------------------------------------------


class TestRecordedPost:
    def test_core_fields(self, recorded_post: dict[str, Any]) -> None:
        post = decode_post(recorded_post)

        assert post.id == 730123456789012345
        assert post.blog_name == "staff"
        assert post.post_type == "blocks"
        assert post.state is PostState.PUBLISHED
        assert post.tags == ["hello", "world"]
        assert post.note_count == 42

    def test_clusters_are_lifted(self, recorded_post: dict[str, Any]) -> None:
        post = decode_post(recorded_post)

        assert post.source == SourceInfo(source_url="https://example.com/article", source_title="example.com")
        assert post.blaze_info == BlazeInfo(
            is_blazed=False, is_blaze_pending=False, can_ignite=False, can_blaze=True
        )
        assert post.interactability.interactability_reblog is ReblogInteractability.EVERYONE
        assert post.ask_info is None
        assert post.submission_info is None

    def test_unmodelled_keys_go_to_other_fields(self, recorded_post: dict[str, Any]) -> None:
        post = decode_post(recorded_post)

        assert post.other_fields == {
            "object_type": "post",
            "tumblelog_uuid": "t:kQ5FP6nMtOxvqS4ufwPRLA",
            "can_edit": False,
            "parent_post_url": "https://staff.tumblr.com/post/730123456789012344",
        }

    def test_blog_keeps_unknown_keys(self, recorded_post: dict[str, Any]) -> None:
        post = decode_post(recorded_post)

        assert post.blog.can_show_badges is True
        assert post.blog.other_fields == {"theme_id": 7}
        assert encode_post(post)["blog"]["theme_id"] == 7

    def test_content_blocks_decoded(self, recorded_post: dict[str, Any]) -> None:
        post = decode_post(recorded_post)

        assert [type(block) for block in post.content[:4]] == [TextBlock, TextBlock, ImageBlock, AudioBlock]
        assert post.content[2].attribution is None
        assert post.content[2].exif_time == 1699990000
        assert post.content[3].poster.width == 500

    def test_encode_is_flat_and_preserves_overflow(self, recorded_post: dict[str, Any]) -> None:
        """Encoding writes cluster keys and overflow keys at the top level."""
        flat = encode_post(decode_post(recorded_post))

        for key in ("source_url", "can_blaze", "interactability_reblog", "object_type", "parent_post_url"):
            assert flat[key] == recorded_post[key]
        for cluster in ("source", "blaze_info", "interactability", "other_fields", "submission_info"):
            assert cluster not in flat
        assert flat["id"] == recorded_post["id"]
        assert flat["id_string"] == recorded_post["id_string"]
        assert flat["is_submission"] is False
        assert flat["type"] == "blocks"

    def test_decode_of_encoded_post_is_stable(self, recorded_post: dict[str, Any]) -> None:
        post = decode_post(recorded_post)

        assert decode_post(encode_post(post)) == post

    def test_absent_lists_stay_absent(self) -> None:
        """``tags``, ``layout`` and ``trail`` are written back only if they were on the wire."""
        wire = _minimal_post()
        del wire["tags"]

        flat = encode_post(decode_post(wire))

        assert flat == {**wire, "is_submission": False}

    def test_empty_lists_on_the_wire_are_kept(self) -> None:
        wire = _minimal_post(layout=[], trail=[])

        flat = encode_post(decode_post(wire))

        assert flat["tags"] == []
        assert flat["layout"] == []
        assert flat["trail"] == []

    def test_lists_set_after_decode_are_written(self) -> None:
        wire = _minimal_post()
        del wire["tags"]
        post = decode_post(wire).model_copy(update={"tags": ["later"]})

        assert encode_post(post)["tags"] == ["later"]


# ---------------------------------------------------------------------------
# Dual id
# ---------------------------------------------------------------------------


class TestDualId:
    def test_encode_writes_both_forms(self) -> None:
        flat = encode_post(decode_post(_minimal_post()))

        assert flat["id"] == 1234567891234567
        assert flat["id_string"] == "1234567891234567"

    def test_mismatch_keeps_integer_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """A disagreeing id_string is accepted; id wins and a warning is logged."""
        with caplog.at_level(logging.WARNING, logger="tumblr_api.api.post"):
            post = decode_post(_minimal_post(id=5, id_string="6"))

        assert post.id == 5
        assert any("id_string" in record.getMessage() for record in caplog.records)
        assert encode_post(post)["id_string"] == "5"

    @pytest.mark.parametrize("post_id", [-(2**63), 2**63 - 1, 0, -1])
    def test_int64_extremes_round_trip(self, post_id: int) -> None:
        flat = encode_post(decode_post(_minimal_post(id=post_id, id_string=str(post_id))))

        assert flat["id"] == post_id
        assert flat["id_string"] == str(post_id)
        assert decode_post(flat).id == post_id

    @pytest.mark.parametrize("missing", ["id", "id_string"])
    def test_both_forms_required(self, missing: str) -> None:
        wire = _minimal_post()
        del wire[missing]

        with pytest.raises(DecodeError) as exc_info:
            decode_post(wire)

        assert exc_info.value.kind is DecodeErrorKind.MISSING_FIELD
        assert exc_info.value.path == missing

    def test_string_id_is_type_mismatch(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_post(_minimal_post(id="1234567891234567"))

        assert exc_info.value.kind is DecodeErrorKind.TYPE_MISMATCH
        assert exc_info.value.path == "id"

    def test_id_outside_int64_is_rejected(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_post(_minimal_post(id=2**63, id_string=str(2**63)))

        assert exc_info.value.kind is DecodeErrorKind.CONSTRAINT_VIOLATION


# ---------------------------------------------------------------------------
# Clusters
# ---------------------------------------------------------------------------


class TestClusters:
    def test_partial_cluster_stays_in_other_fields(self) -> None:
        """A cluster with only some of its keys is not lifted; its keys are kept."""
        post = decode_post(_minimal_post(source_url="https://example.com", is_blazed=True))

        assert post.source is None
        assert post.blaze_info is None
        assert post.other_fields == {"source_url": "https://example.com", "is_blazed": True}
        flat = encode_post(post)
        assert flat["source_url"] == "https://example.com"
        assert flat["is_blazed"] is True

    def test_ask_cluster(self) -> None:
        post = decode_post(_minimal_post(
            asking_name="anon",
            asking_avatar=[{"url": "https://assets.tumblr.com/anon_64.png", "width": 64, "height": 64}],
        ))

        assert post.ask_info is None
        assert "asking_name" in post.other_fields

        post = decode_post(_minimal_post(
            asking_name="someone",
            asking_url="https://someone.tumblr.com/",
            asking_avatar=[{"url": "https://64.media.tumblr.com/avatar_64.png", "width": 64, "height": 64}],
        ))

        assert post.ask_info.asking_name == "someone"
        assert post.ask_info.asking_avatar[0].width == 64

    def test_cluster_error_uses_wire_key(self) -> None:
        """Errors inside a lifted cluster point at the flat wire key."""
        wire = _minimal_post(
            can_like=True,
            interactability_reblog="friends",
            can_reblog=True,
            can_send_in_message=True,
            can_reply=True,
        )

        with pytest.raises(DecodeError) as exc_info:
            decode_post(wire)

        assert exc_info.value.kind is DecodeErrorKind.UNKNOWN_VARIANT
        assert exc_info.value.path == "interactability_reblog"

    def test_content_error_path(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_post(_minimal_post(content=[{"type": "text", "text": "ok"}, {"type": "text"}]))

        assert exc_info.value.path == "content[1].text"
        assert exc_info.value.kind is DecodeErrorKind.MISSING_FIELD


class TestSubmissionSentinel:
    def test_absent_sentinel_means_not_a_submission(self) -> None:
        post = decode_post(_minimal_post())

        assert post.submission_info is None
        assert encode_post(post)["is_submission"] is False

    def test_true_sentinel_populates_cluster(self) -> None:
        post = decode_post(_minimal_post(is_submission=True, post_author="someone", post_author_is_adult=True))

        assert post.submission_info == SubmissionInfo(post_author="someone", post_author_is_adult=True)
        flat = encode_post(post)
        assert flat["is_submission"] is True
        assert flat["post_author"] == "someone"
        assert "anonymous_name" not in flat

    def test_true_sentinel_with_no_siblings(self) -> None:
        post = decode_post(_minimal_post(is_submission=True))

        assert post.submission_info == SubmissionInfo()

    def test_false_sentinel_keeps_stray_siblings(self) -> None:
        """Submission keys beside ``is_submission: false`` are preserved, not lifted."""
        post = decode_post(_minimal_post(is_submission=False, anonymous_name="anon"))

        assert post.submission_info is None
        assert post.other_fields == {"anonymous_name": "anon"}
        flat = encode_post(post)
        assert flat["is_submission"] is False
        assert flat["anonymous_name"] == "anon"

    def test_non_boolean_sentinel_is_type_mismatch(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_post(_minimal_post(is_submission="yes"))

        assert exc_info.value.kind is DecodeErrorKind.TYPE_MISMATCH
        assert exc_info.value.path == "is_submission"


# ---------------------------------------------------------------------------
# Encode collisions
# ---------------------------------------------------------------------------


class TestEncodeCollisions:
    def _post(self, **changes: Any) -> NPFPost:
        return decode_post(_minimal_post()).model_copy(update=changes)

    @pytest.mark.parametrize("key", ["blog_name", "id", "id_string", "type", "is_submission"])
    def test_overflow_key_colliding_with_modelled_key(self, key: str) -> None:
        post = self._post(other_fields={key: "shadow"})

        with pytest.raises(EncodeError) as exc_info:
            encode_post(post)

        assert exc_info.value.path == key

    def test_overflow_key_colliding_with_cluster_key(self) -> None:
        post = self._post(
            source=SourceInfo(source_url="https://a", source_title="a"),
            other_fields={"source_title": "b"},
        )

        with pytest.raises(EncodeError):
            encode_post(post)

    def test_overflow_key_colliding_with_submission_key(self) -> None:
        post = self._post(
            submission_info=SubmissionInfo(anonymous_name="anon"),
            other_fields={"anonymous_name": "other"},
        )

        with pytest.raises(EncodeError):
            encode_post(post)

    def test_constructed_post_encodes(self) -> None:
        post = self._post(
            interactability=InteractabilityInfo(
                can_like=True,
                interactability_reblog=ReblogInteractability.NOONE,
                can_reblog=False,
                can_send_in_message=True,
                can_reply=False,
            ),
        )

        flat = encode_post(post)

        assert flat["interactability_reblog"] == "noone"
        assert flat["can_reblog"] is False
