"""The full post record returned by post-fetching endpoints in NPF mode.

The wire object is flat, but several groups of keys belong together
logically.  Decoding (:func:`decode_post`) lifts each group into its own
cluster model when the group is present, and routes every key nothing
recognised into ``NPFPost.other_fields``.  Encoding (:func:`encode_post`)
flattens everything back into one object and refuses to let an overflow key
overwrite a modelled one.

Cluster presence rules:

- ``source``, ``blaze_info``, ``interactability``, ``ask_info``: present iff
  every key of the cluster is present; otherwise its keys stay in
  ``other_fields``.
- ``submission_info``: governed by the ``is_submission`` sentinel alone.
  ``true`` populates the cluster from the optional siblings; ``false`` or a
  missing sentinel means "not a submission" and any stray siblings are kept in
  ``other_fields``.

The post id travels twice: ``id`` (64-bit integer) and ``id_string`` (its
decimal rendering, for clients without 64-bit integers).  ``id`` is
authoritative; a disagreeing ``id_string`` is logged and discarded.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, ClassVar, Optional

from pydantic import Field

from tumblr_api.api.base import ApiModel
from tumblr_api.core.exceptions import (
    DecodeError,
    DecodeErrorKind,
    DecodeIssue,
    EncodeError,
)
from tumblr_api.npf.base import NpfModel
from tumblr_api.npf.blocks import ContentBlock
from tumblr_api.npf.codec import decode_with, encode_model
from tumblr_api.npf.media import MediaObject

logger = logging.getLogger(__name__)

INT64_MIN: int = -(2**63)
INT64_MAX: int = 2**63 - 1


class PostState(str, Enum):
    PUBLISHED = "published"
    QUEUED = "queued"
    DRAFT = "draft"
    PRIVATE = "private"


class ReblogInteractability(str, Enum):
    """Who may interact with a post when reblogging it."""

    EVERYONE = "everyone"
    NOONE = "noone"


class Blog(ApiModel):
    """The full blog entity that owns a post.

    Unlike :class:`~tumblr_api.npf.blogs.MentionBlog` this carries many
    service-defined fields; undeclared ones are kept in ``other_fields``.
    """

    name: str
    title: str
    description: str
    url: str
    uuid: str
    updated: int
    tumblrmart_accessories: Optional[dict[str, Any]] = None
    can_show_badges: Optional[bool] = None


# ---------------------------------------------------------------------------
# Flattened clusters
# ---------------------------------------------------------------------------


class SourceInfo(NpfModel):
    """Where the content was sourced from ("exists only if there's a content source")."""

    source_url: str
    source_title: str


class BlazeInfo(NpfModel):
    """Blaze (paid promotion) state."""

    is_blazed: bool
    is_blaze_pending: bool
    can_ignite: bool
    can_blaze: bool


class InteractabilityInfo(NpfModel):
    can_like: bool
    interactability_reblog: ReblogInteractability
    can_reblog: bool
    can_send_in_message: bool
    can_reply: bool


class AskInfo(NpfModel):
    """Who asked, for posts that answer an ask."""

    asking_name: str
    asking_url: str
    asking_avatar: list[MediaObject]


class SubmissionInfo(NpfModel):
    """Submission metadata; every field is independently optional.

    Attributes:
        post_author: Author of the post, for non-anonymous submissions.
        post_author_is_adult: Whether the submitting author is an adult.
        anonymous_name: Name on an anonymous submission.
        anonymous_email: Email on an anonymous submission.
    """

    post_author: Optional[str] = None
    post_author_is_adult: Optional[bool] = None
    anonymous_name: Optional[str] = None
    anonymous_email: Optional[str] = None


# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------


class NPFPost(NpfModel):
    """A post in Neue Post Format, as returned by the API.

    Construct directly, or decode wire JSON with :func:`decode_post`; the
    wire shape is never accepted by the constructor itself.
    """

    omit_if_unset: ClassVar[frozenset[str]] = frozenset({"tags", "layout", "trail"})

    blog_name: str
    id: int = Field(ge=INT64_MIN, le=INT64_MAX, strict=True)
    genesis_post_id: Optional[str] = None
    post_url: str
    post_type: str = Field(alias="type")
    timestamp: int
    date: str
    reblog_key: str
    tags: list[str] = Field(default_factory=list)
    liked: Optional[bool] = None
    state: PostState
    is_blocks_post_format: Optional[bool] = None
    original_type: Optional[str] = None
    blog: Blog
    slug: Optional[str] = None
    short_url: Optional[str] = None
    summary: Optional[str] = None
    should_open_in_legacy: Optional[bool] = None
    recommended_source: Any = None
    recommended_color: Any = None
    followed: Optional[bool] = None
    note_count: Optional[int] = None
    content: list[ContentBlock]
    layout: list[Any] = Field(default_factory=list)
    trail: list[Any] = Field(default_factory=list)
    display_avatar: Optional[bool] = None
    is_pinned: Optional[bool] = None

    source: Optional[SourceInfo] = None
    blaze_info: Optional[BlazeInfo] = None
    interactability: Optional[InteractabilityInfo] = None
    ask_info: Optional[AskInfo] = None
    submission_info: Optional[SubmissionInfo] = None

    other_fields: dict[str, Any] = Field(default_factory=dict)


#: Clusters whose presence is "every key present", in decode order.
_ALL_OR_NOTHING_CLUSTERS: dict[str, type[NpfModel]] = {
    "source": SourceInfo,
    "blaze_info": BlazeInfo,
    "interactability": InteractabilityInfo,
    "ask_info": AskInfo,
}

_SUBMISSION_KEYS: tuple[str, ...] = tuple(SubmissionInfo.model_fields)

_STRUCTURAL_FIELDS: frozenset[str] = frozenset(
    {"id", "submission_info", "other_fields", *_ALL_OR_NOTHING_CLUSTERS}
)

#: Wire keys of the plain (non-cluster) post fields.
_CORE_KEYS: tuple[str, ...] = tuple(
    field.alias or name
    for name, field in NPFPost.model_fields.items()
    if name not in _STRUCTURAL_FIELDS
)


def _cluster_keys(model: type[NpfModel]) -> tuple[str, ...]:
    return tuple(field.alias or name for name, field in model.model_fields.items())


def _wire_path(path: str) -> str:
    """Strip the in-memory cluster name so paths match wire keys."""
    for cluster in (*_ALL_OR_NOTHING_CLUSTERS, "submission_info"):
        if path.startswith(f"{cluster}."):
            return path[len(cluster) + 1:]
    if path.startswith("other_fields."):
        return path[len("other_fields."):]
    return path


def decode_post(data: Any) -> NPFPost:
    """Decode a flat wire post into an :class:`NPFPost`.

    Raises:
        DecodeError: On a missing/ill-typed field, a missing half of the dual
            id, or a malformed content block.
    """
    if not isinstance(data, dict):
        raise DecodeError(
            [DecodeIssue("", DecodeErrorKind.TYPE_MISMATCH, "expected a JSON object")],
            type_name="NPFPost",
        )

    remaining = dict(data)
    structured: dict[str, Any] = {}

    missing = [key for key in ("id", "id_string") if key not in remaining]
    if missing:
        raise DecodeError(
            [DecodeIssue(key, DecodeErrorKind.MISSING_FIELD, "Field required") for key in missing],
            type_name="NPFPost",
        )
    post_id = remaining.pop("id")
    id_string = remaining.pop("id_string")
    if isinstance(post_id, int) and not isinstance(post_id, bool) and id_string != str(post_id):
        logger.warning(
            "npf: id_string %r disagrees with id %d; keeping id", id_string, post_id
        )
    structured["id"] = post_id

    for name, cluster in _ALL_OR_NOTHING_CLUSTERS.items():
        keys = _cluster_keys(cluster)
        if all(key in remaining for key in keys):
            structured[name] = {key: remaining.pop(key) for key in keys}

    is_submission = remaining.pop("is_submission", False)
    if not isinstance(is_submission, bool):
        raise DecodeError(
            [
                DecodeIssue(
                    "is_submission",
                    DecodeErrorKind.TYPE_MISMATCH,
                    f"expected a boolean, got {type(is_submission).__name__}",
                )
            ],
            type_name="NPFPost",
        )
    if is_submission:
        structured["submission_info"] = {
            key: remaining.pop(key) for key in _SUBMISSION_KEYS if key in remaining
        }

    for key in _CORE_KEYS:
        if key in remaining:
            structured[key] = remaining.pop(key)

    structured["other_fields"] = remaining
    if remaining:
        logger.debug("npf: post %s carries %d unmodelled key(s)", post_id, len(remaining))

    try:
        return decode_with(NPFPost.model_validate, structured, "NPFPost")
    except DecodeError as exc:
        issues = [
            DecodeIssue(_wire_path(issue.path), issue.kind, issue.message) for issue in exc.issues
        ]
        raise DecodeError(issues, type_name="NPFPost") from exc


def _merge(target: dict[str, Any], source: dict[str, Any], origin: str) -> None:
    for key, value in source.items():
        if key in target:
            raise EncodeError(f"key {key!r} from {origin} collides with a field already written", path=key)
        target[key] = value


def encode_post(post: NPFPost) -> dict[str, Any]:
    """Flatten an :class:`NPFPost` back into its wire object.

    ``id_string`` and ``is_submission`` are always written; ``tags``,
    ``layout`` and ``trail`` only when the decoded or constructed post set them.

    Raises:
        EncodeError: If an ``other_fields`` key collides with a modelled key,
            or an image caption/alt text exceeds its ceiling.
    """
    nested = encode_model(post)
    nested.pop("id")
    other_fields = nested.pop("other_fields", {})
    submission = nested.pop("submission_info", None)
    clusters = {name: nested.pop(name) for name in _ALL_OR_NOTHING_CLUSTERS if name in nested}

    flat: dict[str, Any] = {"id": post.id, "id_string": str(post.id)}
    _merge(flat, nested, "NPFPost")
    for name, cluster in clusters.items():
        _merge(flat, cluster, name)
    _merge(flat, {"is_submission": submission is not None, **(submission or {})}, "submission_info")
    _merge(flat, other_fields, "other_fields")
    return flat
