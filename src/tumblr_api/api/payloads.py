"""Payloads carried inside the ``response`` member of the API envelope.

Response payloads derive from :class:`~tumblr_api.api.base.ApiModel` and so
keep any keys the service adds later.  The request body for post creation is
a closed :class:`~tumblr_api.npf.base.NpfModel`: it is built locally, so an
unknown key there is always a mistake.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_serializer

from tumblr_api.api.base import ApiModel
from tumblr_api.api.post import ReblogInteractability
from tumblr_api.npf.base import NpfModel
from tumblr_api.npf.blocks import ContentBlock, ImageBlock
from tumblr_api.npf.media import MediaObject

# ---------------------------------------------------------------------------
# /user/info
# ---------------------------------------------------------------------------


class UserInfoBlog(ApiModel):
    """A blog the authenticated user may post to.

    Attributes:
        name: Short name of the blog.
        url: URL of the blog.
        title: Title of the blog.
        primary: Whether this is the user's primary blog.
        followers: Follower count.
        tweet: Auto-tweet setting: ``"auto"``, ``"Y"`` or ``"N"``.
        blog_type: ``"public"`` or ``"private"`` (wire key ``type``).
    """

    name: str
    url: str
    title: str
    primary: bool
    followers: int
    tweet: str
    blog_type: str = Field(alias="type")


class UserInfo(ApiModel):
    following: int
    default_post_format: str
    name: str
    likes: int
    blogs: list[UserInfoBlog]


class UserInfoResponse(ApiModel):
    user: UserInfo


# ---------------------------------------------------------------------------
# /user/limits
# ---------------------------------------------------------------------------


class LimitEntry(ApiModel):
    """One daily rate limit.  ``reset_at`` is epoch seconds on the wire."""

    description: str
    limit: int
    remaining: int
    reset_at: datetime

    @field_serializer("reset_at")
    def _serialize_reset_at(self, value: datetime) -> int:
        return int(value.timestamp())

    @property
    def is_exhausted(self) -> bool:
        return self.remaining <= 0

    def has_reset(self, now: Optional[datetime] = None) -> bool:
        """Whether the reset time has passed (``now`` defaults to the current UTC time)."""
        return (now or datetime.now(timezone.utc)) >= self.reset_at


class UserLimits(ApiModel):
    """Daily limits of the authenticated user, one entry per limited action."""

    blogs: LimitEntry
    follows: LimitEntry
    likes: LimitEntry
    photos: LimitEntry
    posts: LimitEntry
    video_seconds: LimitEntry
    videos: LimitEntry


class LimitsResponse(ApiModel):
    user: UserLimits


# ---------------------------------------------------------------------------
# /blog/{blog}/info
# ---------------------------------------------------------------------------


class AvatarShape(str, Enum):
    """Shape of the mask over the user's avatar."""

    CIRCLE = "circle"
    SQUARE = "square"


class BlogTheme(ApiModel):
    """A blog's general theme options.

    These may not be meaningful when the blog uses a custom theme.
    """

    avatar_shape: AvatarShape
    background_color: str
    body_font: str
    header_bounds: Any = None
    header_image: str
    header_image_npf: Optional[ImageBlock] = None
    header_image_focused: str
    header_image_poster: str
    header_image_scaled: str
    header_stretch: bool
    link_color: str
    show_avatar: bool
    show_description: bool
    show_header_image: bool
    show_title: bool
    title_color: str
    title_font: str
    title_font_weight: str


class BlogInfo(ApiModel):
    """Public information about a blog.

    Fields documented as "returned only if ..." are optional.
    """

    title: str
    posts: int
    name: str
    updated: int
    description: str
    ask: bool
    ask_anon: Optional[bool] = None
    followed: Optional[bool] = None
    likes: Optional[int] = None
    is_blocked_from_primary: Optional[bool] = None
    avatar: Optional[list[MediaObject]] = None
    url: str
    theme: Optional[BlogTheme] = None


class BlogInfoResponse(ApiModel):
    blog: BlogInfo


# ---------------------------------------------------------------------------
# POST /blog/{blog}/posts
# ---------------------------------------------------------------------------


class CreatePostState(str, Enum):
    """Initial state of a post, as understood by the creation endpoint.

    Note the spelling differs from :class:`~tumblr_api.api.post.PostState`:
    requests say ``queue``, responses say ``queued``.
    """

    PUBLISHED = "published"
    QUEUE = "queue"
    DRAFT = "draft"
    PRIVATE = "private"
    UNAPPROVED = "unapproved"


class CreatePostRequest(NpfModel):
    """Body of a create-post request.

    Attributes:
        content: NPF blocks making up the post.
        state: Initial state; the service defaults to ``published``.
        publish_on: When to publish; only honoured when ``state`` is
            ``queue``.  Sent as ISO 8601.
        date: Backdate for the post, ISO 8601.
        tags: Comma-separated tag list.
        source_url: Source attribution for the content.
        send_to_twitter: Share via a connected Twitter account.
        is_private: Private answer, if this is an answer.
        slug: Custom URL slug.
        interactability_reblog: Who can interact with this when reblogging.
    """

    content: list[ContentBlock]
    state: Optional[CreatePostState] = None
    publish_on: Optional[datetime] = None
    date: Optional[datetime] = None
    tags: Optional[str] = None
    source_url: Optional[str] = None
    send_to_twitter: Optional[bool] = None
    is_private: Optional[bool] = None
    slug: Optional[str] = None
    interactability_reblog: Optional[ReblogInteractability] = None


class CreatePostResponse(ApiModel):
    """The created post's id, sent as a string by the service."""

    id: str
