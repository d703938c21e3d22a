"""Attribution objects describing where a piece of content came from.

See https://www.tumblr.com/docs/npf#attributions.  The ``post`` variant
references the source post by id only, never by embedding a full post.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BeforeValidator, Field

from tumblr_api.npf.base import NpfModel
from tumblr_api.npf.blogs import MentionBlog
from tumblr_api.npf.codec import empty_list_as_absent
from tumblr_api.npf.media import MediaObject


class PostReference(NpfModel):
    """Minimal cross-reference to a post: its id as a string."""

    id: str


class PostAttribution(NpfModel):
    """Content reblogged or quoted from another post."""

    type: Literal["post"] = "post"
    url: str
    post: PostReference
    blog: MentionBlog


class LinkAttribution(NpfModel):
    """Content sourced from an arbitrary URL.

    Attributes:
        url: The attributed URL.
        url_redirect: Undocumented ``href.li`` redirect form of ``url``.
    """

    type: Literal["link"] = "link"
    url: str
    url_redirect: Optional[str] = None


class BlogAttribution(NpfModel):
    """Content attributed to a blog as a whole."""

    type: Literal["blog"] = "blog"
    blog: MentionBlog


class AppAttribution(NpfModel):
    """Content embedded from a third-party app.

    Attributes:
        url: Canonical URL of the source content in the app.
        app_name: Name of the application.
        display_text: Text clients should show alongside the attribution.
        logo: Logo the client should display for the app.
    """

    type: Literal["app"] = "app"
    url: str
    app_name: Optional[str] = None
    display_text: Optional[str] = None
    logo: Optional[MediaObject] = None


Attribution = Annotated[
    Union[PostAttribution, LinkAttribution, BlogAttribution, AppAttribution],
    Field(discriminator="type"),
]

#: Field type for an optional attribution that may arrive as ``[]``.
OptionalAttribution = Annotated[Optional[Attribution], BeforeValidator(empty_list_as_absent)]
