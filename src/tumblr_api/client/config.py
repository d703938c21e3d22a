"""Endpoint constants used by :class:`~tumblr_api.client.client.TumblrClient`.

Paths are relative to ``Settings.api_base_url`` (``https://api.tumblr.com/v2``
by default).  ``{blog}`` is a blog identifier: the short name, the full
hostname, or the blog UUID.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# User endpoints
# ---------------------------------------------------------------------------

USER_INFO_PATH: str = "/user/info"
"""``GET``: the authenticated user's account and blogs."""

USER_LIMITS_PATH: str = "/user/limits"
"""``GET``: the authenticated user's daily rate limits."""

# ---------------------------------------------------------------------------
# Blog endpoints
# ---------------------------------------------------------------------------

BLOG_INFO_PATH: str = "/blog/{blog}/info"
"""``GET``: public information about a blog."""

BLOG_POSTS_PATH: str = "/blog/{blog}/posts"
"""``POST``: create a post in Neue Post Format."""

BLOG_POST_PATH: str = "/blog/{blog}/posts/{post_id}"
"""``GET``: fetch a single post.  Requested with ``post_format=npf``."""

POST_FORMAT_NPF: str = "npf"
"""Value of the ``post_format`` query parameter selecting NPF output."""

# ---------------------------------------------------------------------------
# Multipart uploads
# ---------------------------------------------------------------------------

MULTIPART_JSON_PART: str = "json"
"""Name of the multipart part that carries the JSON request body."""

MULTIPART_FILE_NAME: str = "a"
"""File name sent for every media part.  Required by the service but unchecked."""
