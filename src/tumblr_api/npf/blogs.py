"""Lightweight blog reference used inside NPF content.

Not the full :class:`tumblr_api.api.post.Blog` entity: mentions and
attributions carry only an identifier plus optional display data.
"""

from __future__ import annotations

from typing import Optional

from tumblr_api.npf.base import NpfModel


class MentionBlog(NpfModel):
    """A blog referenced by a mention span or an attribution.

    Attributes:
        uuid: Opaque blog identifier (``"t:..."``).
        name: Short blog name, if supplied.
        url: Blog URL, if supplied.
    """

    uuid: str
    name: Optional[str] = None
    url: Optional[str] = None
