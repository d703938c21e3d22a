"""Media objects and the small embed descriptors that travel with them.

See https://www.tumblr.com/docs/npf#media-objects.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from tumblr_api.npf.base import NpfModel


class MediaObject(NpfModel):
    """One rendition of an image, video, or audio asset.

    A media object may own a nested ``poster`` (the still frame of a GIF or
    video) and a list of alternate ``video`` renditions.  Both are owned
    exclusively by this object.

    Attributes:
        url: Canonical URL of the asset.
        mime_type: MIME type; sent on the wire as ``"type"``.
        width: Width in pixels, for images and videos.
        height: Height in pixels, for images and videos.
        original_dimensions_missing: ``True`` when ``width``/``height`` are
            the 540x405 defaults because the real size is unknown.  Only
            present when consuming posts.
        cropped: Whether this rendition is a crop of the original.
        has_original_dimensions: Whether this rendition matches the
            original's dimensions.
        media_key: Undocumented asset key.
        colors: Undocumented palette (``{"c0": "a24615", ...}``).
        poster: Still-frame rendition for GIFs.
        video: Undocumented video alternatives for an animated GIF.
    """

    url: str
    mime_type: Optional[str] = Field(default=None, alias="type")
    width: Optional[int] = None
    height: Optional[int] = None
    original_dimensions_missing: Optional[bool] = None
    cropped: Optional[bool] = None
    has_original_dimensions: Optional[bool] = None
    media_key: Optional[str] = None
    colors: Optional[dict[str, str]] = None
    poster: Optional[MediaObject] = None
    video: Optional[list[MediaObject]] = None


class EmbedIframe(NpfModel):
    """Iframe descriptor used to build an embedded video player."""

    url: str
    width: Optional[int] = None
    height: Optional[int] = None


class Clickthrough(NpfModel):
    """Undocumented click-through target attached to some image blocks."""

    web_url: str
    deeplink_url: Optional[str] = None
