"""Content blocks: the units a post's ``content`` array is made of.

See https://www.tumblr.com/docs/npf#content-blocks.  The set of block types
is closed; a block whose ``"type"`` is not one of ``text``, ``image``,
``link``, ``audio``, ``video``, ``paywall`` or ``poll`` fails to decode.

Usage::

    from tumblr_api.npf import TextBlock, decode_block, encode_block

    block = decode_block({"type": "text", "text": "Hello world!"})
    assert encode_block(block) == {"type": "text", "text": "Hello world!"}
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, ClassVar, Literal, Optional, Union

from pydantic import BeforeValidator, Field, TypeAdapter

from tumblr_api.npf.attribution import OptionalAttribution
from tumblr_api.npf.base import NpfModel
from tumblr_api.npf.codec import decode_with, encode_model, encode_model_list, single_or_list_of_one
from tumblr_api.npf.formatting import InlineFormat, OffsetUnit, span_text
from tumblr_api.npf.media import Clickthrough, EmbedIframe, MediaObject

#: "Text used to describe the image, for screen readers. 4096 character maximum."
IMAGE_TEXT_MAX_LENGTH: int = 4096


class TextSubtype(str, Enum):
    """Presentation subtype of a text block (kebab-case on the wire)."""

    HEADING1 = "heading1"
    HEADING2 = "heading2"
    QUIRKY = "quirky"
    QUOTE = "quote"
    INDENTED = "indented"
    CHAT = "chat"
    ORDERED_LIST_ITEM = "ordered-list-item"
    UNORDERED_LIST_ITEM = "unordered-list-item"


# ---------------------------------------------------------------------------
# Block variants
# ---------------------------------------------------------------------------


class TextBlock(NpfModel):
    """A run of text with optional subtype, indentation and formatting.

    ``formatting`` decodes to ``[]`` when absent and is omitted on encode
    when empty.
    """

    omit_if_empty: ClassVar[frozenset[str]] = frozenset({"formatting"})

    type: Literal["text"] = "text"
    text: str
    subtype: Optional[TextSubtype] = None
    indent_level: Optional[int] = Field(default=None, ge=0)
    formatting: list[InlineFormat] = Field(default_factory=list)

    def formatted_spans(self, unit: Optional[OffsetUnit] = None) -> list[tuple[InlineFormat, str]]:
        """Pair each formatting span with the text it covers."""
        return [(span, span_text(self.text, span, unit)) for span in self.formatting]


class ImageBlock(NpfModel):
    """An image, described by one media object per available size.

    Attributes:
        media: Renditions of the image, typically largest first.
        colors: Colors used in the image.  May instead appear on individual
            media objects.
        feedback_token: Token for GIF-search results.
        attribution: Where the image came from.
        alt_text: Screen-reader description, 4096 characters maximum.
        caption: Caption shown under the image, 4096 characters maximum.
        exif: Undocumented EXIF bag.  Values are heterogeneous: ``"Time"``
            arrives as a number on some posts and a numeric string on others.
        clickthrough: Undocumented click-through target.
    """

    max_lengths: ClassVar[dict[str, int]] = {
        "alt_text": IMAGE_TEXT_MAX_LENGTH,
        "caption": IMAGE_TEXT_MAX_LENGTH,
    }

    type: Literal["image"] = "image"
    media: list[MediaObject]
    colors: Optional[dict[str, str]] = None
    feedback_token: Optional[str] = None
    attribution: OptionalAttribution = None
    alt_text: Optional[str] = None
    caption: Optional[str] = None
    exif: Optional[dict[str, Any]] = None
    clickthrough: Optional[Clickthrough] = None

    @property
    def exif_time(self) -> Optional[int]:
        """EXIF capture time in epoch seconds, whichever JSON type carried it.

        Values that cannot be read as a number (non-finite floats, strings
        such as ``"²"`` that are digits but not a number) read as ``None``.
        """
        if not self.exif:
            return None
        raw = self.exif.get("Time")
        if isinstance(raw, bool) or raw is None:
            return None
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            return int(raw) if math.isfinite(raw) else None
        if isinstance(raw, str):
            try:
                return int(raw.strip())
            except ValueError:
                return None
        return None


class LinkBlock(NpfModel):
    """A link card.  ``display_url`` and ``poster`` are supplied on read only."""

    type: Literal["link"] = "link"
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    site_name: Optional[str] = None
    display_url: Optional[str] = None
    poster: Optional[list[MediaObject]] = None


class AudioBlock(NpfModel):
    """An audio track, native or from a trusted third-party provider.

    Either ``media`` or ``url`` is expected to be present.  ``poster`` (usually
    album art) arrives either as a bare media object or as a one-element list.
    """

    type: Literal["audio"] = "audio"
    url: Optional[str] = None
    media: Optional[MediaObject] = None
    provider: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    poster: Annotated[Optional[MediaObject], BeforeValidator(single_or_list_of_one)] = None
    embed_html: Optional[str] = None
    embed_url: Optional[str] = None
    metadata: Any = None
    attribution: OptionalAttribution = None


class VideoBlock(NpfModel):
    """A video, native or embedded.

    The documentation describes ``poster`` as a single media object; the
    service actually sends a list.
    """

    type: Literal["video"] = "video"
    url: Optional[str] = None
    media: Optional[MediaObject] = None
    provider: Optional[str] = None
    embed_html: Optional[str] = None
    embed_iframe: Optional[EmbedIframe] = None
    embed_url: Optional[str] = None
    poster: Optional[list[MediaObject]] = None
    metadata: Any = None
    attribution: OptionalAttribution = None
    can_autoplay_on_cellular: Optional[bool] = None
    filmstrip: Optional[MediaObject] = None


class PaywallBlock(NpfModel):
    """A paywall marker in a Post+ post.

    Attributes:
        subtype: ``"cta"``, ``"divider"`` or ``"disabled"``.
        url: Where the call-to-action points.
        title: Call-to-action title.
        text: Call-to-action body text.
        color: Hex color of the divider.
        is_visible: Whether the block is shown to the current viewer.
    """

    type: Literal["paywall"] = "paywall"
    subtype: Optional[str] = None
    url: Optional[str] = None
    title: Optional[str] = None
    text: Optional[str] = None
    color: Optional[str] = None
    is_visible: Optional[bool] = None


class PollAnswer(NpfModel):
    answer_text: str
    client_id: str


class PollSettings(NpfModel):
    multiple_choice: bool
    close_status: str
    expire_after: Union[int, float]
    source: str


class PollBlock(NpfModel):
    """An (undocumented) poll.  ``created_at`` is kept as the raw string."""

    type: Literal["poll"] = "poll"
    client_id: str
    question: str
    answers: list[PollAnswer]
    settings: PollSettings
    created_at: str
    timestamp: int


ContentBlock = Annotated[
    Union[TextBlock, ImageBlock, LinkBlock, AudioBlock, VideoBlock, PaywallBlock, PollBlock],
    Field(discriminator="type"),
]

_BLOCK_ADAPTER: TypeAdapter[Any] = TypeAdapter(ContentBlock)
_BLOCK_LIST_ADAPTER: TypeAdapter[Any] = TypeAdapter(list[ContentBlock])


# ---------------------------------------------------------------------------
# Codec entry points
# ---------------------------------------------------------------------------


def decode_block(data: Any) -> ContentBlock:
    """Decode one content block.

    Raises:
        DecodeError: On unknown ``type``, missing/extra fields, or wrong shapes.
    """
    return decode_with(_BLOCK_ADAPTER.validate_python, data, "ContentBlock")


def decode_blocks(data: Any) -> list[ContentBlock]:
    """Decode a ``content`` array.  Error paths are indexed (``[2].media``)."""
    return decode_with(_BLOCK_LIST_ADAPTER.validate_python, data, "list[ContentBlock]")


def encode_block(block: ContentBlock) -> dict[str, Any]:
    """Encode one content block; the ``type`` tag is always written.

    Raises:
        EncodeError: If ``alt_text`` or ``caption`` exceeds 4096 characters.
    """
    return encode_model(block)


def encode_blocks(blocks: list[ContentBlock]) -> list[dict[str, Any]]:
    """Encode a ``content`` array.  Error paths are indexed (``[1].caption``)."""
    return encode_model_list(blocks)
