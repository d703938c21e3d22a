"""Neue Post Format (NPF) content model and codec.

Sub-modules:
    blocks      : ContentBlock union and its variants, decode/encode entry points
    formatting  : InlineFormat spans and offset helpers
    media       : MediaObject, EmbedIframe, Clickthrough
    attribution : Attribution union
    blogs       : MentionBlog
    codec       : pydantic-error translation and shape-reconciliation rules
"""

from __future__ import annotations

from tumblr_api.npf.attribution import (
    AppAttribution,
    Attribution,
    BlogAttribution,
    LinkAttribution,
    PostAttribution,
    PostReference,
)
from tumblr_api.npf.blocks import (
    IMAGE_TEXT_MAX_LENGTH,
    AudioBlock,
    ContentBlock,
    ImageBlock,
    LinkBlock,
    PaywallBlock,
    PollAnswer,
    PollBlock,
    PollSettings,
    TextBlock,
    TextSubtype,
    VideoBlock,
    decode_block,
    decode_blocks,
    encode_block,
    encode_blocks,
)
from tumblr_api.npf.blogs import MentionBlog
from tumblr_api.npf.codec import decode_model, encode_model
from tumblr_api.npf.formatting import (
    BoldFormat,
    ColorFormat,
    InlineFormat,
    InlineFormatType,
    ItalicFormat,
    LinkFormat,
    MentionFormat,
    OffsetUnit,
    SmallFormat,
    StrikethroughFormat,
    span_text,
    utf16_length,
)
from tumblr_api.npf.media import Clickthrough, EmbedIframe, MediaObject

__all__ = [
    # blocks
    "ContentBlock",
    "TextBlock",
    "TextSubtype",
    "ImageBlock",
    "LinkBlock",
    "AudioBlock",
    "VideoBlock",
    "PaywallBlock",
    "PollBlock",
    "PollAnswer",
    "PollSettings",
    "IMAGE_TEXT_MAX_LENGTH",
    "decode_block",
    "decode_blocks",
    "encode_block",
    "encode_blocks",
    # formatting
    "InlineFormat",
    "InlineFormatType",
    "BoldFormat",
    "ItalicFormat",
    "StrikethroughFormat",
    "SmallFormat",
    "LinkFormat",
    "MentionFormat",
    "ColorFormat",
    "OffsetUnit",
    "span_text",
    "utf16_length",
    # media / attribution / blogs
    "MediaObject",
    "EmbedIframe",
    "Clickthrough",
    "Attribution",
    "PostAttribution",
    "PostReference",
    "LinkAttribution",
    "BlogAttribution",
    "AppAttribution",
    "MentionBlog",
    # codec
    "decode_model",
    "encode_model",
]
