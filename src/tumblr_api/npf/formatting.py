"""Inline formatting spans layered over a text block's ``text``.

On the wire a span is one flat object: ``{"start": 5, "end": 9, "type":
"bold"}``.  In memory the range and the formatting kind are kept apart, so
:class:`InlineFormat` flattens ``format`` into the span on encode and
splits it back out on decode.

Offsets
-------
The documentation never states the offset unit.  The service is a
JavaScript platform, so offsets are taken to be UTF-16 code units by
default; :class:`OffsetUnit` lets callers switch to code points.  The two
agree for text without characters outside the Basic Multilingual Plane.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer, model_validator

from tumblr_api.npf.base import NpfModel
from tumblr_api.npf.blogs import MentionBlog


class OffsetUnit(str, Enum):
    """Unit in which ``start``/``end`` offsets are counted."""

    UTF16 = "utf16"
    CODEPOINT = "codepoint"


# ---------------------------------------------------------------------------
# Formatting kinds
# ---------------------------------------------------------------------------


class BoldFormat(NpfModel):
    type: Literal["bold"] = "bold"


class ItalicFormat(NpfModel):
    type: Literal["italic"] = "italic"


class StrikethroughFormat(NpfModel):
    type: Literal["strikethrough"] = "strikethrough"


class SmallFormat(NpfModel):
    type: Literal["small"] = "small"


class LinkFormat(NpfModel):
    type: Literal["link"] = "link"
    url: str


class MentionFormat(NpfModel):
    type: Literal["mention"] = "mention"
    blog: MentionBlog


class ColorFormat(NpfModel):
    """Colored text.  ``hex`` is standard hex notation with a leading ``#``."""

    type: Literal["color"] = "color"
    hex: str


InlineFormatType = Annotated[
    Union[
        BoldFormat,
        ItalicFormat,
        StrikethroughFormat,
        SmallFormat,
        LinkFormat,
        MentionFormat,
        ColorFormat,
    ],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# Span
# ---------------------------------------------------------------------------


class InlineFormat(NpfModel):
    """A formatting kind applied to ``text[start:end]``.

    Attributes:
        start: Inclusive start offset.
        end: Exclusive end offset; never less than ``start``.
        format: The formatting kind.
    """

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    format: InlineFormatType

    @model_validator(mode="before")
    @classmethod
    def _unflatten(cls, data: Any) -> Any:
        # Wire shape has the kind's fields beside start/end; in-memory
        # construction passes ``format`` explicitly.
        if isinstance(data, dict) and "format" not in data:
            kind = dict(data)
            span = {key: kind.pop(key) for key in ("start", "end") if key in kind}
            return {**span, "format": kind}
        return data

    @model_validator(mode="after")
    def _check_range(self) -> InlineFormat:
        if self.start > self.end:
            raise ValueError(f"start ({self.start}) must not exceed end ({self.end})")
        return self

    @model_serializer(mode="wrap")
    def _serialize(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        kind = data.pop("format")
        return {**kind, **data}


# ---------------------------------------------------------------------------
# Offset helpers
# ---------------------------------------------------------------------------


def utf16_length(text: str) -> int:
    """Return the length of *text* in UTF-16 code units."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def span_text(text: str, span: InlineFormat, unit: Optional[OffsetUnit] = None) -> str:
    """Return the slice of *text* covered by *span*.

    Args:
        text: The sibling ``text`` of the span's text block.
        span: The formatting span.
        unit: Offset unit; defaults to ``Settings.text_offset_unit``.

    Returns:
        The covered substring.  Offsets past the end are clamped, as
        string slicing does.
    """
    if unit is None:
        from tumblr_api.config.settings import get_settings

        unit = get_settings().text_offset_unit
    if unit is OffsetUnit.CODEPOINT:
        return text[span.start:span.end]
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    return encoded[span.start * 2:span.end * 2].decode("utf-16-le", errors="surrogatepass")
