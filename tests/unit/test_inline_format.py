"""Tests for inline formatting spans and offset helpers."""

from __future__ import annotations

import pytest

from tumblr_api.config.settings import get_settings
from tumblr_api.core.exceptions import DecodeError, DecodeErrorKind
from tumblr_api.npf import (
    BoldFormat,
    ColorFormat,
    InlineFormat,
    LinkFormat,
    MentionBlog,
    MentionFormat,
    OffsetUnit,
    TextBlock,
    decode_block,
    encode_block,
    span_text,
    utf16_length,
)

_TEXT = "Hello world! 👋 from @staff"


def _text_block(*formatting: dict) -> dict:
    return {"type": "text", "text": _TEXT, "formatting": list(formatting)}


class TestInlineFormatCodec:
    @pytest.mark.parametrize(
        "span",
        [
            {"start": 0, "end": 5, "type": "bold"},
            {"start": 0, "end": 5, "type": "italic"},
            {"start": 0, "end": 5, "type": "strikethrough"},
            {"start": 0, "end": 5, "type": "small"},
            {"start": 6, "end": 11, "type": "link", "url": "https://example.com"},
            {"start": 21, "end": 27, "type": "mention", "blog": {"uuid": "t:abc", "name": "staff"}},
            {"start": 0, "end": 12, "type": "color", "hex": "#ff492f"},
        ],
        ids=lambda s: s["type"],
    )
    def test_every_kind_round_trips_flat(self, span: dict) -> None:
        """Each formatting kind decodes from, and encodes back to, one flat object."""
        block = decode_block(_text_block(span))

        assert encode_block(block)["formatting"] == [span]

    def test_format_is_split_from_range(self) -> None:
        block = decode_block(_text_block({"start": 6, "end": 11, "type": "link", "url": "https://example.com"}))
        span = block.formatting[0]

        assert (span.start, span.end) == (6, 11)
        assert span.format == LinkFormat(url="https://example.com")

    def test_constructed_span_encodes_flat(self) -> None:
        block = TextBlock(
            text=_TEXT,
            formatting=[
                InlineFormat(start=0, end=5, format=BoldFormat()),
                InlineFormat(start=21, end=27, format=MentionFormat(blog=MentionBlog(uuid="t:abc"))),
                InlineFormat(start=0, end=1, format=ColorFormat(hex="#000000")),
            ],
        )

        assert encode_block(block)["formatting"] == [
            {"start": 0, "end": 5, "type": "bold"},
            {"start": 21, "end": 27, "type": "mention", "blog": {"uuid": "t:abc"}},
            {"start": 0, "end": 1, "type": "color", "hex": "#000000"},
        ]

    def test_empty_span_is_allowed(self) -> None:
        """start == end is a valid, empty range."""
        block = decode_block(_text_block({"start": 3, "end": 3, "type": "bold"}))

        assert block.formatting[0].start == block.formatting[0].end == 3

    def test_start_after_end_is_constraint_violation(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_block(_text_block({"start": 6, "end": 2, "type": "bold"}))

        assert exc_info.value.kind is DecodeErrorKind.CONSTRAINT_VIOLATION
        assert exc_info.value.path == "formatting[0]"

    def test_negative_offset_is_constraint_violation(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_block(_text_block({"start": -1, "end": 2, "type": "bold"}))

        assert exc_info.value.kind is DecodeErrorKind.CONSTRAINT_VIOLATION
        assert exc_info.value.path == "formatting[0].start"

    def test_start_after_end_rejected_in_memory(self) -> None:
        """The range invariant holds for constructed spans too."""
        with pytest.raises(ValueError):
            InlineFormat(start=4, end=1, format=BoldFormat())

    def test_unknown_format_kind(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_block(_text_block({"start": 0, "end": 1, "type": "sparkle"}))

        assert exc_info.value.kind is DecodeErrorKind.UNKNOWN_VARIANT
        assert exc_info.value.path == "formatting[0].type"

    def test_link_without_url_reports_wire_path(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_block(_text_block({"start": 0, "end": 1, "type": "link"}))

        assert exc_info.value.kind is DecodeErrorKind.MISSING_FIELD
        assert exc_info.value.path == "formatting[0].url"


class TestOffsets:
    def test_utf16_length_counts_surrogate_pairs(self) -> None:
        assert utf16_length("abc") == 3
        assert utf16_length("👋") == 2
        assert utf16_length(_TEXT) == len(_TEXT) + 1

    def test_lone_surrogate_counts_as_one_unit(self) -> None:
        """A truncated emoji (``"\\ud800"`` in JSON) is one code unit for both helpers."""
        text = "a\ud800b"
        span = InlineFormat(start=1, end=3, format=BoldFormat())

        assert utf16_length(text) == 3
        assert span_text(text, span, OffsetUnit.UTF16) == "\ud800b"

    def test_span_text_in_utf16_units(self) -> None:
        """Offsets after an astral character are shifted by one in UTF-16."""
        span = InlineFormat(start=21, end=27, format=BoldFormat())

        assert span_text(_TEXT, span, OffsetUnit.UTF16) == "@staff"

    def test_span_text_in_code_points(self) -> None:
        span = InlineFormat(start=20, end=26, format=BoldFormat())

        assert span_text(_TEXT, span, OffsetUnit.CODEPOINT) == "@staff"

    def test_units_agree_before_astral_character(self) -> None:
        span = InlineFormat(start=0, end=5, format=BoldFormat())

        assert span_text(_TEXT, span, OffsetUnit.UTF16) == span_text(_TEXT, span, OffsetUnit.CODEPOINT) == "Hello"

    def test_default_unit_comes_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """With no explicit unit, TUMBLR_TEXT_OFFSET_UNIT decides how offsets are read."""
        span = InlineFormat(start=20, end=26, format=BoldFormat())

        assert span_text(_TEXT, span) == " @staf"

        monkeypatch.setenv("TUMBLR_TEXT_OFFSET_UNIT", "codepoint")
        get_settings.cache_clear()

        assert span_text(_TEXT, span) == "@staff"

    def test_formatted_spans_pairs_text(self) -> None:
        block = decode_block(_text_block(
            {"start": 0, "end": 5, "type": "bold"},
            {"start": 21, "end": 27, "type": "italic"},
        ))

        covered = [text for _, text in block.formatted_spans(OffsetUnit.UTF16)]

        assert covered == ["Hello", "@staff"]
