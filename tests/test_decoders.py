"""
test_decoders.py — Tests for the json3 and srv1/srv3 caption decoders.

All pure functions, so these run without mocks or network.
"""

from __future__ import annotations

import json

import pytest

from yt_caption_extractor.decoders import (
    collapse_whitespace,
    decode_markup,
    decode_payload,
    decode_structured,
    is_acceptable,
)
from yt_caption_extractor.errors import ParseError
from yt_caption_extractor.models import CaptionPayload, PayloadFormat


# ---------------------------------------------------------------------------
# Structured-segment (json3)
# ---------------------------------------------------------------------------

class TestDecodeStructured:

    def test_segments_are_trimmed_and_single_spaced(self) -> None:
        payload = {"events": [{"segs": [{"utf8": "Hello "}, {"utf8": "world"}]}]}
        assert decode_structured(payload) == "Hello world"

    def test_accepts_json_text(self) -> None:
        payload = json.dumps({"events": [{"segs": [{"utf8": "Hello "}, {"utf8": "world"}]}]})
        assert decode_structured(payload) == "Hello world"

    def test_events_concatenated_in_order(self) -> None:
        payload = {"events": [
            {"tStartMs": 0, "segs": [{"utf8": "first"}]},
            {"tStartMs": 1000, "segs": [{"utf8": "second"}, {"utf8": " third"}]},
        ]}
        assert decode_structured(payload) == "first second third"

    def test_events_without_segments_are_skipped(self) -> None:
        payload = {"events": [
            {"tStartMs": 0, "dDurationMs": 500},
            {"segs": [{"utf8": "\n"}]},
            {"segs": [{"utf8": "only words"}]},
        ]}
        assert decode_structured(payload) == "only words"

    def test_newlines_and_runs_of_spaces_collapse(self) -> None:
        payload = {"events": [{"segs": [{"utf8": "line one\nline   two"}]}]}
        assert decode_structured(payload) == "line one line two"

    def test_missing_events_gives_empty_string(self) -> None:
        assert decode_structured({"wireMagic": "pb3"}) == ""

    def test_invalid_json_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            decode_structured("<transcript>not json</transcript>")

    def test_non_object_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            decode_structured("[1, 2, 3]")

    def test_null_events_and_segments_are_skipped(self) -> None:
        data = {"events": [None, 3, {"segs": [None, "x", {"utf8": "still here"}]}]}
        assert decode_structured(data) == "still here"

    def test_non_string_utf8_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            decode_structured({"events": [{"segs": [{"utf8": 42}]}]})

    def test_events_not_an_array_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            decode_structured({"events": {"segs": []}})


# ---------------------------------------------------------------------------
# Markup (srv1 / srv3)
# ---------------------------------------------------------------------------

class TestDecodeMarkup:

    def test_srv1_text_elements(self) -> None:
        xml = (
            '<?xml version="1.0" encoding="utf-8" ?><transcript>'
            '<text start="0.5" dur="1.2">Hello there</text>'
            '<text start="1.7" dur="2.0">general Kenobi</text>'
            "</transcript>"
        )
        assert decode_markup(xml) == "Hello there general Kenobi"

    def test_srv3_paragraph_elements_with_inline_spans(self) -> None:
        xml = (
            '<timedtext format="3"><body>'
            '<p t="0" d="1500"><s ac="0">so</s><s t="300"> today</s></p>'
            '<p t="1500" d="900">we begin</p>'
            "</body></timedtext>"
        )
        assert decode_markup(xml) == "so today we begin"

    def test_entities_decode_to_literal_characters(self) -> None:
        xml = "<transcript><text>Tom &amp; Jerry say 1 &lt; 2 &gt; 0</text></transcript>"
        assert decode_markup(xml) == "Tom & Jerry say 1 < 2 > 0"

    def test_quote_and_apostrophe_entities(self) -> None:
        xml = "<transcript><text>&quot;it&#39;s fine&quot;</text></transcript>"
        assert decode_markup(xml) == "\"it's fine\""

    def test_double_encoded_apostrophe(self) -> None:
        xml = "<transcript><text>don&amp;#39;t stop</text></transcript>"
        assert decode_markup(xml) == "don't stop"

    def test_encoded_tags_leave_no_residue(self) -> None:
        xml = (
            "<transcript>"
            '<text>&lt;font color=&quot;#E5E5E5&quot;&gt;whispering&lt;/font&gt; now</text>'
            "<text>&lt;i&gt;music&lt;/i&gt;</text>"
            "</transcript>"
        )
        result = decode_markup(xml)
        assert result == "whispering now music"
        assert "<" not in result and ">" not in result

    def test_multiline_cue_bodies(self) -> None:
        xml = "<transcript><text start='1'>first line\nsecond line</text></transcript>"
        assert decode_markup(xml) == "first line second line"

    def test_empty_cues_are_dropped(self) -> None:
        xml = "<transcript><text>  </text><text>words</text><text></text></transcript>"
        assert decode_markup(xml) == "words"

    def test_no_cues_gives_empty_string(self) -> None:
        assert decode_markup("<html><body>Sorry</body></html>") == ""


# ---------------------------------------------------------------------------
# Helpers and dispatch
# ---------------------------------------------------------------------------

class TestHelpers:

    def test_collapse_whitespace(self) -> None:
        assert collapse_whitespace("  a \n\t b   c ") == "a b c"

    def test_threshold_is_strictly_greater_than_fifty(self) -> None:
        assert not is_acceptable("x" * 50)
        assert is_acceptable("x" * 51)

    def test_decode_payload_dispatches_on_format(self) -> None:
        structured = CaptionPayload(
            raw='{"events": [{"segs": [{"utf8": "from json"}]}]}',
            format=PayloadFormat.STRUCTURED,
            fmt="json3",
        )
        markup = CaptionPayload(
            raw="<transcript><text>from xml</text></transcript>",
            format=PayloadFormat.MARKUP,
            fmt="srv1",
        )
        assert decode_payload(structured) == "from json"
        assert decode_payload(markup) == "from xml"
