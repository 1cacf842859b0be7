"""
decoders.py — Turn raw caption payloads into clean transcript text.

YouTube's timedtext endpoint speaks two families of formats:

    json3       A JSON object whose "events" each hold "segs" with "utf8"
                text fragments (the structured-segment format).
    srv1/srv3   XML where every cue is a <text> (srv1) or <p> (srv3)
                element whose body is the caption line (the markup format).

Both decoders are pure functions: no I/O, no logging.  They return the
empty string when there is nothing to extract and raise ParseError only
when the payload is structurally unreadable.
"""

from __future__ import annotations

import json
import re

from yt_caption_extractor.errors import ParseError
from yt_caption_extractor.models import CaptionPayload, PayloadFormat

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Transcripts must be strictly longer than this to count as extracted.
MIN_TRANSCRIPT_CHARS = 50

# Raw payloads shorter than this are empty documents or error stubs.
MIN_PAYLOAD_CHARS = 100

_WHITESPACE = re.compile(r"\s+")

# One cue element and its body.  Backreference keeps <text> and <p> paired.
_CUE_ELEMENT = re.compile(r"<(text|p)\b[^>]*>(.*?)</\1>", re.DOTALL)

# Any raw inline tag (<s>, <font ...>, <br/>) inside a cue body.
_RAW_TAG = re.compile(r"<[^>]+>")

# Tags revealed by entity decoding ("&lt;i&gt;").  Requires a letter after
# "<" so that plain comparisons like "1 < 2 and 3 > 1" survive.
_DECODED_TAG = re.compile(r"</?[A-Za-z][^<>]*>")

# The five character entities YouTube emits.  &amp; goes first: srv1 bodies
# are often double-encoded ("&amp;#39;"), and this order unwraps them.
_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace (newlines included) with one space."""
    return _WHITESPACE.sub(" ", text).strip()


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def is_acceptable(text: str) -> bool:
    """True when decoded text is long enough to count as a transcript."""
    return len(text) > MIN_TRANSCRIPT_CHARS


# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------

def decode_structured(raw: str | dict) -> str:
    """
    Decode a json3 payload.

    Every segment's text is trimmed, empty ones are dropped, and the rest
    are joined in order with single spaces.

    Args:
        raw: The JSON document as text, or an already-parsed dict.

    Returns:
        The transcript text (possibly empty).

    Raises:
        ParseError: If the payload isn't JSON, isn't an object, or carries
                    non-string segment text.
    """
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ParseError("json3 caption payload", str(exc)) from exc
    else:
        data = raw

    if not isinstance(data, dict):
        raise ParseError("json3 caption payload", "top level is not an object")

    events = data.get("events") or []
    if not isinstance(events, list):
        raise ParseError("json3 caption payload", "events is not an array")

    parts: list[str] = []
    for event in events:
        # Null or non-object events carry no text.
        if not isinstance(event, dict):
            continue
        for seg in event.get("segs") or []:
            if not isinstance(seg, dict):
                continue
            utf8 = seg.get("utf8") or ""
            if not isinstance(utf8, str):
                raise ParseError("json3 caption payload", f"utf8 is {type(utf8).__name__}, not a string")
            text = utf8.strip()
            if text:
                parts.append(text)

    return collapse_whitespace(" ".join(parts))


def decode_markup(raw: str) -> str:
    """
    Decode an srv1/srv3 payload.

    Cue bodies are found by tag-delimited matching rather than an XML
    parser, so truncated or slightly malformed documents still yield
    whatever complete cues they contain.
    """
    parts: list[str] = []
    for match in _CUE_ELEMENT.finditer(raw):
        body = _RAW_TAG.sub("", match.group(2))
        body = decode_entities(body)
        body = _DECODED_TAG.sub("", body)
        body = collapse_whitespace(body)
        if body:
            parts.append(body)

    return collapse_whitespace(" ".join(parts))


def decode_payload(payload: CaptionPayload) -> str:
    """Dispatch to the decoder matching the payload's format tag."""
    if payload.format is PayloadFormat.STRUCTURED:
        return decode_structured(payload.raw)
    return decode_markup(payload.raw)
