"""
fetcher.py — Download caption content from YouTube's timedtext endpoint.

The endpoint serves the same track in several wire formats.  None of them
is reliably available for every video, so fetch_track_text() walks an
ordered list and keeps the first one that decodes to a real transcript.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import requests

from yt_caption_extractor import transport
from yt_caption_extractor.decoders import (
    MIN_PAYLOAD_CHARS,
    decode_payload,
    is_acceptable,
)
from yt_caption_extractor.errors import CaptionError, NotAvailable, TransientError
from yt_caption_extractor.models import CaptionPayload, PayloadFormat

logger = logging.getLogger(__name__)

TIMEDTEXT_URL = "https://www.youtube.com/api/timedtext"


@dataclass(frozen=True)
class WireFormat:
    fmt: str
    format: PayloadFormat


# Tried in this order.
FORMATS: tuple[WireFormat, ...] = (
    WireFormat("srv3", PayloadFormat.MARKUP),
    WireFormat("json3", PayloadFormat.STRUCTURED),
    WireFormat("srv1", PayloadFormat.MARKUP),
)


def download_payload(
    session: requests.Session,
    url: str,
    video_id: str,
    *,
    params: dict | None = None,
    payload_format: PayloadFormat,
    fmt: str,
    timeout: float,
) -> CaptionPayload:
    """
    GET a caption document and wrap it as a CaptionPayload.

    Raises:
        TransientError: Non-success status or network fault.
        NotAvailable:   The body is shorter than MIN_PAYLOAD_CHARS.
    """
    response = transport.get(session, url, params=params, timeout=timeout)
    if not response.ok:
        raise TransientError(transport.mask_url(url), f"HTTP {response.status_code}")

    body = response.text or ""
    if len(body) < MIN_PAYLOAD_CHARS:
        raise NotAvailable(video_id, f"{fmt} payload too short ({len(body)} chars)")

    return CaptionPayload(raw=body, format=payload_format, fmt=fmt)


def fetch_track_text(
    session: requests.Session,
    video_id: str,
    language: str,
    *,
    timeout: float,
    formats: tuple[WireFormat, ...] = FORMATS,
) -> tuple[str, str]:
    """
    Fetch and decode one language's captions, trying each wire format.

    Args:
        session:  HTTP session to use.
        video_id: The 11-character video ID.
        language: Language code of the track to download.
        timeout:  Per-request timeout in seconds.
        formats:  Wire formats in the order to try them.

    Returns:
        (text, fmt) for the first format whose decoded text is long enough.

    Raises:
        NotAvailable: Every format failed or came back too short.
    """
    for wire in formats:
        params = {"v": video_id, "lang": language, "fmt": wire.fmt}
        try:
            payload = download_payload(
                session,
                TIMEDTEXT_URL,
                video_id,
                params=params,
                payload_format=wire.format,
                fmt=wire.fmt,
                timeout=timeout,
            )
            text = decode_payload(payload)
        except CaptionError as exc:
            logger.info("  %s: %s", wire.fmt, exc.message)
            continue

        if is_acceptable(text):
            logger.info("  %s: decoded %d chars", wire.fmt, len(text))
            return text, wire.fmt
        logger.info("  %s: decoded text too short (%d chars)", wire.fmt, len(text))

    raise NotAvailable(video_id, f"no timedtext format produced a transcript for {language!r}")
