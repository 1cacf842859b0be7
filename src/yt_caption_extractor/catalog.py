"""
catalog.py — List a video's caption tracks through the YouTube Data API v3.

This is the primary strategy's discovery half: it needs an API key, asks
the official captions.list endpoint which tracks exist, and picks one.
Downloading the chosen track is fetcher.py's job.
"""

from __future__ import annotations

import logging

import requests

from yt_caption_extractor import transport
from yt_caption_extractor.errors import AuthError, NotAvailable, ParseError, TransientError
from yt_caption_extractor.models import CaptionTrack, TrackKind

logger = logging.getLogger(__name__)

CAPTIONS_LIST_URL = "https://www.googleapis.com/youtube/v3/captions"

# HTTP codes the Data API uses for a missing, invalid or restricted key.
_AUTH_FAILURE_CODES = (401, 403)


def list_tracks(
    session: requests.Session,
    video_id: str,
    api_key: str,
    *,
    timeout: float,
) -> list[CaptionTrack]:
    """
    Return every caption track the Data API reports for a video.

    Raises:
        AuthError:      The key was rejected (401/403).
        TransientError: Any other non-success response or a network fault.
        ParseError:     The body wasn't the expected JSON.
        NotAvailable:   The video has no caption tracks.
    """
    params = {"part": "snippet", "videoId": video_id, "key": api_key}
    response = transport.get(session, CAPTIONS_LIST_URL, params=params, timeout=timeout)

    if response.status_code in _AUTH_FAILURE_CODES:
        raise AuthError(response.status_code, response.text[:200])
    if not response.ok:
        raise TransientError(CAPTIONS_LIST_URL, f"HTTP {response.status_code}")

    try:
        data = response.json()
    except ValueError as exc:
        raise ParseError("captions.list response", str(exc)) from exc

    if not isinstance(data, dict):
        raise ParseError("captions.list response", "top level is not an object")

    items = data.get("items") or []
    if not items:
        raise NotAvailable(video_id, "caption track list is empty")

    tracks = []
    for item in items:
        snippet = item.get("snippet") or {}
        tracks.append(CaptionTrack(
            language=snippet.get("language", ""),
            kind=TrackKind.from_api(snippet.get("trackKind")),
            name=snippet.get("name", ""),
            locator=item.get("id", ""),
        ))

    logger.info("Found %d caption track(s) for %s", len(tracks), video_id)
    for track in tracks:
        logger.debug("  %s (%s) - %s", track.name or "<unnamed>", track.language, track.kind.value)
    return tracks


def select_track(tracks: list[CaptionTrack], language: str) -> CaptionTrack:
    """
    Pick the best track for the target language.

    Priority, first match wins:
        1. target language, human-authored
        2. target language, auto-generated
        3. any human-authored track
        4. any auto-generated track
        5. whatever came first
    """
    if not tracks:
        raise ValueError("select_track() needs at least one track")

    rules = (
        lambda t: t.language == language and t.kind is TrackKind.STANDARD,
        lambda t: t.language == language and t.kind is TrackKind.AUTO,
        lambda t: t.kind is TrackKind.STANDARD,
        lambda t: t.kind is TrackKind.AUTO,
    )
    for rule in rules:
        for track in tracks:
            if rule(track):
                return track
    return tracks[0]


def resolve_track(
    session: requests.Session,
    video_id: str,
    api_key: str,
    language: str,
    *,
    timeout: float,
) -> CaptionTrack:
    """List the tracks and return the selected one."""
    track = select_track(list_tracks(session, video_id, api_key, timeout=timeout), language)
    logger.info("Selected track %r (%s, %s)", track.name, track.language, track.kind.value)
    return track
