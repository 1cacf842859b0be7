"""
strategies.py — The individual ways of getting a transcript.

Each strategy is a plain function taking a StrategyContext and returning a
Transcript.  A strategy that finds nothing raises NotAvailable; anything
else it raises is a fault.  The orchestrator in extractor.py decides what
to run and turns every call into a StrategyOutcome, so no strategy needs
its own catch-all.

    data_api          YouTube Data API track listing + timedtext download
                      (needs an API key).
    transcript_api    youtube-transcript-api, target language first, then
                      whatever the video has.
    page_scrape       captionTracks embedded in the public watch page.
    language_sweep    timedtext requests for a fixed list of language
                      variants, skipping discovery entirely.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass

import requests
from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi

from yt_caption_extractor import transport
from yt_caption_extractor.catalog import resolve_track
from yt_caption_extractor.decoders import collapse_whitespace, decode_markup, is_acceptable
from yt_caption_extractor.errors import NotAvailable, ParseError, TransientError
from yt_caption_extractor.fetcher import TIMEDTEXT_URL, download_payload, fetch_track_text
from yt_caption_extractor.models import CaptionTrack, PayloadFormat, TrackKind, Transcript

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch"

CAPTIONS_SOURCE = "captions"

# Locate the start of the track array.  Parsing is done with raw_decode from
# the opening bracket, so nested arrays inside track entries are fine.  The
# alternate pattern anchors on the player renderer and tolerates
# pretty-printed JSON.
_CAPTION_TRACKS = re.compile(r'"captionTracks":\s*(?=\[)')
_CAPTION_TRACKS_ALT = re.compile(
    r'"captions"\s*:.*?"playerCaptionsTracklistRenderer"\s*:.*?"captionTracks"\s*:\s*(?=\[)',
    re.DOTALL,
)


@dataclass(frozen=True)
class StrategyContext:
    """Everything a strategy needs for one video."""
    video_id: str
    language: str
    session: requests.Session
    timeout: float
    user_agent: str
    api_key: str | None = None


# ---------------------------------------------------------------------------
# Primary: Data API listing + timedtext content
# ---------------------------------------------------------------------------

def data_api(ctx: StrategyContext) -> Transcript:
    """Resolve a track through the Data API, then download it from timedtext."""
    if not ctx.api_key:
        raise NotAvailable(ctx.video_id, "no API key configured")

    track = resolve_track(ctx.session, ctx.video_id, ctx.api_key, ctx.language, timeout=ctx.timeout)
    text, _fmt = fetch_track_text(ctx.session, ctx.video_id, track.language, timeout=ctx.timeout)
    return Transcript(
        text=text,
        source=CAPTIONS_SOURCE,
        language=track.language,
        method=f"youtube-data-api-{track.kind.value}",
    )


# ---------------------------------------------------------------------------
# Second: youtube-transcript-api
# ---------------------------------------------------------------------------

def _fetch_with_library(ctx: StrategyContext):
    api = YouTubeTranscriptApi(http_client=ctx.session)
    try:
        return api.fetch(ctx.video_id, languages=[ctx.language])
    except (CouldNotRetrieveTranscript, requests.RequestException) as exc:
        logger.info("  %s captions failed (%s), trying any available language",
                    ctx.language, type(exc).__name__)

    for listed in api.list(ctx.video_id):
        return listed.fetch()
    raise NotAvailable(ctx.video_id, "youtube-transcript-api listed no transcripts")


def transcript_api(ctx: StrategyContext) -> Transcript:
    """Delegate to youtube-transcript-api and join its cues into one text."""
    fetched = _fetch_with_library(ctx)
    text = collapse_whitespace(" ".join(snippet.text for snippet in fetched))
    if not is_acceptable(text):
        raise NotAvailable(ctx.video_id, f"library transcript too short ({len(text)} chars)")

    return Transcript(
        text=text,
        source=CAPTIONS_SOURCE,
        language=getattr(fetched, "language_code", None) or ctx.language,
        method="youtube-transcript-api",
    )


# ---------------------------------------------------------------------------
# Third: watch-page scrape
# ---------------------------------------------------------------------------

def find_caption_tracks(html: str) -> list[dict]:
    """
    Pull the player's captionTracks array out of a watch page.

    Raises:
        ParseError: Neither pattern matched, or the array isn't valid JSON.
    """
    match = _CAPTION_TRACKS.search(html)
    if match is None:
        logger.debug("  captionTracks not found, trying alternate pattern")
        match = _CAPTION_TRACKS_ALT.search(html)
    if match is None:
        raise ParseError("watch page", "no captionTracks found")

    try:
        tracks, _end = json.JSONDecoder().raw_decode(html, match.end())
    except json.JSONDecodeError as exc:
        raise ParseError("captionTracks", str(exc)) from exc
    if not isinstance(tracks, list):
        raise ParseError("captionTracks", "not an array")
    return tracks


def _track_name(entry: dict) -> str:
    name = entry.get("name") or {}
    if "simpleText" in name:
        return name["simpleText"]
    return "".join(run.get("text", "") for run in name.get("runs", []))


def select_scraped_track(entries: list[dict], language: str) -> CaptionTrack | None:
    """Exact language code, then language prefix, then the first entry."""
    if not entries:
        return None

    chosen = next((e for e in entries if e.get("languageCode") == language), None)
    if chosen is None:
        chosen = next((e for e in entries if (e.get("languageCode") or "").startswith(language)), None)
    if chosen is None:
        chosen = entries[0]

    return CaptionTrack(
        language=chosen.get("languageCode") or "unknown",
        kind=TrackKind.from_api(chosen.get("kind")),
        name=_track_name(chosen),
        locator=chosen.get("baseUrl") or "",
    )


def page_scrape(ctx: StrategyContext) -> Transcript:
    """Discover tracks from the watch page and download the chosen baseUrl."""
    response = transport.get(
        ctx.session,
        WATCH_URL,
        params={"v": ctx.video_id},
        headers={"User-Agent": ctx.user_agent},
        timeout=ctx.timeout,
    )
    if not response.ok:
        raise TransientError(WATCH_URL, f"HTTP {response.status_code}")

    track = select_scraped_track(find_caption_tracks(response.text), ctx.language)
    if track is None or not track.locator:
        raise NotAvailable(ctx.video_id, "no scraped track with a baseUrl")
    logger.info("  Selected scraped track %r (%s)", track.name or "Unknown", track.language)

    content = transport.get(ctx.session, track.locator, timeout=ctx.timeout)
    if not content.ok:
        raise TransientError(transport.mask_url(track.locator), f"HTTP {content.status_code}")

    text = decode_markup(content.text or "")
    if not is_acceptable(text):
        raise NotAvailable(ctx.video_id, f"scraped track too short ({len(text)} chars)")

    return Transcript(
        text=text,
        source=CAPTIONS_SOURCE,
        language=track.language,
        method="timedtext-api",
    )


# ---------------------------------------------------------------------------
# Last resort: language-code sweep
# ---------------------------------------------------------------------------

def sweep_languages(language: str) -> list[str]:
    """Codes tried by language_sweep: plain, auto-generated, two regional."""
    return [language, f"a.{language}", f"{language}-US", f"{language}-GB"]


def language_sweep(ctx: StrategyContext) -> Transcript:
    """Ask timedtext for srv3 captions under each candidate language code."""
    for code in sweep_languages(ctx.language):
        params = {"v": ctx.video_id, "lang": code, "fmt": "srv3"}
        try:
            payload = download_payload(
                ctx.session,
                TIMEDTEXT_URL,
                ctx.video_id,
                params=params,
                payload_format=PayloadFormat.MARKUP,
                fmt="srv3",
                timeout=ctx.timeout,
            )
        except (NotAvailable, TransientError) as exc:
            logger.info("  %s: %s", code, exc.message)
            continue

        text = decode_markup(payload.raw)
        if is_acceptable(text):
            return Transcript(
                text=text,
                source=CAPTIONS_SOURCE,
                language=code,
                method="language-fallback",
            )
        logger.info("  %s: too short (%d chars)", code, len(text))

    raise NotAvailable(ctx.video_id, "no language variant returned captions")
