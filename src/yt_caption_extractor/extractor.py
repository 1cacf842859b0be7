"""
extractor.py — Caption extraction pipeline.

This is the heart of yt-caption-extractor.  It exposes:

    1. Parsing YouTube URLs / IDs   → parse_video_id()
    2. Running every strategy       → extract_captions()
    3. Formatting the result        → format_json()

extract_captions() walks an ordered list of strategies and stops at the
first one that produces a transcript.  Strategies never abort the walk:
whatever goes wrong inside one is recorded as a StrategyOutcome and the
next strategy runs.  Running out of strategies is a normal result, not an
error.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

import requests

from yt_caption_extractor import strategies
from yt_caption_extractor.cache import TranscriptCache
from yt_caption_extractor.config import Settings, get_settings
from yt_caption_extractor.errors import CaptionError, InvalidIdentifier, NotAvailable
from yt_caption_extractor.models import ExtractionResult, StrategyOutcome, Transcript
from yt_caption_extractor.quality import assess_quality
from yt_caption_extractor.strategies import StrategyContext
from yt_caption_extractor.transport import create_session

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# URL shapes that carry a video ID, tried in order:
#   - https://www.youtube.com/watch?v=VIDEO_ID
#   - https://youtu.be/VIDEO_ID
#   - https://www.youtube.com/embed/VIDEO_ID (also shorts/ and v/)
_URL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(?:https?://)?(?:(?:www|m)\.)?youtube\.com/watch\?(?:.*&)?v=(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"),
    re.compile(r"(?:https?://)?youtu\.be/(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"),
    re.compile(r"(?:https?://)?(?:(?:www|m)\.)?youtube(?:-nocookie)?\.com/(?:embed|shorts|v)/(?P<id>[A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"),
]

_BARE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

Strategy = Callable[[StrategyContext], Transcript]


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def parse_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL string, or validate a raw 11-char ID.

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        InvalidIdentifier: If the string doesn't match any known format.
    """
    url_or_id = url_or_id.strip()

    for pattern in _URL_PATTERNS:
        match = pattern.search(url_or_id)
        if match:
            return match.group("id")

    if _BARE_ID_PATTERN.match(url_or_id):
        return url_or_id

    raise InvalidIdentifier(url_or_id)


# ---------------------------------------------------------------------------
# Strategy sequencing
# ---------------------------------------------------------------------------

def build_strategies(api_key: str | None) -> list[tuple[str, Strategy]]:
    """
    The ordered strategy list for one extraction.

    The Data API strategy is only included when there is a key to use.
    """
    ordered: list[tuple[str, Strategy]] = []
    if api_key:
        ordered.append(("youtube-data-api", strategies.data_api))
    ordered += [
        ("youtube-transcript-api", strategies.transcript_api),
        ("timedtext-page-scrape", strategies.page_scrape),
        ("language-fallback", strategies.language_sweep),
    ]
    return ordered


def run_strategy(name: str, strategy: Strategy, ctx: StrategyContext) -> StrategyOutcome:
    """
    Run one strategy and classify what happened.

    This is the fail-soft boundary: NotAvailable becomes NO_RESULT, every
    other exception becomes FAULT.  Nothing propagates.
    """
    logger.info("[%s] Trying for %s", name, ctx.video_id)
    try:
        transcript = strategy(ctx)
    except NotAvailable as exc:
        logger.info("[%s] No result: %s", name, exc.reason or exc.message)
        return StrategyOutcome.no_result(name, exc.reason or exc.message)
    except CaptionError as exc:
        logger.warning("[%s] Failed: %s", name, exc.message)
        return StrategyOutcome.fault(name, exc.message)
    except Exception as exc:
        logger.warning("[%s] Failed with %s: %s", name, type(exc).__name__, exc, exc_info=True)
        return StrategyOutcome.fault(name, f"{type(exc).__name__}: {exc}")

    quality = assess_quality(transcript.text)
    logger.info(
        "[%s] Got %d chars (%s, %s); quality %s: %s",
        name, transcript.char_count, transcript.language, transcript.method,
        quality.confidence.value, quality.reason,
    )
    logger.debug("[%s] Preview: %r", name, transcript.text[:150])
    return StrategyOutcome.success(name, transcript)


def extract_captions(
    url_or_id: str,
    api_key: str | None = None,
    language: str | None = None,
    *,
    session: requests.Session | None = None,
    cache: TranscriptCache | None = None,
    settings: Settings | None = None,
) -> ExtractionResult:
    """
    Recover a video's caption transcript, trying every strategy in order.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        api_key:   Data API key; defaults to settings.youtube_api_key.  Without
                   one the Data API strategy is skipped.
        language:  Target language code; defaults to settings.target_language.
        session:   HTTP session to reuse.  A fresh one is created when omitted.
        cache:     Optional TranscriptCache consulted before and filled after.
        settings:  Overrides the process-wide settings.

    Returns:
        An ExtractionResult.  result.transcript is None when no strategy
        produced one.

    Raises:
        InvalidIdentifier: url_or_id isn't a YouTube URL or ID.
    """
    settings = settings or get_settings()
    video_id = parse_video_id(url_or_id)
    language = language or settings.target_language
    api_key = api_key or settings.youtube_api_key

    if cache is not None:
        hit = cache.get(video_id, language)
        if hit is not None:
            logger.info("Cache hit for %s (%s)", video_id, language)
            return ExtractionResult(video_id=video_id, transcript=hit, cached=True)

    if not api_key:
        logger.info("No API key provided, skipping the Data API strategy")

    own_session = session is None
    if own_session:
        session = create_session(settings.request_timeout, settings.user_agent)

    ctx = StrategyContext(
        video_id=video_id,
        language=language,
        session=session,
        timeout=settings.request_timeout,
        user_agent=settings.user_agent,
        api_key=api_key,
    )
    result = ExtractionResult(video_id=video_id)
    try:
        for name, strategy in build_strategies(api_key):
            outcome = run_strategy(name, strategy, ctx)
            result.attempts.append(outcome)
            if outcome.transcript is not None:
                result.transcript = outcome.transcript
                break
    finally:
        if own_session:
            session.close()

    if result.transcript is None:
        logger.warning("All caption strategies failed for %s; the video likely has no captions", video_id)
    elif cache is not None:
        cache.put(video_id, language, result.transcript)
    return result


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_json(result: ExtractionResult) -> dict:
    """
    Build a JSON-serialisable dict from an extraction result.

    The attempt log lists each strategy and its status only.  Failure
    details, which can include Data API error bodies, stay in the logs.
    """
    data: dict = {
        "video_id": result.video_id,
        "found": result.found,
        "cached": result.cached,
        "attempts": [
            {"strategy": a.strategy, "status": a.status.value}
            for a in result.attempts
        ],
    }
    if result.transcript is not None:
        data.update(result.transcript.to_dict())
        data["quality"] = _quality_dict(result.transcript.text)
    return data


def _quality_dict(text: str) -> dict:
    quality = assess_quality(text)
    return {
        "likely_spoken": quality.likely_spoken,
        "confidence": quality.confidence.value,
        "reason": quality.reason,
        "pronoun_ratio": round(quality.pronoun_ratio, 4),
    }
