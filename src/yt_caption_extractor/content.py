"""
content.py — Decide what text to hand to a downstream consumer.

extract_captions() reports "no transcript" for videos without captions.
A summariser still needs something to work with, so this layer substitutes
the video description, or failing that a short metadata block, and labels
the result so nobody mistakes it for what was said in the video.
"""

from __future__ import annotations

import logging

import requests

from yt_caption_extractor.cache import TranscriptCache
from yt_caption_extractor.config import Settings, get_settings
from yt_caption_extractor.errors import NotAvailable
from yt_caption_extractor.extractor import extract_captions
from yt_caption_extractor.metadata import VideoMetadata, fetch_video_metadata
from yt_caption_extractor.models import VideoContent

logger = logging.getLogger(__name__)

# A caption transcript must be longer than this to be used as-is.
MIN_USABLE_TRANSCRIPT_CHARS = 100

# Descriptions at or below this length are too thin to stand in for speech.
MIN_DESCRIPTION_CHARS = 200

MIN_CONTENT_CHARS = 100


def metadata_block(metadata: VideoMetadata) -> str:
    """Render the last-resort text built from title, channel and view count."""
    views = f"{metadata.view_count:,}" if metadata.view_count is not None else "an unknown number of"
    return (
        f"Title: {metadata.title}\n\n"
        f"Channel: {metadata.channel_name}\n\n"
        f"Description: {metadata.description or 'No description available.'}\n\n"
        f"This video has been viewed {views} times."
    )


def resolve_content(
    url_or_id: str,
    api_key: str | None = None,
    language: str | None = None,
    *,
    session: requests.Session | None = None,
    cache: TranscriptCache | None = None,
    settings: Settings | None = None,
) -> VideoContent:
    """
    Return the best available text for a video.

    Order of preference:
        1. the caption transcript, if longer than 100 chars
        2. the description, if longer than 200 chars
        3. a title/channel/description/views block

    Raises:
        InvalidIdentifier:  url_or_id isn't a YouTube URL or ID.
        MetadataFetchError: Captions failed and yt-dlp couldn't fetch metadata.
        NotAvailable:       Even the metadata block is under 100 chars.
    """
    settings = settings or get_settings()
    result = extract_captions(
        url_or_id,
        api_key,
        language,
        session=session,
        cache=cache,
        settings=settings,
    )

    transcript = result.transcript
    if transcript is not None and transcript.char_count > MIN_USABLE_TRANSCRIPT_CHARS:
        logger.info("Using caption transcript for %s (%s)", result.video_id, transcript.method)
        return VideoContent(
            video_id=result.video_id,
            text=transcript.text,
            source="captions",
            captions_available=True,
            transcript=transcript,
        )

    logger.warning("Captions not usable for %s, falling back to video metadata", result.video_id)
    metadata = fetch_video_metadata(result.video_id, socket_timeout=settings.request_timeout)

    if len(metadata.description) > MIN_DESCRIPTION_CHARS:
        logger.warning("Using the description of %s; this is not the spoken transcript", result.video_id)
        return VideoContent(
            video_id=result.video_id,
            text=metadata.description,
            source="description",
            captions_available=False,
            metadata=metadata,
        )

    text = metadata_block(metadata)
    if len(text) < MIN_CONTENT_CHARS:
        raise NotAvailable(result.video_id, "no captions and too little metadata")

    logger.warning("Description of %s too short, using a metadata summary", result.video_id)
    return VideoContent(
        video_id=result.video_id,
        text=text,
        source="metadata",
        captions_available=False,
        metadata=metadata,
    )
