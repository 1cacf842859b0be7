"""
metadata.py — Fetch video metadata from YouTube using yt-dlp.

The caption pipeline only ever produces transcript text.  When a video has
no captions, the content layer falls back to the video's description or a
short metadata block, and this module supplies those fields.  yt-dlp runs
in metadata-only mode: no audio or video is downloaded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

import yt_dlp

from yt_caption_extractor.errors import MetadataFetchError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VideoMetadata:
    """
    Descriptive metadata for a single YouTube video.

    Attributes:
        video_id:      The 11-character YouTube video identifier.
        title:         The video title as displayed on YouTube.
        channel_name:  The human-readable channel name.
        description:   Full description text (may be empty).
        view_count:    View count, or None when YouTube hides it.
        duration_secs: Video length in seconds (None for livestreams).
        upload_date:   Publication date, or None when unknown.
    """
    video_id: str
    title: str
    channel_name: str
    description: str
    view_count: int | None
    duration_secs: int | None
    upload_date: date | None

    def to_dict(self) -> dict:
        return {
            "video_id": self.video_id,
            "title": self.title,
            "channel_name": self.channel_name,
            "description": self.description,
            "view_count": self.view_count,
            "duration_secs": self.duration_secs,
            "upload_date": str(self.upload_date) if self.upload_date else None,
        }


# ---------------------------------------------------------------------------
# Metadata fetching
# ---------------------------------------------------------------------------

def _parse_upload_date(raw: str | None) -> date | None:
    """Turn yt-dlp's YYYYMMDD string into a date, or None if absent/malformed."""
    if not raw:
        return None
    try:
        return date(year=int(raw[:4]), month=int(raw[4:6]), day=int(raw[6:8]))
    except (ValueError, IndexError):
        return None


def fetch_video_metadata(video_id: str, *, socket_timeout: float | None = None) -> VideoMetadata:
    """
    Fetch metadata for a YouTube video without downloading the video itself.

    Args:
        video_id:       The 11-character YouTube video ID.
        socket_timeout: Optional network timeout passed through to yt-dlp.

    Returns:
        A VideoMetadata dataclass.

    Raises:
        MetadataFetchError: If yt-dlp can't retrieve the video info.
    """
    ydl_opts: dict = {
        "skip_download": True,
        "quiet": True,
        "no_warnings": True,
    }
    if socket_timeout is not None:
        ydl_opts["socket_timeout"] = socket_timeout

    url = f"https://www.youtube.com/watch?v={video_id}"
    logger.debug("Fetching metadata for %s via yt-dlp", video_id)

    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(url, download=False)
    except yt_dlp.utils.DownloadError as exc:
        raise MetadataFetchError(video_id, reason=str(exc)) from exc

    if info is None:
        raise MetadataFetchError(video_id, reason="yt-dlp returned no info")

    return VideoMetadata(
        video_id=video_id,
        title=info.get("title") or "Unknown Title",
        channel_name=info.get("channel") or info.get("uploader") or "Unknown Channel",
        description=info.get("description") or "",
        view_count=info.get("view_count"),
        duration_secs=info.get("duration"),
        upload_date=_parse_upload_date(info.get("upload_date")),
    )
