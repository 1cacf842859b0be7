"""
yt_caption_extractor — Recover the spoken transcript of a YouTube video.

Public API:
    extract_captions()  Run every caption strategy and return an ExtractionResult.
    resolve_content()   Captions, or the description / metadata when there are none.
    parse_video_id()    Parse a YouTube URL or validate a bare video ID.
    assess_quality()    Advisory check of whether text reads like speech.
    TranscriptCache     TTL cache that can be shared across extract_captions() calls.

Exception hierarchy (all importable from this package):
    CaptionError              Base exception.
    ├── InvalidIdentifier     Input isn't a YouTube URL or ID.
    ├── NotAvailable          No captions (the normal "nothing found").
    ├── AuthError             Data API key rejected.
    ├── TransientError        Non-success response, timeout or network fault.
    ├── ParseError            Malformed payload or page.
    └── MetadataFetchError    yt-dlp metadata fetch failed.

Usage:
    from yt_caption_extractor import extract_captions
    result = extract_captions("https://www.youtube.com/watch?v=dQw4w9WgXcQ")
    if result.found:
        print(result.transcript.text)
"""

from yt_caption_extractor.cache import TranscriptCache
from yt_caption_extractor.content import resolve_content
from yt_caption_extractor.errors import (
    AuthError,
    CaptionError,
    InvalidIdentifier,
    MetadataFetchError,
    NotAvailable,
    ParseError,
    TransientError,
)
from yt_caption_extractor.extractor import extract_captions, parse_video_id
from yt_caption_extractor.models import (
    CaptionTrack,
    ExtractionResult,
    QualityAssessment,
    StrategyOutcome,
    Transcript,
    VideoContent,
)
from yt_caption_extractor.quality import assess_quality

__version__ = "0.3.0"

__all__ = [
    "extract_captions",
    "resolve_content",
    "parse_video_id",
    "assess_quality",
    "TranscriptCache",
    "CaptionTrack",
    "ExtractionResult",
    "QualityAssessment",
    "StrategyOutcome",
    "Transcript",
    "VideoContent",
    "CaptionError",
    "InvalidIdentifier",
    "NotAvailable",
    "AuthError",
    "TransientError",
    "ParseError",
    "MetadataFetchError",
]
