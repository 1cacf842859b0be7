"""
errors.py — Exception hierarchy for yt-caption-extractor.

Every exception carries an `http_status` attribute so an outer service layer
can translate pipeline errors straight into a response code.  Inside the
pipeline most of these never reach the caller: the orchestrator turns them
into strategy outcomes and moves on to the next strategy.

Hierarchy:
    CaptionError (base, 500)
    ├── InvalidIdentifier (400)
    ├── NotAvailable (404)
    ├── AuthError (401)
    ├── TransientError (502)
    ├── ParseError (502)
    └── MetadataFetchError (502)
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class CaptionError(Exception):
    """
    Root exception for all caption-extraction errors.

    Attributes:
        message:     Human-readable description of what went wrong.
        http_status: Suggested HTTP status code for a service layer.
    """

    def __init__(self, message: str, http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status


# ---------------------------------------------------------------------------
# Specific error cases
# ---------------------------------------------------------------------------

class InvalidIdentifier(CaptionError):
    """
    Raised when the input doesn't look like a YouTube URL or video ID.

    This is the only error extract_captions() lets through, since it happens
    before any strategy runs.
    """

    def __init__(self, value: str) -> None:
        super().__init__(
            message=f"Not a recognisable YouTube URL or video ID: {value!r}",
            http_status=400,
        )
        self.value = value


class NotAvailable(CaptionError):
    """
    Raised when a strategy finds no usable captions.

    Covers an empty track list, payloads that are too short, and decoded
    text at or below the acceptance threshold.  It is the normal "nothing
    here" signal, not a fault.
    """

    def __init__(self, video_id: str, reason: str = "") -> None:
        detail = f" ({reason})" if reason else ""
        super().__init__(
            message=f"No captions available for video {video_id}{detail}",
            http_status=404,
        )
        self.video_id = video_id
        self.reason = reason


class AuthError(CaptionError):
    """Raised when the Data API rejects the supplied credential (401/403)."""

    def __init__(self, status_code: int, detail: str = "") -> None:
        suffix = f": {detail}" if detail else ""
        super().__init__(
            message=f"YouTube Data API rejected the API key (HTTP {status_code}){suffix}",
            http_status=401,
        )
        self.status_code = status_code


class TransientError(CaptionError):
    """
    Raised for non-success responses, timeouts and connection failures.

    Callers advance to the next format or strategy; nothing is retried in
    place.
    """

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(
            message=f"Request to {url} failed: {reason}",
            http_status=502,
        )
        self.url = url
        self.reason = reason


class ParseError(CaptionError):
    """Raised when a payload or page fragment can't be parsed."""

    def __init__(self, what: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Could not parse {what}{detail}",
            http_status=502,
        )
        self.what = what


class MetadataFetchError(CaptionError):
    """
    Raised when yt-dlp fails to retrieve video metadata.

    Only the content layer fetches metadata, so this never comes out of
    the caption pipeline itself.
    """

    def __init__(self, video_id: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Failed to fetch metadata for video {video_id}{detail}",
            http_status=502,
        )
        self.video_id = video_id
