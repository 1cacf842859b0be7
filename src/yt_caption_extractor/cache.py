"""
cache.py — In-memory memoization of successful extractions.

Published captions rarely change, so repeating the whole strategy chain for
the same video within a few minutes only costs requests.  Entries are keyed
by (video_id, language) and expire after a TTL.  Only transcripts are
cached; a "no transcript" result is always recomputed.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

from yt_caption_extractor.config import Settings, get_settings
from yt_caption_extractor.models import Transcript

logger = logging.getLogger(__name__)


class TranscriptCache:
    """
    Thread-safe TTL cache for Transcript objects.

    Opt-in: extract_captions() only consults a cache the caller passes.
    A long-lived library caller (a worker, a web handler) builds one with
    from_settings() and reuses it across calls; the one-shot CLI does not.
    Expired entries are swept on every put(), so the size stays bounded by
    the number of distinct videos stored within one TTL.
    """

    def __init__(self, ttl: float = 600.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[float, Transcript]] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "TranscriptCache":
        """Build a cache whose TTL is settings.cache_ttl (YT_CAPTIONS_CACHE_TTL)."""
        return cls(ttl=(settings or get_settings()).cache_ttl)

    def get(self, video_id: str, language: str) -> Transcript | None:
        key = (video_id, language)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, transcript = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug("Cache entry for %s/%s expired", video_id, language)
                return None
        return transcript

    def put(self, video_id: str, language: str, transcript: Transcript) -> None:
        if self.ttl <= 0:
            return
        with self._lock:
            now = self._clock()
            self._sweep(now)
            self._entries[(video_id, language)] = (now + self.ttl, transcript)

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
