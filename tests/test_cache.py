"""
test_cache.py — Tests for the TTL transcript cache.

A fake clock drives expiry so nothing sleeps.
"""

from __future__ import annotations

import threading

from yt_caption_extractor.cache import TranscriptCache
from yt_caption_extractor.config import Settings
from yt_caption_extractor.models import Transcript


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def _transcript(text: str = "cached words") -> Transcript:
    return Transcript(text=text, source="captions", language="en", method="timedtext-api")


class TestTranscriptCache:

    def test_miss_then_hit(self) -> None:
        cache = TranscriptCache(ttl=60, clock=FakeClock())
        assert cache.get("abcDEF12345", "en") is None

        cache.put("abcDEF12345", "en", _transcript())
        assert cache.get("abcDEF12345", "en") == _transcript()

    def test_entries_expire(self) -> None:
        clock = FakeClock()
        cache = TranscriptCache(ttl=60, clock=clock)
        cache.put("abcDEF12345", "en", _transcript())

        clock.now += 59
        assert cache.get("abcDEF12345", "en") is not None

        clock.now += 1
        assert cache.get("abcDEF12345", "en") is None
        assert len(cache) == 0

    def test_put_sweeps_expired_entries(self) -> None:
        """Expired entries for other videos don't pile up."""
        clock = FakeClock()
        cache = TranscriptCache(ttl=1, clock=clock)

        for i in range(1000):
            cache.put(f"{i:011d}", "en", _transcript())
            clock.now += 10

        assert len(cache) == 1

    def test_sweep_keeps_live_entries(self) -> None:
        clock = FakeClock()
        cache = TranscriptCache(ttl=60, clock=clock)
        cache.put("a" * 11, "en", _transcript())
        clock.now += 30
        cache.put("b" * 11, "en", _transcript())
        clock.now += 30
        cache.put("c" * 11, "en", _transcript())

        assert len(cache) == 2
        assert cache.get("a" * 11, "en") is None
        assert cache.get("b" * 11, "en") is not None

    def test_keyed_by_language(self) -> None:
        cache = TranscriptCache(ttl=60, clock=FakeClock())
        cache.put("abcDEF12345", "en", _transcript())
        assert cache.get("abcDEF12345", "de") is None

    def test_zero_ttl_disables_caching(self) -> None:
        cache = TranscriptCache(ttl=0, clock=FakeClock())
        cache.put("abcDEF12345", "en", _transcript())
        assert len(cache) == 0

    def test_from_settings_uses_configured_ttl(self) -> None:
        cache = TranscriptCache.from_settings(Settings(cache_ttl=42.0))
        assert cache.ttl == 42.0

    def test_clear(self) -> None:
        cache = TranscriptCache(ttl=60)
        cache.put("a" * 11, "en", _transcript())
        cache.put("b" * 11, "en", _transcript())
        cache.clear()
        assert len(cache) == 0

    def test_concurrent_puts(self) -> None:
        cache = TranscriptCache(ttl=60)

        def fill(prefix: str) -> None:
            for i in range(200):
                cache.put(f"{prefix}{i:010d}", "en", _transcript())

        threads = [threading.Thread(target=fill, args=(p,)) for p in "abcd"]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) == 800
