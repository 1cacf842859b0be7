"""
quality.py — Heuristic check of whether a transcript reads like speech.

The assessment is advisory.  It is logged next to every successful
extraction and shown by the `quality` CLI command, but nothing accepts or
rejects a transcript based on it: `likely_spoken` is always True.
"""

from __future__ import annotations

import re

from yt_caption_extractor.models import Confidence, QualityAssessment

_FIRST_PERSON = re.compile(r"\b(?:i|we|my|our|me|us)\b", re.IGNORECASE)

# Greetings, fillers and discourse words typical of unscripted speech.
CONVERSATIONAL_MARKERS = (
    "you", "we", "hello", "hi", "hey", "thanks", "okay", "right", "so", "um", "uh",
)
_MARKER = re.compile(
    r"\b(?:" + "|".join(CONVERSATIONAL_MARKERS) + r")\b",
    re.IGNORECASE,
)

PRONOUN_RATIO_THRESHOLD = 0.02


def assess_quality(text: str) -> QualityAssessment:
    """Classify transcript text as HIGH or MEDIUM confidence spoken dialogue."""
    words = text.split()
    ratio = len(_FIRST_PERSON.findall(text)) / len(words) if words else 0.0
    has_marker = _MARKER.search(text) is not None

    if ratio > PRONOUN_RATIO_THRESHOLD or has_marker:
        return QualityAssessment(
            likely_spoken=True,
            confidence=Confidence.HIGH,
            reason="Contains conversational language and personal pronouns",
            pronoun_ratio=ratio,
        )
    return QualityAssessment(
        likely_spoken=True,
        confidence=Confidence.MEDIUM,
        reason="Appears to be caption text",
        pronoun_ratio=ratio,
    )
