"""
models.py — Data structures passed between the pipeline stages.

Nothing here is persisted.  Tracks and payloads live only for the duration
of one strategy; Transcript and ExtractionResult are what callers get back.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from yt_caption_extractor.metadata import VideoMetadata


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TrackKind(str, enum.Enum):
    """Whether a caption track was written by a person or by speech recognition."""

    STANDARD = "standard"
    AUTO = "auto"

    @classmethod
    def from_api(cls, value: str | None) -> "TrackKind":
        """Map a Data API / player `kind` value onto a TrackKind.

        The Data API reports machine captions as "asr"; everything else
        ("standard", "forced", missing) is treated as human-authored.
        """
        if value and value.lower() in ("asr", "auto"):
            return cls.AUTO
        return cls.STANDARD


class PayloadFormat(str, enum.Enum):
    STRUCTURED = "structured-segment"
    MARKUP = "markup"


class Confidence(str, enum.Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


class OutcomeStatus(str, enum.Enum):
    SUCCESS = "success"
    NO_RESULT = "no_result"
    FAULT = "fault"


# ---------------------------------------------------------------------------
# Caption data
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CaptionTrack:
    """
    One caption stream offered for a video.

    Attributes:
        language: BCP-47-ish language code as reported by YouTube ("en", "en-GB").
        kind:     STANDARD for human-authored tracks, AUTO for ASR.
        name:     Display name, may be empty.
        locator:  Data API track id, or the player's baseUrl for scraped tracks.
    """
    language: str
    kind: TrackKind
    name: str = ""
    locator: str = ""


@dataclass(frozen=True)
class CaptionPayload:
    """Raw caption body as downloaded, tagged with how it should be decoded."""
    raw: str
    format: PayloadFormat
    fmt: str


@dataclass(frozen=True)
class Transcript:
    """
    Plain-text reconstruction of a video's spoken content.

    Attributes:
        text:     Whitespace-normalised transcript text.
        source:   "captions", "description" or "metadata".
        language: Language code the text came from.
        method:   Identifier of the strategy that produced it.
    """
    text: str
    source: str
    language: str
    method: str

    @property
    def char_count(self) -> int:
        return len(self.text)

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    def to_dict(self) -> dict:
        return {
            "transcript": self.text,
            "source": self.source,
            "language": self.language,
            "method": self.method,
            "transcript_length": self.char_count,
            "word_count": self.word_count,
        }


@dataclass(frozen=True)
class QualityAssessment:
    likely_spoken: bool
    confidence: Confidence
    reason: str
    pronoun_ratio: float = 0.0


# ---------------------------------------------------------------------------
# Orchestration results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StrategyOutcome:
    """
    What happened when one strategy ran.

    `transcript` is set only for SUCCESS.  `detail` holds the reason for
    NO_RESULT or the error message for FAULT, for logging.
    """
    strategy: str
    status: OutcomeStatus
    transcript: Transcript | None = None
    detail: str = ""

    @classmethod
    def success(cls, strategy: str, transcript: Transcript) -> "StrategyOutcome":
        return cls(strategy, OutcomeStatus.SUCCESS, transcript=transcript)

    @classmethod
    def no_result(cls, strategy: str, detail: str = "") -> "StrategyOutcome":
        return cls(strategy, OutcomeStatus.NO_RESULT, detail=detail)

    @classmethod
    def fault(cls, strategy: str, detail: str) -> "StrategyOutcome":
        return cls(strategy, OutcomeStatus.FAULT, detail=detail)


@dataclass
class ExtractionResult:
    """
    Return value of extract_captions().

    `transcript` is None when every strategy came up empty — a normal
    outcome for videos without captions.  `attempts` lists every strategy
    that ran, in order.
    """
    video_id: str
    transcript: Transcript | None = None
    attempts: list[StrategyOutcome] = field(default_factory=list)
    cached: bool = False

    @property
    def found(self) -> bool:
        return self.transcript is not None


# ---------------------------------------------------------------------------
# Caller-side content
# ---------------------------------------------------------------------------

# Average adult reading speed used for the reading-time estimate.
WORDS_PER_MINUTE = 200


@dataclass(frozen=True)
class VideoContent:
    """
    Text handed to downstream consumers (e.g. a summariser).

    `source` says where the text came from; only "captions" means it is
    what was actually said in the video.
    """
    video_id: str
    text: str
    source: str
    captions_available: bool
    transcript: Transcript | None = None
    metadata: VideoMetadata | None = None

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def reading_minutes(self) -> int:
        return math.ceil(self.word_count / WORDS_PER_MINUTE)

    def to_dict(self) -> dict:
        data = {
            "video_id": self.video_id,
            "text": self.text,
            "source": self.source,
            "captions_available": self.captions_available,
            "used_description": self.source != "captions",
            "transcript_length": len(self.text),
            "word_count": self.word_count,
            "estimated_reading_time": self.reading_minutes,
        }
        if self.transcript is not None:
            data["method"] = self.transcript.method
            data["language"] = self.transcript.language
        if self.metadata is not None:
            data["video_info"] = self.metadata.to_dict()
        return data
