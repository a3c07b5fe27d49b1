"""
Session Metrics Module

Builds the Session value object: level breakdown plus session-wide score,
time span and dominant emotion.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Sequence, Tuple
import logging

from .records import TelemetryRecord, display_number
from .emotions import EmotionCategory, EmotionClassifier, dominant_emotion, counts_to_dict
from .levels import Level, LevelMetrics, LevelSegmenter, POINTS_PER_COMPLETION

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    """A continuous span of play with its levels and aggregates."""
    number: int  # 1-based, chronological
    records: Tuple[TelemetryRecord, ...]
    levels: Tuple[Level, ...]
    total_words_completed: int
    total_score: float
    emotion_counts: Tuple[Tuple[EmotionCategory, int], ...]

    @property
    def player_id(self) -> str:
        return self.records[0].player_id

    @property
    def start_time(self) -> datetime:
        return self.records[0].timestamp

    @property
    def end_time(self) -> datetime:
        return self.records[-1].timestamp

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def name(self) -> str:
        return f"Session #{self.number}"

    @property
    def session_id(self) -> str:
        return f"session-{self.number}"

    @property
    def counts(self) -> Dict[EmotionCategory, int]:
        return dict(self.emotion_counts)

    @property
    def dominant(self) -> EmotionCategory:
        return dominant_emotion(self.counts)

    @property
    def dominant_emotion(self) -> str:
        """Display label, e.g. "Happy"."""
        return self.dominant.display_name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.session_id,
            "name": self.name,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "levels": [level.to_dict() for level in self.levels],
            "totalWordsCompleted": self.total_words_completed,
            "totalScore": display_number(self.total_score),
            "dominantEmotion": self.dominant_emotion,
            "emotionCounts": counts_to_dict(self.counts),
        }


class SessionMetrics:
    """
    Aggregates one session's record group.

    The session score is the last record's score, not a sum of level
    scores; the word-completion fallback only applies when that is 0.
    """

    def __init__(
        self,
        level_segmenter: Optional[LevelSegmenter] = None,
        level_metrics: Optional[LevelMetrics] = None,
        classifier: Optional[EmotionClassifier] = None
    ):
        self.level_segmenter = level_segmenter or LevelSegmenter()
        self.level_metrics = level_metrics or LevelMetrics()
        self.classifier = classifier or EmotionClassifier()

    def session_score(self, records: Sequence[TelemetryRecord], total_words_completed: int) -> float:
        score = records[-1].numeric_score
        if score == 0 and total_words_completed > 0:
            score = float(total_words_completed * POINTS_PER_COMPLETION)
        return score

    def build(self, number: int, records: Sequence[TelemetryRecord]) -> Session:
        if not records:
            raise ValueError("A session needs at least one record")

        levels = self.level_metrics.compute_all(self.level_segmenter.segment(records))
        total_words = sum(level.words_completed for level in levels)
        counts = self.classifier.tally(r.emotion for r in records)

        session = Session(
            number=number,
            records=tuple(records),
            levels=levels,
            total_words_completed=total_words,
            total_score=self.session_score(records, total_words),
            emotion_counts=tuple(counts.items()),
        )

        logger.debug(
            "%s for %s: %d records, %d levels, score=%s, words=%d",
            session.name, session.player_id, len(records), len(levels),
            session.total_score, total_words
        )
        return session
