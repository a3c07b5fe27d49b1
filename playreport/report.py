"""
Report Assembly Module

Turns a scored Session into the analyst-facing Report consumed by the
dashboard: presentation strings (duration, engagement), level summaries,
the emotion histogram and cards, and the (timestamp, emotion) series used
for the emotion-over-time chart.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .records import display_number
from .emotions import (
    EmotionCard,
    EmotionCategory,
    EmotionClassifier,
    build_emotion_cards,
    counts_to_dict,
)
from .engagement import EngagementScorer
from .levels import Level
from .metrics import Session


@dataclass(frozen=True)
class Report:
    """Terminal, immutable report for one (player, session) pair."""
    player_id: str
    session_label: str
    session_date: str
    start_time: datetime
    end_time: datetime
    duration: str
    dominant_emotion: str
    score: float
    engagement: float
    engagement_text: str
    levels: Tuple[Level, ...]
    emotion_counts: Tuple[Tuple[EmotionCategory, int], ...]
    timeline: Tuple[Tuple[datetime, EmotionCategory], ...]
    emotion_cards: Tuple[EmotionCard, ...]
    insights: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the keys the report view reads."""
        return {
            "studentName": self.player_id,
            "sessionNumber": self.session_label,
            "sessionDate": self.session_date,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "sessionDuration": self.duration,
            "dominantEmotion": self.dominant_emotion,
            "score": display_number(self.score),
            "engagementScore": self.engagement_text,
            "levels": [level.summary() for level in self.levels],
            "emotionCounts": counts_to_dict(dict(self.emotion_counts)),
            "timestamps": [
                {"time": time.isoformat(), "emotion": emotion.value}
                for time, emotion in self.timeline
            ],
            "emotionCards": [card.to_dict() for card in self.emotion_cards],
            "insights": list(self.insights),
        }


def format_duration(delta: timedelta) -> str:
    """
    "45 sec", "1 min", "1 min 30 sec". Sub-second remainders are dropped
    and an empty span renders "0 sec".
    """
    total_ms = delta // timedelta(milliseconds=1)
    minutes = total_ms // 60000
    seconds = (total_ms % 60000) // 1000

    if minutes == 0:
        return f"{seconds} sec"
    elif seconds == 0:
        return f"{minutes} min"
    return f"{minutes} min {seconds} sec"


def order_for_display(sessions: Sequence[Session]) -> List[Session]:
    """Most recent activity first."""
    return sorted(sessions, key=lambda s: s.end_time, reverse=True)


class ReportAssembler:
    """Composes session metrics, engagement and presentation strings."""

    def __init__(
        self,
        engagement_scorer: Optional[EngagementScorer] = None,
        classifier: Optional[EmotionClassifier] = None
    ):
        self.engagement_scorer = engagement_scorer or EngagementScorer()
        self.classifier = classifier or EmotionClassifier()

    def emotion_series(self, session: Session) -> Tuple[Tuple[datetime, EmotionCategory], ...]:
        return tuple(
            (record.timestamp, self.classifier.classify(record.emotion))
            for record in session.records
        )

    def build_insights(
        self,
        session: Session,
        cards: Sequence[EmotionCard]
    ) -> Tuple[str, ...]:
        """Key observations shown beside the charts."""
        dominant = next(c for c in cards if c.category == session.dominant)
        secondary = next(
            (c for c in cards if c.category != session.dominant and c.count > 0),
            None
        )

        insights = [
            f"Achieved score of {display_number(session.total_score)} during the session",
            f"Dominant emotion was {session.dominant_emotion} "
            f"({dominant.percentage}%)",
        ]
        if secondary:
            insights.append(
                f"Secondary emotion was {secondary.name} ({secondary.percentage}%)"
            )
        else:
            insights.append("Secondary emotion was None (0%)")
        return tuple(insights)

    def assemble(self, session: Session, player_id: str) -> Report:
        counts = session.counts
        engagement = self.engagement_scorer.calculate(session.total_score, counts)
        cards = build_emotion_cards(counts)

        return Report(
            player_id=player_id,
            session_label=session.name,
            session_date=session.start_time.date().isoformat(),
            start_time=session.start_time,
            end_time=session.end_time,
            duration=format_duration(session.duration),
            dominant_emotion=session.dominant_emotion,
            score=session.total_score,
            engagement=engagement,
            engagement_text=self.engagement_scorer.format(engagement),
            levels=session.levels,
            emotion_counts=session.emotion_counts,
            timeline=self.emotion_series(session),
            emotion_cards=tuple(cards),
            insights=self.build_insights(session, cards),
        )

    def assemble_all(self, sessions: Sequence[Session], player_id: str) -> List[Report]:
        """Reports for every session of a player, most recent first."""
        return [self.assemble(s, player_id) for s in order_for_display(sessions)]
