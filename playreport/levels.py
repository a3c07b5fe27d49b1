"""
Level Segmentation & Metrics Module

Within one session, levels are bounded by a word-count rollover: the
word-discovery game reports wordsFound 0..4 per tick and restarts at 0 on a
new level. Score-only games never carry wordsFound and always form a single
level.

Level scoring serves both telemetry shapes:
- games reporting a running score -> the last tick's score wins
- games reporting only word completions -> 10 points per completed word set
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple
import logging

from .records import TelemetryRecord, display_number

logger = logging.getLogger(__name__)

LEVEL_COMPLETE_WORDS = 4   # wordsFound value that closes a level
LEVEL_START_WORDS = 0      # wordsFound value that opens the next one
POINTS_PER_COMPLETION = 10


def is_level_reset(previous: TelemetryRecord, current: TelemetryRecord) -> bool:
    """True only for an exact 4 -> 0 transition with both values present."""
    if previous.words_found is None or current.words_found is None:
        return False
    return (previous.words_found == LEVEL_COMPLETE_WORDS and
            current.words_found == LEVEL_START_WORDS)


class LevelSegmenter:
    """Splits an ordered session into contiguous level groups."""

    def segment(self, records: Sequence[TelemetryRecord]) -> List[Tuple[TelemetryRecord, ...]]:
        if not records:
            return []

        groups: List[Tuple[TelemetryRecord, ...]] = []
        current: List[TelemetryRecord] = [records[0]]

        for previous, record in zip(records, records[1:]):
            if is_level_reset(previous, record):
                groups.append(tuple(current))
                current = [record]
            else:
                current.append(record)

        groups.append(tuple(current))
        return groups


@dataclass(frozen=True)
class Level:
    """A scored level within a session."""
    number: int  # 1-based within the session
    records: Tuple[TelemetryRecord, ...]
    words_completed: int
    total_score: float
    completed: bool

    @property
    def name(self) -> str:
        return f"Level {self.number}"

    @property
    def level_id(self) -> str:
        return f"level-{self.number}"

    def summary(self) -> Dict:
        """Display summary consumed by the report."""
        return {
            "name": self.name,
            "completed": self.completed,
            "wordsCompleted": self.words_completed,
            "totalScore": display_number(self.total_score),
        }

    def to_dict(self) -> Dict:
        return {
            "id": self.level_id,
            **self.summary(),
            "entries": [r.to_dict() for r in self.records],
        }


class LevelMetrics:
    """Computes score and completion for one level group."""

    def compute(self, number: int, records: Sequence[TelemetryRecord]) -> Level:
        if not records:
            raise ValueError("A level needs at least one record")

        words_completed = 0
        total_score = records[-1].numeric_score

        # Fallback for word-only telemetry: derive score from completions
        if total_score == 0 and any(r.has_words_found for r in records):
            words_completed = sum(
                1 for r in records if r.words_found == LEVEL_COMPLETE_WORDS
            )
            total_score = float(words_completed * POINTS_PER_COMPLETION)
            logger.debug(
                "Level %d has no score, using %d word completions",
                number, words_completed
            )

        return Level(
            number=number,
            records=tuple(records),
            words_completed=words_completed,
            total_score=total_score,
            completed=total_score > 0 or words_completed > 0,
        )

    def compute_all(self, groups: Sequence[Sequence[TelemetryRecord]]) -> Tuple[Level, ...]:
        return tuple(
            self.compute(index, group) for index, group in enumerate(groups, start=1)
        )
