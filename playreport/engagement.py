"""
Engagement Scorer Module

Derives a bounded 1-10 engagement figure for a session from its score and
the variety of emotions the player showed. Variety is weighted above raw
score; the clamp keeps the figure displayable for zero-score sessions.
"""

from typing import Dict

from .emotions import EmotionCategory
from .records import round_half_up


class EngagementScorer:
    """
    Formula:
    - raw = unique_emotions × 1.5 + score × 0.5
    - rounded half-up to one decimal, clamped to [1, 10]
    """

    def __init__(
        self,
        emotion_weight: float = 1.5,
        score_weight: float = 0.5,
        min_score: float = 1.0,
        max_score: float = 10.0
    ):
        self.emotion_weight = emotion_weight
        self.score_weight = score_weight
        self.min_score = min_score
        self.max_score = max_score

    def unique_emotions(self, counts: Dict[EmotionCategory, int]) -> int:
        return sum(1 for count in counts.values() if count > 0)

    def calculate_raw_score(self, score: float, counts: Dict[EmotionCategory, int]) -> float:
        return (self.unique_emotions(counts) * self.emotion_weight +
                score * self.score_weight)

    def round_one_decimal(self, value: float) -> float:
        # Half-up, not Python's round-half-even
        return round_half_up(value, 1)

    def normalize_score(self, value: float) -> float:
        """Clamp to [min_score, max_score]."""
        return max(self.min_score, min(self.max_score, value))

    def calculate(self, score: float, counts: Dict[EmotionCategory, int]) -> float:
        raw = self.calculate_raw_score(score, counts)
        # Clamp first so huge or infinite raw values never reach floor()
        return self.normalize_score(self.round_one_decimal(self.normalize_score(raw)))

    def format(self, engagement: float) -> str:
        """Render as "{value}/10" with integral values shown without decimals."""
        value = int(engagement) if engagement.is_integer() else engagement
        return f"{value}/10"
