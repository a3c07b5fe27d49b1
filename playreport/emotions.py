"""
Emotion Classification Module

Normalizes pre-labeled emotion strings (from the camera-based detector in
the game UI) into 7 canonical categories and builds the per-scope tallies
used by the session metrics and the report.

Tallies are always keyed in the fixed EMOTION_ORDER so tie-breaking never
depends on dict insertion order of the input.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from enum import Enum

from .records import round_half_up


class EmotionCategory(Enum):
    """Canonical emotion categories, in tie-breaking order."""
    HAPPY = "happy"
    SAD = "sad"
    DISGUST = "disgust"
    NEUTRAL = "neutral"
    FEAR = "fear"
    ANGRY = "angry"
    SURPRISED = "surprised"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


EMOTION_ORDER: Tuple[EmotionCategory, ...] = tuple(EmotionCategory)

_BY_LABEL: Dict[str, EmotionCategory] = {c.value: c for c in EmotionCategory}

# Card descriptions by share of the session, highest threshold first
CARD_DESCRIPTIONS: List[Tuple[float, str]] = [
    (30.0, "Dominant emotion"),
    (20.0, "Secondary emotion"),
    (10.0, "Frequent"),
]


class EmotionClassifier:
    """Maps raw labels to EmotionCategory, defaulting to NEUTRAL."""

    default = EmotionCategory.NEUTRAL

    def classify(self, label: Optional[str]) -> EmotionCategory:
        if label is None:
            return self.default
        return _BY_LABEL.get(label.lower(), self.default)

    def tally(self, labels: Iterable[Optional[str]]) -> Dict[EmotionCategory, int]:
        """Count classified labels; every category is present, zero-initialised."""
        counts = {category: 0 for category in EMOTION_ORDER}
        for label in labels:
            counts[self.classify(label)] += 1
        return counts


def dominant_emotion(counts: Dict[EmotionCategory, int]) -> EmotionCategory:
    """
    Category with the strictly greatest count.

    Scans in EMOTION_ORDER and only replaces the current maximum on a strict
    increase, so the first category of a tie wins. An all-zero tally is
    NEUTRAL.
    """
    dominant = EmotionCategory.NEUTRAL
    max_count = 0
    for category in EMOTION_ORDER:
        count = counts.get(category, 0)
        if count > max_count:
            max_count = count
            dominant = category
    return dominant


def counts_to_dict(counts: Dict[EmotionCategory, int]) -> Dict[str, int]:
    return {category.value: counts.get(category, 0) for category in EMOTION_ORDER}


@dataclass(frozen=True)
class EmotionCard:
    """Per-category summary shown under the emotion charts."""
    category: EmotionCategory
    count: int
    percentage: float  # 0 - 100, one decimal
    description: str

    @property
    def name(self) -> str:
        return self.category.display_name

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "emotion": self.category.value,
            "count": self.count,
            "percentage": self.percentage,
            "description": self.description,
        }


def describe_share(percentage: float) -> str:
    for threshold, description in CARD_DESCRIPTIONS:
        if percentage > threshold:
            return description
    return "Occasional"


def build_emotion_cards(counts: Dict[EmotionCategory, int]) -> List[EmotionCard]:
    """Cards for all 7 categories, highest share first (stable on EMOTION_ORDER)."""
    total = sum(counts.get(category, 0) for category in EMOTION_ORDER)
    cards = []
    for category in EMOTION_ORDER:
        count = counts.get(category, 0)
        percentage = round_half_up(count / total * 100, 1) if total else 0.0
        cards.append(EmotionCard(
            category=category,
            count=count,
            percentage=percentage,
            description=describe_share(percentage),
        ))
    return sorted(cards, key=lambda card: card.percentage, reverse=True)
