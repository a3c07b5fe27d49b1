"""
Tests for Engagement Scorer Module

Tests the variety/score formula, half-up rounding and the 1-10 clamp.
"""

import pytest
import random
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from playreport.emotions import EmotionCategory, EMOTION_ORDER
from playreport.engagement import EngagementScorer


def tally(**counts):
    result = {category: 0 for category in EMOTION_ORDER}
    for name, count in counts.items():
        result[EmotionCategory(name)] = count
    return result


class TestEngagementScorer:
    """Test cases for EngagementScorer class."""

    def test_zero_everything_clamps_to_one(self):
        scorer = EngagementScorer()
        assert scorer.calculate(0, tally()) == 1.0

    def test_single_emotion_zero_score(self):
        """1 emotion × 1.5 = 1.5."""
        scorer = EngagementScorer()
        assert scorer.calculate(0, tally(happy=4)) == pytest.approx(1.5)

    def test_variety_and_score(self):
        """3 emotions × 1.5 + 5 × 0.5 = 7.0."""
        scorer = EngagementScorer()
        assert scorer.calculate(5, tally(happy=1, sad=2, fear=1)) == pytest.approx(7.0)

    def test_high_score_clamps_to_ten(self):
        scorer = EngagementScorer()
        assert scorer.calculate(50, tally(happy=1)) == 10.0

    def test_counts_do_not_matter_only_variety(self):
        scorer = EngagementScorer()
        assert (scorer.calculate(2, tally(happy=1, sad=1)) ==
                scorer.calculate(2, tally(happy=9, sad=30)))

    def test_rounds_half_up(self):
        scorer = EngagementScorer()
        assert scorer.round_one_decimal(2.25) == pytest.approx(2.3)
        assert scorer.round_one_decimal(2.35) == pytest.approx(2.4)

    def test_one_decimal_result(self):
        """1 emotion × 1.5 + 0.6 × 0.5 = 1.8."""
        scorer = EngagementScorer()
        assert scorer.calculate(0.6, tally(sad=1)) == pytest.approx(1.8)

    def test_always_within_bounds(self):
        scorer = EngagementScorer()
        rng = random.Random(3)

        for _ in range(200):
            counts = {c: rng.choice([0, 0, 1, 5]) for c in EMOTION_ORDER}
            score = rng.choice([0, 0.5, 3, 12.7, 40, 1000])
            value = scorer.calculate(score, counts)

            assert 1.0 <= value <= 10.0
            assert round(value, 1) == pytest.approx(value)

    def test_format(self):
        scorer = EngagementScorer()
        assert scorer.format(7.5) == "7.5/10"
        assert scorer.format(10.0) == "10/10"
        assert scorer.format(1.0) == "1/10"

    def test_unique_emotions(self):
        scorer = EngagementScorer()
        assert scorer.unique_emotions(tally()) == 0
        assert scorer.unique_emotions(tally(happy=2, angry=1)) == 2

    def test_infinite_score_clamps_to_ten(self):
        scorer = EngagementScorer()
        assert scorer.calculate(float("inf"), tally(happy=1)) == 10.0
        assert scorer.calculate(float("-inf"), tally(happy=1)) == 1.0

    def test_huge_finite_score_clamps_to_ten(self):
        scorer = EngagementScorer()
        assert scorer.calculate(1e308, tally()) == 10.0
