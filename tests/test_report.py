"""
Tests for Report Assembly Module

Tests duration text, display ordering, the emotion series and the
serialized report shape.
"""

import pytest
from datetime import datetime, timedelta, timezone
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from playreport.records import TelemetryRecord
from playreport.emotions import EmotionCategory
from playreport.metrics import SessionMetrics
from playreport.report import (
    ReportAssembler, format_duration, order_for_display
)


BASE = datetime(2024, 3, 4, 15, 0, tzinfo=timezone.utc)


def make_session(number, rows, offset_minutes=0):
    """rows: (seconds, score, words_found, emotion)"""
    start = BASE + timedelta(minutes=offset_minutes)
    records = [
        TelemetryRecord(
            player_id="mia",
            timestamp=start + timedelta(seconds=seconds),
            score=score,
            words_found=words,
            emotion=emotion,
        )
        for seconds, score, words, emotion in rows
    ]
    return SessionMetrics().build(number, records)


class TestFormatDuration:
    """Test cases for duration text."""

    def test_minutes_and_seconds(self):
        assert format_duration(timedelta(milliseconds=90000)) == "1 min 30 sec"

    def test_whole_minutes(self):
        assert format_duration(timedelta(milliseconds=60000)) == "1 min"

    def test_seconds_only(self):
        assert format_duration(timedelta(milliseconds=45000)) == "45 sec"

    def test_zero(self):
        assert format_duration(timedelta(0)) == "0 sec"

    def test_sub_second_remainder_dropped(self):
        assert format_duration(timedelta(milliseconds=61999)) == "1 min 1 sec"
        assert format_duration(timedelta(milliseconds=999)) == "0 sec"

    def test_long_session(self):
        assert format_duration(timedelta(minutes=75, seconds=5)) == "75 min 5 sec"


class TestOrderForDisplay:

    def test_most_recent_first(self):
        first = make_session(1, [(0, 1, None, None)], offset_minutes=0)
        second = make_session(2, [(0, 1, None, None)], offset_minutes=10)
        third = make_session(3, [(0, 1, None, None)], offset_minutes=20)

        ordered = order_for_display([first, second, third])

        assert [s.number for s in ordered] == [3, 2, 1]


class TestReportAssembler:
    """Test cases for ReportAssembler class."""

    def test_single_record_report(self):
        session = make_session(1, [(0, None, None, None)])
        report = ReportAssembler().assemble(session, "mia")

        assert report.duration == "0 sec"
        assert report.dominant_emotion == "Neutral"
        assert report.score == 0
        assert report.engagement == 1.5
        assert report.engagement_text == "1.5/10"

    def test_report_fields(self):
        session = make_session(1, [
            (0, 0, 1, "happy"),
            (30, 0, 4, "happy"),
            (60, 0, 0, "sad"),
            (90, 0, 4, "Surprised"),
        ])
        report = ReportAssembler().assemble(session, "mia")

        assert report.player_id == "mia"
        assert report.session_label == "Session #1"
        assert report.session_date == "2024-03-04"
        assert report.duration == "1 min 30 sec"
        assert report.score == 20
        # 3 emotions × 1.5 + 20 × 0.5 = 14.5 -> clamped
        assert report.engagement == 10.0
        assert report.engagement_text == "10/10"
        assert report.dominant_emotion == "Happy"
        assert [level.name for level in report.levels] == ["Level 1", "Level 2"]

    def test_emotion_series_is_classified_and_ordered(self):
        session = make_session(1, [
            (0, 0, None, "HAPPY"),
            (10, 0, None, "confused"),
            (20, 0, None, None),
        ])
        report = ReportAssembler().assemble(session, "mia")

        assert report.timeline == (
            (BASE, EmotionCategory.HAPPY),
            (BASE + timedelta(seconds=10), EmotionCategory.NEUTRAL),
            (BASE + timedelta(seconds=20), EmotionCategory.NEUTRAL),
        )

    def test_insights(self):
        session = make_session(1, [
            (0, 10, None, "happy"),
            (10, 20, None, "happy"),
            (20, 30, None, "angry"),
            (30, 40, None, "happy"),
        ])
        report = ReportAssembler().assemble(session, "mia")

        assert report.insights == (
            "Achieved score of 40 during the session",
            "Dominant emotion was Happy (75.0%)",
            "Secondary emotion was Angry (25.0%)",
        )

    def test_insights_without_secondary(self):
        session = make_session(1, [(0, 5, None, "fear")])
        report = ReportAssembler().assemble(session, "mia")

        assert report.insights[-1] == "Secondary emotion was None (0%)"

    def test_to_dict_shape(self):
        session = make_session(2, [
            (0, 0, 4, "happy"),
            (45, 0, 0, "sad"),
        ])
        data = ReportAssembler().assemble(session, "mia").to_dict()

        assert data["studentName"] == "mia"
        assert data["sessionNumber"] == "Session #2"
        assert data["sessionDuration"] == "45 sec"
        assert data["score"] == 10
        assert data["engagementScore"] == "8/10"
        assert data["levels"] == [
            {"name": "Level 1", "completed": True, "wordsCompleted": 1, "totalScore": 10},
            {"name": "Level 2", "completed": False, "wordsCompleted": 0, "totalScore": 0},
        ]
        assert list(data["emotionCounts"].keys()) == [
            "happy", "sad", "disgust", "neutral", "fear", "angry", "surprised"
        ]
        assert data["timestamps"][1] == {
            "time": (BASE + timedelta(seconds=45)).isoformat(),
            "emotion": "sad",
        }
        assert len(data["emotionCards"]) == 7

    def test_assemble_all_orders_sessions(self):
        early = make_session(1, [(0, 1, None, None)], offset_minutes=0)
        late = make_session(2, [(0, 1, None, None)], offset_minutes=30)

        reports = ReportAssembler().assemble_all([early, late], "mia")

        assert [r.session_label for r in reports] == ["Session #2", "Session #1"]
