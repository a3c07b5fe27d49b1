"""
Play Report - Session Segmentation & Emotion Reporting for Gameplay Telemetry

Turns a flat batch of timestamped gameplay telemetry for one player into
per-session reports: levels, scores, dominant emotion and engagement.

Layers:
1. Telemetry Records (parsing, validation) - records.py
2. Emotion Classification (canonical categories, tallies) - emotions.py
3. Session Segmentation (inactivity gaps) - sessions.py
4. Level Segmentation & Metrics (progress resets) - levels.py
5. Session Metrics (aggregation) - metrics.py
6. Engagement Scoring - engagement.py
7. Report Assembly (presentation) - report.py
8. Pipeline (wiring) - pipeline.py
"""

from .records import (
    TelemetryRecord,
    TelemetryError,
    InvalidTimestampError,
    parse_records,
    parse_timestamp,
)

from .emotions import (
    EmotionCategory,
    EmotionClassifier,
    EmotionCard,
    EMOTION_ORDER,
    build_emotion_cards,
    dominant_emotion,
)

from .sessions import (
    SessionSegmenter,
    SESSION_GAP_MS,
)

from .levels import (
    Level,
    LevelSegmenter,
    LevelMetrics,
    is_level_reset,
)

from .metrics import (
    Session,
    SessionMetrics,
)

from .engagement import (
    EngagementScorer,
)

from .report import (
    Report,
    ReportAssembler,
    format_duration,
    order_for_display,
)

from .pipeline import (
    ReportPipeline,
    build_reports,
    build_player_reports,
    group_by_player,
)

__version__ = "0.1.0"
__all__ = [
    # Records
    "TelemetryRecord",
    "TelemetryError",
    "InvalidTimestampError",
    "parse_records",
    "parse_timestamp",
    # Emotions
    "EmotionCategory",
    "EmotionClassifier",
    "EmotionCard",
    "EMOTION_ORDER",
    "build_emotion_cards",
    "dominant_emotion",
    # Sessions
    "SessionSegmenter",
    "SESSION_GAP_MS",
    # Levels
    "Level",
    "LevelSegmenter",
    "LevelMetrics",
    "is_level_reset",
    # Session metrics
    "Session",
    "SessionMetrics",
    # Engagement
    "EngagementScorer",
    # Report
    "Report",
    "ReportAssembler",
    "format_duration",
    "order_for_display",
    # Pipeline
    "ReportPipeline",
    "build_reports",
    "build_player_reports",
    "group_by_player",
]
