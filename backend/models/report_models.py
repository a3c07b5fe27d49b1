"""
Report API Models

Pydantic models for the telemetry request body and the report responses.
"""

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional, Union


class TelemetryIn(BaseModel):
    """One raw gameplay event as written by the game UIs."""
    model_config = ConfigDict(extra="ignore")  # Ignore MongoDB's _id field

    username: str
    timestamp: Optional[str] = None  # validated by the pipeline, not here
    score: Optional[Union[float, str]] = None
    wordsFound: Optional[int] = None
    emotion: Optional[str] = None


class TelemetryBatch(BaseModel):
    """API request body for report generation."""
    records: List[TelemetryIn] = []


class LevelSummary(BaseModel):
    name: str
    completed: bool
    wordsCompleted: int
    totalScore: Union[int, float]


class EmotionPoint(BaseModel):
    time: str
    emotion: str


class EmotionCardOut(BaseModel):
    name: str
    emotion: str
    count: int
    percentage: float
    description: str


class SessionReport(BaseModel):
    """API response for one session of one player."""
    studentName: str
    sessionNumber: str
    sessionDate: str
    startTime: str
    endTime: str
    sessionDuration: str
    dominantEmotion: str
    score: Union[int, float]
    engagementScore: str
    levels: List[LevelSummary] = []
    emotionCounts: Dict[str, int] = {}
    timestamps: List[EmotionPoint] = []
    emotionCards: List[EmotionCardOut] = []
    insights: List[str] = []


class PlayerReports(BaseModel):
    """All session reports for one player, most recent first."""
    username: str
    sessionCount: int = 0
    reports: List[SessionReport] = []


def batch_to_entries(batch: TelemetryBatch) -> List[Dict[str, Any]]:
    """Raw dicts for the pipeline; unset optional fields stay absent."""
    return [record.model_dump(exclude_none=True) for record in batch.records]
