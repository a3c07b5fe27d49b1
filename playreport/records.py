"""
Telemetry Record Module

Parses raw gameplay telemetry (one JSON object per game tick/round) into
immutable TelemetryRecord values. This is the only place in the pipeline
that can fail: a record without an absolute timestamp cannot be ordered,
so the whole batch is rejected.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union
import math


class TelemetryError(ValueError):
    """Base error for malformed telemetry batches."""


class InvalidTimestampError(TelemetryError):
    """A record's timestamp is missing or cannot be parsed into an instant."""

    def __init__(self, index: int, value: Any):
        self.index = index
        self.value = value
        super().__init__(f"Record {index} has an invalid timestamp: {value!r}")


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 string (or datetime) into a timezone-aware datetime.

    Offset-less values are read as UTC. Raises ValueError/TypeError when the
    value is not a timestamp at all.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _optional_number(value: Any) -> Optional[float]:
    # bool is an int subclass but never a score
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        # "1_000" is a Python literal, not a numeric string
        if "_" in value:
            return None
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    # nan, inf and overflowing literals such as "1e400" count as absent
    return number if math.isfinite(number) else None


def _optional_int(value: Any) -> Optional[int]:
    number = _optional_number(value)
    if number is None:
        return None
    return int(number) if number.is_integer() else None


@dataclass(frozen=True)
class TelemetryRecord:
    """A single gameplay telemetry event for one player."""
    player_id: str
    timestamp: datetime
    score: Optional[float] = None
    words_found: Optional[int] = None  # None = game does not report words
    emotion: Optional[str] = None

    @property
    def numeric_score(self) -> float:
        """Score coerced to 0 when absent."""
        return self.score if self.score is not None else 0.0

    @property
    def has_words_found(self) -> bool:
        return self.words_found is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "username": self.player_id,
            "timestamp": self.timestamp.isoformat(),
            "score": self.score,
        }
        if self.words_found is not None:
            data["wordsFound"] = self.words_found
        if self.emotion is not None:
            data["emotion"] = self.emotion
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any], index: int = 0) -> "TelemetryRecord":
        raw_timestamp = data.get("timestamp")
        if raw_timestamp is None:
            raise InvalidTimestampError(index, raw_timestamp)
        try:
            timestamp = parse_timestamp(raw_timestamp)
        except (ValueError, TypeError) as e:
            raise InvalidTimestampError(index, raw_timestamp) from e

        emotion = data.get("emotion")
        return cls(
            player_id=str(data.get("username", "")),
            timestamp=timestamp,
            score=_optional_number(data.get("score")),
            words_found=_optional_int(data.get("wordsFound")),
            emotion=emotion if isinstance(emotion, str) else None,
        )


def parse_records(entries: Iterable[Dict[str, Any]]) -> List[TelemetryRecord]:
    """
    Parse a raw batch. Fails fast on the first invalid timestamp; dropping
    the record instead could merge or split neighbouring sessions.
    """
    return [TelemetryRecord.from_dict(entry, index) for index, entry in enumerate(entries)]


def round_half_up(value: float, digits: int = 1) -> float:
    """Round ties upward (2.25 -> 2.3) rather than to even like round()."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def display_number(value: float) -> Union[int, float]:
    """Render integral floats as ints (50.0 -> 50) for report output."""
    return int(value) if float(value).is_integer() else value
