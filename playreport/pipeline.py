"""
Report Pipeline

Pure entry points wiring the stages together:

    raw records -> SessionSegmenter -> SessionMetrics (levels, scores,
    emotions) -> ReportAssembler

Nothing here performs I/O or keeps state between calls, so running the
pipeline twice on the same batch yields equal reports.
"""

from typing import Any, Dict, Iterable, List, Optional
import logging

from .records import TelemetryRecord, parse_records
from .sessions import SessionSegmenter
from .metrics import Session, SessionMetrics
from .report import Report, ReportAssembler

logger = logging.getLogger(__name__)


class ReportPipeline:
    """Stateless composition of the segmentation and reporting stages."""

    def __init__(
        self,
        segmenter: Optional[SessionSegmenter] = None,
        session_metrics: Optional[SessionMetrics] = None,
        assembler: Optional[ReportAssembler] = None
    ):
        self.segmenter = segmenter or SessionSegmenter()
        self.session_metrics = session_metrics or SessionMetrics()
        self.assembler = assembler or ReportAssembler()

    def build_sessions(self, records: Iterable[TelemetryRecord]) -> List[Session]:
        """Scored sessions in ascending time order, numbered from 1."""
        groups = self.segmenter.segment(records)
        return [
            self.session_metrics.build(number, group)
            for number, group in enumerate(groups, start=1)
        ]

    def build_reports(self, records: Iterable[TelemetryRecord], player_id: str) -> List[Report]:
        """One player's reports, most recent session first."""
        sessions = self.build_sessions(records)
        reports = self.assembler.assemble_all(sessions, player_id)
        logger.info("Built %d session reports for %s", len(reports), player_id)
        return reports


def group_by_player(records: Iterable[TelemetryRecord]) -> Dict[str, List[TelemetryRecord]]:
    """Split a mixed batch by player, keeping first-seen player order."""
    grouped: Dict[str, List[TelemetryRecord]] = {}
    for record in records:
        grouped.setdefault(record.player_id, []).append(record)
    return grouped


def build_reports(records: Iterable[TelemetryRecord], player_id: str) -> List[Report]:
    return ReportPipeline().build_reports(records, player_id)


def build_player_reports(entries: Iterable[Dict[str, Any]]) -> Dict[str, List[Report]]:
    """
    Parse a raw JSON batch (possibly several players) and report each player
    independently. Raises InvalidTimestampError for the whole batch.
    """
    pipeline = ReportPipeline()
    records = parse_records(entries)
    return {
        player_id: pipeline.build_reports(player_records, player_id)
        for player_id, player_records in group_by_player(records).items()
    }
