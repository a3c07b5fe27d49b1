"""
Session Segmentation Module

Splits one player's telemetry into play sessions: maximal runs of records
with no inactivity gap above SESSION_GAP. Sessions are always produced in
ascending time order; display ordering belongs to the report layer.
"""

from datetime import timedelta
from typing import Iterable, List, Tuple
import logging

from .records import TelemetryRecord

logger = logging.getLogger(__name__)

# Fixed policy, not configuration
SESSION_GAP_MS = 120_000
SESSION_GAP = timedelta(milliseconds=SESSION_GAP_MS)

RecordGroup = Tuple[TelemetryRecord, ...]


class SessionSegmenter:
    """
    Gap-based session splitter.

    A new session starts at any record that follows its predecessor by more
    than SESSION_GAP. A gap of exactly SESSION_GAP stays in the session.
    """

    gap = SESSION_GAP

    def sort_records(self, records: Iterable[TelemetryRecord]) -> List[TelemetryRecord]:
        # sorted() is stable, so records sharing a timestamp keep input order
        return sorted(records, key=lambda r: r.timestamp)

    def is_boundary(self, previous: TelemetryRecord, current: TelemetryRecord) -> bool:
        return current.timestamp - previous.timestamp > self.gap

    def segment(self, records: Iterable[TelemetryRecord]) -> List[RecordGroup]:
        """Partition records into ascending, non-empty session groups."""
        ordered = self.sort_records(records)
        if not ordered:
            return []

        groups: List[RecordGroup] = []
        current: List[TelemetryRecord] = [ordered[0]]

        for previous, record in zip(ordered, ordered[1:]):
            if self.is_boundary(previous, record):
                groups.append(tuple(current))
                current = [record]
            else:
                current.append(record)

        groups.append(tuple(current))

        logger.debug(
            "Segmented %d records into %d sessions", len(ordered), len(groups)
        )
        return groups
