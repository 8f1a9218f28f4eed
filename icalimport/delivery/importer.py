"""Batch import of a parsed calendar into a calendar service."""

import logging
from typing import Any, Dict, Protocol

from ..ics.components import Calendar
from ..ics.models import ImportResult, ImportStatus, ImportSummary, NormalizedEvent
from ..ics.normalizer import EventNormalizer
from .exceptions import DeliveryError

logger = logging.getLogger(__name__)


class EventImporter(Protocol):
    """Anything that can import a normalized event into a target calendar."""

    def import_event(self, calendar_id: str, event: NormalizedEvent) -> Dict[str, Any]:
        ...


class CalendarImporter:
    """Normalizes calendar events and hands deliverable ones to an EventImporter.

    Failures are local to one event: a normalization or delivery error is
    logged and recorded, and the batch moves on. Nothing is retried.
    """

    def __init__(self, importer: EventImporter, normalizer: EventNormalizer) -> None:
        self.importer = importer
        self.normalizer = normalizer

    def import_calendar(self, calendar: Calendar, calendar_id: str) -> ImportSummary:
        """Import every event of a calendar.

        Args:
            calendar: Parsed calendar
            calendar_id: Target calendar identifier

        Returns:
            Per-event results and totals
        """
        summary = ImportSummary(calendar_id=calendar_id)

        for outcome in self.normalizer.normalize_all(calendar):
            if outcome.normalized is None:
                summary.add(
                    ImportResult(
                        status=ImportStatus.FAILED,
                        summary=outcome.event.summary,
                        error=str(outcome.error),
                    )
                )
                continue

            summary.add(self.import_event(calendar_id, outcome.normalized))

        logger.info(
            f"Import finished: {summary.imported} imported, {summary.skipped} skipped, "
            f"{summary.failed} failed"
        )
        return summary

    def import_event(self, calendar_id: str, event: NormalizedEvent) -> ImportResult:
        """Deliver a single normalized event unless its summary is empty."""
        if not event.is_deliverable:
            logger.debug(f"Skipping event without summary: {event.ical_uid}")
            return ImportResult(status=ImportStatus.SKIPPED, ical_uid=event.ical_uid)

        logger.info(f"Importing '{event.summary}'...")
        try:
            self.importer.import_event(calendar_id, event)
        except DeliveryError as e:
            logger.warning(f"Failed to import the event: {e}")
            return ImportResult(
                status=ImportStatus.FAILED,
                summary=event.summary,
                ical_uid=event.ical_uid,
                error=str(e),
            )

        return ImportResult(
            status=ImportStatus.IMPORTED, summary=event.summary, ical_uid=event.ical_uid
        )
