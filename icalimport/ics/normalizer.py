"""Normalization of VEVENT components into delivery-ready events."""

import logging
import re
from collections.abc import Iterator
from datetime import datetime, tzinfo
from typing import NamedTuple, Optional, Union

from ..timezone import DEFAULT_TIMEZONE, get_timezone
from .components import Calendar, Component, Event
from .exceptions import ICSError, ICSUnsupportedFormatError
from .models import EventDateTime, NormalizedEvent
from .serializer import render_property

logger = logging.getLogger(__name__)

DATETIME_PATTERN = re.compile(r"^[0-9]{8}T[0-9]{6}")
DATE_PATTERN = re.compile(r"^[0-9]{8}")
SEQUENCE_PATTERN = re.compile(r"^[+-]?[0-9]+$")
SEQUENCE_MIN = -(2**63)
SEQUENCE_MAX = 2**63 - 1

RECURRENCE_PROPERTIES = frozenset({"RRULE", "EXRULE", "RDATE", "EXDATE"})


def resolve_date_time(value: str, tz: tzinfo, timezone_name: str) -> EventDateTime:
    """Resolve a DTSTART/DTEND value in the configured timezone.

    Only the leading digits are used: a trailing "Z" or anything else after
    the matched prefix is ignored and the configured timezone always applies.

    Args:
        value: Raw property value, e.g. "20240115T093000" or "20240115"
        tz: Timezone the local timestamp is read in
        timezone_name: Identifier recorded alongside zoned values

    Returns:
        Zoned date-time for YYYYMMDDTHHMMSS prefixes, civil date for YYYYMMDD

    Raises:
        ICSUnsupportedFormatError: If no prefix matches or the digits are not a
            real date/time
    """
    match = DATETIME_PATTERN.match(value)
    if match:
        try:
            local = datetime.strptime(match.group(), "%Y%m%dT%H%M%S")
        except ValueError as e:
            raise ICSUnsupportedFormatError(value, str(e)) from e
        return EventDateTime(date_time=local.replace(tzinfo=tz), time_zone=timezone_name)

    match = DATE_PATTERN.match(value)
    if match:
        try:
            day = datetime.strptime(match.group(), "%Y%m%d").date()
        except ValueError as e:
            raise ICSUnsupportedFormatError(value, str(e)) from e
        return EventDateTime(date=day)

    raise ICSUnsupportedFormatError(value)


def parse_sequence(value: str) -> int:
    """Parse SEQUENCE as a signed 64-bit base-10 integer, falling back to 0."""
    if not SEQUENCE_PATTERN.match(value):
        return 0
    sequence = int(value, 10)
    if not SEQUENCE_MIN <= sequence <= SEQUENCE_MAX:
        return 0
    return sequence


class NormalizationOutcome(NamedTuple):
    """Event paired with its normalized form or the error that prevented it."""

    event: Event
    normalized: Optional[NormalizedEvent]
    error: Optional[ICSError]


class EventNormalizer:
    """Maps VEVENT properties onto NormalizedEvent fields."""

    def __init__(self, timezone_name: str = DEFAULT_TIMEZONE) -> None:
        """Initialize event normalizer.

        Args:
            timezone_name: Timezone applied to every DTSTART/DTEND value

        Raises:
            TimezoneError: If the timezone identifier is unknown
        """
        self.timezone_name = timezone_name
        self.tz = get_timezone(timezone_name)

    def normalize(self, event: Union[Event, Component]) -> NormalizedEvent:
        """Build a NormalizedEvent from an event's properties.

        Raises:
            ComponentTypeError: If given a component that is not a VEVENT
            ICSUnsupportedFormatError: If DTSTART or DTEND cannot be resolved
        """
        if isinstance(event, Component):
            event = Event(event)

        normalized = NormalizedEvent()

        for prop in event.properties.values():
            name = prop.name
            if name == "UID":
                normalized.ical_uid = prop.value
            elif name == "SUMMARY":
                normalized.summary = prop.value
            elif name == "LOCATION":
                normalized.location = prop.value
            elif name == "DESCRIPTION":
                normalized.description = prop.value.replace("\\n", "\n")
            elif name == "SEQUENCE":
                normalized.sequence = parse_sequence(prop.value)
            elif name in RECURRENCE_PROPERTIES:
                normalized.recurrence.append(render_property(prop))
            elif name == "DTSTART":
                normalized.start = resolve_date_time(prop.value, self.tz, self.timezone_name)
            elif name == "DTEND":
                normalized.end = resolve_date_time(prop.value, self.tz, self.timezone_name)

        return normalized

    def normalize_all(self, calendar: Calendar) -> Iterator[NormalizationOutcome]:
        """Normalize every event of a calendar, isolating per-event failures."""
        for event in calendar.events():
            try:
                yield NormalizationOutcome(event, self.normalize(event), None)
            except ICSError as e:
                logger.warning(f"Failed to generate an event: {e}")
                yield NormalizationOutcome(event, None, e)
