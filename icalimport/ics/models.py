"""Data models for normalized events and import results."""

from datetime import date as date_type, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator


class EventDateTime(BaseModel):
    """Start or end of an event: a civil date or a zoned date-time."""

    date: Optional[date_type] = Field(default=None, description="Civil date for all-day values")
    date_time: Optional[datetime] = Field(default=None, description="Timezone-aware timestamp")
    time_zone: Optional[str] = Field(default=None, description="IANA timezone identifier")

    @model_validator(mode="after")
    def check_one_form(self) -> "EventDateTime":
        if (self.date is None) == (self.date_time is None):
            raise ValueError("Exactly one of date and date_time must be set")
        if self.date_time is not None and self.date_time.tzinfo is None:
            raise ValueError("date_time must be timezone-aware")
        return self

    @property
    def is_all_day(self) -> bool:
        return self.date is not None

    @field_serializer("date", when_used="unless-none")
    def serialize_date(self, value: date_type) -> str:
        """Serialize civil date as YYYY-MM-DD."""
        return value.strftime("%Y-%m-%d")

    @field_serializer("date_time", when_used="unless-none")
    def serialize_datetime(self, dt: datetime) -> str:
        """Serialize datetime to an RFC 3339 timestamp with offset."""
        return dt.isoformat()

    def to_api_dict(self) -> Dict[str, str]:
        """Google Calendar EventDateTime resource."""
        if self.date is not None:
            return {"date": self.date.isoformat()}
        assert self.date_time is not None
        payload = {"dateTime": self.date_time.isoformat()}
        if self.time_zone:
            payload["timeZone"] = self.time_zone
        return payload


class NormalizedEvent(BaseModel):
    """Delivery-ready event built from a VEVENT's properties."""

    ical_uid: Optional[str] = Field(default=None, description="UID property")
    summary: str = Field(default="", description="Event title; empty suppresses delivery")
    location: Optional[str] = None
    description: Optional[str] = None
    sequence: int = 0
    recurrence: List[str] = Field(
        default_factory=list, description="Rendered RRULE/EXRULE/RDATE/EXDATE lines"
    )
    start: Optional[EventDateTime] = None
    end: Optional[EventDateTime] = None

    @property
    def is_deliverable(self) -> bool:
        return bool(self.summary)

    @property
    def is_recurring(self) -> bool:
        return bool(self.recurrence)

    def to_api_payload(self) -> Dict[str, Any]:
        """Google Calendar event resource for events.import, unset fields omitted."""
        payload: Dict[str, Any] = {"summary": self.summary, "sequence": self.sequence}
        if self.ical_uid is not None:
            payload["iCalUID"] = self.ical_uid
        if self.location is not None:
            payload["location"] = self.location
        if self.description is not None:
            payload["description"] = self.description
        if self.recurrence:
            payload["recurrence"] = list(self.recurrence)
        if self.start is not None:
            payload["start"] = self.start.to_api_dict()
        if self.end is not None:
            payload["end"] = self.end.to_api_dict()
        return payload


class ImportStatus(str, Enum):
    """Outcome of handling one event."""

    IMPORTED = "imported"
    SKIPPED = "skipped"
    FAILED = "failed"


class ImportResult(BaseModel):
    """Result of importing a single event."""

    status: ImportStatus
    summary: Optional[str] = None
    ical_uid: Optional[str] = None
    error: Optional[str] = None

    model_config = ConfigDict(use_enum_values=True)


class ImportSummary(BaseModel):
    """Result of importing a whole calendar."""

    calendar_id: str
    results: List[ImportResult] = Field(default_factory=list)

    @property
    def imported(self) -> int:
        return self._count(ImportStatus.IMPORTED)

    @property
    def skipped(self) -> int:
        return self._count(ImportStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(ImportStatus.FAILED)

    def add(self, result: ImportResult) -> None:
        self.results.append(result)

    def _count(self, status: ImportStatus) -> int:
        return sum(1 for result in self.results if result.status == status.value)
