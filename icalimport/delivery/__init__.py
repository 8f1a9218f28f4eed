"""Delivery of normalized events to an external calendar service."""

from .client import GoogleCalendarClient
from .exceptions import DeliveryAuthError, DeliveryError, DeliveryNetworkError
from .importer import CalendarImporter, EventImporter

__all__ = [
    "CalendarImporter",
    "DeliveryAuthError",
    "DeliveryError",
    "DeliveryNetworkError",
    "EventImporter",
    "GoogleCalendarClient",
]
