"""Core timezone service for icalimport.

Resolves and caches IANA timezone identifiers through zoneinfo.
"""

import logging
from typing import Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Asia/Tokyo"


class TimezoneError(Exception):
    """Raised when timezone operations fail."""


class TimezoneService:
    """Cached lookup of timezone objects by identifier."""

    def __init__(self) -> None:
        self._zones: Dict[str, ZoneInfo] = {}

    def get_timezone(self, name: str) -> ZoneInfo:
        """Get timezone object for an IANA identifier.

        Args:
            name: Timezone identifier such as "Asia/Tokyo"

        Returns:
            ZoneInfo for the identifier

        Raises:
            TimezoneError: If the identifier is empty or unknown
        """
        if not name:
            raise TimezoneError("Timezone identifier must not be empty")

        zone = self._zones.get(name)
        if zone is not None:
            return zone

        try:
            zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise TimezoneError(f"Unknown timezone '{name}': {e}") from e

        logger.debug(f"Created timezone: {name}")
        self._zones[name] = zone
        return zone


_timezone_service: Optional[TimezoneService] = None


def get_timezone_service() -> TimezoneService:
    """Get global timezone service instance."""
    if globals()["_timezone_service"] is None:
        globals()["_timezone_service"] = TimezoneService()
    return globals()["_timezone_service"]


def get_timezone(name: str) -> ZoneInfo:
    """Get timezone object for an IANA identifier."""
    return get_timezone_service().get_timezone(name)
