"""
Timezone package for icalimport.

Example usage:
    >>> from icalimport.timezone import get_timezone
    >>> tz = get_timezone("Asia/Tokyo")
"""

from .service import (
    DEFAULT_TIMEZONE,
    TimezoneError,
    TimezoneService,
    get_timezone,
    get_timezone_service,
)

__all__ = [
    "DEFAULT_TIMEZONE",
    "TimezoneError",
    "TimezoneService",
    "get_timezone",
    "get_timezone_service",
]
