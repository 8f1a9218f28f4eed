"""Calendar delivery exceptions."""

from typing import Optional


class DeliveryError(Exception):
    """Base exception for calendar delivery errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DeliveryAuthError(DeliveryError):
    """Exception raised when the calendar service rejects or lacks credentials."""


class DeliveryNetworkError(DeliveryError):
    """Exception raised for transport-level failures."""
