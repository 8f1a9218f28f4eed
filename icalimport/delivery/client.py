"""HTTP client for the Google Calendar REST API."""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..ics.models import NormalizedEvent
from .exceptions import DeliveryAuthError, DeliveryError, DeliveryNetworkError

logger = logging.getLogger(__name__)

AUTH_ERROR_STATUS_CODES = (401, 403)
MAX_ERROR_MESSAGE_LENGTH = 200


def _error_message(response: httpx.Response) -> str:
    """Extract a short error message from a Google API error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return " ".join(error["message"].split())[:MAX_ERROR_MESSAGE_LENGTH]
        if isinstance(error, str) and error.strip():
            return " ".join(error.split())[:MAX_ERROR_MESSAGE_LENGTH]

    text = response.text.strip()
    if text:
        return " ".join(text.split())[:MAX_ERROR_MESSAGE_LENGTH]
    return "Request failed without an error payload"


class GoogleCalendarClient:
    """Synchronous Google Calendar client authenticated with a bearer token."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://www.googleapis.com/calendar/v3",
        timeout: float = 30.0,
        app_name: str = "icalimport",
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize calendar client.

        Args:
            access_token: OAuth 2.0 access token issued for the calendar scope
            base_url: API base URL
            timeout: Request timeout in seconds
            app_name: Used in the User-Agent header
            http_client: Preconfigured client, mainly for tests

        Raises:
            DeliveryAuthError: If no access token is given
        """
        if not access_token:
            raise DeliveryAuthError("Access token is required")

        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.client = http_client or httpx.Client(
            timeout=httpx.Timeout(timeout, connect=10.0),
            follow_redirects=True,
        )
        self.client.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "User-Agent": f"{app_name}/1.0.0",
            }
        )

        logger.debug("Google Calendar client initialized")

    @classmethod
    def from_settings(cls, settings: Any) -> "GoogleCalendarClient":
        settings.validate_delivery_config()
        return cls(
            access_token=settings.access_token,
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            app_name=settings.app_name,
        )

    def __enter__(self) -> "GoogleCalendarClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client and not self.client.is_closed:
            self.client.close()

    def list_calendars(self) -> List[str]:
        """List the ids of the calendars visible to the token owner."""
        payload = self._request("GET", "/users/me/calendarList", params={"fields": "items/id"})
        items = payload.get("items") or []
        return [item["id"] for item in items if isinstance(item, dict) and "id" in item]

    def import_event(self, calendar_id: str, event: NormalizedEvent) -> Dict[str, Any]:
        """Import one event into a calendar with events.import.

        Returns:
            Event resource created by the service

        Raises:
            DeliveryAuthError: On 401/403 responses
            DeliveryNetworkError: On transport failures
            DeliveryError: On any other non-2xx response
        """
        path = f"/calendars/{quote(calendar_id, safe='')}/events/import"
        return self._request("POST", path, json_body=event.to_api_payload())

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.client.request(method, url, params=params, json=json_body)
        except httpx.HTTPError as e:
            raise DeliveryNetworkError(f"Google Calendar request failed: {e}") from e

        if response.status_code in AUTH_ERROR_STATUS_CODES:
            raise DeliveryAuthError(
                f"Google Calendar authorization failed ({response.status_code}): "
                f"{_error_message(response)}",
                status_code=response.status_code,
            )

        if not response.is_success:
            raise DeliveryError(
                f"Google Calendar request failed ({response.status_code}): "
                f"{_error_message(response)}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}

        try:
            payload = response.json()
        except ValueError as e:
            raise DeliveryError(
                "Google Calendar returned invalid JSON", status_code=response.status_code
            ) from e

        return payload if isinstance(payload, dict) else {}
