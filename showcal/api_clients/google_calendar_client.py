"""Google OAuth2 + Calendar v3 client.

Covers the three calls showcal needs: building the consent URL, trading
the callback code for an access token, and inserting one event. Tokens
are returned to the caller as a CalendarSession; this client holds no
per-user state.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import quote, urlencode

import httpx
import structlog

from showcal.api_clients.base_client import BaseAPIClient
from showcal.models.calendar import CalendarSession
from showcal.utils.exceptions import CalendarAuthError, CalendarError, FetchError

logger = structlog.get_logger(__name__)

CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"


class GoogleCalendarClient(BaseAPIClient):
    """Client for Google OAuth2 and the Calendar v3 events API."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        auth_url: str = "https://accounts.google.com/o/oauth2/auth",
        token_url: str = "https://oauth2.googleapis.com/token",
        calendar_url: str = "https://www.googleapis.com/calendar/v3",
        timeout: float | None = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self._client_id = client_id
        self._client_secret = client_secret
        self._redirect_url = redirect_url
        self._auth_url = auth_url
        self._token_url = token_url
        self._calendar_url = calendar_url.rstrip("/")

    # ── OAuth2 ────────────────────────────────────────────────────────

    def authorization_url(self, state: str) -> str:
        """Build the Google consent URL for the calendar scope."""
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_url,
            "response_type": "code",
            "scope": CALENDAR_SCOPE,
            "state": state,
        }
        return f"{self._auth_url}?{urlencode(params)}"

    def exchange_code(self, code: str, now: datetime | None = None) -> CalendarSession:
        """Trade an authorization code for a CalendarSession.

        Raises:
            CalendarAuthError: Google refused the code.
            CalendarError: The token endpoint could not be reached.
        """
        if not code:
            raise CalendarAuthError("Missing authorization code")

        data = {
            "code": code,
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "redirect_uri": self._redirect_url,
            "grant_type": "authorization_code",
        }
        try:
            response = self._send("POST", self._token_url, data=data)
        except FetchError as e:
            raise CalendarError(f"Token exchange failed: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.warning("token_exchange_rejected", status=response.status_code)
            raise CalendarAuthError(f"Token exchange rejected with HTTP {response.status_code}")

        payload = _json_or_empty(response)
        access_token = payload.get("access_token")
        if not access_token:
            raise CalendarAuthError("Token response has no access_token")

        expires_at = None
        if isinstance(payload.get("expires_in"), (int, float)):
            now = now or datetime.now(timezone.utc)
            expires_at = now + timedelta(seconds=payload["expires_in"])

        return CalendarSession(
            access_token=access_token,
            token_type=payload.get("token_type") or "Bearer",
            expires_at=expires_at,
        )

    # ── Events ────────────────────────────────────────────────────────

    def insert_event(
        self,
        session: CalendarSession,
        body: dict[str, Any],
        calendar_id: str = "primary",
    ) -> dict[str, Any]:
        """Insert one event into a calendar.

        Returns:
            The created event resource.

        Raises:
            CalendarAuthError: The session token was rejected.
            CalendarError: Any other failure.
        """
        url = f"{self._calendar_url}/calendars/{quote(calendar_id, safe='')}/events"
        try:
            response = self._send(
                "POST",
                url,
                json=body,
                headers={"Authorization": session.authorization_header},
            )
        except FetchError as e:
            raise CalendarError(f"Event insert failed: {e}") from e

        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise CalendarAuthError("Calendar token rejected, log in again")
        if response.status_code not in (httpx.codes.OK, httpx.codes.CREATED):
            raise CalendarError(f"Event insert failed with HTTP {response.status_code}")

        return _json_or_empty(response)

    # ── Health Check ──────────────────────────────────────────────────

    def health_check(self) -> bool:
        """True when OAuth2 credentials are configured."""
        return bool(self._client_id and self._client_secret)


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}
