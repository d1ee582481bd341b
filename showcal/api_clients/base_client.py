"""Base API client: a persistent httpx.Client with structured request logging.

Both external clients (episodate and Google Calendar) inherit from this
class. Each call is a single attempt: there is no retry, caching or
rate limiting, and no state is kept between calls apart from the
connection pool.
"""
from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any

import httpx
import structlog

from showcal.utils.exceptions import FetchError

logger = structlog.get_logger(__name__)


class BaseAPIClient(ABC):
    """Abstract base class for external API clients.

    Args:
        timeout: Request timeout in seconds, None to wait indefinitely.
        headers: Additional default headers to send with every request.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        timeout: float | None = 30,
        headers: dict[str, str] | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client_name = self.__class__.__name__

        default_headers = {
            "Accept": "application/json",
            "User-Agent": "showcal/1.0",
        }
        if headers:
            default_headers.update(headers)

        self._client = httpx.Client(
            timeout=timeout,
            headers=default_headers,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying HTTP client and release connections."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # ── Public API ────────────────────────────────────────────────────

    def fetch_text(self, url: str) -> str:
        """GET a URL and return the response body as text.

        Args:
            url: Fully built request URL.

        Returns:
            The body of a 200 response.

        Raises:
            FetchError: On transport failure or any status other than 200.
        """
        response = self._send("GET", url)
        if response.status_code != httpx.codes.OK:
            raise FetchError(url, upstream_status=response.status_code)
        return response.text

    # ── Internal Methods ──────────────────────────────────────────────

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Issue one request and log it.

        Raises:
            FetchError: If the request never produced a response.
        """
        logger.info("api_request", client=self._client_name, method=method, url=url)

        start = time.monotonic()
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "api_transport_error",
                client=self._client_name,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise FetchError(url, reason=str(e) or type(e).__name__) from e
        duration_ms = round((time.monotonic() - start) * 1000)

        logger.info(
            "api_response",
            client=self._client_name,
            url=url,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response

    @abstractmethod
    def health_check(self) -> bool:
        """Verify the API is reachable. Used by /health endpoint."""
        ...
