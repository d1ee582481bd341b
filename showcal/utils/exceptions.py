"""Custom exception hierarchy for showcal.

All application-specific exceptions inherit from ShowCalError, enabling
uniform error handling in the global error handlers and in the
tagged-result adapters of the show data service.

Hierarchy:
    ShowCalError (base)
    ├── FetchError                — Transport failure or non-200 upstream status
    ├── ResponseValidationError   — Upstream JSON missing structural fields
    ├── ParseError                — JSON fragment can't be decoded into a record
    ├── TimeFormatError           — Air date matches no supported format
    ├── InvalidInputError         — Caller-supplied argument fails a precondition
    └── CalendarError             — Calendar provider failures
        └── CalendarAuthError     — Missing/expired OAuth2 session
"""
from __future__ import annotations

from enum import Enum


class ShowCalError(Exception):
    """Base exception for showcal.

    Context strings added while the error travels up the call chain are
    prepended to the message, so the root cause stays last.
    """

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        self.context: list[str] = []
        super().__init__(self.message)

    def add_context(self, context: str) -> ShowCalError:
        """Record where the error passed through without changing its kind."""
        self.context.append(context)
        return self

    def __str__(self) -> str:
        return ": ".join([*reversed(self.context), self.message])


# ── Upstream Errors ──────────────────────────────────────────────────

class FetchError(ShowCalError):
    """Raised when a GET to the show provider fails or returns non-200."""

    def __init__(
        self,
        url: str,
        upstream_status: int | None = None,
        reason: str | None = None,
    ) -> None:
        self.url = url
        self.upstream_status = upstream_status
        if upstream_status is not None:
            message = f"HTTP {upstream_status} for {url}"
        else:
            message = f"request to {url} failed: {reason or 'transport error'}"
        super().__init__(message, status_code=502)


class ValidationCause(str, Enum):
    """Why an upstream response failed structural validation."""

    INVALID_JSON = "invalid_json"
    MISSING_TOTAL = "missing_total"
    TOTAL_NOT_STRING = "total_not_string"
    TOTAL_NOT_INTEGER = "total_not_integer"
    MISSING_SHOWS = "missing_shows"
    SHOWS_WRONG_TYPE = "shows_wrong_type"
    MISSING_COUNTDOWN = "missing_countdown"


class ResponseValidationError(ShowCalError):
    """Raised when an upstream response lacks an expected field."""

    def __init__(self, field: str, cause: ValidationCause, message: str) -> None:
        self.field = field
        self.cause = cause
        super().__init__(f"{field}: {message}", status_code=502)


class ParseCause(str, Enum):
    """Why a validated response could not be decoded into records."""

    INVALID_JSON = "invalid_json"
    MISSING_SHOWS = "missing_shows"
    MISSING_EPISODES = "missing_episodes"
    MISSING_SHOW_NAME = "missing_show_name"
    INVALID_RUNTIME = "invalid_runtime"
    MALFORMED_ENTRY = "malformed_entry"
    NOT_TEXT = "not_text"


class ParseError(ShowCalError):
    """Raised when a response can't be decoded into Show/Episode records."""

    def __init__(
        self,
        cause: ParseCause,
        message: str,
        index: int | None = None,
    ) -> None:
        self.cause = cause
        self.index = index
        super().__init__(message, status_code=502)


class TimeFormatError(ShowCalError):
    """Raised when a date string matches none of the supported formats."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"unsupported time format: {value!r}", status_code=502)


# ── Input Errors ─────────────────────────────────────────────────────

class InvalidInputError(ShowCalError):
    """Raised when a caller-supplied argument fails a precondition."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=422)


# ── Calendar Errors ──────────────────────────────────────────────────

class CalendarError(ShowCalError):
    """Raised when the calendar provider rejects or fails a request."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message, status_code)


class CalendarAuthError(CalendarError):
    """Raised when there is no usable OAuth2 session for the calendar."""

    def __init__(self, message: str = "Calendar login required") -> None:
        super().__init__(message, status_code=401)
