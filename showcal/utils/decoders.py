"""Decoders for the loosely-typed scalar fields of the episodate API.

Provides:
- parse_air_date(): Parse an air date in either RFC 3339 or the provider's
  "YYYY-MM-DD HH:MM:SS" format into a timezone-aware UTC datetime.
- decode_running_status(): Convert a show's textual status into a boolean.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone

from showcal.utils.exceptions import ParseCause, ParseError, TimeFormatError

# Format episodate uses for air_date, always UTC
PROVIDER_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$",
    re.IGNORECASE | re.ASCII,
)
_PROVIDER_TIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII)


def _parse_rfc3339(value: str) -> datetime:
    """Parse a strict RFC 3339 timestamp, normalized to UTC.

    Raises:
        ValueError: If the string is not RFC 3339.
    """
    if not _RFC3339_RE.fullmatch(value):
        raise ValueError(f"not an RFC 3339 timestamp: {value!r}")

    normalized = value.upper()
    if normalized.endswith("Z"):
        normalized = normalized[:-1] + "+00:00"
    # fromisoformat wants exactly 6 fractional digits before 3.11
    normalized = re.sub(r"\.(\d+)", lambda m: "." + m.group(1).ljust(6, "0")[:6], normalized)
    return datetime.fromisoformat(normalized).astimezone(timezone.utc)


def parse_air_date(value: object) -> datetime:
    """Parse an air date string into a timezone-aware UTC datetime.

    Already-correct RFC 3339 strings are accepted first; otherwise the
    provider's own "YYYY-MM-DD HH:MM:SS" format is tried and read as UTC.

    Args:
        value: Raw air date from the API.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        TimeFormatError: If neither format matches.

    Examples:
        >>> parse_air_date("2019-09-03 02:00:00")
        datetime.datetime(2019, 9, 3, 2, 0, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str):
        raise TimeFormatError(value)

    try:
        return _parse_rfc3339(value)
    except ValueError:
        pass

    if not _PROVIDER_TIME_RE.fullmatch(value):
        raise TimeFormatError(value)
    try:
        parsed = datetime.strptime(value, PROVIDER_TIME_FORMAT)
    except ValueError as e:
        raise TimeFormatError(value) from e
    return parsed.replace(tzinfo=timezone.utc)


def decode_running_status(value: object) -> bool:
    """Return True iff the status reads "running", ignoring case.

    Args:
        value: Status text (str, or UTF-8 bytes).

    Raises:
        ParseError: If the value is not text.
    """
    if isinstance(value, (bytes, bytearray)):
        try:
            value = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(ParseCause.NOT_TEXT, "status is not valid UTF-8 text") from e

    if not isinstance(value, str):
        raise ParseError(ParseCause.NOT_TEXT, f"status must be text, got {type(value).__name__}")

    return value.casefold() == "running"
