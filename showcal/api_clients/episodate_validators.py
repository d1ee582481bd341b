"""Structural checks on raw episodate responses.

Run before any record parsing. Each returns True when the response holds
data to parse, False for a legitimate empty outcome (no search matches,
no known future episode), and raises ResponseValidationError when the
response breaks the API contract.
"""
from __future__ import annotations

import json
import re
from typing import Any

import structlog

from showcal.utils.exceptions import ResponseValidationError, ValidationCause

logger = structlog.get_logger(__name__)

_MISSING = object()

# Optional sign and ASCII digits, nothing else
_NUMERAL_RE = re.compile(r"-?[0-9]+")


def lookup(document: Any, path: str) -> Any:
    """Follow a dotted path through nested JSON objects.

    Returns the module-level `_MISSING` sentinel when any step is absent
    (JSON null is returned as None, not as missing).
    """
    node = document
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return _MISSING
        node = node[key]
    return node


def is_missing(value: Any) -> bool:
    return value is _MISSING


def _load_json(raw: str | bytes, context: str) -> dict[str, Any]:
    try:
        document = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ResponseValidationError(
            "<document>", ValidationCause.INVALID_JSON, f"response for {context} is not valid JSON"
        ) from e
    if not isinstance(document, dict):
        raise ResponseValidationError(
            "<document>", ValidationCause.INVALID_JSON, f"response for {context} is not a JSON object"
        )
    return document


def validate_search_response(raw: str | bytes, query: str) -> bool:
    """Check a search response before parsing its shows.

    The API encodes `total` as a numeral string, e.g. {"total": "12"}.

    Args:
        raw: Response body.
        query: The search query (used only in error messages).

    Returns:
        False if the search matched nothing, True if `tv_shows` is ready
        to parse.

    Raises:
        ResponseValidationError: Missing/ill-typed `total` or `tv_shows`.
    """
    document = _load_json(raw, f"query '{query}'")

    total = lookup(document, "total")
    if is_missing(total):
        raise ResponseValidationError(
            "total", ValidationCause.MISSING_TOTAL, f"no 'total' field for query '{query}'"
        )
    if not isinstance(total, str):
        raise ResponseValidationError(
            "total",
            ValidationCause.TOTAL_NOT_STRING,
            f"expected numeral string for query '{query}', got {type(total).__name__}",
        )
    if not _NUMERAL_RE.fullmatch(total):
        raise ResponseValidationError(
            "total",
            ValidationCause.TOTAL_NOT_INTEGER,
            f"'{total}' is not an integer for query '{query}'",
        )
    count = int(total)

    if count < 1:
        logger.info("no_search_matches", query=query)
        return False

    shows = lookup(document, "tv_shows")
    if is_missing(shows):
        raise ResponseValidationError(
            "tv_shows", ValidationCause.MISSING_SHOWS, f"no 'tv_shows' field for query '{query}'"
        )
    if not isinstance(shows, (list, dict)):
        raise ResponseValidationError(
            "tv_shows",
            ValidationCause.SHOWS_WRONG_TYPE,
            f"expected array for query '{query}', got {type(shows).__name__}",
        )

    return True


def validate_show_details_response(raw: str | bytes, show_id: int) -> bool:
    """Check whether a show-details response announces a future episode.

    `tvShow.countdown` is always present for a valid show id; it is null
    when no next episode is known.

    Returns:
        False for a null countdown, True otherwise.

    Raises:
        ResponseValidationError: If `tvShow.countdown` is absent.
    """
    document = _load_json(raw, f"show id {show_id}")

    countdown = lookup(document, "tvShow.countdown")
    if is_missing(countdown):
        raise ResponseValidationError(
            "tvShow.countdown",
            ValidationCause.MISSING_COUNTDOWN,
            f"no countdown for show id {show_id}",
        )
    if countdown is None:
        logger.info("no_future_episodes", show_id=show_id)
        return False

    return True
