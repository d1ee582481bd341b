"""Convert validated episodate responses into domain records.

Parsing happens in two steps per entry: the JSON fragment is deserialized
into its raw API shape (showcal.models.api_schemas), then mapped into the
domain record, injecting data that lives on the parent show. The first
bad entry aborts the whole parse; partial lists are never returned.
"""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from showcal.api_clients.episodate_validators import is_missing, lookup
from showcal.models.api_schemas import RawEpisode, RawShow
from showcal.models.shows import Episode, EpisodeList, Show, ShowList
from showcal.utils.decoders import decode_running_status, parse_air_date
from showcal.utils.exceptions import ParseCause, ParseError, TimeFormatError

logger = structlog.get_logger(__name__)


def _load_json(raw: str | bytes) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ParseError(ParseCause.INVALID_JSON, "response is not valid JSON") from e


# ── Mapping: raw shape -> domain record ──────────────────────────────

def to_show(raw: RawShow) -> Show:
    """Map a raw search entry onto a Show. A missing status means not running."""
    still_running = decode_running_status(raw.status) if raw.status is not None else False
    return Show(name=raw.name, id=raw.id, still_running=still_running)


def to_episode(raw: RawEpisode, show_name: str, runtime_minutes: int) -> Episode:
    """Map a raw episode onto an Episode carrying its show's name and runtime."""
    return Episode(
        season=raw.season,
        episode=raw.episode,
        title=raw.name,
        air_date=parse_air_date(raw.air_date),
        runtime_minutes=runtime_minutes,
        show_name=show_name,
    )


# ── Search results ───────────────────────────────────────────────────

def parse_show_list(raw: str | bytes) -> ShowList:
    """Parse the `tv_shows` collection of a search response.

    Args:
        raw: Search response body.

    Returns:
        ShowList in document order.

    Raises:
        ParseError: Missing `tv_shows`, or any malformed entry.
    """
    document = _load_json(raw)

    entries = lookup(document, "tv_shows")
    if is_missing(entries) or not isinstance(entries, (list, dict)):
        raise ParseError(ParseCause.MISSING_SHOWS, "no tv_shows field")
    if isinstance(entries, dict):
        entries = list(entries.values())

    shows: list[Show] = []
    for index, entry in enumerate(entries):
        try:
            shows.append(to_show(RawShow.model_validate(entry)))
        except ValidationError as e:
            raise ParseError(
                ParseCause.MALFORMED_ENTRY,
                f"tv_shows[{index}] is not a valid show: {e.error_count()} error(s)",
                index=index,
            ) from e
        except ParseError as e:
            e.add_context(f"tv_shows[{index}]")
            raise

    logger.debug("shows_parsed", count=len(shows))
    return ShowList(shows=shows)


# ── Show details ─────────────────────────────────────────────────────

def parse_upcoming_episodes(raw: str | bytes, now: datetime | None = None) -> EpisodeList:
    """Parse the future episodes out of a show-details response.

    Every episode gets `tvShow.name` and `tvShow.runtime`; episodes airing
    at or before `now` are dropped.

    Args:
        raw: Show-details response body.
        now: Reference time, defaults to the current UTC time.

    Returns:
        EpisodeList of future episodes in document order.

    Raises:
        ParseError: Missing episodes/name/runtime, or a malformed entry.
        TimeFormatError: An episode's air_date has no supported format.
    """
    document = _load_json(raw)

    entries = lookup(document, "tvShow.episodes")
    if is_missing(entries) or not isinstance(entries, list):
        raise ParseError(ParseCause.MISSING_EPISODES, "no tvShow.episodes array")

    show_name = lookup(document, "tvShow.name")
    if not isinstance(show_name, str) or not show_name:
        raise ParseError(ParseCause.MISSING_SHOW_NAME, "no tvShow.name")

    runtime = lookup(document, "tvShow.runtime")
    if isinstance(runtime, bool) or not isinstance(runtime, int) or runtime < 1:
        raise ParseError(ParseCause.INVALID_RUNTIME, "tvShow.runtime is not a positive integer")

    now = now or datetime.now(timezone.utc)

    upcoming: list[Episode] = []
    for index, entry in enumerate(entries):
        try:
            episode = to_episode(RawEpisode.model_validate(entry), show_name, runtime)
        except ValidationError as e:
            raise ParseError(
                ParseCause.MALFORMED_ENTRY,
                f"tvShow.episodes[{index}] is not a valid episode: {e.error_count()} error(s)",
                index=index,
            ) from e
        except TimeFormatError as e:
            e.add_context(f"tvShow.episodes[{index}]")
            raise

        if episode.air_date > now:
            upcoming.append(episode)

    logger.debug(
        "episodes_parsed",
        show_name=show_name,
        total=len(entries),
        upcoming=len(upcoming),
    )
    return EpisodeList(episodes=upcoming)
