"""Turn episodes into calendar events and push them to Google Calendar."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterable

import structlog

from showcal.api_clients.google_calendar_client import GoogleCalendarClient
from showcal.models.calendar import CalendarEvent, CalendarInsertSummary, CalendarSession
from showcal.models.shows import Episode
from showcal.utils.exceptions import CalendarAuthError, CalendarError

logger = structlog.get_logger(__name__)


def format_episode_for_calendar(episode: Episode) -> CalendarEvent:
    """Convert an episode into an event lasting the show's runtime."""
    summary = f'{episode.show_name}: "{episode.title}"'
    description = f"{summary}\nSeason {episode.season}, Episode {episode.episode}"
    return CalendarEvent(
        summary=summary,
        description=description,
        start=episode.air_date,
        end=episode.end_time,
    )


def build_calendar_event(event: CalendarEvent) -> dict[str, Any]:
    """Build a Google Calendar v3 event body.

    Raises:
        CalendarError: If the event has no summary.
    """
    if not event.summary:
        raise CalendarError("No event summary", status_code=422)

    return {
        "summary": event.summary,
        "description": event.description,
        "start": {"dateTime": _rfc3339(event.start)},
        "end": {"dateTime": _rfc3339(event.end)},
    }


def _rfc3339(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class CalendarService:
    """Adds episodes to the primary calendar of the session's user."""

    def __init__(self, client: GoogleCalendarClient, calendar_id: str = "primary") -> None:
        self._client = client
        self._calendar_id = calendar_id

    def add_episodes_to_calendar(
        self,
        session: CalendarSession | None,
        episodes: Iterable[Episode],
    ) -> CalendarInsertSummary:
        """Create one event per episode.

        A failed insert is logged and counted; the remaining episodes are
        still attempted. A rejected token stops the batch.

        Raises:
            CalendarAuthError: No session, an expired one, or a token the
                provider rejects.
        """
        if session is None or not session.is_valid():
            raise CalendarAuthError()

        summary = CalendarInsertSummary()
        for episode in episodes:
            event = format_episode_for_calendar(episode)
            try:
                created = self._client.insert_event(
                    session, build_calendar_event(event), calendar_id=self._calendar_id
                )
            except CalendarAuthError:
                raise
            except CalendarError as e:
                logger.warning(
                    "calendar_insert_failed",
                    show_name=episode.show_name,
                    season=episode.season,
                    episode=episode.episode,
                    error=str(e),
                )
                summary.failed += 1
                continue

            link = created.get("htmlLink", "")
            logger.info("calendar_event_created", summary=event.summary, link=link)
            summary.created.append(link)

        return summary
