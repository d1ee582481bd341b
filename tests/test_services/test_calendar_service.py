"""Unit tests for the calendar service."""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from showcal.api_clients.google_calendar_client import GoogleCalendarClient
from showcal.models.calendar import CalendarEvent, CalendarSession
from showcal.models.shows import Episode
from showcal.services.calendar_service import (
    CalendarService,
    build_calendar_event,
    format_episode_for_calendar,
)
from showcal.utils.exceptions import CalendarAuthError, CalendarError


def _episode(**overrides):
    fields = {
        "season": 1,
        "episode": 1,
        "title": "B",
        "air_date": datetime(2019, 1, 1, 0, 0, tzinfo=timezone.utc),
        "runtime_minutes": 30,
        "show_name": "A",
    }
    fields.update(overrides)
    return Episode(**fields)


@pytest.fixture
def mock_google():
    return MagicMock(spec=GoogleCalendarClient)


@pytest.fixture
def service(mock_google):
    return CalendarService(mock_google)


@pytest.fixture
def calendar_session():
    return CalendarSession(
        access_token="tok",
        expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
    )


class TestFormatEpisodeForCalendar:
    """Tests for format_episode_for_calendar."""

    def test_event_fields(self):
        event = format_episode_for_calendar(_episode())

        assert event == CalendarEvent(
            summary='A: "B"',
            description='A: "B"\nSeason 1, Episode 1',
            start=datetime(2019, 1, 1, 0, 0, tzinfo=timezone.utc),
            end=datetime(2019, 1, 1, 0, 30, tzinfo=timezone.utc),
        )


class TestBuildCalendarEvent:
    """Tests for build_calendar_event."""

    def test_rfc3339_times(self):
        body = build_calendar_event(format_episode_for_calendar(_episode()))

        assert body["summary"] == 'A: "B"'
        assert body["start"] == {"dateTime": "2019-01-01T00:00:00Z"}
        assert body["end"] == {"dateTime": "2019-01-01T00:30:00Z"}

    def test_empty_summary(self):
        event = CalendarEvent(
            summary="",
            description="",
            start=datetime(2019, 1, 1, tzinfo=timezone.utc),
            end=datetime(2019, 1, 1, tzinfo=timezone.utc),
        )
        with pytest.raises(CalendarError):
            build_calendar_event(event)


class TestAddEpisodesToCalendar:
    """Tests for CalendarService.add_episodes_to_calendar."""

    def test_inserts_each_episode(self, service, mock_google, calendar_session):
        mock_google.insert_event.side_effect = [
            {"htmlLink": "https://calendar/1"},
            {"htmlLink": "https://calendar/2"},
        ]

        summary = service.add_episodes_to_calendar(
            calendar_session, [_episode(episode=1), _episode(episode=2)]
        )

        assert summary.created == ["https://calendar/1", "https://calendar/2"]
        assert summary.failed == 0
        assert mock_google.insert_event.call_count == 2
        _, body = mock_google.insert_event.call_args_list[1].args
        assert body["description"].endswith("Episode 2")

    def test_failed_insert_is_counted_and_rest_continue(self, service, mock_google, calendar_session):
        mock_google.insert_event.side_effect = [
            CalendarError("boom"),
            {"htmlLink": "https://calendar/2"},
        ]

        summary = service.add_episodes_to_calendar(calendar_session, [_episode(), _episode()])

        assert summary.created == ["https://calendar/2"]
        assert summary.failed == 1

    def test_rejected_token_stops_batch(self, service, mock_google, calendar_session):
        mock_google.insert_event.side_effect = CalendarAuthError()

        with pytest.raises(CalendarAuthError):
            service.add_episodes_to_calendar(calendar_session, [_episode(), _episode()])
        assert mock_google.insert_event.call_count == 1

    def test_no_session(self, service, mock_google):
        with pytest.raises(CalendarAuthError):
            service.add_episodes_to_calendar(None, [_episode()])
        mock_google.insert_event.assert_not_called()

    def test_expired_session(self, service, mock_google):
        expired = CalendarSession(
            access_token="tok",
            expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
        )
        with pytest.raises(CalendarAuthError):
            service.add_episodes_to_calendar(expired, [_episode()])
        mock_google.insert_event.assert_not_called()


class TestCalendarSession:
    """Tests for CalendarSession.is_valid."""

    def test_no_expiry_is_valid(self):
        assert CalendarSession(access_token="tok").is_valid() is True

    def test_empty_token_is_invalid(self):
        assert CalendarSession(access_token="").is_valid() is False

    def test_within_leeway_is_invalid(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        session = CalendarSession(access_token="tok", expires_at=now + timedelta(seconds=30))
        assert session.is_valid(now=now) is False
