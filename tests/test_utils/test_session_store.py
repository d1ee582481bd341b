"""Unit tests for CalendarSessionStore."""
from datetime import datetime, timedelta, timezone

from showcal.models.calendar import CalendarSession
from showcal.utils.session_store import CalendarSessionStore

NOW = datetime(2030, 1, 1, tzinfo=timezone.utc)


def _session(token="tok", expires_in=timedelta(hours=1)):
    return CalendarSession(access_token=token, expires_at=NOW + expires_in)


class TestCalendarSessionStore:
    """Tests for save/get/discard and eviction."""

    def test_save_and_get(self):
        store = CalendarSessionStore()
        key = store.save(_session())
        assert store.get(key, now=NOW).access_token == "tok"

    def test_keys_are_random_and_opaque(self):
        store = CalendarSessionStore()
        first = store.save(_session())
        second = store.save(_session())
        assert first != second
        assert "tok" not in first

    def test_unknown_or_empty_key(self):
        store = CalendarSessionStore()
        assert store.get("nope", now=NOW) is None
        assert store.get(None, now=NOW) is None
        assert store.get("", now=NOW) is None

    def test_expired_session_is_dropped(self):
        store = CalendarSessionStore()
        key = store.save(_session(expires_in=timedelta(seconds=30)))
        assert store.get(key, now=NOW) is None
        assert store.size == 0

    def test_discard(self):
        store = CalendarSessionStore()
        key = store.save(_session())
        assert store.discard(key) is True
        assert store.discard(key) is False
        assert store.get(key, now=NOW) is None

    def test_full_store_evicts_oldest(self):
        store = CalendarSessionStore(max_size=2)
        first = store.save(CalendarSession(access_token="a"))
        second = store.save(CalendarSession(access_token="b"))
        third = store.save(CalendarSession(access_token="c"))

        assert store.size == 2
        assert store.get(first) is None
        assert store.get(second).access_token == "b"
        assert store.get(third).access_token == "c"

    def test_full_store_evicts_expired_first(self):
        store = CalendarSessionStore(max_size=2)
        live = store.save(CalendarSession(access_token="live"))
        store.save(CalendarSession(
            access_token="stale",
            expires_at=datetime.now(timezone.utc) - timedelta(hours=1),
        ))
        newest = store.save(CalendarSession(access_token="new"))

        assert store.get(live).access_token == "live"
        assert store.get(newest).access_token == "new"
