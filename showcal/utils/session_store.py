"""Thread-safe in-memory store for calendar sessions.

OAuth2 tokens stay on the server; the browser's signed cookie only carries
the random key returned by `save()`.

Usage:
    store = CalendarSessionStore(max_size=1024)
    key = store.save(calendar_session)
    calendar_session = store.get(key)  # None once expired or discarded
"""
from __future__ import annotations

import secrets
import threading
from datetime import datetime, timezone

from showcal.models.calendar import CalendarSession


class CalendarSessionStore:
    """Maps opaque session keys to CalendarSession objects.

    Attributes:
        _store: Dict mapping session keys to sessions, oldest first.
        _max_size: Maximum number of sessions before eviction.
        _lock: Threading lock for thread-safe access.
    """

    def __init__(self, max_size: int = 1024) -> None:
        self._store: dict[str, CalendarSession] = {}
        self._max_size = max_size
        self._lock = threading.Lock()

    def save(self, session: CalendarSession) -> str:
        """Store a session under a new random key and return the key.

        When full, expired sessions are dropped first, then the oldest one.
        """
        key = secrets.token_urlsafe(32)
        with self._lock:
            if len(self._store) >= self._max_size:
                self._evict_expired()
                if len(self._store) >= self._max_size:
                    del self._store[next(iter(self._store))]
            self._store[key] = session
        return key

    def get(self, key: str | None, now: datetime | None = None) -> CalendarSession | None:
        """Return the session for `key`, or None if unknown or expired."""
        if not key:
            return None
        with self._lock:
            session = self._store.get(key)
            if session is None:
                return None
            if not session.is_valid(now):
                del self._store[key]
                return None
            return session

    def discard(self, key: str | None) -> bool:
        """Forget a session. Returns True if the key existed."""
        with self._lock:
            return self._store.pop(key, None) is not None

    @property
    def size(self) -> int:
        return len(self._store)

    def _evict_expired(self) -> None:
        """Remove all expired sessions. Must be called while holding the lock."""
        now = datetime.now(timezone.utc)
        self._store = {k: v for k, v in self._store.items() if v.is_valid(now)}
