"""Calendar-side records: events built from episodes and the OAuth2 session."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

# Treat a token this close to expiry as already expired
EXPIRY_LEEWAY = timedelta(seconds=60)


class CalendarEvent(BaseModel):
    """A simple calendar event with name, description, start and end."""

    model_config = ConfigDict(frozen=True)

    summary: str
    description: str
    start: AwareDatetime
    end: AwareDatetime


class CalendarSession(BaseModel):
    """OAuth2 credentials for one calendar user.

    Owned by the caller and passed into every calendar operation; validity
    is checked on each call.
    """

    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str = "Bearer"
    expires_at: Optional[AwareDatetime] = None

    def is_valid(self, now: datetime | None = None) -> bool:
        if not self.access_token:
            return False
        if self.expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now + EXPIRY_LEEWAY < self.expires_at

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type} {self.access_token}"


class CalendarInsertSummary(BaseModel):
    """Result of pushing a batch of episodes into the calendar."""
    created: list[str] = Field(default_factory=list)   # event html links
    failed: int = 0
