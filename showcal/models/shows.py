"""Domain records produced by the episodate parsers.

All records are immutable. Containers keep the order in which the API
returned their items.
"""
from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field


class Show(BaseModel):
    """One row of show search results."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    id: int
    still_running: bool


class Episode(BaseModel):
    """An upcoming episode, carrying its parent show's name and runtime."""

    model_config = ConfigDict(frozen=True)

    season: int = Field(..., ge=0)
    episode: int = Field(..., ge=0)
    title: str
    air_date: AwareDatetime
    runtime_minutes: int = Field(..., gt=0)
    show_name: str

    @property
    def end_time(self) -> datetime:
        return self.air_date + timedelta(minutes=self.runtime_minutes)


class ShowList(BaseModel):
    """Search results in API response order."""

    model_config = ConfigDict(frozen=True)

    shows: list[Show] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.shows)


class EpisodeList(BaseModel):
    """Upcoming episodes of one show in API response order."""

    model_config = ConfigDict(frozen=True)

    episodes: list[Episode] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.episodes)
