"""Pydantic models for raw episodate API fragments.

These describe the provider's JSON before it is mapped into the domain
records in showcal.models.shows. Types are strict: a string where the API
contract says integer is a malformed entry, not something to coerce.
Unknown fields are ignored.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RawShow(BaseModel):
    """One entry of `tv_shows` in a search response."""

    model_config = ConfigDict(strict=True, extra="ignore")

    id: int
    name: str
    status: Optional[str] = None        # "Running", "Ended", ...


class RawEpisode(BaseModel):
    """One entry of `tvShow.episodes` in a show-details response."""

    model_config = ConfigDict(strict=True, extra="ignore")

    season: int
    episode: int
    name: str
    air_date: str                       # "YYYY-MM-DD HH:MM:SS" or RFC 3339
