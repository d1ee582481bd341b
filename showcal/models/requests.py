"""Pydantic models for API request validation."""
from __future__ import annotations

from pydantic import BaseModel, Field

from showcal.models.shows import Episode


class ShowIdRequest(BaseModel):
    """Body of POST /api/v1/getepisodes."""
    id: int = Field(..., ge=0, description="Episodate show id")


class CreateEventsRequest(BaseModel):
    """Body of POST /api/v1/createevent.

    Attributes:
        episodes: Episodes as returned by /getepisodes, at least one.
    """
    episodes: list[Episode] = Field(..., min_length=1, description="Episodes to add to the calendar")
