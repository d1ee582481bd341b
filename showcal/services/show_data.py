"""Public entry points for show data.

Wraps EpisodateClient so callers never see a ShowCalError:

- find_candidate_shows / find_show_episodes return a tagged QueryResult
  (FOUND, NOT_FOUND, FAILED with the cause attached).
- get_candidate_shows / get_show_data collapse that into (found, data)
  with an empty container on anything but FOUND. The cause is only
  logged.

Usage:
    from showcal.services.show_data import ShowDataService

    service = ShowDataService(EpisodateClient())
    found, shows = service.get_candidate_shows("American Dad")
"""
from __future__ import annotations

import structlog

from showcal.api_clients.episodate_client import EpisodateClient
from showcal.models.results import QueryResult, QueryStatus
from showcal.models.shows import EpisodeList, ShowList
from showcal.utils.exceptions import ShowCalError

logger = structlog.get_logger(__name__)


class ShowDataService:
    """Show search and upcoming-episode lookups with typed outcomes."""

    def __init__(self, client: EpisodateClient) -> None:
        self._client = client

    # ── Tagged results ────────────────────────────────────────────────

    def find_candidate_shows(self, query: str) -> QueryResult[ShowList]:
        """Search shows by name."""
        try:
            result = self._client.search_shows(query)
        except ShowCalError as e:
            logger.warning(
                "show_search_failed",
                query=query,
                error=str(e),
                error_type=type(e).__name__,
            )
            return QueryResult.failed(e)

        if result.status is QueryStatus.NOT_FOUND:
            logger.info("show_search_empty", query=query, reason=result.reason)
        return result

    def find_show_episodes(self, show_id: int) -> QueryResult[EpisodeList]:
        """Look up a show's future episodes."""
        try:
            result = self._client.get_show_episodes(show_id)
        except ShowCalError as e:
            logger.warning(
                "episode_lookup_failed",
                show_id=show_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return QueryResult.failed(e)

        if result.status is QueryStatus.NOT_FOUND:
            logger.info("episode_lookup_empty", show_id=show_id, reason=result.reason)
        return result

    # ── Boolean adapters ──────────────────────────────────────────────

    def get_candidate_shows(self, query: str) -> tuple[bool, ShowList]:
        """Return (True, shows) on a match, (False, empty list) otherwise."""
        result = self.find_candidate_shows(query)
        if result.is_found and result.data is not None:
            return True, result.data
        return False, ShowList()

    def get_show_data(self, show_id: int) -> tuple[bool, EpisodeList]:
        """Return (True, episodes) when future episodes exist, else (False, empty list)."""
        result = self.find_show_episodes(show_id)
        if result.is_found and result.data is not None:
            return True, result.data
        return False, EpisodeList()
