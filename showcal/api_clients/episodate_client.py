"""Episodate API client for show search and upcoming episodes.

Episodate provides free TV show data: a fuzzy search by name and a details
endpoint that lists a show's episodes along with a "countdown" to the next
one.
Search URL:  https://www.episodate.com/api/search?q=<name>
Details URL: https://episodate.com/api/show-details?q=<id>
Auth: None required

Each query is fetch -> validate -> parse. "Nothing to return" (no search
matches, no known future episode) comes back as a NOT_FOUND result;
every other problem raises a ShowCalError with the query added as context.
"""
from __future__ import annotations

from urllib.parse import quote_plus

import httpx
import structlog

from showcal.api_clients.base_client import BaseAPIClient
from showcal.api_clients.episodate_parsers import parse_show_list, parse_upcoming_episodes
from showcal.api_clients.episodate_validators import (
    validate_search_response,
    validate_show_details_response,
)
from showcal.models.results import QueryResult
from showcal.models.shows import EpisodeList, ShowList
from showcal.utils.exceptions import InvalidInputError, ShowCalError

logger = structlog.get_logger(__name__)

NO_MATCHING_SHOWS = "no matching shows"
NO_FUTURE_EPISODES = "no known future episodes"


class EpisodateClient(BaseAPIClient):
    """Client for the episodate API."""

    def __init__(
        self,
        search_url: str = "https://www.episodate.com/api/search",
        details_url: str = "https://episodate.com/api/show-details",
        timeout: float | None = 30,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self._search_url = search_url.rstrip("/")
        self._details_url = details_url.rstrip("/")

    # ── URL Builders ──────────────────────────────────────────────────

    def search_url(self, query: str) -> str:
        """Build the search URL for a show name.

        Raises:
            InvalidInputError: If the query is empty.
        """
        if not query:
            raise InvalidInputError("search query must not be empty")
        return f"{self._search_url}?q={quote_plus(query)}"

    def details_url(self, show_id: int) -> str:
        return f"{self._details_url}?q={show_id}"

    # ── Queries ───────────────────────────────────────────────────────

    def search_shows(self, query: str) -> QueryResult[ShowList]:
        """Search for shows by name.

        Args:
            query: Show name to search for.

        Returns:
            FOUND with the matching shows, or NOT_FOUND if nothing matched.

        Raises:
            InvalidInputError: Empty query (no request is made).
            FetchError, ResponseValidationError, ParseError: Upstream problems.
        """
        url = self.search_url(query)
        try:
            body = self.fetch_text(url)
            if not validate_search_response(body, query):
                return QueryResult.not_found(NO_MATCHING_SHOWS)
            shows = parse_show_list(body)
        except ShowCalError as e:
            e.add_context(f"search_shows(query={query!r})")
            raise

        logger.info("shows_found", query=query, count=len(shows))
        return QueryResult.found(shows)

    def get_show_episodes(self, show_id: int) -> QueryResult[EpisodeList]:
        """Get the upcoming episodes of a show.

        Args:
            show_id: Episodate show id.

        Returns:
            FOUND with the future episodes, or NOT_FOUND if the provider
            knows of no next episode or lists none after now.

        Raises:
            FetchError, ResponseValidationError, ParseError, TimeFormatError:
                Upstream problems.
        """
        url = self.details_url(show_id)
        try:
            body = self.fetch_text(url)
            if not validate_show_details_response(body, show_id):
                return QueryResult.not_found(NO_FUTURE_EPISODES)
            episodes = parse_upcoming_episodes(body)
        except ShowCalError as e:
            e.add_context(f"get_show_episodes(show_id={show_id})")
            raise

        # countdown set but the episode list holds nothing after now
        if not episodes.episodes:
            return QueryResult.not_found(NO_FUTURE_EPISODES)

        logger.info("episodes_found", show_id=show_id, count=len(episodes))
        return QueryResult.found(episodes)

    # ── Health Check ──────────────────────────────────────────────────

    def health_check(self) -> bool:
        """Verify episodate is reachable."""
        try:
            self.fetch_text(self.search_url("a"))
            return True
        except ShowCalError:
            return False
