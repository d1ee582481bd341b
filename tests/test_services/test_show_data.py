"""Unit tests for the ShowDataService entry points."""
import json
from unittest.mock import MagicMock, patch

import pytest

from showcal.api_clients.episodate_client import EpisodateClient
from showcal.models.results import QueryResult, QueryStatus
from showcal.models.shows import EpisodeList, Show, ShowList
from showcal.services.show_data import ShowDataService
from showcal.utils.exceptions import FetchError, InvalidInputError, ParseCause, ParseError


@pytest.fixture
def mock_client():
    """Create a mock EpisodateClient."""
    return MagicMock(spec=EpisodateClient)


@pytest.fixture
def service(mock_client):
    return ShowDataService(mock_client)


class TestFindCandidateShows:
    """Tests for ShowDataService.find_candidate_shows."""

    def test_passes_found_through(self, service, mock_client):
        shows = ShowList(shows=[Show(name="A", id=1, still_running=False)])
        mock_client.search_shows.return_value = QueryResult.found(shows)

        result = service.find_candidate_shows("A")

        mock_client.search_shows.assert_called_once_with("A")
        assert result.status is QueryStatus.FOUND
        assert result.data is shows

    def test_error_becomes_failed(self, service, mock_client):
        error = FetchError("https://x", upstream_status=502)
        mock_client.search_shows.side_effect = error

        result = service.find_candidate_shows("A")

        assert result.status is QueryStatus.FAILED
        assert result.error is error

    def test_invalid_input_becomes_failed(self, service, mock_client):
        mock_client.search_shows.side_effect = InvalidInputError("search query must not be empty")
        result = service.find_candidate_shows("")
        assert isinstance(result.error, InvalidInputError)


class TestGetCandidateShows:
    """Tests for the boolean search adapter."""

    def test_found(self, service, mock_client):
        shows = ShowList(shows=[Show(name="A", id=1, still_running=True)])
        mock_client.search_shows.return_value = QueryResult.found(shows)
        assert service.get_candidate_shows("A") == (True, shows)

    @pytest.mark.parametrize("outcome", [
        QueryResult.not_found("no matching shows"),
        ParseError(ParseCause.MISSING_SHOWS, "no tv_shows field"),
    ])
    def test_not_found_and_errors_collapse(self, service, mock_client, outcome):
        if isinstance(outcome, Exception):
            mock_client.search_shows.side_effect = outcome
        else:
            mock_client.search_shows.return_value = outcome

        found, shows = service.get_candidate_shows("A")

        assert found is False
        assert shows == ShowList()


class TestGetShowData:
    """Tests for the boolean episodes adapter."""

    def test_not_found_collapses(self, service, mock_client):
        mock_client.get_show_episodes.return_value = QueryResult.not_found("no known future episodes")
        assert service.get_show_data(2550) == (False, EpisodeList())

    def test_error_collapses(self, service, mock_client):
        mock_client.get_show_episodes.side_effect = FetchError("https://x", reason="timeout")
        found, episodes = service.get_show_data(2550)
        assert found is False
        assert len(episodes) == 0


class TestEndToEnd:
    """Real client with the network call patched out."""

    @pytest.fixture
    def client(self):
        client = EpisodateClient()
        yield client
        client.close()

    def test_american_dad_search(self, client):
        body = '{"total":"1","tv_shows":[{"id":2550,"name":"American Dad!","status":"Running"}]}'
        with patch.object(client, "fetch_text", return_value=body):
            found, shows = ShowDataService(client).get_candidate_shows("American Dad")

        assert found is True
        assert shows.shows == [Show(name="American Dad!", id=2550, still_running=True)]

    def test_null_countdown_details(self, client):
        body = json.dumps({"tvShow": {"id": 2550, "name": "American Dad!", "countdown": None}})
        with patch.object(client, "fetch_text", return_value=body):
            found, episodes = ShowDataService(client).get_show_data(2550)

        assert found is False
        assert episodes.episodes == []

    def test_future_episodes(self, client, details_body):
        with patch.object(client, "fetch_text", return_value=details_body):
            found, episodes = ShowDataService(client).get_show_data(2550)

        assert found is True
        assert [ep.episode for ep in episodes.episodes] == [21, 22]
        assert all(ep.runtime_minutes == 30 for ep in episodes.episodes)
