"""Shared pytest fixtures for the showcal test suite.

Provides reusable fixtures for:
- Test settings and the Flask app/test client
- Episodate response bodies (search and show details)
"""
import json

import pytest

from showcal import create_app
from showcal.config import Settings

AMERICAN_DAD_SEARCH = {
    "total": "1",
    "page": 1,
    "pages": 1,
    "tv_shows": [
        {
            "id": 2550,
            "name": "American Dad!",
            "permalink": "american-dad",
            "start_date": "2005-02-06",
            "end_date": None,
            "country": "US",
            "network": "TBS",
            "status": "Running",
            "image_thumbnail_path": "https://static.episodate.com/images/tv-show/thumbnail/2550.jpg",
        }
    ],
}


def show_details(**overrides):
    """Build an American Dad! show-details document; `None` drops a key."""
    tv_show = {
        "id": 2550,
        "name": "American Dad!",
        "status": "Running",
        "runtime": 30,
        "countdown": {
            "season": 15,
            "episode": 20,
            "name": "The Hand that Rocks the Rogu",
            "air_date": "2019-08-27 02:00:00",
        },
        "episodes": [
            {"season": 15, "episode": 21, "name": "Downtown", "air_date": "2119-09-03 02:00:00"},
            {
                "season": 15,
                "episode": 22,
                "name": "Cheek to Cheek: A Stripper's Story",
                "air_date": "2119-09-10 02:00:00",
            },
        ],
    }
    for key, value in overrides.items():
        if value is None:
            tv_show.pop(key, None)
        else:
            tv_show[key] = value
    return {"tvShow": tv_show}


@pytest.fixture
def settings():
    """Settings that never depend on the developer's environment."""
    return Settings(
        SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
        GOOGLE_CLIENT_ID="client-id",
        GOOGLE_CLIENT_SECRET="client-secret",
    )


@pytest.fixture
def app(settings):
    """Create a Flask application instance for testing."""
    app = create_app(settings)
    app.config["TESTING"] = True
    clients = [app.config["EPISODATE_CLIENT"], app.config["GOOGLE_CALENDAR_CLIENT"]]
    yield app
    for api_client in clients:
        api_client.close()


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def search_body():
    return json.dumps(AMERICAN_DAD_SEARCH)


@pytest.fixture
def details_body():
    return json.dumps(show_details())


@pytest.fixture
def make_details():
    """Return a builder for show-details bodies (see `show_details`)."""
    def _make(**overrides):
        return json.dumps(show_details(**overrides))
    return _make
