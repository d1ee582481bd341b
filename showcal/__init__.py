"""showcal: upcoming TV episodes, show search, and calendar export.

The `create_app()` factory wires configuration, logging, middleware,
API clients, services, and blueprints into a Flask application.
"""
from __future__ import annotations

import structlog
from flask import Flask
from flask_cors import CORS

from showcal.config import Settings, get_settings
from showcal.middleware.error_handlers import register_error_handlers
from showcal.middleware.request_context import init_request_context
from showcal.utils.logger import setup_logging

__version__ = "1.0.0"


def create_app(settings: Settings | None = None) -> Flask:
    """Application factory.

    Args:
        settings: Explicit settings (tests); defaults to the cached
            environment settings.

    Returns:
        Configured Flask application instance.
    """
    settings = settings or get_settings()

    # Logging first so everything below is formatted
    setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
    logger = structlog.get_logger(__name__)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.SECRET_KEY
    app.config["FLASK_DEBUG"] = settings.FLASK_DEBUG
    app.config["SETTINGS"] = settings

    init_request_context(app)
    register_error_handlers(app)

    CORS(app, resources={
        r"/api/*": {"origins": "*", "methods": ["GET", "POST", "OPTIONS"]},
        r"/health": {"origins": "*"},
    })

    _init_services(app, settings)

    from showcal.routes.calendar import calendar_bp
    from showcal.routes.health import health_bp
    from showcal.routes.shows import shows_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(shows_bp)
    app.register_blueprint(calendar_bp)

    logger.info("app_started", env=settings.FLASK_ENV, log_level=settings.LOG_LEVEL)
    return app


def _init_services(app: Flask, settings: Settings) -> None:
    """Build API clients and services and store them on `app.config`."""
    from showcal.api_clients.episodate_client import EpisodateClient
    from showcal.api_clients.google_calendar_client import GoogleCalendarClient
    from showcal.services.calendar_service import CalendarService
    from showcal.services.show_data import ShowDataService
    from showcal.utils.session_store import CalendarSessionStore

    episodate = EpisodateClient(
        search_url=settings.EPISODATE_SEARCH_URL,
        details_url=settings.EPISODATE_DETAILS_URL,
        timeout=settings.HTTP_TIMEOUT,
    )
    google = GoogleCalendarClient(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
        redirect_url=settings.GOOGLE_REDIRECT_URL,
        auth_url=settings.GOOGLE_AUTH_URL,
        token_url=settings.GOOGLE_TOKEN_URL,
        calendar_url=settings.GOOGLE_CALENDAR_URL,
        timeout=settings.HTTP_TIMEOUT,
    )

    app.config["EPISODATE_CLIENT"] = episodate
    app.config["GOOGLE_CALENDAR_CLIENT"] = google
    app.config["SHOW_DATA_SERVICE"] = ShowDataService(episodate)
    app.config["CALENDAR_SERVICE"] = CalendarService(google)
    app.config["CALENDAR_SESSIONS"] = CalendarSessionStore(max_size=settings.CALENDAR_SESSION_LIMIT)
