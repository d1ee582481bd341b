"""Calendar blueprint: Google login and episode-to-event creation.

Routes:
    GET  /login                → Page linking to the Google login
    GET  /GoogleLogin          → Redirect to Google's consent screen
    GET  /GoogleCallback       → OAuth2 callback, stores the calendar session
    POST /api/v1/createevent   → Add episodes to the user's calendar

OAuth2 tokens stay server-side in the CalendarSessionStore; the signed
Flask session cookie only carries the store key of the user who logged in.
"""
from __future__ import annotations

import secrets

import structlog
from flask import Blueprint, current_app, jsonify, redirect, request, session
from pydantic import ValidationError

from showcal.middleware.error_handlers import error_response
from showcal.models.calendar import CalendarSession
from showcal.models.requests import CreateEventsRequest
from showcal.utils.exceptions import CalendarError

logger = structlog.get_logger(__name__)

calendar_bp = Blueprint("calendar", __name__)

SESSION_STATE_KEY = "oauth_state"
SESSION_CALENDAR_KEY = "calendar_session_key"

LOGIN_PAGE = """<html><body>
<a href="/GoogleLogin">Log in with Google</a>
</body></html>
"""


def current_calendar_session() -> CalendarSession | None:
    """Look up the caller's CalendarSession by the key in the session cookie."""
    key = session.get(SESSION_CALENDAR_KEY)
    calendar_session = current_app.config["CALENDAR_SESSIONS"].get(key)
    if key and calendar_session is None:
        logger.info("calendar_session_expired")
        session.pop(SESSION_CALENDAR_KEY, None)
    return calendar_session


@calendar_bp.route("/login", methods=["GET"])
def login():
    return LOGIN_PAGE


@calendar_bp.route("/GoogleLogin", methods=["GET"])
def google_login():
    """Start the OAuth2 flow with a fresh random state."""
    state = secrets.token_urlsafe(16)
    session[SESSION_STATE_KEY] = state

    client = current_app.config["GOOGLE_CALENDAR_CLIENT"]
    return redirect(client.authorization_url(state), code=307)


@calendar_bp.route("/GoogleCallback", methods=["GET"])
def google_callback():
    """Finish the OAuth2 flow and remember the token for this user."""
    expected_state = session.pop(SESSION_STATE_KEY, None)
    state = request.args.get("state", "")
    if not expected_state or not secrets.compare_digest(state.encode(), expected_state.encode()):
        logger.warning("oauth_state_mismatch")
        return redirect("/login", code=307)

    client = current_app.config["GOOGLE_CALENDAR_CLIENT"]
    try:
        calendar_session = client.exchange_code(request.args.get("code", ""))
    except CalendarError as e:
        logger.warning("oauth_exchange_failed", error=str(e))
        return redirect("/login", code=307)

    store = current_app.config["CALENDAR_SESSIONS"]
    store.discard(session.get(SESSION_CALENDAR_KEY))
    session[SESSION_CALENDAR_KEY] = store.save(calendar_session)
    logger.info("calendar_login_completed")
    return "Calendar access granted. You can close this window."


@calendar_bp.route("/api/v1/createevent", methods=["POST"])
def create_events():
    """Add episodes to the logged-in user's calendar.

    Request JSON:
        { "episodes": [ <episode as returned by /api/v1/getepisodes>, ... ] }

    Response JSON:
        { "success": true, "created": ["<event link>", ...], "failed": 0 }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response("Invalid 'episodes' data", 400)

    try:
        req = CreateEventsRequest(**data)
    except ValidationError as e:
        errors = e.errors()
        message = errors[0].get("msg", "Validation error") if errors else "Invalid 'episodes' data"
        return error_response(message, 422)

    service = current_app.config["CALENDAR_SERVICE"]
    summary = service.add_episodes_to_calendar(current_calendar_session(), req.episodes)

    return jsonify({"success": True, **summary.model_dump()})
