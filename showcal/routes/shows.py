"""Show data blueprint.

Routes:
    GET  /api/v1/showsearch?query=<name>  → Candidate shows for a name
    POST /api/v1/getepisodes              → Upcoming episodes of a show id
"""
from __future__ import annotations

import structlog
from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from showcal.middleware.error_handlers import error_response
from showcal.models.requests import ShowIdRequest
from showcal.models.results import QueryResult, QueryStatus

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/v1"

shows_bp = Blueprint("shows", __name__, url_prefix=API_PREFIX)


def _render_result(result: QueryResult, key: str, not_found_message: str):
    """Map a tagged query result onto an HTTP response."""
    if result.status is QueryStatus.FOUND:
        payload = result.data.model_dump(mode="json")
        return jsonify({"success": True, key: payload[key]})

    if result.status is QueryStatus.NOT_FOUND:
        return error_response(not_found_message, 404)

    error = result.error
    return error_response(error.message, error.status_code)


@shows_bp.route("/showsearch", methods=["GET"])
def show_search():
    """Search shows by name.

    Response JSON:
        {
            "success": true,
            "shows": [{"name": "American Dad!", "id": 2550, "still_running": true}]
        }
    """
    query = request.args.get("query", "").strip()
    if not query:
        return error_response("Missing key 'query'", 422)

    service = current_app.config["SHOW_DATA_SERVICE"]
    result = service.find_candidate_shows(query)
    return _render_result(result, "shows", "No shows matching that query")


@shows_bp.route("/getepisodes", methods=["POST"])
def get_episodes():
    """Return the upcoming episodes of a show.

    Request JSON:
        { "id": 2550 }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response("Invalid show ID", 400)

    try:
        req = ShowIdRequest(**data)
    except ValidationError as e:
        errors = e.errors()
        message = errors[0].get("msg", "Validation error") if errors else "Invalid show ID"
        return error_response(message, 422)

    service = current_app.config["SHOW_DATA_SERVICE"]
    result = service.find_show_episodes(req.id)
    return _render_result(result, "episodes", "No upcoming episodes")
