"""Health check endpoint.

Response format:
    {
        "status": "healthy" | "degraded",
        "version": "1.0.0",
        "dependencies": {
            "episodate_api": "ok" | "unreachable",
            "google_calendar": "ok" | "not configured"
        }
    }
"""
from __future__ import annotations

import structlog
from flask import Blueprint, current_app, jsonify

from showcal import __version__

logger = structlog.get_logger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
def health_check():
    """Return 200 when episodate is reachable, 503 otherwise.

    A missing Google configuration is reported but does not degrade the
    service, since show lookups still work without it.
    """
    episodate = current_app.config["EPISODATE_CLIENT"]
    calendar = current_app.config["GOOGLE_CALENDAR_CLIENT"]

    episodate_ok = episodate.health_check()
    if not episodate_ok:
        logger.warning("health_check_failed", dependency="episodate_api")

    checks = {
        "episodate_api": "ok" if episodate_ok else "unreachable",
        "google_calendar": "ok" if calendar.health_check() else "not configured",
    }

    response = {
        "status": "healthy" if episodate_ok else "degraded",
        "version": __version__,
        "dependencies": checks,
    }
    return jsonify(response), 200 if episodate_ok else 503
