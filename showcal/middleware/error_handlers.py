"""Global Flask error handlers for consistent JSON error responses.

Every error leaves the API as:
    { "success": false, "error": { "message": "...", "code": <int> } }
"""
from __future__ import annotations

import structlog
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from showcal.utils.exceptions import ShowCalError

logger = structlog.get_logger(__name__)


def error_response(message: str, code: int):
    """Create a standardized JSON error response.

    Returns:
        Tuple of (response, status_code).
    """
    return jsonify({
        "success": False,
        "error": {
            "message": message,
            "code": code,
        },
    }), code


def register_error_handlers(app: Flask) -> None:
    """Register global error handlers on the Flask app."""

    @app.errorhandler(ShowCalError)
    def handle_showcal_error(e: ShowCalError):
        logger.warning(
            "showcal_error",
            error=str(e),
            error_type=type(e).__name__,
            status_code=e.status_code,
        )
        return error_response(e.message, e.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return error_response(e.description or "Unknown error", e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        """Last resort handler for unhandled exceptions."""
        logger.error(
            "unexpected_error",
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        return error_response("An unexpected error occurred", 500)
