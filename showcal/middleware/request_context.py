"""Per-request logging context.

Binds a request id (reused from X-Request-ID when the client sends one)
to structlog's contextvars, echoes it back on the response, and logs one
`request_completed` line with the status and duration.
"""
from __future__ import annotations

import time
import uuid

import structlog
from flask import Flask, g, request

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def init_request_context(app: Flask) -> None:
    """Register before/after hooks that scope log context to a request."""

    @app.before_request
    def bind_request_context() -> None:
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.monotonic()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=g.request_id,
            method=request.method,
            path=request.path,
        )

    @app.after_request
    def log_request_completed(response):
        response.headers[REQUEST_ID_HEADER] = g.get("request_id", "unknown")

        start = g.get("request_start")
        duration_ms = round((time.monotonic() - start) * 1000) if start else None
        logger.info("request_completed", status=response.status_code, duration_ms=duration_ms)
        return response
