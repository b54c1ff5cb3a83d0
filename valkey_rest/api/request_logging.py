"""Request Logging - one structured access log line per HTTP exchange.

Invariants:
    - Every request that reaches the app logs method, path, status_code, duration_ms
    - 5xx logged at ERROR, 4xx at WARNING, everything else at INFO
    - Headers are never logged (the Authorization header carries the secret)

Design Decisions:
    - Registered like the error handlers (register_* on the app): runs inside the
      exception handlers, so gateway errors are logged with their final status
    - Replaces uvicorn's access log, which has no structured fields
"""

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def register_request_logging(app: FastAPI) -> None:
    """Attach the access-log middleware to the FastAPI app."""

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.log(
            _level_for(response.status_code),
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "method": request.method, "path": request.url.path,
                "status_code": response.status_code, "duration_ms": duration_ms,
            },
        )
        return response
