"""Error Handlers - global exception handlers for the gateway API.

Invariants:
    - GatewayError -> its http_status with {"error": <fixed message>}
    - Routing misses -> 404 {"error": "not found"} / 405 {"error": "method not allowed"}
    - RequestValidationError -> 400 {"error": "invalid request"}
    - Exception (catch-all) -> 500 {"error": "internal server error"}
    - Driver text (GatewayError.detail) and tracebacks go to the log only

Design Decisions:
    - Four-layer handler: domain (GatewayError), routing (HTTPException),
      validation (Pydantic), catch-all (Exception)
    - 5xx logged at ERROR with detail, 4xx at WARNING/INFO without
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from valkey_rest.core.errors import ErrorSeverity, GatewayError

logger = logging.getLogger(__name__)

_ROUTING_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method not allowed",
}

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_http_exception_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Handle all gateway domain/infrastructure errors."""
        message = f"GatewayError: {exc.message}"
        if exc.detail:
            message = f"{message} ({exc.detail})"
        logger.log(
            _LOG_LEVELS[exc.severity], message,
            extra={
                "error_code": exc.code, "path": request.url.path,
                "method": request.method, "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_exception_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """Routing misses and framework HTTP errors in the gateway error shape."""
        message = _ROUTING_MESSAGES.get(exc.status_code)
        if message is None:
            message = exc.detail if isinstance(exc.detail, str) else "request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "invalid request"},
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all - never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )
