"""Valkey REST Gateway - FastAPI application factory.

Invariants:
    - Routes registered explicitly and once, in create_app (no dynamic registration)
    - Settings and store are attached to app.state and passed nowhere else
    - Global error handlers map GatewayError -> {"error": "<fixed message>"}
    - Startup fails fast when the store does not answer PING within 5s
    - Slash redirects disabled: every response is JSON, even for /keys/

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store injectable into create_app: tests pass a fake client, production
      builds one from settings inside the lifespan
    - The lifespan only closes a store it created itself
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from valkey_rest import __version__
from valkey_rest.api.error_handlers import register_error_handlers
from valkey_rest.api.request_logging import register_request_logging
from valkey_rest.api.routes import health, keys
from valkey_rest.config import Settings, get_settings
from valkey_rest.core.domain_types import STARTUP_PROBE_TIMEOUT
from valkey_rest.core.errors import UpstreamUnavailableError
from valkey_rest.infrastructure.store import ValkeyStore
from valkey_rest.services.handle_health import probe_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle: connect, probe, serve, close."""
    settings: Settings = app.state.settings
    owns_store = app.state.store is None
    if owns_store:
        app.state.store = ValkeyStore.from_settings(settings)
    store: ValkeyStore = app.state.store

    try:
        await probe_store(store, STARTUP_PROBE_TIMEOUT)
    except UpstreamUnavailableError as e:
        logger.critical(
            f"Failed to connect to store at {settings.valkey_address}: {e.detail}",
        )
        if owns_store:
            await store.close()
            app.state.store = None
        raise

    _log_startup(settings)
    try:
        yield
    finally:
        logger.info("Valkey REST gateway shutting down")
        if owns_store:
            await store.close()
            app.state.store = None


def _log_startup(settings: Settings) -> None:
    logger.info(f"Connected to store at {settings.valkey_address}")
    if settings.valkey_password:
        logger.info("Store password authentication enabled")
    if settings.auth_enabled:
        logger.info("Token authentication enabled")
    else:
        logger.warning("No AUTH_TOKEN configured - API is unsecured")


def create_app(
    settings: Settings | None = None, store: ValkeyStore | None = None,
) -> FastAPI:
    """Build the gateway application with its static route table."""
    # No slash redirects: /keys/ is an empty key, not an alias of /keys
    app = FastAPI(
        title="Valkey REST Gateway", version=__version__, lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings or get_settings()
    app.state.store = store

    register_error_handlers(app)
    register_request_logging(app)

    # Routes - explicit registration; /health is public, /keys is gated
    app.include_router(health.router)
    app.include_router(keys.router)
    return app


app = create_app()
