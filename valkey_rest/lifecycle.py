"""Server Lifecycle - Starting -> Serving -> Draining -> Stopped under uvicorn.

Invariants:
    - States only move forward; an out-of-order transition raises RuntimeError
    - SIGINT/SIGTERM while Serving moves to Draining before uvicorn stops accepting
    - Requests cancelled while Draining (grace period exceeded) are counted as
      abandoned; any abandoned request makes the exit code non-zero
    - A failed startup probe means the server never reaches Serving (exit code 1)

Design Decisions:
    - Subclass uvicorn.Server over a hand-rolled signal loop: uvicorn already stops
      the listener, waits timeout_graceful_shutdown, then cancels request tasks
    - InFlightMiddleware is a raw ASGI middleware so it sees the cancellation
      uvicorn delivers to each request task
    - Tracker lives on the event loop thread only: counters need no locks
"""

import asyncio
import logging

import uvicorn

from valkey_rest.config import Settings
from valkey_rest.core.domain_types import SHUTDOWN_GRACE_PERIOD, LifecycleState
from valkey_rest.main import create_app

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

_NEXT_STATES = {
    LifecycleState.STARTING: {LifecycleState.SERVING, LifecycleState.STOPPED},
    LifecycleState.SERVING: {LifecycleState.DRAINING, LifecycleState.STOPPED},
    LifecycleState.DRAINING: {LifecycleState.STOPPED},
    LifecycleState.STOPPED: set(),
}


class LifecycleTracker:
    """Process lifecycle state plus in-flight / abandoned request counters."""

    def __init__(self):
        self.state = LifecycleState.STARTING
        self.in_flight = 0
        self.abandoned = 0

    def transition(self, new_state: LifecycleState) -> None:
        if new_state not in _NEXT_STATES[self.state]:
            raise RuntimeError(
                f"Invalid lifecycle transition {self.state.value} -> {new_state.value}",
            )
        logger.info(
            f"Lifecycle {self.state.value} -> {new_state.value}",
            extra={"state": new_state.value},
        )
        self.state = new_state

    @property
    def exit_code(self) -> int:
        return EXIT_FAILURE if self.abandoned else EXIT_OK


class InFlightMiddleware:
    """ASGI middleware counting running HTTP requests and abandoned ones."""

    def __init__(self, app, tracker: LifecycleTracker):
        self.app = app
        self.tracker = tracker

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return
        self.tracker.in_flight += 1
        try:
            await self.app(scope, receive, send)
        except asyncio.CancelledError:
            if self.tracker.state is LifecycleState.DRAINING:
                self.tracker.abandoned += 1
                logger.error(
                    "Request abandoned after shutdown grace period",
                    extra={"path": scope.get("path"), "method": scope.get("method")},
                )
            raise
        finally:
            self.tracker.in_flight -= 1


class GatewayServer(uvicorn.Server):
    """uvicorn server that reports its progress to a LifecycleTracker."""

    def __init__(self, config: uvicorn.Config, tracker: LifecycleTracker):
        super().__init__(config)
        self.tracker = tracker

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            self.tracker.transition(LifecycleState.SERVING)

    def handle_exit(self, sig, frame) -> None:
        if self.tracker.state is LifecycleState.SERVING:
            logger.info(
                f"Received signal {sig}, draining {self.tracker.in_flight} "
                f"in-flight request(s) (grace period {SHUTDOWN_GRACE_PERIOD}s)",
                extra={"state": LifecycleState.DRAINING.value},
            )
            self.tracker.transition(LifecycleState.DRAINING)
        super().handle_exit(sig, frame)


def build_server(settings: Settings, app, tracker: LifecycleTracker) -> GatewayServer:
    """Wrap the ASGI app with the in-flight tracker and configure uvicorn."""
    config = uvicorn.Config(
        InFlightMiddleware(app, tracker),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        timeout_keep_alive=settings.idle_timeout_seconds,
        timeout_graceful_shutdown=SHUTDOWN_GRACE_PERIOD,
        log_config=None,
        access_log=False,
    )
    return GatewayServer(config, tracker)


def run(settings: Settings, store=None) -> int:
    """Serve until signalled; return the process exit code."""
    tracker = LifecycleTracker()
    app = create_app(settings, store=store)
    server = build_server(settings, app, tracker)

    asyncio.run(server.serve())

    if tracker.state is LifecycleState.STARTING:
        logger.critical("Server failed to start")
        tracker.transition(LifecycleState.STOPPED)
        return EXIT_FAILURE

    tracker.transition(LifecycleState.STOPPED)
    if tracker.abandoned:
        logger.error(
            f"Server forced to shut down: {tracker.abandoned} request(s) abandoned",
        )
    else:
        logger.info("Server exited")
    return tracker.exit_code
