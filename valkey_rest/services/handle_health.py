"""Health Handler - public liveness probe against the store.

Invariants:
    - Only issues PING: never reads or mutates keys
    - Bounded by HEALTH_PROBE_TIMEOUT; timeout and store errors both mean 503
"""

import asyncio
import logging

from valkey_rest.core.domain_types import HEALTH_PROBE_TIMEOUT
from valkey_rest.core.errors import StoreError, UpstreamUnavailableError
from valkey_rest.infrastructure.store import ValkeyStore
from valkey_rest.schemas.keys import HealthResponse

logger = logging.getLogger(__name__)


async def probe_store(store: ValkeyStore, timeout: float) -> None:
    """PING the store under `timeout`; raise UpstreamUnavailableError if it fails."""
    try:
        await asyncio.wait_for(store.ping(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(f"Store ping timed out after {timeout}s")
        raise UpstreamUnavailableError(f"ping timed out after {timeout}s")
    except StoreError as e:
        raise UpstreamUnavailableError(e.detail) from e


async def check_health(store: ValkeyStore) -> HealthResponse:
    await probe_store(store, HEALTH_PROBE_TIMEOUT)
    return HealthResponse(status="healthy")
