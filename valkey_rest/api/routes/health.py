"""Health Probe - public liveness endpoint backed by a store PING.

Invariants:
    - GET /health never requires authorization, whatever AUTH_TOKEN is
    - 200 {"status": "healthy"} when the store answers within 2s, else 503
"""

from fastapi import APIRouter, Depends, status

from valkey_rest.api.dependencies import get_store
from valkey_rest.infrastructure.store import ValkeyStore
from valkey_rest.schemas.keys import ErrorResponse, HealthResponse
from valkey_rest.services.handle_health import check_health

router = APIRouter(
    prefix="/health", tags=["health"],
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse}},
)


@router.get("", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check(store: ValkeyStore = Depends(get_store)):
    """Liveness probe. Returns 503 if the store is unreachable."""
    return await check_health(store)
