"""API Dependencies - authorization gate and per-request service wiring.

Invariants:
    - Settings and store are read from app.state (set once by create_app), never
      from module globals or the environment
    - require_authorization raises CredentialMissingError / CredentialInvalidError;
      the global handler turns both into 401 with a fixed message
    - Rejection logs carry the reason and path only, never the token

Design Decisions:
    - Gate attached as a router-level dependency on the /keys router: health is
      public simply by living on another router
"""

import logging

from fastapi import Request

from valkey_rest.config import Settings
from valkey_rest.core.authorize import authorize
from valkey_rest.core.domain_types import AuthDecision
from valkey_rest.core.errors import CredentialInvalidError, CredentialMissingError
from valkey_rest.infrastructure.store import ValkeyStore
from valkey_rest.services.handle_keys import KeyHandlers

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ValkeyStore:
    store = request.app.state.store
    if store is None:
        raise RuntimeError("Store not initialized")
    return store


def get_key_handlers(request: Request) -> KeyHandlers:
    return KeyHandlers(get_store(request))


async def require_authorization(request: Request) -> None:
    """Admit the request or raise a 401 error."""
    settings = get_app_settings(request)
    decision = authorize(settings.auth_token, request.headers.get("Authorization"))
    if decision is AuthDecision.ADMIT:
        return
    logger.warning(
        f"Authorization rejected: {decision.value}",
        extra={"path": request.url.path, "method": request.method},
    )
    if decision is AuthDecision.CREDENTIAL_MISSING:
        raise CredentialMissingError()
    raise CredentialInvalidError()
