"""Key Handlers - get_entry, set_entry, delete_entry, list_keys.

Invariants:
    - Empty key rejected with 400 before any store call
    - get/set/delete each bounded by KEY_OPERATION_TIMEOUT around one store command
    - list_keys bounded by LIST_OPERATION_TIMEOUT around the WHOLE scan loop
    - Any store error or timeout becomes InternalFailureError (500, fixed message)
    - list_keys is all-or-nothing: a failed page discards every key gathered so far
    - list_keys never returns more than the clamped limit

Design Decisions:
    - Scan loop terminates on cursor 0 or limit reached; no iteration counter,
      the overall timeout is the backstop for patterns that match almost nothing
    - set is unconditional (no existence check): last writer wins at the store
    - asyncio.wait_for cancels the pending store await on expiry, so a slow store
      can never hang the request task
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from pydantic import ValidationError

from valkey_rest.core.domain_types import (
    KEY_OPERATION_TIMEOUT, LIST_OPERATION_TIMEOUT, SCAN_START,
)
from valkey_rest.core.errors import (
    ErrorCategory, InputValidationError, InternalFailureError, KeyNotFoundError,
    StoreError,
)
from valkey_rest.core.request_rules import (
    clamp_limit, expiry_seconds, normalize_pattern, require_key,
)
from valkey_rest.infrastructure.store import ValkeyStore
from valkey_rest.schemas.keys import (
    KeyListResponse, KeyStatusResponse, KeyValueResponse, SetRequest,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_bounded(operation: str, call: Awaitable[T], timeout: float) -> T:
    """Await a store call under `timeout`, mapping every failure to a 500."""
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError:
        logger.error(
            f"Store {operation} timed out after {timeout}s",
            extra={"error_code": "STORE_TIMEOUT"},
        )
        raise InternalFailureError(
            f"{operation} timed out after {timeout}s", ErrorCategory.TIMEOUT,
        )
    except StoreError as e:
        raise InternalFailureError(e.detail, ErrorCategory.STORE) from e


class KeyHandlers:
    """Handlers for the protected /keys routes."""

    def __init__(self, store: ValkeyStore):
        self.store = store

    async def get_entry(self, key: str) -> KeyValueResponse:
        """Look up one key; absent keys are a 404."""
        store_key = require_key(key)
        value = await run_bounded(
            "get", self.store.get(store_key), KEY_OPERATION_TIMEOUT,
        )
        if value is None:
            raise KeyNotFoundError(store_key)
        return KeyValueResponse(key=store_key, value=value)

    async def set_entry(self, key: str, body: bytes) -> KeyStatusResponse:
        """Parse the JSON body and store the value, with expiry when positive."""
        store_key = require_key(key)
        try:
            request = SetRequest.model_validate_json(body)
        except ValidationError as e:
            logger.warning(
                f"Rejected set body: {e.error_count()} error(s)",
                extra={"key": store_key, "error_code": "VALIDATION_ERROR"},
            )
            raise InputValidationError("invalid request body", "body")
        if not request.value:
            raise InputValidationError("value is required", "value")

        await run_bounded(
            "set",
            self.store.set(store_key, request.value, expiry_seconds(request.expiration)),
            KEY_OPERATION_TIMEOUT,
        )
        return KeyStatusResponse(status="created", key=store_key)

    async def delete_entry(self, key: str) -> KeyStatusResponse:
        """Delete one key; zero keys removed is a 404."""
        store_key = require_key(key)
        removed = await run_bounded(
            "delete", self.store.delete(store_key), KEY_OPERATION_TIMEOUT,
        )
        if removed == 0:
            raise KeyNotFoundError(store_key)
        return KeyStatusResponse(status="deleted", key=store_key)

    async def list_keys(
        self, pattern: str | None = None, limit: str | None = None,
    ) -> KeyListResponse:
        """Enumerate keys matching pattern, at most `limit` of them."""
        match = normalize_pattern(pattern)
        max_keys = clamp_limit(limit)
        keys = await run_bounded(
            "scan", self._scan(match, max_keys), LIST_OPERATION_TIMEOUT,
        )
        return KeyListResponse(keys=keys, count=len(keys))

    async def _scan(self, match: str, limit: int) -> list[str]:
        cursor = SCAN_START
        keys: list[str] = []
        while True:
            batch = await self.store.scan(cursor, match, limit)
            keys.extend(batch.keys)
            cursor = batch.cursor
            if batch.is_last or len(keys) >= limit:
                break
        return keys[:limit]
