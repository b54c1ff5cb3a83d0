"""Store Client Adapter - async Valkey/Redis client with error mapping.

Invariants:
    - Exactly five primitives: ping, get, set (optional EX), delete (removed count),
      scan (one cursor page)
    - A nil GET reply is returned as None ("no such key"), never raised
    - Every redis exception is logged with its driver text and re-raised as
      StoreError; the driver text never reaches a response body
    - Cancellation (request timeout, client disconnect) passes through untouched

Design Decisions:
    - Injected client supported for tests: same duck-typed surface as
      redis.asyncio.Redis (ADR: no network in unit tests)
    - decode_responses=True: values and keys come back as str; bytes are still
      normalized in case an injected client returns them
    - No retries here: every failure is terminal for the request
"""

import logging
from contextlib import asynccontextmanager
from inspect import isawaitable
from typing import Any, AsyncGenerator

import redis.asyncio as redis_async
from redis.exceptions import RedisError

from valkey_rest.config import Settings
from valkey_rest.core.domain_types import ScanBatch, ScanCursor
from valkey_rest.core.errors import StoreError

logger = logging.getLogger(__name__)

_URL_SCHEMES = ("redis://", "rediss://", "unix://")


def _normalize(value: str | bytes | None) -> str | None:
    if isinstance(value, bytes):
        return value.decode()
    return value


def build_client(settings: Settings) -> Any:
    """Create a redis.asyncio client from VALKEY_ADDRESS / VALKEY_PASSWORD."""
    options: dict[str, Any] = {
        "decode_responses": True,
        "socket_timeout": settings.read_timeout_seconds,
        "socket_connect_timeout": settings.write_timeout_seconds,
    }
    if settings.valkey_password:
        options["password"] = settings.valkey_password

    address = settings.valkey_address
    if address.startswith(_URL_SCHEMES):
        return redis_async.from_url(address, **options)

    host, _, port = address.rpartition(":")
    if not host:
        host, port = address, "6379"
    return redis_async.Redis(host=host, port=int(port), **options)


class ValkeyStore:
    """Narrow async command interface over a redis.asyncio client."""

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValkeyStore":
        return cls(build_client(settings))

    @asynccontextmanager
    async def _command(self, operation: str, key: str | None = None) -> AsyncGenerator[None, None]:
        """Map driver exceptions for one command to StoreError."""
        try:
            yield
        except RedisError as e:
            logger.error(
                f"Store {operation} failed: {e}",
                extra={"key": key, "error_code": "STORE_ERROR"},
            )
            raise StoreError(operation, str(e)) from e

    async def ping(self) -> None:
        async with self._command("ping"):
            await self._client.ping()

    async def get(self, key: str) -> str | None:
        """Return the value for key, or None when the key does not exist."""
        async with self._command("get", key):
            return _normalize(await self._client.get(key))

    async def set(self, key: str, value: str, ttl_seconds: int | None = None) -> None:
        """Store value unconditionally; ttl_seconds=None means no expiry."""
        async with self._command("set", key):
            await self._client.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> int:
        """Delete key and return how many keys the store removed (0 or 1)."""
        async with self._command("delete", key):
            return int(await self._client.delete(key))

    async def scan(self, cursor: ScanCursor, match: str, count: int) -> ScanBatch:
        """Fetch one scan page. count is a hint; the store may return more or fewer."""
        async with self._command("scan"):
            next_cursor, keys = await self._client.scan(
                cursor=cursor, match=match, count=count,
            )
        return ScanBatch(
            cursor=ScanCursor(int(next_cursor)),
            keys=[k for k in (_normalize(raw) for raw in keys) if k is not None],
        )

    async def close(self) -> None:
        """Release the connection pool."""
        close_method = getattr(self._client, "aclose", None)
        if close_method is None:
            close_method = getattr(self._client, "close", None)
        if close_method is None:
            return
        maybe_awaitable = close_method()
        if isawaitable(maybe_awaitable):
            await maybe_awaitable
