"""Request Rules - pure normalization of key, listing and expiry inputs.

Invariants:
    - clamp_limit never raises: bad input silently becomes DEFAULT_LIST_LIMIT
    - clamp_limit accepts only plain ASCII decimal integers (no "1_0", no non-ASCII digits)
    - normalize_pattern maps missing/empty to "*"; anything else passes through untouched
    - expiry_seconds returns None for "no expiry" (absent, zero or negative)
"""

import re

from valkey_rest.core.domain_types import (
    DEFAULT_LIST_LIMIT, DEFAULT_LIST_PATTERN, MAX_LIST_LIMIT, MIN_LIST_LIMIT,
    StoreKey,
)
from valkey_rest.core.errors import InputValidationError

_DECIMAL_INT = re.compile(r"[+-]?[0-9]+", re.ASCII)


def require_key(key: str | None) -> StoreKey:
    """Reject the empty key before it reaches the store."""
    if not key:
        raise InputValidationError("key is required", "key")
    return StoreKey(key)


def clamp_limit(raw: str | None) -> int:
    """Parse the `limit` query parameter, falling back to the default when invalid."""
    if raw is None or raw == "":
        return DEFAULT_LIST_LIMIT
    text = raw.strip()
    if not _DECIMAL_INT.fullmatch(text):
        return DEFAULT_LIST_LIMIT
    limit = int(text)
    if limit < MIN_LIST_LIMIT or limit > MAX_LIST_LIMIT:
        return DEFAULT_LIST_LIMIT
    return limit


def normalize_pattern(raw: str | None) -> str:
    return raw or DEFAULT_LIST_PATTERN


def expiry_seconds(expiration: int | None) -> int | None:
    if expiration is None or expiration <= 0:
        return None
    return expiration
