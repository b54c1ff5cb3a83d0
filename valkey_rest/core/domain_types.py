"""Domain Types - rich types and fixed constants shared across the gateway.

Invariants:
    - StoreKey wraps str; handlers reject the empty key before any store call
    - ScanCursor 0 is both the initial and the terminal scan position
    - Listing limits are always inside [MIN_LIST_LIMIT, MAX_LIST_LIMIT]
    - All valid states encoded as Enums (no raw string matching)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Timeouts are module constants, not settings: they are part of the HTTP contract
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType


# ─── Identity / Value Types ─────────────────────────────────────

StoreKey = NewType("StoreKey", str)
ScanCursor = NewType("ScanCursor", int)

SCAN_START = ScanCursor(0)


# ─── Listing Bounds ─────────────────────────────────────────────

DEFAULT_LIST_LIMIT = 100
MIN_LIST_LIMIT = 1
MAX_LIST_LIMIT = 1000
DEFAULT_LIST_PATTERN = "*"


# ─── Timeouts (seconds) ─────────────────────────────────────────

KEY_OPERATION_TIMEOUT = 5.0
LIST_OPERATION_TIMEOUT = 10.0
HEALTH_PROBE_TIMEOUT = 2.0
STARTUP_PROBE_TIMEOUT = 5.0
SHUTDOWN_GRACE_PERIOD = 10


# ─── Value Objects ──────────────────────────────────────────────

@dataclass(frozen=True)
class ScanBatch:
    """One page of a cursor scan: keys found plus the cursor to resume from."""
    cursor: ScanCursor
    keys: list[str] = field(default_factory=list)

    @property
    def is_last(self) -> bool:
        return self.cursor == SCAN_START


# ─── Enums ──────────────────────────────────────────────────────

class AuthDecision(str, Enum):
    """Outcome of the authorization gate."""
    ADMIT = "admit"
    CREDENTIAL_MISSING = "credential_missing"
    CREDENTIAL_INVALID = "credential_invalid"


class LifecycleState(str, Enum):
    """Server lifecycle states, in the only order they may occur."""
    STARTING = "starting"
    SERVING = "serving"
    DRAINING = "draining"
    STOPPED = "stopped"
