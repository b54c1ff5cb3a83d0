"""Key Schemas - Pydantic models for the /keys and /health endpoints.

Invariants:
    - SetRequest is strict: value must be a JSON string, expiration a JSON integer
    - A missing value parses as "" so the handler can answer "value is required"
    - expiration must fit a signed 64-bit integer (the store rejects larger EX)
    - Unknown body fields are ignored

Design Decisions:
    - Strict mode over lax coercion: "3600" (string) is a malformed body, not 3600
    - Emptiness checked by the handler, not the schema: malformed JSON and a
      missing value produce different error messages
"""

from pydantic import BaseModel, ConfigDict, Field

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


class SetRequest(BaseModel):
    """Body of POST /keys/{key}."""
    model_config = ConfigDict(strict=True, extra="ignore")

    value: str = ""
    expiration: int = Field(0, ge=INT64_MIN, le=INT64_MAX)


class KeyValueResponse(BaseModel):
    key: str
    value: str


class KeyStatusResponse(BaseModel):
    """Acknowledgement for create/delete."""
    status: str
    key: str


class KeyListResponse(BaseModel):
    keys: list[str]
    count: int


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    error: str
