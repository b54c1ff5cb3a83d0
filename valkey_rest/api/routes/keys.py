"""Key Routes - protected CRUD and listing over /keys.

Invariants:
    - Every route on this router passes the authorization gate first
    - Routes only translate HTTP <-> KeyHandlers; all store logic lives in services/
    - POST reads the raw body so malformed JSON and a missing value can be told apart
    - `limit` is taken as a raw string: bad values fall back to the default, never 400
    - /keys/ (empty key segment) is routed, gated, then rejected with 400 by the handlers
"""

from fastapi import APIRouter, Depends, Query, Request, status

from valkey_rest.api.dependencies import get_key_handlers, require_authorization
from valkey_rest.schemas.keys import (
    ErrorResponse, KeyListResponse, KeyStatusResponse, KeyValueResponse,
)
from valkey_rest.services.handle_keys import KeyHandlers

EMPTY_KEY = ""

router = APIRouter(
    prefix="/keys", tags=["keys"],
    dependencies=[Depends(require_authorization)],
    responses={
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)

_KEY_ERRORS = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.get("", response_model=KeyListResponse)
async def list_keys(
    pattern: str | None = Query(None),
    limit: str | None = Query(None),
    handlers: KeyHandlers = Depends(get_key_handlers),
):
    """List keys matching a glob pattern (cursor scan, capped at limit)."""
    return await handlers.list_keys(pattern, limit)


@router.get("/{key}", response_model=KeyValueResponse, responses=_KEY_ERRORS)
async def get_key(key: str, handlers: KeyHandlers = Depends(get_key_handlers)):
    return await handlers.get_entry(key)


@router.post(
    "/{key}", response_model=KeyStatusResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def set_key(
    key: str, request: Request,
    handlers: KeyHandlers = Depends(get_key_handlers),
):
    """Store a value, optionally expiring after `expiration` seconds."""
    return await handlers.set_entry(key, await request.body())


@router.delete("/{key}", response_model=KeyStatusResponse, responses=_KEY_ERRORS)
async def delete_key(key: str, handlers: KeyHandlers = Depends(get_key_handlers)):
    return await handlers.delete_entry(key)


# ─── Empty key segment ──────────────────────────────────────────

@router.get("/", include_in_schema=False)
async def get_empty_key(handlers: KeyHandlers = Depends(get_key_handlers)):
    return await handlers.get_entry(EMPTY_KEY)


@router.post("/", include_in_schema=False)
async def set_empty_key(handlers: KeyHandlers = Depends(get_key_handlers)):
    return await handlers.set_entry(EMPTY_KEY, b"")


@router.delete("/", include_in_schema=False)
async def delete_empty_key(handlers: KeyHandlers = Depends(get_key_handlers)):
    return await handlers.delete_entry(EMPTY_KEY)
