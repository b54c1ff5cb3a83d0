"""Root conftest - shared test configuration and fixtures.

Invariants:
    - Tests never reach a real store: every app gets a FakeValkeyClient
    - Settings are built explicitly per test (no .env, no process environment)
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests don't accidentally pick up a real deployment secret
os.environ.setdefault("AUTH_TOKEN", "")
os.environ.setdefault("VALKEY_ADDRESS", "localhost:6379")

from valkey_rest.config import Settings  # noqa: E402
from valkey_rest.infrastructure.store import ValkeyStore  # noqa: E402
from valkey_rest.main import create_app  # noqa: E402
from tests.fakes import FakeValkeyClient  # noqa: E402

SECRET = "secret"


@pytest.fixture
def fake_client():
    return FakeValkeyClient()


@pytest.fixture
def store(fake_client):
    return ValkeyStore(fake_client)


@pytest.fixture
def settings():
    return Settings(_env_file=None, auth_token=SECRET)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
async def client(app):
    """Gateway test client wired to the fake store."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {SECRET}"}
