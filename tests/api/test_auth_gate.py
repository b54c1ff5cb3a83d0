"""Authorization Gate over HTTP - 401 bodies and the public health route."""

import pytest

from valkey_rest.config import Settings
from valkey_rest.main import create_app
from httpx import ASGITransport, AsyncClient

PROTECTED = [
    ("GET", "/keys/k"),
    ("POST", "/keys/k"),
    ("DELETE", "/keys/k"),
    ("GET", "/keys"),
]


@pytest.mark.parametrize("method,path", PROTECTED)
async def test_missing_header_is_401(client, method, path):
    res = await client.request(method, path)
    assert res.status_code == 401
    assert res.json() == {"error": "authorization token required"}


@pytest.mark.parametrize("method,path", PROTECTED)
async def test_wrong_token_is_401(client, method, path):
    res = await client.request(method, path, headers={"Authorization": "Bearer wrong"})
    assert res.status_code == 401
    assert res.json() == {"error": "invalid authorization token"}
    assert "wrong" not in res.text
    assert "secret" not in res.text


async def test_bare_token_accepted(client):
    res = await client.get("/keys", headers={"Authorization": "secret"})
    assert res.status_code == 200


async def test_rejected_request_never_reaches_store(client, fake_client):
    await client.post("/keys/k", json={"value": "v"})
    assert fake_client.calls == []


async def test_health_is_public(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "healthy"}


async def test_empty_secret_opens_every_route(store):
    app = create_app(Settings(_env_file=None, auth_token=""), store=store)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        res = await c.post("/keys/open", json={"value": "v"})
        assert res.status_code == 201
        res = await c.get("/keys/open")
        assert res.json() == {"key": "open", "value": "v"}
