"""Health probe and static route table behaviour."""


async def test_health_503_when_store_down(client, fake_client):
    fake_client.fail_on.add("ping")
    res = await client.get("/health")
    assert res.status_code == 503
    assert res.json() == {"error": "store connection failed"}


async def test_health_503_on_probe_timeout(client, fake_client, monkeypatch):
    fake_client.delay = 0.5
    monkeypatch.setattr(
        "valkey_rest.services.handle_health.HEALTH_PROBE_TIMEOUT", 0.05,
    )
    res = await client.get("/health")
    assert res.status_code == 503


async def test_health_only_pings(client, fake_client):
    await client.get("/health")
    assert [call[0] for call in fake_client.calls] == ["ping"]


async def test_unknown_path_is_404_json(client, auth_headers):
    res = await client.get("/nope", headers=auth_headers)
    assert res.status_code == 404
    assert res.json() == {"error": "not found"}


async def test_wrong_method_is_405_json(client, auth_headers):
    res = await client.put("/keys/k", headers=auth_headers)
    assert res.status_code == 405
    assert res.json() == {"error": "method not allowed"}


async def test_nested_path_is_not_a_key(client, auth_headers):
    res = await client.get("/keys/a/b", headers=auth_headers)
    assert res.status_code == 404
    assert res.json() == {"error": "not found"}


async def test_openapi_documents_error_bodies(client):
    doc = (await client.get("/openapi.json")).json()
    assert "ErrorResponse" in doc["components"]["schemas"]
    key_get = doc["paths"]["/keys/{key}"]["get"]["responses"]
    assert {"401", "404"} <= set(key_get)
    assert "503" in doc["paths"]["/health"]["get"]["responses"]
    assert "/keys/" not in doc["paths"]
