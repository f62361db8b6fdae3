async def test_health_endpoints(client) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["service"] == "locket"

    assert (await client.get("/ready")).json() == {"status": "ready"}
    assert (await client.get("/live")).json() == {"status": "alive"}


async def test_request_id_is_echoed(client) -> None:
    response = await client.get("/live", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"

    response = await client.get("/live")
    assert response.headers["X-Request-ID"]


async def test_unknown_route_uses_envelope(client) -> None:
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"code": 404, "message": "Not Found", "errors": True, "payload": None}
