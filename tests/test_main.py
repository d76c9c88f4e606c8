def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Restaurant Tip Service"}


def test_health_check(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/unknown")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "Not Found"}}


def test_cors_allows_client_origin_with_credentials(client):
    resp = client.options(
        "/api/restaurants",
        headers={
            "Origin": "http://client.test",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://client.test"
    assert resp.headers["access-control-allow-credentials"] == "true"
