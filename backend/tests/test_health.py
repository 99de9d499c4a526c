def test_health(client):
    response = client.get("/api/v1/health/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-request-id"]


def test_health_db(client):
    assert client.get("/api/v1/health/db").json() == {"status": "ok"}


def test_request_id_is_echoed(client):
    response = client.get("/api/v1/health/health", headers={"x-request-id": "abc123"})

    assert response.headers["x-request-id"] == "abc123"
