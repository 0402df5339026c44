def test_health_endpoints(client):
    assert client.get("/api/health").json() == {"status": "ok"}

    live = client.get("/api/health/live")
    assert live.status_code == 200
    assert live.json()["status"] == "ok"

    ready = client.get("/api/health/ready")
    assert ready.status_code == 200
    payload = ready.json()
    assert payload["database"]["schema_ok"] is True
    assert payload["database"]["missing_tables"] == []


def test_oversized_request_is_rejected(client):
    response = client.post(
        "/api/timetable/import",
        content=b"x" * 5_000_001,
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 413
    assert "message" in response.json()
