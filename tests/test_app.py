import logging


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root_metadata(client):
    body = client.get("/").json()
    assert body["name"] == "Favela Market API"
    assert body["status"] == "running"


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "4f1c2d9e-8b7a-4c3d-9e8f-7a6b5c4d3e2f"})
    assert response.headers["X-Request-ID"] == "4f1c2d9e-8b7a-4c3d-9e8f-7a6b5c4d3e2f"


def test_request_start_and_completion_are_logged(client, caplog):
    caplog.set_level(logging.INFO, logger="app.core.middleware")
    client.get("/health")

    events = [r.msg["event"] for r in caplog.records if r.name == "app.core.middleware" and isinstance(r.msg, dict)]
    assert events[:2] == ["Request started", "Request completed"]
