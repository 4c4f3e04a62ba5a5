"""Tests for health check endpoint."""


def test_health_check(client):
    """Health endpoint should return ok status."""
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "app_name" in data


def test_requests_without_user_are_rejected(client):
    response = client.get("/api/v1/items")
    assert response.status_code == 401


def test_unknown_user_is_rejected(client):
    response = client.get("/api/v1/items", headers={"X-User-Id": "ghost"})
    assert response.status_code == 401


def test_run_uses_configured_host_and_port(monkeypatch):
    from stockroom import main
    from stockroom.config import settings

    calls = []
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    main.run()
    assert calls == [(main.app, {"host": settings.api_host, "port": settings.api_port})]
