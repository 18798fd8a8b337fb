from fastapi.testclient import TestClient

import jobready.main as main_mod


class _ConnOK:
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, _query):
        return 1


class _EngineOK:
    def connect(self):
        return _ConnOK()


class _EngineFail:
    def connect(self):
        raise RuntimeError("db down")


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["service"] == "JobReady SA API"
    assert body["timestamp"]


def test_health_ready_ok(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineOK())
    resp = client.get("/api/health/ready")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ready"


def test_health_ready_fail(monkeypatch, client):
    monkeypatch.setattr(main_mod, "engine", _EngineFail())
    resp = client.get("/api/health/ready")
    assert resp.status_code == 503
    assert resp.json()["status"] == "not_ready"


def test_security_headers_present(client):
    resp = client.get("/api/health")
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"
    assert resp.headers["Referrer-Policy"] == "no-referrer"


def test_unknown_route_uses_envelope(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Route not found"}


def test_http_errors_use_envelope(monkeypatch, client):
    monkeypatch.setattr("jobready.routers.jobs.get_by_id", lambda db, job_id: None)
    resp = client.get("/api/jobs/99")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "message": "Job not found"}


def test_validation_errors_return_400_with_field_list(client):
    resp = client.post(
        "/api/auth/register",
        json={"fullName": "Thandi", "phone": "12345", "password": "secret1", "language": "zu", "location": "Durban"},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    fields = {e["field"] for e in body["errors"]}
    assert "phone" in fields
    assert any("Invalid phone number" in e["message"] for e in body["errors"])


def test_unhandled_exception_returns_500_with_stack_outside_production(monkeypatch):
    @main_mod.app.get("/api/_boom_test")
    def _boom():
        raise RuntimeError("kaboom")

    try:
        monkeypatch.setattr(main_mod.settings, "app_env", "development")
        resp = TestClient(main_mod.app, raise_server_exceptions=False).get("/api/_boom_test")
        assert resp.status_code == 500
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Internal Server Error"
        assert any("kaboom" in line for line in body["stack"])

        monkeypatch.setattr(main_mod.settings, "app_env", "production")
        resp = TestClient(main_mod.app, raise_server_exceptions=False).get("/api/_boom_test")
        assert resp.status_code == 500
        assert "stack" not in resp.json()
    finally:
        main_mod.app.router.routes[:] = [r for r in main_mod.app.router.routes if getattr(r, "path", None) != "/api/_boom_test"]
