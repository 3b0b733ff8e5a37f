from __future__ import annotations

from datetime import datetime, timezone

from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from hello_api.core.uptime import ProcessClock
from hello_api.main import app, create_app
from hello_api.services.app_service import AppService, get_app_service

PLAIN_TEXT_ROUTES = {("GET", "/")}


def test_root_returns_greeting_as_plain_text(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Hello World! This is a dockerized NestJS application."


def test_health_returns_status_timestamp_uptime(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"status", "timestamp", "uptime"}
    assert body["status"] == "ok"
    assert isinstance(body["uptime"], float)
    datetime.fromisoformat(body["timestamp"].replace("Z", "+00:00"))


def test_health_uptime_is_monotonic_across_requests(client):
    first = client.get("/health").json()["uptime"]
    second = client.get("/health").json()["uptime"]
    assert second >= first


def test_health_reports_five_seconds_after_start():
    ticks = {"now": 50.0}
    wall = datetime(2024, 3, 1, tzinfo=timezone.utc)
    clock = ProcessClock(monotonic=lambda: ticks["now"], wall=lambda: wall)

    test_app = create_app()
    test_app.dependency_overrides[get_app_service] = lambda: AppService(clock)
    client = TestClient(test_app)

    ticks["now"] += 5.0
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["uptime"] == 5.0
    assert body["timestamp"] == "2024-03-01T00:00:00.000Z"


def test_all_json_routes_declare_response_model():
    missing: list[tuple[str, str]] = []
    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        for method in route.methods or []:
            key = (method.upper(), route.path)
            if key[0] in {"HEAD", "OPTIONS"} or key in PLAIN_TEXT_ROUTES:
                continue
            if route.response_model is None:
                missing.append(key)
    assert not missing, f"Routes missing response_model: {missing}"


def test_openapi_documents_health_schema(client):
    schema = client.get("/openapi.json").json()
    assert "/health" in schema["paths"]
    assert "HealthResponse" in schema["components"]["schemas"]
    assert "ErrorResponse" in schema["components"]["schemas"]
