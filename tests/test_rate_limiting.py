from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.middleware import RateLimitingMiddleware, RequestIdMiddleware


def _build_app(rule: str = "2/minute") -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitingMiddleware, rule=rule, storage_uri="memory://")
    app.add_middleware(RequestIdMiddleware)

    @app.get("/api/ping")
    async def ping():
        return {"ok": True}

    @app.get("/web/page")
    async def page():
        return {"ok": True}

    return app


def test_requests_over_limit_are_rejected_with_retry_after():
    client = TestClient(_build_app())

    first = client.get("/api/ping")
    second = client.get("/api/ping")
    third = client.get("/api/ping", headers={"X-Request-ID": "req-42"})

    assert first.status_code == 200
    assert first.headers["X-RateLimit-Limit"] == "2"
    assert first.headers["X-RateLimit-Remaining"] == "1"
    assert second.status_code == 200
    assert third.status_code == 429
    assert "Retry-After" in third.headers
    payload = third.json()
    assert payload["success"] is False
    assert payload["data"]["code"] == "TOO_MANY_REQUESTS"
    assert payload["requestId"] == "req-42"


def test_limit_is_tracked_per_client_address():
    client = TestClient(_build_app(rule="1/minute"))

    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.2"}).status_code == 200
    assert client.get("/api/ping", headers={"X-Forwarded-For": "10.0.0.1"}).status_code == 429


def test_paths_outside_prefix_are_not_limited():
    client = TestClient(_build_app(rule="1/minute"))

    responses = [client.get("/web/page") for _ in range(3)]

    assert all(response.status_code == 200 for response in responses)
    assert "X-RateLimit-Limit" not in responses[0].headers
