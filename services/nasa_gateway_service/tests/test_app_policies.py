"""
Tests for the cross-cutting request policy: health, metrics, unknown routes,
internal faults, rate limiting, CORS, hardening headers and correlation IDs.
"""

from __future__ import annotations

from uuid import UUID

import httpx
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry

from services.nasa_gateway_service.app.middleware import (
    ORIGIN_NOT_ALLOWED_MESSAGE,
    SECURITY_HEADERS,
)
from services.nasa_gateway_service.app.rate_limiter import RATE_LIMIT_MESSAGE

from .conftest import NASA_API, make_settings, make_test_app


class ExplodingUpstreamClient:
    async def fetch(self, route, values):
        raise RuntimeError("unexpected failure")


class TestHealth:
    def test_health_payload(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["timestamp"].endswith("Z")
        assert data["uptimeSeconds"] >= 0

    def test_metrics_exposed(self, client: TestClient, respx_mock) -> None:
        respx_mock.get(f"{NASA_API}/planetary/apod").mock(
            return_value=httpx.Response(200, json={"title": "x"})
        )
        client.get("/api/apod")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "nasa_gateway_http_requests_total" in response.text
        assert 'endpoint="get-apod"' in response.text


class TestErrors:
    def test_unknown_route(self, client: TestClient) -> None:
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Endpoint not found"}

    def test_wrong_method_is_not_found(self, client: TestClient) -> None:
        response = client.post("/api/apod")

        assert response.status_code == 404
        assert response.json() == {"error": "Endpoint not found"}

    def test_internal_fault_is_generic_500(self) -> None:
        app = make_test_app(make_settings(), upstream_client=ExplodingUpstreamClient())

        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/api/apod", headers={"Origin": "http://localhost:3000"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "unexpected failure" not in response.text
        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value
        UUID(response.headers["X-Correlation-ID"])
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestRateLimit:
    def test_101st_request_rejected(self) -> None:
        app = make_test_app(make_settings(RATE_LIMIT_ENABLED=True), CollectorRegistry())

        with TestClient(app) as test_client:
            statuses = [test_client.get("/api/health").status_code for _ in range(100)]
            limited = test_client.get("/api/health")

        assert statuses == [200] * 100
        assert limited.status_code == 429
        assert limited.headers["content-type"].startswith("text/plain")
        assert limited.text == RATE_LIMIT_MESSAGE

    def test_window_shared_across_routes(self, respx_mock) -> None:
        respx_mock.get(f"{NASA_API}/planetary/apod").mock(
            return_value=httpx.Response(200, json={})
        )
        app = make_test_app(make_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=2))

        with TestClient(app) as test_client:
            assert test_client.get("/api/health").status_code == 200
            assert test_client.get("/api/apod").status_code == 200
            assert test_client.get("/api/apod").status_code == 429

    def test_unknown_paths_count_toward_window(self) -> None:
        app = make_test_app(make_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=2))

        with TestClient(app) as test_client:
            assert test_client.get("/api/unknown").status_code == 404
            assert test_client.get("/nowhere").status_code == 404
            limited = test_client.get("/api/health")

        assert limited.status_code == 429
        assert limited.text == RATE_LIMIT_MESSAGE

    def test_limited_response_keeps_policy_headers(self) -> None:
        app = make_test_app(make_settings(RATE_LIMIT_ENABLED=True, RATE_LIMIT_REQUESTS=1))

        with TestClient(app) as test_client:
            test_client.get("/api/health")
            limited = test_client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert limited.status_code == 429
        assert limited.headers["X-Content-Type-Options"] == "nosniff"
        assert "X-Correlation-ID" in limited.headers
        assert limited.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestCors:
    def test_allowed_origin_echoed(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={"Origin": "http://localhost:3000"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert response.headers["access-control-allow-credentials"] == "true"

    def test_unknown_origin_rejected_before_upstream(self, client: TestClient, respx_mock) -> None:
        route = respx_mock.get(f"{NASA_API}/planetary/apod").mock(
            return_value=httpx.Response(200, json={"title": "x"})
        )

        response = client.get("/api/apod", headers={"Origin": "https://evil.example"})

        assert response.status_code == 403
        assert response.json() == {"error": ORIGIN_NOT_ALLOWED_MESSAGE}
        assert "access-control-allow-origin" not in response.headers
        assert not route.called
        assert respx_mock.calls.call_count == 0

    def test_rejected_origin_keeps_hardening_headers(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={"Origin": "https://evil.example"})

        assert response.status_code == 403
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert "X-Correlation-ID" in response.headers

    def test_requests_without_origin_pass(self, client: TestClient) -> None:
        assert client.get("/api/health").status_code == 200

    def test_preflight_max_age(self, client: TestClient) -> None:
        response = client.options(
            "/api/apod",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-max-age"] == "86400"


class TestResponseHeaders:
    def test_security_headers_present(self, client: TestClient) -> None:
        response = client.get("/api/health")

        for name, value in SECURITY_HEADERS.items():
            assert response.headers[name] == value

    def test_security_headers_on_errors(self, client: TestClient) -> None:
        response = client.get("/api/nope")

        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        correlation_id = "3f0c9b7e-2a55-4d8c-9a0e-7b1c2d3e4f50"

        response = client.get("/api/health", headers={"X-Correlation-ID": correlation_id})

        assert response.headers["X-Correlation-ID"] == correlation_id

    def test_invalid_correlation_id_replaced(self, client: TestClient) -> None:
        response = client.get("/api/health", headers={"X-Correlation-ID": "not-a-uuid"})

        assert str(UUID(response.headers["X-Correlation-ID"])) != "not-a-uuid"

    def test_large_bodies_compressed(self, client: TestClient, respx_mock) -> None:
        body = {"photos": [{"id": i, "img_src": f"https://mars.nasa.gov/{i}.jpg"} for i in range(100)]}
        respx_mock.get(f"{NASA_API}/mars-photos/api/v1/rovers/curiosity/photos").mock(
            return_value=httpx.Response(200, json=body)
        )

        response = client.get("/api/mars-photos", headers={"Accept-Encoding": "gzip"})

        assert response.headers["content-encoding"] == "gzip"
        assert response.json() == body
