"""Metrics definitions for the NASA Gateway Service."""

from __future__ import annotations

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram


class GatewayMetrics:
    """A container for all Prometheus metrics for the NASA Gateway Service."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics with optional registry for test isolation."""
        if registry is None:
            registry = REGISTRY
        self.http_requests_total = Counter(
            "nasa_gateway_http_requests_total",
            "Total number of HTTP requests for NASA Gateway Service.",
            ["method", "endpoint", "http_status"],
            registry=registry,
        )
        self.http_request_duration_seconds = Histogram(
            "nasa_gateway_http_request_duration_seconds",
            "HTTP request duration in seconds for NASA Gateway Service.",
            ["method", "endpoint"],
            registry=registry,
        )
        self.upstream_calls_total = Counter(
            "nasa_gateway_upstream_calls_total",
            "Total number of calls to NASA upstream services.",
            ["service", "route", "status_code"],
            registry=registry,
        )
        self.upstream_call_duration_seconds = Histogram(
            "nasa_gateway_upstream_call_duration_seconds",
            "Duration of calls to NASA upstream services in seconds.",
            ["service", "route"],
            registry=registry,
        )
        self.api_errors_total = Counter(
            "nasa_gateway_api_errors_total",
            "Total number of API errors.",
            ["endpoint", "error_type"],
            registry=registry,
        )
