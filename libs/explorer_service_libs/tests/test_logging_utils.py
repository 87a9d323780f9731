"""Tests for logging_utils module processors and helpers."""

import os
from typing import Any

import structlog
from structlog.contextvars import clear_contextvars, get_contextvars

from explorer_service_libs.logging_utils import (
    REDACTED,
    add_service_context,
    bind_request_context,
    configure_service_logging,
    create_service_logger,
    redact_secret,
)


class TestAddServiceContext:
    """Tests for the add_service_context processor."""

    def test_adds_service_name_from_env(self, monkeypatch) -> None:
        """Verify service.name is added from SERVICE_NAME environment variable."""
        monkeypatch.setenv("SERVICE_NAME", "test_service")
        monkeypatch.setenv("ENVIRONMENT", "test")
        event_dict: dict[str, Any] = {"message": "test message"}

        result = add_service_context(None, "", event_dict)

        assert result["service.name"] == "test_service"
        assert result["deployment.environment"] == "test"

    def test_preserves_existing_fields(self, monkeypatch) -> None:
        """Verify existing event_dict fields are preserved."""
        monkeypatch.setenv("SERVICE_NAME", "test_service")
        event_dict: dict[str, Any] = {"message": "test message", "correlation_id": "abc-123"}

        result = add_service_context(None, "", event_dict)

        assert result["message"] == "test message"
        assert result["correlation_id"] == "abc-123"

    def test_handles_missing_env(self, monkeypatch) -> None:
        """Verify defaults when SERVICE_NAME and ENVIRONMENT are not set."""
        monkeypatch.delenv("SERVICE_NAME", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)

        result = add_service_context(None, "", {})

        assert result["service.name"] == "unknown"
        assert result["deployment.environment"] == "development"


class TestConfigureServiceLogging:
    def test_sets_service_name_default(self, monkeypatch) -> None:
        # setenv first so teardown restores whatever configure_service_logging writes
        monkeypatch.setenv("SERVICE_NAME", "placeholder")
        monkeypatch.setenv("ENVIRONMENT", "test")
        monkeypatch.delenv("SERVICE_NAME")
        monkeypatch.setenv("LOG_FORMAT", "json")

        try:
            configure_service_logging("nasa-gateway-service", environment="test", log_level="DEBUG")

            assert os.environ["SERVICE_NAME"] == "nasa-gateway-service"
            assert structlog.is_configured()
        finally:
            structlog.reset_defaults()

    def test_create_service_logger_binds_name(self) -> None:
        logger = create_service_logger("gateway.routes")

        assert logger is not None
        bound = logger.bind(extra="value")
        assert bound is not None


class TestRequestContext:
    def test_bind_request_context_replaces_previous_values(self) -> None:
        bind_request_context("first", path="/api/apod")
        bind_request_context("second")

        context = get_contextvars()
        assert context["correlation_id"] == "second"
        assert "path" not in context
        clear_contextvars()


class TestRedactSecret:
    def test_redacts_every_occurrence(self) -> None:
        message = "GET https://api.nasa.gov/x?api_key=SECRET failed (SECRET)"

        assert redact_secret(message, "SECRET") == (
            f"GET https://api.nasa.gov/x?api_key={REDACTED} failed ({REDACTED})"
        )

    def test_empty_secret_is_noop(self) -> None:
        assert redact_secret("nothing to hide", "") == "nothing to hide"
        assert redact_secret("nothing to hide", None) == "nothing to hide"
