"""Factory functions that build and raise ExplorerError instances.

Each factory fixes the status code and error type for one branch of the
taxonomy so call sites only supply the messages.
"""

from __future__ import annotations

from typing import Any, NoReturn

from explorer_service_libs.error_handling.explorer_error import ErrorType, ExplorerError


def raise_client_input_error(
    message: str, details: str | None = None, **context: Any
) -> NoReturn:
    """Required parameter missing or invalid. Rendered as HTTP 400."""
    raise ExplorerError(ErrorType.CLIENT_INPUT, 400, message, details, **context)


def raise_upstream_error(message: str, details: str | None = None, **context: Any) -> NoReturn:
    """Upstream returned non-2xx, malformed data, or the connection failed.

    Rendered as HTTP 500; ``details`` carries the upstream's own message when known.
    """
    raise ExplorerError(ErrorType.UPSTREAM, 500, message, details, **context)


def raise_upstream_timeout(
    message: str, timeout_seconds: float, **context: Any
) -> NoReturn:
    """Upstream did not answer within the timeout. Rendered as HTTP 500."""
    raise ExplorerError(
        ErrorType.UPSTREAM_TIMEOUT,
        500,
        message,
        f"Upstream request timed out after {timeout_seconds:g}s",
        timeout_seconds=timeout_seconds,
        **context,
    )
