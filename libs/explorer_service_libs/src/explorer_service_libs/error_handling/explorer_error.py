"""Core exception type for the Space Explorer services."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel


class ErrorType(str, Enum):
    """Error taxonomy shared by the gateway and its clients."""

    CLIENT_INPUT = "client_input"
    UPSTREAM = "upstream"
    UPSTREAM_TIMEOUT = "upstream_timeout"
    RATE_LIMIT = "rate_limit"
    ROUTE_NOT_FOUND = "route_not_found"
    ORIGIN_NOT_ALLOWED = "origin_not_allowed"
    INTERNAL = "internal"


class ErrorEnvelope(BaseModel):
    """Wire shape of every JSON error response."""

    error: str
    details: str | None = None

    def to_response_body(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class ExplorerError(Exception):
    """Exception carrying everything needed to render an ErrorEnvelope.

    Raised by the factory functions in ``factories``; translated to a JSON
    response by the handlers registered in ``error_handling.fastapi``.
    """

    def __init__(
        self,
        error_type: ErrorType,
        status_code: int,
        error: str,
        details: str | None = None,
        **context: Any,
    ) -> None:
        super().__init__(error if details is None else f"{error}: {details}")
        self.error_type = error_type
        self.status_code = status_code
        self.error = error
        self.details = details
        self.context = context

    def to_envelope(self) -> ErrorEnvelope:
        return ErrorEnvelope(error=self.error, details=self.details)

    def __repr__(self) -> str:
        return (
            f"ExplorerError(error_type={self.error_type.value!r}, "
            f"status_code={self.status_code}, error={self.error!r}, details={self.details!r})"
        )
