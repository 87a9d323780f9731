"""Error handling for the Space Explorer services.

FastAPI handlers should be imported directly from
``explorer_service_libs.error_handling.fastapi``.
"""

from .explorer_error import ErrorEnvelope, ErrorType, ExplorerError
from .factories import (
    raise_client_input_error,
    raise_upstream_error,
    raise_upstream_timeout,
)

__all__ = [
    "ErrorEnvelope",
    "ErrorType",
    "ExplorerError",
    "raise_client_input_error",
    "raise_upstream_error",
    "raise_upstream_timeout",
]
