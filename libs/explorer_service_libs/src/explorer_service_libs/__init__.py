"""
Space Explorer Service Libraries Package.

Shared infrastructure for the Space Explorer services: structured logging
and error handling.
"""

from .error_handling import ErrorEnvelope, ErrorType, ExplorerError
from .logging_utils import configure_service_logging, create_service_logger

__all__ = [
    "ErrorEnvelope",
    "ErrorType",
    "ExplorerError",
    "configure_service_logging",
    "create_service_logger",
]
