"""
Error handling module for the reservations client.

Main Components:
    - exceptions: Exception classes raised by the client
    - logging_config: loguru setup and the backend call logger
"""

from .exceptions import (
    ReservationsClientError,
    APIError,
    APIStatusError,
    RecordIdentifierError,
    RequestAborted,
)

from .logging_config import (
    configure_logging,
    log_api_call,
)

__all__ = [
    # Exceptions
    "ReservationsClientError",
    "APIError",
    "APIStatusError",
    "RecordIdentifierError",
    "RequestAborted",

    # Logging
    "configure_logging",
    "log_api_call",
]
