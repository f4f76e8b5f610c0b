"""
Custom Exception Classes for the reservations API client.

This module defines exception classes for the error categories the client
surfaces:
- Payload errors reported by the backend through the ``error`` envelope
- Unexpected HTTP status codes (strict mode only)
- Client-side record identifier violations

Transport failures are not wrapped; ``httpx`` errors reach the caller as-is.
Each exception carries context for logging.
"""

from typing import Optional, Any, Dict


class ReservationsClientError(Exception):
    """Base exception for all reservations client errors."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize reservations client error.

        Args:
            message: Error message, shown to callers as-is
            context: Additional context for logging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


# ============================================================================
# Backend Errors
# ============================================================================

class APIError(ReservationsClientError):
    """
    Raised when the backend responds with an ``error`` envelope.

    The message is the backend's ``error`` value verbatim, whatever the HTTP
    status code of the response was.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize API error.

        Args:
            message: Error message from the response payload
            status_code: HTTP status of the response
            url: Requested URL
            **kwargs: Additional context
        """
        context = {
            "status_code": status_code,
            "url": url,
            **kwargs
        }
        super().__init__(message, context)
        self.status_code = status_code
        self.url = url


class APIStatusError(APIError):
    """Raised in strict mode for a non-2xx response without an error field."""

    def __init__(self, status_code: int, url: Optional[str] = None, **kwargs):
        message = f"Unexpected HTTP status {status_code}"
        if url:
            message += f" from {url}"
        super().__init__(message, status_code=status_code, url=url, **kwargs)


# ============================================================================
# Client-side Errors
# ============================================================================

class RecordIdentifierError(ReservationsClientError, ValueError):
    """
    Raised when a record's identifier does not fit the requested operation.

    Examples:
    - Creating a reservation that already has a ``reservation_id``
    - Seating at a table record without a ``table_id``
    """

    def __init__(self, record_type: str, field: str, reason: str, **kwargs):
        message = f"Invalid {record_type} record: {reason}"
        context = {
            "record_type": record_type,
            "field": field,
            **kwargs
        }
        super().__init__(message, context)
        self.record_type = record_type
        self.field = field


class RequestAborted(ReservationsClientError):
    """
    Raised internally when the caller's abort signal fires mid-request.

    The request executor turns this into the operation's fallback value, so
    it never reaches callers of the public operations.
    """

    def __init__(self, url: Optional[str] = None):
        super().__init__(f"Request aborted: {url}", {"url": url})
        self.url = url
