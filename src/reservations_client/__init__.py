"""
Async client for the restaurant reservations backend.
"""
from .config import Settings, get_settings
from .error_handling import (
    ReservationsClientError,
    APIError,
    APIStatusError,
    RecordIdentifierError,
    configure_logging,
)
from .models import Reservation, ReservationStatus, Table
from .services import ReservationsAPI

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "ReservationsClientError",
    "APIError",
    "APIStatusError",
    "RecordIdentifierError",
    "configure_logging",
    "Reservation",
    "ReservationStatus",
    "Table",
    "ReservationsAPI",
]
