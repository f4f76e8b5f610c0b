"""
Services package - Backend access and record formatting.
"""
from .reservations_api import ReservationsAPI
from .formatting import (
    format_as_date,
    format_as_time,
    format_reservation_date,
    format_reservation_time,
)

__all__ = [
    "ReservationsAPI",
    "format_as_date",
    "format_as_time",
    "format_reservation_date",
    "format_reservation_time",
]
