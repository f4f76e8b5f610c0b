"""
Models package - Pydantic schemas for reservation and table records.
"""
from .schemas import (
    Reservation,
    ReservationStatus,
    Table,
)

__all__ = [
    "Reservation",
    "ReservationStatus",
    "Table",
]
