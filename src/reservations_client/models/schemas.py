"""
Pydantic models for reservation and table records.

The backend owns the record shapes; these models describe the fields the
client knows about and let anything else through untouched.
"""
from datetime import date, time
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, ConfigDict


class ReservationStatus(str, Enum):
    """Reservation lifecycle states understood by the backend."""
    BOOKED = "booked"
    SEATED = "seated"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class Reservation(BaseModel):
    """
    A restaurant reservation.

    ``reservation_id`` is assigned by the backend; leave it unset when
    creating a reservation.
    """
    reservation_id: Optional[int] = Field(None, description="Backend-assigned identifier")
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    mobile_number: Optional[str] = Field(None, description="Contact number used for search")
    reservation_date: Optional[Union[date, str]] = Field(None, description="Reservation date")
    reservation_time: Optional[Union[time, str]] = Field(None, description="Reservation time")
    people: Optional[int] = Field(None, ge=1, description="Party size")
    status: Optional[Union[ReservationStatus, str]] = Field(None, description="Lifecycle status")

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "first_name": "Rick",
                "last_name": "Sanchez",
                "mobile_number": "202-555-0164",
                "reservation_date": "2020-12-31",
                "reservation_time": "20:00",
                "people": 6
            }
        }
    )


class Table(BaseModel):
    """
    A restaurant table.

    ``reservation_id`` is set while a reservation is seated at the table.
    """
    table_id: Optional[int] = Field(None, description="Backend-assigned identifier")
    table_name: Optional[str] = Field(None, min_length=2)
    capacity: Optional[int] = Field(None, ge=1)
    reservation_id: Optional[int] = Field(None, description="Currently seated reservation")

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "table_name": "Bar #1",
                "capacity": 1
            }
        }
    )
