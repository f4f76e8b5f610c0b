"""
Display formatting for reservation records returned by the backend.

The backend serializes ``reservation_date`` as a full ISO timestamp and
``reservation_time`` with seconds; both are trimmed for display.
"""
import re
from typing import Any

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
TIME_PATTERN = re.compile(r"\d\d:\d\d")


def _apply(records: Any, field: str, formatter) -> Any:
    if records is None:
        return None
    items = records if isinstance(records, list) else [records]
    for record in items:
        if isinstance(record, dict) and isinstance(record.get(field), str):
            record[field] = formatter(record[field])
    return records


def format_as_date(value: str) -> str:
    """
    Format a date or timestamp string as YYYY-MM-DD.

    Args:
        value: Date string (e.g., "2023-01-01T00:00:00.000Z")

    Returns:
        Date portion of the string, or the string unchanged when it has none
    """
    match = DATE_PATTERN.match(value)
    return match.group(0) if match else value


def format_as_time(value: str) -> str:
    """
    Format a time string as HH:MM.

    Args:
        value: Time string (e.g., "18:30:00")

    Returns:
        First HH:MM match, or the string unchanged when there is none
    """
    match = TIME_PATTERN.search(value)
    return match.group(0) if match else value


def format_reservation_date(records: Any) -> Any:
    """
    Trim ``reservation_date`` on one reservation or a list of reservations.

    Records are updated in place and returned.
    """
    return _apply(records, "reservation_date", format_as_date)


def format_reservation_time(records: Any) -> Any:
    """
    Trim ``reservation_time`` on one reservation or a list of reservations.

    Records are updated in place and returned.
    """
    return _apply(records, "reservation_time", format_as_time)
