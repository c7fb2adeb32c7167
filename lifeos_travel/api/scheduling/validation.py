# lifeos_travel/api/scheduling/validation.py
"""Entry-time checks for stops."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from lifeos_travel.api.errors import DateRangeError, ValidationError
from lifeos_travel.api.models import Itinerary, Stop, TimeMode
from lifeos_travel.api.scheduling.time_buckets import is_clock_time

DateLike = Union[str, date, datetime, None]


def to_calendar_date(value: DateLike, field_name: str = "date") -> Optional[date]:
    """Calendar day of ``value``; any time-of-day part is dropped."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from None


def validate_stop_date(stop_date: DateLike, start: DateLike, end: DateLike) -> None:
    """Raise :class:`DateRangeError` if ``stop_date`` is outside ``[start, end]``.

    Passes when any of the three is missing. Never clamps.
    """
    day = to_calendar_date(stop_date)
    first = to_calendar_date(start, "start date")
    last = to_calendar_date(end, "end date")
    if day is None or first is None or last is None:
        return
    if day < first or day > last:
        raise DateRangeError(day.isoformat(), first.isoformat(), last.isoformat())


def validate_date_range(start: DateLike, end: DateLike) -> None:
    first = to_calendar_date(start, "start date")
    last = to_calendar_date(end, "end date")
    if first and last and first > last:
        raise ValidationError("End date must be on or after the start date")


def validate_stop(stop: Stop, itinerary: Itinerary) -> None:
    """All checks the editor runs before accepting an added or edited stop."""
    if not stop.name or not stop.name.strip():
        raise ValidationError("Stop name is required")
    if stop.time_mode == TimeMode.FIXED and stop.time and not is_clock_time(stop.time):
        raise ValidationError(f"Time must be HH:MM (24-hour), got {stop.time!r}")
    validate_stop_date(stop.date, itinerary.start_date, itinerary.end_date)


__all__ = [
    "to_calendar_date",
    "validate_stop_date",
    "validate_date_range",
    "validate_stop",
]
