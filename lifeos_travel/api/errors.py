"""Error taxonomy shared by the scheduling engine, services and routes."""

from __future__ import annotations


class TravelError(Exception):
    """Base class for recoverable itinerary errors reported to the caller."""

    kind = "error"

    def to_dict(self) -> dict:
        return {"error": str(self), "type": self.kind}


class ValidationError(TravelError):
    """Rejected input such as a missing stop name or a malformed time."""

    kind = "validation_error"


class DateRangeError(ValidationError):
    """A stop date outside the itinerary's inclusive start/end range."""

    kind = "date_range_error"

    def __init__(self, stop_date: str, start: str, end: str):
        self.stop_date = stop_date
        self.start = start
        self.end = end
        super().__init__(f"Date must be between {start} and {end}")


class OrderingConflict(TravelError):
    """A manual move that would break same-day time ordering."""

    kind = "ordering_conflict"


class LookupFailure(TravelError):
    """Place search or place details could not be fetched."""

    kind = "lookup_failure"


class NotFoundError(TravelError):
    """A record (or public share) that does not resolve."""

    kind = "not_found"

    def __init__(self, message: str, reason: str = "not_found"):
        self.reason = reason
        super().__init__(message)

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["reason"] = self.reason
        return payload


__all__ = [
    "TravelError",
    "ValidationError",
    "DateRangeError",
    "OrderingConflict",
    "LookupFailure",
    "NotFoundError",
]
