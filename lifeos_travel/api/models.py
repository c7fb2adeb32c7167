"""Shared data structures for itineraries and their stops.

Every consumer (editor, public share view, PDF export, services and routes)
works on these dataclasses. Records in the document store keep the camelCase
field names the web client sends, so ``to_dict``/``from_dict`` are the only
places that know about the stored shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from lifeos_travel.api.errors import ValidationError


class TimeBucket(str, Enum):
    """Fixed day-part categories used when a stop has no exact clock time."""

    EARLY_MORNING = "earlyMorning"
    MORNING = "morning"
    MIDDAY = "midday"
    EARLY_AFTERNOON = "earlyAfternoon"
    LATE_AFTERNOON = "lateAfternoon"
    EVENING = "evening"
    NIGHT = "night"
    LATE_NIGHT = "lateNight"


class TimeMode(str, Enum):
    FIXED = "fixed"
    BUCKET = "bucket"


class StopPlaceType(str, Enum):
    RESTAURANT = "Restaurant"
    HOTEL = "Hotel"
    ATTRACTION = "Attraction"
    MUSEUM = "Museum"
    PARK = "Park"
    BEACH = "Beach"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    TRANSPORT = "Transport"
    OTHER = "Other"


class ItineraryStatus(str, Enum):
    PLANNED = "Planned"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"


class Theme(str, Enum):
    DEFAULT = "default"
    TROPICAL = "tropical"
    ADVENTURE = "adventure"
    CITY = "city"
    BEACH = "beach"
    MOUNTAIN = "mountain"


# --------------------------------------------------------------------------- #
# Stop provenance
# --------------------------------------------------------------------------- #
@dataclass(frozen=True)
class Manual:
    """Typed in by hand."""


@dataclass(frozen=True)
class FromSavedPlace:
    """Picked from the user's saved places."""

    place_id: str


@dataclass(frozen=True)
class FromExternalLookup:
    """Resolved through the place lookup service.

    ``manual_entry`` marks a hand-typed stop that was later enriched with
    lookup data (stored as ``manual+google``).
    """

    external_id: Optional[str] = None
    manual_entry: bool = False


Provenance = Union[Manual, FromSavedPlace, FromExternalLookup]


def provenance_from_record(record: Dict[str, Any]) -> Provenance:
    """Read provenance from the stored ``source``/``placeId``/``googlePlaceId`` fields."""
    source = record.get("source")
    place_id = record.get("placeId")
    external_id = record.get("googlePlaceId")

    if place_id:
        return FromSavedPlace(place_id)
    if external_id or source in ("places", "manual+google"):
        return FromExternalLookup(external_id or None, manual_entry=source == "manual+google")
    return Manual()


def provenance_to_record(provenance: Provenance) -> Dict[str, Any]:
    if isinstance(provenance, FromSavedPlace):
        return {"source": "saved", "placeId": provenance.place_id,
                "googlePlaceId": None, "isManual": False}
    if isinstance(provenance, FromExternalLookup):
        return {"source": "manual+google" if provenance.manual_entry else "places",
                "placeId": None, "googlePlaceId": provenance.external_id,
                "isManual": provenance.manual_entry}
    return {"source": "manual", "placeId": None, "googlePlaceId": None, "isManual": True}


def parse_enum(enum_cls, value, field_name: str, default=None):
    if value is None or value == "":
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {field_name}: {value!r}") from None


def _optional_int(value, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}: {value!r}") from None


def _optional_float(value, field_name: str) -> Optional[float]:
    if value is None or value == "" or value == "null":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field_name}: {value!r}") from None


def _flag(value, field_name: str) -> bool:
    """Accept JSON booleans and their common string spellings."""
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValidationError(f"Invalid {field_name}: {value!r}")


def _optional_str(value) -> Optional[str]:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


# --------------------------------------------------------------------------- #
# Stop
# --------------------------------------------------------------------------- #
@dataclass
class Stop:
    """A single stop on a trip itinerary."""

    id: str
    name: str  # e.g. "Eiffel Tower"
    date: Optional[str] = None  # ISO date; None means unscheduled
    time: Optional[str] = None  # "HH:MM", 24-hour
    time_mode: TimeMode = TimeMode.FIXED
    time_bucket: Optional[TimeBucket] = None
    sort_key: Optional[str] = None
    manual_order: Optional[int] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    place_type: StopPlaceType = StopPlaceType.OTHER
    photos: List[str] = field(default_factory=list)
    provenance: Provenance = field(default_factory=Manual)
    lat: Optional[float] = None
    lng: Optional[float] = None
    completed: bool = False
    completed_at: Optional[str] = None
    journal_entry_id: Optional[str] = None
    duration: Optional[int] = None  # minutes
    cost: Optional[float] = None
    currency: Optional[str] = None
    booking_ref: Optional[str] = None
    booking_url: Optional[str] = None

    def to_dict(self) -> dict:
        record = {
            "id": self.id,
            "name": self.name,
            "date": self.date,
            "time": self.time,
            "timeMode": self.time_mode.value,
            "timeBucket": self.time_bucket.value if self.time_bucket else None,
            "sortKey": self.sort_key,
            "manualOrder": self.manual_order,
            "address": self.address,
            "notes": self.notes,
            "placeType": self.place_type.value,
            "photos": list(self.photos),
            "lat": self.lat,
            "lng": self.lng,
            "completed": self.completed,
            "completedAt": self.completed_at,
            "journalEntryId": self.journal_entry_id,
            "duration": self.duration,
            "cost": self.cost,
            "currency": self.currency,
            "bookingRef": self.booking_ref,
            "bookingUrl": self.booking_url,
        }
        record.update(provenance_to_record(self.provenance))
        return record

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stop":
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or "").strip(),
            date=_optional_str(data.get("date")),
            time=_optional_str(data.get("time")),
            time_mode=parse_enum(TimeMode, data.get("timeMode"), "time mode", TimeMode.FIXED),
            time_bucket=parse_enum(TimeBucket, data.get("timeBucket"), "time bucket"),
            sort_key=_optional_str(data.get("sortKey")),
            manual_order=_optional_int(data.get("manualOrder"), "manual order"),
            address=_optional_str(data.get("address")),
            notes=_optional_str(data.get("notes")),
            place_type=parse_enum(StopPlaceType, data.get("placeType"), "place type", StopPlaceType.OTHER),
            photos=list(data.get("photos") or []),
            provenance=provenance_from_record(data),
            lat=_optional_float(data.get("lat"), "latitude"),
            lng=_optional_float(data.get("lng"), "longitude"),
            completed=_flag(data.get("completed"), "completed"),
            completed_at=data.get("completedAt"),
            journal_entry_id=data.get("journalEntryId"),
            duration=_optional_int(data.get("duration"), "duration"),
            cost=_optional_float(data.get("cost"), "cost"),
            currency=_optional_str(data.get("currency")),
            booking_ref=_optional_str(data.get("bookingRef")),
            booking_url=_optional_str(data.get("bookingUrl")),
        )


# --------------------------------------------------------------------------- #
# Itinerary
# --------------------------------------------------------------------------- #
@dataclass
class Itinerary:
    """A trip: an owning container of stops plus sharing state."""

    id: str
    name: str
    stops: List[Stop] = field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    notes: Optional[str] = None
    description: Optional[str] = None
    status: ItineraryStatus = ItineraryStatus.PLANNED
    theme: Theme = Theme.DEFAULT
    owner: Optional[str] = None
    is_public: bool = False
    public_share_token: Optional[str] = None
    pdf_exported_at: Optional[str] = None
    # Only set on public copies
    source_itinerary_id: Optional[str] = None
    shared_at: Optional[str] = None

    def find_stop(self, stop_id: str) -> Optional[Stop]:
        return next((s for s in self.stops if s.id == stop_id), None)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "notes": self.notes,
            "description": self.description,
            "status": self.status.value,
            "theme": self.theme.value,
            "owner": self.owner,
            "isPublic": self.is_public,
            "publicShareToken": self.public_share_token,
            "pdfExportedAt": self.pdf_exported_at,
            "sourceItineraryId": self.source_itinerary_id,
            "sharedAt": self.shared_at,
            "stops": [stop.to_dict() for stop in self.stops],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Itinerary":
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or "").strip(),
            stops=[Stop.from_dict(s) for s in data.get("stops") or []],
            start_date=_optional_str(data.get("startDate")),
            end_date=_optional_str(data.get("endDate")),
            notes=_optional_str(data.get("notes")),
            description=_optional_str(data.get("description")),
            status=parse_enum(ItineraryStatus, data.get("status"), "status", ItineraryStatus.PLANNED),
            theme=parse_enum(Theme, data.get("theme"), "theme", Theme.DEFAULT),
            owner=data.get("owner"),
            is_public=_flag(data.get("isPublic"), "isPublic"),
            public_share_token=_optional_str(data.get("publicShareToken")),
            pdf_exported_at=data.get("pdfExportedAt"),
            source_itinerary_id=data.get("sourceItineraryId"),
            shared_at=data.get("sharedAt"),
        )


__all__ = [
    "TimeBucket",
    "TimeMode",
    "StopPlaceType",
    "ItineraryStatus",
    "Theme",
    "Manual",
    "FromSavedPlace",
    "FromExternalLookup",
    "Provenance",
    "provenance_from_record",
    "provenance_to_record",
    "parse_enum",
    "Stop",
    "Itinerary",
]
