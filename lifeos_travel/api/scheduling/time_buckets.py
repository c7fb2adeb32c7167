# lifeos_travel/api/scheduling/time_buckets.py
"""Time-of-day buckets and the clock-time classifier.

``TIME_BUCKETS`` and ``STOP_PLACE_TYPES`` are the only copies of these
tables; the editor, the public view and the PDF export all read them from
here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

from lifeos_travel.api.models import Stop, StopPlaceType, TimeBucket, TimeMode

UNSCHEDULED_LABEL = "Unscheduled"

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


@dataclass(frozen=True)
class BucketInfo:
    bucket: TimeBucket
    label: str
    range: str
    sort_key: str  # representative HH:MM
    icon_key: str
    color_key: str


@dataclass(frozen=True)
class BucketDisplay:
    """What a view shows for a stop's time of day."""

    label: str
    icon_key: str
    color_key: str
    bucket: Optional[TimeBucket] = None

    @property
    def is_unscheduled(self) -> bool:
        return self.bucket is None

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "icon": self.icon_key,
            "color": self.color_key,
            "bucket": self.bucket.value if self.bucket else None,
        }


@dataclass(frozen=True)
class PlaceTypeInfo:
    place_type: StopPlaceType
    label: str
    icon_key: str
    color_key: str


TIME_BUCKETS = MappingProxyType({
    info.bucket: info
    for info in (
        BucketInfo(TimeBucket.EARLY_MORNING, "Early Morning", "5:00 - 7:59", "06:00", "sunrise", "rose"),
        BucketInfo(TimeBucket.MORNING, "Morning", "8:00 - 11:29", "09:00", "sun", "amber"),
        BucketInfo(TimeBucket.MIDDAY, "Midday", "11:30 - 13:00", "12:00", "cloud-sun", "yellow"),
        BucketInfo(TimeBucket.EARLY_AFTERNOON, "Early Afternoon", "13:01 - 15:29", "14:00", "sun", "orange"),
        BucketInfo(TimeBucket.LATE_AFTERNOON, "Late Afternoon", "15:30 - 17:59", "16:00", "coffee", "amber"),
        BucketInfo(TimeBucket.EVENING, "Evening", "18:00 - 20:29", "19:00", "sunset", "purple"),
        BucketInfo(TimeBucket.NIGHT, "Night", "20:30 - 23:59", "21:30", "moon", "indigo"),
        BucketInfo(TimeBucket.LATE_NIGHT, "Late Night", "00:00 - 4:59", "02:00", "cloud-moon", "slate"),
    )
})

UNSCHEDULED_DISPLAY = BucketDisplay(UNSCHEDULED_LABEL, "clock", "gray")

STOP_PLACE_TYPES = MappingProxyType({
    info.place_type: info
    for info in (
        PlaceTypeInfo(StopPlaceType.RESTAURANT, "Restaurant", "utensils", "orange"),
        PlaceTypeInfo(StopPlaceType.HOTEL, "Hotel", "building", "blue"),
        PlaceTypeInfo(StopPlaceType.ATTRACTION, "Attraction", "camera", "purple"),
        PlaceTypeInfo(StopPlaceType.MUSEUM, "Museum", "building", "amber"),
        PlaceTypeInfo(StopPlaceType.PARK, "Park", "tree-pine", "green"),
        PlaceTypeInfo(StopPlaceType.BEACH, "Beach", "waves", "cyan"),
        PlaceTypeInfo(StopPlaceType.SHOPPING, "Shopping", "shopping-bag", "pink"),
        PlaceTypeInfo(StopPlaceType.ENTERTAINMENT, "Entertainment", "music", "violet"),
        PlaceTypeInfo(StopPlaceType.TRANSPORT, "Transport", "bus", "gray"),
        PlaceTypeInfo(StopPlaceType.OTHER, "Other", "help-circle", "gray"),
    )
})

# (inclusive lower bound, inclusive upper bound, bucket) in minutes after midnight.
_CLOCK_TABLE = (
    (5 * 60, 8 * 60 - 1, TimeBucket.EARLY_MORNING),
    (8 * 60, 11 * 60 + 29, TimeBucket.MORNING),
    (11 * 60 + 30, 13 * 60, TimeBucket.MIDDAY),
    (13 * 60 + 1, 15 * 60 + 29, TimeBucket.EARLY_AFTERNOON),
    (15 * 60 + 30, 18 * 60 - 1, TimeBucket.LATE_AFTERNOON),
    (18 * 60, 20 * 60 + 29, TimeBucket.EVENING),
    (20 * 60 + 30, 24 * 60 - 1, TimeBucket.NIGHT),
)


def parse_clock_time(value: str) -> int:
    """Return minutes after midnight for a zero-padded or bare ``H:MM`` string."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid clock time: {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid clock time: {value!r}")
    return hours * 60 + minutes


def is_clock_time(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        parse_clock_time(value)
    except ValueError:
        return False
    return True


def classify_by_clock_time(time: Optional[str]) -> TimeBucket:
    """Map an ``HH:MM`` time to its bucket; no time at all is late night."""
    if not time:
        return TimeBucket.LATE_NIGHT
    minutes = parse_clock_time(time)
    for low, high, bucket in _CLOCK_TABLE:
        if low <= minutes <= high:
            return bucket
    return TimeBucket.LATE_NIGHT


def bucket_info(bucket: TimeBucket) -> BucketInfo:
    return TIME_BUCKETS[TimeBucket(bucket)]


def bucket_label(bucket: Optional[TimeBucket]) -> str:
    if bucket is None:
        return UNSCHEDULED_LABEL
    return bucket_info(bucket).label


def bucket_sort_key(bucket: Optional[TimeBucket]) -> Optional[str]:
    """Canonical HH:MM for a bucket; the unscheduled pseudo-bucket has none."""
    if bucket is None:
        return None
    return bucket_info(bucket).sort_key


def derive_stored_sort_key(stop: Stop) -> Optional[str]:
    """The display sort key persisted alongside a stop for its current mode."""
    if stop.time_mode == TimeMode.BUCKET:
        return bucket_sort_key(stop.time_bucket)
    return stop.time


def resolve_display_bucket(stop: Stop) -> BucketDisplay:
    """Bucket a view shows for ``stop``.

    The stop's current time mode wins: a bucket-mode stop shows its bucket,
    a fixed-time stop is classified from its clock time. A stale bucket is
    only used when a fixed stop has no time at all.
    """
    bucket = None
    if stop.time_mode == TimeMode.BUCKET and stop.time_bucket:
        bucket = stop.time_bucket
    elif stop.time and is_clock_time(stop.time):
        bucket = classify_by_clock_time(stop.time)
    elif stop.time_bucket:
        bucket = stop.time_bucket

    if bucket is None:
        return UNSCHEDULED_DISPLAY
    info = bucket_info(bucket)
    return BucketDisplay(info.label, info.icon_key, info.color_key, bucket)


def place_type_info(place_type: Optional[StopPlaceType]) -> PlaceTypeInfo:
    return STOP_PLACE_TYPES.get(place_type, STOP_PLACE_TYPES[StopPlaceType.OTHER])


__all__ = [
    "UNSCHEDULED_LABEL",
    "BucketInfo",
    "BucketDisplay",
    "PlaceTypeInfo",
    "TIME_BUCKETS",
    "UNSCHEDULED_DISPLAY",
    "STOP_PLACE_TYPES",
    "parse_clock_time",
    "is_clock_time",
    "classify_by_clock_time",
    "bucket_info",
    "bucket_label",
    "bucket_sort_key",
    "derive_stored_sort_key",
    "resolve_display_bucket",
    "place_type_info",
]
