# lifeos_travel/api/rendering/common.py
"""Formatting helpers shared by the editor, public view and PDF export."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from lifeos_travel.api.models import Itinerary, Stop, TimeMode
from lifeos_travel.api.scheduling import (
    DaySection,
    bucket_label,
    group_by_time_segment,
    place_type_info,
    resolve_display_bucket,
)
from lifeos_travel.api.scheduling.grouping import parse_date_key

THEME_COLORS: Dict[str, Tuple[int, int, int]] = {
    "default": (99, 102, 241),
    "tropical": (245, 158, 11),
    "adventure": (34, 197, 94),
    "city": (100, 116, 139),
    "beach": (6, 182, 212),
    "mountain": (16, 185, 129),
}

# Ordered (date key, stop ids) pairs: what every adapter must agree on.
ContentOrder = List[Tuple[str, List[str]]]


def theme_color(itinerary: Itinerary) -> Tuple[int, int, int]:
    return THEME_COLORS.get(itinerary.theme.value, THEME_COLORS["default"])


def format_day_label(section: DaySection) -> str:
    """``Day 2: Sunday, Jun 2``; unscheduled or unparseable keys are shown as is."""
    if section.is_unscheduled:
        return section.date_key
    parsed = parse_date_key(section.date_key)
    if parsed is None:
        return f"Day {section.day_number}: {section.date_key}"
    return f"Day {section.day_number}: {parsed:%A}, {parsed:%b} {parsed.day}"


def format_date_range(start: Optional[str], end: Optional[str]) -> str:
    """``June 1 - June 10, 2024`` or ``Dates not set``."""
    first, last = parse_date_key(start or ""), parse_date_key(end or "")
    if not first or not last:
        return "Dates not set"
    return f"{first:%B} {first.day} - {last:%B} {last.day}, {last.year}"


def trip_length_days(itinerary: Itinerary) -> int:
    first = parse_date_key(itinerary.start_date or "")
    last = parse_date_key(itinerary.end_date or "")
    if not first or not last:
        return 0
    return (last - first).days + 1


def time_display(stop: Stop) -> str:
    """Clock time for fixed stops, bucket label for bucket stops, else ''."""
    if stop.time_mode == TimeMode.FIXED and stop.time:
        return stop.time
    if stop.time_mode == TimeMode.BUCKET and stop.time_bucket:
        return bucket_label(stop.time_bucket)
    return ""


def stop_payload(stop: Stop, position: int) -> dict:
    place = place_type_info(stop.place_type)
    payload = stop.to_dict()
    payload.update({
        "position": position,
        "timeDisplay": time_display(stop),
        "segment": resolve_display_bucket(stop).to_dict(),
        "placeTypeInfo": {"label": place.label, "icon": place.icon_key, "color": place.color_key},
    })
    return payload


def section_payload(section: DaySection) -> dict:
    """Shared JSON shape of one day section."""
    return {
        "date": section.date_key,
        "dayNumber": section.day_number,
        "label": format_day_label(section),
        "stopCount": len(section.stops),
        "completedCount": section.completed_count,
        "stops": [stop_payload(stop, i + 1) for i, stop in enumerate(section.stops)],
        "segments": [
            {"segment": display.to_dict(), "stopIds": [s.id for s in stops]}
            for display, stops in group_by_time_segment(section.stops)
        ],
    }


def content_order(sections: List[DaySection]) -> ContentOrder:
    return [(section.date_key, [stop.id for stop in section.stops]) for section in sections]


def payload_content_order(days: List[dict]) -> ContentOrder:
    """Read the (date, stop ids) order back out of rendered section payloads."""
    return [(day["date"], [stop["id"] for stop in day["stops"]]) for day in days]


__all__ = [
    "THEME_COLORS",
    "ContentOrder",
    "theme_color",
    "format_day_label",
    "format_date_range",
    "trip_length_days",
    "time_display",
    "stop_payload",
    "section_payload",
    "content_order",
    "payload_content_order",
]
