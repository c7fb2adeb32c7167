# lifeos_travel/api/scheduling/grouping.py
"""Partition stops into calendar days."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from lifeos_travel.api.models import Stop
from lifeos_travel.api.scheduling.ordering import sort_stops
from lifeos_travel.api.scheduling.time_buckets import BucketDisplay, resolve_display_bucket

UNSCHEDULED = "Unscheduled"


@dataclass
class DaySection:
    """One day group in display order."""

    date_key: str
    day_number: Optional[int]  # None for the unscheduled group
    stops: List[Stop] = field(default_factory=list)

    @property
    def is_unscheduled(self) -> bool:
        return self.date_key == UNSCHEDULED

    @property
    def completed_count(self) -> int:
        return sum(1 for stop in self.stops if stop.completed)


def parse_date_key(value: str) -> Optional[date]:
    """Calendar date of an ISO date (or datetime) string, None if unparseable."""
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def _date_order(date_key: str) -> Tuple[int, date, str]:
    if date_key == UNSCHEDULED:
        return (2, date.max, date_key)
    parsed = parse_date_key(date_key)
    if parsed is None:
        return (1, date.max, date_key)
    return (0, parsed, date_key)


def sorted_date_keys(date_keys: Iterable[str]) -> List[str]:
    """Ascending calendar order with ``Unscheduled`` always last."""
    return sorted(date_keys, key=_date_order)


def group_by_day(stops: Iterable[Stop]) -> Dict[str, List[Stop]]:
    """Group ``stops`` by their literal date, each group sorted for display.

    The returned dict iterates in day order.
    """
    groups: Dict[str, List[Stop]] = {}
    for stop in stops:
        groups.setdefault(stop.date or UNSCHEDULED, []).append(stop)
    return {key: sort_stops(groups[key]) for key in sorted_date_keys(groups)}


def number_days(groups: Dict[str, List[Stop]]) -> List[DaySection]:
    """Assign Day 1..N to dated groups; the unscheduled group stays unnumbered."""
    sections = []
    day_number = 0
    for date_key, stops in groups.items():
        if date_key == UNSCHEDULED:
            sections.append(DaySection(date_key, None, stops))
        else:
            day_number += 1
            sections.append(DaySection(date_key, day_number, stops))
    # group_by_day already orders Unscheduled last; keep that for hand-built dicts too.
    sections.sort(key=lambda s: s.is_unscheduled)
    return sections


def day_sections(stops: Iterable[Stop]) -> List[DaySection]:
    return number_days(group_by_day(stops))


def group_by_time_segment(stops: List[Stop]) -> List[Tuple[BucketDisplay, List[Stop]]]:
    """Split one day's sorted stops by display bucket label.

    Segments appear in the order of their first stop; stop order is kept.
    """
    segments: List[Tuple[BucketDisplay, List[Stop]]] = []
    index: Dict[str, int] = {}
    for stop in stops:
        display = resolve_display_bucket(stop)
        if display.label not in index:
            index[display.label] = len(segments)
            segments.append((display, []))
        segments[index[display.label]][1].append(stop)
    return segments


__all__ = [
    "UNSCHEDULED",
    "DaySection",
    "parse_date_key",
    "sorted_date_keys",
    "group_by_day",
    "number_days",
    "day_sections",
    "group_by_time_segment",
]
