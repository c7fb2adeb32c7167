# lifeos_travel/api/rendering/editor.py
"""Interactive editor view: collapsible day sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Set

from lifeos_travel.api.models import Itinerary
from lifeos_travel.api.rendering.common import (
    format_date_range,
    section_payload,
    theme_color,
)
from lifeos_travel.api.scheduling import day_sections


@dataclass
class EditorState:
    """Per-view UI state. Never persisted."""

    collapsed_days: Set[str] = field(default_factory=set)

    @classmethod
    def from_collapsed(cls, date_keys: Iterable[str]) -> "EditorState":
        return cls({key for key in date_keys if key})

    def toggle_day(self, date_key: str) -> bool:
        """Flip a day between collapsed and expanded; returns the new collapsed flag."""
        if date_key in self.collapsed_days:
            self.collapsed_days.discard(date_key)
            return False
        self.collapsed_days.add(date_key)
        return True

    def is_collapsed(self, date_key: str) -> bool:
        return date_key in self.collapsed_days


def build_editor_view(itinerary: Itinerary, state: EditorState = None) -> dict:
    """Grouped, sorted stops for the editor, with collapse flags and actions."""
    state = state or EditorState()
    days = []
    for section in day_sections(itinerary.stops):
        payload = section_payload(section)
        payload["collapsed"] = state.is_collapsed(section.date_key)
        for stop in payload["stops"]:
            stop["actions"] = ["edit", "toggle", "complete", "move_up", "move_down", "remove"]
        days.append(payload)

    return {
        "id": itinerary.id,
        "name": itinerary.name,
        "dateRange": format_date_range(itinerary.start_date, itinerary.end_date),
        "startDate": itinerary.start_date,
        "endDate": itinerary.end_date,
        "status": itinerary.status.value,
        "theme": itinerary.theme.value,
        "themeColor": list(theme_color(itinerary)),
        "isPublic": itinerary.is_public,
        "publicShareToken": itinerary.public_share_token,
        "notes": itinerary.notes,
        "totalStops": len(itinerary.stops),
        "completedStops": sum(1 for s in itinerary.stops if s.completed),
        "days": days,
    }


__all__ = ["EditorState", "build_editor_view"]
