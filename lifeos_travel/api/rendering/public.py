# lifeos_travel/api/rendering/public.py
"""Read-only public share view built from an immutable public copy."""

from __future__ import annotations

import logging

from lifeos_travel.api.errors import NotFoundError
from lifeos_travel.api.models import Itinerary
from lifeos_travel.api.rendering.common import (
    format_date_range,
    section_payload,
    theme_color,
    trip_length_days,
)
from lifeos_travel.api.scheduling import day_sections
from lifeos_travel.api.store import PUBLIC_ITINERARIES, DocumentStore

logger = logging.getLogger(__name__)

INVALID_TOKEN = "invalid_token"
NOT_FOUND = "not_found"
REVOKED = "revoked"

MESSAGES = {
    INVALID_TOKEN: "Invalid share link. Please check the URL and try again.",
    NOT_FOUND: "This trip is not available or the link has expired",
    REVOKED: "This trip is no longer publicly shared",
}


def load_public_itinerary(store: DocumentStore, token: str) -> Itinerary:
    """Fetch the public copy for ``token``.

    Raises:
        NotFoundError: with reason ``invalid_token``, ``not_found`` or
            ``revoked``.
    """
    token = (token or "").strip()
    if not token:
        raise NotFoundError(MESSAGES[INVALID_TOKEN], INVALID_TOKEN)

    record = store.get(PUBLIC_ITINERARIES, token)
    if record is None:
        logger.info(f"Public itinerary not found for token {token[:8]}...")
        raise NotFoundError(MESSAGES[NOT_FOUND], NOT_FOUND)

    itinerary = Itinerary.from_dict(record)
    if not itinerary.is_public:
        logger.info(f"Public itinerary {token[:8]}... has been revoked")
        raise NotFoundError(MESSAGES[REVOKED], REVOKED)
    return itinerary


def build_public_view(itinerary: Itinerary) -> dict:
    """Same grouping and order as the editor, without mutation affordances."""
    days = [section_payload(section) for section in day_sections(itinerary.stops)]
    return {
        "name": itinerary.name,
        "description": itinerary.description,
        "notes": itinerary.notes,
        "dateRange": format_date_range(itinerary.start_date, itinerary.end_date),
        "startDate": itinerary.start_date,
        "endDate": itinerary.end_date,
        "theme": itinerary.theme.value,
        "themeColor": list(theme_color(itinerary)),
        "sharedAt": itinerary.shared_at,
        "tripDays": trip_length_days(itinerary),
        "totalStops": len(itinerary.stops),
        "completedStops": sum(1 for s in itinerary.stops if s.completed),
        "days": days,
    }


__all__ = [
    "INVALID_TOKEN",
    "NOT_FOUND",
    "REVOKED",
    "load_public_itinerary",
    "build_public_view",
]
