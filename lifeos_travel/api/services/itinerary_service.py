# lifeos_travel/api/services/itinerary_service.py
"""Service layer for itinerary editing and sharing."""

import logging
import secrets
import uuid
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from lifeos_travel.api.errors import NotFoundError, ValidationError
from lifeos_travel.api.models import Itinerary, ItineraryStatus, Stop, Theme, TimeMode
from lifeos_travel.api.models import parse_enum
from lifeos_travel.api.rendering import EditorState, build_editor_view, export_itinerary_pdf
from lifeos_travel.api.scheduling import (
    day_sections,
    derive_stored_sort_key,
    move_stop,
    validate_date_range,
    validate_stop,
)
from lifeos_travel.api.scheduling.time_buckets import is_clock_time, parse_clock_time
from lifeos_travel.api.scheduling.validation import to_calendar_date
from lifeos_travel.api.store import ITINERARIES, JOURNAL, PUBLIC_ITINERARIES, DocumentStore

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Itinerary], None]

EDITABLE_FIELDS = {
    "name": "name",
    "startDate": "start_date",
    "endDate": "end_date",
    "notes": "notes",
    "description": "description",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _prepare_stop(stop: Stop) -> Stop:
    """Drop the field the current time mode ignores and refresh the stored sort key."""
    if stop.date:
        # Day groups key on the stored string, so keep only the calendar day
        stop = replace(stop, date=to_calendar_date(stop.date).isoformat())
    if stop.time_mode == TimeMode.FIXED:
        stop = replace(stop, time_bucket=None)
        if is_clock_time(stop.time):
            # "9:05" and "09:05" must sort the same
            minutes = parse_clock_time(stop.time)
            stop = replace(stop, time=f"{minutes // 60:02d}:{minutes % 60:02d}")
    else:
        stop = replace(stop, time=None)
    return replace(stop, sort_key=derive_stored_sort_key(stop))


def _normalise_trip_dates(itinerary: Itinerary) -> None:
    for attr, label in (("start_date", "start date"), ("end_date", "end date")):
        day = to_calendar_date(getattr(itinerary, attr), label)
        setattr(itinerary, attr, day.isoformat() if day else None)


def _new_stop_id() -> str:
    return f"stop-{uuid.uuid4().hex[:12]}"


class ItineraryService:
    """Handles itinerary CRUD, stop editing and public sharing.

    Every stop mutation regroups the stops, stores them in display order and
    then notifies listeners (the socket layer) with the updated itinerary.
    """

    def __init__(self, store: DocumentStore):
        self.store = store
        self.listeners: List[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> None:
        self.listeners.append(listener)

    # ------------------------------------------------------------------ #
    # Itineraries
    # ------------------------------------------------------------------ #
    def list_itineraries(self) -> List[Itinerary]:
        itineraries = [Itinerary.from_dict(r) for r in self.store.load(ITINERARIES)]
        # Upcoming trips first, undated trips last
        return sorted(itineraries, key=lambda i: (i.start_date is None, i.start_date or "", i.name))

    def get_itinerary(self, itinerary_id: str) -> Itinerary:
        """Load an itinerary.

        Raises:
            NotFoundError: unknown id
        """
        record = self.store.get(ITINERARIES, itinerary_id)
        if record is None:
            raise NotFoundError(f"Itinerary {itinerary_id} not found", "itinerary_not_found")
        return Itinerary.from_dict(record)

    def create_itinerary(self, data: Dict[str, Any]) -> Itinerary:
        """Create an itinerary, optionally with an initial list of stops.

        Raises:
            ValidationError: missing name, reversed dates or an invalid stop
        """
        itinerary = Itinerary.from_dict({**data, "id": "", "stops": []})
        if not itinerary.name:
            raise ValidationError("Itinerary name is required")
        _normalise_trip_dates(itinerary)
        validate_date_range(itinerary.start_date, itinerary.end_date)
        itinerary.is_public = False
        itinerary.public_share_token = None

        for stop_data in data.get("stops") or []:
            stop = _prepare_stop(Stop.from_dict(stop_data))
            stop.id = stop.id or _new_stop_id()
            validate_stop(stop, itinerary)
            itinerary.stops.append(stop)
        itinerary.stops = self._display_order(itinerary.stops)

        itinerary.id = self.store.add(ITINERARIES, itinerary.to_dict())
        logger.info(f"Created itinerary {itinerary.id} '{itinerary.name}' with {len(itinerary.stops)} stops")
        return itinerary

    def update_itinerary(self, itinerary_id: str, data: Dict[str, Any]) -> Itinerary:
        """Update itinerary details. Existing stops are not re-validated."""
        itinerary = self.get_itinerary(itinerary_id)
        for key, attr in EDITABLE_FIELDS.items():
            if key in data:
                value = data[key]
                if isinstance(value, str):
                    value = value.strip() or None
                elif value is not None:
                    raise ValidationError(f"Invalid {key}: {value!r}")
                setattr(itinerary, attr, value)
        if "theme" in data:
            itinerary.theme = parse_enum(Theme, data["theme"], "theme", Theme.DEFAULT)
        if "status" in data:
            itinerary.status = parse_enum(ItineraryStatus, data["status"], "status", ItineraryStatus.PLANNED)

        if not itinerary.name:
            raise ValidationError("Itinerary name is required")
        _normalise_trip_dates(itinerary)
        validate_date_range(itinerary.start_date, itinerary.end_date)

        record = itinerary.to_dict()
        record.pop("stops")
        self.store.update(ITINERARIES, itinerary_id, record)
        logger.info(f"Updated itinerary {itinerary_id}")
        self._notify(itinerary)
        return itinerary

    def update_status(self, itinerary_id: str, status: str) -> Itinerary:
        return self.update_itinerary(itinerary_id, {"status": status})

    def delete_itinerary(self, itinerary_id: str) -> None:
        itinerary = self.get_itinerary(itinerary_id)
        if itinerary.public_share_token:
            self.store.remove(PUBLIC_ITINERARIES, itinerary.public_share_token)
        self.store.remove(ITINERARIES, itinerary_id)
        logger.info(f"Deleted itinerary {itinerary_id}")

    # ------------------------------------------------------------------ #
    # Stops
    # ------------------------------------------------------------------ #
    def add_stop(self, itinerary_id: str, data: Dict[str, Any]) -> Stop:
        """Validate and append a stop.

        Raises:
            ValidationError: missing name, bad time or date outside the trip
        """
        itinerary = self.get_itinerary(itinerary_id)
        stop = _prepare_stop(Stop.from_dict({**data, "id": _new_stop_id(), "completed": False}))
        validate_stop(stop, itinerary)

        itinerary.stops.append(stop)
        self._save_stops(itinerary)
        logger.info(f"Added stop {stop.id} '{stop.name}' to itinerary {itinerary_id}")
        return stop

    def edit_stop(self, itinerary_id: str, stop_id: str, data: Dict[str, Any]) -> Stop:
        itinerary = self.get_itinerary(itinerary_id)
        existing = self._find_stop(itinerary, stop_id)

        merged = existing.to_dict()
        merged.update(data)
        merged["id"] = stop_id
        stop = _prepare_stop(Stop.from_dict(merged))
        validate_stop(stop, itinerary)

        itinerary.stops = [stop if s.id == stop_id else s for s in itinerary.stops]
        self._save_stops(itinerary)
        logger.info(f"Edited stop {stop_id} in itinerary {itinerary_id}")
        return stop

    def remove_stop(self, itinerary_id: str, stop_id: str) -> None:
        itinerary = self.get_itinerary(itinerary_id)
        self._find_stop(itinerary, stop_id)
        itinerary.stops = [s for s in itinerary.stops if s.id != stop_id]
        self._save_stops(itinerary)
        logger.info(f"Removed stop {stop_id} from itinerary {itinerary_id}")

    def move_stop(self, itinerary_id: str, stop_id: str, direction: str) -> bool:
        """Move a stop one place up or down within its day.

        Returns False when the stop is already first/last in its day.

        Raises:
            OrderingConflict: the move would break the day's time ordering
            ValidationError: unknown direction
        """
        itinerary = self.get_itinerary(itinerary_id)
        self._find_stop(itinerary, stop_id)

        section = next(s for s in day_sections(itinerary.stops) if any(x.id == stop_id for x in s.stops))
        index = next(i for i, s in enumerate(section.stops) if s.id == stop_id)
        try:
            reordered = move_stop(section.stops, index, direction)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if [s.id for s in reordered] == [s.id for s in section.stops]:
            return False

        by_id = {s.id: s for s in reordered}
        itinerary.stops = [by_id.get(s.id, s) for s in itinerary.stops]
        self._save_stops(itinerary)
        logger.info(f"Moved stop {stop_id} {direction} in itinerary {itinerary_id}")
        return True

    def toggle_stop(self, itinerary_id: str, stop_id: str) -> Stop:
        itinerary = self.get_itinerary(itinerary_id)
        stop = self._find_stop(itinerary, stop_id)
        stop.completed = not stop.completed
        stop.completed_at = _now() if stop.completed else None
        self._save_stops(itinerary)
        return stop

    def complete_visit(self, itinerary_id: str, stop_id: str) -> Tuple[Stop, str]:
        """Mark a stop visited and record a journal entry for it.

        Returns the stop and the journal entry id. A stop that already links
        to a journal entry keeps it.
        """
        itinerary = self.get_itinerary(itinerary_id)
        stop = self._find_stop(itinerary, stop_id)

        if stop.journal_entry_id:
            journal_entry_id = stop.journal_entry_id
        else:
            body = f"Completed visit to {stop.name}"
            if stop.notes:
                body += f"\n\nNotes: {stop.notes}"
            body += f"\n\nPart of itinerary: {itinerary.name}"
            journal_entry_id = self.store.add(JOURNAL, {
                "title": f"Visited: {stop.name}",
                "body": body,
                "mood": "Happy",
                "date": stop.date or date.today().isoformat(),
                "location": stop.name,
                "tags": ["travel", "-".join(itinerary.name.lower().split())],
                "itineraryId": itinerary_id,
                "stopId": stop_id,
            })
            logger.info(f"Created journal entry {journal_entry_id} for stop {stop_id}")

        stop.completed = True
        stop.completed_at = _now()
        stop.journal_entry_id = journal_entry_id
        self._save_stops(itinerary)
        return stop, journal_entry_id

    # ------------------------------------------------------------------ #
    # Sharing & export
    # ------------------------------------------------------------------ #
    def toggle_public_share(self, itinerary_id: str) -> Itinerary:
        """Publish a snapshot of the itinerary, or withdraw the current one.

        The public copy is taken by value; later edits do not reach it.
        """
        itinerary = self.get_itinerary(itinerary_id)

        if itinerary.is_public and itinerary.public_share_token:
            if not self.store.remove(PUBLIC_ITINERARIES, itinerary.public_share_token):
                logger.warning(f"Public copy for {itinerary_id} was already gone")
            itinerary.is_public = False
            itinerary.public_share_token = None
            logger.info(f"Itinerary {itinerary_id} is no longer public")
        else:
            token = secrets.token_hex(24)
            public_copy = itinerary.to_dict()
            public_copy.update({
                "id": token,
                "isPublic": True,
                "publicShareToken": token,
                "sourceItineraryId": itinerary_id,
                "sharedAt": _now(),
                "owner": None,
            })
            self.store.set(PUBLIC_ITINERARIES, token, public_copy)
            itinerary.is_public = True
            itinerary.public_share_token = token
            logger.info(f"Itinerary {itinerary_id} shared publicly")

        self.store.update(ITINERARIES, itinerary_id, {
            "isPublic": itinerary.is_public,
            "publicShareToken": itinerary.public_share_token,
        })
        return itinerary

    @staticmethod
    def share_url(itinerary: Itinerary, base_url: str) -> Optional[str]:
        if not itinerary.public_share_token:
            return None
        return f"{base_url}/travel/api/share/{itinerary.public_share_token}"

    def editor_view(self, itinerary_id: str, state: Optional[EditorState] = None) -> Dict[str, Any]:
        return build_editor_view(self.get_itinerary(itinerary_id), state)

    def export_pdf(self, itinerary_id: str) -> Tuple[bytes, str]:
        itinerary = self.get_itinerary(itinerary_id)
        pdf_bytes, filename = export_itinerary_pdf(itinerary)
        self.store.update(ITINERARIES, itinerary_id, {"pdfExportedAt": _now()})
        return pdf_bytes, filename

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _find_stop(itinerary: Itinerary, stop_id: str) -> Stop:
        stop = itinerary.find_stop(stop_id)
        if stop is None:
            raise NotFoundError(f"Stop {stop_id} not found", "stop_not_found")
        return stop

    @staticmethod
    def _display_order(stops: List[Stop]) -> List[Stop]:
        return [stop for section in day_sections(stops) for stop in section.stops]

    def _save_stops(self, itinerary: Itinerary) -> None:
        # Order is computed before the write; the write does not feed back into it
        itinerary.stops = self._display_order(itinerary.stops)
        self.store.update(ITINERARIES, itinerary.id, {"stops": [s.to_dict() for s in itinerary.stops]})
        self._notify(itinerary)

    def _notify(self, itinerary: Itinerary) -> None:
        for listener in self.listeners:
            listener(itinerary)


__all__ = ['ItineraryService']
