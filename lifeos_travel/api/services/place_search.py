# lifeos_travel/api/services/place_search.py
"""Debounced place search for the stop editor's location field."""

import logging
import threading
from typing import Callable, List, Optional

from lifeos_travel.api.places import MIN_QUERY_LENGTH, PlaceLookup, PlacePrediction

logger = logging.getLogger(__name__)

ResultCallback = Callable[[str, List[PlacePrediction]], None]


class DebouncedPlaceSearch:
    """Runs a place search only after typing pauses for ``delay`` seconds.

    Every new query cancels the pending one, and :meth:`cancel` must be
    called on teardown so no result arrives after the client is gone.
    """

    def __init__(self, lookup: PlaceLookup, callback: ResultCallback, delay: float = 0.3):
        self.lookup = lookup
        self.callback = callback
        self.delay = delay
        self.lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    def submit(self, query: str) -> None:
        """Schedule a search for ``query``, replacing any pending one."""
        query = (query or "").strip()
        with self.lock:
            self._cancel_locked()
            self._generation += 1
            if len(query) < MIN_QUERY_LENGTH:
                generation = None
            else:
                generation = self._generation
                self._timer = threading.Timer(self.delay, self._run, args=(query, generation))
                self._timer.daemon = True
                self._timer.start()

        if generation is None:
            self.callback(query, [])

    def cancel(self) -> None:
        """Drop the pending search, if any."""
        with self.lock:
            self._cancel_locked()
            self._generation += 1

    @property
    def pending(self) -> bool:
        with self.lock:
            return self._timer is not None

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _run(self, query: str, generation: int) -> None:
        predictions = self.lookup.search_places(query)
        with self.lock:
            if generation != self._generation:
                # A newer keystroke or a cancel arrived while the request was in flight
                logger.debug(f"Discarding stale results for '{query}'")
                return
            self._timer = None
        self.callback(query, predictions)


__all__ = ['DebouncedPlaceSearch']
