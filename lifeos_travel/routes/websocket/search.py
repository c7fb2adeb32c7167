# lifeos_travel/routes/websocket/search.py
"""Debounced place autocomplete over the socket."""

import logging
import threading

from flask import request

from lifeos_travel.api.config import get_search_debounce_seconds
from lifeos_travel.api.services.place_search import DebouncedPlaceSearch

from .base import BaseWebSocketHandler, NAMESPACE

logger = logging.getLogger(__name__)


class SearchHandler(BaseWebSocketHandler):
    """One debounced search per connected client.

    Keystrokes arrive as ``search_places`` events; only the last query in a
    quiet period reaches the lookup service and is answered with
    ``place_predictions``.
    """

    def __init__(self, socketio, place_lookup, namespace=NAMESPACE, delay=None):
        super().__init__(socketio, namespace)
        self.place_lookup = place_lookup
        self.delay = get_search_debounce_seconds() if delay is None else delay
        self._searches = {}
        self._lock = threading.Lock()

    def _search_for(self, sid):
        with self._lock:
            search = self._searches.get(sid)
            if search is None:
                def deliver(query, predictions):
                    self.emit_to_client("place_predictions", {
                        "query": query,
                        "predictions": [p.to_dict() for p in predictions],
                    }, room=sid)

                search = DebouncedPlaceSearch(self.place_lookup, deliver, delay=self.delay)
                self._searches[sid] = search
            return search

    def drop(self, sid):
        """Cancel and forget the client's pending search."""
        with self._lock:
            search = self._searches.pop(sid, None)
        if search is not None:
            search.cancel()
            logger.debug(f"Dropped place search for {sid}")

    def register_handlers(self):
        @self.socketio.on("search_places", namespace=self.namespace)
        def handle_search_places(data):
            query = data.get("query", "") if isinstance(data, dict) else ""
            self._search_for(request.sid).submit(str(query))
