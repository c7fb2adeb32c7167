# lifeos_travel/routes/websocket/itinerary.py
"""Live itinerary updates for open editors."""

import logging

from flask_socketio import join_room, leave_room

from lifeos_travel.api.errors import TravelError
from lifeos_travel.api.rendering import build_editor_view

from .base import BaseWebSocketHandler, NAMESPACE

logger = logging.getLogger(__name__)


def itinerary_room(itinerary_id):
    return f"itinerary:{itinerary_id}"


class ItineraryHandler(BaseWebSocketHandler):
    """Clients watching an itinerary get its regrouped editor view after every change."""

    def __init__(self, socketio, itinerary_service, namespace=NAMESPACE):
        super().__init__(socketio, namespace)
        self.itinerary_service = itinerary_service

    def broadcast(self, itinerary):
        """Service listener: push the new grouping to everyone watching."""
        self.emit_to_client("itinerary_updated", build_editor_view(itinerary),
                            room=itinerary_room(itinerary.id))

    def register_handlers(self):
        self.itinerary_service.subscribe(self.broadcast)

        @self.socketio.on("watch_itinerary", namespace=self.namespace)
        def handle_watch(data):
            itinerary_id = (data or {}).get("itinerary_id")
            self.log_event("watch_itinerary", {"itinerary_id": itinerary_id})
            try:
                view = self.itinerary_service.editor_view(itinerary_id)
            except TravelError as e:
                self.handle_error(e, "watch_itinerary")
                return
            join_room(itinerary_room(itinerary_id))
            self.emit_to_client("itinerary_updated", view)

        @self.socketio.on("unwatch_itinerary", namespace=self.namespace)
        def handle_unwatch(data):
            itinerary_id = (data or {}).get("itinerary_id")
            leave_room(itinerary_room(itinerary_id))
            self.log_event("unwatch_itinerary", {"itinerary_id": itinerary_id})
