# lifeos_travel/routes/websocket/base.py
"""Base WebSocket handler with common functionality."""

import logging

from flask import request
from flask_socketio import emit

logger = logging.getLogger(__name__)

NAMESPACE = "/travel/ws"


class BaseWebSocketHandler:
    """Base class for WebSocket handlers with common functionality."""

    def __init__(self, socketio, namespace=NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def emit_to_client(self, event, data, room=None):
        """Emit to a room, or back to the client of the current event.

        ``room`` is required outside a request context (timer threads,
        service listeners).
        """
        if room:
            self.socketio.emit(event, data, room=room, namespace=self.namespace)
        else:
            emit(event, data, namespace=self.namespace)

    def log_event(self, event_name, data=None):
        """Log WebSocket events consistently."""
        if data:
            logger.info(f"[WS] {event_name} - Client: {request.sid}, Data: {data}")
        else:
            logger.info(f"[WS] {event_name} - Client: {request.sid}")

    def handle_error(self, error, event_name=""):
        """Log a failed event and report it to the client."""
        logger.error(f"[WS] Error in {event_name} - Client: {request.sid}, Error: {error}")
        payload = {"message": str(error), "event": event_name}
        if hasattr(error, "to_dict"):
            payload.update(error.to_dict())
        self.emit_to_client("error", payload)
