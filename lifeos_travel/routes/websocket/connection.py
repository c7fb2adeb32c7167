# lifeos_travel/routes/websocket/connection.py
"""WebSocket connection and disconnection handlers."""

import time
import logging

from flask import request

from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


class ConnectionHandler(BaseWebSocketHandler):
    """Handles WebSocket connection lifecycle events."""

    def __init__(self, socketio, search_handler, namespace=None):
        super().__init__(socketio, namespace or search_handler.namespace)
        self.search_handler = search_handler

    def register_handlers(self):
        """Register connection-related event handlers."""

        @self.socketio.on("connect", namespace=self.namespace)
        def handle_connect(auth=None):
            """Handle WebSocket connection from browser."""
            self.log_event("connect")
            self.emit_to_client("connected", {
                "session_id": request.sid,
                "status": "connected",
            })

        @self.socketio.on("disconnect", namespace=self.namespace)
        def handle_disconnect(*args):
            """Handle WebSocket disconnection; pending searches are abandoned."""
            self.search_handler.drop(request.sid)
            logger.info(f"🔌 WebSocket disconnected: {request.sid}")

        @self.socketio.on("ping", namespace=self.namespace)
        def handle_ping():
            """Handle ping for connection testing."""
            self.emit_to_client("pong", {"timestamp": time.time()})
