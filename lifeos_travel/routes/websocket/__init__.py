# lifeos_travel/routes/websocket/__init__.py
"""WebSocket route handlers initialization."""

import logging

from .base import NAMESPACE
from .connection import ConnectionHandler
from .itinerary import ItineraryHandler
from .search import SearchHandler

logger = logging.getLogger(__name__)


def register_websocket_handlers(socketio, itinerary_service, place_lookup, search_delay=None):
    """Register all WebSocket event handlers with SocketIO.

    Args:
        socketio: Flask-SocketIO instance
        itinerary_service: service whose changes are pushed to watchers
        place_lookup: lookup backing the debounced place search
        search_delay: debounce delay in seconds, defaults to configuration
    """
    logger.info("Registering WebSocket handlers...")

    search_handler = SearchHandler(socketio, place_lookup, NAMESPACE, delay=search_delay)
    handlers = [
        ConnectionHandler(socketio, search_handler, NAMESPACE),
        search_handler,
        ItineraryHandler(socketio, itinerary_service, NAMESPACE),
    ]
    for handler in handlers:
        logger.info(f"Registering {type(handler).__name__} for namespace: {NAMESPACE}")
        handler.register_handlers()

    logger.info("✅ WebSocket handlers registered successfully")
    return search_handler


__all__ = ['register_websocket_handlers', 'NAMESPACE']
