"""
LifeOS Travel – main application entry point

* Flask app + Socket.IO (threading mode) serving the itinerary editor API.
* REST routes live under `/travel`; live updates and place search use the
  `/travel/ws` Socket.IO namespace.
"""

import os
import logging

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from lifeos_travel.api.config import (  # noqa: E402
    get_photo_config,
    get_port,
    get_store_path,
    get_websocket_config,
)
from lifeos_travel.api.places import PlaceLookup  # noqa: E402
from lifeos_travel.api.services.itinerary_service import ItineraryService  # noqa: E402
from lifeos_travel.api.services.photo_service import LocalPhotoStorage, PhotoService  # noqa: E402
from lifeos_travel.api.store import DocumentStore  # noqa: E402
from lifeos_travel.routes.travel import create_travel_blueprint  # noqa: E402
from lifeos_travel.routes.websocket import NAMESPACE, register_websocket_handlers  # noqa: E402

# --------------------------------------------------------------------------- #
# Flask initialisation
# --------------------------------------------------------------------------- #
app = Flask(__name__)

flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
if "FLASK_SECRET_KEY" not in os.environ:
    logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
app.secret_key = flask_secret_key

base_dir = os.path.dirname(os.path.abspath(__file__))
photo_config = get_photo_config(base_dir)
app.config.update(
    SESSION_COOKIE_HTTPONLY=True,
    SESSION_COOKIE_SAMESITE="Lax",
    # Room for a batch of photos in one upload request
    MAX_CONTENT_LENGTH=photo_config["max_bytes"] * 10,
)

CORS(app, origins="*", supports_credentials=True)

# --------------------------------------------------------------------------- #
# Socket.IO
# --------------------------------------------------------------------------- #
ws_config = get_websocket_config()
socketio = SocketIO(
    app,
    cors_allowed_origins=ws_config["cors_allowed_origins"],
    async_mode="threading",
    ping_interval=ws_config["ping_interval"],
    ping_timeout=ws_config["ping_timeout"],
    logger=False,
    engineio_logger=False,
    path="socket.io/",
)
logger.info("Socket.IO initialised (async_mode=threading)")

# --------------------------------------------------------------------------- #
# Services, blueprints & WebSocket handlers
# --------------------------------------------------------------------------- #
store = DocumentStore(get_store_path())
itinerary_service = ItineraryService(store)
place_lookup = PlaceLookup()
photo_service = PhotoService(
    LocalPhotoStorage(photo_config["upload_dir"], photo_config["url_prefix"], photo_config["max_bytes"]),
    max_workers=photo_config["max_workers"],
)

app.register_blueprint(create_travel_blueprint(
    base_dir, itinerary_service, place_lookup, photo_service, photo_config["upload_dir"],
))
register_websocket_handlers(socketio, itinerary_service, place_lookup)


@app.route("/debug")
def debug():
    """Simple JSON health endpoint."""
    return {
        "status": "ok",
        "socketio_initialized": True,
        "store": get_store_path() or "memory",
        "endpoints": {
            "health": "/travel/health",
            "websocket_namespace": NAMESPACE,
        },
    }


if __name__ == "__main__":
    port = get_port()
    logger.info("Starting travel app on http://localhost:%d", port)
    socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)

__all__ = ["app", "socketio"]
