# api/config.py
"""Configuration management for the itinerary service."""
import os
from dotenv import load_dotenv

load_dotenv()


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "client_id": os.getenv("maps_client_id", ""),
        "client_secret": os.getenv("maps_client_secret", "")
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 5000))


def get_store_path():
    """Path of the JSON file backing the document store, or None for memory only."""
    return os.getenv("ITINERARY_STORE_PATH") or None


def get_photo_config(base_dir=None):
    """Get photo upload configuration."""
    default_dir = os.path.join(base_dir or os.getcwd(), "uploads", "itinerary-stops")
    return {
        "upload_dir": os.getenv("PHOTO_UPLOAD_DIR", default_dir),
        "url_prefix": os.getenv("PHOTO_URL_PREFIX", "/travel/photos"),
        "max_bytes": int(os.getenv("PHOTO_MAX_BYTES", str(10 * 1024 * 1024))),  # 10MB
        "max_workers": int(os.getenv("PHOTO_UPLOAD_WORKERS", "4")),
    }


def get_search_debounce_seconds():
    """Delay between the last keystroke and the place search request."""
    return float(os.getenv("PLACE_SEARCH_DEBOUNCE_MS", "300")) / 1000.0


def get_public_base_url():
    """Origin used when building public share links."""
    return os.getenv("PUBLIC_BASE_URL", "http://localhost:5000").rstrip("/")


def get_websocket_config():
    """Get WebSocket configuration."""
    return {
        "ping_interval": int(os.getenv("WEBSOCKET_PING_INTERVAL", "25")),
        "ping_timeout": int(os.getenv("WEBSOCKET_PING_TIMEOUT", "60")),
        "cors_allowed_origins": os.getenv("WEBSOCKET_CORS_ORIGINS", "*").split(",")
    }
