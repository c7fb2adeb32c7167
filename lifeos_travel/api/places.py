# lifeos_travel/api/places.py
"""Place lookup backed by the Google Maps client.

Search and details are both best-effort: any lookup failure is logged and
turned into "no suggestions" / "no coordinates" so the user can still type a
stop by hand.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import googlemaps
from googlemaps import exceptions as gmaps_exceptions

from lifeos_travel.api.config import get_google_maps_config
from lifeos_travel.api.errors import LookupFailure

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
DETAIL_FIELDS = ["formatted_address", "geometry"]


@dataclass(frozen=True)
class PlacePrediction:
    place_id: str
    description: str
    main_text: str = ""
    secondary_text: str = ""

    def to_dict(self) -> dict:
        return {
            "place_id": self.place_id,
            "description": self.description,
            "structured_formatting": {
                "main_text": self.main_text,
                "secondary_text": self.secondary_text,
            },
        }


@dataclass(frozen=True)
class PlaceDetails:
    lat: float
    lng: float
    address: str = ""

    def to_dict(self) -> dict:
        return {"lat": self.lat, "lng": self.lng, "address": self.address}


class PlaceLookup:
    """Autocomplete and details lookups for the stop editor."""

    def __init__(self, client: Optional[Any] = None):
        self._client = client

    def _get_client(self) -> Any:
        """Return a cached googlemaps.Client instance."""
        if self._client is None:
            cfg = get_google_maps_config()
            api_key = cfg.get("api_key", "")
            if not api_key:
                raise LookupFailure("No Google Maps API key configured")
            try:
                logger.info(f"Initializing Google Maps client with key: {api_key[:10]}...")
                self._client = googlemaps.Client(key=api_key)
            except ValueError as e:
                raise LookupFailure(f"Failed to initialize Google Maps client: {e}") from e
        return self._client

    def _call(self, method: str, *args, **kwargs) -> Any:
        client = self._get_client()
        try:
            return getattr(client, method)(*args, **kwargs)
        except (gmaps_exceptions.ApiError,
                gmaps_exceptions.TransportError,
                gmaps_exceptions.Timeout) as e:
            raise LookupFailure(f"{method} failed: {e}") from e

    def search_places(self, query: str) -> List[PlacePrediction]:
        """Ranked predictions for free text; [] for short queries or failures."""
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        try:
            results = self._call("places_autocomplete", input_text=query, language="en")
        except LookupFailure as e:
            logger.error(f"Location search error for '{query}': {e}")
            return []

        predictions = []
        for item in results or []:
            place_id = item.get("place_id")
            if not place_id:
                continue
            description = item.get("description", "")
            formatting = item.get("structured_formatting") or {}
            predictions.append(PlacePrediction(
                place_id=place_id,
                description=description,
                main_text=formatting.get("main_text") or description,
                secondary_text=formatting.get("secondary_text", ""),
            ))
        logger.debug(f"Place search '{query}' returned {len(predictions)} predictions")
        return predictions

    def get_place_details(self, place_id: str) -> Optional[PlaceDetails]:
        """Coordinates and formatted address for a place id, or None."""
        if not place_id:
            return None

        try:
            response = self._call("place", place_id, fields=DETAIL_FIELDS, language="en")
        except LookupFailure as e:
            logger.error(f"Place details error for '{place_id}': {e}")
            return None

        result = (response or {}).get("result") or {}
        location = (result.get("geometry") or {}).get("location")
        if not location:
            logger.warning(f"No location in place details for '{place_id}'")
            return None
        return PlaceDetails(
            lat=location["lat"],
            lng=location["lng"],
            address=result.get("formatted_address", ""),
        )


__all__ = ["PlaceLookup", "PlacePrediction", "PlaceDetails", "MIN_QUERY_LENGTH"]
