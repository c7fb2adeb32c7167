"""Shared fixtures: in-memory store, service, fake maps client and Flask app."""

import pytest
from flask import Flask
from googlemaps import exceptions as gmaps_exceptions

from lifeos_travel.api.models import Itinerary, Stop, TimeBucket, TimeMode
from lifeos_travel.api.places import PlaceLookup
from lifeos_travel.api.services.itinerary_service import ItineraryService
from lifeos_travel.api.services.photo_service import LocalPhotoStorage, PhotoService
from lifeos_travel.api.store import DocumentStore
from lifeos_travel.routes.travel import create_travel_blueprint


class FakeMapsClient:
    """Stands in for googlemaps.Client; records calls."""

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def places_autocomplete(self, input_text, language=None):
        self.calls.append(("places_autocomplete", input_text))
        if self.fail:
            raise gmaps_exceptions.ApiError("REQUEST_DENIED", "denied")
        return [
            {
                "place_id": "place-louvre",
                "description": "Louvre Museum, Paris, France",
                "structured_formatting": {"main_text": "Louvre Museum", "secondary_text": "Paris, France"},
            },
            {"description": "no id, dropped"},
        ]

    def place(self, place_id, fields=None, language=None):
        self.calls.append(("place", place_id))
        if self.fail:
            raise gmaps_exceptions.Timeout()
        if place_id == "nowhere":
            return {"result": {}}
        return {
            "result": {
                "formatted_address": "Rue de Rivoli, 75001 Paris, France",
                "geometry": {"location": {"lat": 48.8606, "lng": 2.3376}},
            }
        }


@pytest.fixture
def make_stop():
    """Factory for Stop with sensible defaults."""
    counter = {"n": 0}

    def _make(name=None, date="2024-06-01", time=None, bucket=None, manual_order=None, **kwargs):
        counter["n"] += 1
        mode = TimeMode.BUCKET if bucket else TimeMode.FIXED
        return Stop(
            id=kwargs.pop("id", f"s{counter['n']}"),
            name=name or f"Stop {counter['n']}",
            date=date,
            time=time,
            time_mode=kwargs.pop("time_mode", mode),
            time_bucket=TimeBucket(bucket) if bucket else None,
            manual_order=manual_order,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_itinerary():
    def _make(stops=(), **kwargs):
        kwargs.setdefault("start_date", "2024-06-01")
        kwargs.setdefault("end_date", "2024-06-10")
        return Itinerary(id=kwargs.pop("id", "trip-1"), name=kwargs.pop("name", "Paris"),
                         stops=list(stops), **kwargs)

    return _make


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def service(store):
    return ItineraryService(store)


@pytest.fixture
def trip(service):
    """A stored June 2024 itinerary with no stops."""
    return service.create_itinerary({"name": "Paris", "startDate": "2024-06-01", "endDate": "2024-06-10"})


@pytest.fixture
def maps_client():
    return FakeMapsClient()


@pytest.fixture
def place_lookup(maps_client):
    return PlaceLookup(client=maps_client)


@pytest.fixture
def failing_lookup():
    """Lookup whose client raises like an unreachable Maps API."""
    return PlaceLookup(client=FakeMapsClient(fail=True))


@pytest.fixture
def photo_dir(tmp_path):
    return str(tmp_path / "photos")


@pytest.fixture
def photo_service(photo_dir):
    return PhotoService(LocalPhotoStorage(photo_dir, "/travel/photos", max_bytes=1024), max_workers=2)


@pytest.fixture
def app(tmp_path, service, place_lookup, photo_service, photo_dir):
    app = Flask(__name__)
    app.config.update(TESTING=True, SECRET_KEY="test")
    app.register_blueprint(create_travel_blueprint(
        str(tmp_path), service, place_lookup, photo_service, photo_dir,
    ))
    return app


@pytest.fixture
def client(app):
    return app.test_client()
