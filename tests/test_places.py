"""Place lookup against a fake Google Maps client."""

from lifeos_travel.api.places import PlaceDetails, PlaceLookup


def test_short_queries_never_reach_the_client(place_lookup, maps_client):
    assert place_lookup.search_places("P") == []
    assert place_lookup.search_places("  ") == []
    assert maps_client.calls == []


def test_search_places_maps_predictions(place_lookup, maps_client):
    predictions = place_lookup.search_places(" Louvre ")
    assert maps_client.calls == [("places_autocomplete", "Louvre")]
    assert len(predictions) == 1
    assert predictions[0].to_dict() == {
        "place_id": "place-louvre",
        "description": "Louvre Museum, Paris, France",
        "structured_formatting": {"main_text": "Louvre Museum", "secondary_text": "Paris, France"},
    }


def test_search_failure_means_no_suggestions(failing_lookup):
    assert failing_lookup.search_places("Louvre") == []


def test_missing_api_key_means_no_suggestions(monkeypatch):
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "")
    assert PlaceLookup().search_places("Louvre") == []


def test_place_details(place_lookup):
    assert place_lookup.get_place_details("place-louvre") == PlaceDetails(
        48.8606, 2.3376, "Rue de Rivoli, 75001 Paris, France",
    )


def test_place_details_failures_are_none(place_lookup, failing_lookup):
    assert place_lookup.get_place_details("") is None
    assert place_lookup.get_place_details("nowhere") is None
    assert failing_lookup.get_place_details("place-louvre") is None
