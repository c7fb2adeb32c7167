"""Debounced place search."""

import threading
import time

from lifeos_travel.api.places import PlacePrediction
from lifeos_travel.api.services.place_search import DebouncedPlaceSearch


class RecordingLookup:
    def __init__(self):
        self.queries = []

    def search_places(self, query):
        self.queries.append(query)
        return [PlacePrediction(f"id-{query}", query)]


class Collector:
    def __init__(self):
        self.results = []
        self.done = threading.Event()

    def __call__(self, query, predictions):
        self.results.append((query, [p.place_id for p in predictions]))
        self.done.set()


def test_only_the_last_keystroke_is_searched():
    lookup, collector = RecordingLookup(), Collector()
    search = DebouncedPlaceSearch(lookup, collector, delay=0.05)
    for query in ("Lo", "Lou", "Louv", "Louvre"):
        search.submit(query)

    assert collector.done.wait(2)
    time.sleep(0.1)
    assert lookup.queries == ["Louvre"]
    assert collector.results == [("Louvre", ["id-Louvre"])]
    assert not search.pending


def test_short_query_clears_suggestions_immediately():
    lookup, collector = RecordingLookup(), Collector()
    search = DebouncedPlaceSearch(lookup, collector, delay=0.05)
    search.submit("Louvre")
    search.submit("L")

    assert collector.results == [("L", [])]
    time.sleep(0.15)
    assert lookup.queries == []
    assert collector.results == [("L", [])]


def test_cancel_drops_pending_search():
    lookup, collector = RecordingLookup(), Collector()
    search = DebouncedPlaceSearch(lookup, collector, delay=0.05)
    search.submit("Louvre")
    assert search.pending
    search.cancel()

    assert not search.pending
    time.sleep(0.15)
    assert lookup.queries == []
    assert collector.results == []
