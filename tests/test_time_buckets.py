"""Bucket table, clock-time classifier and display bucket resolution."""

import pytest

from lifeos_travel.api.models import StopPlaceType, TimeBucket, TimeMode
from lifeos_travel.api.scheduling import time_buckets
from lifeos_travel.api.scheduling import (
    TIME_BUCKETS,
    bucket_label,
    bucket_sort_key,
    classify_by_clock_time,
    derive_stored_sort_key,
    effective_sort_key,
    place_type_info,
    resolve_display_bucket,
)


def test_every_bucket_has_its_canonical_sort_key():
    expected = {
        TimeBucket.EARLY_MORNING: "06:00",
        TimeBucket.MORNING: "09:00",
        TimeBucket.MIDDAY: "12:00",
        TimeBucket.EARLY_AFTERNOON: "14:00",
        TimeBucket.LATE_AFTERNOON: "16:00",
        TimeBucket.EVENING: "19:00",
        TimeBucket.NIGHT: "21:30",
        TimeBucket.LATE_NIGHT: "02:00",
    }
    assert {bucket: info.sort_key for bucket, info in TIME_BUCKETS.items()} == expected


def test_bucket_table_is_read_only():
    with pytest.raises(TypeError):
        TIME_BUCKETS[TimeBucket.EVENING] = None


@pytest.mark.parametrize("time, bucket", [
    ("00:00", TimeBucket.LATE_NIGHT),
    ("04:59", TimeBucket.LATE_NIGHT),
    ("05:00", TimeBucket.EARLY_MORNING),
    ("07:59", TimeBucket.EARLY_MORNING),
    ("08:00", TimeBucket.MORNING),
    ("11:29", TimeBucket.MORNING),
    ("11:30", TimeBucket.MIDDAY),
    ("13:00", TimeBucket.MIDDAY),
    ("13:01", TimeBucket.EARLY_AFTERNOON),
    ("15:29", TimeBucket.EARLY_AFTERNOON),
    ("15:30", TimeBucket.LATE_AFTERNOON),
    ("17:59", TimeBucket.LATE_AFTERNOON),
    ("18:00", TimeBucket.EVENING),
    ("20:29", TimeBucket.EVENING),
    ("20:30", TimeBucket.NIGHT),
    ("23:59", TimeBucket.NIGHT),
    ("9:15", TimeBucket.MORNING),
])
def test_classify_by_clock_time_boundaries(time, bucket):
    assert classify_by_clock_time(time) == bucket


def test_classify_without_time_is_late_night():
    assert classify_by_clock_time(None) == TimeBucket.LATE_NIGHT
    assert classify_by_clock_time("") == TimeBucket.LATE_NIGHT


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "1200"])
def test_classify_rejects_malformed_times(value):
    with pytest.raises(ValueError):
        classify_by_clock_time(value)


def test_bucket_round_trip_ignores_stale_time(make_stop):
    stop = make_stop(time="08:15", bucket="evening")
    assert stop.time_mode == TimeMode.BUCKET
    assert effective_sort_key(stop) == "19:00"
    assert derive_stored_sort_key(stop) == "19:00"
    assert resolve_display_bucket(stop).label == "Evening"


def test_fixed_time_wins_over_stale_bucket(make_stop):
    stop = make_stop(time="19:30", time_mode=TimeMode.FIXED)
    stop.time_bucket = TimeBucket.MORNING
    assert effective_sort_key(stop) == "19:30"
    assert resolve_display_bucket(stop).bucket == TimeBucket.EVENING


def test_stale_bucket_used_when_fixed_stop_has_no_time(make_stop):
    stop = make_stop(time=None, time_mode=TimeMode.FIXED)
    stop.time_bucket = TimeBucket.MIDDAY
    assert resolve_display_bucket(stop).label == "Midday"


def test_stop_without_time_or_bucket_is_unscheduled(make_stop):
    display = resolve_display_bucket(make_stop())
    assert display.is_unscheduled
    assert display.label == "Unscheduled"
    assert display.to_dict()["bucket"] is None


def test_labels_and_keys_for_missing_bucket():
    assert bucket_label(None) == "Unscheduled"
    assert bucket_label(TimeBucket.LATE_AFTERNOON) == "Late Afternoon"
    assert bucket_sort_key(None) is None


def test_place_type_info_falls_back_to_other():
    assert place_type_info(None).place_type == StopPlaceType.OTHER
    assert place_type_info(StopPlaceType.MUSEUM).label == "Museum"


def test_module_exports_resolve():
    assert "classify_by_clock_time" in time_buckets.__all__
    assert all(hasattr(time_buckets, name) for name in time_buckets.__all__)
