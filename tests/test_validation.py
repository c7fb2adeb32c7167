"""Date range and stop entry validation."""

from datetime import date, datetime

import pytest

from lifeos_travel.api.errors import DateRangeError, ValidationError
from lifeos_travel.api.models import TimeMode
from lifeos_travel.api.scheduling import validate_date_range, validate_stop, validate_stop_date

START, END = "2024-06-01", "2024-06-10"


@pytest.mark.parametrize("stop_date", ["2024-06-01", "2024-06-05", "2024-06-10"])
def test_dates_inside_range_pass(stop_date):
    validate_stop_date(stop_date, START, END)


@pytest.mark.parametrize("stop_date", ["2024-05-31", "2024-06-11"])
def test_dates_outside_range_fail(stop_date):
    with pytest.raises(DateRangeError) as excinfo:
        validate_stop_date(stop_date, START, END)
    assert str(excinfo.value) == "Date must be between 2024-06-01 and 2024-06-10"
    assert excinfo.value.to_dict()["type"] == "date_range_error"


def test_date_range_error_is_a_validation_error():
    with pytest.raises(ValidationError):
        validate_stop_date("2024-07-01", START, END)


def test_time_of_day_is_ignored():
    validate_stop_date("2024-06-10T23:30:00", START, END)
    validate_stop_date(datetime(2024, 6, 10, 23, 59), date(2024, 6, 1), END)


@pytest.mark.parametrize("args", [
    (None, START, END),
    ("2030-01-01", None, END),
    ("2030-01-01", START, None),
    ("", "", ""),
])
def test_missing_values_pass(args):
    validate_stop_date(*args)


def test_garbage_date_is_rejected():
    with pytest.raises(ValidationError):
        validate_stop_date("next tuesday", START, END)


def test_reversed_itinerary_dates():
    with pytest.raises(ValidationError):
        validate_date_range("2024-06-10", "2024-06-01")
    validate_date_range("2024-06-01", "2024-06-01")
    validate_date_range(None, "2024-06-01")


def test_stop_needs_a_name(make_stop, make_itinerary):
    with pytest.raises(ValidationError, match="name is required"):
        validate_stop(make_stop(name="   "), make_itinerary())


def test_fixed_time_must_be_a_clock_time(make_stop, make_itinerary):
    with pytest.raises(ValidationError, match="HH:MM"):
        validate_stop(make_stop(time="9am"), make_itinerary())


def test_bucket_stop_ignores_stale_time(make_stop, make_itinerary):
    stop = make_stop(time="9am", bucket="morning")
    assert stop.time_mode == TimeMode.BUCKET
    validate_stop(stop, make_itinerary())


def test_stop_outside_trip(make_stop, make_itinerary):
    with pytest.raises(DateRangeError):
        validate_stop(make_stop(date="2024-06-11"), make_itinerary())
