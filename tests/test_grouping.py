"""Day grouping, numbering and time segments."""

from lifeos_travel.api.scheduling import (
    UNSCHEDULED,
    day_sections,
    group_by_day,
    group_by_time_segment,
    number_days,
    sorted_date_keys,
)


def test_days_ascend_and_unscheduled_comes_last(make_stop):
    stops = [
        make_stop(id="floating", date=None),
        make_stop(id="d2", date="2024-06-02"),
        make_stop(id="d1", date="2024-06-01"),
    ]
    groups = group_by_day(stops)
    assert list(groups) == ["2024-06-01", "2024-06-02", UNSCHEDULED]
    assert [s.id for s in groups[UNSCHEDULED]] == ["floating"]


def test_unscheduled_last_even_when_listed_first():
    assert sorted_date_keys([UNSCHEDULED, "2024-06-10", "2024-06-09"]) == [
        "2024-06-09", "2024-06-10", UNSCHEDULED,
    ]


def test_unparseable_dates_sort_after_real_days():
    assert sorted_date_keys([UNSCHEDULED, "someday", "2024-06-03"]) == [
        "2024-06-03", "someday", UNSCHEDULED,
    ]


def test_days_compare_as_dates_not_strings(make_stop):
    stops = [make_stop(date="2024-12-01"), make_stop(date="2024-02-01"), make_stop(date="2025-01-01")]
    assert list(group_by_day(stops)) == ["2024-02-01", "2024-12-01", "2025-01-01"]


def test_each_group_is_sorted(make_stop):
    stops = [
        make_stop(id="dinner", time="19:30"),
        make_stop(id="breakfast", time="08:00"),
        make_stop(id="pinned", manual_order=0),
    ]
    assert [s.id for s in group_by_day(stops)["2024-06-01"]] == ["pinned", "breakfast", "dinner"]


def test_number_days_skips_unscheduled(make_stop):
    stops = [make_stop(date=None), make_stop(date="2024-06-05"), make_stop(date="2024-06-01")]
    sections = number_days(group_by_day(stops))
    assert [(s.date_key, s.day_number) for s in sections] == [
        ("2024-06-01", 1), ("2024-06-05", 2), (UNSCHEDULED, None),
    ]
    assert sections[-1].is_unscheduled


def test_completed_count(make_stop):
    stops = [make_stop(completed=True), make_stop(), make_stop(completed=True)]
    (section,) = day_sections(stops)
    assert section.completed_count == 2


def test_empty_input_gives_no_sections():
    assert day_sections([]) == []


def test_time_segments_follow_stop_order(make_stop):
    stops = [
        make_stop(id="a", time="08:30"),
        make_stop(id="b", bucket="morning"),
        make_stop(id="c", time="19:00"),
        make_stop(id="d"),
    ]
    segments = group_by_time_segment(stops)
    assert [(display.label, [s.id for s in seg]) for display, seg in segments] == [
        ("Morning", ["a", "b"]),
        ("Evening", ["c"]),
        ("Unscheduled", ["d"]),
    ]
