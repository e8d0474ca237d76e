"""Tests for filter parsing and default window derivation."""

from datetime import date, datetime, time

import pytest

from hive_monitor.errors import InvalidQuery
from hive_monitor.services.history_service import default_history_query, parse_history_query

# --- parse_history_query ---


def test_parse_full_filter():
    query = parse_history_query("2024-01-01", "2024-01-05", "06:00:00", "18:30:00")
    assert query.start_date == date(2024, 1, 1)
    assert query.end_date == date(2024, 1, 5)
    assert query.start_time == time(6, 0, 0)
    assert query.end_time == time(18, 30, 0)


def test_parse_accepts_hour_minute_times():
    query = parse_history_query("2024-01-01", "2024-01-01", "06:00", "07:15")
    assert query.start_time == time(6, 0)
    assert query.end_time == time(7, 15)


def test_parse_missing_times_default_to_whole_day():
    query = parse_history_query("2024-01-01", "2024-01-02")
    assert query.start_time == time(0, 0, 0)
    assert query.end_time == time(23, 59, 59)


@pytest.mark.parametrize(
    "start_date, end_date, missing",
    [
        (None, "2024-01-02", ["startDate"]),
        ("2024-01-01", "", ["endDate"]),
        (None, None, ["startDate", "endDate"]),
    ],
)
def test_parse_requires_both_dates(start_date, end_date, missing):
    with pytest.raises(InvalidQuery) as exc_info:
        parse_history_query(start_date, end_date, "00:00:00", "23:59:59")
    assert exc_info.value.fields == missing


@pytest.mark.parametrize(
    "args",
    [
        ("2024-13-01", "2024-01-02", None, None),
        ("2024-01-01", "tomorrow", None, None),
        ("2024-01-01", "2024-01-02", "25:00:00", None),
        ("2024-01-01", "2024-01-02", None, "noon"),
    ],
)
def test_parse_rejects_malformed_values(args):
    with pytest.raises(InvalidQuery):
        parse_history_query(*args)


@pytest.mark.parametrize("start_time", ["06:00:00+02:00", "06:00Z"])
def test_parse_rejects_time_with_offset(start_time):
    with pytest.raises(InvalidQuery) as exc_info:
        parse_history_query("2024-01-01", "2024-01-02", start_time, None)
    assert exc_info.value.fields == ["startTime"]


def test_parse_keeps_inverted_ranges():
    """Inverted ranges are valid input; they just match nothing."""
    query = parse_history_query("2024-01-05", "2024-01-01", "18:00:00", "06:00:00")
    assert query.start_date > query.end_date
    assert query.start_time > query.end_time


# --- default_history_query ---


def test_default_window_ends_on_latest_data():
    extent = (datetime(2024, 1, 1, 8, 0), datetime(2024, 3, 20, 17, 45))
    now = datetime(2024, 6, 1, 10, 30)

    query = default_history_query(extent, now)
    assert query.end_date == date(2024, 3, 20)
    assert query.start_date == date(2024, 3, 13)
    assert query.start_time == time(0, 0, 0)
    assert query.end_time == time(23, 59, 59)


def test_default_window_clamped_to_oldest_data():
    extent = (datetime(2024, 3, 18, 8, 0), datetime(2024, 3, 20, 17, 45))
    now = datetime(2024, 6, 1, 10, 30)

    query = default_history_query(extent, now)
    assert query.start_date == date(2024, 3, 18)
    assert query.end_date == date(2024, 3, 20)


def test_default_window_empty_store_uses_now():
    now = datetime(2024, 6, 1, 10, 30, 15)

    query = default_history_query(None, now)
    assert query.end_date == date(2024, 6, 1)
    assert query.start_date == date(2024, 5, 25)
    assert query.end_time == time(10, 30, 15)


def test_default_window_ending_today_stops_at_current_time():
    extent = (datetime(2024, 5, 1, 0, 0), datetime(2024, 6, 1, 9, 0))
    now = datetime(2024, 6, 1, 14, 42, 7)

    assert default_history_query(extent, now).end_time == time(14, 42, 7)
    assert default_history_query(extent, now, hourly_grid=True).end_time == time(14, 0, 0)
