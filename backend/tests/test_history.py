"""Tests for the history endpoint and its filter semantics."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from hive_monitor.errors import StoreError
from tests.helpers import make_reading

FULL_DAY = {"startTime": "00:00:00", "endTime": "23:59:59"}


@pytest.mark.asyncio
async def test_history_round_trip_across_three_dates(client: AsyncClient, add_readings):
    """Test every reading over three dates comes back in ascending order."""
    start = datetime(2024, 1, 1, 0, 30)
    timestamps = [start + timedelta(hours=5 * i) for i in range(14)]  # spans Jan 1-3
    assert {ts.date() for ts in timestamps} == {
        datetime(2024, 1, d).date() for d in (1, 2, 3)
    }

    # Insert out of order; ordering must come from the timestamp
    readings = [make_reading(ts, weight=float(i)) for i, ts in enumerate(timestamps)]
    await add_readings(list(reversed(readings)))

    response = await client.get(
        "/history",
        params={"startDate": "2024-01-01", "endDate": "2024-01-03", **FULL_DAY},
    )
    assert response.status_code == 200

    rows = response.json()
    assert len(rows) == len(timestamps)
    assert [row["timestamp"] for row in rows] == [ts.isoformat() for ts in timestamps]
    assert [row["weight"] for row in rows] == [float(i) for i in range(len(timestamps))]


@pytest.mark.asyncio
async def test_history_single_instant_matches_exact_reading(client: AsyncClient, add_readings):
    """Test a zero-width time window matches a reading exactly on it."""
    await add_readings(
        [
            make_reading(datetime(2024, 1, 1, 5, 59, 59)),
            make_reading(datetime(2024, 1, 1, 6, 0, 0), weight=12345.0),
            make_reading(datetime(2024, 1, 1, 6, 0, 1)),
        ]
    )

    response = await client.get(
        "/history",
        params={
            "startDate": "2024-01-01",
            "endDate": "2024-01-01",
            "startTime": "06:00:00",
            "endTime": "06:00:00",
        },
    )
    rows = response.json()
    assert len(rows) == 1
    assert rows[0]["timestamp"] == "2024-01-01T06:00:00"
    assert rows[0]["weight"] == 12345.0


@pytest.mark.asyncio
async def test_history_midnight_window_without_midnight_reading(client: AsyncClient, add_readings):
    """Test a midnight-only window over data without a midnight reading is empty."""
    await add_readings(
        [
            make_reading(datetime(2024, 1, 1, 1, 0)),
            make_reading(datetime(2024, 1, 1, 12, 0)),
            make_reading(datetime(2024, 1, 2, 23, 59, 59)),
        ]
    )

    response = await client.get(
        "/history",
        params={
            "startDate": "2024-01-01",
            "endDate": "2024-01-02",
            "startTime": "00:00:00",
            "endTime": "00:00:00",
        },
    )
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_history_caps_at_500_earliest(client: AsyncClient, add_readings):
    """Test 600 matching readings are cut to the 500 earliest."""
    start = datetime(2024, 2, 1, 0, 0)
    await add_readings([make_reading(start + timedelta(minutes=i)) for i in range(600)])

    response = await client.get(
        "/history",
        params={"startDate": "2024-02-01", "endDate": "2024-02-01", **FULL_DAY},
    )
    rows = response.json()
    assert len(rows) == 500
    assert rows[0]["timestamp"] == "2024-02-01T00:00:00"
    assert rows[-1]["timestamp"] == (start + timedelta(minutes=499)).isoformat()


@pytest.mark.asyncio
async def test_history_time_of_day_applies_to_every_day(client: AsyncClient, add_readings):
    """Test the time window recurs daily rather than bounding one continuous range."""
    readings = []
    for day in (1, 2, 3):
        for hour in (5, 7, 12, 18, 19):
            readings.append(make_reading(datetime(2024, 3, day, hour, 0)))
    await add_readings(readings)

    response = await client.get(
        "/history",
        params={
            "startDate": "2024-03-01",
            "endDate": "2024-03-03",
            "startTime": "06:00:00",
            "endTime": "18:00:00",
        },
    )
    rows = response.json()
    hours_by_day = [(row["timestamp"][:10], row["timestamp"][11:13]) for row in rows]
    assert hours_by_day == [
        (f"2024-03-0{day}", hour) for day in (1, 2, 3) for hour in ("07", "12", "18")
    ]


@pytest.mark.asyncio
async def test_history_excludes_dates_outside_range(client: AsyncClient, add_readings):
    await add_readings(
        [
            make_reading(datetime(2024, 4, 1, 12, 0)),
            make_reading(datetime(2024, 4, 2, 12, 0)),
            make_reading(datetime(2024, 4, 3, 12, 0)),
        ]
    )
    response = await client.get(
        "/history",
        params={"startDate": "2024-04-02", "endDate": "2024-04-02", **FULL_DAY},
    )
    assert [row["timestamp"] for row in response.json()] == ["2024-04-02T12:00:00"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"startDate": "2024-04-03", "endDate": "2024-04-01", **FULL_DAY},
        {
            "startDate": "2024-04-01",
            "endDate": "2024-04-03",
            "startTime": "18:00:00",
            "endTime": "06:00:00",
        },
    ],
)
async def test_history_inverted_ranges_are_empty(client: AsyncClient, add_readings, params):
    """Test inverted date or time ranges yield an empty list, not an error."""
    await add_readings([make_reading(datetime(2024, 4, 2, h, 0)) for h in (3, 12, 21)])

    response = await client.get("/history", params=params)
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"endDate": "2024-01-01", **FULL_DAY},
        {"startDate": "2024-01-01", **FULL_DAY},
        {"startTime": "06:00:00"},
    ],
)
async def test_history_rejects_missing_dates(client: AsyncClient, params):
    """Test a filter without both dates is rejected before querying the store."""
    with patch("hive_monitor.services.history_service.range_query", AsyncMock()) as range_query:
        response = await client.get("/history", params=params)
    assert response.status_code == 400
    range_query.assert_not_called()


@pytest.mark.asyncio
async def test_history_rejects_malformed_date(client: AsyncClient):
    response = await client.get(
        "/history",
        params={"startDate": "01/01/2024", "endDate": "2024-01-02", **FULL_DAY},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_history_without_filter_uses_default_window(client: AsyncClient, add_readings):
    """Test the default window covers the last seven days of data."""
    await add_readings([make_reading(datetime(2024, 3, day, 12, 0)) for day in range(1, 21)])

    response = await client.get("/history")
    assert response.status_code == 200

    dates = [row["timestamp"][:10] for row in response.json()]
    assert dates == [f"2024-03-{day:02d}" for day in range(13, 21)]


@pytest.mark.asyncio
async def test_history_store_failure_returns_empty_list(client: AsyncClient, add_readings):
    await add_readings([make_reading(datetime(2024, 1, 1, 12, 0))])

    with patch(
        "hive_monitor.services.history_service.range_query",
        AsyncMock(side_effect=StoreError("database is locked")),
    ):
        response = await client.get(
            "/history",
            params={"startDate": "2024-01-01", "endDate": "2024-01-01", **FULL_DAY},
        )
    assert response.status_code == 200
    assert response.json() == []
