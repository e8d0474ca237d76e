"""History service layer: turns dashboard filters into bounded store queries."""

import logging
from datetime import date, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from hive_monitor.config import DEFAULT_HISTORY_DAYS, HISTORY_LIMIT
from hive_monitor.errors import InvalidQuery, StoreError
from hive_monitor.models import Reading
from hive_monitor.models.readings import utc_now
from hive_monitor.schemas import HistoryQuery
from hive_monitor.services.reading_store import get_extent, range_query

__all__ = ["parse_history_query", "default_history_query", "get_history"]

logger = logging.getLogger(__name__)

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


def _parse_date(value: str, name: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidQuery(f"{name} must be YYYY-MM-DD, got {value!r}", fields=[name]) from e


def _parse_time(value: str | None, name: str, default: time) -> time:
    if not value:
        return default
    try:
        # Accepts HH:mm as well as HH:mm:ss
        parsed = time.fromisoformat(value)
    except ValueError as e:
        raise InvalidQuery(f"{name} must be HH:mm:ss, got {value!r}", fields=[name]) from e
    # Stored timestamps are naive UTC, an offset cannot be honoured
    if parsed.tzinfo is not None:
        raise InvalidQuery(f"{name} must not carry a UTC offset, got {value!r}", fields=[name])
    return parsed.replace(microsecond=0)


def parse_history_query(
    start_date: str | None,
    end_date: str | None,
    start_time: str | None = None,
    end_time: str | None = None,
) -> HistoryQuery:
    """Build a HistoryQuery from raw filter values.

    Both dates are mandatory; an unbounded query is never issued. Missing
    times default to the whole day.
    """
    missing = [
        name
        for name, value in (("startDate", start_date), ("endDate", end_date))
        if not value
    ]
    if missing:
        raise InvalidQuery(
            "Both a start date and an end date are required",
            fields=missing,
        )

    return HistoryQuery(
        start_date=_parse_date(start_date, "startDate"),
        end_date=_parse_date(end_date, "endDate"),
        start_time=_parse_time(start_time, "startTime", DAY_START),
        end_time=_parse_time(end_time, "endTime", DAY_END),
    )


def default_history_query(
    extent: tuple[datetime, datetime] | None,
    now: datetime,
    hourly_grid: bool = False,
) -> HistoryQuery:
    """
    Derive the window shown before the user picks a filter.

    The window ends on the date of the newest reading (or today for an empty
    store) and reaches back DEFAULT_HISTORY_DAYS days, never earlier than the
    oldest reading. If it ends today, the time-of-day window stops at the
    current time; with `hourly_grid` that time is truncated to the hour so it
    matches an hour picker.
    """
    latest_known = extent[1] if extent else now
    end_date = latest_known.date()

    start_date = end_date - timedelta(days=DEFAULT_HISTORY_DAYS)
    if extent and start_date < extent[0].date():
        start_date = extent[0].date()

    if end_date == now.date():
        if hourly_grid:
            end_time = time(now.hour, 0, 0)
        else:
            end_time = time(now.hour, now.minute, now.second)
    else:
        end_time = DAY_END

    return HistoryQuery(
        start_date=start_date,
        end_date=end_date,
        start_time=DAY_START,
        end_time=end_time,
    )


async def get_history(
    session: AsyncSession,
    query: HistoryQuery | None = None,
    now: datetime | None = None,
) -> list[Reading]:
    """
    Fetch at most HISTORY_LIMIT readings matching the filter, oldest first.

    A missing filter substitutes the default window. Inverted date or time
    ranges simply match nothing. Store failures are logged and reported as an
    empty result so the dashboard stays renderable.
    """
    try:
        if query is None:
            extent = await get_extent(session)
            query = default_history_query(extent, now or utc_now())
            logger.info(
                f"No filter given, using default window {query.start_date} -> {query.end_date}"
            )

        return await range_query(
            session,
            start_date=query.start_date,
            end_date=query.end_date,
            start_time=query.start_time,
            end_time=query.end_time,
            limit=HISTORY_LIMIT,
        )
    except StoreError:
        logger.exception("History query failed, returning empty result")
        return []
