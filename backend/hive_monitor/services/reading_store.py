"""Reading store: the only component that talks to the database about readings."""

import logging
from datetime import UTC, date, datetime, time

from sqlalchemy import and_, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hive_monitor.errors import StoreError, ValidationError
from hive_monitor.models import Reading
from hive_monitor.models.readings import utc_now
from hive_monitor.schemas import ReadingIn

__all__ = ["insert_reading", "get_latest_reading", "range_query", "get_extent"]

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("weight", "temperature")


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def validate_payload(payload: ReadingIn) -> None:
    """Reject a device payload that lacks weight or temperature."""
    missing = [name for name in REQUIRED_FIELDS if getattr(payload, name) is None]
    if missing:
        raise ValidationError(
            f"Missing required data: {', '.join(missing)}",
            fields=missing,
        )


async def insert_reading(session: AsyncSession, payload: ReadingIn) -> Reading:
    """Validate and persist one reading, assigning the timestamp when absent."""
    validate_payload(payload)

    reading = Reading(
        timestamp=_to_naive_utc(payload.timestamp) if payload.timestamp else utc_now(),
        weight=payload.weight,
        temperature=payload.temperature,
        humidity=payload.humidity,
        audio=payload.audio,
    )

    try:
        session.add(reading)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise StoreError(f"Failed to insert reading: {e}") from e

    return reading


async def get_latest_reading(session: AsyncSession) -> Reading | None:
    """Most recent reading by timestamp, insertion order breaking ties."""
    try:
        result = await session.execute(
            select(Reading).order_by(Reading.timestamp.desc(), Reading.id.desc()).limit(1)
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to fetch latest reading: {e}") from e
    return result.scalar_one_or_none()


async def range_query(
    session: AsyncSession,
    start_date: date,
    end_date: date,
    start_time: time,
    end_time: time,
    limit: int,
) -> list[Reading]:
    """
    Fetch readings matching a date range and, independently, a time-of-day window.

    Both ranges are inclusive. Rows come back in ascending timestamp order and
    at most `limit` of them, so the earliest matches win.
    """
    reading_date = func.date(Reading.timestamp)
    reading_time = func.time(Reading.timestamp)

    query = (
        select(Reading)
        .where(
            and_(
                reading_date >= start_date.isoformat(),
                reading_date <= end_date.isoformat(),
                reading_time >= start_time.strftime("%H:%M:%S"),
                reading_time <= end_time.strftime("%H:%M:%S"),
            )
        )
        .order_by(Reading.timestamp, Reading.id)
        .limit(limit)
    )

    try:
        result = await session.execute(query)
    except SQLAlchemyError as e:
        raise StoreError(f"History query failed: {e}") from e
    return list(result.scalars())


async def get_extent(session: AsyncSession) -> tuple[datetime, datetime] | None:
    """Return (min timestamp, max timestamp), or None for an empty store."""
    try:
        result = await session.execute(
            select(func.min(Reading.timestamp), func.max(Reading.timestamp))
        )
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to compute data limits: {e}") from e

    min_ts, max_ts = result.one()
    if min_ts is None or max_ts is None:
        return None
    return min_ts, max_ts
