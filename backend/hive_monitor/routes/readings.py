"""Reading API routes: device ingestion and dashboard read paths."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from hive_monitor.database import get_db
from hive_monitor.errors import InvalidQuery, StoreError, ValidationError
from hive_monitor.schemas import DataLimits, IngestResponse, ReadingIn, ReadingOut
from hive_monitor.services import (
    get_extent,
    get_history,
    get_latest_reading,
    get_threshold_set,
    insert_reading,
    parse_history_query,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["readings"])


@router.post("/data", response_model=IngestResponse)
async def ingest_reading(
    payload: ReadingIn,
    session: AsyncSession = Depends(get_db),
) -> IngestResponse | JSONResponse:
    """Store a reading posted by the sensor node."""
    try:
        reading = await insert_reading(session, payload)
    except ValidationError as e:
        logger.warning(f"Rejected device payload: {e.message}")
        return JSONResponse(
            status_code=400,
            content={"status": "error", "message": e.message},
        )
    except StoreError as e:
        logger.exception("Failed to store reading")
        raise HTTPException(status_code=500, detail="Failed to store reading") from e

    logger.info(f"Stored reading {reading.id} at {reading.timestamp.isoformat()}")
    return IngestResponse()


@router.get("/latest")
async def latest_reading(session: AsyncSession = Depends(get_db)) -> dict[str, Any]:
    """Get the most recent reading, or an empty object when there is none."""
    try:
        reading = await get_latest_reading(session)
    except StoreError:
        logger.exception("Failed to fetch latest reading")
        return {}

    if reading is None:
        return {}
    return ReadingOut.model_validate(reading).model_dump(mode="json")


@router.get("/history", response_model=list[ReadingOut])
async def reading_history(
    start_date: str | None = Query(None, alias="startDate", description="AAAA-MM-DD"),
    end_date: str | None = Query(None, alias="endDate", description="AAAA-MM-DD"),
    start_time: str | None = Query(None, alias="startTime", description="HH:mm:ss"),
    end_time: str | None = Query(None, alias="endTime", description="HH:mm:ss"),
    session: AsyncSession = Depends(get_db),
) -> list[ReadingOut]:
    """Get readings within a date range and a daily time-of-day window.

    Without any filter the default window (last days of data) is used.
    """
    query = None
    if any((start_date, end_date, start_time, end_time)):
        try:
            query = parse_history_query(start_date, end_date, start_time, end_time)
        except InvalidQuery as e:
            logger.warning(f"Rejected history filter: {e.message}")
            raise HTTPException(status_code=400, detail=e.message) from e

    readings = await get_history(session, query)
    return [ReadingOut.model_validate(r) for r in readings]


@router.get("/data-limits", response_model=DataLimits)
async def data_limits(session: AsyncSession = Depends(get_db)) -> DataLimits:
    """Get the oldest and newest reading timestamps."""
    try:
        extent = await get_extent(session)
    except StoreError:
        logger.exception("Failed to fetch data limits")
        return DataLimits()

    if extent is None:
        return DataLimits()
    return DataLimits(min_date=extent[0], max_date=extent[1])


@router.get("/thresholds")
async def thresholds(session: AsyncSession = Depends(get_db)) -> dict[str, float | None]:
    """Get the alert thresholds currently in effect."""
    try:
        threshold_set = await get_threshold_set(session)
    except StoreError:
        logger.exception("Failed to load thresholds")
        return {}
    return threshold_set.model_dump()
