"""Pydantic schemas for device readings."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReadingIn(BaseModel):
    """Payload posted by the hive sensor node.

    Weight and temperature are declared optional here so that their absence is
    reported as an ingestion validation error rather than a schema error.
    """

    weight: float | None = Field(None, description="Hive weight in grams")
    temperature: float | None = Field(None, description="Brood temperature in °C")
    humidity: float | None = Field(None, description="Relative humidity in percent")
    audio: int | None = Field(None, description="Raw acoustic level (sensor units)")
    timestamp: datetime | None = Field(None, description="Assigned by the server when absent")


class ReadingOut(BaseModel):
    """A persisted reading as returned by /latest and /history."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    weight: float | None = None
    temperature: float | None = None
    humidity: float | None = None
    audio: int | None = None
    timestamp: datetime


class DataLimits(BaseModel):
    """Overall timestamp extent of the store."""

    min_date: datetime | None = None
    max_date: datetime | None = None


class IngestResponse(BaseModel):
    status: str = "success"
