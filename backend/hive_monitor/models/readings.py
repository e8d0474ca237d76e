"""Hive reading model."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from hive_monitor.database import Base


def utc_now() -> datetime:
    """Naive UTC timestamp, as stored by SQLite."""
    return datetime.now(UTC).replace(tzinfo=None)


class Reading(Base):
    """One timestamped sample reported by the hive sensor node.

    Rows are append-only: the system inserts them and never updates or deletes.
    """

    __tablename__ = "readings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utc_now)
    weight: Mapped[float] = mapped_column(Float, nullable=False)  # grams
    temperature: Mapped[float] = mapped_column(Float, nullable=False)  # °C
    humidity: Mapped[float | None] = mapped_column(Float, nullable=True)  # percent
    audio: Mapped[int | None] = mapped_column(Integer, nullable=True)  # raw ADC units

    __table_args__ = (Index("ix_readings_timestamp", "timestamp"),)
