"""Threshold override model."""

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from hive_monitor.database import Base


class ThresholdOverride(Base):
    """Persisted value replacing one of the default alert thresholds."""

    __tablename__ = "threshold_overrides"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[float | None] = mapped_column(Float, nullable=True)
