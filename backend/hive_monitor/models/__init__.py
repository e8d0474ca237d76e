"""SQLAlchemy models."""

from hive_monitor.models.readings import Reading
from hive_monitor.models.threshold import ThresholdOverride

__all__ = [
    "Reading",
    "ThresholdOverride",
]
