"""Pydantic schemas for API request/response models."""

from hive_monitor.schemas.history import HistoryQuery
from hive_monitor.schemas.readings import DataLimits, IngestResponse, ReadingIn, ReadingOut
from hive_monitor.schemas.status import (
    DEFAULT_THRESHOLDS,
    SEVERITY_RANK,
    Alert,
    AlertState,
    Severity,
    ThresholdSet,
    max_severity,
)

__all__ = [
    # Reading schemas
    "ReadingIn",
    "ReadingOut",
    "DataLimits",
    "IngestResponse",
    # History schemas
    "HistoryQuery",
    # Status schemas
    "Severity",
    "SEVERITY_RANK",
    "max_severity",
    "Alert",
    "AlertState",
    "ThresholdSet",
    "DEFAULT_THRESHOLDS",
]
