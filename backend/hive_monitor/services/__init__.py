"""Service layer modules."""

from hive_monitor.services.history_service import (
    default_history_query,
    get_history,
    parse_history_query,
)
from hive_monitor.services.reading_store import (
    get_extent,
    get_latest_reading,
    insert_reading,
    range_query,
)
from hive_monitor.services.status_service import evaluate, get_threshold_set

__all__ = [
    "insert_reading",
    "get_latest_reading",
    "range_query",
    "get_extent",
    "parse_history_query",
    "default_history_query",
    "get_history",
    "evaluate",
    "get_threshold_set",
]
