"""Dashboard client: history charts and live status."""

from hive_monitor.dashboard.api_client import HiveApiClient
from hive_monitor.dashboard.cache import HistoryCache
from hive_monitor.dashboard.charts import (
    ChartPresenter,
    ChartSpec,
    CurrentView,
    PreparedSeries,
    format_label,
    prepare_series,
)
from hive_monitor.dashboard.controller import DashboardController
from hive_monitor.dashboard.poller import LatestReadingPoller

__all__ = [
    "HiveApiClient",
    "HistoryCache",
    "ChartPresenter",
    "ChartSpec",
    "CurrentView",
    "PreparedSeries",
    "format_label",
    "prepare_series",
    "DashboardController",
    "LatestReadingPoller",
]
