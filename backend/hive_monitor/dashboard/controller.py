"""Filter session for the history charts: decides when to fetch and when only to redraw."""

import logging
from datetime import datetime

from hive_monitor.dashboard.api_client import HiveApiClient
from hive_monitor.dashboard.cache import HistoryCache
from hive_monitor.dashboard.charts import ChartPresenter, ChartView, CurrentView
from hive_monitor.errors import TransportError
from hive_monitor.models.readings import utc_now
from hive_monitor.schemas import HistoryQuery
from hive_monitor.services.history_service import default_history_query, parse_history_query

logger = logging.getLogger(__name__)


class DashboardController:
    """Owns the history cache and the active filter.

    Fetches happen only on initial load, filter submission and filter reset.
    View switches redraw from the cache.
    """

    def __init__(
        self,
        client: HiveApiClient,
        presenter: ChartPresenter,
        clock=utc_now,
    ):
        self.client = client
        self.presenter = presenter
        self.clock = clock
        self.view: ChartView = "overview"
        self.query: HistoryQuery | None = None
        self.data_limits: tuple[datetime, datetime] | None = None
        self._fetching = False

    @property
    def cache(self) -> HistoryCache:
        return self.presenter.cache

    @property
    def is_fetching(self) -> bool:
        return self._fetching

    async def _refresh_limits(self) -> None:
        try:
            self.data_limits = await self.client.fetch_data_limits()
        except TransportError as e:
            logger.error(f"Could not load data limits: {e}")
            self.data_limits = None

    def _default_query(self) -> HistoryQuery:
        # The filter form picks times from an hourly grid
        return default_history_query(self.data_limits, self.clock(), hourly_grid=True)

    async def _fetch_and_draw(self, query: HistoryQuery) -> bool:
        """Fetch, replace the cache in one step, redraw. False if skipped."""
        if self._fetching:
            logger.info("History fetch already in flight, ignoring request")
            return False

        self._fetching = True
        self.query = query
        try:
            readings = await self.client.fetch_history(query)
        except TransportError as e:
            logger.error(f"Error loading history: {e}")
            # Stale data must not stay on screen after a failed fetch
            self.cache.clear()
        else:
            self.cache.replace(readings)
        finally:
            self._fetching = False

        self.presenter.select_view(self.view)
        return True

    async def initial_load(self) -> bool:
        await self._refresh_limits()
        return await self._fetch_and_draw(self._default_query())

    async def submit_filter(
        self,
        start_date: str | None,
        end_date: str | None,
        start_time: str | None = None,
        end_time: str | None = None,
    ) -> bool:
        """Apply a user filter. Raises InvalidQuery before any request if a date is missing."""
        query = parse_history_query(start_date, end_date, start_time, end_time)
        return await self._fetch_and_draw(query)

    async def reset_filter(self) -> bool:
        await self._refresh_limits()
        return await self._fetch_and_draw(self._default_query())

    def select_view(self, view: ChartView) -> CurrentView:
        # An unknown view raises here and leaves the active view untouched
        current = self.presenter.select_view(view)
        self.view = view
        return current
