"""HTTP client for the dashboard's calls to the Hive Monitor API."""

import logging
from datetime import datetime
from typing import Any

import httpx
import pydantic

from hive_monitor.errors import TransportError
from hive_monitor.schemas import DataLimits, HistoryQuery, ReadingOut, ThresholdSet

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

_READING_LIST = pydantic.TypeAdapter(list[ReadingOut])


class HiveApiClient:
    """Thin async wrapper over the read endpoints used by the dashboard.

    Any network failure, non-2xx answer or malformed body is raised as TransportError, so
    callers only ever deal with one failure type.
    """

    def __init__(self, base_url: str = "", client: httpx.AsyncClient | None = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=DEFAULT_TIMEOUT)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HiveApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get_json(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code} from {path}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {path}") from e

    async def fetch_latest(self) -> ReadingOut | None:
        """Latest reading, or None when the store has no rows."""
        data = await self._get_json("/latest")
        if not data:
            return None
        try:
            return ReadingOut.model_validate(data)
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed reading from /latest: {e}") from e

    async def fetch_history(self, query: HistoryQuery) -> list[ReadingOut]:
        logger.info(f"Requesting history {query.as_params()}")
        data = await self._get_json("/history", params=query.as_params())
        try:
            return _READING_LIST.validate_python(data)
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed history from /history: {e}") from e

    async def fetch_data_limits(self) -> tuple[datetime, datetime] | None:
        """(oldest, newest) reading timestamps, or None for an empty store."""
        data = await self._get_json("/data-limits")
        try:
            limits = DataLimits.model_validate(data)
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed data limits from /data-limits: {e}") from e
        if limits.min_date is None or limits.max_date is None:
            return None
        return limits.min_date, limits.max_date

    async def fetch_thresholds(self) -> ThresholdSet:
        data = await self._get_json("/thresholds")
        try:
            return ThresholdSet.model_validate(data or {})
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed thresholds from /thresholds: {e}") from e
