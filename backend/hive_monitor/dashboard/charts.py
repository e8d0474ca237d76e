"""Chart presentation: derives series from the history cache and drives one view at a time."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Protocol

from hive_monitor.dashboard.cache import HistoryCache
from hive_monitor.schemas import ReadingOut

logger = logging.getLogger(__name__)

Metric = Literal["weight", "temperature", "humidity", "audio"]
ChartView = Literal["overview", "weight", "temperature", "humidity", "audio"]

NO_DATA_MESSAGE = "No historical data available in the selected range."


@dataclass(frozen=True)
class MetricConfig:
    """How one metric is plotted."""

    label: str
    color: str
    y_min: float | None = None
    y_max: float | None = None


METRIC_REGISTRY: dict[Metric, MetricConfig] = {
    "weight": MetricConfig(label="Weight (g)", color="#8b4513"),
    "temperature": MetricConfig(label="Temperature (°C)", color="#dc3545"),
    "humidity": MetricConfig(label="Humidity (%)", color="#17a2b8", y_min=0, y_max=100),
    "audio": MetricConfig(label="Noise (0-4095)", color="#ffc107"),
}

# Overview renders every metric in this order
METRICS: tuple[Metric, ...] = ("weight", "temperature", "humidity", "audio")

VIEW_TITLES: dict[ChartView, str] = {
    "overview": "General history",
    "weight": "Weight history (g)",
    "temperature": "Temperature history (°C)",
    "humidity": "Humidity history (%)",
    "audio": "Noise history (0-4095)",
}


@dataclass(frozen=True)
class PreparedSeries:
    """X-axis labels plus one value list per metric, all the same length."""

    labels: tuple[str, ...]
    values: dict[Metric, tuple[float | None, ...]]


@dataclass(frozen=True)
class ChartSpec:
    """Everything the renderer needs to draw one line chart."""

    metric: Metric
    label: str
    color: str
    labels: tuple[str, ...]
    values: tuple[float | None, ...]
    y_min: float | None = None
    y_max: float | None = None


class ChartHandle(Protocol):
    def destroy(self) -> None: ...


class ChartRenderer(Protocol):
    """The charting surface. Implementations own the pixels, not the data."""

    def draw_line_chart(self, spec: ChartSpec) -> ChartHandle: ...

    def show_placeholder(self, message: str) -> None: ...

    def set_title(self, title: str) -> None: ...

    def clear(self) -> None: ...


def format_label(timestamp: datetime) -> str:
    """Day/month hour:minute, e.g. "05/03 14:30". Year and seconds are left out."""
    return timestamp.strftime("%d/%m %H:%M")


def prepare_series(readings: Sequence[ReadingOut]) -> PreparedSeries:
    """Split readings into aligned per-metric series.

    A missing metric stays in place as None so that all series share the same
    x positions.
    """
    return PreparedSeries(
        labels=tuple(format_label(r.timestamp) for r in readings),
        values={metric: tuple(getattr(r, metric) for r in readings) for metric in METRICS},
    )


def metrics_for_view(view: ChartView) -> tuple[Metric, ...]:
    if view == "overview":
        return METRICS
    return (view,)


@dataclass(frozen=True)
class CurrentView:
    """The one view on screen and the chart handles it owns."""

    view: ChartView
    handles: tuple[ChartHandle, ...] = ()
    series: PreparedSeries | None = None
    placeholder: bool = False


@dataclass
class ChartPresenter:
    """Renders the cached history as exactly one view at a time.

    Selecting a view never fetches; it only re-derives series from the cache.
    """

    cache: HistoryCache
    renderer: ChartRenderer
    current: CurrentView | None = field(default=None, init=False)

    def teardown(self) -> None:
        """Destroy every chart of the current view and hide all containers."""
        if self.current is not None:
            for handle in self.current.handles:
                handle.destroy()
        self.current = None
        self.renderer.clear()

    def select_view(self, view: ChartView) -> CurrentView:
        if view not in VIEW_TITLES:
            raise ValueError(f"Unknown chart view: {view}")

        self.teardown()
        self.renderer.set_title(VIEW_TITLES[view])

        if self.cache.is_empty:
            self.renderer.show_placeholder(NO_DATA_MESSAGE)
            self.current = CurrentView(view=view, placeholder=True)
            return self.current

        series = prepare_series(self.cache.readings)
        handles: list[ChartHandle] = []
        try:
            for metric in metrics_for_view(view):
                config = METRIC_REGISTRY[metric]
                handles.append(
                    self.renderer.draw_line_chart(
                        ChartSpec(
                            metric=metric,
                            label=config.label,
                            color=config.color,
                            labels=series.labels,
                            values=series.values[metric],
                            y_min=config.y_min,
                            y_max=config.y_max,
                        )
                    )
                )
        except Exception:
            # All or nothing: drop the charts drawn so far
            for handle in handles:
                handle.destroy()
            self.renderer.clear()
            raise

        logger.debug(f"Rendered {view} view with {len(series.labels)} points")
        self.current = CurrentView(view=view, handles=tuple(handles), series=series)
        return self.current
