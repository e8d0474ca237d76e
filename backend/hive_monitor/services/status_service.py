"""Status service: classifies the latest reading against the alert thresholds."""

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hive_monitor.errors import StoreError
from hive_monitor.models import ThresholdOverride
from hive_monitor.schemas import (
    DEFAULT_THRESHOLDS,
    Alert,
    AlertState,
    Severity,
    ThresholdSet,
    max_severity,
)

__all__ = ["evaluate", "get_threshold_set"]

logger = logging.getLogger(__name__)


def _above(value: float, bound: float | None) -> bool:
    return bound is not None and value > bound


def _below(value: float, bound: float | None) -> bool:
    return bound is not None and value < bound


def _check_temperature(reading: Any, t: ThresholdSet) -> Alert | None:
    temp = getattr(reading, "temperature", None)
    if temp is None:
        return None
    if _above(temp, t.temp_high_critical) or _below(temp, t.temp_low_critical):
        return Alert(
            severity="danger",
            message=f"Critical temperature: {temp:.1f} °C. Needs urgent attention.",
        )
    if _above(temp, t.temp_high_warn) or _below(temp, t.temp_low_warn):
        return Alert(
            severity="warning",
            message=f"Temperature out of range: {temp:.1f} °C. Check ventilation or insulation.",
        )
    return None


def _check_humidity(reading: Any, t: ThresholdSet) -> Alert | None:
    hum = getattr(reading, "humidity", None)
    if hum is None:
        return None
    if _above(hum, t.hum_high_critical):
        return Alert(
            severity="danger",
            message=f"Critical humidity: {hum:.0f} %. Risk of fungal disease.",
        )
    if _below(hum, t.hum_low_critical):
        return Alert(
            severity="danger",
            message=f"Critically low humidity: {hum:.0f} %. Brood may dry out.",
        )
    if _above(hum, t.hum_high_warn):
        return Alert(severity="warning", message=f"High humidity: {hum:.0f} %. Improve ventilation.")
    if _below(hum, t.hum_low_warn):
        return Alert(severity="warning", message=f"Low humidity: {hum:.0f} %.")
    return None


def _check_audio(reading: Any, t: ThresholdSet) -> Alert | None:
    audio = getattr(reading, "audio", None)
    if audio is None:
        return None
    if _above(audio, t.audio_critical):
        return Alert(
            severity="danger",
            message=f"Extreme noise: level {audio}. Possible predator attack or swarming.",
        )
    if _above(audio, t.audio_warn):
        return Alert(
            severity="warning",
            message=f"High noise: level {audio}. Unusual activity in the hive.",
        )
    return None


def _check_weight(reading: Any, t: ThresholdSet) -> Alert | None:
    # A low weight points at the load cell, not the colony: always a warning
    weight = getattr(reading, "weight", None)
    if weight is None:
        return Alert(severity="warning", message="Weight not detected. Check the weight sensor.")
    if _below(weight, t.weight_min):
        return Alert(
            severity="warning",
            message=f"Low weight: {weight:.2f} g. Check the weight sensor.",
        )
    return None


# Evaluation order is part of the contract: alerts are listed in this order.
CHECKS: tuple[Callable[[Any, ThresholdSet], Alert | None], ...] = (
    _check_temperature,
    _check_humidity,
    _check_audio,
    _check_weight,
)


def _summarize(severity: Severity, alerts: list[Alert]) -> str:
    dangers = sum(1 for a in alerts if a.severity == "danger")
    warnings = len(alerts) - dangers
    if severity == "danger":
        return f"CRITICAL ALERT: {dangers} critical and {warnings} warning issue(s) detected."
    if severity == "warning":
        return f"WARNING: {warnings} parameter(s) outside the optimal range."
    return "Hive OK: all parameters within the optimal range."


def evaluate(
    reading: Any | None,
    transport_error: BaseException | None = None,
    thresholds: ThresholdSet = DEFAULT_THRESHOLDS,
) -> AlertState:
    """Classify a reading into an AlertState.

    Pure function. Without a reading, or with a transport error, the result is
    a single connectivity alert at danger severity and no threshold check runs.
    Otherwise every check runs in a fixed order and the overall severity is the
    maximum of the triggered ones.
    """
    if transport_error is not None or reading is None:
        if transport_error is not None:
            detail = str(transport_error) or type(transport_error).__name__
            summary = "ERROR: unable to get data from the server."
        else:
            detail = "no data"
            summary = "No data: the hive has not reported any reading yet."
        return AlertState(
            severity="danger",
            alerts=(Alert(severity="danger", message=f"Connection or API failure ({detail})."),),
            summary=summary,
        )

    severity: Severity = "ok"
    alerts: list[Alert] = []
    for check in CHECKS:
        alert = check(reading, thresholds)
        if alert is None:
            continue
        alerts.append(alert)
        severity = max_severity(severity, alert.severity)

    return AlertState(severity=severity, alerts=tuple(alerts), summary=_summarize(severity, alerts))


async def get_threshold_set(session: AsyncSession) -> ThresholdSet:
    """Load persisted overrides on top of the process-wide defaults."""
    try:
        result = await session.execute(select(ThresholdOverride))
    except SQLAlchemyError as e:
        raise StoreError(f"Failed to load threshold overrides: {e}") from e

    known = set(ThresholdSet.model_fields)
    overrides: dict[str, float | None] = {}
    for row in result.scalars():
        if row.name not in known:
            logger.warning(f"Ignoring unknown threshold override: {row.name}")
            continue
        overrides[row.name] = row.value

    if not overrides:
        return DEFAULT_THRESHOLDS
    return DEFAULT_THRESHOLDS.model_copy(update=overrides)
