"""Pydantic schemas for thresholds and derived alert state."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

Severity = Literal["ok", "warning", "danger"]

SEVERITY_RANK: dict[str, int] = {"ok": 0, "warning": 1, "danger": 2}


def max_severity(current: Severity, candidate: Severity) -> Severity:
    """Return the more severe of two severities."""
    if SEVERITY_RANK[candidate] > SEVERITY_RANK[current]:
        return candidate
    return current


class ThresholdSet(BaseModel):
    """Named bounds used to classify a reading.

    Defaults suit a healthy brood nest. A bound set to None disables its check.
    """

    model_config = ConfigDict(frozen=True)

    temp_low_critical: float | None = 30.0
    temp_low_warn: float | None = 33.0
    temp_high_warn: float | None = 36.0
    temp_high_critical: float | None = 38.0
    hum_high_warn: float | None = 75.0
    hum_high_critical: float | None = 85.0
    hum_low_warn: float | None = None
    hum_low_critical: float | None = None
    audio_warn: float | None = 2000.0
    audio_critical: float | None = 3000.0
    weight_min: float | None = 15000.0


DEFAULT_THRESHOLDS = ThresholdSet()


class Alert(BaseModel):
    """A single triggered check."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str


class AlertState(BaseModel):
    """Outcome of one status evaluation. Never persisted."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    alerts: tuple[Alert, ...] = ()
    summary: str

    @property
    def warning_count(self) -> int:
        return sum(1 for a in self.alerts if a.severity == "warning")

    @property
    def danger_count(self) -> int:
        return sum(1 for a in self.alerts if a.severity == "danger")
