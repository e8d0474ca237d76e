"""Test data builders."""

from datetime import datetime

from hive_monitor.models import Reading


def make_reading(timestamp: datetime, **values) -> Reading:
    """Reading with healthy defaults for any value not given."""
    fields = {"weight": 30000.0, "temperature": 34.5, "humidity": 60.0, "audio": 900}
    fields.update(values)
    return Reading(timestamp=timestamp, **fields)
