"""History filter schema."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict


class HistoryQuery(BaseModel):
    """Calendar-date range plus a recurring time-of-day window.

    The two ranges are independent predicates: a reading matches when its date
    is within [start_date, end_date] and its time of day is within
    [start_time, end_time]. Both ranges are inclusive.
    """

    model_config = ConfigDict(frozen=True)

    start_date: date
    end_date: date
    start_time: time = time(0, 0, 0)
    end_time: time = time(23, 59, 59)

    def as_params(self) -> dict[str, str]:
        """Query-string parameters understood by GET /history."""
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "startTime": self.start_time.strftime("%H:%M:%S"),
            "endTime": self.end_time.strftime("%H:%M:%S"),
        }
