"""Single-owner cache for the last fetched history result."""

from collections.abc import Iterable

from hive_monitor.schemas import ReadingOut


class HistoryCache:
    """Holds exactly one ordered sequence of readings.

    A fetch result replaces the previous contents wholesale; nothing is ever
    merged or appended. The controller is the only writer.
    """

    def __init__(self) -> None:
        self._readings: tuple[ReadingOut, ...] = ()
        self._generation = 0

    @property
    def readings(self) -> tuple[ReadingOut, ...]:
        return self._readings

    @property
    def generation(self) -> int:
        """Incremented on every replace or clear."""
        return self._generation

    @property
    def is_empty(self) -> bool:
        return not self._readings

    def replace(self, readings: Iterable[ReadingOut]) -> None:
        self._readings = tuple(readings)
        self._generation += 1

    def clear(self) -> None:
        self.replace(())

    def __len__(self) -> int:
        return len(self._readings)
