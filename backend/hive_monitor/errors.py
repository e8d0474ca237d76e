"""Error taxonomy shared by the server and the dashboard client."""


class HiveMonitorError(Exception):
    """Base class for all Hive Monitor errors."""


class ValidationError(HiveMonitorError):
    """Malformed or incomplete ingestion payload or history filter."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class InvalidQuery(ValidationError):
    """History filter that cannot be turned into a bounded store query."""


class TransportError(HiveMonitorError):
    """The API could not be reached or answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreError(HiveMonitorError):
    """A query against a reachable store failed."""
