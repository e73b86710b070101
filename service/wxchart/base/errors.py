from typing import Iterable


class UnknownMetricError(ValueError):
    """Raised when a metric or category id is not part of the catalog."""


class NoDataError(ValueError):
    """Raised when a request is valid, but no data is available."""


class CsvFormatError(ValueError):
    """Raised when a CSV resource does not have the expected structure."""

    def __init__(
        self,
        message: str,
        *,
        resource: str | None = None,
        missing_columns: Iterable[str] = (),
    ) -> None:
        """Creates a new CsvFormatError instance.

        Args:
            message: the exception message
            resource: the name of the CSV resource that failed to parse.
            missing_columns: columns expected in the CSV data section but not found.
        """
        super().__init__(message)
        self.resource = resource
        self.missing_columns = list(missing_columns)

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.resource:
            parts.append(f"resource={self.resource}")
        if self.missing_columns:
            parts.append(f"missing_columns={self.missing_columns}")
        return f"{base} ({', '.join(parts)})" if parts else base


class DataLoadError(RuntimeError):
    """Raised when the weather data sources could not be loaded.

    Loading is all-or-nothing: a single failing resource aborts the whole load.
    """

    def __init__(self, message: str, *, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource
