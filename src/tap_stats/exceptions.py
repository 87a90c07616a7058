"""Custom exceptions for the :mod:`tap_stats` package."""


class TapStatsError(Exception):
    """Base class for all custom ``tap_stats`` exceptions.

    Parameters
    ----------
    message:
        Short description of the failure.
    context:
        Optional additional information about where/why the error occurred.
    suggestion:
        Optional hint that may help recover from the error.
    """

    def __init__(
        self,
        message: str = "",
        *,
        context: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.context = context
        self.suggestion = suggestion


class ReportError(TapStatsError):
    """Raised when a report fails to compute its rows."""


class RegistryFrozenError(TapStatsError):
    """Raised when a report is registered after startup has finished."""


class ExportError(TapStatsError):
    """Raised when a serialized report cannot be written to disk."""


class FilterError(TapStatsError):
    """Raised when a display filter expression cannot be applied."""


class SourceClosedError(TapStatsError):
    """Raised when data is requested from a closed capture source."""
