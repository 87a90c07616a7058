from .config import settings, get_settings, Settings
from .models import (
    Cell,
    CellType,
    ExportFormat,
    ReportDescriptor,
    StatGroup,
)
from ..exceptions import (
    TapStatsError,
    ReportError,
    RegistryFrozenError,
    ExportError,
    FilterError,
    SourceClosedError,
)

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Cell",
    "CellType",
    "ExportFormat",
    "ReportDescriptor",
    "StatGroup",
    "TapStatsError",
    "ReportError",
    "RegistryFrozenError",
    "ExportError",
    "FilterError",
    "SourceClosedError",
]
