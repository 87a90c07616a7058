# src/tap_stats/__init__.py
from .core.models import Cell, CellType, ExportFormat, ReportDescriptor, StatGroup
from .datasource import CaptureSource
from .host import HostContext
from .reports import (
    RowNode,
    TapReport,
    ReportRegistry,
    default_registry,
    stat_report,
    register_builtin_reports,
)
from .export import ExportController, serialize_table, ensure_extension, format_for_selection
from .controllers import RecomputeController


__all__ = [
    "Cell",
    "CellType",
    "ExportFormat",
    "ReportDescriptor",
    "StatGroup",
    "CaptureSource",
    "HostContext",
    "RowNode",
    "TapReport",
    "ReportRegistry",
    "default_registry",
    "stat_report",
    "register_builtin_reports",
    "ExportController",
    "serialize_table",
    "ensure_extension",
    "format_for_selection",
    "RecomputeController",
]
