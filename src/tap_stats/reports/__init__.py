from .base import RowNode, TapReport
from .registry import ReportRegistry, default_registry, stat_report
from .loader import load_registry_config
from .builtin import (
    ConversationReport,
    PortReport,
    ProtocolHierarchyReport,
    register_builtin_reports,
)

__all__ = [
    "RowNode",
    "TapReport",
    "ReportRegistry",
    "default_registry",
    "stat_report",
    "ConversationReport",
    "PortReport",
    "ProtocolHierarchyReport",
    "register_builtin_reports",
    "load_registry_config",
]
