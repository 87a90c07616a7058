"""Sample statistics reports computed from packet records with pandas."""

from __future__ import annotations

from typing import List, Optional

import pandas as pd

from ..core.decorators import handle_report_errors, log_performance
from ..core.models import Cell, StatGroup
from ..logging import get_logger
from .base import RowNode, TapReport
from .registry import ReportRegistry, default_registry

logger = get_logger(__name__)


def _length_column(frame: pd.DataFrame) -> Optional[str]:
    for col in ("frame_len", "packet_length"):
        if col in frame.columns:
            return col
    return None


def _byte_total(group: pd.DataFrame, length_col: Optional[str]) -> int:
    if length_col is None:
        return 0
    return int(pd.to_numeric(group[length_col], errors="coerce").fillna(0).sum())


class ProtocolHierarchyReport(TapReport):
    """Packets and bytes per network, transport and application protocol."""

    title = "Protocol Hierarchy Statistics"
    header_labels = ("Protocol", "Packets", "Percent Packets", "Bytes")

    _LEVELS = ("protocol_l3", "protocol", "app_protocol")
    _total = 0

    @handle_report_errors
    @log_performance
    def recompute_rows(self, filter_expression: str) -> None:
        frame = self.source.filtered(filter_expression)
        self.clear_tree()
        self.filter_expression = filter_expression
        if frame.empty:
            return
        levels = [col for col in self._LEVELS if col in frame.columns]
        self._total = len(frame)
        self._add_level(self.tree, frame, levels, _length_column(frame))

    def _add_level(
        self,
        parent: RowNode,
        frame: pd.DataFrame,
        levels: List[str],
        length_col: Optional[str],
    ) -> None:
        if not levels:
            return
        column, rest = levels[0], levels[1:]
        for name, group in frame.groupby(column, sort=True, dropna=True):
            if not str(name):
                continue
            node = parent.add_child(
                {
                    "column": column,
                    "name": str(name),
                    "packets": len(group),
                    "bytes": _byte_total(group, length_col),
                }
            )
            self._add_level(node, group, rest, length_col)

    def row_data(self, row: RowNode) -> List[Cell]:
        item = row.payload
        if not item:
            return []
        percent = item["packets"] * 100.0 / self._total if self._total else 0.0
        return [
            Cell.string(item["name"]),
            Cell.unsigned(item["packets"]),
            Cell.floating(percent),
            Cell.unsigned(item["bytes"]),
        ]

    def filter_expression_for_selection(self) -> str:
        if self.selected is None or not self.selected.payload:
            return ""
        item = self.selected.payload
        return f'{item["column"]} == "{item["name"]}"'


class ConversationReport(TapReport):
    """Traffic between pairs of addresses, independent of direction."""

    title = "IPv4 Conversations"
    header_labels = ("Address A", "Address B", "Packets", "Bytes", "Duration")

    @handle_report_errors
    @log_performance
    def recompute_rows(self, filter_expression: str) -> None:
        frame = self.source.filtered(filter_expression)
        self.clear_tree()
        self.filter_expression = filter_expression
        if frame.empty:
            return
        frame = frame.dropna(subset=["source_ip", "destination_ip"]).copy()
        src = frame["source_ip"].astype(str)
        dst = frame["destination_ip"].astype(str)
        frame["_addr_a"] = src.where(src <= dst, dst)
        frame["_addr_b"] = dst.where(src <= dst, src)
        length_col = _length_column(frame)
        for (addr_a, addr_b), group in frame.groupby(["_addr_a", "_addr_b"], sort=True):
            duration = 0.0
            if "timestamp" in group.columns:
                times = pd.to_numeric(group["timestamp"], errors="coerce").dropna()
                if not times.empty:
                    duration = float(times.max() - times.min())
            self.tree.add_child(
                {
                    "a": addr_a,
                    "b": addr_b,
                    "packets": len(group),
                    "bytes": _byte_total(group, length_col),
                    "duration": duration,
                }
            )

    def row_data(self, row: RowNode) -> List[Cell]:
        item = row.payload
        return [
            Cell.string(item["a"]),
            Cell.string(item["b"]),
            Cell.unsigned(item["packets"]),
            Cell.unsigned(item["bytes"]),
            Cell.floating(item["duration"]),
        ]

    def filter_expression_for_selection(self) -> str:
        if self.selected is None:
            return ""
        a, b = self.selected.payload["a"], self.selected.payload["b"]
        return (
            f'(source_ip == "{a}" and destination_ip == "{b}") or '
            f'(source_ip == "{b}" and destination_ip == "{a}")'
        )


class PortReport(TapReport):
    """Packets per destination port, grouped under their transport protocol."""

    title = "Destination Ports"
    header_labels = ("Protocol", "Port", "Packets")

    _TRANSPORTS = ("TCP", "UDP")

    @handle_report_errors
    @log_performance
    def recompute_rows(self, filter_expression: str) -> None:
        frame = self.source.filtered(filter_expression)
        self.clear_tree()
        self.filter_expression = filter_expression
        if frame.empty:
            return
        proto = frame["protocol"].astype(str).str.upper()
        for transport in self._TRANSPORTS:
            subset = frame[proto == transport]
            if subset.empty:
                continue
            # Structural node: groups the ports, carries no cells.
            parent = self.tree.add_child(None)
            ports = pd.to_numeric(subset["destination_port"], errors="coerce").dropna().astype(int)
            for port, count in ports.value_counts().sort_index().items():
                parent.add_child({"protocol": transport, "port": int(port), "packets": int(count)})

    def row_data(self, row: RowNode) -> List[Cell]:
        item = row.payload
        if item is None:
            return []
        return [
            Cell.string(item["protocol"]),
            Cell.unsigned(item["port"]),
            Cell.unsigned(item["packets"]),
        ]

    def filter_expression_for_selection(self) -> str:
        if self.selected is None or self.selected.payload is None:
            return ""
        item = self.selected.payload
        return f'protocol == "{item["protocol"]}" and destination_port == {item["port"]}'


BUILTIN_REPORTS = (
    ("Protocol Hierarchy", "phs", StatGroup.GENERIC, ProtocolHierarchyReport),
    ("Conversations", "conv,ip", StatGroup.CONVERSATION_LIST, ConversationReport),
    ("Destination Ports", "ports", StatGroup.ENDPOINT_LIST, PortReport),
)


def register_builtin_reports(registry: Optional[ReportRegistry] = None) -> ReportRegistry:
    """Register the sample reports into ``registry`` (default: process-wide)."""
    registry = registry if registry is not None else default_registry
    for title, key, group, report_cls in BUILTIN_REPORTS:
        registry.register_report(title, key, group, report_cls)
    logger.debug("Registered %d built-in reports", len(BUILTIN_REPORTS))
    return registry
