"""Base class every statistics report implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Optional, Sequence, TYPE_CHECKING

from ..core.models import Cell, ExportFormat
from ..export.serializer import serialize_table

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from ..datasource import CaptureSource
    from ..host import HostContext


class RowNode:
    """A node of a report's result tree.

    The root node is structural; reports hang their rows below it. What a
    node carries in ``payload`` is up to the report, which turns it into
    cells in :meth:`TapReport.row_data`.
    """

    def __init__(
        self,
        parent: Optional["RowNode"] = None,
        payload: Any = None,
        *,
        hidden: bool = False,
    ) -> None:
        self.parent = parent
        self.payload = payload
        self.hidden = hidden
        self.children: List[RowNode] = []
        if parent is not None:
            parent.children.append(self)

    def add_child(self, payload: Any = None, *, hidden: bool = False) -> "RowNode":
        return RowNode(self, payload, hidden=hidden)

    @property
    def depth(self) -> int:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def walk_visible(self) -> Iterator["RowNode"]:
        """Yield descendants depth-first, skipping hidden subtrees."""
        for child in self.children:
            if child.hidden:
                continue
            yield child
            yield from child.walk_visible()

    def __len__(self) -> int:
        return len(self.children)

    def __repr__(self) -> str:
        return f"RowNode(payload={self.payload!r}, children={len(self.children)}, hidden={self.hidden})"


class TapReport(ABC):
    """Abstract statistics report.

    Subclasses must implement :meth:`recompute_rows`. Overriding
    :meth:`row_data` makes the report exportable and copyable, and
    overriding :meth:`filter_expression_for_selection` enables the host's
    "apply as filter" actions for the selected row.
    """

    title: str = ""
    header_labels: Sequence[str] = ()

    def __init__(
        self,
        host: "HostContext",
        key: str,
        filter_expression: str,
        source: "CaptureSource",
    ) -> None:
        self.host = host
        self.key = key
        self.filter_expression = filter_expression
        self.source = source
        self.tree = RowNode()
        self.selected: Optional[RowNode] = None

    @abstractmethod
    def recompute_rows(self, filter_expression: str) -> None:
        """Clear and rebuild :attr:`tree` from the filtered capture."""

    def row_data(self, row: RowNode) -> List[Cell]:
        """Return the cells of ``row``. Reports without cells export nothing."""
        return []

    def filter_expression_for_selection(self) -> str:
        """Return a display filter matching the selected row, or ``""``."""
        return ""

    def clear_tree(self) -> None:
        self.tree = RowNode()
        self.selected = None

    def visible_rows(self) -> Iterator[RowNode]:
        return self.tree.walk_visible()

    def row_count(self) -> int:
        return sum(1 for _ in self.visible_rows())

    def as_bytes(self, fmt: ExportFormat = ExportFormat.PLAIN) -> bytes:
        """Serialize the visible rows in ``fmt``."""
        return serialize_table(
            self.header_labels,
            (self.row_data(row) for row in self.visible_rows()),
            self.title,
            self.source.file_name,
            fmt,
        )
