"""Core data structures shared by reports, the registry and the serializer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from ..datasource import CaptureSource
    from ..host import HostContext
    from ..reports.base import TapReport


class CellType(str, Enum):
    """Value types a report cell can carry."""

    STRING = "string"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"

    @property
    def is_numeric(self) -> bool:
        return self is not CellType.STRING


CellValue = Union[str, int, float]


@dataclass(frozen=True)
class Cell:
    """A single typed value in a report row.

    The type controls how serializers quote, escape, align and measure
    the value; it never affects column order.
    """

    type: CellType
    value: CellValue

    def __post_init__(self) -> None:
        if self.type is CellType.STRING and not isinstance(self.value, str):
            raise TypeError(f"String cell requires str, got {type(self.value).__name__}")
        if self.type in (CellType.INT, CellType.UINT):
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise TypeError(f"Integer cell requires int, got {type(self.value).__name__}")
            if self.type is CellType.UINT and self.value < 0:
                raise ValueError(f"Unsigned cell cannot hold {self.value}")
        if self.type is CellType.FLOAT and (
            isinstance(self.value, bool) or not isinstance(self.value, (int, float))
        ):
            raise TypeError(f"Float cell requires a number, got {type(self.value).__name__}")

    @classmethod
    def string(cls, value: str) -> "Cell":
        return cls(CellType.STRING, value)

    @classmethod
    def integer(cls, value: int) -> "Cell":
        return cls(CellType.INT, value)

    @classmethod
    def unsigned(cls, value: int) -> "Cell":
        return cls(CellType.UINT, value)

    @classmethod
    def floating(cls, value: float) -> "Cell":
        return cls(CellType.FLOAT, float(value))

    @classmethod
    def from_value(cls, value: Any) -> "Cell":
        """Infer the cell type from a plain Python value."""
        if isinstance(value, Cell):
            return value
        if isinstance(value, bool):
            raise TypeError("Boolean values have no cell type")
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.floating(value)
        raise TypeError(f"Unsupported cell value type: {type(value).__name__}")

    @property
    def text(self) -> str:
        """Natural text representation, used by CSV, XML and YAML."""
        return str(self.value)


class ExportFormat(str, Enum):
    """Textual formats a report can be exported to."""

    PLAIN = "plain"
    CSV = "csv"
    XML = "xml"
    YAML = "yaml"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def label(self) -> str:
        """Name filter shown by the host's save dialog."""
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> "ExportFormat":
        """Return the format called ``name`` (case-insensitive)."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown export format '{name}'. Choose one of: {choices}") from None


_EXTENSIONS = {
    ExportFormat.PLAIN: ".txt",
    ExportFormat.CSV: ".csv",
    ExportFormat.XML: ".xml",
    ExportFormat.YAML: ".yaml",
}

_LABELS = {
    ExportFormat.PLAIN: "Plain text file (*.txt)",
    ExportFormat.CSV: "Comma separated values (*.csv)",
    ExportFormat.XML: "XML document (*.xml)",
    ExportFormat.YAML: "YAML document (*.yaml)",
}


class StatGroup(str, Enum):
    """Menu bucket a report is listed under. Opaque to the framework."""

    GENERIC = "generic"
    CONVERSATION_LIST = "conversation_list"
    ENDPOINT_LIST = "endpoint_list"
    RESPONSE_TIME = "response_time"
    TELEPHONY = "telephony"


ReportFactory = Callable[["HostContext", str, str, "CaptureSource"], "TapReport"]
InitCallback = Callable[[str], None]


@dataclass(frozen=True)
class ReportDescriptor:
    """Registration record for one report type."""

    title: str
    key: str
    group: StatGroup
    factory: ReportFactory
    init_callback: Optional[InitCallback] = None
