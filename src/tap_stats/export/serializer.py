"""Render report rows as plain text, CSV, XML or YAML.

The layouts are consumed by other tools, so separators, quoting and key
names must stay exactly as produced here.
"""

from __future__ import annotations

from html import escape
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..core.config import settings
from ..core.models import Cell, CellType, ExportFormat
from ..logging import get_logger

logger = get_logger(__name__)

CellRow = List[Cell]


def _as_cells(values: Iterable[Any]) -> CellRow:
    return [Cell.from_value(v) for v in values]


def _quote(text: str) -> str:
    return f'"{text}"'


def _quoted_if_string(cell: Cell) -> str:
    return _quote(cell.text) if cell.type is CellType.STRING else cell.text


def plain_cell_text(cell: Cell, width: int = 0, precision: Optional[int] = None) -> str:
    """Return ``cell`` padded to ``width``.

    Strings are left-aligned, numbers right-aligned. Longer values are
    never truncated.
    """
    if precision is None:
        precision = settings.float_precision
    if cell.type is CellType.FLOAT:
        text = f"{cell.value:.{precision}f}"
    else:
        text = cell.text
    if cell.type is CellType.STRING:
        return text.ljust(width)
    return text.rjust(width)


def column_widths(headers: Sequence[str], rows: Sequence[CellRow]) -> List[int]:
    """Compute plain text column widths.

    Every column starts at its header label length; only string cells can
    widen it. Columns past the last header start at zero.
    """
    widths = [len(label) for label in headers]
    for cells in rows:
        for col, cell in enumerate(cells):
            if col >= len(widths):
                widths.append(0)
            if cell.type is CellType.STRING:
                widths[col] = max(widths[col], len(cell.text))
    return widths


def _render_plain(
    headers: Sequence[str],
    rows: Sequence[CellRow],
    title: str,
    source: str,
    *,
    separator: str,
    precision: int,
) -> List[str]:
    widths = column_widths(headers, rows)
    header_line = separator.join(headers)
    footer = "-" * len(header_line)
    lines = [
        "=" * len(header_line),
        f"{title} - {source}:",
        header_line,
        footer,
    ]
    for cells in rows:
        lines.append(
            separator.join(
                plain_cell_text(cell, widths[col], precision) for col, cell in enumerate(cells)
            )
        )
    lines.append(footer)
    return lines


def _render_csv(headers: Sequence[str], rows: Sequence[CellRow], title: str, source: str) -> List[str]:
    # Embedded quotes and commas are written as-is.
    lines = [",".join(_quote(label) for label in headers)]
    for cells in rows:
        lines.append(",".join(_quoted_if_string(cell) for cell in cells))
    return lines


def _render_xml(headers: Sequence[str], rows: Sequence[CellRow], title: str, source: str) -> List[str]:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<table>",
        f"<title>{escape(title)}</title>",
        "<thead>",
        "<row>",
    ]
    lines.extend(f"  <entry>{escape(label)}</entry>" for label in headers)
    lines.extend(["</row>", "</thead>", "<tbody>"])
    for cells in rows:
        lines.append("<row>")
        lines.extend(f"  <entry>{escape(cell.text)}</entry>" for cell in cells)
        lines.append("</row>")
    lines.extend(["</tbody>", "</table>"])
    return lines


def _render_yaml(headers: Sequence[str], rows: Sequence[CellRow], title: str, source: str) -> List[str]:
    lines = [
        "---",
        f"Description: {_quote(title)}",
        f"File: {_quote(source)}",
        "Items:",
    ]
    for cells in rows:
        for col, cell in enumerate(cells):
            label = headers[col] if col < len(headers) else ""
            marker = "- " if col == 0 else "  "
            lines.append(f"{marker}{label}: {_quoted_if_string(cell)}")
    return lines


_RENDERERS: dict[ExportFormat, Callable[..., List[str]]] = {
    ExportFormat.CSV: _render_csv,
    ExportFormat.XML: _render_xml,
    ExportFormat.YAML: _render_yaml,
}


def serialize_table(
    headers: Sequence[str],
    rows: Iterable[Iterable[Any]],
    title: str,
    source: str,
    fmt: ExportFormat = ExportFormat.PLAIN,
    *,
    separator: Optional[str] = None,
    precision: Optional[int] = None,
    encoding: Optional[str] = None,
) -> bytes:
    """Serialize ``rows`` under ``headers`` in ``fmt``.

    Parameters
    ----------
    headers:
        Column labels in display order.
    rows:
        Visible rows in output order. Each row is a sequence of
        :class:`~tap_stats.core.models.Cell` objects or plain ``str``,
        ``int`` and ``float`` values. Rows without cells are skipped.
    title:
        Report title written in the format's header block.
    source:
        Identifier of the data the report was computed from, usually the
        capture file name.
    fmt:
        Target :class:`~tap_stats.core.models.ExportFormat`.
    """
    fmt = ExportFormat(fmt)
    headers = [str(label) for label in headers]
    data_rows = [cells for cells in (_as_cells(r) for r in rows) if cells]

    if fmt is ExportFormat.PLAIN:
        lines = _render_plain(
            headers,
            data_rows,
            title,
            source,
            separator=settings.column_separator if separator is None else separator,
            precision=settings.float_precision if precision is None else precision,
        )
    else:
        lines = _RENDERERS[fmt](headers, data_rows, title, source)

    logger.debug("Serialized %d rows as %s", len(data_rows), fmt.value)
    text = "".join(f"{line}\n" for line in lines)
    return text.encode(encoding or settings.encoding)
