from .serializer import serialize_table, column_widths, plain_cell_text
from .controller import ExportController, ensure_extension, format_for_selection, name_filters

__all__ = [
    "serialize_table",
    "column_widths",
    "plain_cell_text",
    "ExportController",
    "ensure_extension",
    "format_for_selection",
    "name_filters",
]
