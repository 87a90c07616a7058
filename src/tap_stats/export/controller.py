from __future__ import annotations

import errno
import os
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from ..core.config import settings
from ..core.decorators import log_performance
from ..core.models import ExportFormat
from ..exceptions import ExportError
from ..logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from ..reports.base import TapReport

logger = get_logger(__name__)

# Checked in this order; anything else falls back to plain text.
_SELECTION_ORDER = (ExportFormat.YAML, ExportFormat.XML, ExportFormat.CSV)


def name_filters() -> str:
    """Return the save dialog filter string, plain text first."""
    return ";;".join(fmt.label for fmt in ExportFormat)


def format_for_selection(name_filter: Optional[str]) -> ExportFormat:
    """Map the host's selected name filter to an export format."""
    selected = (name_filter or "").lower()
    for fmt in _SELECTION_ORDER:
        if f"*{fmt.extension}" in selected:
            return fmt
    return ExportFormat.PLAIN


def ensure_extension(path: str | Path, fmt: ExportFormat) -> Path:
    """Append ``fmt``'s extension unless ``path`` already ends with it."""
    name = str(path)
    if not name.lower().endswith(fmt.extension):
        name += fmt.extension
    return Path(name)


class ExportController:
    """Copy and save-as actions for one report."""

    def __init__(self, report: "TapReport") -> None:
        self.report = report

    def _resolve(self, path: str | Path, fmt: ExportFormat) -> Path:
        target = ensure_extension(path, fmt)
        if not target.is_absolute() and settings.last_open_dir:
            target = Path(settings.last_open_dir) / target
        return target

    @log_performance
    def write(self, path: str | Path, fmt: ExportFormat = ExportFormat.PLAIN) -> Path:
        """Serialize the report and write it to ``path``.

        Existing files are truncated. Raises :class:`ExportError` carrying
        the system error text when the file cannot be opened or written.
        """
        target = self._resolve(path, fmt)
        payload = self.report.as_bytes(fmt)
        try:
            with target.open("wb") as fh:
                written = fh.write(payload)
        except OSError as exc:
            reason = exc.strerror or str(exc)
            logger.error("Failed to save %s: %s", target, reason)
            raise ExportError(reason, context=str(target)) from exc
        if written != len(payload):
            reason = os.strerror(errno.EIO)
            logger.error("Short write to %s (%d of %d bytes)", target, written, len(payload))
            raise ExportError(reason, context=str(target))
        logger.info("Saved %s report to %s (%d bytes)", fmt.value, target, written)
        return target

    def save_as(
        self,
        path: str | Path,
        fmt: ExportFormat | None = None,
        *,
        name_filter: Optional[str] = None,
    ) -> Optional[Path]:
        """Save the report, reporting failures to the host.

        The format comes from ``fmt``, else from ``name_filter``, else the
        configured default. Returns the written path, or ``None`` after a
        warning has been shown.
        """
        if fmt is None:
            if name_filter is not None:
                fmt = format_for_selection(name_filter)
            else:
                fmt = ExportFormat.from_name(settings.default_export_format)
        try:
            return self.write(path, fmt)
        except ExportError as exc:
            self.report.host.warn(f"Error saving file {exc.context}", str(exc))
            return None

    def copy_to_clipboard(self) -> str:
        """Hand the plain text rendering to the host clipboard."""
        text = self.report.as_bytes(ExportFormat.PLAIN).decode(settings.encoding)
        self.report.host.copy_text(text)
        return text
