from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.config import settings
from ..logging import get_logger

if TYPE_CHECKING:  # pragma: no cover - imports for annotations only
    from ..reports.base import TapReport

logger = get_logger(__name__)


class RecomputeController:
    """Decide when a report rebuilds its rows.

    Rows are recomputed on first display and whenever the host applies
    the display filter. Once the capture source is gone the filter is
    frozen and the last rows stay on screen.
    """

    def __init__(self, report: "TapReport") -> None:
        self.report = report
        self.display_filter = report.filter_expression or ""
        self.shown = False
        self.filter_enabled = True

    def set_display_filter(self, text: str) -> None:
        """Preset the filter before :meth:`show`. Does not recompute."""
        self.display_filter = text

    def edit_filter(self, text: str) -> bool:
        """Change the filter text as typed by the user."""
        if not self.filter_enabled:
            return False
        self.display_filter = text
        return True

    def show(self) -> bool:
        """Handle the first display of the report."""
        if self.shown:
            return False
        self.shown = True
        if self.display_filter:
            self.report.host.notify_filter(self.display_filter, True)
        self._recompute()
        return True

    def apply_filter(self) -> bool:
        """Handle the host's apply button.

        The host is told about the filter even when it was cleared.
        """
        if not self.filter_enabled:
            logger.debug("Ignoring filter apply on closed capture")
            return False
        self.report.host.notify_filter(self.display_filter, True)
        self._recompute()
        return True

    def source_closed(self) -> None:
        """Freeze the report in place after its capture went away."""
        self.filter_enabled = False
        logger.info("Capture closed, keeping %d rows of %s", self.report.row_count(), self.report.key)

    def context_menu(self) -> bool:
        """Return whether filter actions apply to the current selection."""
        return bool(self.report.filter_expression_for_selection())

    def trigger_filter_action(self, action: str, action_type: str) -> bool:
        expression = self.report.filter_expression_for_selection()
        if not expression:
            return False
        self.report.host.emit_filter_action(expression, action, action_type)
        return True

    def _recompute(self) -> None:
        self.report.recompute_rows(self.display_filter)
        row_count = self.report.row_count()
        logger.debug("Recomputed %s: %d rows", self.report.key, row_count)
        self.report.host.rows_ready(row_count, row_count < settings.expand_all_threshold)
