"""Callbacks the hosting UI supplies to reports and controllers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class HostContext:
    """Hooks into the host application.

    Every hook is optional; missing hooks fall back to logging so the
    framework runs headless (CLI, tests) without a UI.
    """

    update_filter: Optional[Callable[[str, bool], None]] = None
    set_clipboard: Optional[Callable[[str], None]] = None
    show_warning: Optional[Callable[[str, str], None]] = None
    filter_action: Optional[Callable[[str, str, str], None]] = None
    draw_rows: Optional[Callable[[int, bool], None]] = None

    def notify_filter(self, filter_text: str, force: bool = True) -> None:
        if self.update_filter:
            self.update_filter(filter_text, force)
        else:
            logger.debug("Display filter updated: %s", filter_text)

    def copy_text(self, text: str) -> None:
        if self.set_clipboard:
            self.set_clipboard(text)
        else:
            logger.info("No clipboard available, dropped %d characters", len(text))

    def warn(self, title: str, message: str) -> None:
        if self.show_warning:
            self.show_warning(title, message)
        else:
            logger.warning("%s: %s", title, message)

    def emit_filter_action(self, expression: str, action: str, action_type: str) -> None:
        if self.filter_action:
            self.filter_action(expression, action, action_type)
        else:
            logger.debug("Filter action %s/%s: %s", action, action_type, expression)

    def rows_ready(self, row_count: int, expand_all: bool) -> None:
        if self.draw_rows:
            self.draw_rows(row_count, expand_all)
