"""Capture data handed to reports when they recompute their rows."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Mapping

import pandas as pd

from .exceptions import FilterError, SourceClosedError
from .logging import get_logger

logger = get_logger(__name__)

_DEF_COLUMNS = [
    "frame_number",
    "timestamp",
    "source_ip",
    "destination_ip",
    "source_port",
    "destination_port",
    "protocol",
    "packet_length",
]


class CaptureSource:
    """Packet records of one capture file, filterable by expression.

    Filter expressions use :meth:`pandas.DataFrame.query` syntax, e.g.
    ``protocol == "TCP" and destination_port == 443``.
    """

    def __init__(self, frame: pd.DataFrame, file_name: str = "") -> None:
        self._frame = frame
        self.file_name = file_name
        self._closed = False

    @classmethod
    def from_csv(cls, path: str | Path) -> "CaptureSource":
        """Load packet records previously exported as CSV."""
        csv_path = Path(path)
        frame = pd.read_csv(csv_path)
        logger.info("Loaded %d packets from %s", len(frame), csv_path)
        return cls(frame, file_name=csv_path.name)

    @classmethod
    def from_records(
        cls, records: Iterable[Mapping[str, Any]], file_name: str = ""
    ) -> "CaptureSource":
        frame = pd.DataFrame(list(records))
        if frame.empty:
            frame = pd.DataFrame(columns=_DEF_COLUMNS)
        return cls(frame, file_name=file_name)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Mark the capture as unavailable. Further reads raise."""
        self._closed = True
        logger.debug("Capture source %s closed", self.file_name)

    def __len__(self) -> int:
        return len(self._frame)

    def filtered(self, expression: str = "") -> pd.DataFrame:
        """Return the packets matching ``expression``.

        An empty expression selects every packet.
        """
        if self._closed:
            raise SourceClosedError(
                f"Capture '{self.file_name}' is closed",
                suggestion="Reopen the capture file before recomputing.",
            )
        expression = (expression or "").strip()
        if not expression:
            return self._frame.copy()
        try:
            result = self._frame.query(expression)
        except Exception as exc:
            raise FilterError(
                f"Invalid display filter '{expression}': {exc}",
                context=self.file_name,
            ) from exc
        logger.debug("Filter %r matched %d of %d packets", expression, len(result), len(self._frame))
        return result
