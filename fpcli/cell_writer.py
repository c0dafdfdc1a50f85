"""Writing the output of a command into notebook cells."""

from __future__ import annotations

import enum
import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from fpcli.events import _format_rfc3339
from fpcli.logs import Event, contains_logs, parse_logs

logger = logging.getLogger(__name__)

EVENTS_DATA_LINK_PREFIX = "data:application/vnd.fiberplane.events+json,"

Cell = dict[str, Any]
AppendCells = Callable[[str, list[Cell]], list[Cell]]


class CellType(enum.Enum):
    """The kind of cell the output goes into; unknown until it has been seen."""

    LOG = "log"
    CODE = "code"
    UNKNOWN = "unknown"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _event_json(event: Event) -> dict[str, Any]:
    otel = event.otel
    return {
        "time": _format_rfc3339(event.time),
        "title": event.title,
        "otel": {
            "attributes": otel.attributes,
            "resource": otel.resource,
            "traceId": otel.trace_id.hex() if otel.trace_id is not None else None,
            "spanId": otel.span_id.hex() if otel.span_id is not None else None,
        },
    }


class CellWriter:
    """Buffers a command's output and writes it to a notebook as a log or code cell.

    `append_cells(notebook_id, cells)` sends cells to the notebook and returns
    the cells as created.
    """

    def __init__(
        self,
        append_cells: AppendCells,
        notebook_id: str,
        command: Sequence[str],
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._append_cells = append_cells
        self.notebook_id = notebook_id
        self.command = list(command)
        self._clock = clock
        self._cell: Cell | None = None
        self._buffer = bytearray()
        self._cell_type = CellType.UNKNOWN

    @property
    def cell_type(self) -> CellType:
        """The kind of cell detected so far."""
        return self._cell_type

    def append(self, data: bytes) -> None:
        """Add output to the buffer."""
        self._buffer.extend(data)

    def flush(self) -> None:
        """Write the buffered output to new cells, then empty the buffer."""
        if not self._buffer:
            return

        self._detect_cell_type()
        output = self._buffer.decode("utf-8", errors="replace")

        if self._cell_type is CellType.LOG:
            self._append_cell({"type": "text", "id": "", "content": self.prompt_line()})
            events = [_event_json(event) for event in parse_logs(output)]
            data_link = EVENTS_DATA_LINK_PREFIX + json.dumps(
                events, separators=(",", ":"), ensure_ascii=False
            )
            self._cell = self._append_cell(
                {"type": "log", "id": "", "dataLinks": [data_link], "readOnly": True}
            )
        else:
            content = f"{self.prompt_line()}\n{output}"
            self._cell = self._append_cell({"type": "code", "id": "", "content": content})

        self._buffer.clear()

    def output_cell(self) -> Cell | None:
        """The last cell the output was written to, if any."""
        return self._cell

    def prompt_line(self) -> str:
        """A header naming when, where and what was run."""
        timestamp = _format_rfc3339(self._clock())
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = ""
        return f"{timestamp}\n{cwd} \u276f {' '.join(self.command)}"

    def _detect_cell_type(self) -> None:
        if self._cell_type is not CellType.UNKNOWN:
            return
        try:
            text = self._buffer.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Could not parse buffer as UTF-8")
            return
        if contains_logs(text):
            self._cell_type = CellType.LOG
            logger.debug("Detected logs")
        else:
            self._cell_type = CellType.CODE
            logger.debug("Failed to detect logs, using code cell")

    def _append_cell(self, cell: Cell) -> Cell:
        try:
            cells = list(self._append_cells(self.notebook_id, [cell]))
        except Exception as exc:
            raise RuntimeError("Error appending cell to notebook") from exc
        if not cells:
            raise RuntimeError("No cells returned")
        return cells[-1]