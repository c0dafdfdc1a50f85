"""Printing results as tables, lines or JSON."""

from __future__ import annotations

import dataclasses
import enum
import json
import logging
from datetime import date, datetime
from pathlib import PurePath
from typing import Any, Iterable, Sequence

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class GenericKeyValue:
    """One labelled value in a details table."""

    key: str = dataclasses.field(metadata={"title": "key", "justify": "right"})
    value: str = dataclasses.field(metadata={"title": "value"})

    def __post_init__(self) -> None:
        self.key = str(self.key)
        self.value = str(self.value)


def _render(rows: Sequence[Sequence[Any]], titles: Sequence[str] | None,
            justify: Sequence[str]) -> str:
    table = [list(titles)] if titles is not None else []
    table.extend(list(row) for row in rows)
    if not table:
        return ""
    width = len(table[0])
    if any(len(row) != width for row in table):
        raise ValueError("all rows must have the same number of cells")

    cells = [[("" if cell is None else str(cell)).split("\n") for cell in row] for row in table]
    widths = [
        max((len(line) for row in cells for line in row[column]), default=0)
        for column in range(width)
    ]
    lines = []
    for row in cells:
        for index in range(max((len(cell) for cell in row), default=0)):
            parts = []
            for column, cell in enumerate(row):
                text = cell[index] if index < len(cell) else ""
                if justify[column] == "right":
                    text = text.rjust(widths[column])
                else:
                    text = text.ljust(widths[column])
                parts.append(f" {text} ")
            lines.append("".join(parts).rstrip())
    return "\n".join(lines)


def render_table(rows: Sequence[Sequence[Any]], titles: Sequence[str] | None) -> str:
    """Lay out rows of cells in aligned columns, under the titles if given."""
    width = len(titles) if titles is not None else max((len(row) for row in rows), default=0)
    return _render(rows, titles, ["left"] * width)


def _columns(row: Any) -> tuple[dataclasses.Field, ...]:
    if not dataclasses.is_dataclass(row):
        raise TypeError(f"table rows must be dataclass instances, not {type(row).__name__}")
    return dataclasses.fields(row)


def _cells(row: Any, columns: Iterable[dataclasses.Field]) -> list[str]:
    cells = []
    for column in columns:
        value = getattr(row, column.name)
        display = column.metadata.get("display")
        if display is not None:
            cells.append(str(display(value)))
        else:
            cells.append("" if value is None else str(value))
    return cells


def _print_rows(rows: list[Any], with_titles: bool) -> None:
    columns = _columns(rows[0])
    titles = [column.metadata.get("title", column.name) for column in columns] if with_titles else None
    justify = [column.metadata.get("justify", "left") for column in columns]
    print(_render([_cells(row, columns) for row in rows], titles, justify))


def output_list(rows: Iterable[Any]) -> None:
    """Print table rows under their column titles."""
    rows = list(rows)
    if not rows:
        logger.info("No results found")
        return
    _print_rows(rows, with_titles=True)


def output_details(items: Iterable[Any]) -> None:
    """Print table rows without titles, as for the details of one item."""
    items = list(items)
    if items:
        _print_rows(items, with_titles=False)


def output_string_list(lines: Iterable[str]) -> None:
    """Print each string on a line of its own."""
    lines = list(lines)
    if not lines:
        logger.info("No results found")
        return
    for line in lines:
        print(line)


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return _jsonable(value.value)
    if isinstance(value, PurePath):
        return str(value)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def output_json(value: Any) -> None:
    """Print the value as indented JSON."""
    print(json.dumps(_jsonable(value), indent=2, ensure_ascii=False))