"""
Table extraction for pipe-delimited Markdown tables.

A table is a run of lines that each start and end with `|`. Rows are split
into trimmed cell text; header/body separator rows (`|---|:--:|`) are dropped.
Cell text never becomes part of the flattened document text: the renderer
leaves a single placeholder newline at `anchor_index`, and the cells are
filled in after the table structure exists in the document.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TABLE_DELIMITER = "|"
SEPARATOR_CHARS = frozenset("-:")


@dataclass(frozen=True)
class TableRegion:
    """
    A table to be structurally inserted at `anchor_index`.

    `col_count` is taken from the first row. Later rows may be shorter
    (missing cells stay empty) or longer (excess cells are ignored).
    """

    rows: tuple[tuple[str, ...], ...]
    anchor_index: int

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def col_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0


def is_table_line(line: str) -> bool:
    """Return True if the line opens or continues a pipe-delimited table."""
    return line.startswith(TABLE_DELIMITER) and line.endswith(TABLE_DELIMITER)


def split_table_row(line: str) -> list[str]:
    """Strip the outer pipes, split on `|`, and trim each cell."""
    inner = line[1:-1] if len(line) >= 2 else ""
    return [cell.strip() for cell in inner.split(TABLE_DELIMITER)]


def is_separator_row(cells: list[str]) -> bool:
    """A separator row has only non-empty cells made of `-` and `:`."""
    return bool(cells) and all(cell and set(cell) <= SEPARATOR_CHARS for cell in cells)


def extract_table_rows(lines: list[str]) -> list[list[str]]:
    """Split a run of table lines into a cell matrix, dropping separator rows."""
    rows: list[list[str]] = []
    for line in lines:
        cells = split_table_row(line)
        if is_separator_row(cells):
            logger.debug(f"Dropped table separator row: {line!r}")
            continue
        rows.append(cells)
    return rows


def build_table_region(rows: list[list[str]] | tuple[tuple[str, ...], ...], anchor_index: int) -> TableRegion | None:
    """Create a TableRegion, or None when every row was a separator."""
    if not rows:
        logger.debug(f"Skipping empty table at index {anchor_index}")
        return None
    return TableRegion(rows=tuple(tuple(row) for row in rows), anchor_index=anchor_index)
