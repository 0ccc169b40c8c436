"""
Edit-Request Compiler

Turns a CompiledMarkdown into ordered Google Docs mutation operations.

Every insert shifts the index of all content after it, so operations that
target precomputed indices are issued from the highest index to the lowest:
an applied operation then never moves a position a later operation relies on.
Style updates do not change document length but follow the same descending
convention.

Execution happens in separate batches:
    1. The bulk text insert followed by all style updates.
    2. Per table, last table first: the structural `insertTable`, then (after
       re-reading the document) the cell text inserts for that table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from gdocs.docs_helpers import (
    POSITIONAL_OPS,
    InsertCellText,
    InsertTable,
    InsertText,
    MutationOp,
    UpdateParagraphStyle,
    UpdateTextStyle,
    build_code_text_style,
)
from gdocs.docs_structure import find_table_at_or_after, get_table_cell_indices
from gdocs.markdown_inline import FormatKind, FormatSpan
from gdocs.markdown_parser import CompiledMarkdown
from gdocs.markdown_tables import TableRegion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableInsertion:
    """A table region paired with its structural insert operation."""

    region: TableRegion
    insert_op: InsertTable


@dataclass(frozen=True)
class CompilationSummary:
    formats_applied: int
    tables_inserted: int
    text_length: int


@dataclass(frozen=True)
class EditPlan:
    """All operations for one compiled Markdown edit, already ordered."""

    text_ops: tuple[InsertText, ...] = field(default_factory=tuple)
    format_ops: tuple[UpdateTextStyle | UpdateParagraphStyle, ...] = field(default_factory=tuple)
    tables: tuple[TableInsertion, ...] = field(default_factory=tuple)
    text_length: int = 0

    @property
    def first_batch(self) -> list[MutationOp]:
        """Text insert followed by style updates, sent as one batchUpdate."""
        return [*self.text_ops, *self.format_ops]

    def summary(self, tables_inserted: int | None = None) -> CompilationSummary:
        return CompilationSummary(
            formats_applied=len(self.format_ops),
            tables_inserted=len(self.tables) if tables_inserted is None else tables_inserted,
            text_length=self.text_length,
        )


def is_positional(op: MutationOp) -> bool:
    """True for operations that change document length."""
    return isinstance(op, POSITIONAL_OPS)


def sort_descending(ops: list[MutationOp]) -> list[MutationOp]:
    """
    Order operations by non-increasing target index.

    The sort is stable, so operations sharing an index keep their relative order.
    """
    return sorted(ops, key=lambda op: op.index, reverse=True)


def build_format_op(span: FormatSpan) -> UpdateTextStyle | UpdateParagraphStyle:
    """Map a FormatSpan to its style update operation."""
    if span.kind.is_paragraph_style:
        return UpdateParagraphStyle(
            start=span.start,
            end=span.end,
            paragraph_style={"namedStyleType": span.kind.value},
            fields="namedStyleType",
        )
    if span.kind is FormatKind.BOLD:
        return UpdateTextStyle(start=span.start, end=span.end, text_style={"bold": True}, fields="bold")
    if span.kind is FormatKind.ITALIC:
        return UpdateTextStyle(start=span.start, end=span.end, text_style={"italic": True}, fields="italic")
    if span.kind is FormatKind.CODE:
        style, fields = build_code_text_style()
        return UpdateTextStyle(start=span.start, end=span.end, text_style=style, fields=fields)
    raise ValueError(f"Unsupported format kind: {span.kind}")


class EditRequestCompiler:
    """Builds the ordered operation plan for a CompiledMarkdown."""

    def compile(self, compiled: CompiledMarkdown) -> EditPlan:
        """
        Compile text, spans and tables into an EditPlan.

        Args:
            compiled: Output of MarkdownToDocsConverter.parse().

        Returns:
            EditPlan with format ops in descending start order (last span
            first) and tables in descending anchor order (last table first).
        """
        text_ops: tuple[InsertText, ...] = ()
        if compiled.text:
            text_ops = (InsertText(index=compiled.start_index, text=compiled.text),)

        # Reverse first so equal starts keep reverse emission order after the stable sort
        format_ops = sort_descending([build_format_op(span) for span in reversed(compiled.formats)])

        regions = sorted(compiled.tables, key=lambda region: region.anchor_index, reverse=True)
        tables = tuple(
            TableInsertion(
                region=region,
                insert_op=InsertTable(index=region.anchor_index, rows=region.row_count, columns=region.col_count),
            )
            for region in regions
        )

        plan = EditPlan(
            text_ops=text_ops,
            format_ops=tuple(format_ops),
            tables=tables,
            text_length=compiled.text_length,
        )
        logger.debug(
            f"Compiled edit plan: {len(text_ops)} text op(s), {len(format_ops)} format op(s), {len(tables)} table(s)"
        )
        return plan


def build_table_insertion(
    rows: int, columns: int, index: int, data: list[list[Any]] | None = None
) -> TableInsertion:
    """
    Build a standalone `rows` x `columns` table anchored at `index`.

    `data` is shaped to the requested size: missing rows and cells become
    empty, extra rows and cells are dropped, and non-string values are
    converted with str().
    """
    source = data or []
    if len(source) > rows or any(len(row) > columns for row in source):
        logger.debug(f"Table data exceeds {rows}x{columns}; extra cells are ignored")

    grid = []
    for row_idx in range(rows):
        row = list(source[row_idx][:columns]) if row_idx < len(source) else []
        row += [""] * (columns - len(row))
        grid.append(tuple("" if cell is None else str(cell) for cell in row))

    return TableInsertion(
        region=TableRegion(rows=tuple(grid), anchor_index=index),
        insert_op=InsertTable(index=index, rows=rows, columns=columns),
    )


def build_cell_fill_ops(region: TableRegion, doc_data: dict[str, Any]) -> list[InsertCellText] | None:
    """
    Build the cell text inserts for a freshly inserted table.

    Looks up the first table at or after `region.anchor_index` in the re-read
    document and walks rows and columns in descending order, so each insert
    lands before every cell already filled. Indices beyond the region's
    declared bounds, cells missing from the document, and empty cell text are
    skipped.

    Returns:
        The ordered operations, or None when the table cannot be located.
    """
    table_element = find_table_at_or_after(doc_data, region.anchor_index)
    if table_element is None:
        logger.warning(f"No table found at or after index {region.anchor_index}; skipping cell fill")
        return None

    cell_indices = get_table_cell_indices(table_element)
    ops: list[InsertCellText] = []

    for row_idx in range(len(region.rows) - 1, -1, -1):
        if row_idx >= region.row_count or row_idx >= len(cell_indices):
            continue
        row_data = region.rows[row_idx]
        for col_idx in range(len(row_data) - 1, -1, -1):
            if col_idx >= region.col_count or col_idx >= len(cell_indices[row_idx]):
                continue
            text = row_data[col_idx]
            cell_index = cell_indices[row_idx][col_idx]
            if not text or cell_index is None:
                continue
            ops.append(InsertCellText(index=cell_index, text=text))

    logger.debug(f"Built {len(ops)} cell insert(s) for table anchored at {region.anchor_index}")
    return ops
