"""Unit tests for pipe table extraction."""

from gdocs.markdown_tables import (
    TableRegion,
    build_table_region,
    extract_table_rows,
    is_separator_row,
    is_table_line,
    split_table_row,
)


class TestTableLines:
    def test_pipe_delimited_line(self):
        assert is_table_line("| a | b |")

    def test_missing_closing_pipe(self):
        assert not is_table_line("| a | b")

    def test_split_trims_cells(self):
        assert split_table_row("|  a |b  |   c|") == ["a", "b", "c"]

    def test_split_keeps_empty_cells(self):
        assert split_table_row("| a || c |") == ["a", "", "c"]


class TestSeparatorRows:
    def test_dashes_and_colons(self):
        assert is_separator_row(["---", ":--:", "--:"])

    def test_empty_cell_is_not_separator(self):
        assert not is_separator_row(["---", ""])

    def test_text_is_not_separator(self):
        assert not is_separator_row(["---", "a"])


class TestExtractTableRows:
    def test_header_kept_and_separator_dropped(self):
        rows = extract_table_rows(["| A | B |", "|---|---|", "| 1 | 2 |"])
        assert rows == [["A", "B"], ["1", "2"]]

    def test_separator_never_appears_in_rows(self):
        rows = extract_table_rows(["|:-:|", "| x |", "|---|"])
        assert rows == [["x"]]


class TestBuildTableRegion:
    def test_counts_come_from_rows(self):
        region = build_table_region([["A", "B", "C"], ["1"]], anchor_index=10)
        assert region == TableRegion(rows=(("A", "B", "C"), ("1",)), anchor_index=10)
        assert region.row_count == 2
        assert region.col_count == 3

    def test_no_rows_gives_none(self):
        assert build_table_region([], anchor_index=5) is None
