"""Unit tests for Markdown block segmentation."""

import pytest

from gdocs.markdown_blocks import (
    BlankLine,
    BulletItem,
    CheckboxItem,
    Heading,
    HorizontalRule,
    NumberedItem,
    Paragraph,
    TableBlock,
    classify_line,
    parse_numbered_item,
    segment_markdown,
    split_lines,
)


class TestSplitLines:
    def test_empty_input(self):
        assert split_lines("") == []

    def test_trailing_newline_does_not_add_line(self):
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_crlf_is_normalized(self):
        assert split_lines("a\r\nb") == ["a", "b"]

    def test_interior_blank_lines_are_kept(self):
        assert split_lines("a\n\n\nb") == ["a", "", "", "b"]


class TestClassifyLine:
    @pytest.mark.parametrize(
        "line,expected",
        [
            ("# Title", Heading(level=1, text="Title")),
            ("## Sub", Heading(level=2, text="Sub")),
            ("### Deep", Heading(level=3, text="Deep")),
            ("- [ ] todo", CheckboxItem(checked=False, text="todo")),
            ("* [ ] todo", CheckboxItem(checked=False, text="todo")),
            ("- [x] done", CheckboxItem(checked=True, text="done")),
            ("* [X] done", CheckboxItem(checked=True, text="done")),
            ("- item", BulletItem(text="item")),
            ("* item", BulletItem(text="item")),
            ("1. first", NumberedItem(ordinal="1", text="first")),
            ("10. tenth", NumberedItem(ordinal="10", text="tenth")),
            ("---", HorizontalRule()),
            ("", BlankLine()),
            ("plain text", Paragraph(text="plain text")),
        ],
    )
    def test_prefix_classification(self, line, expected):
        assert classify_line(line) == expected

    def test_four_hashes_is_a_paragraph(self):
        assert classify_line("#### Too deep") == Paragraph(text="#### Too deep")

    def test_hash_without_space_is_a_paragraph(self):
        assert classify_line("#hashtag") == Paragraph(text="#hashtag")

    def test_checkbox_takes_priority_over_bullet(self):
        assert isinstance(classify_line("- [ ] x"), CheckboxItem)

    def test_longer_dash_run_is_a_paragraph(self):
        assert classify_line("----") == Paragraph(text="----")

    def test_ordinal_keeps_leading_zeros(self):
        assert classify_line("01. x") == NumberedItem(ordinal="01", text="x")


class TestParseNumberedItem:
    def test_valid_item(self):
        assert parse_numbered_item("3. three") == ("3", "three")

    @pytest.mark.parametrize("line", ["1.no space", ". empty", "a1. letters", "1 missing dot", "١. arabic digit"])
    def test_invalid_prefixes(self, line):
        assert parse_numbered_item(line) is None

    def test_version_number_is_not_a_list_item(self):
        assert parse_numbered_item("1.5 release") is None


class TestSegmentMarkdown:
    def test_trailing_whitespace_is_trimmed(self):
        assert segment_markdown("hello   ") == [Paragraph(text="hello")]

    def test_blank_lines_are_blocks(self):
        blocks = segment_markdown("# Title\n\nHello")
        assert blocks == [Heading(level=1, text="Title"), BlankLine(), Paragraph(text="Hello")]

    def test_table_consumes_consecutive_pipe_lines(self):
        blocks = segment_markdown("intro\n| A | B |\n|---|---|\n| 1 | 2 |\noutro")
        assert blocks == [
            Paragraph(text="intro"),
            TableBlock(rows=(("A", "B"), ("1", "2"))),
            Paragraph(text="outro"),
        ]

    def test_two_tables_separated_by_blank_line(self):
        blocks = segment_markdown("| a |\n\n| b |")
        assert blocks == [TableBlock(rows=(("a",),)), BlankLine(), TableBlock(rows=(("b",),))]

    def test_line_with_only_leading_pipe_is_not_a_table(self):
        assert segment_markdown("| not a table") == [Paragraph(text="| not a table")]

    def test_separator_only_table_yields_empty_block(self):
        assert segment_markdown("|---|---|") == [TableBlock(rows=())]
