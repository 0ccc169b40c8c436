"""
Markdown to Google Docs Converter

This module provides the `MarkdownToDocsConverter` class that renders Markdown
into the three inputs of a Google Docs edit: one flattened text buffer, a list
of formatting spans, and a list of table regions. All positions are absolute
indices in the destination document (1-based, one index per codepoint).

The converter follows the "Index Tracker" pattern: a single running cursor
advances by exactly what is appended to the text buffer, including list
glyphs, numbering and line terminators. Every span and table anchor is read
from that cursor, so variable-width prefixes ("9. " vs "10. ") never drift.

Example:
    >>> converter = MarkdownToDocsConverter()
    >>> compiled = converter.parse("# Hello World\n\nThis is **bold** text.")
    >>> compiled.text
    'Hello World\\n\\nThis is bold text.\\n'

See Also:
    - `gdocs/edit_compiler.py` for turning the result into batchUpdate requests
    - `gdocs/managers/markdown_operation_manager.py` for execution against the API
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from gdocs.markdown_blocks import (
    BlankLine,
    Block,
    BulletItem,
    CheckboxItem,
    Heading,
    HorizontalRule,
    NumberedItem,
    Paragraph,
    TableBlock,
    segment_markdown,
)
from gdocs.markdown_inline import FormatKind, FormatSpan, apply_inline_formatting
from gdocs.markdown_tables import TableRegion, build_table_region

logger = logging.getLogger(__name__)

# Task list checkbox characters (Unicode ballot box symbols)
CHECKBOX_UNCHECKED = "☐"  # U+2610 BALLOT BOX
CHECKBOX_CHECKED = "☑"  # U+2611 BALLOT BOX WITH CHECK
BULLET_GLYPH = "•"  # U+2022 BULLET

# Google Docs has no native HR in plain text; a line of em dashes stands in
HORIZONTAL_RULE_TEXT = "—" * 27
LINE_TERMINATOR = "\n"

DEFAULT_START_INDEX = 1


class IndexTracker:
    """
    Running absolute offset in destination-document index space.

    Attributes:
        start_index: The insertion base the tracker was created with.
        cursor: Index where the next appended character will land.
    """

    def __init__(self, start_index: int = DEFAULT_START_INDEX) -> None:
        self.start_index = start_index
        self.cursor = start_index
        self._parts: list[str] = []

    def append(self, rendered: str) -> int:
        """Append rendered text and return the index of its first character."""
        start = self.cursor
        self._parts.append(rendered)
        self.cursor += len(rendered)
        return start

    @property
    def text(self) -> str:
        return "".join(self._parts)

    @property
    def length(self) -> int:
        return self.cursor - self.start_index


@dataclass(frozen=True)
class CompiledMarkdown:
    """Flattened text plus the spans and tables positioned against it."""

    text: str
    start_index: int
    end_index: int
    formats: tuple[FormatSpan, ...] = field(default_factory=tuple)
    tables: tuple[TableRegion, ...] = field(default_factory=tuple)

    @property
    def text_length(self) -> int:
        return len(self.text)


class MarkdownToDocsConverter:
    """
    Renders Markdown blocks into flattened text with positioned spans and tables.

    The converter holds no per-conversion state: every `parse()` call builds
    its own IndexTracker, so one instance can be shared between callers.

    Supported blocks: headings (#, ##, ###), checkbox items, bullet items,
    numbered items, horizontal rules, pipe tables, blank lines and paragraphs.
    Inline `**bold**`, `*italic*` and `` `code` `` are recognised inside list
    items and paragraphs; heading text is rendered literally.
    """

    def parse(self, markdown_text: str, start_index: int = DEFAULT_START_INDEX) -> CompiledMarkdown:
        """
        Convert Markdown text into a CompiledMarkdown.

        Args:
            markdown_text: The Markdown string to convert.
            start_index: The index in the document where the text will be inserted (1-based).
                         Defaults to 1 (start of document body).

        Returns:
            CompiledMarkdown whose `end_index - start_index == len(text)`.
        """
        tracker = IndexTracker(start_index)
        formats: list[FormatSpan] = []
        tables: list[TableRegion] = []

        for block in segment_markdown(markdown_text):
            self._render_block(block, tracker, formats, tables)

        compiled = CompiledMarkdown(
            text=tracker.text,
            start_index=start_index,
            end_index=tracker.cursor,
            formats=tuple(formats),
            tables=tuple(tables),
        )
        logger.debug(
            f"Parsed markdown: {compiled.text_length} chars, {len(formats)} span(s), "
            f"{len(tables)} table(s), range [{start_index}, {tracker.cursor})"
        )
        return compiled

    def _render_block(
        self,
        block: Block,
        tracker: IndexTracker,
        formats: list[FormatSpan],
        tables: list[TableRegion],
    ) -> None:
        """Append one block to the tracker, recording its spans and table anchor."""
        if isinstance(block, Heading):
            rendered = block.text + LINE_TERMINATOR
            start = tracker.append(rendered)
            formats.append(FormatSpan(kind=FormatKind.heading(block.level), start=start, end=tracker.cursor))
            logger.debug(f"Heading {block.level}: {block.text!r} -> [{start}, {tracker.cursor})")
        elif isinstance(block, CheckboxItem):
            glyph = CHECKBOX_CHECKED if block.checked else CHECKBOX_UNCHECKED
            self._render_inline_line(f"{glyph} ", block.text, tracker, formats)
        elif isinstance(block, BulletItem):
            self._render_inline_line(f"{BULLET_GLYPH} ", block.text, tracker, formats)
        elif isinstance(block, NumberedItem):
            self._render_inline_line(f"{block.ordinal}. ", block.text, tracker, formats)
        elif isinstance(block, HorizontalRule):
            tracker.append(HORIZONTAL_RULE_TEXT + LINE_TERMINATOR)
        elif isinstance(block, TableBlock):
            region = build_table_region(block.rows, tracker.cursor)
            if region is None:
                return
            tracker.append(LINE_TERMINATOR)
            tables.append(region)
            logger.debug(f"Table {region.row_count}x{region.col_count} anchored at {region.anchor_index}")
        elif isinstance(block, BlankLine):
            tracker.append(LINE_TERMINATOR)
        elif isinstance(block, Paragraph):
            self._render_inline_line("", block.text, tracker, formats)
        else:
            raise TypeError(f"Unknown block type: {type(block).__name__}")

    @staticmethod
    def _render_inline_line(prefix: str, payload: str, tracker: IndexTracker, formats: list[FormatSpan]) -> None:
        """Render `prefix + inline(payload) + newline`, positioning spans after the prefix."""
        content = apply_inline_formatting(payload, tracker.cursor + len(prefix), formats)
        tracker.append(prefix + content + LINE_TERMINATOR)


def parse_markdown(markdown_text: str, start_index: int = DEFAULT_START_INDEX) -> CompiledMarkdown:
    """Module-level shortcut for `MarkdownToDocsConverter().parse()`."""
    return MarkdownToDocsConverter().parse(markdown_text, start_index)
