"""
Block segmentation for the Markdown subset supported by the Docs converter.

`segment_markdown` walks the source line by line and classifies each line by
fixed-prefix matching. Table blocks consume every following pipe-delimited
line. The result is an ordered list of immutable Block values; rendering and
index tracking happen in `gdocs/markdown_parser.py`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gdocs.markdown_tables import extract_table_rows, is_table_line

logger = logging.getLogger(__name__)

HEADING_PREFIXES: tuple[tuple[str, int], ...] = (("# ", 1), ("## ", 2), ("### ", 3))
UNCHECKED_PREFIXES = ("- [ ] ", "* [ ] ")
CHECKED_PREFIXES = ("- [x] ", "* [x] ", "- [X] ", "* [X] ")
CHECKBOX_PREFIX_LEN = 6
BULLET_PREFIXES = ("- ", "* ")
HORIZONTAL_RULE = "---"
ASCII_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class CheckboxItem:
    checked: bool
    text: str


@dataclass(frozen=True)
class BulletItem:
    text: str


@dataclass(frozen=True)
class NumberedItem:
    # Source digits kept verbatim so "01. x" renders as "01. "
    ordinal: str
    text: str


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class TableBlock:
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class BlankLine:
    pass


@dataclass(frozen=True)
class Paragraph:
    text: str


Block = Heading | CheckboxItem | BulletItem | NumberedItem | HorizontalRule | TableBlock | BlankLine | Paragraph


def split_lines(markdown: str) -> list[str]:
    """
    Split source text into lines.

    Splits on `\\n` only and drops a trailing `\\r`, so CRLF input behaves like
    LF input. A terminating newline does not produce an extra empty line.
    """
    if not markdown:
        return []
    lines = markdown.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_numbered_item(line: str) -> tuple[str, str] | None:
    """
    Parse `"<digits>. <text>"` into (ordinal, text).

    The digit run ends at the first `.`; it must be non-empty and ASCII-only,
    and the dot must be followed by a space. Returns None otherwise.
    """
    dot = line.find(".")
    if dot <= 0:
        return None
    ordinal = line[:dot]
    if not set(ordinal) <= ASCII_DIGITS:
        return None
    rest = line[dot:]
    if not rest.startswith(". "):
        return None
    return ordinal, rest[2:]


def classify_line(line: str) -> Block:
    """Classify a single (right-trimmed, non-table) line."""
    for prefix, level in HEADING_PREFIXES:
        if line.startswith(prefix):
            return Heading(level=level, text=line[len(prefix) :])

    if line.startswith(UNCHECKED_PREFIXES):
        return CheckboxItem(checked=False, text=line[CHECKBOX_PREFIX_LEN:])
    if line.startswith(CHECKED_PREFIXES):
        return CheckboxItem(checked=True, text=line[CHECKBOX_PREFIX_LEN:])

    for prefix in BULLET_PREFIXES:
        if line.startswith(prefix):
            return BulletItem(text=line[len(prefix) :])

    numbered = parse_numbered_item(line)
    if numbered is not None:
        ordinal, text = numbered
        return NumberedItem(ordinal=ordinal, text=text)

    if line == HORIZONTAL_RULE:
        return HorizontalRule()
    if not line:
        return BlankLine()
    return Paragraph(text=line)


def segment_markdown(markdown: str) -> list[Block]:
    """
    Split Markdown into an ordered sequence of typed blocks.

    Args:
        markdown: Raw Markdown source.

    Returns:
        Blocks in source order. A table block covers every consecutive
        pipe-delimited line; its separator rows are already removed.
    """
    lines = [line.rstrip() for line in split_lines(markdown)]
    blocks: list[Block] = []
    i = 0

    while i < len(lines):
        line = lines[i]

        if is_table_line(line):
            end = i
            while end < len(lines) and is_table_line(lines[end]):
                end += 1
            rows = extract_table_rows(lines[i:end])
            blocks.append(TableBlock(rows=tuple(tuple(row) for row in rows)))
            logger.debug(f"Table block: lines {i}-{end - 1}, {len(rows)} data row(s)")
            i = end
            continue

        blocks.append(classify_line(line))
        i += 1

    return blocks
