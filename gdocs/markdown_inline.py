"""
Inline formatting for bold, italic and code spans.

Delimiters are stripped from the rendered text and each matched span is
recorded as a FormatSpan in absolute document index space. Indices count
Python str characters (Unicode codepoints).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

BOLD_DELIMITER = "**"
ITALIC_DELIMITER = "*"
CODE_DELIMITER = "`"


class FormatKind(Enum):
    HEADING_1 = "HEADING_1"
    HEADING_2 = "HEADING_2"
    HEADING_3 = "HEADING_3"
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"

    @property
    def is_paragraph_style(self) -> bool:
        return self in HEADING_KINDS

    @classmethod
    def heading(cls, level: int) -> FormatKind:
        return HEADING_KINDS[level - 1]


HEADING_KINDS: tuple[FormatKind, ...] = (FormatKind.HEADING_1, FormatKind.HEADING_2, FormatKind.HEADING_3)


@dataclass(frozen=True)
class FormatSpan:
    """
    A formatting directive over the half-open range [start, end).

    Heading spans cover the rendered line including its trailing newline;
    inline spans cover only the de-delimited content.
    """

    kind: FormatKind
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(f"FormatSpan requires start < end, got [{self.start}, {self.end})")


def apply_inline_formatting(text: str, base_index: int, formats: list[FormatSpan]) -> str:
    """
    Strip inline delimiters from `text` and append a FormatSpan for each match.

    Delimiters are tested in priority order `**` (bold), `*` (italic), then
    backtick (code). A lone `*` only opens italic when it is not half of a
    `**` pair and its closing `*` does not start a `**`. A delimiter without
    a closing match is emitted literally and the scan advances one character.

    Args:
        text: The block's raw inline payload.
        base_index: Absolute index of the first rendered character.
        formats: Accumulator that receives the matched spans.

    Returns:
        The rendered text with matched delimiters removed.
    """
    result: list[str] = []
    rendered_len = 0
    pos = 0
    length = len(text)

    def emit_span(kind: FormatKind, content: str) -> None:
        nonlocal rendered_len
        start = base_index + rendered_len
        result.append(content)
        rendered_len += len(content)
        if content:
            formats.append(FormatSpan(kind=kind, start=start, end=start + len(content)))
            logger.debug(f"Inline {kind.value}: {content!r} -> [{start}, {start + len(content)})")

    while pos < length:
        if text.startswith(BOLD_DELIMITER, pos):
            close = text.find(BOLD_DELIMITER, pos + 2)
            if close != -1:
                emit_span(FormatKind.BOLD, text[pos + 2 : close])
                pos = close + 2
                continue

        if text.startswith(ITALIC_DELIMITER, pos) and not text.startswith(BOLD_DELIMITER, pos):
            close = text.find(ITALIC_DELIMITER, pos + 1)
            if close != -1 and not text.startswith(BOLD_DELIMITER, close):
                emit_span(FormatKind.ITALIC, text[pos + 1 : close])
                pos = close + 1
                continue

        if text.startswith(CODE_DELIMITER, pos):
            close = text.find(CODE_DELIMITER, pos + 1)
            if close != -1:
                emit_span(FormatKind.CODE, text[pos + 1 : close])
                pos = close + 1
                continue

        result.append(text[pos])
        rendered_len += 1
        pos += 1

    return "".join(result)
