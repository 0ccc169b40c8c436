"""
Google Docs request builders and mutation operation types.

Each MutationOp is an immutable value that knows its target index and how to
serialize itself into a Docs API `batchUpdate` request dict.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

# Code span styling constants
CODE_FONT_FAMILY = "Courier New"
CODE_BACKGROUND_COLOR = {"red": 0.95, "green": 0.95, "blue": 0.95}


def create_insert_text_request(index: int, text: str) -> dict[str, Any]:
    """Create an insertText request at a document index."""
    return {"insertText": {"location": {"index": index}, "text": text}}


def create_insert_table_request(index: int, rows: int, columns: int) -> dict[str, Any]:
    """Create an insertTable request at a document index."""
    return {"insertTable": {"location": {"index": index}, "rows": rows, "columns": columns}}


def create_update_text_style_request(
    start_index: int, end_index: int, text_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    """Create an updateTextStyle request over [start_index, end_index)."""
    return {
        "updateTextStyle": {
            "range": {"startIndex": start_index, "endIndex": end_index},
            "textStyle": text_style,
            "fields": fields,
        }
    }


def create_update_paragraph_style_request(
    start_index: int, end_index: int, paragraph_style: dict[str, Any], fields: str
) -> dict[str, Any]:
    """Create an updateParagraphStyle request over [start_index, end_index)."""
    return {
        "updateParagraphStyle": {
            "range": {"startIndex": start_index, "endIndex": end_index},
            "paragraphStyle": paragraph_style,
            "fields": fields,
        }
    }


def build_code_text_style() -> tuple[dict[str, Any], str]:
    """Monospace font on a light gray background, as used for inline code."""
    style = {
        "weightedFontFamily": {"fontFamily": CODE_FONT_FAMILY},
        "backgroundColor": {"color": {"rgbColor": dict(CODE_BACKGROUND_COLOR)}},
    }
    return style, "weightedFontFamily,backgroundColor"


@dataclass(frozen=True)
class InsertText:
    index: int
    text: str

    def to_request(self) -> dict[str, Any]:
        return create_insert_text_request(self.index, self.text)


@dataclass(frozen=True)
class UpdateTextStyle:
    start: int
    end: int
    text_style: dict[str, Any]
    fields: str

    @property
    def index(self) -> int:
        return self.start

    def to_request(self) -> dict[str, Any]:
        return create_update_text_style_request(self.start, self.end, self.text_style, self.fields)


@dataclass(frozen=True)
class UpdateParagraphStyle:
    start: int
    end: int
    paragraph_style: dict[str, Any]
    fields: str

    @property
    def index(self) -> int:
        return self.start

    def to_request(self) -> dict[str, Any]:
        return create_update_paragraph_style_request(self.start, self.end, self.paragraph_style, self.fields)


@dataclass(frozen=True)
class InsertTable:
    index: int
    rows: int
    columns: int

    def to_request(self) -> dict[str, Any]:
        return create_insert_table_request(self.index, self.rows, self.columns)


@dataclass(frozen=True)
class InsertCellText:
    index: int
    text: str

    def to_request(self) -> dict[str, Any]:
        return create_insert_text_request(self.index, self.text)


MutationOp = InsertText | UpdateTextStyle | UpdateParagraphStyle | InsertTable | InsertCellText

# Operations that change document length; order matters for these
POSITIONAL_OPS: tuple[type, ...] = (InsertText, InsertTable, InsertCellText)


def to_requests(ops: list[MutationOp]) -> list[dict[str, Any]]:
    """Serialize operations into the `requests` list of a batchUpdate body."""
    return [op.to_request() for op in ops]
