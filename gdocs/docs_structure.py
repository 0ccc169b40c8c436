"""
Google Docs Document Structure Parsing

Helpers for navigating the JSON tree returned by `documents.get`: locating
tables and their cell insertion points, finding the end of the body, and
extracting plain text and headings for the reading tools.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


def get_body_content(doc_data: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the list of structural elements in the document body."""
    return doc_data.get("body", {}).get("content", []) or []


def last_body_end_index(doc_data: dict[str, Any]) -> int | None:
    """Return the endIndex of the last body element, or None for an empty body."""
    content = get_body_content(doc_data)
    if not content:
        return None
    return content[-1].get("endIndex")


def get_append_index(doc_data: dict[str, Any]) -> int:
    """
    Index at which text can be appended to the body.

    The body always ends with a newline that cannot be written past, so the
    insertion point is one before the final endIndex.
    """
    end_index = last_body_end_index(doc_data)
    return max((end_index or 2) - 1, 1)


def find_table_at_or_after(doc_data: dict[str, Any], anchor_index: int) -> dict[str, Any] | None:
    """
    Find the first body table whose startIndex is at or after `anchor_index`.

    After `insertTable` at index I, the Docs API places the table just past
    I, so this locates the table created by that request.
    """
    for element in get_body_content(doc_data):
        if "table" not in element:
            continue
        start = element.get("startIndex")
        if start is not None and start >= anchor_index:
            return element
    return None


def get_cell_insertion_index(cell: dict[str, Any]) -> int | None:
    """Return the startIndex of the first structural element inside a table cell."""
    content = cell.get("content") or []
    if not content:
        return None
    return content[0].get("startIndex")


def get_table_cell_indices(table_element: dict[str, Any]) -> list[list[int | None]]:
    """
    Build a row/column matrix of cell insertion indices for a table element.

    Cells whose content has no startIndex yield None.
    """
    matrix: list[list[int | None]] = []
    for row in table_element.get("table", {}).get("tableRows", []) or []:
        matrix.append([get_cell_insertion_index(cell) for cell in row.get("tableCells", []) or []])
    return matrix


def extract_paragraph_text(paragraph: dict[str, Any]) -> str:
    """Concatenate the textRun contents of a paragraph."""
    parts = []
    for element in paragraph.get("elements", []) or []:
        text_run = element.get("textRun")
        if text_run and "content" in text_run:
            parts.append(text_run["content"])
    return "".join(parts)


def extract_table_text(table: dict[str, Any]) -> str:
    """Render a table as text: cells joined by ' | ', rows by newlines."""
    rows = []
    for row in table.get("tableRows", []) or []:
        cells = [
            extract_text_content(cell.get("content", []) or []).rstrip("\n")
            for cell in row.get("tableCells", []) or []
        ]
        rows.append(" | ".join(cells))
    return "\n".join(rows)


def extract_text_content(elements: list[dict[str, Any]]) -> str:
    """Extract text from a list of structural elements (paragraphs and tables)."""
    blocks = []
    for element in elements:
        if "paragraph" in element:
            blocks.append(extract_paragraph_text(element["paragraph"]))
        elif "table" in element:
            blocks.append(extract_table_text(element["table"]) + "\n")
    return "".join(blocks)


def extract_headings(doc_data: dict[str, Any]) -> list[dict[str, Any]]:
    """
    List the headings in the document body.

    Returns:
        One dict per HEADING_n paragraph with level, text, start_index and end_index.
    """
    headings = []
    for element in get_body_content(doc_data):
        paragraph = element.get("paragraph")
        if not paragraph:
            continue
        style = paragraph.get("paragraphStyle", {}).get("namedStyleType", "")
        if not style.startswith("HEADING_"):
            continue
        try:
            level = int(style.rsplit("_", 1)[-1])
        except ValueError:
            level = 0
        headings.append(
            {
                "level": level,
                "text": extract_paragraph_text(paragraph).rstrip("\n"),
                "start_index": element.get("startIndex"),
                "end_index": element.get("endIndex"),
            }
        )
    return headings
