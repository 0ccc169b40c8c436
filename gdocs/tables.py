"""
Google Docs Table Tools

This module provides the MCP tool for inserting native tables with data.
"""

import asyncio
import logging
from typing import Any

from auth.service_decorator import require_google_service
from core.server import server
from core.utils import handle_http_errors
from gdocs.docs_structure import get_append_index
from gdocs.edit_compiler import build_table_insertion
from gdocs.managers import TableOperationManager, ValidationManager

logger = logging.getLogger(__name__)


@server.tool()
@handle_http_errors("insert_table", service_type="docs")
@require_google_service("docs", "docs_write")
async def insert_table(
    service: Any,
    user_google_email: str,
    document_id: str,
    rows: int,
    columns: int,
    data: list[list[str]] | None = None,
    index: int | None = None,
) -> str:
    """
    Inserts a native table into a Google Doc and optionally fills it.

    The table is created first; the document is then re-read to locate the
    new cells, which are filled from the last cell to the first.

    EXAMPLE DATA FORMAT:
    data = [
        ["Name", "Owner"],    # Row 0
        ["docs", "ana"],      # Row 1
    ]

    Rows or cells missing from `data` stay empty; values beyond
    `rows` x `columns` are ignored.

    Args:
        user_google_email: User's Google email address
        document_id: ID of the document to update
        rows: Number of table rows
        columns: Number of table columns
        data: Optional 2D list of cell text, one inner list per row
        index: Insertion index (1-based). Defaults to the end of the document.

    Returns:
        str: Confirmation with table size, insertion index and link
    """
    logger.info(f"[insert_table] Doc={document_id}, size={rows}x{columns}, index={index}")

    validator = ValidationManager()

    is_valid, error_msg = validator.validate_document_id(document_id)
    if not is_valid:
        return f"Error: {error_msg}"

    is_valid, error_msg = validator.validate_table_dimensions(rows, columns)
    if not is_valid:
        return f"Error: {error_msg}"

    is_valid, error_msg = validator.validate_table_data(data)
    if not is_valid:
        return f"Error: {error_msg}"

    if index is None:
        doc = await asyncio.to_thread(service.documents().get(documentId=document_id).execute)
        index = get_append_index(doc)
        logger.debug(f"[insert_table] No index given, appending at {index}")
    else:
        is_valid, error_msg = validator.validate_index(index)
        if not is_valid:
            return f"Error: {error_msg}"

    table = build_table_insertion(rows, columns, index, data)
    filled = await TableOperationManager(service).insert_and_fill_table(document_id, table)

    link = f"https://docs.google.com/document/d/{document_id}/edit"
    message = f"Inserted {rows}x{columns} table at index {index} in document {document_id}"
    if not filled:
        message += " (the new table could not be located, so its cells were not populated)"
    return f"{message}. Link: {link}"
