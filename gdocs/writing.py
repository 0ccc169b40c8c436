"""
Google Docs Writing Tools

This module provides MCP tools that render Markdown into Google Docs.
"""

import asyncio
import logging
from typing import Any

from auth.service_decorator import require_google_service
from core.errors import APIError
from core.server import server
from core.utils import handle_http_errors
from gdocs.docs_structure import get_append_index
from gdocs.managers import MarkdownOperationManager, ValidationManager

logger = logging.getLogger(__name__)


def _doc_link(document_id: str) -> str:
    return f"https://docs.google.com/document/d/{document_id}/edit"


@server.tool()
@handle_http_errors("create_doc_from_markdown", service_type="docs")
@require_google_service("docs", "docs_write")
async def create_doc_from_markdown(
    service: Any,
    user_google_email: str,
    title: str,
    markdown: str,
) -> str:
    """
    Creates a new Google Doc and fills it with formatted Markdown content.

    Supported Markdown:
    - Headings: #, ##, ### (become Heading 1-3 paragraph styles)
    - Inline: **bold**, *italic*, `code`
    - Task lists: - [ ] todo, - [x] done (rendered as ☐ / ☑)
    - Bullet lists (- item, * item) and numbered lists (1. item)
    - Horizontal rules (---)
    - Pipe tables (| A | B |), inserted as native Docs tables

    Args:
        user_google_email: User's Google email address
        title: Title of the new document
        markdown: Markdown content to render

    Returns:
        str: Confirmation message with document ID, link and a summary of applied formatting
    """
    logger.info(f"[create_doc_from_markdown] Invoked. Email: '{user_google_email}', Title='{title}'")

    validator = ValidationManager()

    is_valid, error_msg = validator.validate_title(title)
    if not is_valid:
        return f"Error: {error_msg}"

    is_valid, error_msg = validator.validate_markdown(markdown)
    if not is_valid:
        return f"Error: {error_msg}"

    doc = await asyncio.to_thread(service.documents().create(body={"title": title}).execute)
    document_id = doc.get("documentId")
    logger.info(f"[create_doc_from_markdown] Created document {document_id}")

    link = _doc_link(document_id)
    manager = MarkdownOperationManager(service)
    try:
        result = await manager.apply_markdown(document_id, markdown, start_index=1)
    except APIError as e:
        logger.error(f"[create_doc_from_markdown] Document {document_id} created but content failed: {e}")
        raise APIError(
            f"Created Google Doc '{title}' (ID: {document_id}, Link: {link}) but writing its content failed: {e}",
            status_code=e.status_code,
            operation=e.operation,
            document_id=document_id,
        ) from e

    return (
        f"Created Google Doc '{title}' (ID: {document_id}) for {user_google_email}: "
        f"{result.describe()}. Link: {link}"
    )


@server.tool()
@handle_http_errors("insert_markdown", service_type="docs")
@require_google_service("docs", "docs_write")
async def insert_markdown(
    service: Any,
    user_google_email: str,
    document_id: str,
    markdown: str,
    index: int | None = None,
) -> str:
    """
    Inserts formatted Markdown content into an existing Google Doc.

    Text is inserted in one batch with all heading and inline styles; tables
    are inserted afterwards, last table first, and populated cell by cell.

    Args:
        user_google_email: User's Google email address
        document_id: ID of the document to update
        markdown: Markdown content to render
        index: Insertion index (1-based). Defaults to the end of the document.

    Returns:
        str: Confirmation message with insertion index and applied formatting counts
    """
    logger.info(f"[insert_markdown] Doc={document_id}, index={index}, length={len(markdown or '')}")

    validator = ValidationManager()

    is_valid, error_msg = validator.validate_document_id(document_id)
    if not is_valid:
        return f"Error: {error_msg}"

    is_valid, error_msg = validator.validate_markdown(markdown)
    if not is_valid:
        return f"Error: {error_msg}"

    if index is None:
        doc = await asyncio.to_thread(service.documents().get(documentId=document_id).execute)
        index = get_append_index(doc)
        logger.debug(f"[insert_markdown] No index given, appending at {index}")
    else:
        is_valid, error_msg = validator.validate_index(index)
        if not is_valid:
            return f"Error: {error_msg}"

    manager = MarkdownOperationManager(service)
    result = await manager.apply_markdown(document_id, markdown, start_index=index)

    link = _doc_link(document_id)
    return (
        f"Inserted markdown at index {result.start_index} in document {document_id} "
        f"({result.describe()}). Link: {link}"
    )
