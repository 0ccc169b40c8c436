"""
Google Docs Reading Tools

This module provides MCP tools for reading document text and structure.
"""

import asyncio
import json
import logging
from typing import Any

from auth.service_decorator import require_google_service
from core.server import server
from core.utils import handle_http_errors
from gdocs.docs_structure import extract_headings, extract_text_content, get_body_content, last_body_end_index
from gdocs.managers import ValidationManager

logger = logging.getLogger(__name__)


@server.tool()
@handle_http_errors("get_doc_content", is_read_only=True, service_type="docs")
@require_google_service("docs", "docs_read")
async def get_doc_content(
    service: Any,
    user_google_email: str,
    document_id: str,
) -> str:
    """
    Retrieves the plain text content of a Google Doc.

    Tables are rendered row by row, with cells separated by " | ".

    Args:
        user_google_email: User's Google email address
        document_id: ID of the document to read

    Returns:
        str: Document title, ID and text content
    """
    logger.info(f"[get_doc_content] Invoked. Document ID: '{document_id}' for user '{user_google_email}'")

    is_valid, error_msg = ValidationManager().validate_document_id(document_id)
    if not is_valid:
        return f"Error: {error_msg}"

    doc = await asyncio.to_thread(service.documents().get(documentId=document_id).execute)
    title = doc.get("title", "Untitled")
    body_text = extract_text_content(get_body_content(doc))

    header = f'File: "{title}" (ID: {document_id})\nLink: https://docs.google.com/document/d/{document_id}/edit\n'
    return f"{header}\n--- CONTENT ---\n{body_text}"


@server.tool()
@handle_http_errors("inspect_doc_structure", is_read_only=True, service_type="docs")
@require_google_service("docs", "docs_read")
async def inspect_doc_structure(
    service: Any,
    user_google_email: str,
    document_id: str,
) -> str:
    """
    Lists the headings of a document and its total length.

    Use total_length - 1 as the index to append content at the end of the
    document, or a heading's end_index to insert content right after it.

    Args:
        user_google_email: User's Google email address
        document_id: ID of the document to inspect

    Returns:
        str: JSON with "headings" (level, text, start_index, end_index) and "total_length"
    """
    logger.debug(f"[inspect_doc_structure] Doc={document_id}")

    is_valid, error_msg = ValidationManager().validate_document_id(document_id)
    if not is_valid:
        return f"Error: {error_msg}"

    doc = await asyncio.to_thread(service.documents().get(documentId=document_id).execute)

    result = {
        "title": doc.get("title", ""),
        "headings": extract_headings(doc),
        "total_length": last_body_end_index(doc) or 1,
    }
    return json.dumps(result, indent=2, ensure_ascii=False)
