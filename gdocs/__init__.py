"""
Google Docs MCP Tools Package

This package provides MCP tools that render Markdown into Google Docs,
insert native tables and read back document content.
"""

from gdocs.reading import get_doc_content, inspect_doc_structure
from gdocs.tables import insert_table
from gdocs.writing import create_doc_from_markdown, insert_markdown

__all__ = [
    "get_doc_content",
    "inspect_doc_structure",
    "create_doc_from_markdown",
    "insert_markdown",
    "insert_table",
]
