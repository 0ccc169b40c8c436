"""
Validation Manager

Centralized parameter checks for the Google Docs tools. Every method
returns an `(is_valid, error_message)` tuple so tools can report a readable
error instead of calling the API with bad input.
"""

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)


class ValidationManager:
    """Validates tool parameters before any API call is made."""

    def __init__(self):
        self.validation_rules = self._setup_validation_rules()

    def _setup_validation_rules(self) -> dict[str, Any]:
        return {
            "document_id_pattern": r"^[a-zA-Z0-9_-]+$",
            "max_title_length": 1000,
            "max_markdown_length": 1_000_000,
            "max_table_rows": 1000,
            "max_table_columns": 20,
        }

    def validate_document_id(self, document_id: str) -> tuple[bool, str]:
        if not document_id:
            return False, "Document ID cannot be empty"

        if not isinstance(document_id, str):
            return False, f"Document ID must be a string, got {type(document_id).__name__}"

        if not re.match(self.validation_rules["document_id_pattern"], document_id):
            return False, "Document ID contains invalid characters (allowed: letters, digits, '-' and '_')"

        return True, ""

    def validate_title(self, title: str) -> tuple[bool, str]:
        if not isinstance(title, str) or not title.strip():
            return False, "Title cannot be empty"

        max_length = self.validation_rules["max_title_length"]
        if len(title) > max_length:
            return False, f"Title too long ({len(title)} characters). Maximum: {max_length}"

        return True, ""

    def validate_markdown(self, markdown_text: str) -> tuple[bool, str]:
        """Markdown must be a string within the size limit; empty or blank text is allowed."""
        if not isinstance(markdown_text, str):
            return False, f"Markdown must be a string, got {type(markdown_text).__name__}"

        max_length = self.validation_rules["max_markdown_length"]
        if len(markdown_text) > max_length:
            return False, f"Markdown too long ({len(markdown_text)} characters). Maximum: {max_length}"

        return True, ""

    def validate_table_dimensions(self, rows: int, columns: int) -> tuple[bool, str]:
        for name, value in (("Rows", rows), ("Columns", columns)):
            if isinstance(value, bool) or not isinstance(value, int):
                return False, f"{name} must be an integer, got {type(value).__name__}"
            if value < 1:
                return False, f"{name} must be at least 1, got {value}"
            limit = self.validation_rules[f"max_table_{name.lower()}"]
            if value > limit:
                return False, f"{name} cannot exceed {limit}, got {value}"

        return True, ""

    def validate_table_data(self, data: list[list[str]] | None) -> tuple[bool, str]:
        """Table data is optional; when given it must be a list of rows, each a list of cell values."""
        if data is None:
            return True, ""

        if not isinstance(data, list):
            return False, f"Table data must be a list of rows, got {type(data).__name__}"

        for row_idx, row in enumerate(data):
            if not isinstance(row, list):
                return False, f"Row {row_idx} must be a list of cells, got {type(row).__name__}"
            for col_idx, cell in enumerate(row):
                if cell is not None and not isinstance(cell, (str, int, float)):
                    return False, f"Cell [{row_idx}][{col_idx}] must be text, got {type(cell).__name__}"

        return True, ""

    def validate_index(self, index: int, context: str = "Index") -> tuple[bool, str]:
        """Document indices are 1-based; index 0 is the segment start and cannot hold text."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False, f"{context} must be an integer, got {type(index).__name__}"

        if index < 1:
            return False, f"{context} must be at least 1 (document indices are 1-based), got {index}"

        return True, ""
