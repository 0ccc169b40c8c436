"""
Google Docs Operation Managers

This package provides high-level manager classes for executing compiled
markdown edits, keeping API sequencing out of the tools module.
"""

from .markdown_operation_manager import MarkdownApplyResult, MarkdownOperationManager
from .table_operation_manager import TableOperationManager
from .validation_manager import ValidationManager

__all__ = [
    "MarkdownApplyResult",
    "MarkdownOperationManager",
    "TableOperationManager",
    "ValidationManager",
]
