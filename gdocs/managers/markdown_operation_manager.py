"""
Markdown Operation Manager

Runs a compiled markdown edit against a document: the text and style batch
first, then every table in descending anchor order.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from googleapiclient.errors import HttpError

from core.errors import api_error_from_http
from gdocs.docs_helpers import to_requests
from gdocs.edit_compiler import CompilationSummary, EditRequestCompiler
from gdocs.managers.table_operation_manager import TableOperationManager
from gdocs.markdown_parser import MarkdownToDocsConverter

logger = logging.getLogger(__name__)


@dataclass
class MarkdownApplyResult:
    document_id: str
    start_index: int
    end_index: int
    summary: CompilationSummary
    skipped_tables: list[int] = field(default_factory=list)

    def describe(self) -> str:
        """One-line description used in tool responses."""
        parts = [
            f"{self.summary.text_length} characters",
            f"{self.summary.formats_applied} format(s)",
            f"{self.summary.tables_inserted} table(s)",
        ]
        if self.skipped_tables:
            skipped = ", ".join(str(index) for index in self.skipped_tables)
            parts.append(f"{len(self.skipped_tables)} table(s) not populated (anchors: {skipped})")
        return ", ".join(parts)


class MarkdownOperationManager:
    """
    Applies markdown to a Google Doc.

    Network calls run strictly one after another. A rejected first batch
    aborts before any table is touched; a table failure leaves earlier
    tables and all text in place.
    """

    def __init__(self, service: Any):
        self.service = service
        self.converter = MarkdownToDocsConverter()
        self.compiler = EditRequestCompiler()
        self.table_manager = TableOperationManager(service)

    async def apply_markdown(self, document_id: str, markdown_text: str, start_index: int = 1) -> MarkdownApplyResult:
        """
        Compile `markdown_text` at `start_index` and execute it.

        Args:
            document_id: ID of the document to update
            markdown_text: Markdown source
            start_index: Insertion index in the document (1-based)

        Returns:
            MarkdownApplyResult with the summary counts and any skipped tables.

        Raises:
            APIError: The text batch, a table insert or a document read failed.
            TableFillError: A table was inserted but its cells could not be filled.
        """
        compiled = self.converter.parse(markdown_text, start_index)
        plan = self.compiler.compile(compiled)

        first_batch = plan.first_batch
        if first_batch:
            logger.info(
                f"Applying {len(plan.text_ops)} text insert(s) and {len(plan.format_ops)} style update(s) "
                f"to document {document_id}"
            )
            try:
                await asyncio.to_thread(
                    self.service.documents()
                    .batchUpdate(documentId=document_id, body={"requests": to_requests(first_batch)})
                    .execute
                )
            except HttpError as error:
                raise api_error_from_http(error, "insert_text") from error

        tables_inserted = 0
        skipped_tables: list[int] = []
        for table in plan.tables:
            filled = await self.table_manager.insert_and_fill_table(document_id, table, tables_inserted)
            tables_inserted += 1
            if not filled:
                skipped_tables.append(table.region.anchor_index)

        result = MarkdownApplyResult(
            document_id=document_id,
            start_index=compiled.start_index,
            end_index=compiled.end_index,
            summary=plan.summary(tables_inserted=tables_inserted),
            skipped_tables=skipped_tables,
        )
        logger.info(f"Applied markdown to document {document_id}: {result.describe()}")
        return result
