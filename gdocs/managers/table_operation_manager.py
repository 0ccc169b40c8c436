"""
Table Operation Manager

Handles the two round trips each markdown table needs: the structural
`insertTable`, then a fresh `documents.get` to find the new cells and a
batch of cell text inserts.
"""

import asyncio
import logging
from typing import Any

from googleapiclient.errors import HttpError

from core.errors import TableFillError, api_error_from_http
from gdocs.docs_helpers import to_requests
from gdocs.edit_compiler import TableInsertion, build_cell_fill_ops

logger = logging.getLogger(__name__)


class TableOperationManager:
    """Inserts and populates tables compiled from markdown."""

    def __init__(self, service: Any):
        """
        Args:
            service: Google Docs API service instance
        """
        self.service = service

    async def _batch_update(self, document_id: str, requests: list[dict[str, Any]]) -> dict[str, Any]:
        return await asyncio.to_thread(
            self.service.documents().batchUpdate(documentId=document_id, body={"requests": requests}).execute
        )

    async def _get_document(self, document_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self.service.documents().get(documentId=document_id).execute)

    async def insert_and_fill_table(self, document_id: str, table: TableInsertion, tables_inserted: int = 0) -> bool:
        """
        Insert one table and fill its cells.

        Args:
            document_id: ID of the document to update
            table: The region and its structural insert op
            tables_inserted: Tables already inserted before this one

        Returns:
            True when the cells were filled, False when the new table could not
            be located in the re-read document and the fill was skipped.

        Raises:
            APIError: The structural insert or the document read was rejected.
            TableFillError: The table exists but its cell inserts were rejected.
        """
        region = table.region
        logger.debug(f"Inserting {region.row_count}x{region.col_count} table at index {region.anchor_index}")

        try:
            await self._batch_update(document_id, [table.insert_op.to_request()])
        except HttpError as error:
            raise api_error_from_http(error, "insert_table") from error

        if not any(cell for row in region.rows for cell in row):
            logger.debug(f"Table at {region.anchor_index} has no cell text to insert")
            return True

        try:
            doc = await self._get_document(document_id)
        except HttpError as error:
            raise api_error_from_http(error, "get_document") from error

        fill_ops = build_cell_fill_ops(region, doc)
        if fill_ops is None:
            return False
        if not fill_ops:
            logger.debug(f"Table at {region.anchor_index} has no cell text to insert")
            return True

        try:
            await self._batch_update(document_id, to_requests(fill_ops))
        except HttpError as error:
            api_error = api_error_from_http(error, "fill_table")
            logger.error(f"Cell fill failed for table at index {region.anchor_index}: {api_error}")
            raise TableFillError(
                f"{api_error} (table at index {region.anchor_index} was inserted but left empty; "
                f"{tables_inserted} table(s) inserted before it)",
                status_code=api_error.status_code,
                anchor_index=region.anchor_index,
                tables_inserted=tables_inserted,
            ) from error

        logger.debug(f"Filled {len(fill_ops)} cell(s) for table at index {region.anchor_index}")
        return True
