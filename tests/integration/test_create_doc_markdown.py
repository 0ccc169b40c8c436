"""Integration tests for the create_doc_from_markdown tool."""

from unittest.mock import AsyncMock, patch

import pytest

from core.errors import APIError, TableFillError
from gdocs import create_doc_from_markdown

USER = "user@example.com"

README = """# Project

Status: **active**

## Tasks
- [x] parser
- [ ] tables

| Name | Owner |
|------|-------|
| docs | `ana` |
"""


@pytest.fixture
def docs_service(mock_docs_service):
    with patch(
        "auth.service_decorator.get_authenticated_google_service",
        new=AsyncMock(return_value=(mock_docs_service, USER)),
    ):
        yield mock_docs_service


def _document_with_table(element):
    return {
        "documentId": "new_doc_123",
        "body": {"content": [{"startIndex": 1, "endIndex": element["startIndex"], "paragraph": {}}, element]},
    }


class TestCreateDocFromMarkdown:
    @pytest.mark.asyncio
    async def test_creates_document_with_title(self, docs_service, batch_requests):
        result = await create_doc_from_markdown.fn(user_google_email=USER, title="Notes", markdown="Hello")

        docs_service.documents.return_value.create.assert_called_once_with(body={"title": "Notes"})
        (batch,) = batch_requests(docs_service)
        assert batch == [{"insertText": {"location": {"index": 1}, "text": "Hello\n"}}]
        assert docs_service.documents.return_value.batchUpdate.call_args.kwargs["documentId"] == "new_doc_123"
        assert result.startswith("Created Google Doc 'Notes' (ID: new_doc_123) for user@example.com")
        assert result.endswith("Link: https://docs.google.com/document/d/new_doc_123/edit")

    @pytest.mark.asyncio
    async def test_full_document(self, docs_service, batch_requests, table_element_factory):
        # "Project\n\nStatus: active\n\nTasks\n☑ parser\n☐ tables\n\n" is 50 characters long
        anchor = 51
        docs_service.documents.return_value.get.return_value.execute.return_value = _document_with_table(
            table_element_factory(anchor + 1, 2, 2)
        )

        result = await create_doc_from_markdown.fn(user_google_email=USER, title="Readme", markdown=README)

        batches = batch_requests(docs_service)
        assert len(batches) == 3

        text_batch = batches[0]
        text = text_batch[0]["insertText"]["text"]
        assert text == "Project\n\nStatus: active\n\nTasks\n☑ parser\n☐ tables\n\n\n"
        styles = [list(request)[0] for request in text_batch[1:]]
        assert styles == ["updateParagraphStyle", "updateTextStyle", "updateParagraphStyle"]
        starts = [request[styles[i]]["range"]["startIndex"] for i, request in enumerate(text_batch[1:])]
        assert starts == sorted(starts, reverse=True)

        assert batches[1] == [{"insertTable": {"location": {"index": anchor}, "rows": 2, "columns": 2}}]
        assert [r["insertText"]["text"] for r in batches[2]] == ["`ana`", "docs", "Owner", "Name"]

        assert "3 format(s), 1 table(s)" in result
        assert "not populated" not in result

    @pytest.mark.asyncio
    async def test_content_failure_names_created_document(
        self, docs_service, http_error_factory, table_element_factory
    ):
        docs_service.documents.return_value.get.return_value.execute.return_value = _document_with_table(
            table_element_factory(2, 1, 1)
        )
        docs_service.documents.return_value.batchUpdate.return_value.execute.side_effect = [
            {"replies": []},
            {"replies": []},
            http_error_factory(400, "Invalid requests[0].insertText"),
        ]

        with pytest.raises(APIError) as exc_info:
            await create_doc_from_markdown.fn(user_google_email=USER, title="T", markdown="| x |\n|---|")

        error = exc_info.value
        assert error.document_id == "new_doc_123"
        assert "Created Google Doc 'T' (ID: new_doc_123" in str(error)
        assert error.operation == "fill_table"
        assert error.status_code == 400
        assert isinstance(error.__cause__, TableFillError)
        assert error.__cause__.tables_inserted == 0
        assert error.__cause__.anchor_index == 1

    @pytest.mark.asyncio
    async def test_create_failure(self, docs_service, http_error_factory):
        docs_service.documents.return_value.create.return_value.execute.side_effect = http_error_factory(500)

        with pytest.raises(APIError) as exc_info:
            await create_doc_from_markdown.fn(user_google_email=USER, title="T", markdown="x")

        assert exc_info.value.operation == "create_doc_from_markdown"
        docs_service.documents.return_value.batchUpdate.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_markdown_creates_document(self, docs_service, batch_requests):
        result = await create_doc_from_markdown.fn(user_google_email=USER, title="Empty", markdown="")

        docs_service.documents.return_value.create.assert_called_once_with(body={"title": "Empty"})
        assert batch_requests(docs_service) == []
        assert "0 characters, 0 format(s), 0 table(s)" in result

    @pytest.mark.asyncio
    async def test_first_batch_failure_names_created_document(self, docs_service, http_error_factory):
        docs_service.documents.return_value.batchUpdate.return_value.execute.side_effect = http_error_factory(400)

        with pytest.raises(APIError) as exc_info:
            await create_doc_from_markdown.fn(user_google_email=USER, title="T", markdown="# Hi")

        assert exc_info.value.document_id == "new_doc_123"
        assert exc_info.value.operation == "insert_text"
        assert "docs.google.com/document/d/new_doc_123" in str(exc_info.value)
