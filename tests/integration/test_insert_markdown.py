"""
Integration tests for the insert_markdown tool.

The tool runs end to end against a mocked Docs service: service injection,
validation, parsing, request compilation and batch execution.
"""

from unittest.mock import AsyncMock, patch

import pytest

from core.errors import APIError, PermissionDeniedError
from gdocs import insert_markdown

USER = "user@example.com"


@pytest.fixture
def docs_service(mock_docs_service):
    with patch(
        "auth.service_decorator.get_authenticated_google_service",
        new=AsyncMock(return_value=(mock_docs_service, USER)),
    ):
        yield mock_docs_service


class TestInsertMarkdownRequests:
    @pytest.mark.asyncio
    async def test_heading_and_bold_at_document_start(self, docs_service, batch_requests):
        result = await insert_markdown.fn(
            user_google_email=USER, document_id="doc123", markdown="# Title\n\nHello **world**!", index=1
        )

        (batch,) = batch_requests(docs_service)
        assert batch[0] == {"insertText": {"location": {"index": 1}, "text": "Title\n\nHello world!\n"}}
        bold = batch[1]["updateTextStyle"]
        assert bold["range"] == {"startIndex": 14, "endIndex": 19}
        assert bold["textStyle"] == {"bold": True}
        heading = batch[2]["updateParagraphStyle"]
        assert heading["range"] == {"startIndex": 1, "endIndex": 7}
        assert heading["paragraphStyle"] == {"namedStyleType": "HEADING_1"}
        assert "Inserted markdown at index 1 in document doc123" in result
        assert "2 format(s), 0 table(s)" in result

    @pytest.mark.asyncio
    async def test_defaults_to_end_of_document(self, docs_service, batch_requests):
        result = await insert_markdown.fn(user_google_email=USER, document_id="doc123", markdown="appended")

        (batch,) = batch_requests(docs_service)
        assert batch[0]["insertText"]["location"]["index"] == 11
        assert "at index 11" in result

    @pytest.mark.asyncio
    async def test_offsets_follow_insertion_index(self, docs_service, batch_requests):
        await insert_markdown.fn(user_google_email=USER, document_id="doc123", markdown="a *b*", index=40)

        (batch,) = batch_requests(docs_service)
        assert batch[0]["insertText"]["location"]["index"] == 40
        italic = batch[1]["updateTextStyle"]
        assert italic["range"] == {"startIndex": 42, "endIndex": 43}
        assert italic["textStyle"] == {"italic": True}

    @pytest.mark.asyncio
    async def test_lists_and_rules_are_plain_text(self, docs_service, batch_requests):
        markdown = "- [ ] todo\n- [x] done\n- item\n1. first\n---"

        await insert_markdown.fn(user_google_email=USER, document_id="doc123", markdown=markdown, index=1)

        (batch,) = batch_requests(docs_service)
        assert len(batch) == 1
        text = batch[0]["insertText"]["text"]
        assert text.splitlines() == ["☐ todo", "☑ done", "• item", "1. first", "—" * 27]


class TestInsertMarkdownTables:
    @pytest.mark.asyncio
    async def test_table_is_inserted_and_filled(self, docs_service, batch_requests, table_element_factory):
        docs_service.documents.return_value.get.return_value.execute.return_value = {
            "documentId": "doc123",
            "body": {
                "content": [
                    {"startIndex": 1, "endIndex": 2, "paragraph": {"elements": []}},
                    table_element_factory(2, 2, 2),
                ]
            },
        }

        result = await insert_markdown.fn(
            user_google_email=USER, document_id="doc123", markdown="| A | B |\n|---|---|\n| 1 | |", index=1
        )

        batches = batch_requests(docs_service)
        assert len(batches) == 3
        assert batches[1] == [{"insertTable": {"location": {"index": 1}, "rows": 2, "columns": 2}}]
        fills = [(r["insertText"]["location"]["index"], r["insertText"]["text"]) for r in batches[2]]
        assert fills == [(10, "1"), (7, "B"), (5, "A")]
        assert "1 table(s)" in result

    @pytest.mark.asyncio
    async def test_missing_table_is_reported(self, docs_service):
        result = await insert_markdown.fn(
            user_google_email=USER, document_id="doc123", markdown="| A |\n|---|\n| 1 |", index=1
        )

        assert "1 table(s), 1 table(s) not populated (anchors: 1)" in result


class TestInsertMarkdownErrors:
    @pytest.mark.asyncio
    async def test_rejected_batch_raises_api_error(self, docs_service, http_error_factory):
        docs_service.documents.return_value.batchUpdate.return_value.execute.side_effect = http_error_factory(
            400, "Index 500 must be less than the end index of the referenced segment, 12."
        )

        with pytest.raises(APIError) as exc_info:
            await insert_markdown.fn(user_google_email=USER, document_id="doc123", markdown="text", index=500)

        assert exc_info.value.status_code == 400
        assert exc_info.value.operation == "insert_text"
        assert "Index 500" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_permission_denied(self, docs_service, http_error_factory):
        docs_service.documents.return_value.get.return_value.execute.side_effect = http_error_factory(403)

        with pytest.raises(PermissionDeniedError):
            await insert_markdown.fn(user_google_email=USER, document_id="doc123", markdown="text")

    @pytest.mark.asyncio
    async def test_invalid_document_id_makes_no_calls(self, docs_service):
        result = await insert_markdown.fn(user_google_email=USER, document_id="../etc", markdown="text")

        assert result.startswith("Error: Document ID contains invalid characters")
        docs_service.documents.return_value.batchUpdate.assert_not_called()
