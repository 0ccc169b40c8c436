"""Shared pytest fixtures for gdocs-markdown-mcp tests."""

import json
import tempfile
from unittest.mock import MagicMock

import pytest
from googleapiclient.errors import HttpError


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


def make_table_element(start_index: int, rows: int, columns: int) -> dict:
    """
    Build a documents.get table element the way the Docs API lays one out.

    Each cell holds a single empty paragraph; cell content starts one index
    after the cell itself, and every row and the table add one index.
    """
    cursor = start_index + 1
    table_rows = []
    for _ in range(rows):
        cursor += 1
        cells = []
        for _ in range(columns):
            content_start = cursor + 1
            cells.append(
                {
                    "startIndex": cursor,
                    "endIndex": content_start + 1,
                    "content": [{"startIndex": content_start, "endIndex": content_start + 1, "paragraph": {}}],
                }
            )
            cursor = content_start + 1
        table_rows.append({"tableCells": cells})
    return {
        "startIndex": start_index,
        "endIndex": cursor + 1,
        "table": {"rows": rows, "columns": columns, "tableRows": table_rows},
    }


@pytest.fixture
def table_element_factory():
    return make_table_element


@pytest.fixture
def mock_docs_service():
    """
    Create a mock Google Docs service.

    documents().get() returns a body ending at index 12 by default;
    tests override the return values they care about.
    """
    service = MagicMock()
    documents = service.documents.return_value
    documents.create.return_value.execute.return_value = {"documentId": "new_doc_123", "title": "Test"}
    documents.get.return_value.execute.return_value = {
        "documentId": "doc123",
        "title": "Test",
        "body": {
            "content": [
                {"startIndex": 0, "endIndex": 1, "sectionBreak": {}},
                {
                    "startIndex": 1,
                    "endIndex": 12,
                    "paragraph": {"elements": [{"textRun": {"content": "Hello World\n"}}]},
                },
            ]
        },
    }
    documents.batchUpdate.return_value.execute.return_value = {"replies": []}
    return service


def _batch_update_requests(service) -> list[list[dict]]:
    """The `requests` list of every batchUpdate call made on a mock service, in order."""
    return [call.kwargs["body"]["requests"] for call in service.documents.return_value.batchUpdate.call_args_list]


@pytest.fixture
def batch_requests():
    return _batch_update_requests


@pytest.fixture
def http_error_factory():
    """Build a googleapiclient HttpError with a given status and API message."""

    def _make(status: int, message: str = "Invalid requests[0]"):
        content = json.dumps({"error": {"code": status, "message": message}}).encode("utf-8")
        return HttpError(resp=MagicMock(status=status, reason="Error"), content=content)

    return _make


@pytest.fixture
def sample_credentials():
    """Create sample OAuth credentials for testing."""
    return {
        "token": "test_access_token",
        "refresh_token": "test_refresh_token",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_id": "test_client_id",
        "client_secret": "test_client_secret",
        "scopes": ["https://www.googleapis.com/auth/documents"],
    }


@pytest.fixture
def env_override(monkeypatch):
    """Helper to override environment variables."""

    def _override(**kwargs):
        for key, value in kwargs.items():
            if value is None:
                monkeypatch.delenv(key, raising=False)
            else:
                monkeypatch.setenv(key, value)

    return _override
