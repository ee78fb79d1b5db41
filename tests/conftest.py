"""Shared pytest fixtures for notes-gdocs-sync tests."""

from unittest.mock import MagicMock

import pytest

from auth.credential_store import set_credential_store
from core.config import reset_config
from core.container import reset_container
from notes.store import set_note_store


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point every configured path at a per-test directory."""
    monkeypatch.setenv("NOTES_SYNC_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.delenv("NOTES_SYNC_CREDENTIALS_DIR", raising=False)
    monkeypatch.delenv("NOTES_SYNC_NOTES_PATH", raising=False)
    config = reset_config()
    yield config
    reset_container()
    set_note_store(None)
    set_credential_store(None)
    reset_config()


@pytest.fixture
def mock_docs_service():
    """Create a mock Google Docs service."""
    service = MagicMock()
    service.documents.return_value.get.return_value.execute.return_value = {
        "documentId": "doc123",
        "title": "Test Doc",
        "body": {
            "content": [
                {"endIndex": 1, "sectionBreak": {}},
                {
                    "startIndex": 1,
                    "endIndex": 13,
                    "paragraph": {"elements": [{"textRun": {"content": "Hello world\n"}}]},
                },
            ]
        },
    }
    service.documents.return_value.create.return_value.execute.return_value = {"documentId": "new_doc"}
    service.documents.return_value.batchUpdate.return_value.execute.return_value = {"replies": []}
    return service


@pytest.fixture
def mock_drive_service():
    """Create a mock Google Drive service."""
    service = MagicMock()
    service.files.return_value.list.return_value.execute.return_value = {
        "files": [
            {"id": "doc123", "name": "Test Doc"},
            {"id": "doc456", "name": "Other Doc"},
        ]
    }
    return service


@pytest.fixture
def service_factory(mock_docs_service, mock_drive_service):
    """Service factory returning the mock Docs / Drive services."""

    def _factory(service_name: str, version: str, user_id: str):
        return mock_docs_service if service_name == "docs" else mock_drive_service

    return _factory


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
