"""Fixtures for note service tests: a JSON note store and a Docs client on mock services."""

import pytest

from gdocs.client import GoogleDocsClient
from notes.models import GOOGLE_NOTE_TAG
from notes.store import JsonNoteStore


@pytest.fixture
def note_store(tmp_path):
    return JsonNoteStore(str(tmp_path / "notes.json"))


@pytest.fixture
def docs_client(service_factory):
    return GoogleDocsClient(service_factory=service_factory)


@pytest.fixture
def google_note(note_store):
    """A note linked to the mock document doc123."""
    return note_store.create_note(
        "Linked",
        "Local content",
        tags=[GOOGLE_NOTE_TAG],
        google_doc_id="doc123",
    )


@pytest.fixture
def plain_note(note_store):
    return note_store.create_note("Plain", "# Hi\n\nSome **text**")
