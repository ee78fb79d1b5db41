"""
Dependency Injection Container for notes-gdocs-sync.

Wires the credential store, note store and Google Docs client into the note
sync services. Tool functions resolve everything through `get_container()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from auth.credential_store import CredentialStore
    from gdocs.client import GoogleDocsClient
    from notes.google_notes import GoogleNoteService
    from notes.push import GooglePushService
    from notes.store import NoteStore

logger = logging.getLogger(__name__)


@dataclass
class Container:
    """
    Dependency injection container.

    Holds the credential store, note store and Docs client, and the services
    built on top of them. Anything not provided defaults to the standard
    implementation.
    """

    credential_store: CredentialStore | None = None
    note_store: NoteStore | None = None
    docs_client: GoogleDocsClient | None = None
    google_notes: GoogleNoteService | None = None
    push_service: GooglePushService | None = None

    def __post_init__(self) -> None:
        """Initialize with defaults if not provided."""
        if self.credential_store is None:
            from auth.credential_store import get_credential_store

            self.credential_store = get_credential_store()

        if self.note_store is None:
            from notes.store import get_note_store

            self.note_store = get_note_store()

        if self.docs_client is None:
            from auth.google_auth import build_service
            from gdocs.client import GoogleDocsClient

            store = self.credential_store
            self.docs_client = GoogleDocsClient(
                lambda service_name, version, user_id: build_service(service_name, version, user_id, store)
            )

        if self.google_notes is None:
            from notes.google_notes import GoogleNoteService

            self.google_notes = GoogleNoteService(self.note_store, self.docs_client)

        if self.push_service is None:
            from notes.push import GooglePushService

            self.push_service = GooglePushService(self.note_store, self.docs_client, self.google_notes)


_container: Container | None = None


def get_container() -> Container:
    """The process-wide container, built with default services on first use."""
    global _container
    if _container is None:
        _container = Container()
        logger.debug("Initialized default dependency container")
    return _container


def set_container(container: Container) -> None:
    """Replace the process-wide container; tests use this to wire in fakes."""
    global _container
    _container = container
    logger.debug("Set custom dependency container")


def reset_container() -> None:
    """Drop the process-wide container so the next get_container() rebuilds it."""
    global _container
    _container = None
    logger.debug("Reset dependency container")
