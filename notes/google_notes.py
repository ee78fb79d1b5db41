"""
Google note service.

Links notes to Google Docs documents and pulls document content into notes as
Markdown.
"""

import logging

from core.errors import NoteNotFoundError
from core.utils import validate_document_id, validate_note_id
from gdocs.client import GoogleDocsClient
from gdocs.markdown_renderer import convert_document_to_markdown
from notes.models import GOOGLE_NOTE_TAG, Note, is_google_note, utc_now_iso
from notes.store import NoteStore

logger = logging.getLogger(__name__)


class GoogleNoteService:
    """Operations on notes backed by Google Docs documents."""

    def __init__(self, note_store: NoteStore, docs_client: GoogleDocsClient):
        self._notes = note_store
        self._docs = docs_client

    def get_all_google_notes(self) -> list[Note]:
        """All notes tagged as Google notes that have a linked document."""
        return [note for note in self._notes.get_notes_by_tag(GOOGLE_NOTE_TAG) if note.google_doc_id]

    def get_google_note(self, note_id: str) -> Note | None:
        """The note with `note_id` if it is a Google note, else None."""
        note = self._notes.get_note(validate_note_id(note_id))
        if note is None or not is_google_note(note):
            return None
        return note

    def _require_google_note(self, note_id: str) -> Note:
        note = self.get_google_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    async def _fetch_markdown(self, user_id: str, document_id: str) -> str:
        document = await self._docs.fetch_document(user_id, document_id)
        markdown = convert_document_to_markdown(document)
        logger.debug(f"Rendered document {document_id} to {len(markdown)} chars of Markdown")
        return markdown

    async def save_content_from_google_doc(self, note_id: str, user_id: str) -> Note:
        """Replace the note's content with its document rendered as Markdown."""
        note = self._require_google_note(note_id)
        markdown = await self._fetch_markdown(user_id, note.google_doc_id)
        logger.info(f"Saving Google Doc {note.google_doc_id} into note {note.id}")
        return self._notes.update_note_content(note.id, markdown)

    async def stage_content_from_google_doc(self, note_id: str, user_id: str) -> Note:
        """Store the rendered document in `google_doc_content`, leaving `content` for a later merge."""
        note = self._require_google_note(note_id)
        markdown = await self._fetch_markdown(user_id, note.google_doc_id)
        logger.info(f"Staging Google Doc {note.google_doc_id} for note {note.id}")
        return self._notes.update_note(note.id, google_doc_content=markdown)

    def assign_google_doc_id(self, note: Note, document_id: str) -> Note:
        """Link an existing note to a document and tag it as a Google note."""
        document_id = validate_document_id(document_id)
        tags = note.tags if GOOGLE_NOTE_TAG in note.tags else [*note.tags, GOOGLE_NOTE_TAG]
        logger.info(f"Linking note {note.id} to Google Doc {document_id}")
        return self._notes.update_note(note.id, google_doc_id=document_id, tags=tags)

    async def create_google_note_for_note(self, note: Note, user_id: str) -> Note:
        """Create an empty document titled after the note and link the note to it."""
        document_id = await self._docs.create_document(user_id, note.title)
        return self.assign_google_doc_id(note, document_id)

    async def create_google_note_from_doc_id(self, user_id: str, document_id: str) -> Note:
        """Create a new, empty Google note for an existing document."""
        document = await self._docs.fetch_document(user_id, validate_document_id(document_id))
        note = self._notes.create_note(
            title=document.title or "",
            content="",
            date=utc_now_iso(),
            google_doc_id=document_id,
            google_doc_content="",
        )
        logger.info(f"Created Google note {note.id} for document {document_id}")
        return self._notes.add_tag(note.id, GOOGLE_NOTE_TAG)

    async def get_untracked_google_docs(self, user_id: str) -> list[dict]:
        """The user's Google Docs that no Google note links to yet."""
        tracked = {note.google_doc_id for note in self.get_all_google_notes()}
        documents = await self._docs.list_documents(user_id)
        return [doc for doc in documents if doc.get("id") not in tracked]

    def delete_google_note(self, note_id: str) -> bool:
        """Soft-delete a Google note. The linked document is left untouched."""
        return self._notes.delete_note(validate_note_id(note_id))
