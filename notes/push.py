"""
Push notes to Google Docs.

A Google note gets its content appended to its linked document as a new
section; any other note gets a new document. Several notes can also be
combined into one new document.
"""

import logging
from dataclasses import dataclass
from datetime import date

from core.errors import NoteNotFoundError, NotesSyncError, ValidationError
from core.utils import validate_note_id
from gdocs.client import GoogleDocsClient
from gdocs.markdown_parser import convert_markdown_to_document
from gdocs.models import Paragraph, ParagraphElement, ParagraphStyle, StructuralElement, TextRun, TextStyle
from notes.google_notes import GoogleNoteService
from notes.models import is_google_note
from notes.store import NoteStore

logger = logging.getLogger(__name__)


@dataclass
class PushResult:
    """Outcome of a push.

    Attributes:
        success: Whether the push completed.
        google_doc_id: Target document id (empty on failure).
        google_doc_url: Browser URL of the target document (empty on failure).
        is_new_document: True if a document was created.
        error: Failure message, if any.
    """

    success: bool
    google_doc_id: str = ""
    google_doc_url: str = ""
    is_new_document: bool = False
    error: str | None = None

    @classmethod
    def failed(cls, error: Exception) -> "PushResult":
        return cls(success=False, error=str(error))


def note_header(title: str) -> StructuralElement:
    """Bold `--- title ---` paragraph that separates combined notes."""
    run = TextRun(content=f"\n--- {title} ---\n\n", text_style=TextStyle(bold=True))
    return StructuralElement(
        paragraph=Paragraph(elements=[ParagraphElement(text_run=run)], paragraph_style=ParagraphStyle())
    )


def default_section_title() -> str:
    return f"Update - {date.today().isoformat()}"


class GooglePushService:
    """Writes note content into Google Docs."""

    def __init__(self, note_store: NoteStore, docs_client: GoogleDocsClient, google_notes: GoogleNoteService):
        self._notes = note_store
        self._docs = docs_client
        self._google_notes = google_notes

    async def push_note(
        self,
        note_id: str,
        user_id: str,
        convert_to_google_note: bool = False,
        section_title: str | None = None,
    ) -> PushResult:
        """
        Push one note to Google Docs.

        Args:
            note_id: The note to push.
            user_id: Owner of the Google account.
            convert_to_google_note: For a regular note, link it to the new document.
            section_title: Separator title when appending to a Google note's document.

        Returns:
            The push outcome. Failures are reported in `PushResult.error`, not raised.
        """
        try:
            note = self._notes.get_note(validate_note_id(note_id))
            if note is None:
                raise NoteNotFoundError(note_id)

            logger.info(f"Pushing note {note.id} for {user_id} (convert={convert_to_google_note})")
            content = convert_markdown_to_document(note.content, note.title)

            if is_google_note(note):
                await self._docs.append_section(
                    user_id, note.google_doc_id, content, section_title or default_section_title()
                )
                return PushResult(
                    success=True,
                    google_doc_id=note.google_doc_id,
                    google_doc_url=self._docs.document_url(note.google_doc_id),
                    is_new_document=False,
                )

            document_id = await self._docs.create_document_with_content(user_id, note.title, content)
            if convert_to_google_note:
                self._google_notes.assign_google_doc_id(note, document_id)

            return PushResult(
                success=True,
                google_doc_id=document_id,
                google_doc_url=self._docs.document_url(document_id),
                is_new_document=True,
            )
        except NotesSyncError as e:
            logger.error(f"Error pushing note {note_id} to Google Docs: {e}", exc_info=True)
            return PushResult.failed(e)
        except Exception as e:
            logger.exception(f"Unexpected error pushing note {note_id} to Google Docs: {e}")
            return PushResult.failed(e)

    async def push_notes(self, note_ids: list[str], user_id: str, document_title: str) -> PushResult:
        """Combine several notes into one new document, each under a bold title header."""
        try:
            logger.info(f"Pushing {len(note_ids)} note(s) for {user_id} into '{document_title}'")
            notes = [self._notes.get_note(validate_note_id(note_id)) for note_id in note_ids]
            notes = [note for note in notes if note is not None]
            if not notes:
                raise ValidationError("No valid notes found")

            content: list[StructuralElement] = []
            for note in notes:
                content.append(note_header(note.title))
                content.extend(convert_markdown_to_document(note.content).content)

            document_id = await self._docs.create_document_with_content(user_id, document_title, content)
            return PushResult(
                success=True,
                google_doc_id=document_id,
                google_doc_url=self._docs.document_url(document_id),
                is_new_document=True,
            )
        except NotesSyncError as e:
            logger.error(f"Error pushing notes to Google Docs: {e}", exc_info=True)
            return PushResult.failed(e)
        except Exception as e:
            logger.exception(f"Unexpected error pushing notes to Google Docs: {e}")
            return PushResult.failed(e)
