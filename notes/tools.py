"""
Notes / Google Docs MCP Tools

This module provides MCP tools for syncing notes with Google Docs: rendering a
document as Markdown, pulling a document into a note, linking notes to
documents, and pushing notes out to Google Docs.
"""

import logging

from core.container import get_container
from core.errors import NoteNotFoundError
from core.server import server
from core.utils import validate_note_id
from gdocs.markdown_renderer import convert_document_to_markdown
from notes.push import PushResult

logger = logging.getLogger(__name__)


def _format_push_result(result: PushResult) -> str:
    if not result.success:
        return f"Error: push to Google Docs failed: {result.error}"
    action = "Created" if result.is_new_document else "Updated"
    return f"{action} Google Doc (ID: {result.google_doc_id}). Link: {result.google_doc_url}"


@server.tool()
async def convert_google_doc_to_markdown(user_id: str, document_id: str) -> str:
    """
    Fetches a Google Doc and returns its content as Markdown.

    Args:
        user_id: User whose Google account owns or can read the document
        document_id: ID of the Google Doc

    Returns:
        str: The document rendered as Markdown.
    """
    logger.info(f"[convert_google_doc_to_markdown] User={user_id}, Doc={document_id}")
    document = await get_container().docs_client.fetch_document(user_id, document_id)
    return convert_document_to_markdown(document)


@server.tool()
async def sync_note_from_google_doc(user_id: str, note_id: str) -> str:
    """
    Replaces a Google note's content with its linked Google Doc, rendered as Markdown.

    Args:
        user_id: User whose Google account can read the document
        note_id: ID of a note linked to a Google Doc

    Returns:
        str: Confirmation message with the new content length.
    """
    logger.info(f"[sync_note_from_google_doc] User={user_id}, Note={note_id}")
    note = await get_container().google_notes.save_content_from_google_doc(note_id, user_id)
    return (
        f"Synced note '{note.title}' (ID: {note.id}) from Google Doc {note.google_doc_id}: "
        f"{len(note.content)} chars."
    )


@server.tool()
async def stage_note_from_google_doc(user_id: str, note_id: str) -> str:
    """
    Stages a Google note's linked document as Markdown for merging, without touching the note's content.

    Args:
        user_id: User whose Google account can read the document
        note_id: ID of a note linked to a Google Doc

    Returns:
        str: Confirmation message with the staged content length.
    """
    logger.info(f"[stage_note_from_google_doc] User={user_id}, Note={note_id}")
    note = await get_container().google_notes.stage_content_from_google_doc(note_id, user_id)
    staged = note.google_doc_content or ""
    return f"Staged Google Doc {note.google_doc_id} for note '{note.title}' (ID: {note.id}): {len(staged)} chars."


@server.tool()
async def link_google_doc_to_note(note_id: str, document_id: str) -> str:
    """
    Links an existing note to an existing Google Doc, making it a Google note.

    Args:
        note_id: ID of the note
        document_id: ID of the Google Doc

    Returns:
        str: Confirmation message.
    """
    logger.info(f"[link_google_doc_to_note] Note={note_id}, Doc={document_id}")
    container = get_container()
    note = container.note_store.get_note(validate_note_id(note_id))
    if note is None:
        raise NoteNotFoundError(note_id)
    note = container.google_notes.assign_google_doc_id(note, document_id)
    return f"Linked note '{note.title}' (ID: {note.id}) to Google Doc {note.google_doc_id}."


@server.tool()
async def create_note_from_google_doc(user_id: str, document_id: str) -> str:
    """
    Creates a new Google note for an existing Google Doc.

    Args:
        user_id: User whose Google account can read the document
        document_id: ID of the Google Doc

    Returns:
        str: Confirmation message with the new note ID.
    """
    logger.info(f"[create_note_from_google_doc] User={user_id}, Doc={document_id}")
    note = await get_container().google_notes.create_google_note_from_doc_id(user_id, document_id)
    return f"Created Google note '{note.title}' (ID: {note.id}) for Google Doc {document_id}."


@server.tool()
async def push_note_to_google_doc(
    user_id: str,
    note_id: str,
    convert_to_google_note: bool = False,
    section_title: str | None = None,
) -> str:
    """
    Pushes a note to Google Docs.

    A Google note is appended to its linked document as a new section; any other
    note is written to a new document.

    Args:
        user_id: User whose Google account receives the document
        note_id: ID of the note to push
        convert_to_google_note: Link a regular note to the newly created document
        section_title: Title of the appended section for Google notes (default: "Update - <date>")

    Returns:
        str: Confirmation message with document ID and link, or an error message.
    """
    logger.info(f"[push_note_to_google_doc] User={user_id}, Note={note_id}, convert={convert_to_google_note}")
    result = await get_container().push_service.push_note(note_id, user_id, convert_to_google_note, section_title)
    return _format_push_result(result)


@server.tool()
async def push_notes_to_google_doc(user_id: str, note_ids: list[str], document_title: str) -> str:
    """
    Combines several notes into one new Google Doc, each under its own title header.

    Args:
        user_id: User whose Google account receives the document
        note_ids: IDs of the notes, in document order
        document_title: Title of the new document

    Returns:
        str: Confirmation message with document ID and link, or an error message.
    """
    logger.info(f"[push_notes_to_google_doc] User={user_id}, Notes={len(note_ids)}, Title='{document_title}'")
    result = await get_container().push_service.push_notes(note_ids, user_id, document_title)
    return _format_push_result(result)
