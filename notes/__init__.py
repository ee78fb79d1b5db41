"""
Notes Package

Note model and storage, the Google note sync service, the push service, and
the MCP tools built on them.
"""

from notes.models import GOOGLE_NOTE_TAG, Note, is_google_note
from notes.store import JsonNoteStore, NoteStore, get_note_store, set_note_store

__all__ = [
    "GOOGLE_NOTE_TAG",
    "Note",
    "is_google_note",
    "NoteStore",
    "JsonNoteStore",
    "get_note_store",
    "set_note_store",
]
