"""Note storage.

`NoteStore` is the interface the sync services depend on. `JsonNoteStore`
keeps every note in one JSON file and is thread-safe for concurrent access.
"""

import json
import logging
import os
import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any

from core.config import get_config
from core.errors import NoteNotFoundError, ValidationError
from notes.models import Note, utc_now_iso

logger = logging.getLogger(__name__)

# Fields callers may not change through update_note
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at"})


def _check_fields(fields: dict[str, Any], action: str) -> None:
    rejected = (set(fields) - set(Note.__dataclass_fields__)) | (set(fields) & IMMUTABLE_FIELDS)
    if rejected:
        raise ValidationError(f"Cannot {action} note field(s): {', '.join(sorted(rejected))}")


class NoteStore(ABC):
    """Abstract base class for note storage."""

    @abstractmethod
    def get_note(self, note_id: str) -> Note | None:
        """Get a note by id; deleted notes are not returned."""
        pass

    @abstractmethod
    def list_notes(self) -> list[Note]:
        """List all notes that are not deleted."""
        pass

    @abstractmethod
    def create_note(self, title: str, content: str = "", **fields: Any) -> Note:
        """Create and return a new note."""
        pass

    @abstractmethod
    def update_note(self, note_id: str, **fields: Any) -> Note:
        """Update fields of a note and return it."""
        pass

    @abstractmethod
    def delete_note(self, note_id: str) -> bool:
        """Soft-delete a note. Returns False if it does not exist."""
        pass

    def get_notes_by_tag(self, tag: str) -> list[Note]:
        """List notes carrying `tag`."""
        return [note for note in self.list_notes() if tag in note.tags]

    def update_note_content(self, note_id: str, markdown: str) -> Note:
        """Replace a note's Markdown content."""
        return self.update_note(note_id, content=markdown)

    def add_tag(self, note_id: str, tag: str) -> Note:
        """Add a tag to a note if it is not there yet."""
        note = self.get_note(note_id)
        if note is None:
            raise NoteNotFoundError(note_id)
        if tag in note.tags:
            return note
        return self.update_note(note_id, tags=[*note.tags, tag])


class JsonNoteStore(NoteStore):
    """Note store persisted to a single JSON file.

    Thread-safe for concurrent access.
    """

    def __init__(self, path: str | None = None) -> None:
        self._path = path or get_config().notes_path
        self._notes: dict[str, Note] = {}
        self._lock = threading.RLock()
        self._load()
        logger.info(f"JsonNoteStore initialized with {len(self._notes)} note(s) from {self._path}")

    def _load(self) -> None:
        """Load notes from disk."""
        with self._lock:
            if os.path.exists(self._path):
                with open(self._path) as f:
                    data = json.load(f)
                self._notes = {note_id: Note.from_dict(info) for note_id, info in data.items()}
            else:
                self._notes = {}

    def _save(self, notes: dict[str, Note]) -> None:
        """Save notes to disk."""
        with self._lock:
            notes_dir = os.path.dirname(self._path)
            if notes_dir and not os.path.exists(notes_dir):
                os.makedirs(notes_dir, exist_ok=True)

            with open(self._path, "w") as f:
                json.dump({note_id: note.to_dict() for note_id, note in notes.items()}, f, indent=2)

    def _commit(self, note: Note) -> None:
        """Write `note` to disk, then swap it in. A failed write leaves memory unchanged."""
        with self._lock:
            notes = {**self._notes, note.id: note}
            self._save(notes)
            self._notes = notes

    def get_note(self, note_id: str) -> Note | None:
        with self._lock:
            note = self._notes.get(note_id)
            if note is None or note.deleted:
                return None
            return note

    def list_notes(self) -> list[Note]:
        with self._lock:
            return [note for note in self._notes.values() if not note.deleted]

    def create_note(self, title: str, content: str = "", **fields: Any) -> Note:
        _check_fields(fields, "set")

        note = Note(id=uuid.uuid4().hex, title=title, content=content, **fields)
        self._commit(note)
        logger.info(f"Created note {note.id} ('{title}')")
        return note

    def update_note(self, note_id: str, **fields: Any) -> Note:
        _check_fields(fields, "update")

        with self._lock:
            note = self.get_note(note_id)
            if note is None:
                raise NoteNotFoundError(note_id)
            note = replace(note, **fields, updated_at=utc_now_iso())
            self._commit(note)

        logger.debug(f"Updated note {note_id}: {sorted(fields)}")
        return note

    def delete_note(self, note_id: str) -> bool:
        with self._lock:
            note = self.get_note(note_id)
            if note is None:
                return False
            self._commit(replace(note, deleted=True, updated_at=utc_now_iso()))
        logger.info(f"Deleted note {note_id}")
        return True


_note_store: NoteStore | None = None


def get_note_store() -> NoteStore:
    """Get the global note store instance."""
    global _note_store

    if _note_store is None:
        _note_store = JsonNoteStore()
        logger.info(f"Initialized note store: {type(_note_store).__name__}")

    return _note_store


def set_note_store(store: NoteStore | None) -> None:
    """Set the global note store instance (for testing)."""
    global _note_store
    _note_store = store
    logger.info(f"Set note store: {type(store).__name__}")
