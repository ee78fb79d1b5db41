"""Note data structures.

A note is Markdown content with metadata. A Google note is a note linked to a
Google Docs document: it carries the `google-doc` tag and a `google_doc_id`.
"""

from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any

# Tag marking a note that is backed by a Google Docs document
GOOGLE_NOTE_TAG = "google-doc"


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Note:
    """A stored note.

    Attributes:
        id: Unique note id.
        title: Note title.
        content: Markdown body.
        date: Date the note is about (ISO-8601).
        published: Whether the note is public.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
        tags: Free-form tags.
        deleted: Soft-delete marker.
        google_doc_id: Linked Google Docs document, if any.
        google_doc_content: Staged Markdown from the linked document, awaiting merge.
    """

    id: str
    title: str
    content: str = ""
    date: str = field(default_factory=utc_now_iso)
    published: bool = False
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    tags: list[str] = field(default_factory=list)
    deleted: bool = False
    google_doc_id: str | None = None
    google_doc_content: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        """Create from dictionary (loaded from JSON); unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})


def is_google_note(note: Note) -> bool:
    """True if the note carries the Google tag and a linked document id."""
    return GOOGLE_NOTE_TAG in note.tags and bool(note.google_doc_id)
