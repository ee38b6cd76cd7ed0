"""Note model - the single record type kept by PocketNotes."""

from typing import Any
from pydantic import BaseModel, Field
from uuid import uuid4


PLACEHOLDER_TITLE = "Untitled Note"
"""Title substituted when a note is saved with a blank title."""

TITLE_MAX_LENGTH = 120
"""Maximum title length accepted by the editing surface."""


class Note(BaseModel):
    """
    A single user-authored text entry.

    Notes are created by NoteStore.create() and only ever changed through
    NoteStore.update(), which goes through apply_edit(). The serialized
    form is exactly the five fields below, with timestamps as epoch
    milliseconds.
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    """Opaque unique identifier. Never changes."""

    title: str = PLACEHOLDER_TITLE
    """Display title."""

    content: str = ""
    """Free-form multi-line body."""

    created: int
    """When this note was created (epoch ms)."""

    updated: int
    """When this note was last saved (epoch ms). Sort key for the sidebar."""

    def apply_edit(self, title: str, content: str, now: int) -> None:
        """Apply a saved edit. Blank titles fall back to the placeholder."""
        self.title = title if title.strip() else PLACEHOLDER_TITLE
        self.content = content
        self.updated = now

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against title or content."""
        if not query:
            return True
        needle = query.lower()
        return needle in self.title.lower() or needle in self.content.lower()

    @property
    def content_lines(self) -> list[str]:
        """Content split into display lines."""
        return self.content.split("\n")

    def to_record(self) -> dict[str, Any]:
        """Convert to the plain dict written to storage."""
        return self.model_dump()


class EditBuffer(BaseModel):
    """
    Draft title/content for the note being viewed or edited.

    Kept apart from the stored Note so in-progress edits stay invisible
    until saved.
    """

    title: str = ""
    content: str = ""

    @classmethod
    def from_note(cls, note: Note) -> "EditBuffer":
        """Mirror a stored note's title and content."""
        return cls(title=note.title, content=note.content)
