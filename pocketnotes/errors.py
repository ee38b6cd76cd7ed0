"""Exception types raised by PocketNotes."""

from typing import Optional


class PocketNotesError(Exception):
    """Base class for all PocketNotes errors."""


class NoteNotFoundError(PocketNotesError, KeyError):
    """An operation targeted a note id that is not in the collection."""

    def __init__(self, note_id: str):
        self.note_id = note_id
        super().__init__(f"Note not found: {note_id}")

    def __str__(self) -> str:
        return self.args[0]


class MalformedStorageError(PocketNotesError, ValueError):
    """The durable slot holds content that does not parse as a note list."""

    def __init__(self, key: str, reason: Optional[str] = None):
        self.key = key
        self.reason = reason
        message = f"Malformed note storage in slot '{key}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidTransitionError(PocketNotesError):
    """A session operation is not valid in the current mode."""


class ConfigError(PocketNotesError):
    """The configuration file could not be read or is invalid."""
