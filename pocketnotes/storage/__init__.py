"""Storage layer for PocketNotes."""

from .slots import SlotStorage, MemorySlotStorage, FileSlotStorage
from .database import SqliteSlotStorage
from .codec import serialize_notes, deserialize_notes
from .note_store import NoteStore, DEFAULT_KEY, system_clock

__all__ = [
    "SlotStorage",
    "MemorySlotStorage",
    "FileSlotStorage",
    "SqliteSlotStorage",
    "serialize_notes",
    "deserialize_notes",
    "NoteStore",
    "DEFAULT_KEY",
    "system_clock",
]
