"""Core data models for PocketNotes."""

from .enums import SessionMode, StoreEvent
from .note import Note, EditBuffer, PLACEHOLDER_TITLE, TITLE_MAX_LENGTH

__all__ = [
    "SessionMode",
    "StoreEvent",
    "Note",
    "EditBuffer",
    "PLACEHOLDER_TITLE",
    "TITLE_MAX_LENGTH",
]
