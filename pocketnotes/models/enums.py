"""Enumerations for PocketNotes."""

from enum import Enum


class SessionMode(str, Enum):
    """What the note-viewing session is currently doing."""
    
    IDLE = "idle"
    """No note is selected."""
    
    VIEWING = "viewing"
    """A note is selected and shown read-only."""
    
    EDITING = "editing"
    """A note is selected and its edit buffer is mutable."""


class StoreEvent(str, Enum):
    """Kind of mutation reported to store subscribers."""
    
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
