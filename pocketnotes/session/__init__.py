"""Selection and edit-session state for PocketNotes."""

from .controller import SessionController

__all__ = ["SessionController"]
