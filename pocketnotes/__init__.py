"""
PocketNotes: a small local note keeper.

Notes live in one durable key-value slot and are managed through:
- NoteStore (in-memory collection mirrored to storage on every change)
- SessionController (selection and edit-session state)
- NotesView (headless presentation boundary)
"""

__version__ = "0.1.0"
