"""Selection and edit-session controller."""

from typing import Optional
import logging

from ..errors import InvalidTransitionError, NoteNotFoundError
from ..models import EditBuffer, Note, SessionMode, PLACEHOLDER_TITLE, TITLE_MAX_LENGTH
from ..storage import NoteStore

logger = logging.getLogger(__name__)


class SessionController:
    """
    Tracks which note is selected and whether it is being edited.

    The controller owns no notes; it routes every change through the
    NoteStore it was given. The edit buffer is a draft kept apart from
    the stored note until save().

    States:
        IDLE     no selection
        VIEWING  a note is selected, buffer mirrors the stored note
        EDITING  a note is selected, buffer is mutable
    """

    def __init__(self, store: NoteStore):
        self.store = store
        self.selected_id: Optional[str] = None
        self.editing: bool = False
        self.edit_buffer = EditBuffer()
        self.search_query: str = ""

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> SessionMode:
        """Current session mode."""
        if self.selected_id is None:
            return SessionMode.IDLE
        if self.editing:
            return SessionMode.EDITING
        return SessionMode.VIEWING

    def selected_note(self) -> Optional[Note]:
        """
        Get the stored version of the selected note.

        A selection that no longer exists is dropped and None returned.
        """
        if self.selected_id is None:
            return None
        note = self.store.get(self.selected_id)
        if note is None:
            logger.warning(f"Selected note {self.selected_id} no longer exists")
            self._deselect()
        return note

    def visible_notes(self) -> list[Note]:
        """The sidebar list for the current search query."""
        return self.store.list(self.search_query)

    def set_query(self, query: str) -> None:
        """Change the sidebar search query."""
        self.search_query = query

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select_note(self, note_id: str) -> Optional[Note]:
        """Select a note for viewing. Unknown IDs clear the selection."""
        note = self.store.get(note_id)
        if note is None:
            logger.warning(f"Cannot select missing note {note_id}; deselecting")
            self._deselect()
            return None

        self.selected_id = note.id
        self.editing = False
        self.edit_buffer = EditBuffer.from_note(note)
        return note

    def begin_edit(self) -> None:
        """Switch the selected note to editing."""
        if self.selected_note() is None:
            raise InvalidTransitionError("No note selected")
        self.editing = True

    def cancel_edit(self) -> None:
        """Discard the draft and go back to viewing."""
        note = self.selected_note()
        if note is None:
            return
        self.editing = False
        self.edit_buffer = EditBuffer.from_note(note)

    def set_title(self, title: str) -> None:
        """Change the draft title, truncated to the input limit."""
        self._require_editing()
        self.edit_buffer.title = title[:TITLE_MAX_LENGTH]

    def set_content(self, content: str) -> None:
        """Change the draft content."""
        self._require_editing()
        self.edit_buffer.content = content

    def save(self) -> Note:
        """
        Write the draft to the store and go back to viewing.

        Raises:
            InvalidTransitionError: If not editing
            NoteNotFoundError: If the note was deleted underneath us
        """
        self._require_editing()
        try:
            note = self.store.update(
                self.selected_id,
                self.edit_buffer.title,
                self.edit_buffer.content,
            )
        except NoteNotFoundError:
            self._deselect()
            raise

        self.editing = False
        self.edit_buffer = EditBuffer.from_note(note)
        return note

    def create_note(self) -> Note:
        """Create a note and open it for editing."""
        note = self.store.create()
        self.selected_id = note.id
        self.editing = True
        self.edit_buffer = EditBuffer(title=PLACEHOLDER_TITLE, content="")
        return note

    def delete_selected(self) -> bool:
        """Delete the selected note. Returns True if a note was removed."""
        if self.selected_id is None:
            return False
        return self.delete_note(self.selected_id)

    def delete_note(self, note_id: str) -> bool:
        """
        Delete any note by ID.

        When the deleted note was selected, the note just before its old
        position in the unfiltered collection is selected instead (the
        first note if it was already first), or nothing if none remain.
        """
        index = self.store.index_of(note_id)
        removed = self.store.delete(note_id)

        if note_id != self.selected_id:
            return removed

        remaining = self.store.notes
        if index != -1 and remaining:
            self.select_note(remaining[max(0, index - 1)].id)
        else:
            self._deselect()
        return removed

    def refresh(self) -> None:
        """Re-sync with the store after a change made elsewhere."""
        note = self.selected_note()
        if note is not None and not self.editing:
            self.edit_buffer = EditBuffer.from_note(note)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _deselect(self) -> None:
        self.selected_id = None
        self.editing = False
        self.edit_buffer = EditBuffer()

    def _require_editing(self) -> None:
        if self.mode != SessionMode.EDITING:
            raise InvalidTransitionError(f"Not editing (mode is {self.mode.value})")
