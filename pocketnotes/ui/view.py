"""Headless notes view - what a front end draws, as plain data."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Union
import logging

from .keybindings import KeyBindings
from ..models import Note, SessionMode, StoreEvent, TITLE_MAX_LENGTH
from ..session import SessionController

logger = logging.getLogger(__name__)

NEW_NOTE_SHORTCUT = "ctrl+n"
FOCUS_SEARCH_SHORTCUT = "ctrl+f"

UNTITLED_LABEL = "(untitled)"
EMPTY_LIST_MESSAGE = "No notes found."
NO_SELECTION_MESSAGE = "No note selected.\nCreate or select a note to begin."
DELETE_CONFIRMATION = "Delete this note? This cannot be undone."

TimeFormatter = Callable[[int], str]
Confirm = Callable[[str], bool]


def format_timestamp(ms: int) -> str:
    """Format epoch milliseconds as local date and time."""
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def display_title(note: Note) -> str:
    return note.title or UNTITLED_LABEL


@dataclass
class SidebarItem:
    """One row of the note list."""
    id: str
    title: str
    updated: str
    selected: bool = False


@dataclass
class EmptyPanel:
    """Detail area when nothing is selected."""
    message: str = NO_SELECTION_MESSAGE


@dataclass
class DetailPanel:
    """Read-only view of the selected note."""
    id: str
    title: str
    updated: str
    lines: list[str] = field(default_factory=list)


@dataclass
class EditForm:
    """Edit form bound to the session's edit buffer."""
    id: str
    title: str
    content: str
    title_max_length: int = TITLE_MAX_LENGTH


Detail = Union[EmptyPanel, DetailPanel, EditForm]


@dataclass
class ViewModel:
    """Everything needed to draw one frame."""
    query: str
    sidebar: list[SidebarItem]
    detail: Detail
    empty_list_message: Optional[str] = None
    search_focused: bool = False


class NotesView:
    """
    Presentation boundary over a SessionController.

    mount() registers the global shortcuts and a store subscription;
    unmount() removes both. Between the two, store changes mark the view
    dirty so the front end knows to call render() again.

    Usage:
        view = NotesView(controller, KeyBindings())
        view.mount()
        view.keys.dispatch("ctrl+n")
        print(render_text(view.render()))
        view.unmount()
    """

    def __init__(
        self,
        controller: SessionController,
        keys: Optional[KeyBindings] = None,
        time_formatter: TimeFormatter = format_timestamp,
    ):
        self.controller = controller
        self.keys = keys or KeyBindings()
        self.time_formatter = time_formatter
        self.search_focused = False
        self.dirty = True
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def mount(self) -> None:
        """Attach shortcuts and the store subscription."""
        if self.mounted:
            logger.warning("NotesView already mounted")
            return

        shortcuts = [
            (NEW_NOTE_SHORTCUT, self.create_note),
            (FOCUS_SEARCH_SHORTCUT, self.focus_search),
        ]
        bound = []
        try:
            for chord, handler in shortcuts:
                self.keys.bind(chord, handler)
                bound.append(chord)
        except ValueError:
            for chord in bound:
                self.keys.unbind(chord)
            raise

        self._unsubscribe = self.controller.store.subscribe(self._on_store_change)
        self.dirty = True
        logger.info("NotesView mounted")

    def unmount(self) -> None:
        """Detach everything mount() attached."""
        if not self.mounted:
            return

        self.keys.unbind(NEW_NOTE_SHORTCUT)
        self.keys.unbind(FOCUS_SEARCH_SHORTCUT)
        self._unsubscribe()
        self._unsubscribe = None
        logger.info("NotesView unmounted")

    def _on_store_change(self, event: StoreEvent, note: Optional[Note]) -> None:
        self.dirty = True

    # -------------------------------------------------------------------------
    # Gestures
    # -------------------------------------------------------------------------

    def create_note(self) -> None:
        self.search_focused = False
        self.controller.create_note()

    def focus_search(self) -> None:
        self.search_focused = True
        self.dirty = True

    def search(self, query: str) -> None:
        self.controller.set_query(query)
        self.dirty = True

    def request_delete(self, confirm: Confirm) -> bool:
        """Delete the selected note if the user confirms."""
        if self.controller.selected_id is None:
            return False
        if not confirm(DELETE_CONFIRMATION):
            return False
        return self.controller.delete_selected()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self) -> ViewModel:
        """Build the current frame and clear the dirty flag."""
        controller = self.controller
        notes = controller.visible_notes()
        selected = controller.selected_note()

        sidebar = [
            SidebarItem(
                id=note.id,
                title=display_title(note),
                updated=self.time_formatter(note.updated),
                selected=note.id == controller.selected_id,
            )
            for note in notes
        ]

        detail: Detail
        if selected is None:
            detail = EmptyPanel()
        elif controller.mode == SessionMode.EDITING:
            detail = EditForm(
                id=selected.id,
                title=controller.edit_buffer.title,
                content=controller.edit_buffer.content,
            )
        else:
            detail = DetailPanel(
                id=selected.id,
                title=display_title(selected),
                updated=self.time_formatter(selected.updated),
                lines=selected.content_lines,
            )

        self.dirty = False
        return ViewModel(
            query=controller.search_query,
            sidebar=sidebar,
            detail=detail,
            empty_list_message=None if sidebar else EMPTY_LIST_MESSAGE,
            search_focused=self.search_focused,
        )


def render_text(view: ViewModel) -> str:
    """Render a frame as plain text."""
    lines = [f"Search: {view.query}" + (" _" if view.search_focused else "")]
    lines.append("-" * 40)

    if view.empty_list_message:
        lines.append(view.empty_list_message)
    for item in view.sidebar:
        marker = ">" if item.selected else " "
        lines.append(f"{marker} {item.title}  ({item.updated})")

    lines.append("-" * 40)
    detail = view.detail
    if isinstance(detail, EmptyPanel):
        lines.extend(detail.message.split("\n"))
    elif isinstance(detail, EditForm):
        lines.append(f"[edit] {detail.title}")
        lines.extend(detail.content.split("\n"))
    else:
        lines.append(detail.title)
        lines.append(f"Last updated: {detail.updated}")
        lines.extend(detail.lines)

    return "\n".join(lines)
