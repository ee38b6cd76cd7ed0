"""Note storage layer."""

from typing import Callable, Iterator, List, Optional
import logging
import time

from .codec import serialize_notes, deserialize_notes
from .slots import SlotStorage
from ..errors import NoteNotFoundError
from ..models import Note, StoreEvent

logger = logging.getLogger(__name__)

DEFAULT_KEY = "notes"

Clock = Callable[[], int]
Subscriber = Callable[[StoreEvent, Optional[Note]], None]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class NoteStore:
    """
    The ordered note collection, mirrored to a durable slot.

    Every mutation rewrites the whole collection to the slot before it
    returns, so memory and storage never diverge. Storage order is
    insertion order with new notes at the head; list() derives the
    display order.

    Usage:
        store = NoteStore.load(FileSlotStorage("~/.local/share/pocketnotes"))
        note = store.create()
        store.update(note.id, "Groceries", "milk\\neggs")
        for note in store.list("milk"):
            ...
    """

    def __init__(
        self,
        storage: SlotStorage,
        key: str = DEFAULT_KEY,
        notes: Optional[list[Note]] = None,
        clock: Optional[Clock] = None,
    ):
        self.storage = storage
        self.key = key
        self._notes: list[Note] = list(notes or [])
        self._clock = clock or system_clock
        self._last_timestamp = max(
            (max(n.created, n.updated) for n in self._notes), default=0
        )
        self._subscribers: list[Subscriber] = []

    @classmethod
    def load(
        cls,
        storage: SlotStorage,
        key: str = DEFAULT_KEY,
        clock: Optional[Clock] = None,
    ) -> "NoteStore":
        """
        Read the slot once and build a store from it.

        Raises:
            MalformedStorageError: If the slot content does not parse
        """
        notes = deserialize_notes(storage.read(key), key)
        logger.info(f"Loaded {len(notes)} notes from {storage.name or 'storage'} slot '{key}'")
        return cls(storage, key=key, notes=notes, clock=clock)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, query: str = "") -> list[Note]:
        """
        Get the visible list for a search query.

        Notes whose title or content contain the query (case-insensitive,
        empty matches everything), most recently updated first. sorted()
        is stable, so notes with equal timestamps keep collection order.
        """
        matches = [note for note in self._notes if note.matches(query)]
        ordered = sorted(matches, key=lambda note: note.updated, reverse=True)
        return [note.model_copy() for note in ordered]

    def get(self, note_id: str) -> Optional[Note]:
        """Get a note by ID. None means it no longer exists."""
        note = self._find(note_id)
        if note is None:
            return None
        return note.model_copy()

    def index_of(self, note_id: str) -> int:
        """Position of a note in storage order, or -1 if absent."""
        for index, note in enumerate(self._notes):
            if note.id == note_id:
                return index
        return -1

    @property
    def notes(self) -> List[Note]:
        """Copy of the collection in storage order."""
        return [note.model_copy() for note in self._notes]

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __contains__(self, note_id: object) -> bool:
        return isinstance(note_id, str) and self._find(note_id) is not None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self) -> Note:
        """Create an empty note at the head of the collection."""
        now = self._next_timestamp()
        note = Note(created=now, updated=now)
        self._commit([note] + self._notes)
        logger.debug(f"Created note {note.id}")
        self._emit(StoreEvent.CREATED, note)
        return note.model_copy()

    def update(self, note_id: str, title: str, content: str) -> Note:
        """
        Save a title and content onto an existing note.

        Raises:
            NoteNotFoundError: If no note has this ID
        """
        index = self.index_of(note_id)
        if index == -1:
            raise NoteNotFoundError(note_id)

        note = self._notes[index].model_copy()
        note.apply_edit(title, content, self._next_timestamp())
        notes = self._notes[:index] + [note] + self._notes[index + 1:]
        self._commit(notes)
        logger.debug(f"Updated note {note_id}")
        self._emit(StoreEvent.UPDATED, note)
        return note.model_copy()

    def delete(self, note_id: str) -> bool:
        """
        Delete a note by ID. Returns True if a note was removed.

        Deleting an unknown ID is a no-op: the collection is still
        written back, but subscribers are not notified.
        """
        index = self.index_of(note_id)
        removed = self._notes[index] if index != -1 else None
        self._commit([note for note in self._notes if note is not removed])

        if removed is None:
            logger.debug(f"Delete of unknown note {note_id} ignored")
            return False

        logger.debug(f"Deleted note {note_id}")
        self._emit(StoreEvent.DELETED, removed)
        return True

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(callback)

        return unsubscribe

    def unsubscribe(self, callback: Subscriber) -> None:
        """Remove a change listener (no-op if not registered)."""
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _emit(self, event: StoreEvent, note: Optional[Note]) -> None:
        """Notify subscribers. A failing subscriber does not undo the change."""
        for callback in list(self._subscribers):
            try:
                callback(event, note.model_copy() if note else None)
            except Exception as e:
                logger.error(f"Error in subscriber for event '{event.value}': {e}")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _find(self, note_id: str) -> Optional[Note]:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def _next_timestamp(self) -> int:
        """Clock reading, bumped so issued timestamps strictly increase."""
        now = int(self._clock())
        if now <= self._last_timestamp:
            now = self._last_timestamp + 1
        self._last_timestamp = now
        return now

    def _commit(self, notes: List[Note]) -> None:
        """
        Overwrite the slot with a new collection, then adopt it in memory.

        If the write raises, the in-memory collection is left untouched.
        """
        self.storage.write(self.key, serialize_notes(notes))
        self._notes = notes
