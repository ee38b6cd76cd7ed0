"""Application wiring: config, logging, storage, store, session and view."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import logging

from .config import AppConfig, load_config
from .errors import MalformedStorageError
from .session import SessionController
from .storage import (
    FileSlotStorage,
    MemorySlotStorage,
    NoteStore,
    SlotStorage,
    SqliteSlotStorage,
)
from .storage.note_store import Clock, DEFAULT_KEY
from .ui import KeyBindings, NotesView

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def create_storage(config: AppConfig) -> SlotStorage:
    """Build the slot backend named in the config."""
    if config.storage_backend == "memory":
        return MemorySlotStorage()
    path = config.resolved_storage_path()
    if config.storage_backend == "sqlite":
        return SqliteSlotStorage(path)
    return FileSlotStorage(path)


def open_store(
    storage: SlotStorage,
    key: str = DEFAULT_KEY,
    clock: Optional[Clock] = None,
) -> NoteStore:
    """
    Load the note store, starting empty if the slot is unreadable.

    The malformed content stays in the slot until the next mutation
    overwrites it.
    """
    try:
        return NoteStore.load(storage, key=key, clock=clock)
    except MalformedStorageError as e:
        logger.warning(f"{e}; starting with an empty note list")
        return NoteStore(storage, key=key, clock=clock)


@dataclass
class NotesApp:
    """A running PocketNotes instance."""
    config: AppConfig
    storage: SlotStorage
    store: NoteStore
    controller: SessionController
    view: NotesView

    def close(self) -> None:
        """Unmount the view and release storage."""
        self.view.unmount()
        self.storage.close()


def open_app(
    config: Optional[AppConfig] = None,
    config_path: Optional[Path] = None,
    clock: Optional[Clock] = None,
    setup_logging: bool = True,
) -> NotesApp:
    """Load config, open storage and mount a view over the note store."""
    config = config or load_config(config_path)
    if setup_logging:
        configure_logging(config.log_level)

    storage = create_storage(config)
    store = open_store(storage, key=config.storage_key, clock=clock)
    controller = SessionController(store)
    view = NotesView(controller, KeyBindings())
    view.mount()

    return NotesApp(
        config=config,
        storage=storage,
        store=store,
        controller=controller,
        view=view,
    )
