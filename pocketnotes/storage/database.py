"""SQLite-backed slot storage."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import logging
import sqlite3

from .slots import SlotStorage, validate_key

logger = logging.getLogger(__name__)


# SQL schema for the key-value slots table
SLOTS_SCHEMA = """
CREATE TABLE IF NOT EXISTS slots (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class SqliteSlotStorage(SlotStorage):
    """
    Slots stored as rows of a single SQLite table.

    The connection is opened lazily on first use and runs in autocommit
    mode, so every write is its own transaction.
    """

    name = "sqlite"

    def __init__(self, db_path: Path | str = "pocketnotes.db"):
        self.db_path = Path(db_path).expanduser()
        self._connection: Optional[sqlite3.Connection] = None

    def connect(self) -> None:
        """Open the database file and initialize the schema."""
        if self._connection is not None:
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Connecting to database: {self.db_path}")
        self._connection = sqlite3.connect(
            self.db_path,
            isolation_level=None,  # Autocommit mode
        )
        self._connection.row_factory = sqlite3.Row
        self._connection.execute("PRAGMA journal_mode = WAL")
        self._connection.executescript(SLOTS_SCHEMA)

    def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
            logger.info("Database connection closed")

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the current connection, connecting on first access."""
        if self._connection is None:
            self.connect()
        return self._connection

    def read(self, key: str) -> Optional[str]:
        row = self.connection.execute(
            "SELECT value FROM slots WHERE key = ?",
            (validate_key(key),)
        ).fetchone()
        if row:
            return row["value"]
        return None

    def write(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        self.connection.execute(
            """
            INSERT INTO slots (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (validate_key(key), value, now)
        )

    def remove(self, key: str) -> bool:
        cursor = self.connection.execute(
            "DELETE FROM slots WHERE key = ?",
            (validate_key(key),)
        )
        return cursor.rowcount > 0

    def keys(self) -> list[str]:
        rows = self.connection.execute(
            "SELECT key FROM slots ORDER BY key"
        ).fetchall()
        return [row["key"] for row in rows]
