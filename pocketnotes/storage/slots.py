"""Durable key-value slots that hold serialized note collections."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import logging
import os
import re
import tempfile

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def validate_key(key: str) -> str:
    """Check that a slot key is usable as a file name and table key."""
    if not key or not _KEY_PATTERN.match(key) or key in (".", ".."):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class SlotStorage(ABC):
    """
    Base class for durable storage backends.

    A backend maps string keys to string values. Each write replaces the
    whole value for its key; there are no partial updates.
    """

    name: str = ""
    """Short backend name used in config and logs."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the value stored under key, or None if the key is absent."""
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove key. Returns True if it existed."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass

    def close(self) -> None:
        """Release any resources held by the backend."""
        pass

    def __enter__(self) -> "SlotStorage":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class MemorySlotStorage(SlotStorage):
    """Dict-backed slots. Contents are lost when the process exits."""

    name = "memory"

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._slots: dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        self._slots[key] = value

    def remove(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None

    def keys(self) -> list[str]:
        return sorted(self._slots)


class FileSlotStorage(SlotStorage):
    """
    One JSON file per key inside a directory.

    Writes go to a temporary file in the same directory which is then
    moved over the target, so readers never see a half-written slot.
    """

    name = "file"
    suffix = ".json"

    def __init__(self, directory: Path | str):
        self.directory = Path(directory).expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using file slot storage: {self.directory}")

    def path_for(self, key: str) -> Path:
        """Get the file path backing a key."""
        return self.directory / f"{validate_key(key)}{self.suffix}"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        logger.debug(f"Wrote {len(value)} bytes to {path}")

    def remove(self, key: str) -> bool:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            return True
        return False

    def keys(self) -> list[str]:
        return sorted(p.stem for p in self.directory.glob(f"*{self.suffix}"))
