"""Tests for slot storage backends."""

import pytest

from pocketnotes.storage import (
    FileSlotStorage,
    MemorySlotStorage,
    NoteStore,
    SqliteSlotStorage,
)
from pocketnotes.storage.slots import validate_key


# -------------------------------------------------------------------------
# Test Fixtures
# -------------------------------------------------------------------------

@pytest.fixture(params=["memory", "file", "sqlite"])
def backend(request, tmp_path):
    """Each storage backend in turn."""
    if request.param == "memory":
        slots = MemorySlotStorage()
    elif request.param == "file":
        slots = FileSlotStorage(tmp_path / "slots")
    else:
        slots = SqliteSlotStorage(tmp_path / "notes.db")
    yield slots
    slots.close()


# -------------------------------------------------------------------------
# Tests
# -------------------------------------------------------------------------

class TestSlotStorage:
    """Behaviour shared by every backend."""

    def test_missing_key(self, backend):
        """Test reading a key that was never written."""
        assert backend.read("notes") is None

    def test_write_then_read(self, backend):
        """Test a basic round trip."""
        backend.write("notes", '[{"a": 1}]')
        assert backend.read("notes") == '[{"a": 1}]'

    def test_overwrite(self, backend):
        """Test that writes replace the previous value."""
        backend.write("notes", "first")
        backend.write("notes", "second")
        assert backend.read("notes") == "second"
        assert backend.keys() == ["notes"]

    def test_remove(self, backend):
        """Test removing a key."""
        backend.write("notes", "x")

        assert backend.remove("notes") is True
        assert backend.read("notes") is None
        assert backend.remove("notes") is False

    def test_keys(self, backend):
        """Test listing keys."""
        backend.write("b", "1")
        backend.write("a", "2")
        assert backend.keys() == ["a", "b"]

    def test_unicode(self, backend):
        """Test that non-ASCII text survives."""
        backend.write("notes", "café ✓ 日本")
        assert backend.read("notes") == "café ✓ 日本"


class TestFileSlotStorage:
    """Tests specific to the file backend."""

    def test_one_file_per_key(self, tmp_path):
        """Test the on-disk layout."""
        slots = FileSlotStorage(tmp_path)
        slots.write("notes", "[]")

        assert (tmp_path / "notes.json").read_text(encoding="utf-8") == "[]"

    def test_no_temp_files_left(self, tmp_path):
        """Test that atomic writes clean up after themselves."""
        slots = FileSlotStorage(tmp_path)
        for i in range(3):
            slots.write("notes", str(i))

        assert sorted(p.name for p in tmp_path.iterdir()) == ["notes.json"]

    def test_invalid_key(self, tmp_path):
        """Test that keys cannot escape the directory."""
        slots = FileSlotStorage(tmp_path)
        with pytest.raises(ValueError):
            slots.write("../evil", "x")


class TestSqliteSlotStorage:
    """Tests specific to the SQLite backend."""

    def test_persists_across_connections(self, tmp_path):
        """Test that data survives closing the database."""
        db_path = tmp_path / "notes.db"
        with SqliteSlotStorage(db_path) as slots:
            slots.write("notes", "[]")

        with SqliteSlotStorage(db_path) as slots:
            assert slots.read("notes") == "[]"

    def test_close_is_idempotent(self, tmp_path):
        """Test closing twice."""
        slots = SqliteSlotStorage(tmp_path / "notes.db")
        slots.connect()
        slots.close()
        slots.close()


class TestValidateKey:
    """Tests for slot key validation."""

    @pytest.mark.parametrize("key", ["notes", "work-notes", "notes.v2", "A_1"])
    def test_valid(self, key):
        assert validate_key(key) == key

    @pytest.mark.parametrize("key", ["", "a/b", "..", "has space", "a\\b"])
    def test_invalid(self, key):
        with pytest.raises(ValueError):
            validate_key(key)


class TestStoreReload:
    """A store written through a backend can be loaded again."""

    def test_reload(self, tmp_path, clock):
        """Test that a fresh process sees the same notes in the same order."""
        slots = FileSlotStorage(tmp_path)
        store = NoteStore.load(slots, clock=clock)
        first = store.create()
        clock.advance()
        second = store.create()
        store.update(first.id, "First", "body")

        reloaded = NoteStore.load(FileSlotStorage(tmp_path), clock=clock)

        assert reloaded.notes == store.notes
        assert [n.id for n in reloaded.list()] == [first.id, second.id]
