"""Shared fixtures for PocketNotes tests."""

import pytest

from pocketnotes.storage import MemorySlotStorage, NoteStore
from pocketnotes.session import SessionController


class FakeClock:
    """A clock that only moves when told to."""
    
    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start
    
    def __call__(self) -> int:
        return self.now
    
    def advance(self, ms: int = 1000) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemorySlotStorage()


@pytest.fixture
def store(storage, clock):
    return NoteStore(storage, clock=clock)


@pytest.fixture
def controller(store):
    return SessionController(store)
