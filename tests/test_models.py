"""Tests for data models."""

import pytest
from pydantic import ValidationError

from pocketnotes.models import Note, EditBuffer, PLACEHOLDER_TITLE


class TestNote:
    """Tests for the Note model."""
    
    def test_create_note(self):
        """Test creating a new note."""
        note = Note(created=1000, updated=1000)
        
        assert note.id is not None
        assert note.title == PLACEHOLDER_TITLE
        assert note.content == ""
        assert note.created == note.updated == 1000
    
    def test_ids_are_unique(self):
        """Test that each note gets its own ID."""
        ids = {Note(created=1, updated=1).id for _ in range(50)}
        assert len(ids) == 50
    
    def test_timestamps_required(self):
        """Test that timestamps have no defaults."""
        with pytest.raises(ValidationError):
            Note()
    
    def test_apply_edit(self):
        """Test applying a saved edit."""
        note = Note(created=1000, updated=1000)
        
        note.apply_edit("Shopping", "  milk\n", 2000)
        
        assert note.title == "Shopping"
        assert note.content == "  milk\n"
        assert note.updated == 2000
        assert note.created == 1000
    
    def test_apply_edit_blank_title(self):
        """Test that blank titles fall back to the placeholder."""
        note = Note(title="Old", created=1000, updated=1000)
        
        note.apply_edit("   \t", "body", 2000)
        assert note.title == PLACEHOLDER_TITLE
        
        note.apply_edit("", "body", 3000)
        assert note.title == PLACEHOLDER_TITLE
    
    def test_apply_edit_keeps_title_whitespace(self):
        """Test that non-blank titles are stored verbatim."""
        note = Note(created=1000, updated=1000)
        note.apply_edit("  Padded  ", "", 2000)
        assert note.title == "  Padded  "
    
    def test_matches(self):
        """Test case-insensitive matching on title and content."""
        note = Note(title="Redis Caching", content="TTL and eviction", created=1, updated=1)
        
        assert note.matches("")
        assert note.matches("redis")
        assert note.matches("CACHING")
        assert note.matches("eviCTION")
        assert not note.matches("postgres")
    
    def test_record_fields(self):
        """Test the serialized record shape."""
        note = Note(id="n1", title="T", content="C", created=5, updated=6)
        assert note.to_record() == {
            "id": "n1",
            "title": "T",
            "content": "C",
            "created": 5,
            "updated": 6,
        }
    
    def test_content_lines(self):
        """Test splitting content for display."""
        note = Note(content="a\n\nb", created=1, updated=1)
        assert note.content_lines == ["a", "", "b"]


class TestEditBuffer:
    """Tests for the EditBuffer model."""
    
    def test_from_note(self):
        """Test mirroring a stored note."""
        note = Note(title="T", content="C", created=1, updated=1)
        buffer = EditBuffer.from_note(note)
        
        assert buffer.title == "T"
        assert buffer.content == "C"
    
    def test_buffer_is_independent(self):
        """Test that editing the buffer leaves the note alone."""
        note = Note(title="T", content="C", created=1, updated=1)
        buffer = EditBuffer.from_note(note)
        
        buffer.title = "Changed"
        
        assert note.title == "T"
