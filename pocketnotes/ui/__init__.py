"""Headless presentation layer for PocketNotes."""

from .keybindings import KeyBindings, normalize_chord
from .view import (
    NotesView,
    ViewModel,
    SidebarItem,
    EmptyPanel,
    DetailPanel,
    EditForm,
    render_text,
    format_timestamp,
)

__all__ = [
    "KeyBindings",
    "normalize_chord",
    "NotesView",
    "ViewModel",
    "SidebarItem",
    "EmptyPanel",
    "DetailPanel",
    "EditForm",
    "render_text",
    "format_timestamp",
]
