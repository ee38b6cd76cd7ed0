"""Keyboard shortcut registry."""

from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

Handler = Callable[[], None]

# Mac command key and Windows/Linux control key trigger the same shortcuts
_MODIFIER_ALIASES = {
    "control": "ctrl",
    "cmd": "ctrl",
    "command": "ctrl",
    "meta": "ctrl",
}

_MODIFIER_ORDER = ["ctrl", "alt", "shift"]


def normalize_chord(chord: str) -> str:
    """
    Normalize a key chord like "Cmd+N" to "ctrl+n".

    Raises:
        ValueError: If the chord has no key or an unknown modifier
    """
    parts = [p.strip().lower() for p in chord.split("+")]
    if not parts or not parts[-1]:
        raise ValueError(f"Invalid key chord: {chord!r}")

    key = parts[-1]
    modifiers = set()
    for part in parts[:-1]:
        part = _MODIFIER_ALIASES.get(part, part)
        if part not in _MODIFIER_ORDER:
            raise ValueError(f"Unknown modifier {part!r} in {chord!r}")
        modifiers.add(part)

    ordered = [m for m in _MODIFIER_ORDER if m in modifiers]
    return "+".join(ordered + [key])


class KeyBindings:
    """
    Maps key chords to handlers.

    Each chord has at most one handler. Binding a chord twice is an error,
    so a view that forgets to unbind on unmount fails loudly instead of
    piling up handlers.
    """

    def __init__(self):
        self._handlers: dict[str, Handler] = {}

    def bind(self, chord: str, handler: Handler) -> None:
        """
        Register a handler for a chord.

        Raises:
            ValueError: If the chord is already bound
        """
        key = normalize_chord(chord)
        if key in self._handlers:
            raise ValueError(f"Key chord '{key}' is already bound")
        self._handlers[key] = handler
        logger.debug(f"Bound {key}")

    def unbind(self, chord: str) -> Optional[Handler]:
        """Remove a chord's handler. Returns it, or None if unbound."""
        return self._handlers.pop(normalize_chord(chord), None)

    def is_bound(self, chord: str) -> bool:
        return normalize_chord(chord) in self._handlers

    def dispatch(self, chord: str) -> bool:
        """Run the handler for a chord. Returns False if nothing is bound."""
        handler = self._handlers.get(normalize_chord(chord))
        if handler is None:
            return False
        handler()
        return True

    @property
    def chords(self) -> list[str]:
        return sorted(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)
