"""Serialization of note collections to and from slot values."""

from typing import Optional
import json

from pydantic import TypeAdapter, ValidationError

from ..errors import MalformedStorageError
from ..models import Note

_NOTE_LIST = TypeAdapter(list[Note])


def serialize_notes(notes: list[Note]) -> str:
    """Serialize notes to the JSON array stored in a slot."""
    return json.dumps([note.to_record() for note in notes], ensure_ascii=False)


def deserialize_notes(data: Optional[str], key: str = "notes") -> list[Note]:
    """
    Parse a slot value back into notes.

    An absent value is an empty collection. Anything that is not a JSON
    array of note objects raises MalformedStorageError. Values are checked
    for shape only; ordering and timestamp relations are taken as stored.
    """
    if data is None:
        return []

    try:
        records = json.loads(data)
    except json.JSONDecodeError as e:
        raise MalformedStorageError(key, f"invalid JSON ({e})") from e

    if not isinstance(records, list):
        raise MalformedStorageError(key, "expected a JSON array")

    for position, record in enumerate(records):
        if not isinstance(record, dict) or "id" not in record:
            raise MalformedStorageError(key, f"entry {position} is not a note object")

    try:
        return _NOTE_LIST.validate_python(records)
    except ValidationError as e:
        raise MalformedStorageError(key, f"{e.error_count()} invalid field(s)") from e
