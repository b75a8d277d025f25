"""JSON encoding of a character record.

A direct structural mapping: scalars as JSON values, each collection as
a list of objects. Lossless for every field.
"""

import json

from gurps_sheet.engine.ids import IdGenerator
from gurps_sheet.models.character import Character
from gurps_sheet.storage.errors import CharacterLoadError
from gurps_sheet.storage.validation import character_to_dict, validate_character_data

FORMAT = "json"


def dumps_structured(character: Character) -> str:
    return json.dumps(character_to_dict(character), indent=2, ensure_ascii=False)


def loads_structured(text: str, ids: IdGenerator | None = None) -> Character:
    """Parse a JSON document into a validated, gap-filled Character."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CharacterLoadError(FORMAT, str(exc)) from exc
    if not isinstance(data, dict):
        raise CharacterLoadError(FORMAT, "top-level value must be an object")
    return validate_character_data(data, ids)
