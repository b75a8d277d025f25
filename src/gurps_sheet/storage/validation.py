"""Map between Character and its interchange dict, repairing gaps on load.

Saved files use the sheet's field names ("ST", "basicSpeed",
"culturalFamiliarities", ...). Loading merges whatever is present over a
default record: missing or unreadable fields keep their defaults, and
collection entries without an id (or with an id already used in the same
list) get a fresh one.
"""

import dataclasses
import logging
import math
from typing import Any

from gurps_sheet.engine.ids import DEFAULT_IDS, IdGenerator
from gurps_sheet.engine.reconcile import infer_overrides
from gurps_sheet.models.character import COLLECTION_TYPES, Character
from gurps_sheet.models.constants import SECONDARY_FIELDS, wire_key

logger = logging.getLogger(__name__)

_SECONDARY_BY_WIRE: dict[str, str] = {wire_key(name): name for name in SECONDARY_FIELDS}

# Wire key of every collection field, plus the two plain string lists.
COLLECTION_KEYS: dict[str, str] = {wire_key(name): name for name in COLLECTION_TYPES}
EQUIPMENT_SIMPLE_KEY = wire_key("equipment_simple")
OVERRIDES_KEY = wire_key("overrides")


def _coerce(value: Any, default: Any) -> Any:
    """Convert *value* to the type of *default*; raises on failure."""
    if default is None:
        # Optional int (advantage level)
        if value is None or value == "" or value == "None":
            return None
        return _to_int(value)
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, int):
        return _to_int(value)
    if isinstance(default, float):
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"{value!r} is not a finite number")
        return number
    if isinstance(default, str):
        if value is None:
            raise ValueError("null string")
        return str(value)
    raise TypeError(f"unsupported field type {type(default).__name__}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        number = float(value)
        if not number.is_integer():
            raise ValueError(f"{value!r} is not a whole number")
        return int(number)


def _merge_fields(cls, data: dict[str, Any], skip: frozenset[str] = frozenset()) -> dict[str, Any]:
    template = cls()
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if f.name in skip:
            continue
        key = wire_key(f.name)
        if key not in data:
            continue
        try:
            kwargs[f.name] = _coerce(data[key], getattr(template, f.name))
        except (TypeError, ValueError) as exc:
            logger.debug("Ignoring %s.%s=%r: %s", cls.__name__, key, data[key], exc)
    return kwargs


def _entries_from_list(collection: str, raw: Any, ids: IdGenerator) -> list:
    if not isinstance(raw, list):
        if raw is not None:
            logger.debug("Ignoring non-list %s", collection)
        return []
    entry_type = COLLECTION_TYPES[collection]
    entries = []
    seen: set[str] = set()
    for item in raw:
        if not isinstance(item, dict):
            logger.debug("Skipping non-object %s entry %r", collection, item)
            continue
        entry = entry_type(**_merge_fields(entry_type, item))
        if not entry.id or entry.id in seen:
            entry.id = ids.new_id()
            logger.debug("Assigned id %s to %s entry", entry.id, collection)
        seen.add(entry.id)
        entries.append(entry)
    return entries


def _string_list(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [str(item) for item in raw if item is not None]


def validate_character_data(
    data: dict[str, Any],
    ids: IdGenerator | None = None,
) -> Character:
    """Build a complete Character from a possibly partial interchange dict.

    Raises ValueError only when *data* is not a mapping at all.
    """
    if not isinstance(data, dict):
        raise ValueError(f"character data must be an object, got {type(data).__name__}")
    ids = ids or DEFAULT_IDS

    skip = frozenset(COLLECTION_TYPES) | {"equipment_simple", "overrides"}
    character = Character(**_merge_fields(Character, data, skip))
    for collection in COLLECTION_TYPES:
        setattr(
            character,
            collection,
            _entries_from_list(collection, data.get(wire_key(collection)), ids),
        )
    character.equipment_simple = _string_list(data.get(EQUIPMENT_SIMPLE_KEY))

    raw_overrides = data.get(OVERRIDES_KEY)
    if isinstance(raw_overrides, list):
        character.overrides = {
            _SECONDARY_BY_WIRE[key] for key in raw_overrides if key in _SECONDARY_BY_WIRE
        }
    else:
        character.overrides = infer_overrides(character)
        if character.overrides:
            logger.debug("Inferred overrides %s", sorted(character.overrides))
    return character


def entry_to_dict(entry) -> dict[str, Any]:
    return {wire_key(f.name): getattr(entry, f.name) for f in dataclasses.fields(entry)}


def character_to_dict(character: Character) -> dict[str, Any]:
    """Interchange dict for *character*: sheet field names, nested lists."""
    out: dict[str, Any] = {}
    for f in dataclasses.fields(character):
        value = getattr(character, f.name)
        if f.name in COLLECTION_TYPES:
            out[wire_key(f.name)] = [entry_to_dict(entry) for entry in value]
        elif f.name == "overrides":
            out[OVERRIDES_KEY] = [wire_key(name) for name in SECONDARY_FIELDS if name in value]
        elif f.name == "equipment_simple":
            out[EQUIPMENT_SIMPLE_KEY] = list(value)
        else:
            out[wire_key(f.name)] = value
    return out
