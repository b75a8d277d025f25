"""CSV encoding of a character record: one header row, one data row.

Delimiters, outermost first:
  ``,``  between cells (every cell quoted)
  ``|``  between entries of a list cell
  ``§``  between key:value pairs of one entry

Only the cell level is escaped. A ``|``, ``§`` or ``:`` typed into an
entry's free text will split that entry differently on reload; keep such
characters out of list entries if the CSV must round-trip.
"""

import csv
import dataclasses
import io

from gurps_sheet.engine.ids import IdGenerator
from gurps_sheet.models.character import Character
from gurps_sheet.models.constants import wire_key
from gurps_sheet.storage.errors import CharacterLoadError
from gurps_sheet.storage.validation import (
    COLLECTION_KEYS,
    EQUIPMENT_SIMPLE_KEY,
    OVERRIDES_KEY,
    character_to_dict,
    validate_character_data,
)

FORMAT = "csv"

ENTRY_SEPARATOR = "|"
PAIR_SEPARATOR = "§"
KEY_VALUE_SEPARATOR = ":"

HEADERS: list[str] = [wire_key(f.name) for f in dataclasses.fields(Character)]
_LIST_KEYS = frozenset({EQUIPMENT_SIMPLE_KEY, OVERRIDES_KEY})


def encode_entries(entries: list[dict]) -> str:
    """Join entry dicts as ``k:v§k:v|k:v§...``; None values are omitted."""
    return ENTRY_SEPARATOR.join(
        PAIR_SEPARATOR.join(
            f"{key}{KEY_VALUE_SEPARATOR}{value}"
            for key, value in entry.items()
            if value is not None
        )
        for entry in entries
    )


def decode_entries(cell: str) -> list[dict[str, str]]:
    """Inverse of encode_entries. Values stay strings; typing happens on validation."""
    if not cell or not cell.strip():
        return []
    entries = []
    for item in cell.split(ENTRY_SEPARATOR):
        entry: dict[str, str] = {}
        for pair in item.split(PAIR_SEPARATOR):
            key, sep, value = pair.partition(KEY_VALUE_SEPARATOR)
            if key and sep:
                entry[key] = value
        entries.append(entry)
    return entries


def _split_list(cell: str) -> list[str]:
    if not cell:
        return []
    return cell.split(ENTRY_SEPARATOR)


def dumps_flat_row(character: Character) -> str:
    data = character_to_dict(character)
    row = []
    for key in HEADERS:
        value = data[key]
        if key in COLLECTION_KEYS:
            row.append(encode_entries(value))
        elif key in _LIST_KEYS:
            row.append(ENTRY_SEPARATOR.join(value))
        else:
            row.append(value)

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADERS)
    writer.writerow(row)
    return buf.getvalue()


def loads_flat_row(text: str, ids: IdGenerator | None = None) -> Character:
    """Parse a header+data CSV into a validated, gap-filled Character.

    Cells that fail to parse fall back to defaults; only a file without a
    header and a data row is rejected.
    """
    try:
        rows = [row for row in csv.reader(io.StringIO(text.strip())) if row]
    except csv.Error as exc:
        raise CharacterLoadError(FORMAT, str(exc)) from exc
    if len(rows) < 2:
        raise CharacterLoadError(FORMAT, "missing data")

    headers, values = rows[0], rows[1]
    data: dict[str, object] = {}
    for index, header in enumerate(headers):
        header = header.strip()
        if index >= len(values):
            break
        value = values[index]
        if header in COLLECTION_KEYS:
            data[header] = decode_entries(value)
        elif header in _LIST_KEYS:
            data[header] = _split_list(value)
        else:
            data[header] = value
    return validate_character_data(data, ids)
