"""Character file encodings (JSON and CSV) and load-time repair."""

from gurps_sheet.storage.errors import CharacterLoadError, UnsupportedFormatError
from gurps_sheet.storage.files import (
    export_filename,
    format_for_path,
    load_character,
    save_character,
)
from gurps_sheet.storage.flat_row import dumps_flat_row, loads_flat_row
from gurps_sheet.storage.structured import dumps_structured, loads_structured
from gurps_sheet.storage.validation import character_to_dict, validate_character_data

__all__ = [
    "CharacterLoadError",
    "UnsupportedFormatError",
    "character_to_dict",
    "dumps_flat_row",
    "dumps_structured",
    "export_filename",
    "format_for_path",
    "load_character",
    "loads_flat_row",
    "loads_structured",
    "save_character",
    "validate_character_data",
]
