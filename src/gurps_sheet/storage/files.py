"""Save and load character files, choosing the encoding by extension."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from gurps_sheet.engine.ids import IdGenerator
from gurps_sheet.models.character import Character
from gurps_sheet.storage.errors import CharacterLoadError, UnsupportedFormatError
from gurps_sheet.storage.flat_row import dumps_flat_row, loads_flat_row
from gurps_sheet.storage.structured import dumps_structured, loads_structured

logger = logging.getLogger(__name__)

FORMAT_BY_EXTENSION: dict[str, str] = {
    ".json": "json",
    ".csv": "csv",
}


def format_for_path(path: Path | str) -> str:
    """Encoding name for *path*; raises UnsupportedFormatError otherwise."""
    extension = Path(path).suffix.lower()
    fmt = FORMAT_BY_EXTENSION.get(extension)
    if fmt is None:
        raise UnsupportedFormatError(extension)
    return fmt


def export_filename(character: Character, fmt: str, now: datetime | None = None) -> str:
    """``{name}_{YYYY-MM-DDTHH-MM-SS}.{fmt}``, UTC, ``Character`` when unnamed."""
    name = character.name or "Character"
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H-%M-%S")
    return f"{name}_{stamp}.{fmt}"


def dumps(character: Character, fmt: str) -> str:
    if fmt == "json":
        return dumps_structured(character)
    if fmt == "csv":
        return dumps_flat_row(character)
    raise UnsupportedFormatError(f".{fmt}")


def loads(text: str, fmt: str, ids: IdGenerator | None = None) -> Character:
    if fmt == "json":
        return loads_structured(text, ids)
    if fmt == "csv":
        return loads_flat_row(text, ids)
    raise UnsupportedFormatError(f".{fmt}")


def save_character(
    character: Character,
    directory: Path | str,
    fmt: str = "json",
    filename: str | None = None,
) -> Path:
    """Write *character* into *directory*; returns the file path."""
    text = dumps(character, fmt)
    path = Path(directory) / (filename or export_filename(character, fmt))
    path.write_text(text, encoding="utf-8")
    logger.info("Saved character to: %s", path)
    return path


def load_character(path: Path | str, ids: IdGenerator | None = None) -> Character:
    """Read and validate a character file.

    The extension is checked before the file is opened. Any failure
    raises; the caller's current record is never touched.
    """
    path = Path(path)
    fmt = format_for_path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CharacterLoadError(fmt, f"failed to read file: {exc}") from exc
    character = loads(text, fmt, ids)
    logger.info("Loaded character %r from: %s", character.name or "(unnamed)", path)
    return character
