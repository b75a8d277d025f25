"""Convert a character file between the JSON and CSV encodings.

Usage:
    python -m scripts.convert_character SOURCE --to csv [--out-dir DIR]

The output is named ``{name}_{timestamp}.{ext}`` unless --out is given.
Loading fills missing fields and ids exactly as the sheet does.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from gurps_sheet.storage import (
    CharacterLoadError,
    UnsupportedFormatError,
    load_character,
    save_character,
)

logger = logging.getLogger(__name__)


def convert(source: Path, fmt: str, out_dir: Path, filename: str | None = None) -> Path:
    character = load_character(source)
    return save_character(character, out_dir, fmt, filename)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert a character file")
    parser.add_argument("source", type=Path)
    parser.add_argument("--to", choices=("json", "csv"), required=True, dest="fmt")
    parser.add_argument("--out-dir", type=Path, default=Path("."))
    parser.add_argument("--out", help="Output file name (default: name + timestamp)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        path = convert(args.source, args.fmt, args.out_dir, args.out)
    except (CharacterLoadError, UnsupportedFormatError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
