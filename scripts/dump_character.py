"""Dump the computed sheet for a saved or sample character.

Loads a character file (or builds a sample one), runs it through the
sheet engine, and prints attributes, secondary characteristics, combat
numbers, encumbrance and the point ledger.

Usage:
    python -m scripts.dump_character [PATH] [--catalog PATH] [--json]

Without PATH, a sample 150-point character is used.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from gurps_sheet.engine.sheet_engine import SheetEngine
from gurps_sheet.engine.sheet_view import build_sheet_state
from gurps_sheet.models.catalog import Catalog, load_catalog
from gurps_sheet.storage import CharacterLoadError, UnsupportedFormatError, load_character


def sample_engine(catalog: Catalog | None = None) -> SheetEngine:
    engine = SheetEngine.new_sheet(catalog=catalog)
    engine.set_point_total(150)
    engine.set_attribute("st", 12)
    engine.set_attribute("dx", 13)
    engine.set_attribute("iq", 11)
    engine.set_attribute("ht", 11)
    engine.set_secondary("hp", 14)
    engine.add_advantage("Combat Reflexes", 15)
    engine.add_disadvantage("Overconfidence", -5)
    engine.add_skill("Broadsword", "DX", "A", 8)
    engine.add_skill("Shield", "DX", "E", 2)
    engine.add_language("Anglish", "Native", "Native")
    engine.add_equipment("Broadsword", weight=3.0)
    engine.add_equipment("Medium Shield", weight=15.0)
    engine.sync_weight_from_equipment()
    return engine


def format_sheet(state: dict[str, Any]) -> str:
    lines: list[str] = []
    identity = state["identity"]
    lines.append("=" * 50)
    lines.append(f"  {identity['name'] or '(unnamed)'}  TL{identity['tech_level']}")
    lines.append("=" * 50)

    lines.append("\n--- ATTRIBUTES ---")
    for name, row in state["attributes"].items():
        lines.append(f"  {name:<4} {row['value']:>3}   [{row['cost']:>+4}]")

    lines.append("\n--- SECONDARY ---")
    for name, row in state["secondary"].items():
        flag = " *" if row["overridden"] else ""
        lines.append(f"  {name:<11} {row['value']:>6}   [{row['cost']:>+4}]{flag}")

    combat = state["combat"]
    lines.append("\n--- COMBAT ---")
    lines.append(f"  Basic Lift  {combat['basic_lift']:>6}")
    lines.append(f"  Thrust      {combat['damage_thrust']:>6}")
    lines.append(f"  Swing       {combat['damage_swing']:>6}")
    lines.append(f"  Dodge       {combat['dodge']:>6}")
    lines.append(f"  Parry       {combat['parry']:>6}")
    lines.append(f"  Block       {combat['block']:>6}")
    lines.append(f"  Move        {combat['move']:>6}")

    enc = state["encumbrance"]
    lines.append("\n--- ENCUMBRANCE ---")
    for row in enc["table"]:
        marker = ">" if row["active"] else " "
        lines.append(
            f" {marker}{row['name']:<12} <= {row['max_weight']:>7.1f}  "
            f"move {row['move']:>2}  dodge {row['dodge']:>2}"
        )

    if state["skills"]:
        lines.append("\n--- SKILLS ---")
        for skill in state["skills"]:
            lines.append(
                f"  {skill['name']:<18} {skill['level']:>3}  "
                f"{skill['relative_level']:<7} [{skill['points']}]"
            )

    points = state["points"]
    lines.append("\n--- POINTS ---")
    for key in ("attributes", "secondary", "advantages", "disadvantages", "skills"):
        lines.append(f"  {key.capitalize():<14} {points[key]:>5}")
    social = state["social"]
    note = "" if social["included_in_total"] else " (not in total)"
    lines.append(f"  {'Social':<14} {points['social']:>5}{note}")
    lines.append(f"  {'Spent':<14} {points['total_spent']:>5} / {points['point_total']}")
    lines.append(f"  {'Unspent':<14} {points['unspent']:>5}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Dump a computed character sheet")
    parser.add_argument("path", nargs="?", type=Path, help="Character file (.json or .csv)")
    parser.add_argument("--catalog", type=Path, help="Predefined options JSON")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output.")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    catalog = load_catalog(args.catalog)
    if args.path is None:
        engine = sample_engine(catalog)
    else:
        try:
            character = load_character(args.path)
        except (CharacterLoadError, UnsupportedFormatError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        engine = SheetEngine.from_character(character, catalog=catalog)

    state = build_sheet_state(engine)
    if args.json:
        print(json.dumps(state, indent=2))
    else:
        print(format_sheet(state))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
