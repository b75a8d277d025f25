"""Tests for the JSON/CSV encodings, load-time repair and file helpers."""

import json
from datetime import datetime, timezone

import pytest

from gurps_sheet.engine.ids import SequentialIdGenerator
from gurps_sheet.engine.sheet_engine import SheetEngine
from gurps_sheet.models.character import Character
from gurps_sheet.models.constants import wire_key
from gurps_sheet.storage import (
    CharacterLoadError,
    UnsupportedFormatError,
    character_to_dict,
    dumps_flat_row,
    dumps_structured,
    export_filename,
    format_for_path,
    load_character,
    loads_flat_row,
    loads_structured,
    save_character,
    validate_character_data,
)
from gurps_sheet.storage.flat_row import HEADERS, decode_entries, encode_entries


@pytest.fixture
def sheet() -> Character:
    engine = SheetEngine.new_sheet(ids=SequentialIdGenerator("t"))
    engine.set_attribute("st", 12)
    engine.set_attribute("dx", 13)
    engine.set_secondary("hp", 15)
    engine.add_advantage("Combat Reflexes", 15, description="Fast reactions")
    engine.add_advantage("Acute Hearing", 2, level=3)
    engine.add_disadvantage("Honesty", -10)
    engine.add_skill("Broadsword", "DX", "A", 4)
    engine.add_equipment("Rope", weight=1.5, quantity=2)
    engine.add_spell("Light", spell_class="Light and Darkness", skill_level=12)
    engine.add_language("Latin", "Accented", "Broken")
    engine.add_status(1, "Freeman")
    engine.add_reputation("Honest", modifier=1, scope="Town", points=2)
    engine.add_cultural_familiarity("Elven", 1)
    engine.add_reaction_modifier("Appearance", 1)
    engine.set_equipment_list(["torch", "rations"])
    engine.set_current_weight(12.5)
    return engine.state


# --- Wire keys ---

def test_wire_keys():
    assert wire_key("st") == "ST"
    assert wire_key("will") == "Will"
    assert wire_key("basic_speed") == "basicSpeed"
    assert wire_key("cultural_familiarities") == "culturalFamiliarities"
    assert wire_key("spell_class") == "class"
    assert wire_key("name") == "name"


def test_character_to_dict_shape(sheet):
    data = character_to_dict(sheet)
    assert data["ST"] == 12
    assert data["basicLift"] == 28
    assert data["overrides"] == ["HP"]
    assert data["spells"][0]["class"] == "Light and Darkness"
    assert data["equipmentSimple"] == ["torch", "rations"]


# --- JSON ---

def test_json_round_trip(sheet):
    assert loads_structured(dumps_structured(sheet)) == sheet


def test_json_fills_missing_fields():
    """Partial file: defaults for absent fields, ids minted for entries."""
    text = json.dumps({"name": "Ana", "ST": 11, "skills": [{"name": "Climbing"}]})
    char = loads_structured(text, SequentialIdGenerator("x"))
    assert char.name == "Ana"
    assert char.st == 11
    assert char.dx == 10
    assert char.point_total == 100
    assert char.skills[0].id == "x-1"
    assert char.skills[0].attribute == "DX"
    assert char.advantages == []


def test_json_duplicate_ids_replaced():
    text = json.dumps({"advantages": [{"id": "a", "name": "Fit"}, {"id": "a", "name": "Luck"}]})
    char = loads_structured(text, SequentialIdGenerator("x"))
    assert [a.id for a in char.advantages] == ["a", "x-1"]


def test_json_bad_values_keep_defaults():
    text = json.dumps({"ST": "strong", "basicSpeed": "fast", "IQ": "12"})
    char = loads_structured(text)
    assert char.st == 10
    assert char.basic_speed == pytest.approx(5.0)
    assert char.iq == 12


def test_json_non_finite_numbers_keep_defaults():
    text = (
        '{"name": "Ana", "basicSpeed": Infinity, "currentWeight": NaN, '
        '"equipment": [{"name": "Rock", "weight": -Infinity}]}'
    )
    char = loads_structured(text)
    assert char.name == "Ana"
    assert char.basic_speed == pytest.approx(5.0)
    assert char.current_weight == 0.0
    assert char.equipment[0].weight == 0.0


def test_json_non_object_entries_skipped():
    text = json.dumps({"skills": ["Climbing", {"name": "Stealth"}], "equipment": "pack"})
    char = loads_structured(text)
    assert [s.name for s in char.skills] == ["Stealth"]
    assert char.equipment == []


def test_json_malformed():
    with pytest.raises(CharacterLoadError, match="Invalid JSON format"):
        loads_structured("{not json")


def test_json_root_must_be_object():
    with pytest.raises(CharacterLoadError, match="must be an object"):
        loads_structured("[1, 2]")


def test_validate_rejects_non_mapping():
    with pytest.raises(ValueError):
        validate_character_data(["ST", 10])


# --- Overrides on load ---

def test_explicit_overrides_kept():
    char = loads_structured(json.dumps({"ST": 12, "HP": 12, "overrides": ["HP", "bogus"]}))
    assert char.overrides == {"hp"}


def test_legacy_file_overrides_inferred():
    """No overrides key: fields off their default count as customised."""
    char = loads_structured(json.dumps({"ST": 12, "HP": 15, "Will": 10}))
    assert char.overrides == {"hp"}


# --- CSV ---

def test_csv_layout(sheet):
    text = dumps_flat_row(sheet)
    lines = text.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith('"name","player"')
    assert '"ST"' in lines[0]


def test_csv_round_trip(sheet):
    assert loads_flat_row(dumps_flat_row(sheet)) == sheet


def test_csv_scalars_round_trip():
    char = Character(name='Sir "Bob", Knight', st=14, basic_speed=5.75, campaign_lore="line1\nline2")
    loaded = loads_flat_row(dumps_flat_row(char))
    assert loaded.name == 'Sir "Bob", Knight'
    assert loaded.st == 14
    assert loaded.basic_speed == pytest.approx(5.75)
    assert loaded.campaign_lore == "line1\nline2"


def test_csv_entry_encoding():
    cell = encode_entries([{"id": "a", "name": "Fit", "level": None}, {"id": "b", "name": "x"}])
    assert cell == "id:a§name:Fit|id:b§name:x"
    assert decode_entries(cell) == [{"id": "a", "name": "Fit"}, {"id": "b", "name": "x"}]


def test_csv_value_may_contain_colon():
    assert decode_entries("notes:see p. 12: table") == [{"notes": "see p. 12: table"}]


def test_csv_missing_data():
    with pytest.raises(CharacterLoadError, match="Invalid CSV format: missing data"):
        loads_flat_row('"name","ST"\n')


def test_csv_empty_file():
    with pytest.raises(CharacterLoadError):
        loads_flat_row("")


def test_csv_short_row_keeps_defaults():
    char = loads_flat_row('"name","ST","DX"\n"Ana","12"\n')
    assert char.name == "Ana"
    assert char.st == 12
    assert char.dx == 10


def test_csv_non_finite_cell_keeps_default():
    char = loads_flat_row('"basicSpeed","currentWeight"\n"inf","nan"\n')
    assert char.basic_speed == pytest.approx(5.0)
    assert char.current_weight == 0.0


def test_csv_headers_cover_every_field():
    assert "culturalFamiliarities" in HEADERS
    assert "overrides" in HEADERS
    assert len(HEADERS) == len(set(HEADERS))


# --- Files ---

def test_format_for_path():
    assert format_for_path("hero.JSON") == "json"
    assert format_for_path("hero.csv") == "csv"
    with pytest.raises(UnsupportedFormatError, match="Unsupported file format: .txt"):
        format_for_path("hero.txt")


def test_export_filename():
    now = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)
    assert export_filename(Character(name="Ana"), "json", now) == "Ana_2024-03-05T14-07-09.json"
    assert export_filename(Character(), "csv", now) == "Character_2024-03-05T14-07-09.csv"


@pytest.mark.parametrize("fmt", ["json", "csv"])
def test_save_and_load(tmp_path, sheet, fmt):
    path = save_character(sheet, tmp_path, fmt, filename=f"hero.{fmt}")
    assert path == tmp_path / f"hero.{fmt}"
    assert load_character(path) == sheet


def test_load_unsupported_extension_before_reading(tmp_path):
    with pytest.raises(UnsupportedFormatError):
        load_character(tmp_path / "missing.xml")


def test_load_missing_file(tmp_path):
    with pytest.raises(CharacterLoadError, match="failed to read file"):
        load_character(tmp_path / "missing.json")
