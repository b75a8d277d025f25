import json

from gurps_sheet.engine.sheet_view import build_sheet_state
from gurps_sheet.storage import load_character, save_character
from scripts.convert_character import convert
from scripts.convert_character import main as convert_main
from scripts.dump_character import format_sheet, sample_engine
from scripts.dump_character import main as dump_main


def test_format_sheet_lists_sections():
    text = format_sheet(build_sheet_state(sample_engine()))
    assert "--- ATTRIBUTES ---" in text
    assert "--- ENCUMBRANCE ---" in text
    assert "Broadsword" in text
    assert "(not in total)" in text


def test_dump_sample_json(capsys):
    assert dump_main(["--json"]) == 0
    state = json.loads(capsys.readouterr().out)
    assert state["points"]["unspent"] == 16


def test_dump_bad_file_returns_error(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    assert dump_main([str(path)]) == 1
    assert "Invalid JSON format" in capsys.readouterr().err


def test_dump_saved_file(tmp_path, capsys):
    path = save_character(sample_engine().state, tmp_path, "json", "hero.json")
    assert dump_main([str(path)]) == 0
    assert "Unspent" in capsys.readouterr().out


def test_convert_json_to_csv(tmp_path):
    character = sample_engine().state
    source = save_character(character, tmp_path, "json", "hero.json")
    out = convert(source, "csv", tmp_path, "hero.csv")
    assert out.suffix == ".csv"
    assert load_character(out) == character


def test_convert_main_rejects_unknown_extension(tmp_path, capsys):
    source = tmp_path / "hero.txt"
    source.write_text("", encoding="utf-8")
    assert convert_main([str(source), "--to", "json", "--out-dir", str(tmp_path)]) == 1
    assert "Unsupported file format" in capsys.readouterr().err
