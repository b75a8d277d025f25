"""Tests for predefined option loading."""

import json
import logging

from gurps_sheet.models.catalog import Catalog, catalog_from_dict, load_catalog


def test_missing_catalog_is_empty(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        catalog = load_catalog(tmp_path / "nope.json")
    assert len(catalog) == 0
    assert "Catalog not found" in caplog.text


def test_no_path_is_empty():
    assert len(load_catalog(None)) == 0


def test_unparseable_catalog_is_empty(tmp_path):
    path = tmp_path / "options.json"
    path.write_text("{oops", encoding="utf-8")
    assert len(load_catalog(path)) == 0


def test_valid_catalog(tmp_path):
    path = tmp_path / "options.json"
    path.write_text(json.dumps({
        "advantages": [{"name": "Combat Reflexes", "cost": 15, "description": "Fast"}],
        "disadvantages": [{"name": "Honesty", "cost": -10}],
        "skills": [{"name": "Stealth", "attribute": "DX", "difficulty": "A"}],
    }), encoding="utf-8")
    catalog = load_catalog(path)
    assert len(catalog) == 3
    assert catalog.find_advantage("Combat Reflexes").description == "Fast"
    assert catalog.find_disadvantage("Honesty").cost == -10
    assert catalog.find_skill("Stealth").difficulty == "A"
    assert catalog.find_skill("Swimming") is None


def test_malformed_rows_skipped():
    catalog = catalog_from_dict({
        "advantages": [{"name": "Luck"}, {"name": "Fit", "cost": "5"}],
        "skills": "not a list",
    })
    assert [a.name for a in catalog.advantages] == ["Fit"]
    assert catalog.advantages[0].cost == 5
    assert catalog.skills == []


def test_non_object_root():
    assert len(catalog_from_dict(["x"])) == 0


def test_empty_catalog_is_falsy_but_usable():
    catalog = Catalog.empty()
    assert not catalog
    assert catalog.find_advantage("Luck") is None
