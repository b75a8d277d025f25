from gurps_sheet.engine.sheet_config import SheetConfig
from gurps_sheet.engine.sheet_engine import SheetEngine
from gurps_sheet.engine.sheet_view import build_sheet_state
from scripts.dump_character import sample_engine


def test_build_sheet_state_shape():
    state = build_sheet_state(sample_engine())

    assert "generated_at" in state
    assert "identity" in state
    assert "attributes" in state
    assert "secondary" in state
    assert "combat" in state
    assert "encumbrance" in state
    assert "points" in state

    assert set(state["attributes"]) == {"ST", "DX", "IQ", "HT"}
    assert set(state["secondary"]) == {"HP", "Will", "Per", "FP", "basicSpeed", "basicMove"}
    assert len(state["encumbrance"]["table"]) == 5
    assert isinstance(state["skills"], list)


def test_sample_sheet_numbers():
    """ST 12/DX 13/IQ 11/HT 11 = 110, HP +2 = 4, traits +10, skills 10."""
    state = build_sheet_state(sample_engine())

    assert state["attributes"]["DX"] == {"value": 13, "cost": 60}
    hp = state["secondary"]["HP"]
    assert hp == {"value": 14, "default": 12, "cost": 4, "overridden": True}
    assert state["secondary"]["basicSpeed"]["value"] == 6.0

    points = state["points"]
    assert points["total_spent"] == 134
    assert points["unspent"] == 16
    assert points["social"] == 6

    combat = state["combat"]
    assert combat["basic_lift"] == 28
    assert combat["dodge"] == 9
    assert combat["parry"] == 9
    assert combat["block"] == 10
    assert combat["move"] == 6

    assert state["encumbrance"]["current_weight"] == 18.0
    assert state["encumbrance"]["level"]["name"] == "None"
    assert state["skills"][0]["level"] == 15
    assert state["skills"][0]["relative_level"] == "DX+2"


def test_social_flag_follows_config():
    state = build_sheet_state(SheetEngine(SheetConfig(include_social_costs=True)))
    assert state["social"]["included_in_total"] is True
    assert state["social"]["reaction_total"] == 0
