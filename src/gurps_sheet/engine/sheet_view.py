"""Export a display snapshot of the current sheet.

Produces a JSON-ready dict with every derived number a sheet view needs,
so presentation code never recomputes anything itself.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from gurps_sheet.engine.point_ledger import attribute_costs, secondary_costs
from gurps_sheet.engine.sheet_engine import SheetEngine, equipment_weight
from gurps_sheet.models.constants import PRIMARY_FIELDS, SECONDARY_FIELDS, wire_key
from gurps_sheet.models.derived_stats import defaults_for
from gurps_sheet.models.social import reaction_total


def _ledger_payload(ledger) -> dict[str, int]:
    return {
        "attributes": int(ledger.attributes),
        "secondary": int(ledger.secondary),
        "advantages": int(ledger.advantages),
        "disadvantages": int(ledger.disadvantages),
        "skills": int(ledger.skills),
        "social": int(ledger.social),
        "total_spent": int(ledger.total_spent),
        "point_total": int(ledger.point_total),
        "unspent": int(ledger.unspent),
    }


def _level_payload(level) -> dict[str, Any]:
    return {
        "name": level.name,
        "lift_multiple": int(level.lift_multiple),
        "penalty": int(level.penalty),
        "dodge_penalty": int(level.dodge_penalty),
        "move_multiplier": float(level.move_multiplier),
    }


def build_sheet_state(engine: SheetEngine) -> dict[str, Any]:
    """Build a current snapshot from a live engine."""
    char = engine.state
    config = engine.config
    stats = engine.stats()
    ledger = engine.ledger()
    defaults = defaults_for(char)

    attr_costs = attribute_costs(char, config)
    attributes = {
        wire_key(name): {"value": int(getattr(char, name)), "cost": int(attr_costs[name])}
        for name in PRIMARY_FIELDS
    }

    sec_costs = secondary_costs(char, config)
    secondary = {
        wire_key(name): {
            "value": getattr(char, name),
            "default": defaults.get(name),
            "cost": int(sec_costs[name]),
            "overridden": name in char.overrides,
        }
        for name in SECONDARY_FIELDS
    }

    encumbrance_rows = [
        {
            **_level_payload(row.level),
            "max_weight": float(row.max_weight),
            "move": int(row.move),
            "dodge": int(row.dodge),
            "active": bool(row.active),
        }
        for row in engine.encumbrance_table()
    ]

    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "identity": {
            "name": char.name,
            "player": char.player,
            "tech_level": char.tech_level,
            "size_modifier": int(char.size_modifier),
        },
        "attributes": attributes,
        "secondary": secondary,
        "combat": {
            "basic_lift": int(stats.basic_lift),
            "damage_thrust": char.damage_thrust,
            "damage_swing": char.damage_swing,
            "dodge": int(stats.dodge),
            "parry": int(stats.parry),
            "block": int(stats.block),
            "move": int(stats.move),
        },
        "encumbrance": {
            "current_weight": float(char.current_weight),
            "equipment_weight": float(equipment_weight(char)),
            "level": _level_payload(stats.encumbrance),
            "table": encumbrance_rows,
        },
        "points": _ledger_payload(ledger),
        "skills": [
            {
                "id": skill.id,
                "name": skill.name,
                "level": int(skill.level),
                "relative_level": skill.relative_level,
                "points": int(skill.points),
            }
            for skill in char.skills
        ],
        "social": {
            "cost": int(ledger.social),
            "included_in_total": bool(config.include_social_costs),
            "reaction_total": int(reaction_total(char)),
        },
    }
