"""Character point accounting.

Sums attribute, secondary characteristic, advantage, disadvantage and
skill costs into one total and compares it with the point budget.
Social traits are summed separately and only folded in when
``SheetConfig.include_social_costs`` is set.
"""

import math
from dataclasses import dataclass

from gurps_sheet.engine.sheet_config import SheetConfig
from gurps_sheet.models.character import Character
from gurps_sheet.models.derived_stats import basic_speed
from gurps_sheet.models.social import social_cost


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


@dataclass(frozen=True, slots=True)
class PointLedger:
    """Per-category breakdown of points spent."""

    attributes: int
    secondary: int
    advantages: int
    disadvantages: int
    skills: int
    social: int
    total_spent: int
    point_total: int

    @property
    def unspent(self) -> int:
        return self.point_total - self.total_spent


def attribute_costs(character: Character, config: SheetConfig | None = None) -> dict[str, int]:
    cfg = config or SheetConfig()
    base = cfg.attribute_baseline
    return {
        "st": (character.st - base) * cfg.st_cost,
        "dx": (character.dx - base) * cfg.dx_cost,
        "iq": (character.iq - base) * cfg.iq_cost,
        "ht": (character.ht - base) * cfg.ht_cost,
    }


def secondary_costs(character: Character, config: SheetConfig | None = None) -> dict[str, int]:
    """Cost of each secondary characteristic bought above/below its base.

    HP/Will/Per/FP are measured against the attribute they start from;
    speed and move against the values derived from DX and HT.
    """
    cfg = config or SheetConfig()
    base_speed = basic_speed(character.dx, character.ht)
    base_move = math.floor(base_speed)
    return {
        "hp": (character.hp - character.st) * cfg.hp_cost,
        "will": (character.will - character.iq) * cfg.will_cost,
        "per": (character.per - character.iq) * cfg.per_cost,
        "fp": (character.fp - character.ht) * cfg.fp_cost,
        "basic_speed": _round_half_up((character.basic_speed - base_speed) * cfg.basic_speed_cost),
        "basic_move": (character.basic_move - base_move) * cfg.basic_move_cost,
    }


def advantages_cost(character: Character) -> int:
    return sum(adv.cost * max(1, adv.level or 0) for adv in character.advantages)


def disadvantages_cost(character: Character) -> int:
    return sum(dis.cost for dis in character.disadvantages)


def skills_cost(character: Character) -> int:
    return sum(skill.points for skill in character.skills)


def compute_point_ledger(character: Character, config: SheetConfig | None = None) -> PointLedger:
    cfg = config or SheetConfig()
    attrs = sum(attribute_costs(character, cfg).values())
    secondary = sum(secondary_costs(character, cfg).values())
    advantages = advantages_cost(character)
    disadvantages = disadvantages_cost(character)
    skills = skills_cost(character)
    social = social_cost(character)

    total = attrs + secondary + advantages + disadvantages + skills
    if cfg.include_social_costs:
        total += social

    return PointLedger(
        attributes=attrs,
        secondary=secondary,
        advantages=advantages,
        disadvantages=disadvantages,
        skills=skills,
        social=social,
        total_spent=total,
        point_total=character.point_total,
    )


def total_spent(character: Character, config: SheetConfig | None = None) -> int:
    return compute_point_ledger(character, config).total_spent


def unspent_points(character: Character, config: SheetConfig | None = None) -> int:
    return compute_point_ledger(character, config).unspent
