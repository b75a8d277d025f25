"""Derived stat formulas for GURPS 4th Edition.

Each function is a pure mapping from primary attributes to the value the
sheet shows when nothing has been bought up or down. The engine decides
whether a derived value is written into the record; see
``gurps_sheet.engine.reconcile``.

References:
  - GURPS Basic Set: Characters, ch. 1 (secondary characteristics)
  - Basic Set damage table (thrust/swing by ST)
"""

import math
from dataclasses import dataclass

from gurps_sheet.models.character import Character
from gurps_sheet.models.encumbrance import (
    EncumbranceLevel,
    classify_encumbrance,
    dodge,
    effective_move,
)


def basic_lift(st: int) -> int:
    """Basic Lift = floor(ST^2 / 5) lbs."""
    return math.floor(st * st / 5)


def basic_speed(dx: int, ht: int) -> float:
    """Basic Speed = (DX + HT) / 4, rounded down to the nearest quarter."""
    return math.floor((dx + ht) / 4 * 4) / 4


def basic_move(dx: int, ht: int) -> int:
    """Basic Move = Basic Speed with fractions dropped."""
    return math.floor(basic_speed(dx, ht))


@dataclass(frozen=True, slots=True)
class DamageDice:
    thrust: str
    swing: str


def _dice(count: int, modifier: str) -> str:
    return f"{count}d{modifier}"


def damage(st: int) -> DamageDice:
    """Thrust and swing damage for a given ST.

    Thrust: max(1, ST // 6) dice, +1 when ST % 6 is 3-5, -1 when it is 0.
    Swing: max(1, ST // 3) dice, +2 when ST % 3 is 2, +1 when it is 1.
    """
    thrust_dice = max(1, st // 6)
    swing_dice = max(1, st // 3)

    rem = st % 6
    thrust_mod = "+1" if rem >= 3 else "" if rem >= 1 else "-1"
    rem = st % 3
    swing_mod = "+2" if rem == 2 else "+1" if rem == 1 else ""

    return DamageDice(thrust=_dice(thrust_dice, thrust_mod), swing=_dice(swing_dice, swing_mod))


@dataclass(frozen=True, slots=True)
class SecondaryDefaults:
    """Derived value of every overridable secondary characteristic."""

    hp: int
    will: int
    per: int
    fp: int
    basic_speed: float
    basic_move: int

    def get(self, field_name: str) -> int | float:
        return getattr(self, field_name)


def secondary_defaults(st: int, dx: int, iq: int, ht: int) -> SecondaryDefaults:
    """HP from ST, Will and Per from IQ, FP from HT, speed/move from DX+HT."""
    return SecondaryDefaults(
        hp=st,
        will=iq,
        per=iq,
        fp=ht,
        basic_speed=basic_speed(dx, ht),
        basic_move=basic_move(dx, ht),
    )


def defaults_for(character: Character) -> SecondaryDefaults:
    return secondary_defaults(character.st, character.dx, character.iq, character.ht)


def parry(dx: int, parry_modifier: int = 0) -> int:
    """Unarmed/default parry = floor(DX / 2) + 3, plus the sheet modifier."""
    return math.floor(dx / 2) + 3 + parry_modifier


def block(block_modifier: int = 0) -> int:
    """Block shown on the sheet: flat 10 plus the sheet modifier."""
    return 10 + block_modifier


@dataclass
class CharacterStats:
    """Read-only combat/movement snapshot for display."""

    basic_lift: int = 0
    damage: DamageDice | None = None
    encumbrance: EncumbranceLevel | None = None
    dodge: int = 0
    parry: int = 0
    block: int = 0
    move: int = 0


def compute_stats(character: Character) -> CharacterStats:
    """Compute the combat block for a character as it currently stands.

    Uses the stored basic speed/move (which may be overridden) and the
    encumbrance tier for the stored current weight.
    """
    lift = basic_lift(character.st)
    level = classify_encumbrance(character.current_weight, lift)
    return CharacterStats(
        basic_lift=lift,
        damage=damage(character.st),
        encumbrance=level,
        dodge=dodge(character.basic_speed, level, character.dodge_modifier),
        parry=parry(character.dx, character.parry_modifier),
        block=block(character.block_modifier),
        move=effective_move(character.basic_speed, character.basic_move, level),
    )
