"""Encumbrance tiers and the move/dodge penalties they impose.

Five ordered tiers keyed by multiples of Basic Lift. Anything above 10x
lift is still Extra-Heavy; there is no "overloaded" tier.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class EncumbranceLevel:
    name: str
    lift_multiple: int      # weight ceiling = basic lift * this
    penalty: int
    dodge_penalty: int
    move_multiplier: float


NONE = EncumbranceLevel("None", 1, 0, 0, 1.0)
LIGHT = EncumbranceLevel("Light", 2, -1, -1, 0.8)
MEDIUM = EncumbranceLevel("Medium", 3, -2, -2, 0.6)
HEAVY = EncumbranceLevel("Heavy", 6, -3, -3, 0.4)
EXTRA_HEAVY = EncumbranceLevel("Extra-Heavy", 10, -4, -4, 0.2)

ENCUMBRANCE_LEVELS: tuple[EncumbranceLevel, ...] = (NONE, LIGHT, MEDIUM, HEAVY, EXTRA_HEAVY)


def classify_encumbrance(current_weight: float, basic_lift: int | float) -> EncumbranceLevel:
    """First tier whose ceiling is >= current_weight, else Extra-Heavy."""
    for level in ENCUMBRANCE_LEVELS:
        if current_weight <= basic_lift * level.lift_multiple:
            return level
    return EXTRA_HEAVY


def dodge(basic_speed: float, level: EncumbranceLevel, dodge_modifier: int = 0) -> int:
    """Dodge = floor(Basic Speed) + 3 + encumbrance penalty + modifier."""
    return math.floor(basic_speed) + 3 + level.dodge_penalty + dodge_modifier


def effective_move(basic_speed: float, basic_move: int, level: EncumbranceLevel) -> int:
    """Stored Basic Move scaled by the tier's multiplier, rounded down."""
    speed_floor = math.floor(basic_speed)
    base = speed_floor + (basic_move - speed_floor)
    return math.floor(base * level.move_multiplier)


@dataclass(frozen=True, slots=True)
class EncumbranceRow:
    """One line of the encumbrance table shown next to the sheet."""

    level: EncumbranceLevel
    max_weight: float
    move: int
    dodge: int
    active: bool


def encumbrance_table(
    basic_lift: int | float,
    current_weight: float,
    basic_speed: float,
    basic_move: int,
    dodge_modifier: int = 0,
) -> list[EncumbranceRow]:
    """All five tiers with their weight ceilings, flagging the active one."""
    active = classify_encumbrance(current_weight, basic_lift)
    return [
        EncumbranceRow(
            level=level,
            max_weight=basic_lift * level.lift_multiple,
            move=effective_move(basic_speed, basic_move, level),
            dodge=dodge(basic_speed, level, dodge_modifier),
            active=level is active,
        )
        for level in ENCUMBRANCE_LEVELS
    ]
