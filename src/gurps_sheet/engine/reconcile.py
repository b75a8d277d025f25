"""Keep secondary characteristics in step with primary attributes.

A secondary characteristic either tracks its derived default or holds a
value the user set on purpose. The record names the latter in
``Character.overrides``; everything else is re-derived after each
attribute change. Basic Lift is never overridable.

``reconcile_by_previous_defaults`` implements the older rule for records
without override tags: a field tracks its default iff it still equals the
default derived from the attributes *before* the change.
"""

import logging
from dataclasses import dataclass

from gurps_sheet.models.character import Character
from gurps_sheet.models.constants import SECONDARY_FIELDS, SECONDARY_SOURCES
from gurps_sheet.models.derived_stats import (
    basic_lift,
    damage,
    defaults_for,
    secondary_defaults,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PrimaryAttributes:
    st: int
    dx: int
    iq: int
    ht: int

    @classmethod
    def of(cls, character: Character) -> "PrimaryAttributes":
        return cls(character.st, character.dx, character.iq, character.ht)


def _sync_lift(character: Character, changed: list[str]) -> None:
    lift = basic_lift(character.st)
    if character.basic_lift != lift:
        character.basic_lift = lift
        changed.append("basic_lift")


def reconcile_secondaries(character: Character) -> list[str]:
    """Re-derive every secondary field that is not overridden.

    Returns the names of fields whose value changed.
    """
    defaults = defaults_for(character)
    changed: list[str] = []
    for field_name in SECONDARY_FIELDS:
        if field_name in character.overrides:
            continue
        value = defaults.get(field_name)
        if getattr(character, field_name) != value:
            setattr(character, field_name, value)
            changed.append(field_name)
    _sync_lift(character, changed)
    if changed:
        logger.debug("Re-derived %s", ", ".join(changed))
    return changed


def reconcile_by_previous_defaults(
    character: Character,
    previous: PrimaryAttributes,
) -> list[str]:
    """Re-derive fields that still equal the pre-change default.

    Only fields whose source attributes actually changed are considered,
    so an ST change never touches Will, Per or FP.
    """
    before = secondary_defaults(previous.st, previous.dx, previous.iq, previous.ht)
    after = defaults_for(character)
    changed: list[str] = []
    for field_name in SECONDARY_FIELDS:
        sources = SECONDARY_SOURCES[field_name]
        if all(getattr(previous, s) == getattr(character, s) for s in sources):
            continue
        current = getattr(character, field_name)
        if current != before.get(field_name):
            logger.debug("Keeping customised %s=%s", field_name, current)
            continue
        new_value = after.get(field_name)
        if current != new_value:
            setattr(character, field_name, new_value)
            changed.append(field_name)
    _sync_lift(character, changed)
    return changed


def reconcile_damage(character: Character, previous_st: int) -> list[str]:
    """Re-derive damage dice that still read as the previous ST's dice.

    Damage is free text on the sheet; a hand-edited entry is left alone.
    """
    if previous_st == character.st:
        return []
    old = damage(previous_st)
    new = damage(character.st)
    changed: list[str] = []
    if character.damage_thrust == old.thrust and old.thrust != new.thrust:
        character.damage_thrust = new.thrust
        changed.append("damage_thrust")
    if character.damage_swing == old.swing and old.swing != new.swing:
        character.damage_swing = new.swing
        changed.append("damage_swing")
    return changed


def infer_overrides(character: Character) -> set[str]:
    """Guess which secondary fields were customised from their values.

    Used for saved records that predate explicit override tags: any field
    that differs from the default for the stored attributes is treated as
    overridden.
    """
    defaults = defaults_for(character)
    return {
        field_name
        for field_name in SECONDARY_FIELDS
        if getattr(character, field_name) != defaults.get(field_name)
    }
