"""Skill level resolution from attribute, difficulty and invested points.

Point breakpoints (extra levels over the 1-point level):
  0-1 pts -> +0, 2 -> +1, 4 -> +2, 8+ -> +2 + floor(log2(points / 4))

Values between breakpoints (3, 5, 6, 7) resolve to the nearest lower
breakpoint, so 3 points buys the same level as 2 and 5-7 the same as 4.
"""

import math

from gurps_sheet.models.character import Character, Skill
from gurps_sheet.models.constants import (
    ATTRIBUTE_FIELDS,
    DIFFICULTY_OFFSET,
    UNKNOWN_ATTRIBUTE_VALUE,
    UNKNOWN_DIFFICULTY_OFFSET,
)


def attribute_value(attribute: str, character: Character) -> int:
    """Current value of a skill's governing attribute (10 if unrecognised)."""
    field_name = ATTRIBUTE_FIELDS.get(attribute)
    if field_name is None:
        return UNKNOWN_ATTRIBUTE_VALUE
    return getattr(character, field_name)


def difficulty_offset(difficulty: str) -> int:
    return DIFFICULTY_OFFSET.get(difficulty, UNKNOWN_DIFFICULTY_OFFSET)


def extra_levels(points: int) -> int:
    """Levels bought beyond the difficulty offset."""
    if points >= 8:
        return 2 + math.floor(math.log2(points / 4))
    if points >= 4:
        return 2
    if points >= 2:
        return 1
    return 0


def format_relative_level(attribute: str, difference: int) -> str:
    sign = "+" if difference >= 0 else ""
    return f"{attribute}{sign}{difference}"


def resolve_skill_level(skill: Skill, character: Character) -> tuple[int, str]:
    """Return (stored level, relative level label) for *skill*.

    The stored level includes the skill's flat modifier; the relative
    label does not.
    """
    base = attribute_value(skill.attribute, character)
    level = base + difficulty_offset(skill.difficulty) + extra_levels(skill.points)
    return level + skill.modifier, format_relative_level(skill.attribute, level - base)


def refresh_skills(character: Character) -> bool:
    """Rewrite cached skill levels that are out of date.

    Skills whose cache already matches are not touched. Returns True if
    any skill was updated.
    """
    changed = False
    for skill in character.skills:
        level, relative = resolve_skill_level(skill, character)
        if skill.level != level or skill.relative_level != relative:
            skill.level = level
            skill.relative_level = relative
            changed = True
    return changed
