"""Point costs for social traits: languages, status, reputation, culture."""

from gurps_sheet.models.character import Character
from gurps_sheet.models.constants import LANGUAGE_FLUENCY_POINTS


def fluency_points(fluency: str) -> int:
    return LANGUAGE_FLUENCY_POINTS.get(fluency, 0)


def language_points(written_level: str, spoken_level: str) -> int:
    """Written and spoken comprehension are bought separately."""
    return fluency_points(written_level) + fluency_points(spoken_level)


def status_points(level: int, cost_per_level: int) -> int:
    """Status costs *cost_per_level* points per level (see SheetConfig)."""
    return level * cost_per_level


def social_cost(character: Character) -> int:
    """Sum of stored points across all social trait lists."""
    return (
        sum(lang.points for lang in character.languages)
        + sum(st.points for st in character.status)
        + sum(rep.points for rep in character.reputation)
        + sum(cf.points for cf in character.cultural_familiarities)
    )


def reaction_total(character: Character) -> int:
    return sum(rm.modifier for rm in character.reaction_modifiers)
