"""Character record data model.

Represents everything written on a GURPS 4th Edition sheet: identity,
attributes, secondary characteristics, combat modifiers, point budget
and the open-ended trait/skill/gear lists. This is the single aggregate
the engine recalculates and the storage layer round-trips.
"""

from dataclasses import dataclass, field


@dataclass(slots=True)
class Advantage:
    id: str = ""
    name: str = ""
    cost: int = 0
    level: int | None = None  # leveled advantages multiply cost by level
    description: str = ""
    notes: str = ""


@dataclass(slots=True)
class Disadvantage:
    id: str = ""
    name: str = ""
    cost: int = 0  # stored negative
    description: str = ""
    notes: str = ""


@dataclass(slots=True)
class Skill:
    """A learned skill.

    ``level`` and ``relative_level`` are caches of the skill resolver and
    are rewritten by the engine whenever an input changes.
    """
    id: str = ""
    name: str = ""
    attribute: str = "DX"    # ST | DX | IQ | HT | Will | Per
    difficulty: str = "A"    # E | A | H | VH
    points: int = 1
    level: int = 0
    relative_level: str = ""
    modifier: int = 0        # flat bonus on top of the computed level
    description: str = ""
    notes: str = ""


@dataclass(slots=True)
class Equipment:
    id: str = ""
    name: str = ""
    weight: float = 0.0      # lbs, per item
    quantity: int = 1
    description: str = ""
    notes: str = ""


@dataclass(slots=True)
class Spell:
    id: str = ""
    name: str = ""
    spell_class: str = ""    # college/class of magic
    skill_level: int = 10
    time_to_cast: str = ""
    duration: str = ""
    cost_to_cast: str = ""
    cost_to_maintain: str = ""
    notes: str = ""
    page: str = ""


@dataclass(slots=True)
class Language:
    id: str = ""
    name: str = ""
    written_level: str = "None"  # None | Broken | Accented | Native
    spoken_level: str = "None"
    points: int = 0
    notes: str = ""


@dataclass(slots=True)
class Status:
    id: str = ""
    level: int = 0
    points: int = 0
    description: str = ""
    notes: str = ""


@dataclass(slots=True)
class Reputation:
    id: str = ""
    description: str = ""
    modifier: int = 0
    scope: str = ""
    points: int = 0
    notes: str = ""


@dataclass(slots=True)
class CulturalFamiliarity:
    id: str = ""
    name: str = ""
    points: int = 0
    notes: str = ""


@dataclass(slots=True)
class ReactionModifier:
    id: str = ""
    source: str = ""
    modifier: int = 0
    description: str = ""


# Entry type stored in each collection field of Character.
COLLECTION_TYPES: dict[str, type] = {
    "advantages": Advantage,
    "disadvantages": Disadvantage,
    "skills": Skill,
    "equipment": Equipment,
    "spells": Spell,
    "languages": Language,
    "status": Status,
    "reputation": Reputation,
    "cultural_familiarities": CulturalFamiliarity,
    "reaction_modifiers": ReactionModifier,
}


@dataclass(slots=True)
class Character:
    """A GURPS character sheet.

    Defaults describe a fresh 100-point character with every attribute at
    10 and every secondary characteristic at its derived value.
    """

    # Identity
    name: str = ""
    player: str = ""
    height: str = ""
    weight: str = ""
    age: str = ""
    appearance: str = ""
    size_modifier: int = 0
    tech_level: str = "3"
    tech_level_cost: int = 0

    # Point budget
    point_total: int = 100
    unspent_points: int = 0  # point_total - spent, engine-maintained

    # Primary attributes, 1-200
    st: int = 10
    dx: int = 10
    iq: int = 10
    ht: int = 10

    # Secondary characteristics
    hp: int = 10
    will: int = 10
    per: int = 10
    fp: int = 10
    basic_speed: float = 5.0
    basic_move: int = 5

    # Combat
    basic_lift: int = 20
    damage_thrust: str = "1d+1"
    damage_swing: str = "3d+1"
    dodge_modifier: int = 0
    parry_modifier: int = 0
    block_modifier: int = 0

    # Encumbrance
    current_weight: float = 0.0

    # Lists
    advantages: list[Advantage] = field(default_factory=list)
    disadvantages: list[Disadvantage] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)
    equipment: list[Equipment] = field(default_factory=list)
    spells: list[Spell] = field(default_factory=list)

    # Social
    languages: list[Language] = field(default_factory=list)
    status: list[Status] = field(default_factory=list)
    reputation: list[Reputation] = field(default_factory=list)
    cultural_familiarities: list[CulturalFamiliarity] = field(default_factory=list)

    reaction_modifiers: list[ReactionModifier] = field(default_factory=list)

    # Free text
    equipment_simple: list[str] = field(default_factory=list)
    campaign_lore: str = ""

    # Secondary fields the user has explicitly set (names from SECONDARY_FIELDS)
    overrides: set[str] = field(default_factory=set)
