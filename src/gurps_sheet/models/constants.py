"""GURPS attribute names, skill difficulties, and record field groupings.

Attribute and difficulty values are the short codes used on the sheet and
in saved files ("ST", "Will", "VH", ...). Field groupings use the Python
attribute names of the Character dataclass.
"""

from enum import Enum


class Attribute(str, Enum):
    """Attributes a skill can be based on.

    The four primaries plus Will and Per, which start at IQ but are
    bought separately.
    """
    ST = "ST"
    DX = "DX"
    IQ = "IQ"
    HT = "HT"
    WILL = "Will"
    PER = "Per"


class Difficulty(str, Enum):
    """Skill difficulty tier, stored by its sheet abbreviation."""
    EASY = "E"
    AVERAGE = "A"
    HARD = "H"
    VERY_HARD = "VH"


# Level offset at 1 point invested, by difficulty code.
DIFFICULTY_OFFSET: dict[str, int] = {
    Difficulty.EASY.value: 0,
    Difficulty.AVERAGE.value: -1,
    Difficulty.HARD.value: -2,
    Difficulty.VERY_HARD.value: -3,
}
UNKNOWN_DIFFICULTY_OFFSET = -1

# Value used for a skill whose governing attribute is not recognised.
UNKNOWN_ATTRIBUTE_VALUE = 10

# Character field holding each skill attribute's current value.
ATTRIBUTE_FIELDS: dict[str, str] = {
    Attribute.ST.value: "st",
    Attribute.DX.value: "dx",
    Attribute.IQ.value: "iq",
    Attribute.HT.value: "ht",
    Attribute.WILL.value: "will",
    Attribute.PER.value: "per",
}

PRIMARY_FIELDS: tuple[str, ...] = ("st", "dx", "iq", "ht")

# Secondary characteristics the user may override.
SECONDARY_FIELDS: tuple[str, ...] = (
    "hp", "will", "per", "fp", "basic_speed", "basic_move",
)

# Primary attributes each secondary characteristic is derived from.
SECONDARY_SOURCES: dict[str, tuple[str, ...]] = {
    "hp": ("st",),
    "will": ("iq",),
    "per": ("iq",),
    "fp": ("ht",),
    "basic_speed": ("dx", "ht"),
    "basic_move": ("dx", "ht"),
}

# Points per written or spoken fluency level.
LANGUAGE_FLUENCY_POINTS: dict[str, int] = {
    "None": 0,
    "Broken": 1,
    "Accented": 2,
    "Native": 3,
}

# Sheet names that are not the camelCase of the field name.
_WIRE_NAMES: dict[str, str] = {
    "st": Attribute.ST.value,
    "dx": Attribute.DX.value,
    "iq": Attribute.IQ.value,
    "ht": Attribute.HT.value,
    "hp": "HP",
    "will": Attribute.WILL.value,
    "per": Attribute.PER.value,
    "fp": "FP",
    "spell_class": "class",
}


def wire_key(name: str) -> str:
    """Sheet/file key for a dataclass field name (snake_case -> camelCase)."""
    if name in _WIRE_NAMES:
        return _WIRE_NAMES[name]
    first, *rest = name.split("_")
    return first + "".join(part.capitalize() for part in rest)
