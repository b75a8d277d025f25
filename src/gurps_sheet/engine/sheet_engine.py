"""Sheet engine: the editing session for a single character record.

Owns one Character and exposes typed edit operations. Every edit is
applied to a draft copy and then followed, synchronously, by the
recalculation pipeline:

  reconcile secondaries (+ lift, damage) -> refresh skill caches -> ledger

The draft replaces the record only once the pipeline has run, so a
rejected edit leaves the record exactly as it was and ``unspent_points``
and the skill caches are consistent after every observed state. Reads go
through ``state`` (a deep copy) or the derived views (``ledger()``,
``stats()``, ``encumbrance_table()``).
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from gurps_sheet.engine.ids import DEFAULT_IDS, IdGenerator
from gurps_sheet.engine.point_ledger import PointLedger, compute_point_ledger
from gurps_sheet.engine.reconcile import reconcile_damage, reconcile_secondaries
from gurps_sheet.engine.sheet_config import SheetConfig
from gurps_sheet.models.catalog import Catalog
from gurps_sheet.models.character import (
    COLLECTION_TYPES,
    Advantage,
    Character,
    CulturalFamiliarity,
    Disadvantage,
    Equipment,
    Language,
    ReactionModifier,
    Reputation,
    Skill,
    Spell,
    Status,
)
from gurps_sheet.models.constants import (
    PRIMARY_FIELDS,
    SECONDARY_FIELDS,
)
from gurps_sheet.models.derived_stats import CharacterStats, compute_stats
from gurps_sheet.models.encumbrance import EncumbranceRow, encumbrance_table
from gurps_sheet.models.skill_level import refresh_skills
from gurps_sheet.models.social import language_points, status_points

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class CharacterPatch:
    """Typed partial update of scalar record fields.

    ``None`` leaves a field unchanged. Primary attributes go through the
    override rule; setting a secondary field marks it overridden.
    """

    name: str | None = None
    player: str | None = None
    height: str | None = None
    weight: str | None = None
    age: str | None = None
    appearance: str | None = None
    size_modifier: int | None = None
    tech_level: str | None = None
    tech_level_cost: int | None = None
    point_total: int | None = None
    st: int | None = None
    dx: int | None = None
    iq: int | None = None
    ht: int | None = None
    hp: int | None = None
    will: int | None = None
    per: int | None = None
    fp: int | None = None
    basic_speed: float | None = None
    basic_move: int | None = None
    damage_thrust: str | None = None
    damage_swing: str | None = None
    dodge_modifier: int | None = None
    parry_modifier: int | None = None
    block_modifier: int | None = None
    current_weight: float | None = None
    campaign_lore: str | None = None
    equipment_simple: list[str] | None = None


def parse_int_edit(text: str, last_valid: int) -> int:
    """Parse a numeric field edit, keeping *last_valid* on bad input."""
    try:
        return int(str(text).strip())
    except ValueError:
        return last_valid


def parse_float_edit(text: str, last_valid: float) -> float:
    try:
        value = float(str(text).strip())
    except ValueError:
        return last_valid
    return value if math.isfinite(value) else last_valid


def _finite(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {value!r}")
    return value


def _check_finite(character: Character) -> None:
    _finite("basic_speed", character.basic_speed)
    _finite("current_weight", character.current_weight)
    for item in character.equipment:
        _finite(f"weight of {item.name or item.id!r}", item.weight)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class SheetEngine:
    """Applies edits to a Character and keeps its derived values current.

    Consumes SheetConfig, an IdGenerator and a Catalog without modifying
    any of them.
    """

    __slots__ = ("_character", "_config", "_ids", "_catalog")

    def __init__(
        self,
        config: SheetConfig | None = None,
        ids: IdGenerator | None = None,
        catalog: Catalog | None = None,
    ) -> None:
        self._config = config or SheetConfig()
        self._ids = ids or DEFAULT_IDS
        self._catalog = catalog if catalog is not None else Catalog.empty()
        character = Character(point_total=self._config.default_point_total)
        self._recalculate(character)
        self._character = character

    # --- Factories ---------------------------------------------------------

    @classmethod
    def new_sheet(
        cls,
        config: SheetConfig | None = None,
        ids: IdGenerator | None = None,
        catalog: Catalog | None = None,
    ) -> SheetEngine:
        """Create an engine holding a fresh default character."""
        return cls(config, ids, catalog)

    @classmethod
    def from_character(
        cls,
        character: Character,
        config: SheetConfig | None = None,
        ids: IdGenerator | None = None,
        catalog: Catalog | None = None,
    ) -> SheetEngine:
        """Start a session on a previously loaded record."""
        engine = cls(config, ids, catalog)
        engine.load(character)
        return engine

    def copy(self) -> SheetEngine:
        """Deep-copy the engine for speculative edits."""
        clone = SheetEngine.__new__(SheetEngine)
        clone._config = self._config
        clone._ids = self._ids
        clone._catalog = self._catalog
        clone._character = copy.deepcopy(self._character)
        return clone

    # --- Properties --------------------------------------------------------

    @property
    def state(self) -> Character:
        """Return a deep copy of the current record for display/serialisation."""
        return copy.deepcopy(self._character)

    @property
    def config(self) -> SheetConfig:
        return self._config

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    # --- Pipeline ----------------------------------------------------------

    def _recalculate(self, char: Character, previous_st: int | None = None) -> None:
        _check_finite(char)
        reconcile_secondaries(char)
        if previous_st is not None:
            reconcile_damage(char, previous_st)
        refresh_skills(char)
        char.unspent_points = compute_point_ledger(char, self._config).unspent

    @contextmanager
    def _editing(self) -> Iterator[Character]:
        """Yield a draft of the record; commit it only if the pipeline succeeds."""
        draft = copy.deepcopy(self._character)
        previous_st = draft.st
        yield draft
        self._recalculate(draft, previous_st)
        self._character = draft

    def load(self, character: Character) -> None:
        """Replace the whole record (e.g. after a successful file load).

        A record the pipeline rejects raises and the current one is kept.
        """
        draft = copy.deepcopy(character)
        self._recalculate(draft)
        self._character = draft
        logger.info("Loaded character %r", draft.name or "(unnamed)")

    # --- Attributes --------------------------------------------------------

    def set_attribute(self, attribute: str, value: int) -> None:
        """Set ST, DX, IQ or HT (clamped to the configured range)."""
        if attribute not in PRIMARY_FIELDS:
            raise ValueError(
                f"Unknown primary attribute {attribute!r}; expected one of {PRIMARY_FIELDS}"
            )
        with self._editing() as char:
            setattr(char, attribute, self._config.clamp_attribute(int(value)))

    def set_secondary(self, characteristic: str, value: int | float) -> None:
        """Set a secondary characteristic and stop it tracking its default."""
        self._check_secondary(characteristic)
        value = self._coerce_secondary(characteristic, value)
        with self._editing() as char:
            setattr(char, characteristic, value)
            char.overrides.add(characteristic)

    def reset_secondary(self, characteristic: str) -> None:
        """Drop an override so the field tracks its derived default again."""
        self._check_secondary(characteristic)
        with self._editing() as char:
            char.overrides.discard(characteristic)

    def is_overridden(self, characteristic: str) -> bool:
        self._check_secondary(characteristic)
        return characteristic in self._character.overrides

    def _check_secondary(self, characteristic: str) -> None:
        if characteristic not in SECONDARY_FIELDS:
            raise ValueError(
                f"Unknown secondary characteristic {characteristic!r}; "
                f"expected one of {SECONDARY_FIELDS}"
            )

    @staticmethod
    def _coerce_secondary(characteristic: str, value: int | float) -> int | float:
        if characteristic == "basic_speed":
            return _finite(characteristic, value)
        return int(value)

    def set_damage(self, thrust: str | None = None, swing: str | None = None) -> None:
        """Hand-edit the damage dice text."""
        with self._editing() as char:
            if thrust is not None:
                char.damage_thrust = thrust
            if swing is not None:
                char.damage_swing = swing

    # --- Scalars -----------------------------------------------------------

    def set_point_total(self, points: int) -> None:
        with self._editing() as char:
            char.point_total = int(points)

    def set_current_weight(self, weight: float) -> None:
        weight = _finite("current_weight", weight)
        with self._editing() as char:
            char.current_weight = weight

    def sync_weight_from_equipment(self) -> float:
        """Copy the summed equipment weight into current_weight."""
        total = equipment_weight(self._character)
        self.set_current_weight(total)
        return total

    def set_equipment_list(self, items: list[str]) -> None:
        """Replace the free-text equipment list."""
        with self._editing() as char:
            char.equipment_simple = [str(item) for item in items]

    def apply_patch(self, patch: CharacterPatch) -> None:
        """Apply every non-None field of *patch*, then recalculate once."""
        with self._editing() as char:
            for f in dataclasses.fields(patch):
                value = getattr(patch, f.name)
                if value is None:
                    continue
                if f.name in PRIMARY_FIELDS:
                    setattr(char, f.name, self._config.clamp_attribute(int(value)))
                elif f.name in SECONDARY_FIELDS:
                    setattr(char, f.name, self._coerce_secondary(f.name, value))
                    char.overrides.add(f.name)
                elif f.name == "equipment_simple":
                    char.equipment_simple = [str(item) for item in value]
                else:
                    setattr(char, f.name, value)

    # --- Collections -------------------------------------------------------

    @staticmethod
    def _items(char: Character, collection: str) -> list:
        if collection not in COLLECTION_TYPES:
            raise ValueError(
                f"Unknown collection {collection!r}; expected one of {sorted(COLLECTION_TYPES)}"
            )
        return getattr(char, collection)

    def _normalize_entry(self, entry) -> None:
        if isinstance(entry, Skill) and entry.points < 0:
            raise ValueError(f"Negative skill points ({entry.points}) for {entry.name!r}")
        if isinstance(entry, Language):
            entry.points = language_points(entry.written_level, entry.spoken_level)
        elif isinstance(entry, Status):
            entry.points = status_points(entry.level, self._config.status_cost_per_level)

    def entries(self, collection: str) -> list:
        return copy.deepcopy(self._items(self._character, collection))

    def get_entry(self, collection: str, entry_id: str):
        for entry in self._items(self._character, collection):
            if entry.id == entry_id:
                return copy.deepcopy(entry)
        raise ValueError(f"No {collection} entry with id {entry_id!r}")

    def add_entry(self, collection: str, entry) -> str:
        """Append a copy of *entry*, minting an id if it has none.

        Returns the entry's id.
        """
        expected = COLLECTION_TYPES.get(collection)
        if expected is not None and not isinstance(entry, expected):
            raise ValueError(
                f"{collection} entries must be {expected.__name__}, got {type(entry).__name__}"
            )
        entry = copy.deepcopy(entry)
        with self._editing() as char:
            items = self._items(char, collection)
            if not entry.id:
                entry.id = self._ids.new_id()
            elif any(existing.id == entry.id for existing in items):
                raise ValueError(f"Duplicate {collection} id {entry.id!r}")
            self._normalize_entry(entry)
            items.append(entry)
        return entry.id

    def update_entry(self, collection: str, entry_id: str, **changes) -> None:
        """Replace an entry with a copy carrying *changes*."""
        with self._editing() as char:
            items = self._items(char, collection)
            entry_type = COLLECTION_TYPES[collection]
            names = {f.name for f in dataclasses.fields(entry_type)}
            for key in changes:
                if key == "id":
                    raise ValueError("Entry ids cannot be changed")
                if key not in names:
                    raise ValueError(f"{entry_type.__name__} has no field {key!r}")

            for index, entry in enumerate(items):
                if entry.id == entry_id:
                    updated = dataclasses.replace(entry, **changes)
                    self._normalize_entry(updated)
                    items[index] = updated
                    break
            else:
                raise ValueError(f"No {collection} entry with id {entry_id!r}")

    def remove_entry(self, collection: str, entry_id: str) -> None:
        with self._editing() as char:
            items = self._items(char, collection)
            for index, entry in enumerate(items):
                if entry.id == entry_id:
                    del items[index]
                    break
            else:
                raise ValueError(f"No {collection} entry with id {entry_id!r}")

    # --- Typed adders ------------------------------------------------------

    def add_advantage(
        self, name: str, cost: int, level: int | None = None,
        description: str = "", notes: str = "",
    ) -> str:
        return self.add_entry("advantages", Advantage(
            name=name, cost=cost, level=level, description=description, notes=notes,
        ))

    def add_disadvantage(
        self, name: str, cost: int, description: str = "", notes: str = "",
    ) -> str:
        return self.add_entry("disadvantages", Disadvantage(
            name=name, cost=cost, description=description, notes=notes,
        ))

    def add_skill(
        self, name: str, attribute: str, difficulty: str, points: int = 1,
        modifier: int = 0, description: str = "", notes: str = "",
    ) -> str:
        return self.add_entry("skills", Skill(
            name=name, attribute=attribute, difficulty=difficulty, points=points,
            modifier=modifier, description=description, notes=notes,
        ))

    def add_equipment(
        self, name: str, weight: float = 0.0, quantity: int = 1,
        description: str = "", notes: str = "",
    ) -> str:
        return self.add_entry("equipment", Equipment(
            name=name, weight=weight, quantity=quantity, description=description, notes=notes,
        ))

    def add_spell(self, name: str, **details) -> str:
        return self.add_entry("spells", Spell(name=name, **details))

    def add_language(
        self, name: str, written_level: str = "None", spoken_level: str = "None",
        notes: str = "",
    ) -> str:
        return self.add_entry("languages", Language(
            name=name, written_level=written_level, spoken_level=spoken_level, notes=notes,
        ))

    def add_status(self, level: int, description: str = "", notes: str = "") -> str:
        return self.add_entry("status", Status(level=level, description=description, notes=notes))

    def add_reputation(
        self, description: str, modifier: int = 0, scope: str = "", points: int = 0,
        notes: str = "",
    ) -> str:
        return self.add_entry("reputation", Reputation(
            description=description, modifier=modifier, scope=scope, points=points, notes=notes,
        ))

    def add_cultural_familiarity(self, name: str, points: int = 0, notes: str = "") -> str:
        return self.add_entry("cultural_familiarities", CulturalFamiliarity(
            name=name, points=points, notes=notes,
        ))

    def add_reaction_modifier(self, source: str, modifier: int, description: str = "") -> str:
        return self.add_entry("reaction_modifiers", ReactionModifier(
            source=source, modifier=modifier, description=description,
        ))

    # --- Catalog templates -------------------------------------------------

    def add_advantage_from_catalog(self, name: str, level: int | None = None) -> str:
        template = self._catalog.find_advantage(name)
        if template is None:
            raise ValueError(f"Advantage {name!r} is not in the catalog")
        return self.add_advantage(template.name, template.cost, level, template.description)

    def add_disadvantage_from_catalog(self, name: str) -> str:
        template = self._catalog.find_disadvantage(name)
        if template is None:
            raise ValueError(f"Disadvantage {name!r} is not in the catalog")
        return self.add_disadvantage(template.name, template.cost, template.description)

    def add_skill_from_catalog(self, name: str, points: int = 1) -> str:
        template = self._catalog.find_skill(name)
        if template is None:
            raise ValueError(f"Skill {name!r} is not in the catalog")
        return self.add_skill(
            template.name, template.attribute, template.difficulty, points,
            description=template.description,
        )

    # --- Queries -----------------------------------------------------------

    def ledger(self) -> PointLedger:
        return compute_point_ledger(self._character, self._config)

    def stats(self) -> CharacterStats:
        return compute_stats(self._character)

    def encumbrance_table(self) -> list[EncumbranceRow]:
        char = self._character
        return encumbrance_table(
            char.basic_lift,
            char.current_weight,
            char.basic_speed,
            char.basic_move,
            char.dodge_modifier,
        )


def equipment_weight(character: Character) -> float:
    """Total carried weight of the equipment list."""
    return sum(item.weight * item.quantity for item in character.equipment)
