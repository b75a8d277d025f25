"""Predefined advantage/disadvantage/skill templates.

The catalog is read once at session start from a JSON document shaped as
``{"advantages": [...], "disadvantages": [...], "skills": [...]}``. It is
only a source of templates: a missing or unreadable catalog yields an
empty one and manual entry keeps working.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PredefinedAdvantage:
    name: str
    cost: int
    description: str = ""


@dataclass(frozen=True, slots=True)
class PredefinedDisadvantage:
    name: str
    cost: int  # negative
    description: str = ""


@dataclass(frozen=True, slots=True)
class PredefinedSkill:
    name: str
    attribute: str
    difficulty: str
    description: str = ""


@dataclass
class Catalog:
    """Selectable templates for the trait and skill lists."""

    advantages: list[PredefinedAdvantage] = field(default_factory=list)
    disadvantages: list[PredefinedDisadvantage] = field(default_factory=list)
    skills: list[PredefinedSkill] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Catalog":
        return cls()

    def find_advantage(self, name: str) -> PredefinedAdvantage | None:
        return next((a for a in self.advantages if a.name == name), None)

    def find_disadvantage(self, name: str) -> PredefinedDisadvantage | None:
        return next((d for d in self.disadvantages if d.name == name), None)

    def find_skill(self, name: str) -> PredefinedSkill | None:
        return next((s for s in self.skills if s.name == name), None)

    def __len__(self) -> int:
        return len(self.advantages) + len(self.disadvantages) + len(self.skills)


def _parse_rows(rows: Any, build, kind: str) -> list:
    if not isinstance(rows, list):
        if rows is not None:
            logger.warning("Catalog %s is not a list; ignoring", kind)
        return []
    out = []
    for row in rows:
        try:
            out.append(build(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed catalog %s entry %r: %s", kind, row, exc)
    return out


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """Build a Catalog from parsed JSON, skipping malformed entries."""
    if not isinstance(data, dict):
        logger.warning("Catalog root is not an object; using empty catalog")
        return Catalog.empty()

    advantages = _parse_rows(
        data.get("advantages"),
        lambda r: PredefinedAdvantage(
            name=str(r["name"]), cost=int(r["cost"]), description=str(r.get("description", ""))
        ),
        "advantage",
    )
    disadvantages = _parse_rows(
        data.get("disadvantages"),
        lambda r: PredefinedDisadvantage(
            name=str(r["name"]), cost=int(r["cost"]), description=str(r.get("description", ""))
        ),
        "disadvantage",
    )
    skills = _parse_rows(
        data.get("skills"),
        lambda r: PredefinedSkill(
            name=str(r["name"]),
            attribute=str(r["attribute"]),
            difficulty=str(r["difficulty"]),
            description=str(r.get("description", "")),
        ),
        "skill",
    )
    return Catalog(advantages=advantages, disadvantages=disadvantages, skills=skills)


def load_catalog(path: Path | str | None) -> Catalog:
    """Load a catalog file, degrading to an empty catalog on any failure."""
    if path is None:
        return Catalog.empty()
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning("Catalog not found at %s; no predefined options", path)
        return Catalog.empty()
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Failed to load catalog %s: %s", path, exc)
        return Catalog.empty()

    catalog = catalog_from_dict(data)
    logger.info(
        "Loaded catalog from %s: %d advantages, %d disadvantages, %d skills",
        path, len(catalog.advantages), len(catalog.disadvantages), len(catalog.skills),
    )
    return catalog
