"""Identifier generation for collection entries.

Everything that creates an entry takes an IdGenerator from its caller;
tests pass a SequentialIdGenerator to get stable ids.
"""

import uuid
from typing import Protocol


class IdGenerator(Protocol):
    def new_id(self) -> str: ...


class UuidIdGenerator:
    """Random UUID4 strings."""

    def new_id(self) -> str:
        return str(uuid.uuid4())


class SequentialIdGenerator:
    """Deterministic ids: ``{prefix}-1``, ``{prefix}-2``, ..."""

    __slots__ = ("_prefix", "_next")

    def __init__(self, prefix: str = "id", start: int = 1) -> None:
        self._prefix = prefix
        self._next = start

    def new_id(self) -> str:
        value = f"{self._prefix}-{self._next}"
        self._next += 1
        return value


DEFAULT_IDS = UuidIdGenerator()
