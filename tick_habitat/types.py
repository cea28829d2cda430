"""Shared types for the habitat simulation."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

EntityId = int


@dataclass(frozen=True, slots=True)
class Location:
    """A (row, col) cell address. Rows grow downward, columns rightward."""

    row: int
    col: int


class Species(Enum):
    """Closed set of species. Declaration order is the reseeding order."""

    RABBIT = "rabbit"  # prey
    FOX = "fox"  # eats rabbits
    WOLF = "wolf"  # eats foxes, rabbits when starving; battles hunters
    HUNTER = "hunter"  # fights wolves alone or in packs, eats rabbits

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    request_stop: Callable[[], None]
    random: _random.Random


class DeadEntityError(KeyError):
    """Raised when operating on an entity that is not alive."""

    def __init__(self, entity_id: int, message: str) -> None:
        self.entity_id = entity_id
        super().__init__(message)


if TYPE_CHECKING:
    from tick_habitat.world import World

System = Callable[["World", TickContext], None]
