"""Field - fixed-size grid holding at most one occupant per cell."""
from __future__ import annotations

import random

from tick_habitat.types import EntityId, Location

_DIRS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Field:
    """Occupancy map for a ``width`` x ``height`` grid.

    The field is the only record of where an entity is. Neighbourhoods are
    the 8 surrounding cells clipped at the edges; the grid does not wrap.
    """

    def __init__(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._cells: dict[Location, EntityId] = {}
        self._entities: dict[EntityId, Location] = {}

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, location: Location) -> bool:
        return 0 <= location.row < self._height and 0 <= location.col < self._width

    def _check_bounds(self, location: Location) -> None:
        if not self.in_bounds(location):
            raise ValueError(
                f"({location.row}, {location.col}) out of bounds for "
                f"{self._width}x{self._height} field"
            )

    # -- Mutation --

    def place(self, eid: EntityId, location: Location) -> None:
        """Put *eid* at *location*, releasing its previous cell if any.

        The target cell is overwritten; callers clear it first.
        """
        self._check_bounds(location)
        self.remove(eid)
        displaced = self._cells.get(location)
        if displaced is not None:
            del self._entities[displaced]
        self._cells[location] = eid
        self._entities[eid] = location

    def move(self, eid: EntityId, location: Location) -> None:
        self._check_bounds(location)
        if eid not in self._entities:
            raise KeyError(f"Entity {eid} is not on the field")
        self.place(eid, location)

    def clear(self, location: Location) -> None:
        eid = self._cells.pop(location, None)
        if eid is not None:
            del self._entities[eid]

    def remove(self, eid: EntityId) -> None:
        location = self._entities.pop(eid, None)
        if location is not None:
            del self._cells[location]

    def clear_all(self) -> None:
        self._cells.clear()
        self._entities.clear()

    # -- Queries --

    def occupant_at(self, location: Location) -> EntityId | None:
        return self._cells.get(location)

    def at(self, row: int, col: int) -> EntityId | None:
        return self._cells.get(Location(row, col))

    def location_of(self, eid: EntityId) -> Location | None:
        return self._entities.get(eid)

    def neighbors(
        self, location: Location, rng: random.Random | None = None
    ) -> list[Location]:
        """In-bounds 8-neighbourhood, shuffled when *rng* is given."""
        result: list[Location] = []
        for dr, dc in _DIRS:
            nr, nc = location.row + dr, location.col + dc
            if 0 <= nr < self._height and 0 <= nc < self._width:
                result.append(Location(nr, nc))
        if rng is not None:
            rng.shuffle(result)
        return result

    def free_neighbors(self, location: Location, rng: random.Random) -> list[Location]:
        """Unoccupied neighbours in a fresh random order."""
        return [
            loc for loc in self.neighbors(location, rng) if loc not in self._cells
        ]

    def free_neighbor(self, location: Location, rng: random.Random) -> Location | None:
        free = self.free_neighbors(location, rng)
        return free[0] if free else None

    def tracked_entities(self) -> frozenset[EntityId]:
        return frozenset(self._entities)

    def __len__(self) -> int:
        return len(self._cells)
