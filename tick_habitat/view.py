"""Read-only field snapshots for renderers, statistics and front ends."""
from __future__ import annotations

from dataclasses import dataclass

from tick_habitat.habitat import Habitat
from tick_habitat.types import Species


@dataclass(frozen=True)
class FieldView:
    """Species per cell at the end of a tick. Compares by value."""

    tick_number: int
    width: int
    height: int
    cells: tuple[tuple[Species | None, ...], ...]

    @classmethod
    def capture(cls, habitat: Habitat, tick_number: int) -> FieldView:
        field = habitat.field
        rows = []
        for row in range(field.height):
            cells = []
            for col in range(field.width):
                eid = field.at(row, col)
                cells.append(habitat.species_of(eid) if eid is not None else None)
            rows.append(tuple(cells))
        return cls(
            tick_number=tick_number,
            width=field.width,
            height=field.height,
            cells=tuple(rows),
        )

    def species_at(self, row: int, col: int) -> Species | None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            return None
        return self.cells[row][col]

    def counts(self) -> dict[Species, int]:
        counts = {sp: 0 for sp in Species}
        for row in self.cells:
            for species in row:
                if species is not None:
                    counts[species] += 1
        return counts

    def is_viable(self) -> bool:
        """True while more than one species is still present."""
        return sum(1 for n in self.counts().values() if n > 0) > 1

    def population_details(self) -> str:
        return " ".join(
            f"{species.label}: {n}" for species, n in self.counts().items() if n > 0
        )
