"""Reproduction: litter draws and newborn placement."""
from __future__ import annotations

import random

from tick_habitat.components import Organism
from tick_habitat.config import SpeciesParams
from tick_habitat.habitat import Habitat
from tick_habitat.types import EntityId


def can_breed(organism: Organism, params: SpeciesParams) -> bool:
    return organism.age >= params.breeding_age


def litter_size(organism: Organism, params: SpeciesParams, rng: random.Random) -> int:
    """Number of births this tick; 0 when too young or the draw fails.

    Young organisms make no draw at all.
    """
    if not can_breed(organism, params):
        return 0
    if rng.random() < params.breeding_probability:
        return rng.randint(1, params.max_litter_size)
    return 0


def give_birth(
    habitat: Habitat,
    eid: EntityId,
    rng: random.Random,
    newborns: list[EntityId],
) -> int:
    """Place this tick's litter into free neighbouring cells.

    Births beyond the number of free cells are lost. Newborn ids are
    appended to *newborns*; the count placed is returned.
    """
    organism = habitat.world.get(eid, Organism)
    location = habitat.location_of(eid)
    if location is None:
        return 0
    free = habitat.field.free_neighbors(location, rng)
    births = litter_size(organism, habitat.params(organism.species), rng)
    placed = 0
    for cell in free[:births]:
        newborns.append(habitat.spawn(organism.species, cell, rng))
        placed += 1
    return placed
