"""Per-tick organism behaviour, dispatched on the species tag.

Every organism runs the same sequence: grow older, grow hungrier, lose
strength, breed, feed or fight, then move. It stops as soon as it dies.
Only the feeding step differs between species.
"""
from __future__ import annotations

import random
from typing import Callable

from tick_habitat.breeding import give_birth
from tick_habitat.components import Hunger, Organism, Strength, lose_strength, starve
from tick_habitat.habitat import Habitat
from tick_habitat.predation import fox_hunt, hunter_hunt, wolf_hunt
from tick_habitat.types import EntityId, Location, Species

Hunt = Callable[[Habitat, EntityId, random.Random], Location | None]

HUNTS: dict[Species, Hunt] = {
    Species.FOX: fox_hunt,
    Species.WOLF: wolf_hunt,
    Species.HUNTER: hunter_hunt,
}


def grow_older(habitat: Habitat, eid: EntityId) -> bool:
    """Add a tick of age. Returns False if the organism died of old age."""
    organism = habitat.world.get(eid, Organism)
    organism.age += 1
    if organism.age > habitat.params(organism.species).max_age:
        habitat.kill(eid)
        return False
    return True


def grow_hungrier(habitat: Habitat, eid: EntityId) -> bool:
    """Use up food. Returns False if the organism starved."""
    hunger = habitat.world.find(eid, Hunger)
    if hunger is not None and starve(hunger):
        habitat.kill(eid)
        return False
    return True


def weaken(habitat: Habitat, eid: EntityId) -> None:
    strength = habitat.world.find(eid, Strength)
    if strength is not None:
        species = habitat.world.get(eid, Organism).species
        lose_strength(strength, habitat.params(species).strength_decay)


def move(habitat: Habitat, eid: EntityId, rng: random.Random,
         target: Location | None = None) -> bool:
    """Move into *target* or a random free neighbour; die if there is none."""
    if target is None:
        location = habitat.location_of(eid)
        if location is not None:
            target = habitat.field.free_neighbor(location, rng)
    if target is None:
        habitat.kill(eid)
        return False
    habitat.relocate(eid, target)
    return True


def act(
    habitat: Habitat,
    eid: EntityId,
    rng: random.Random,
    newborns: list[EntityId],
) -> None:
    """Run one tick of behaviour for a live organism."""
    if not habitat.alive(eid):
        return
    species = habitat.world.get(eid, Organism).species
    if not grow_older(habitat, eid) or not grow_hungrier(habitat, eid):
        return
    weaken(habitat, eid)

    give_birth(habitat, eid, rng, newborns)

    target = None
    hunt = HUNTS.get(species)
    if hunt is not None:
        target = hunt(habitat, eid, rng)
        if not habitat.alive(eid):
            return
    move(habitat, eid, rng, target)
