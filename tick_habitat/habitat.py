"""Habitat - the world arena, the field, and the operations joining them."""
from __future__ import annotations

import random
from typing import Iterable

from tick_habitat.components import Hunger, Organism, Strength
from tick_habitat.config import CombatRules, HabitatConfig, SpeciesParams
from tick_habitat.field import Field
from tick_habitat.types import EntityId, Location, Species
from tick_habitat.world import World


class Habitat:
    """Keeps the world and the field in step.

    An entity is alive in the world exactly when the field holds a location
    for it. Every birth, death and move goes through this class so that the
    two never disagree.
    """

    def __init__(self, config: HabitatConfig) -> None:
        self._config = config
        self._world = World()
        self._field = Field(config.width, config.height)

    @property
    def config(self) -> HabitatConfig:
        return self._config

    @property
    def combat(self) -> CombatRules:
        return self._config.combat

    @property
    def world(self) -> World:
        return self._world

    @property
    def field(self) -> Field:
        return self._field

    def params(self, species: Species) -> SpeciesParams:
        return self._config.params(species)

    # -- Lifecycle --

    def spawn(
        self,
        species: Species,
        location: Location,
        rng: random.Random,
        random_age: bool = False,
    ) -> EntityId:
        """Create an organism at a free *location*.

        Newborns start at age 0 with a full stomach. With *random_age* the
        age and food level are drawn at random instead. Fighters always draw
        their starting strength.
        """
        params = self.params(species)
        eid = self._world.spawn()
        age = rng.randrange(params.max_age) if random_age else 0
        self._world.attach(eid, Organism(species=species, age=age))
        if params.max_food is not None:
            food = rng.randint(1, params.max_food) if random_age else params.max_food
            self._world.attach(eid, Hunger(food=food, max_food=params.max_food))
        if params.max_strength is not None:
            self._world.attach(
                eid,
                Strength(
                    level=rng.randrange(params.max_strength),
                    max_level=params.max_strength,
                ),
            )
        self._field.place(eid, location)
        return eid

    def kill(self, eid: EntityId) -> None:
        """Release the organism's cell and drop it from the world."""
        self._field.remove(eid)
        self._world.despawn(eid)

    def relocate(self, eid: EntityId, location: Location) -> None:
        self._field.move(eid, location)

    def clear(self) -> None:
        self._world.clear()
        self._field.clear_all()

    def populate(self, rng: random.Random, species: Iterable[Species]) -> None:
        """Seed every cell with one draw against the creation probabilities.

        Buckets are laid out in the order given; the first one the draw falls
        into wins. A cell gets at most one organism.
        """
        buckets: list[tuple[float, Species]] = []
        threshold = 0.0
        for sp in species:
            threshold += self.params(sp).creation_probability
            buckets.append((threshold, sp))

        for row in range(self._field.height):
            for col in range(self._field.width):
                draw = rng.random()
                for limit, sp in buckets:
                    if draw < limit:
                        self.spawn(sp, Location(row, col), rng, random_age=True)
                        break

    # -- Queries --

    def alive(self, eid: EntityId) -> bool:
        return self._world.alive(eid)

    def location_of(self, eid: EntityId) -> Location | None:
        return self._field.location_of(eid)

    def species_of(self, eid: EntityId) -> Species | None:
        organism = self._world.find(eid, Organism)
        return organism.species if organism is not None else None

    def occupant(self, location: Location) -> EntityId | None:
        eid = self._field.occupant_at(location)
        if eid is None or not self._world.alive(eid):
            return None
        return eid

    def population(self) -> dict[Species, int]:
        counts = {sp: 0 for sp in Species}
        for _, (organism,) in self._world.query(Organism):
            counts[organism.species] += 1
        return counts
