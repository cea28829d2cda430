"""Tests for reproduction: age gate, litter bounds, free-cell cap."""

import random

from tick_habitat.breeding import can_breed, give_birth, litter_size
from tick_habitat.components import Hunger, Organism, Strength
from tick_habitat.config import DEFAULT_SPECIES, HabitatConfig
from tick_habitat.habitat import Habitat
from tick_habitat.types import Location, Species


class AlwaysBreeds(random.Random):
    """Every breeding draw succeeds with the largest possible litter."""

    def random(self):
        return 0.0

    def randint(self, a, b):
        return b


RABBIT = DEFAULT_SPECIES[Species.RABBIT]


def make_habitat(width=5, height=5):
    return Habitat(HabitatConfig(width=width, height=height))


class TestLitterSize:
    def test_below_breeding_age_never_breeds(self):
        rng = AlwaysBreeds(0)
        organism = Organism(Species.RABBIT, age=RABBIT.breeding_age - 1)
        assert not can_breed(organism, RABBIT)
        assert all(litter_size(organism, RABBIT, rng) == 0 for _ in range(100))

    def test_at_breeding_age_can_breed(self):
        organism = Organism(Species.RABBIT, age=RABBIT.breeding_age)
        assert can_breed(organism, RABBIT)
        assert litter_size(organism, RABBIT, AlwaysBreeds(0)) == RABBIT.max_litter_size

    def test_litter_within_bounds(self):
        rng = random.Random(42)
        organism = Organism(Species.RABBIT, age=20)
        sizes = [litter_size(organism, RABBIT, rng) for _ in range(5000)]
        births = [s for s in sizes if s > 0]
        assert births
        assert all(1 <= s <= RABBIT.max_litter_size for s in births)
        assert set(births) == {1, 2, 3, 4}

    def test_breeding_rate_tracks_probability(self):
        rng = random.Random(7)
        organism = Organism(Species.RABBIT, age=20)
        trials = 10000
        bred = sum(1 for _ in range(trials) if litter_size(organism, RABBIT, rng) > 0)
        assert abs(bred / trials - RABBIT.breeding_probability) < 0.02


class TestGiveBirth:
    def test_newborns_fill_free_neighbors(self):
        habitat = make_habitat()
        rng = AlwaysBreeds(0)
        parent = habitat.spawn(Species.RABBIT, Location(2, 2), rng)
        habitat.world.get(parent, Organism).age = 10
        newborns = []

        placed = give_birth(habitat, parent, rng, newborns)

        assert placed == 4
        assert len(newborns) == 4
        parent_loc = habitat.location_of(parent)
        for child in newborns:
            assert habitat.alive(child)
            assert habitat.world.get(child, Organism) == Organism(Species.RABBIT, age=0)
            assert habitat.location_of(child) in habitat.field.neighbors(parent_loc)

    def test_young_parent_has_no_offspring(self):
        habitat = make_habitat()
        rng = AlwaysBreeds(0)
        parent = habitat.spawn(Species.RABBIT, Location(2, 2), rng)
        newborns = []
        assert give_birth(habitat, parent, rng, newborns) == 0
        assert newborns == []
        assert len(habitat.world) == 1

    def test_births_capped_by_free_cells(self):
        habitat = make_habitat(3, 3)
        rng = AlwaysBreeds(0)
        parent = habitat.spawn(Species.RABBIT, Location(1, 1), rng)
        habitat.world.get(parent, Organism).age = 10
        for loc in habitat.field.neighbors(Location(1, 1))[:7]:
            habitat.spawn(Species.RABBIT, loc, rng)
        newborns = []

        placed = give_birth(habitat, parent, rng, newborns)

        assert placed == 1
        assert len(habitat.world) == 9
        assert len(habitat.field) == 9

    def test_no_room_discards_litter(self):
        habitat = make_habitat(1, 1)
        rng = AlwaysBreeds(0)
        parent = habitat.spawn(Species.RABBIT, Location(0, 0), rng)
        habitat.world.get(parent, Organism).age = 10
        newborns = []
        assert give_birth(habitat, parent, rng, newborns) == 0
        assert newborns == []

    def test_predator_newborns_start_full(self):
        habitat = make_habitat()
        rng = AlwaysBreeds(0)
        parent = habitat.spawn(Species.WOLF, Location(2, 2), rng)
        habitat.world.get(parent, Organism).age = 100
        habitat.world.get(parent, Hunger).food = 3
        newborns = []

        give_birth(habitat, parent, rng, newborns)

        assert len(newborns) == DEFAULT_SPECIES[Species.WOLF].max_litter_size
        for child in newborns:
            assert habitat.world.get(child, Hunger).food == 12
            strength = habitat.world.get(child, Strength)
            assert 0 <= strength.level <= strength.max_level
