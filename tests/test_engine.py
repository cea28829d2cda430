"""Tests for the simulation loop, reseeding, toggles and hooks."""

import dataclasses

import pytest

from tick_habitat.components import Hunger, Organism, Strength
from tick_habitat.config import DEFAULT_SPECIES, HabitatConfig
from tick_habitat.engine import Simulation
from tick_habitat.types import Location, Species, TickContext
from tick_habitat.world import World


def small(width=20, height=15, **kwargs):
    return HabitatConfig(width=width, height=height, **kwargs)


def only(species_kind, probability=1.0):
    """Species table where every cell is seeded with one species."""
    table = {
        sp: dataclasses.replace(params, creation_probability=0.0)
        for sp, params in DEFAULT_SPECIES.items()
    }
    table[species_kind] = dataclasses.replace(
        table[species_kind], creation_probability=probability
    )
    return table


# --- Initialization ---

def test_engine_init_defaults():
    sim = Simulation(seed=1)
    assert sim.tick_number == 0
    assert sim.field.width == 120
    assert sim.field.height == 80
    assert isinstance(sim.world, World)
    assert len(sim.world) > 0


def test_engine_without_populate_is_empty():
    sim = Simulation(small(), seed=1, populate=False)
    assert len(sim.world) == 0
    assert len(sim.field) == 0


def test_seed_property():
    assert Simulation(small(), seed=42, populate=False).seed == 42


def test_auto_generated_seed():
    sim = Simulation(small(), populate=False)
    assert isinstance(sim.seed, int)


# --- step() / run(n) ---

def test_step_advances_one_tick():
    sim = Simulation(small(), seed=3)
    sim.step()
    assert sim.tick_number == 1
    sim.step()
    assert sim.tick_number == 2


def test_run_n_ticks():
    sim = Simulation(small(), seed=3)
    sim.run(5)
    assert sim.tick_number == 5


def test_run_continues_on_empty_field():
    sim = Simulation(small(), seed=3, populate=False)
    sim.run(10)
    assert sim.tick_number == 10
    assert len(sim.world) == 0


def test_end_to_end_fox_eats_rabbit():
    sim = Simulation(HabitatConfig(width=3, height=1), seed=8, populate=False)
    habitat = sim.habitat
    fox = habitat.spawn(Species.FOX, Location(0, 1), sim.random)
    rabbit = habitat.spawn(Species.RABBIT, Location(0, 0), sim.random)

    sim.step()

    assert not habitat.alive(rabbit)
    assert habitat.world.get(fox, Hunger).food == 12
    assert habitat.location_of(fox) == Location(0, 0)
    assert habitat.field.occupant_at(Location(0, 1)) is None


def test_rabbit_acting_first_dies_of_overcrowding():
    sim = Simulation(HabitatConfig(width=3, height=1), seed=8, populate=False)
    habitat = sim.habitat
    rabbit = habitat.spawn(Species.RABBIT, Location(0, 0), sim.random)
    fox = habitat.spawn(Species.FOX, Location(0, 1), sim.random)

    sim.step()

    assert not habitat.alive(rabbit)
    assert habitat.alive(fox)
    assert habitat.world.get(fox, Hunger).food == 11


def test_victim_killed_mid_sweep_does_not_act():
    sim = Simulation(HabitatConfig(width=3, height=1), seed=8, populate=False)
    habitat = sim.habitat
    hunter = habitat.spawn(Species.HUNTER, Location(0, 0), sim.random)
    wolf = habitat.spawn(Species.WOLF, Location(0, 1), sim.random)
    habitat.world.get(hunter, Strength).level = 90
    habitat.world.get(wolf, Strength).level = 10

    sim.step()

    assert not habitat.alive(wolf)
    assert habitat.location_of(hunter) == Location(0, 1)
    assert sim.world.entities() == (hunter,)


def test_newborns_wait_for_next_tick():
    species = dict(DEFAULT_SPECIES)
    species[Species.RABBIT] = dataclasses.replace(
        species[Species.RABBIT], breeding_age=0, breeding_probability=1.0
    )
    sim = Simulation(small(5, 5, species=species), seed=4, populate=False)
    parent = sim.habitat.spawn(Species.RABBIT, Location(2, 2), sim.random)

    sim.step()

    children = [eid for eid in sim.world.entities() if eid != parent]
    assert 1 <= len(children) <= 4
    assert sim.world.get(parent, Organism).age == 1
    assert all(sim.world.get(c, Organism).age == 0 for c in children)
    # newborns join the live order after the existing organisms
    assert sim.world.entities()[0] == parent


# --- reset() and toggles ---

def test_reset_restarts_clock_and_reseeds():
    sim = Simulation(small(), seed=10)
    sim.run(3)
    sim.reset()
    assert sim.tick_number == 0
    assert len(sim.world) == len(sim.field)
    assert all(sim.world.get(eid, Organism).age >= 0 for eid in sim.world.entities())


def test_reset_fills_cells_by_probability():
    sim = Simulation(small(6, 4, species=only(Species.RABBIT)), seed=2)
    assert len(sim.world) == 24
    assert sim.habitat.population()[Species.RABBIT] == 24


def test_reset_skips_empty_buckets():
    sim = Simulation(small(6, 4, species=only(Species.HUNTER)), seed=2)
    population = sim.habitat.population()
    assert population[Species.HUNTER] == 24
    assert population[Species.RABBIT] == 0


def test_seeded_organisms_have_random_state():
    sim = Simulation(small(30, 30, species=only(Species.WOLF)), seed=6)
    ages = {sim.world.get(eid, Organism).age for eid in sim.world.entities()}
    foods = {sim.world.get(eid, Hunger).food for eid in sim.world.entities()}
    assert len(ages) > 1
    assert min(foods) >= 1
    assert max(foods) <= 12


def test_disabled_species_not_reseeded():
    sim = Simulation(small(40, 40), seed=11, populate=False)
    sim.set_species_enabled(Species.RABBIT, False)
    sim.set_species_enabled(Species.FOX, False)
    sim.reset()
    population = sim.habitat.population()
    assert population[Species.RABBIT] == 0
    assert population[Species.FOX] == 0
    assert sim.enabled_species == (Species.WOLF, Species.HUNTER)


def test_disabling_keeps_existing_organisms():
    sim = Simulation(small(40, 40), seed=11)
    foxes = sim.habitat.population()[Species.FOX]
    assert foxes > 0
    sim.set_species_enabled(Species.FOX, False)
    assert sim.habitat.population()[Species.FOX] == foxes


def test_all_species_disabled_gives_empty_field():
    sim = Simulation(small(), seed=1, populate=False)
    for species in Species:
        sim.set_species_enabled(species, False)
    sim.reset()
    assert len(sim.world) == 0


# --- Systems and hooks ---

def test_systems_run_after_sweep():
    sim = Simulation(small(), seed=1, populate=False)
    calls = []

    def track(world, ctx):
        calls.append(ctx.tick_number)

    sim.add_system(track)
    sim.run(3)
    assert calls == [1, 2, 3]


def test_request_stop_ends_run():
    sim = Simulation(small(), seed=1, populate=False)

    def stopper(world, ctx: TickContext):
        if ctx.tick_number == 4:
            ctx.request_stop()

    sim.add_system(stopper)
    sim.run(100)
    assert sim.tick_number == 4


def test_run_calls_start_and_stop_hooks():
    sim = Simulation(small(), seed=1, populate=False)
    events = []
    sim.on_start(lambda w, c: events.append(f"start-{c.tick_number}"))
    sim.on_stop(lambda w, c: events.append(f"stop-{c.tick_number}"))
    sim.add_system(lambda w, c: events.append(f"tick-{c.tick_number}"))
    sim.run(2)
    assert events == ["start-0", "tick-1", "tick-2", "stop-2"]


def test_context_carries_shared_random():
    sim = Simulation(small(), seed=1, populate=False)
    seen = []
    sim.add_system(lambda w, c: seen.append(c.random))
    sim.step()
    assert seen == [sim.random]


# --- Determinism ---

def test_same_seed_same_history():
    a = Simulation(small(30, 20), seed=1234)
    b = Simulation(small(30, 20), seed=1234)
    for _ in range(40):
        assert a.view() == b.view()
        a.step()
        b.step()
    assert a.view() == b.view()


def test_different_seed_different_field():
    a = Simulation(small(30, 20), seed=1)
    b = Simulation(small(30, 20), seed=2)
    assert a.view() != b.view()


@pytest.mark.parametrize("seed", [3, 17])
def test_reset_is_reproducible_from_seed(seed):
    a = Simulation(small(), seed=seed)
    first = a.view()
    b = Simulation(small(), seed=seed)
    assert b.view() == first
