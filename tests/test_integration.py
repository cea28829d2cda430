"""Multi-tick invariants over seeded populations."""

import pytest

from tick_habitat.components import Hunger, Organism, Strength
from tick_habitat.config import HabitatConfig
from tick_habitat.engine import Simulation


def check_invariants(sim: Simulation) -> None:
    world, field = sim.world, sim.field
    live = world.entities()

    # Alive exactly when placed, one organism per cell.
    assert field.tracked_entities() == frozenset(live)
    assert len(field) == len(live)
    for eid in live:
        location = field.location_of(eid)
        assert location is not None
        assert field.occupant_at(location) == eid

    for eid, (organism,) in world.query(Organism):
        params = sim.config.params(organism.species)
        assert 0 <= organism.age <= params.max_age
    for _, (hunger,) in world.query(Hunger):
        assert 0 < hunger.food <= hunger.max_food
    for _, (strength,) in world.query(Strength):
        assert 0 <= strength.level <= strength.max_level


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_invariants_hold_every_tick(seed):
    sim = Simulation(HabitatConfig(width=40, height=30), seed=seed)
    check_invariants(sim)
    for _ in range(60):
        sim.step()
        check_invariants(sim)


def test_dead_ids_never_come_back():
    sim = Simulation(HabitatConfig(width=30, height=30), seed=9)
    seen_dead: set[int] = set()
    for _ in range(40):
        before = set(sim.world.entities())
        sim.step()
        after = set(sim.world.entities())
        assert not (after & seen_dead)
        seen_dead |= before - after


def test_long_run_is_reproducible():
    config = HabitatConfig(width=50, height=40)
    a = Simulation(config, seed=77)
    b = Simulation(config, seed=77)
    a.run(150)
    b.run(150)
    assert a.view() == b.view()
    assert a.habitat.population() == b.habitat.population()


def test_population_changes_over_time():
    sim = Simulation(HabitatConfig(width=60, height=40), seed=21)
    start = sim.view()
    sim.run(25)
    end = sim.view()
    assert start.cells != end.cells
    assert end.tick_number == 25
