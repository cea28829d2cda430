"""Feeding and combat between species.

Each hunt classifies the live neighbours in one pass and only then decides
what to do, since a hunter facing wolves needs the whole pack before it can
fight. Hunts return the cell the predator should move into, or None.
"""
from __future__ import annotations

import logging
import random

from tick_habitat.components import (
    Hunger,
    Strength,
    feed,
    gain_strength,
    satiate,
)
from tick_habitat.habitat import Habitat
from tick_habitat.types import EntityId, Location, Species

logger = logging.getLogger(__name__)


def scan(
    habitat: Habitat, location: Location, rng: random.Random
) -> dict[Species, list[EntityId]]:
    """Live neighbours grouped by species, each group in random order."""
    found: dict[Species, list[EntityId]] = {sp: [] for sp in Species}
    for cell in habitat.field.neighbors(location, rng):
        eid = habitat.occupant(cell)
        if eid is None:
            continue
        species = habitat.species_of(eid)
        if species is not None:
            found[species].append(eid)
    return found


def _eat(habitat: Habitat, prey: EntityId) -> Location | None:
    where = habitat.location_of(prey)
    habitat.kill(prey)
    return where


def fox_hunt(habitat: Habitat, eid: EntityId, rng: random.Random) -> Location | None:
    """Eat one neighbouring rabbit and fill up."""
    location = habitat.location_of(eid)
    if location is None:
        return None
    rabbits = scan(habitat, location, rng)[Species.RABBIT]
    if not rabbits:
        return None
    satiate(habitat.world.get(eid, Hunger))
    return _eat(habitat, rabbits[0])


def wolf_hunt(habitat: Habitat, eid: EntityId, rng: random.Random) -> Location | None:
    """Kill a neighbouring fox; fall back to a rabbit only when starving."""
    location = habitat.location_of(eid)
    if location is None:
        return None
    rules = habitat.combat
    hunger = habitat.world.get(eid, Hunger)
    strength = habitat.world.get(eid, Strength)
    found = scan(habitat, location, rng)

    if found[Species.FOX]:
        satiate(hunger)
        gain_strength(strength, rules.wolf_fox_strength)
        return _eat(habitat, found[Species.FOX][0])

    if hunger.food <= rules.wolf_hunger_threshold and found[Species.RABBIT]:
        feed(hunger, rules.wolf_rabbit_food)
        gain_strength(strength, rules.wolf_rabbit_strength)
        return _eat(habitat, found[Species.RABBIT][0])
    return None


def hunter_hunt(habitat: Habitat, eid: EntityId, rng: random.Random) -> Location | None:
    """Fight neighbouring wolves, or eat a rabbit when no wolf is around.

    One wolf means a duel, two or more a pack fight. The hunter may die
    here; callers check before moving it.
    """
    location = habitat.location_of(eid)
    if location is None:
        return None
    found = scan(habitat, location, rng)
    wolves = found[Species.WOLF]
    rabbits = found[Species.RABBIT]

    if not wolves:
        if not rabbits:
            return None
        rules = habitat.combat
        gain_strength(habitat.world.get(eid, Strength), rules.hunter_prey_strength)
        feed(habitat.world.get(eid, Hunger), rules.hunter_prey_food)
        return _eat(habitat, rabbits[0])
    if len(wolves) == 1:
        return duel(habitat, eid, wolves[0], rng)
    return pack_fight(habitat, eid, wolves)


def _hunter_wins(habitat: Habitat, hunter: EntityId) -> None:
    satiate(habitat.world.get(hunter, Hunger))
    gain_strength(
        habitat.world.get(hunter, Strength), habitat.combat.hunter_victory_strength
    )


def _reward_wolf(habitat: Habitat, wolf: EntityId, food: int) -> None:
    feed(habitat.world.get(wolf, Hunger), food)
    gain_strength(
        habitat.world.get(wolf, Strength), habitat.combat.wolf_victory_strength
    )


def duel(
    habitat: Habitat, hunter: EntityId, wolf: EntityId, rng: random.Random
) -> Location | None:
    """Single combat. The stronger side wins; a tie is a fair coin flip."""
    hunter_level = habitat.world.get(hunter, Strength).level
    wolf_level = habitat.world.get(wolf, Strength).level

    if hunter_level == wolf_level:
        hunter_won = rng.random() < 0.5
    else:
        hunter_won = hunter_level > wolf_level
    logger.debug(
        "duel hunter=%d (%d) wolf=%d (%d): %s wins",
        hunter, hunter_level, wolf, wolf_level,
        "hunter" if hunter_won else "wolf",
    )

    if hunter_won:
        _hunter_wins(habitat, hunter)
        return _eat(habitat, wolf)
    habitat.kill(hunter)
    _reward_wolf(habitat, wolf, habitat.combat.wolf_duel_food)
    return None


def pack_fight(
    habitat: Habitat, hunter: EntityId, pack: list[EntityId]
) -> Location | None:
    """Hunter against the summed strength of the pack.

    The hunter needs at least the pack's total to win; a tie goes to the
    hunter. On a win every member dies and the hunter takes the first
    member's cell. On a loss every member is rewarded.
    """
    hunter_level = habitat.world.get(hunter, Strength).level
    pack_level = sum(habitat.world.get(w, Strength).level for w in pack)
    hunter_won = hunter_level >= pack_level
    logger.debug(
        "pack fight hunter=%d (%d) vs %d wolves (%d): %s wins",
        hunter, hunter_level, len(pack), pack_level,
        "hunter" if hunter_won else "pack",
    )

    if hunter_won:
        _hunter_wins(habitat, hunter)
        where = habitat.location_of(pack[0])
        for wolf in pack:
            habitat.kill(wolf)
        return where

    habitat.kill(hunter)
    for wolf in pack:
        _reward_wolf(habitat, wolf, habitat.combat.wolf_pack_food)
    return None
