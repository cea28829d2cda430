"""Simulation - tick loop, reseeding, species toggles and hooks."""

import logging
import os
import random
from typing import Callable

from tick_habitat.behaviours import act
from tick_habitat.clock import Clock
from tick_habitat.config import HabitatConfig
from tick_habitat.field import Field
from tick_habitat.habitat import Habitat
from tick_habitat.types import EntityId, Species, System, TickContext
from tick_habitat.view import FieldView
from tick_habitat.world import World

logger = logging.getLogger(__name__)


class Simulation:
    def __init__(
        self,
        config: HabitatConfig | None = None,
        seed: int | None = None,
        populate: bool = True,
    ) -> None:
        self._config = config if config is not None else HabitatConfig()
        self._clock = Clock()
        self._habitat = Habitat(self._config)
        self._enabled: dict[Species, bool] = {sp: True for sp in Species}
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_hooks: list[Callable[[World, TickContext], None]] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

        if populate:
            self.reset()

    @property
    def config(self) -> HabitatConfig:
        return self._config

    @property
    def habitat(self) -> Habitat:
        return self._habitat

    @property
    def world(self) -> World:
        return self._habitat.world

    @property
    def field(self) -> Field:
        return self._habitat.field

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def tick_number(self) -> int:
        return self._clock.tick_number

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    # -- Species toggles (applied on the next reset) --

    @property
    def enabled_species(self) -> tuple[Species, ...]:
        return tuple(sp for sp in Species if self._enabled[sp])

    def set_species_enabled(self, species: Species, enabled: bool) -> None:
        self._enabled[species] = enabled

    # -- Hooks and systems --

    def add_system(self, system: System) -> None:
        """Register a system to run after each organism sweep."""
        self._systems.append(system)

    def on_start(self, hook: Callable[[World, TickContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[World, TickContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    # -- Ticking --

    def _sweep(self) -> list[EntityId]:
        newborns: list[EntityId] = []
        # Ids spawned during the sweep are not in this snapshot and wait
        # for the next tick; ids killed during it are skipped by act().
        for eid in self._habitat.world.entities():
            act(self._habitat, eid, self._rng, newborns)
        return newborns

    def _tick(self) -> None:
        before = len(self._habitat.world)
        newborns = self._sweep()
        self._clock.advance()
        if logger.isEnabledFor(logging.DEBUG):
            after = len(self._habitat.world)
            logger.debug(
                "tick %d: %d births, %d deaths, population %d",
                self._clock.tick_number,
                len(newborns),
                before + len(newborns) - after,
                after,
            )
        ctx = self._clock.context(self._request_stop, self._rng)
        for system in self._systems:
            system(self._habitat.world, ctx)
            if self._stop_requested:
                break

    def step(self) -> None:
        self._stop_requested = False
        self._tick()

    def run(self, n: int) -> None:
        """Step *n* times, whatever the state of the population.

        Only a system calling ``ctx.request_stop()`` ends the run early.
        """
        self._stop_requested = False
        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._start_hooks:
            hook(self._habitat.world, ctx)

        for _ in range(n):
            self._tick()
            if self._stop_requested:
                break

        ctx = self._clock.context(self._request_stop, self._rng)
        for hook in self._stop_hooks:
            hook(self._habitat.world, ctx)

    def reset(self) -> None:
        """Empty the field and reseed it with the enabled species."""
        self._clock.reset()
        self._habitat.clear()
        self._habitat.populate(self._rng, self.enabled_species)
        logger.info(
            "reset %dx%d field (seed=%d): %s",
            self._config.width,
            self._config.height,
            self._seed,
            ", ".join(
                f"{sp.value}={n}" for sp, n in self._habitat.population().items()
            ),
        )

    def view(self) -> FieldView:
        return FieldView.capture(self._habitat, self._clock.tick_number)
