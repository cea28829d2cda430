"""tick-habitat - Grid predator-prey simulation with pack combat."""

from tick_habitat.clock import Clock
from tick_habitat.components import Hunger, Organism, Strength
from tick_habitat.config import (
    DEFAULT_SPECIES,
    CombatRules,
    HabitatConfig,
    SpeciesParams,
)
from tick_habitat.engine import Simulation
from tick_habitat.field import Field
from tick_habitat.habitat import Habitat
from tick_habitat.types import (
    DeadEntityError,
    EntityId,
    Location,
    Species,
    TickContext,
)
from tick_habitat.view import FieldView
from tick_habitat.world import World

__all__ = [
    "Simulation",
    "Habitat",
    "World",
    "Field",
    "FieldView",
    "Clock",
    "TickContext",
    "EntityId",
    "Location",
    "Species",
    "Organism",
    "Hunger",
    "Strength",
    "HabitatConfig",
    "SpeciesParams",
    "CombatRules",
    "DEFAULT_SPECIES",
    "DeadEntityError",
]
