"""Simulation configuration dataclasses."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_habitat.types import Species

DEFAULT_WIDTH = 120
DEFAULT_HEIGHT = 80


@dataclass(frozen=True)
class SpeciesParams:
    """Per-species life-history parameters.

    Attributes:
        max_age: Age beyond which the organism dies of old age.
        breeding_age: Minimum age at which breeding may be attempted.
        breeding_probability: Chance of breeding on a tick once of age.
        max_litter_size: Upper bound of the uniform litter size draw.
        creation_probability: Per-cell chance of appearing on reset.
        max_food: Food ceiling. ``None`` for species that never hunger.
        max_strength: Strength ceiling. ``None`` for species that never fight.
        strength_decay: Strength lost every tick by battling species.
    """

    max_age: int
    breeding_age: int
    breeding_probability: float
    max_litter_size: int
    creation_probability: float = 0.0
    max_food: int | None = None
    max_strength: int | None = None
    strength_decay: int = 1

    def __post_init__(self) -> None:
        if self.max_age <= 0:
            raise ValueError("max_age must be positive")
        if self.breeding_age < 0:
            raise ValueError("breeding_age must not be negative")
        if not 0.0 <= self.breeding_probability <= 1.0:
            raise ValueError("breeding_probability must be within [0, 1]")
        if self.max_litter_size <= 0:
            raise ValueError("max_litter_size must be positive")
        if not 0.0 <= self.creation_probability <= 1.0:
            raise ValueError("creation_probability must be within [0, 1]")
        if self.max_food is not None and self.max_food <= 0:
            raise ValueError("max_food must be positive")
        if self.max_strength is not None and self.max_strength <= 0:
            raise ValueError("max_strength must be positive")
        if self.strength_decay < 0:
            raise ValueError("strength_decay must not be negative")

    @property
    def feeds(self) -> bool:
        return self.max_food is not None

    @property
    def battles(self) -> bool:
        return self.max_strength is not None


@dataclass(frozen=True)
class CombatRules:
    """Food and strength rewards for feeding and fighting."""

    wolf_hunger_threshold: int = 2
    wolf_fox_strength: int = 5
    wolf_rabbit_food: int = 2
    wolf_rabbit_strength: int = 1
    wolf_duel_food: int = 12
    wolf_pack_food: int = 5
    wolf_victory_strength: int = 3
    hunter_prey_food: int = 6
    hunter_prey_strength: int = 5
    hunter_victory_strength: int = 10

    def __post_init__(self) -> None:
        for name, value in vars(self).items():
            if value < 0:
                raise ValueError(f"{name} must not be negative")


DEFAULT_SPECIES: dict[Species, SpeciesParams] = {
    Species.RABBIT: SpeciesParams(
        max_age=40,
        breeding_age=5,
        breeding_probability=0.12,
        max_litter_size=4,
        creation_probability=0.08,
    ),
    Species.FOX: SpeciesParams(
        max_age=150,
        breeding_age=40,
        breeding_probability=0.06,
        max_litter_size=2,
        creation_probability=0.02,
        max_food=12,
    ),
    Species.WOLF: SpeciesParams(
        max_age=160,
        breeding_age=45,
        breeding_probability=0.07,
        max_litter_size=2,
        creation_probability=0.007,
        max_food=12,
        max_strength=100,
    ),
    Species.HUNTER: SpeciesParams(
        max_age=400,
        breeding_age=60,
        breeding_probability=0.06,
        max_litter_size=3,
        creation_probability=0.005,
        max_food=12,
        max_strength=100,
    ),
}

# Species that must carry a food level / a strength level.
_PREDATORS = (Species.FOX, Species.WOLF, Species.HUNTER)
_FIGHTERS = (Species.WOLF, Species.HUNTER)


@dataclass(frozen=True)
class HabitatConfig:
    """Immutable configuration for one simulation.

    Invalid dimensions or parameter tables are rejected here, before any
    simulation state exists.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    species: dict[Species, SpeciesParams] = field(
        default_factory=lambda: dict(DEFAULT_SPECIES)
    )
    combat: CombatRules = field(default_factory=CombatRules)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Field dimensions must be positive, got {self.width}x{self.height}"
            )
        missing = [s.value for s in Species if s not in self.species]
        if missing:
            raise ValueError(f"Missing species parameters: {', '.join(missing)}")
        for species in _PREDATORS:
            if not self.species[species].feeds:
                raise ValueError(f"{species.value} requires max_food")
        for species in _FIGHTERS:
            if not self.species[species].battles:
                raise ValueError(f"{species.value} requires max_strength")
        total = sum(p.creation_probability for p in self.species.values())
        if total > 1.0:
            raise ValueError(
                f"Creation probabilities sum to {total:.3f}, must not exceed 1"
            )

    def params(self, species: Species) -> SpeciesParams:
        return self.species[species]
