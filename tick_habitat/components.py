"""Organism components and their clamped update helpers."""
from __future__ import annotations

from dataclasses import dataclass

from tick_habitat.types import Species


@dataclass
class Organism:
    """Present on every organism: species tag and age in ticks."""

    species: Species
    age: int = 0


@dataclass
class Hunger:
    """Feeding facet. Death when ``food`` reaches zero."""

    food: int
    max_food: int


@dataclass
class Strength:
    """Battling facet. ``level`` stays within [0, max_level]."""

    level: int
    max_level: int


def _clamp(value: int, high: int) -> int:
    return max(0, min(value, high))


def feed(hunger: Hunger, amount: int) -> None:
    hunger.food = _clamp(hunger.food + amount, hunger.max_food)


def satiate(hunger: Hunger) -> None:
    hunger.food = hunger.max_food


def starve(hunger: Hunger) -> bool:
    """Use up one unit of food. Returns True when the organism starved."""
    hunger.food = _clamp(hunger.food - 1, hunger.max_food)
    return hunger.food == 0


def gain_strength(strength: Strength, amount: int) -> None:
    strength.level = _clamp(strength.level + amount, strength.max_level)


def lose_strength(strength: Strength, amount: int = 1) -> None:
    strength.level = _clamp(strength.level - amount, strength.max_level)
