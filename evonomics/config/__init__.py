"""Configuration layer: constants and typed config dataclasses."""

from evonomics.config.constants import (
    CORNUCOPIA_BOUNTY,
    CORNUCOPIA_CHANCE,
    GENERAL_FOOD_CHANCE,
    MAX_EXECUTE,
    MOVE_PENALTY,
    MUTATION_CHANCE,
    NUM_INPUTS,
    NUM_REGISTERS,
    RESERVE_MULTIPLIER,
    SPAWN_CHANCE,
    SPAWN_FOOD,
)
from evonomics.config.types import (
    GridConfig,
    MarketConfig,
    RateParameters,
    SimulationConfig,
    check_probability,
)

__all__ = [
    "CORNUCOPIA_BOUNTY",
    "CORNUCOPIA_CHANCE",
    "GENERAL_FOOD_CHANCE",
    "GridConfig",
    "MAX_EXECUTE",
    "MOVE_PENALTY",
    "MUTATION_CHANCE",
    "MarketConfig",
    "NUM_INPUTS",
    "NUM_REGISTERS",
    "RESERVE_MULTIPLIER",
    "RateParameters",
    "SPAWN_CHANCE",
    "SPAWN_FOOD",
    "SimulationConfig",
    "check_probability",
]
