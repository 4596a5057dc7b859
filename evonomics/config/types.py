"""Configuration dataclasses for simulation runs.

All frozen dataclasses that parameterise the grid, the live-tunable rate
parameters, the market, and a whole simulation live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from evonomics.config.constants import (
    CORNUCOPIA_BOUNTY,
    CORNUCOPIA_CHANCE,
    CORNUCOPIA_DENSITY,
    GENERAL_FOOD_CHANCE,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_RESTING_ORDERS,
    MUTATION_CHANCE,
    OPENNESS,
    RESERVE_MULTIPLIER,
    RESERVE_RATE,
    SPAWN_CHANCE,
)

__all__ = [
    "GridConfig",
    "MarketConfig",
    "RateParameters",
    "SimulationConfig",
    "check_probability",
]


def check_probability(name: str, value: float) -> None:
    """Raise ValueError unless *value* is a probability in [0, 1]."""
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0.0, 1.0]")


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GridConfig:
    """Grid construction parameters, consumed once at simulation start.

    ``openness`` of ``None`` disables wall generation entirely.
    """

    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    openness: int | None = OPENNESS
    cornucopia_density: float = CORNUCOPIA_DENSITY

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ValueError("width must be >= 1")
        if self.height < 1:
            raise ValueError("height must be >= 1")
        if self.openness is not None and self.openness < 0:
            raise ValueError("openness must be >= 0")
        check_probability("cornucopia_density", self.cornucopia_density)

    @property
    def size(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class RateParameters:
    """Stochastic rates applied during the update phase; tunable between ticks."""

    spawn_chance: float = SPAWN_CHANCE
    mutation_chance: float = MUTATION_CHANCE
    general_food_chance: float = GENERAL_FOOD_CHANCE
    cornucopia_chance: float = CORNUCOPIA_CHANCE
    cornucopia_bounty: int = CORNUCOPIA_BOUNTY

    def __post_init__(self) -> None:
        check_probability("spawn_chance", self.spawn_chance)
        check_probability("mutation_chance", self.mutation_chance)
        check_probability("general_food_chance", self.general_food_chance)
        check_probability("cornucopia_chance", self.cornucopia_chance)
        if self.cornucopia_bounty < 0:
            raise ValueError("cornucopia_bounty must be >= 0")


@dataclass(frozen=True)
class MarketConfig:
    """Order book and reserve settings."""

    reserve_multiplier: int = RESERVE_MULTIPLIER
    reserve_rate: float = RESERVE_RATE
    max_resting_orders: int = MAX_RESTING_ORDERS
    reserve_sells_food: bool = True

    def __post_init__(self) -> None:
        if self.reserve_multiplier < 0:
            raise ValueError("reserve_multiplier must be >= 0")
        if self.reserve_rate <= 0.0:
            raise ValueError("reserve_rate must be > 0")
        if self.max_resting_orders < 1:
            raise ValueError("max_resting_orders must be >= 1")


@dataclass(frozen=True)
class SimulationConfig:
    """Complete parameter set for one simulation instance."""

    grid: GridConfig = field(default_factory=GridConfig)
    rates: RateParameters = field(default_factory=RateParameters)
    market: MarketConfig = field(default_factory=MarketConfig)
    seed: int = 0
    workers: int = 1

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ValueError("workers must be >= 1")

    @property
    def total_money(self) -> int:
        """Conserved money supply for this grid."""
        return self.grid.size * self.market.reserve_multiplier
