"""Commands accepted by a running simulation.

Parameter commands validate their value at construction and know how to
produce updated :class:`RateParameters`; ``Tick`` and ``Shutdown`` are
handled by the worker loop.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from evonomics.config.types import RateParameters, check_probability


@dataclass(frozen=True)
class Tick:
    """Advance the simulation *count* ticks and publish one view."""

    count: int = 1

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError("count must be >= 0")


@dataclass(frozen=True)
class Shutdown:
    """Stop the worker after the current command."""


@dataclass(frozen=True)
class SetSpawnChance:
    probability: float

    def __post_init__(self) -> None:
        check_probability("probability", self.probability)

    def apply(self, rates: RateParameters) -> RateParameters:
        return replace(rates, spawn_chance=self.probability)


@dataclass(frozen=True)
class SetMutationChance:
    probability: float

    def __post_init__(self) -> None:
        check_probability("probability", self.probability)

    def apply(self, rates: RateParameters) -> RateParameters:
        return replace(rates, mutation_chance=self.probability)


@dataclass(frozen=True)
class SetGeneralFoodChance:
    probability: float

    def __post_init__(self) -> None:
        check_probability("probability", self.probability)

    def apply(self, rates: RateParameters) -> RateParameters:
        return replace(rates, general_food_chance=self.probability)


@dataclass(frozen=True)
class SetCornucopiaChance:
    probability: float

    def __post_init__(self) -> None:
        check_probability("probability", self.probability)

    def apply(self, rates: RateParameters) -> RateParameters:
        return replace(rates, cornucopia_chance=self.probability)


@dataclass(frozen=True)
class SetCornucopiaBounty:
    """Food granted to a Source cell when its cornucopia fires."""

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("amount must be >= 0")

    def apply(self, rates: RateParameters) -> RateParameters:
        return replace(rates, cornucopia_bounty=self.amount)


RateCommand = (
    SetSpawnChance
    | SetMutationChance
    | SetGeneralFoodChance
    | SetCornucopiaChance
    | SetCornucopiaBounty
)
Command = Tick | Shutdown | RateCommand
