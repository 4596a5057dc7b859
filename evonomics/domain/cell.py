"""Per-grid-point state and the read-only sensory view of a neighbor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from evonomics.domain.brain import Brain
from evonomics.domain.order import Order


class CellType(Enum):
    """Terrain of a cell."""

    EMPTY = "empty"
    WALL = "wall"
    SOURCE = "source"


@dataclass(eq=False)
class Cell:
    """Resources, terrain and optional occupant of one grid point."""

    food: int = 0
    money: int = 0
    kind: CellType = CellType.EMPTY
    signal: float = 0.0
    brain: Brain | None = None
    trade: Order | None = None

    @property
    def is_wall(self) -> bool:
        return self.kind is CellType.WALL

    @property
    def occupied(self) -> bool:
        return self.brain is not None

    def sense(self) -> Sense:
        return Sense(
            occupied=1.0 if self.brain is not None else 0.0,
            wall=1.0 if self.kind is CellType.WALL else 0.0,
            food=float(self.food),
            signal=self.signal,
            money=float(self.money),
        )


class Sense(NamedTuple):
    """What a neighbor can perceive of a cell. Field order is the input order."""

    occupied: float
    wall: float
    food: float
    signal: float
    money: float
