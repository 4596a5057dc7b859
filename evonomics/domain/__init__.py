"""Domain layer: bytecode brains, grid cells, orders and wall generation."""

from evonomics.domain.actions import (
    NOTHING_ACTION,
    NOTHING_DECISION,
    Action,
    ActionKind,
    Decision,
    DecisionKind,
)
from evonomics.domain.brain import Brain, combine, mean_hue
from evonomics.domain.cell import Cell, CellType, Sense
from evonomics.domain.codon import Codon, Op, random_codon
from evonomics.domain.direction import CARDINALS, DIRECTIONS, MooreDirection, neighbor_index
from evonomics.domain.genome import Genome, crossover
from evonomics.domain.maze import generate_walls, open_areas
from evonomics.domain.order import Order

__all__ = [
    "Action",
    "ActionKind",
    "Brain",
    "CARDINALS",
    "Cell",
    "CellType",
    "Codon",
    "DIRECTIONS",
    "Decision",
    "DecisionKind",
    "Genome",
    "MooreDirection",
    "NOTHING_ACTION",
    "NOTHING_DECISION",
    "Op",
    "Order",
    "Sense",
    "combine",
    "crossover",
    "generate_walls",
    "mean_hue",
    "neighbor_index",
    "open_areas",
    "random_codon",
]
