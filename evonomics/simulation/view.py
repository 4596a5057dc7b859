"""Read-only snapshots of the grid for display."""

from __future__ import annotations

import colorsys
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from evonomics.config.constants import FOOD_COLOR_MULTIPLIER
from evonomics.domain.cell import Cell, CellType

WALL_COLOR = (1.0, 0.0, 0.0)
"""RGB of a wall cell."""


@dataclass(frozen=True)
class View:
    """Per-batch snapshot; the arrays are marked read-only."""

    colors: np.ndarray
    generations: np.ndarray
    agents: int
    ticks: int
    tick: int


def cell_color(cell: Cell) -> tuple[float, float, float]:
    """Occupants show their hue, walls are red, food shades the rest green."""
    if cell.brain is not None:
        return colorsys.hsv_to_rgb(cell.brain.color / 360.0, 1.0, 1.0)
    if cell.kind is CellType.WALL:
        return WALL_COLOR
    return (0.0, min(1.0, FOOD_COLOR_MULTIPLIER * cell.food), 0.0)


def render_view(cells: Sequence[Cell], width: int, height: int, ticks: int, tick: int) -> View:
    colors = np.zeros((height, width, 3), dtype=np.float32)
    generations = np.full((height, width), -1, dtype=np.int64)
    agents = 0
    for index, cell in enumerate(cells):
        y, x = divmod(index, width)
        colors[y, x] = cell_color(cell)
        if cell.brain is not None:
            generations[y, x] = cell.brain.generation
            agents += 1
    colors.setflags(write=False)
    generations.setflags(write=False)
    return View(colors=colors, generations=generations, agents=agents, ticks=ticks, tick=tick)
