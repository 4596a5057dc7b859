"""Randomized union-find wall generator.

Every cell starts as wall and is visited once in random order. A visited
cell opens a new area when no neighbor is open, stays wall when it would
only widen a single existing area past the ``openness`` threshold, and
otherwise opens and joins every neighboring area. The result is a connected
open structure whose corridor width grows with ``openness``.
"""

from __future__ import annotations

from random import Random

import numpy as np
from networkx.utils import UnionFind

Position = tuple[int, int]


def _von_neumann(pos: Position, shape: tuple[int, int]) -> tuple[Position, ...]:
    """Toroidal 4-neighborhood of ``(row, col)``."""
    rows, cols = shape
    r, c = pos
    return (
        (r, (c + 1) % cols),
        ((r + 1) % rows, c),
        (r, (c - 1) % cols),
        ((r - 1) % rows, c),
    )


def generate_walls(rng: Random, shape: tuple[int, int], openness: int = 1) -> np.ndarray:
    """Return a ``(rows, cols)`` boolean array where True marks a wall."""
    if openness < 0:
        raise ValueError("openness must be >= 0")
    rows, cols = shape
    if rows < 1 or cols < 1:
        raise ValueError("shape must be >= 1x1")

    grid = np.ones(shape, dtype=bool)
    areas = UnionFind()
    order = [(r, c) for r in range(rows) for c in range(cols)]
    rng.shuffle(order)

    for pos in order:
        open_neighbors = [n for n in set(_von_neumann(pos, shape)) if not grid[n]]
        neighbor_areas = {areas[n] for n in open_neighbors}
        if not neighbor_areas:
            areas.union(pos)
        elif len(neighbor_areas) == 1 and len(open_neighbors) > openness:
            continue
        else:
            areas.union(pos, *open_neighbors)
        grid[pos] = False
    return grid


def open_areas(walls: np.ndarray) -> list[set[Position]]:
    """Group open cells into toroidally 4-connected components."""
    shape = walls.shape
    areas = UnionFind()
    for r, c in zip(*np.nonzero(~walls), strict=True):
        pos = (int(r), int(c))
        areas.union(pos)
        for n in _von_neumann(pos, shape):
            if not walls[n]:
                areas.union(pos, n)
    return [set(group) for group in areas.to_sets()]
