"""Moore neighborhood directions on the toroidal grid.

Directions are numbered counter-clockwise starting from ``RIGHT`` so that a
quarter turn is a shift of two positions around the ring. Screen
coordinates are used: ``UP`` decreases ``y``.
"""

from __future__ import annotations

from enum import Enum


class MooreDirection(Enum):
    """One of the eight neighbors of a cell."""

    RIGHT = 0
    UP_RIGHT = 1
    UP = 2
    UP_LEFT = 3
    LEFT = 4
    DOWN_LEFT = 5
    DOWN = 6
    DOWN_RIGHT = 7

    @property
    def delta(self) -> tuple[int, int]:
        """``(dx, dy)`` offset of this neighbor."""
        return _DELTAS[self.value]

    def rotate(self, quarter_turns: int) -> MooreDirection:
        """Turn counter-clockwise by *quarter_turns* (negative turns clockwise)."""
        return DIRECTIONS[(self.value + 2 * quarter_turns) % 8]

    def inverse(self) -> MooreDirection:
        return DIRECTIONS[(self.value + 4) % 8]


_DELTAS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)

DIRECTIONS: tuple[MooreDirection, ...] = tuple(MooreDirection)
"""All directions in ring order."""

CARDINALS: tuple[MooreDirection, ...] = (
    MooreDirection.RIGHT,
    MooreDirection.UP,
    MooreDirection.LEFT,
    MooreDirection.DOWN,
)
"""Directions an agent can move or divide toward."""


def neighbor_index(index: int, direction: MooreDirection, width: int, height: int) -> int:
    """Row-major index of the toroidal neighbor of *index* in *direction*."""
    x, y = index % width, index // width
    dx, dy = direction.delta
    return ((y + dy) % height) * width + (x + dx) % width
