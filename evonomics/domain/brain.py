"""Agent controller: private registers and orientation over a shared genome."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from random import Random

from evonomics.config.constants import HUE_EPSILON, NUM_ORIENTATIONS, NUM_REGISTERS
from evonomics.domain.actions import NOTHING_ACTION, ActionKind, Decision
from evonomics.domain.genome import Genome, crossover


@dataclass(eq=False)
class Brain:
    """One agent's runtime state.

    ``memory``, ``orientation`` and ``generation`` belong to this brain
    alone. ``genome`` may be shared with relatives and is never edited in
    place.
    """

    genome: Genome
    memory: list[float] = field(default_factory=lambda: [0.0] * NUM_REGISTERS)
    orientation: int = 0
    color: float = 0.0
    generation: int = 0

    @classmethod
    def random(cls, rng: Random) -> Brain:
        return cls(
            genome=Genome.random(rng),
            orientation=rng.randrange(NUM_ORIENTATIONS),
            color=rng.uniform(0.0, 360.0),
        )

    @property
    def signal(self) -> float:
        """Value broadcast to neighbors: register 0, or 0 when not finite."""
        value = self.memory[0]
        return value if math.isfinite(value) else 0.0

    def decide(self, rng: Random, inputs: Sequence[float]) -> Decision:
        """Run every gene once in shuffled order and return the tick's decision.

        Writes land in memory as they happen, rotations turn the brain
        immediately, and the last remaining action wins. The decision's
        direction is expressed in absolute grid terms.
        """
        entries = list(self.genome.entries)
        rng.shuffle(entries)
        chosen = NOTHING_ACTION
        for entry in entries:
            action = self.genome.execute(inputs, self.memory, entry)
            kind = action.kind
            if kind is ActionKind.WRITE:
                self.memory[action.register] = action.value
            elif kind is ActionKind.ROTATE_LEFT:
                self.orientation = (self.orientation + 1) % NUM_ORIENTATIONS
            elif kind is ActionKind.ROTATE_RIGHT:
                self.orientation = (self.orientation - 1) % NUM_ORIENTATIONS
            else:
                chosen = action
        return Decision.from_action(chosen).rotated(self.orientation)

    def mutate(self, rng: Random) -> None:
        """Rebind to a structurally mutated copy of the genome."""
        self.genome = self.genome.mutate(rng)

    def offspring(self) -> Brain:
        """Copy produced by division: same genome handle, copied registers."""
        return Brain(
            genome=self.genome,
            memory=list(self.memory),
            orientation=self.orientation,
            color=self.color,
            generation=self.generation + 1,
        )


def mean_hue(rng: Random, hues: Iterable[float]) -> float:
    """Circular mean of hue angles in degrees.

    Falls back to a fresh random hue when the hues cancel out.
    """
    x = 0.0
    y = 0.0
    for hue in hues:
        radians = math.radians(hue)
        x += math.cos(radians)
        y += math.sin(radians)
    if not math.hypot(x, y) > HUE_EPSILON:
        return rng.uniform(0.0, 360.0)
    angle = math.degrees(math.atan2(y, x)) % 360.0
    if not math.isfinite(angle) or angle >= 360.0:
        return rng.uniform(0.0, 360.0)
    return angle


def combine(rng: Random, brains: Iterable[Brain]) -> Brain:
    """Merge brains that meet in one cell into a single child via crossover."""
    parents = list(brains)
    if not parents:
        raise ValueError("combine requires at least one brain")
    return Brain(
        genome=crossover(rng, [parent.genome for parent in parents]),
        orientation=rng.randrange(NUM_ORIENTATIONS),
        color=mean_hue(rng, [parent.color for parent in parents]),
        generation=max(parent.generation for parent in parents) + 1,
    )
