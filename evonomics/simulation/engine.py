"""Simulation engine: grid construction and the per-tick pipeline.

One tick is a step phase over every cell against an immutable snapshot of
neighbor senses, an update phase that builds a fresh grid from the diffs
and payloads, and a sequential market clearing pass. Both cell phases may
be split into chunks run on a thread pool; each chunk draws from its own
``random.Random`` seeded from the simulation rng so a seed and worker count
fully determine a run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from random import Random
from typing import TypeVar

import numpy as np

from evonomics.config.constants import NUM_NEIGHBORS
from evonomics.config.types import GridConfig, RateParameters, SimulationConfig
from evonomics.domain.cell import Cell, CellType, Sense
from evonomics.domain.direction import DIRECTIONS, neighbor_index
from evonomics.domain.maze import generate_walls, open_areas
from evonomics.market.engine import Market, MarketTelemetry
from evonomics.simulation.commands import RateCommand
from evonomics.simulation.step import EMPTY_MOVES, VACATE, Diff, Moves, step, update
from evonomics.simulation.view import View, render_view

logger = logging.getLogger(__name__)

T = TypeVar("T")

StepResult = tuple[Diff, Moves]


@dataclass(frozen=True)
class PopulationStats:
    """Grid-wide totals at one tick."""

    tick: int
    agents: int
    food: int
    max_generation: int
    reserve: int


def build_grid(config: GridConfig, rng: Random) -> list[Cell]:
    """Lay out walls and Source cells for a fresh row-major grid."""
    shape = (config.height, config.width)
    if config.openness is None:
        walls = np.zeros(shape, dtype=bool)
    else:
        walls = generate_walls(rng, shape, config.openness)

    cells: list[Cell] = []
    for y in range(config.height):
        for x in range(config.width):
            if walls[y, x]:
                cells.append(Cell(kind=CellType.WALL))
            elif rng.random() < config.cornucopia_density:
                cells.append(Cell(kind=CellType.SOURCE))
            else:
                cells.append(Cell())

    logger.info(
        "Built %sx%s grid: %s walls, %s sources, %s open areas",
        config.width,
        config.height,
        int(walls.sum()),
        sum(1 for cell in cells if cell.kind is CellType.SOURCE),
        len(open_areas(walls)),
    )
    return cells


def _chunk_bounds(size: int, chunks: int) -> list[tuple[int, int]]:
    chunks = max(1, min(chunks, size))
    step_size, extra = divmod(size, chunks)
    bounds = []
    start = 0
    for i in range(chunks):
        stop = start + step_size + (1 if i < extra else 0)
        bounds.append((start, stop))
        start = stop
    return bounds


class Simulation:
    """Grid, market and rates of one running ecosystem."""

    def __init__(self, config: SimulationConfig | None = None) -> None:
        self.config = config or SimulationConfig()
        self.width = self.config.grid.width
        self.height = self.config.grid.height
        self.rates: RateParameters = self.config.rates
        self.rng = Random(self.config.seed)
        self.cells = build_grid(self.config.grid, self.rng)
        self.market = Market(self.config.market, self.config.total_money)
        self.tick_count = 0

        size = len(self.cells)
        self._neighbors: list[tuple[int, ...]] = [
            tuple(neighbor_index(i, d, self.width, self.height) for d in DIRECTIONS)
            for i in range(size)
        ]
        self._chunks = _chunk_bounds(size, self.config.workers)
        self._executor = (
            ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix="evonomics")
            if self.config.workers > 1
            else None
        )

    def __enter__(self) -> Simulation:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Tick pipeline
    # ------------------------------------------------------------------

    def tick(
        self, count: int = 1, on_tick: Callable[[MarketTelemetry], None] | None = None
    ) -> list[MarketTelemetry]:
        """Advance *count* ticks, returning the market telemetry of each."""
        if count < 0:
            raise ValueError("count must be >= 0")
        telemetry: list[MarketTelemetry] = []
        for _ in range(count):
            record = self._tick_once()
            telemetry.append(record)
            if on_tick is not None:
                on_tick(record)
        return telemetry

    def _tick_once(self) -> MarketTelemetry:
        senses = [cell.sense() for cell in self.cells]
        steps: list[StepResult] = self._run_chunks(
            lambda start, stop, rng: self._step_range(start, stop, rng, senses)
        )
        self.cells = self._run_chunks(
            lambda start, stop, rng: self._update_range(start, stop, rng, steps)
        )
        self.tick_count += 1
        return self.market.clear(self.cells, self.rng, self.tick_count)

    def _run_chunks(self, work: Callable[[int, int, Random], list[T]]) -> list[T]:
        rngs = [Random(self.rng.getrandbits(64)) for _ in self._chunks]
        if self._executor is None:
            parts = [
                work(start, stop, rng) for (start, stop), rng in zip(self._chunks, rngs, strict=True)
            ]
        else:
            futures = [
                self._executor.submit(work, start, stop, rng)
                for (start, stop), rng in zip(self._chunks, rngs, strict=True)
            ]
            parts = [future.result() for future in futures]
        return [item for part in parts for item in part]

    def _step_range(
        self, start: int, stop: int, rng: Random, senses: Sequence[Sense]
    ) -> list[StepResult]:
        results: list[StepResult] = []
        for index in range(start, stop):
            cell = self.cells[index]
            if cell.brain is None:
                results.append((VACATE, EMPTY_MOVES))
                continue
            neighbors = [senses[n] for n in self._neighbors[index]]
            results.append(step(index, cell, neighbors, rng))
        return results

    def _update_range(
        self, start: int, stop: int, rng: Random, steps: Sequence[StepResult]
    ) -> list[Cell]:
        cells: list[Cell] = []
        for index in range(start, stop):
            # The neighbor in direction d sends toward d's inverse, i.e. here.
            incoming = [
                steps[n][1][(d + NUM_NEIGHBORS // 2) % NUM_NEIGHBORS]
                for d, n in enumerate(self._neighbors[index])
            ]
            cells.append(update(self.cells[index], steps[index][0], incoming, self.rates, rng))
        return cells

    # ------------------------------------------------------------------
    # Control and inspection
    # ------------------------------------------------------------------

    def apply(self, command: RateCommand) -> None:
        """Apply a rate-parameter command before the next tick."""
        self.rates = command.apply(self.rates)
        logger.debug("Rates updated by %s: %s", type(command).__name__, self.rates)

    def view(self, ticks: int = 0) -> View:
        return render_view(self.cells, self.width, self.height, ticks, self.tick_count)

    def population(self) -> PopulationStats:
        brains = [cell.brain for cell in self.cells if cell.brain is not None]
        return PopulationStats(
            tick=self.tick_count,
            agents=len(brains),
            food=sum(cell.food for cell in self.cells),
            max_generation=max((brain.generation for brain in brains), default=0),
            reserve=self.market.reserve,
        )
