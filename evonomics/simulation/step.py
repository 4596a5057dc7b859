"""Two-phase cellular-automaton rule.

``step`` reads one cell plus the immutable senses of its eight neighbors and
returns what the cell keeps (a :class:`Diff`) and what it sends to each
neighbor (eight :class:`Move` payloads). ``update`` folds a cell's own diff
and the payloads addressed to it into a fresh cell. All steps of a tick are
computed before any update, so evaluation order never matters.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from random import Random

from evonomics.config.constants import MOVE_PENALTY, NUM_NEIGHBORS, SPAWN_FOOD
from evonomics.config.types import RateParameters
from evonomics.domain.actions import Decision, DecisionKind
from evonomics.domain.brain import Brain, combine
from evonomics.domain.cell import Cell, CellType, Sense
from evonomics.domain.direction import MooreDirection
from evonomics.domain.order import Order


@dataclass(frozen=True)
class Diff:
    """Resources a cell gives up this tick and whether its occupant leaves."""

    consume_food: int = 0
    consume_money: int = 0
    vacated: bool = False
    trade: Order | None = None


@dataclass(frozen=True)
class Move:
    """Resources, and possibly a brain, sent to one neighbor."""

    food: int = 0
    money: int = 0
    brain: Brain | None = None


Moves = tuple[Move, ...]
"""Eight payloads indexed by :class:`MooreDirection` value."""

EMPTY_MOVE = Move()
EMPTY_MOVES: Moves = (EMPTY_MOVE,) * NUM_NEIGHBORS
VACATE = Diff(vacated=True)
JUST_EXIST = Diff(consume_food=1)


def sense_inputs(cell: Cell, neighbors: Sequence[Sense], orientation: int) -> list[float]:
    """Build the sensory vector seen by an occupant facing *orientation*.

    Relative slot ``i`` holds the neighbor in absolute direction
    ``i`` turned by *orientation* quarter turns, so a brain perceives the
    same vector for the same surroundings whichever way it faces.
    """
    shift = 2 * orientation
    inputs: list[float] = []
    for slot in range(NUM_NEIGHBORS):
        inputs.extend(neighbors[(slot + shift) % NUM_NEIGHBORS])
    inputs.append(float(cell.food))
    inputs.append(float(cell.money))
    return inputs


def _directed(direction: MooreDirection, move: Move) -> Moves:
    moves = list(EMPTY_MOVES)
    moves[direction.value] = move
    return tuple(moves)


def _trade_order(index: int, cell: Cell, decision: Decision) -> Order | None:
    quantity = decision.quantity
    if quantity > 0 and cell.food - 1 >= quantity:
        return Order(index, quantity, decision.rate, owner=cell.brain)
    if quantity < 0 and cell.money >= -quantity * decision.rate:
        return Order(index, quantity, decision.rate, owner=cell.brain)
    return None


def step(index: int, cell: Cell, neighbors: Sequence[Sense], rng: Random) -> tuple[Diff, Moves]:
    """Let the occupant of *cell* decide and translate that into diff and moves.

    Only the cell's own brain is touched. Unaffordable decisions degrade to
    just existing, which costs one food.
    """
    brain = cell.brain
    if brain is None or cell.food == 0:
        return VACATE, EMPTY_MOVES

    decision = brain.decide(rng, sense_inputs(cell, neighbors, brain.orientation))
    kind = decision.kind
    if kind is DecisionKind.MOVE and decision.direction is not None:
        if cell.food > MOVE_PENALTY:
            diff = Diff(consume_food=cell.food, consume_money=cell.money, vacated=True)
            move = Move(cell.food - 1 - MOVE_PENALTY, cell.money, brain)
            return diff, _directed(decision.direction, move)
    elif kind is DecisionKind.DIVIDE and decision.direction is not None:
        if cell.food >= 2 + MOVE_PENALTY:
            half_money = cell.money // 2
            diff = Diff(
                consume_food=cell.food // 2 + 1 + MOVE_PENALTY // 2,
                consume_money=half_money,
            )
            move = Move(cell.food // 2 - MOVE_PENALTY // 2, half_money, brain.offspring())
            return diff, _directed(decision.direction, move)
    elif kind is DecisionKind.TRADE:
        order = _trade_order(index, cell, decision)
        if order is not None:
            return Diff(consume_food=1, trade=order), EMPTY_MOVES
    return JUST_EXIST, EMPTY_MOVES


def update(
    cell: Cell, diff: Diff, incoming: Sequence[Move], rates: RateParameters, rng: Random
) -> Cell:
    """Apply *diff* and the payloads addressed to *cell*; return the new cell.

    Walls only collect stray money for the market to sweep; every other
    arrival at a wall is lost.
    """
    if cell.kind is CellType.WALL:
        return Cell(money=cell.money + sum(move.money for move in incoming), kind=CellType.WALL)

    food = max(0, cell.food - diff.consume_food)
    money = cell.money - diff.consume_money
    brain = None if diff.vacated else cell.brain

    arrivals = [move.brain for move in incoming if move.brain is not None]
    if len(arrivals) + (brain is not None) >= 2:
        brain = combine(rng, ([brain] if brain is not None else []) + arrivals)
    elif arrivals:
        brain = arrivals[0]

    for move in incoming:
        food += move.food
        money += move.money

    if brain is not None and rng.random() < rates.mutation_chance:
        brain.mutate(rng)
    if brain is None and rng.random() < rates.spawn_chance:
        brain = Brain.random(rng)
        food += SPAWN_FOOD

    if cell.kind is CellType.SOURCE:
        if rng.random() < rates.cornucopia_chance:
            food += rates.cornucopia_bounty
    elif rng.random() < rates.general_food_chance:
        food += 1

    return Cell(
        food=food,
        money=money,
        kind=cell.kind,
        signal=brain.signal if brain is not None else 0.0,
        brain=brain,
        trade=diff.trade,
    )
