"""Instruction vocabulary of the brain bytecode.

A codon is a tagged instruction: an :class:`Op` plus an optional operand.
Operand meaning depends on the op:

- ``LITERAL``: the float pushed
- ``LESS`` / ``JUMP``: signed relative branch offset
- ``COPY`` / ``READ`` / ``INPUT`` / ``WRITE``: non-negative index, always
  reduced modulo the target container length at execution time
- ``MOVE`` / ``DIVIDE``: a :class:`MooreDirection`
- ``TRADE_FIXED``: ``(quantity, rate)``
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import cast

from evonomics.config.constants import (
    BRANCH_LIMIT,
    FIXED_TRADE_MAX_RATE,
    FIXED_TRADE_QUANTITY,
    INDEX_RANGE,
    LITERAL_SIGMA,
)
from evonomics.domain.direction import CARDINALS, MooreDirection

Operand = float | int | MooreDirection | tuple[int, float] | None


class Op(Enum):
    """Instruction opcodes."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    LITERAL = "literal"
    LESS = "less"
    JUMP = "jump"
    COPY = "copy"
    READ = "read"
    INPUT = "input"
    WRITE = "write"
    MOVE = "move"
    DIVIDE = "divide"
    TRADE = "trade"
    TRADE_FIXED = "trade_fixed"
    ROTATE_LEFT = "rotate_left"
    ROTATE_RIGHT = "rotate_right"
    NOTHING = "nothing"


OPS: tuple[Op, ...] = tuple(Op)

BRANCH_OPS = frozenset({Op.LESS, Op.JUMP})
"""Ops whose operand is a relative program-counter offset."""

INDEX_OPS = frozenset({Op.COPY, Op.READ, Op.INPUT, Op.WRITE})


@dataclass(frozen=True)
class Codon:
    """One instruction in a genome sequence."""

    op: Op
    operand: Operand = None

    @property
    def is_branch(self) -> bool:
        return self.op in BRANCH_OPS

    # Typed views of ``operand``; the module docstring maps ops to operands.

    @property
    def literal(self) -> float:
        return cast(float, self.operand)

    @property
    def offset(self) -> int:
        return cast(int, self.operand)

    @property
    def index(self) -> int:
        return cast(int, self.operand)

    @property
    def direction(self) -> MooreDirection:
        return cast(MooreDirection, self.operand)

    @property
    def fixed_trade(self) -> tuple[int, float]:
        return cast(tuple[int, float], self.operand)

    def with_operand(self, operand: Operand) -> Codon:
        return Codon(self.op, operand)


def random_branch_offset(rng: Random) -> int:
    """Sample a relative branch offset in ``(-BRANCH_LIMIT, BRANCH_LIMIT)``."""
    return rng.randint(-BRANCH_LIMIT + 1, BRANCH_LIMIT - 1)


def random_codon(rng: Random) -> Codon:
    """Sample a codon with a uniformly chosen op and a fresh operand."""
    op = rng.choice(OPS)
    if op is Op.LITERAL:
        return Codon(op, rng.gauss(0.0, LITERAL_SIGMA))
    if op in BRANCH_OPS:
        return Codon(op, random_branch_offset(rng))
    if op in INDEX_OPS:
        return Codon(op, rng.randrange(INDEX_RANGE))
    if op is Op.MOVE or op is Op.DIVIDE:
        return Codon(op, rng.choice(CARDINALS))
    if op is Op.TRADE_FIXED:
        quantity = rng.randint(-FIXED_TRADE_QUANTITY, FIXED_TRADE_QUANTITY)
        return Codon(op, (quantity, rng.uniform(0.0, FIXED_TRADE_MAX_RATE)))
    return Codon(op)
