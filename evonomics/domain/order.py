"""Trade intents exchanged between the automaton and the market."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from evonomics.domain.brain import Brain


@dataclass(frozen=True)
class Order:
    """A limit order for food priced in money.

    Negative ``quantity`` bids (buys) food, positive asks (sells) food, and
    zero is a no-op. ``owner`` is the brain that placed the order; the
    market drops the order once that brain no longer occupies ``cell``.
    """

    cell: int
    quantity: int
    rate: float
    owner: Brain | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not math.isfinite(self.rate) or self.rate < 0.0:
            raise ValueError("rate must be finite and >= 0")
        if self.cell < 0:
            raise ValueError("cell must be >= 0")

    @property
    def is_bid(self) -> bool:
        return self.quantity < 0

    @property
    def is_ask(self) -> bool:
        return self.quantity > 0

    @property
    def size(self) -> int:
        return abs(self.quantity)
