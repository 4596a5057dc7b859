"""Double-ended price-priority queues for resting orders.

Orders are kept sorted best-first by price, then by arrival. Both ends are
reachable: the best order for matching and the worst order for eviction
when a side exceeds its capacity.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from enum import Enum

from evonomics.domain.order import Order


class Side(Enum):
    """Which side of the book a queue holds."""

    BID = "bid"
    ASK = "ask"


class PriceQueue:
    """Resting orders of one side, best price first, FIFO within a price."""

    def __init__(self, side: Side, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.side = side
        self.capacity = capacity
        self._entries: list[tuple[float, int, Order]] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Order]:
        return (order for _, _, order in self._entries)

    def _key(self, rate: float) -> float:
        # Bids rank highest rate first.
        return -rate if self.side is Side.BID else rate

    def push(self, order: Order, seq: int) -> Order | None:
        """Insert *order* with arrival number *seq*; return any evicted order."""
        bisect.insort(self._entries, (self._key(order.rate), seq, order))
        if len(self._entries) > self.capacity:
            return self.pop_worst()[1]
        return None

    def peek_best(self) -> Order | None:
        return self._entries[0][2] if self._entries else None

    def pop_best(self) -> tuple[int, Order]:
        """Remove and return ``(seq, order)`` of the best-priced order."""
        _, seq, order = self._entries.pop(0)
        return seq, order

    def pop_worst(self) -> tuple[int, Order]:
        _, seq, order = self._entries.pop()
        return seq, order

    def best_rate(self) -> float | None:
        best = self.peek_best()
        return None if best is None else best.rate

    def clear(self) -> None:
        self._entries.clear()
