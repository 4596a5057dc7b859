"""Continuous double auction clearing food against money.

Trade intents left on cells by the automaton are collected once per tick,
shuffled, and matched one at a time against the resting book. Fills move
money and food between cells in place. The reserve is the buyer and seller
of last resort at a fixed rate and, together with all cell money, forms a
conserved money supply.
"""

from __future__ import annotations

import itertools
import logging
import math
import sys
from collections.abc import Sequence
from dataclasses import dataclass, replace
from random import Random

from evonomics.config.types import MarketConfig
from evonomics.domain.cell import Cell, CellType
from evonomics.domain.order import Order
from evonomics.market.book import PriceQueue, Side

logger = logging.getLogger(__name__)


class ConservationError(RuntimeError):
    """Cell money plus reserve no longer equals the money supply."""


@dataclass(frozen=True)
class MarketTelemetry:
    """Per-tick market statistics for charting."""

    tick: int
    last_bid: float | None
    last_ask: float | None
    reserve: int
    food_bought: int
    food_sold: int
    reserve_bought: int
    reserve_sold: int
    orders: int


class Market:
    """Order book, reserve, and per-tick volume counters."""

    def __init__(self, config: MarketConfig, total_money: int) -> None:
        self.config = config
        self.total_money = total_money
        self.reserve = total_money
        self.bids = PriceQueue(Side.BID, config.max_resting_orders)
        self.asks = PriceQueue(Side.ASK, config.max_resting_orders)
        self._arrivals = itertools.count()
        self.food_bought = 0
        self.food_sold = 0
        self.reserve_bought = 0
        self.reserve_sold = 0

    # ------------------------------------------------------------------
    # Tick-level pipeline
    # ------------------------------------------------------------------

    def clear(self, cells: Sequence[Cell], rng: Random, tick: int) -> MarketTelemetry:
        """Match this tick's intents, sweep wall money, and verify conservation."""
        self.check_conservation(cells)
        self.food_bought = self.food_sold = 0
        self.reserve_bought = self.reserve_sold = 0

        orders: list[Order] = []
        for cell in cells:
            if cell.trade is not None:
                if cell.trade.quantity != 0 and _placed_by_occupant(cell, cell.trade):
                    orders.append(cell.trade)
                cell.trade = None
        rng.shuffle(orders)
        for order in orders:
            self.submit(cells, order)

        self.sweep_walls(cells)
        self.check_conservation(cells)
        return MarketTelemetry(
            tick=tick,
            last_bid=self.bids.best_rate(),
            last_ask=self.asks.best_rate(),
            reserve=self.reserve,
            food_bought=self.food_bought,
            food_sold=self.food_sold,
            reserve_bought=self.reserve_bought,
            reserve_sold=self.reserve_sold,
            orders=len(orders),
        )

    def submit(self, cells: Sequence[Cell], order: Order) -> None:
        """Match one incoming order; any remainder rests in the book."""
        if order.is_bid:
            self._match_bid(cells, order)
        elif order.is_ask:
            self._match_ask(cells, order)

    def sweep_walls(self, cells: Sequence[Cell]) -> int:
        """Return money stranded on wall cells to the reserve."""
        swept = 0
        for cell in cells:
            if cell.kind is CellType.WALL and cell.money:
                swept += cell.money
                cell.money = 0
        self.reserve += swept
        return swept

    def check_conservation(self, cells: Sequence[Cell]) -> None:
        held = sum(cell.money for cell in cells)
        if held + self.reserve != self.total_money or self.reserve < 0:
            logger.critical(
                "Money not conserved: cells=%s reserve=%s expected=%s",
                held,
                self.reserve,
                self.total_money,
            )
            raise ConservationError(
                f"cell money {held} + reserve {self.reserve} != {self.total_money}"
            )

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def _rest(self, queue: PriceQueue, order: Order, seq: int | None = None) -> None:
        evicted = queue.push(order, next(self._arrivals) if seq is None else seq)
        if evicted is not None:
            logger.debug("Evicted %s order from cell %s", queue.side.value, evicted.cell)

    def _match_bid(self, cells: Sequence[Cell], order: Order) -> None:
        buyer = cells[order.cell]
        remaining = order.size
        while remaining > 0:
            ask = self.asks.peek_best()
            if ask is None or ask.rate > order.rate:
                if self.config.reserve_sells_food and order.rate >= self.config.reserve_rate:
                    remaining -= self._buy_from_reserve(buyer, remaining)
                break
            seq, ask = self.asks.pop_best()
            seller = cells[ask.cell]
            if _superseded(ask, order, seller) or seller.food == 0:
                continue
            fill = min(remaining, ask.size, seller.food, _affordable(buyer.money, ask.rate))
            if fill == 0:
                self._rest(self.asks, ask, seq)
                break
            self._settle(buyer, seller, fill, ask.rate)
            remaining -= fill
            if fill < ask.size:
                self._rest(self.asks, replace(ask, quantity=ask.quantity - fill), seq)
        # An order only rests while its cell can fund at least one unit.
        if remaining > 0 and _affordable(buyer.money, order.rate) > 0:
            self._rest(self.bids, replace(order, quantity=-remaining))

    def _match_ask(self, cells: Sequence[Cell], order: Order) -> None:
        seller = cells[order.cell]
        remaining = order.size
        reserve_rate = self.config.reserve_rate
        while remaining > 0:
            if seller.food == 0:
                break
            bid = self.bids.peek_best()
            reserve_ok = order.rate <= reserve_rate
            if bid is None or bid.rate < order.rate or (reserve_ok and bid.rate < reserve_rate):
                if reserve_ok:
                    remaining -= self._sell_to_reserve(seller, remaining)
                break
            seq, bid = self.bids.pop_best()
            buyer = cells[bid.cell]
            if _superseded(bid, order, buyer):
                continue
            fill = min(remaining, bid.size, seller.food, _affordable(buyer.money, bid.rate))
            if fill == 0:
                continue
            self._settle(buyer, seller, fill, bid.rate)
            remaining -= fill
            if fill < bid.size:
                self._rest(self.bids, replace(bid, quantity=bid.quantity + fill), seq)
        if remaining > 0 and seller.food > 0:
            self._rest(self.asks, replace(order, quantity=remaining))

    def _settle(self, buyer: Cell, seller: Cell, fill: int, rate: float) -> None:
        cost = min(math.ceil(rate * fill), buyer.money)
        buyer.money -= cost
        seller.money += cost
        seller.food -= fill
        buyer.food += fill
        self.food_bought += fill
        self.food_sold += fill

    def _buy_from_reserve(self, buyer: Cell, wanted: int) -> int:
        fill = min(wanted, _affordable(buyer.money, self.config.reserve_rate))
        if fill == 0:
            return 0
        cost = min(math.ceil(self.config.reserve_rate * fill), buyer.money)
        buyer.money -= cost
        buyer.food += fill
        self.reserve += cost
        self.food_bought += fill
        self.reserve_sold += fill
        return fill

    def _sell_to_reserve(self, seller: Cell, offered: int) -> int:
        rate = self.config.reserve_rate
        fill = min(offered, seller.food, int(self.reserve // rate))
        if fill == 0:
            return 0
        proceeds = min(math.floor(rate * fill), self.reserve)
        seller.money += proceeds
        seller.food -= fill
        self.reserve -= proceeds
        self.food_sold += fill
        self.reserve_bought += fill
        return fill


def _placed_by_occupant(cell: Cell, order: Order) -> bool:
    return order.owner is None or cell.brain is order.owner


def _superseded(resting: Order, incoming: Order, cell: Cell) -> bool:
    """A resting order is void once its brain left or its cell trades again."""
    return resting.cell == incoming.cell or not _placed_by_occupant(cell, resting)


def _affordable(money: int, rate: float) -> int:
    """Units purchasable with *money* at *rate*; unbounded when free."""
    if rate <= 0.0:
        return sys.maxsize
    units = money / rate
    if not math.isfinite(units):
        return sys.maxsize
    return math.floor(units)
