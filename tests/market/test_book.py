from __future__ import annotations

import pytest

from evonomics.domain.order import Order
from evonomics.market.book import PriceQueue, Side


class TestPriceQueue:
    def test_bids_best_is_highest_rate(self) -> None:
        bids = PriceQueue(Side.BID, 10)
        bids.push(Order(0, -1, 1.0), 0)
        bids.push(Order(1, -1, 3.0), 1)
        bids.push(Order(2, -1, 2.0), 2)
        assert bids.best_rate() == 3.0
        assert [o.rate for o in bids] == [3.0, 2.0, 1.0]

    def test_asks_best_is_lowest_rate(self) -> None:
        asks = PriceQueue(Side.ASK, 10)
        asks.push(Order(0, 1, 2.0), 0)
        asks.push(Order(1, 1, 0.5), 1)
        assert asks.pop_best() == (1, Order(1, 1, 0.5))
        assert len(asks) == 1

    def test_fifo_within_price(self) -> None:
        asks = PriceQueue(Side.ASK, 10)
        asks.push(Order(5, 1, 1.0), 7)
        asks.push(Order(3, 1, 1.0), 2)
        assert asks.peek_best() == Order(3, 1, 1.0)

    def test_overflow_evicts_worst(self) -> None:
        bids = PriceQueue(Side.BID, 2)
        assert bids.push(Order(0, -1, 2.0), 0) is None
        assert bids.push(Order(1, -1, 1.0), 1) is None
        evicted = bids.push(Order(2, -1, 5.0), 2)
        assert evicted == Order(1, -1, 1.0)
        assert len(bids) == 2
        assert bids.best_rate() == 5.0

    def test_empty_queue(self) -> None:
        asks = PriceQueue(Side.ASK, 1)
        assert asks.peek_best() is None
        assert asks.best_rate() is None

    def test_clear(self) -> None:
        asks = PriceQueue(Side.ASK, 4)
        asks.push(Order(0, 2, 1.0), 0)
        asks.clear()
        assert len(asks) == 0

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError, match="capacity"):
            PriceQueue(Side.BID, 0)


class TestOrder:
    def test_sides(self) -> None:
        assert Order(0, -3, 1.0).is_bid
        assert Order(0, 3, 1.0).is_ask
        assert Order(0, -3, 1.0).size == 3

    @pytest.mark.parametrize("rate", [-1.0, float("nan"), float("inf")])
    def test_rejects_bad_rate(self, rate: float) -> None:
        with pytest.raises(ValueError, match="rate"):
            Order(0, 1, rate)
