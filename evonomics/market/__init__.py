"""Market layer: resting order book and double-auction clearing."""

from evonomics.market.book import PriceQueue, Side
from evonomics.market.engine import ConservationError, Market, MarketTelemetry

__all__ = [
    "ConservationError",
    "Market",
    "MarketTelemetry",
    "PriceQueue",
    "Side",
]
