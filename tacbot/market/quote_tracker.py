"""
Quote Tracker
-------------
Per-auction price history built from quote updates.

Pure bookkeeping: every quote is accepted, nothing raises.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Quote:
    auction_id: int
    ask_price: float
    bid_price: float
    closed: bool = False
    hqw: Optional[int] = None  # hotel only: units we would need to win now


@dataclass
class PriceHistory:
    min_ask_seen: float = math.inf
    max_ask_seen: float = -math.inf
    last_ask_price: float = 0.0
    last_bid_price: float = 0.0
    ask_increase_ratio: Optional[float] = None
    updates: int = 0

    def observe(self, quote: Quote) -> None:
        ask = float(quote.ask_price)
        if ask < self.min_ask_seen:
            self.min_ask_seen = ask
        if ask > self.max_ask_seen:
            self.max_ask_seen = ask

        if self.last_ask_price != 0:
            self.ask_increase_ratio = ask / self.last_ask_price
        else:
            logger.debug("No previous ask for auction %d; ratio unchanged", quote.auction_id)

        self.last_ask_price = ask
        self.last_bid_price = float(quote.bid_price)
        self.updates += 1


@dataclass
class CategoryPriceBand:
    """Running floor/ceiling of asks across every auction of one category."""
    floor: float = math.inf
    ceiling: float = -math.inf

    def observe(self, ask: float) -> None:
        self.floor = min(self.floor, ask)
        self.ceiling = max(self.ceiling, ask)

    @property
    def seen(self) -> bool:
        return self.ceiling != -math.inf


class QuoteTracker:
    def __init__(self):
        self._history: Dict[int, PriceHistory] = {}
        self._quotes: Dict[int, Quote] = {}

    def update(self, quote: Quote) -> PriceHistory:
        hist = self._history.setdefault(quote.auction_id, PriceHistory())
        hist.observe(quote)
        self._quotes[quote.auction_id] = quote
        return hist

    def history(self, auction_id: int) -> PriceHistory:
        return self._history.get(auction_id) or PriceHistory()

    def latest_quote(self, auction_id: int) -> Optional[Quote]:
        return self._quotes.get(auction_id)

    def snapshot(self) -> Dict[int, Dict[str, Any]]:
        return {a: asdict(h) for a, h in sorted(self._history.items())}
