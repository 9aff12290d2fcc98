"""
Hotel Policy
------------
Hotel auctions are ascending, so the agent chases the price on every
update while it still lacks rooms:

    price = increment + (bid / ask) * ratio_multiplier + ask

clamped to a per-night ceiling.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from tacbot.config import HotelConfig
from tacbot.policy.base import BidDecision, BiddingPolicy, PolicyContext

logger = logging.getLogger(__name__)


class HotelPolicy(BiddingPolicy):
    def __init__(self, config: HotelConfig, best_hotel_value: float = 0.0):
        self.config = config
        if config.price_ceiling is not None:
            self.price_ceiling = float(config.price_ceiling)
        else:
            self.price_ceiling = float(best_hotel_value) + config.ceiling_over_best_value

    def price_for(self, ask: float, bid: float) -> float:
        ratio = bid / ask if ask > 0 else 0.0
        price = self.config.increment + ratio * self.config.ratio_multiplier + ask
        return float(np.clip(price, 0.0, self.price_ceiling))

    def decide(self, ctx: PolicyContext) -> Optional[BidDecision]:
        if ctx.quote is None or ctx.quote.closed:
            return None
        deficit = ctx.deficit
        if deficit <= 0:
            return None

        price = self.price_for(float(ctx.quote.ask_price), float(ctx.quote.bid_price))
        reason = "chase"
        if price >= self.price_ceiling:
            reason = "chase (at ceiling)"
        if ctx.history.ask_increase_ratio is not None:
            reason += f" rise={ctx.history.ask_increase_ratio:.2f}"
        if ctx.quote.hqw is not None:
            reason += f" hqw={ctx.quote.hqw}"
        return BidDecision(ctx.info.auction_id, [(deficit, price)], reason=reason)

    def opening(self, ctx: PolicyContext) -> Optional[BidDecision]:
        if ctx.deficit <= 0:
            return None
        price = min(self.config.opening_price, self.price_ceiling)
        return BidDecision(ctx.info.auction_id, [(ctx.deficit, price)], reason="opening")
