"""
Entertainment Policy
--------------------
Sell surplus tickets, buy the ones the plan still needs.

Selling: the ask starts at the highest client valuation of the type and
decays linearly with game time down to a floor derived from the average
valuation. It never goes below the floor.

Buying: the bid rises with game time from the lowest client valuation of
the type towards the average, capped so the spend on the type stays within
the clients' aggregate valuation.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import numpy as np

from tacbot.allocation.planner import EntertainmentStats
from tacbot.config import EntertainmentConfig
from tacbot.policy.base import BidDecision, BiddingPolicy, PolicyContext

logger = logging.getLogger(__name__)


class EntertainmentPolicy(BiddingPolicy):
    def __init__(
        self,
        config: EntertainmentConfig,
        stats: Dict[int, EntertainmentStats],
        game_length_ms: int,
    ):
        self.config = config
        self.stats = stats
        self.game_length_ms = game_length_ms
        self.decay_ms = config.sell_decay_ms or game_length_ms

    # ------------------------------------------------------------------
    def sell_floor(self, e_type: int) -> float:
        return self.stats[e_type].average * self.config.sell_floor_fraction

    def sell_price(self, e_type: int, game_time_ms: int) -> float:
        floor = self.sell_floor(e_type)
        start = max(self.stats[e_type].max_value * self.config.sell_start_multiplier, floor)
        progress = float(np.clip(game_time_ms / self.decay_ms, 0.0, 1.0))
        return max(start - (start - floor) * progress, floor)

    def buy_price(self, e_type: int, game_time_ms: int, quantity: int, spent: float) -> Optional[float]:
        st = self.stats[e_type]
        budget = st.total - spent
        if budget <= 0:
            return None
        progress = float(np.clip(game_time_ms / self.game_length_ms, 0.0, 1.0))
        price = st.min_value + (st.average - st.min_value) * progress
        price = min(price, budget / quantity)
        return price if price > 0 else None

    # ------------------------------------------------------------------
    def decide(self, ctx: PolicyContext) -> Optional[BidDecision]:
        deficit = ctx.deficit
        e_type = ctx.info.type

        if deficit < 0:
            price = self.sell_price(e_type, ctx.game_time_ms)
            return BidDecision(ctx.info.auction_id, [(deficit, price)], reason="sell surplus")

        if deficit > 0 and self.config.buy_enabled:
            price = self.buy_price(e_type, ctx.game_time_ms, deficit, ctx.spent.get(e_type, 0.0))
            if price is None:
                logger.debug("Entertainment type %d budget exhausted", e_type)
                return None
            return BidDecision(ctx.info.auction_id, [(deficit, price)], reason="buy")

        return None

    def opening(self, ctx: PolicyContext) -> Optional[BidDecision]:
        # Only list surplus at game start; purchases wait for a quote.
        if ctx.deficit < 0:
            return self.decide(ctx)
        return None
