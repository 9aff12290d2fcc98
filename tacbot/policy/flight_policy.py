"""
Flight Policy
-------------
Time-phased acceptance of flight asks.

Each phase carries a ceiling expressed as a fraction of the highest flight
ask seen so far; ceilings rise as the game advances. From
``final_phase_ms`` on, any ask is accepted so every needed flight is bought
before the market closes.

When ``hotel_gate`` is on, the target is capped by the number of stays the
owned hotel rooms can actually cover (see FlightFeasibility).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from tacbot.allocation.feasibility import FlightFeasibility
from tacbot.allocation.planner import ClientPackage
from tacbot.config import FlightConfig, FlightPhase
from tacbot.market.quote_tracker import CategoryPriceBand
from tacbot.policy.base import BidDecision, BiddingPolicy, PolicyContext

logger = logging.getLogger(__name__)


class FlightPolicy(BiddingPolicy):
    def __init__(
        self,
        config: FlightConfig,
        packages: Sequence[ClientPackage],
        feasibility: Optional[FlightFeasibility] = None,
    ):
        self.config = config
        self.packages: List[ClientPackage] = list(packages)
        self.feasibility = feasibility
        self.band = CategoryPriceBand()

    def observe(self, ctx: PolicyContext) -> None:
        if ctx.quote is not None and ctx.quote.ask_price > 0:
            self.band.observe(float(ctx.quote.ask_price))

    def active_phase(self, game_time_ms: int) -> FlightPhase:
        active = self.config.phases[0]
        for phase in self.config.phases:
            if phase.start_ms <= game_time_ms:
                active = phase
        return active

    def ceiling(self, game_time_ms: int) -> float:
        return self.active_phase(game_time_ms).ceiling_fraction * self.band.ceiling

    def capped_target(self, ctx: PolicyContext) -> int:
        if not self.config.hotel_gate or self.feasibility is None:
            return ctx.target
        bound = self.feasibility.bound_for(ctx.info.auction_id, self.packages, ctx.holdings)
        # Never ask for fewer than we already hold; surplus flights are not sold.
        return min(ctx.target, max(bound, ctx.owned))

    def decide(self, ctx: PolicyContext) -> Optional[BidDecision]:
        deficit = self.capped_target(ctx) - ctx.owned
        if deficit <= 0 or ctx.quote is None:
            return None

        ask = float(ctx.quote.ask_price)
        if ask <= 0:
            logger.debug("Flight %d has no ask yet", ctx.info.auction_id)
            return None

        if ctx.game_time_ms >= self.config.final_phase_ms:
            return BidDecision(ctx.info.auction_id, [(deficit, ask)], reason="final phase")

        ceiling = self.ceiling(ctx.game_time_ms)
        if ask <= ceiling:
            return BidDecision(
                ctx.info.auction_id,
                [(deficit, ask)],
                reason=f"ask {ask:.2f} <= ceiling {ceiling:.2f}",
            )
        return None
