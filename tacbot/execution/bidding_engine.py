"""
Bidding Engine
--------------
Reacts to quote updates with at most one replacement bid per event.

The engine owns the per-game mutable state (price history, bid states,
entertainment spend) and routes every quote to the policy of the auction's
category. Nothing raised inside a policy escapes an event handler: a fault
is logged and the auction simply gets re-evaluated on its next quote.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Optional

from tacbot.allocation.feasibility import FlightFeasibility
from tacbot.allocation.planner import AllocationPlan
from tacbot.config import AgentConfig
from tacbot.execution.bid_state_tracker import BidState, BidStateTracker
from tacbot.execution.bid_types import Bid, BidOutcome, BidOutcomeKind, Transaction
from tacbot.execution.gateway import AgentGateway
from tacbot.journal.bid_journal import BidJournal
from tacbot.logging.structured_logger import StructuredLogger
from tacbot.market.auction_catalog import AuctionCatalog, AuctionCategory, AuctionInfo
from tacbot.market.quote_tracker import Quote, QuoteTracker
from tacbot.policy.base import BidDecision, BiddingPolicy, PolicyContext
from tacbot.policy.entertainment_policy import EntertainmentPolicy
from tacbot.policy.flight_policy import FlightPolicy
from tacbot.policy.hotel_policy import HotelPolicy

logger = logging.getLogger(__name__)


class BiddingEngine:
    def __init__(
        self,
        catalog: AuctionCatalog,
        plan: AllocationPlan,
        gateway: AgentGateway,
        config: Optional[AgentConfig] = None,
        tracker: Optional[QuoteTracker] = None,
        journal: Optional[BidJournal] = None,
        events: Optional[StructuredLogger] = None,
    ):
        self.catalog = catalog
        self.plan = plan
        self.gateway = gateway
        self.config = config or AgentConfig.default()
        self.tracker = tracker or QuoteTracker()
        self.journal = journal or BidJournal()
        self.events = events or StructuredLogger()
        self.states = BidStateTracker()
        self.spent: Dict[int, float] = defaultdict(float)
        self.policies: Dict[AuctionCategory, BiddingPolicy] = {
            AuctionCategory.FLIGHT: FlightPolicy(
                self.config.flight, plan.packages, FlightFeasibility(catalog)
            ),
            AuctionCategory.HOTEL: HotelPolicy(self.config.hotel, plan.best_hotel_value),
            AuctionCategory.ENTERTAINMENT: EntertainmentPolicy(
                self.config.entertainment, plan.entertainment, self.config.game.length_ms
            ),
        }

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def holdings(self) -> Dict[int, int]:
        return {a: self.gateway.get_own(a) for a in self.catalog.ids()}

    def deficit(self, auction_id: int) -> int:
        return self.plan.target(auction_id) - self.gateway.get_own(auction_id)

    def _context(self, info: AuctionInfo, quote: Optional[Quote]) -> PolicyContext:
        holdings = self.holdings()
        return PolicyContext(
            info=info,
            quote=quote,
            history=self.tracker.history(info.auction_id),
            target=self.plan.target(info.auction_id),
            owned=holdings[info.auction_id],
            game_time_ms=self.gateway.get_game_time(),
            holdings=holdings,
            spent=self.spent,
        )

    def _submit(self, decision: BidDecision, ctx: PolicyContext) -> Bid:
        bid = Bid(auction_id=decision.auction_id, reason=decision.reason)
        for qty, price in decision.points:
            bid.add_point(qty, price)

        bid_id = self.gateway.submit_bid(bid)
        bid.bid_id = bid_id
        self.states.bid_submitted(bid)

        self.journal.append({
            "game_time_ms": ctx.game_time_ms,
            "event": "bid",
            "auction_id": bid.auction_id,
            "category": ctx.info.category.name.lower(),
            "bid_id": bid_id,
            "quantity": bid.quantity,
            "price": decision.price,
            "reason": decision.reason,
        })
        self.events.log_bid(
            f"Bid on {self.catalog.describe(bid.auction_id)}: {decision.reason}",
            auction_id=bid.auction_id,
            points=bid.as_tuples(),
            bid_id=bid_id,
            game_time_ms=ctx.game_time_ms,
            target=ctx.target,
            owned=ctx.owned,
        )
        return bid

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def initial_pass(self) -> int:
        """Opening bids at game start. Returns the number of bids submitted."""
        submitted = 0
        for auction_id in self.catalog.ids():
            try:
                info = self.catalog.info(auction_id)
                ctx = self._context(info, self.tracker.latest_quote(auction_id))
                decision = self.policies[info.category].opening(ctx)
                if decision is not None:
                    self._submit(decision, ctx)
                    submitted += 1
            except Exception as e:
                self.events.log_error("Opening bid failed", error=e, auction_id=auction_id)
        logger.info("Initial bid pass submitted %d bids", submitted)
        return submitted

    def on_quote(self, quote: Quote) -> Optional[Bid]:
        try:
            return self._on_quote(quote)
        except Exception as e:
            self.events.log_error("Quote handling failed", error=e, auction_id=quote.auction_id)
            return None

    def _on_quote(self, quote: Quote) -> Optional[Bid]:
        info = self.catalog.info(quote.auction_id)
        self.tracker.update(quote)

        if self.states.is_closed(info.auction_id):
            return None
        if quote.closed:
            self.on_auction_closed(info.auction_id)
            return None

        ctx = self._context(info, quote)
        policy = self.policies[info.category]
        policy.observe(ctx)
        decision = policy.decide(ctx)
        if decision is None:
            if ctx.deficit == 0:
                self.states.satisfied(info.auction_id)
            return None
        return self._submit(decision, ctx)

    def on_outcome(self, outcome: BidOutcome) -> None:
        self.states.record_outcome(outcome)
        self.journal.append({
            "game_time_ms": self.gateway.get_game_time(),
            "event": outcome.kind.value,
            "auction_id": outcome.auction_id,
            "bid_id": outcome.bid_id,
            "reason_code": outcome.reason_code,
            "reason": outcome.detail,
        })
        if outcome.kind == BidOutcomeKind.UPDATED:
            logger.debug("Bid updated: id=%s auction=%d", outcome.bid_id, outcome.auction_id)
        else:
            # Not resubmitted: the next quote re-evaluates this auction.
            logger.warning(
                "Bid %s in auction %d: %s (%s)",
                outcome.kind.value,
                outcome.auction_id,
                outcome.reason_code,
                outcome.detail,
            )
        self.events.log_outcome(
            f"Bid {outcome.kind.value}",
            auction_id=outcome.auction_id,
            kind=outcome.kind.value,
            bid_id=outcome.bid_id,
            reason_code=outcome.reason_code,
        )

    def on_transaction(self, tx: Transaction) -> None:
        info = self.catalog.info(tx.auction_id)
        if info.category == AuctionCategory.ENTERTAINMENT and tx.quantity > 0:
            self.spent[info.type] += tx.quantity * tx.price
        self.journal.append({
            "game_time_ms": self.gateway.get_game_time(),
            "event": "transaction",
            "auction_id": tx.auction_id,
            "category": info.category.name.lower(),
            "quantity": tx.quantity,
            "price": tx.price,
        })

    def on_auction_closed(self, auction_id: int) -> None:
        if self.states.is_closed(auction_id):
            return
        self.states.closed(auction_id)
        remaining = self.deficit(auction_id)
        if remaining > 0:
            logger.warning(
                "Auction %s closed with %d units still needed",
                self.catalog.describe(auction_id),
                remaining,
            )

    def state(self, auction_id: int) -> BidState:
        return self.states.state(auction_id)

    def summary(self) -> Dict[str, object]:
        return {
            **self.states.summary(),
            "journal": self.journal.summary(),
            "entertainment_spend": dict(self.spent),
            "auctions_quoted": len(self.tracker.snapshot()),
        }
