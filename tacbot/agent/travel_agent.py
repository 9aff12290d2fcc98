"""
Travel Agent
------------
Single dispatch entry point the host adapter feeds with events.

    GameStarted     -> read preferences, plan, publish allocations,
                       build the bidding engine, opening bids
    QuoteUpdated    -> engine.on_quote (at most one bid)
    BidOutcomeEvent -> engine.on_outcome (logged, never resubmitted)
    TransactionEvent-> engine.on_transaction
    AuctionClosed   -> auction becomes CLOSED
    GameStopped     -> summary, journal flush, per-game state dropped

dispatch() never raises; a game runs against a hard deadline and an
escaped fault would forfeit every remaining decision.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from tacbot.agent.events import (
    AuctionClosed,
    BidOutcomeEvent,
    GameStarted,
    GameStopped,
    QuoteUpdated,
    TransactionEvent,
)
from tacbot.allocation.planner import AllocationPlan, AllocationPlanner
from tacbot.allocation.preferences import PreferenceSet
from tacbot.config import AgentConfig
from tacbot.execution.bidding_engine import BiddingEngine
from tacbot.execution.gateway import AgentGateway
from tacbot.journal.bid_journal import BidJournal
from tacbot.logging.structured_logger import StructuredLogger
from tacbot.market.auction_catalog import AuctionCatalog

logger = logging.getLogger(__name__)


class TravelAgent:
    def __init__(self, gateway: AgentGateway, config: Optional[AgentConfig] = None):
        self.gateway = gateway
        self.config = config or AgentConfig.default()
        self.catalog = AuctionCatalog(self.config.catalog)
        self.planner = AllocationPlanner(self.catalog)
        self.events = StructuredLogger(log_file=self.config.logging.structured_log_file)
        self.plan: Optional[AllocationPlan] = None
        self.engine: Optional[BiddingEngine] = None
        self.last_summary: Dict[str, Any] = {}
        self.last_journal: Optional[BidJournal] = None
        self._handlers: Dict[type, Callable[[Any], None]] = {
            GameStarted: self._on_game_started,
            QuoteUpdated: self._on_quote,
            BidOutcomeEvent: self._on_outcome,
            TransactionEvent: self._on_transaction,
            AuctionClosed: self._on_auction_closed,
            GameStopped: self._on_game_stopped,
        }

    @property
    def running(self) -> bool:
        return self.engine is not None

    def dispatch(self, event: Any) -> None:
        handler = self._handlers.get(type(event))
        if handler is None:
            logger.warning("Unhandled event type: %s", type(event).__name__)
            return
        if not self.running and not isinstance(event, (GameStarted, GameStopped)):
            logger.debug("Dropping %s received before game start", type(event).__name__)
            return
        try:
            handler(event)
        except Exception as e:
            self.events.log_error(f"{type(event).__name__} handling failed", error=e)

    # ------------------------------------------------------------------
    def _on_game_started(self, event: GameStarted) -> None:
        logger.info("Game %s started", event.game_id)
        cat = self.config.catalog
        preferences = PreferenceSet.from_gateway(
            self.gateway,
            clients=self.config.game.clients,
            first_day=cat.first_day,
            last_day=cat.first_day + cat.days,
        )
        owned = {a: self.gateway.get_own(a) for a in self.catalog.ids()}
        self.plan = self.planner.plan(preferences, owned)
        self.planner.publish(self.plan, self.gateway)
        self.events.log_plan("Allocation planned", game_id=event.game_id, **self.plan.summary())

        self.engine = BiddingEngine(
            self.catalog,
            self.plan,
            self.gateway,
            config=self.config,
            journal=BidJournal(self.config.journal.csv_path),
            events=self.events,
        )
        self.engine.initial_pass()

    def _on_quote(self, event: QuoteUpdated) -> None:
        self.engine.on_quote(event.quote)

    def _on_outcome(self, event: BidOutcomeEvent) -> None:
        self.engine.on_outcome(event.outcome)

    def _on_transaction(self, event: TransactionEvent) -> None:
        self.engine.on_transaction(event.transaction)

    def _on_auction_closed(self, event: AuctionClosed) -> None:
        self.engine.on_auction_closed(event.auction_id)

    def _on_game_stopped(self, event: GameStopped) -> None:
        if self.engine is None:
            logger.info("Game stopped")
            return
        self.last_summary = self.engine.summary()
        self.events.log_system("Game stopped", component="TravelAgent", **self.last_summary)
        self.last_journal = self.engine.journal
        self.last_journal.flush()
        self.engine = None
        self.plan = None
