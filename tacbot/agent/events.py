from __future__ import annotations

from dataclasses import dataclass

from tacbot.execution.bid_types import BidOutcome, Transaction
from tacbot.market.quote_tracker import Quote


@dataclass(frozen=True)
class GameStarted:
    game_id: int = -1


@dataclass(frozen=True)
class QuoteUpdated:
    quote: Quote


@dataclass(frozen=True)
class BidOutcomeEvent:
    outcome: BidOutcome


@dataclass(frozen=True)
class TransactionEvent:
    transaction: Transaction


@dataclass(frozen=True)
class AuctionClosed:
    auction_id: int


@dataclass(frozen=True)
class GameStopped:
    pass
