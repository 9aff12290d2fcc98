from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from tacbot.market.auction_catalog import AuctionInfo
from tacbot.market.quote_tracker import PriceHistory, Quote


@dataclass
class PolicyContext:
    """Everything a policy may read while deciding one auction."""
    info: AuctionInfo
    quote: Optional[Quote]
    history: PriceHistory
    target: int
    owned: int
    game_time_ms: int
    holdings: Mapping[int, int] = field(default_factory=dict)   # owned, all auctions
    spent: Mapping[int, float] = field(default_factory=dict)    # entertainment type -> spend

    @property
    def deficit(self) -> int:
        return self.target - self.owned


@dataclass
class BidDecision:
    auction_id: int
    points: List[Tuple[int, float]]
    reason: str = ""

    @property
    def quantity(self) -> int:
        return sum(q for q, _ in self.points)

    @property
    def price(self) -> float:
        return self.points[0][1] if self.points else 0.0


class BiddingPolicy(ABC):
    """Interface for category bidding policies."""

    def observe(self, ctx: PolicyContext) -> None:
        """Called on every quote of the category, before decide()."""
        return None

    @abstractmethod
    def decide(self, ctx: PolicyContext) -> Optional[BidDecision]:
        """Return the bid to submit for ctx.info.auction_id, or None."""
        ...

    def opening(self, ctx: PolicyContext) -> Optional[BidDecision]:
        """Bid placed by the game-start pass, before any quote arrives."""
        return None
