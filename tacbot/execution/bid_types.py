from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class BidPoint:
    quantity: int        # negative = offer to sell
    unit_price: float


@dataclass
class Bid:
    """A complete bid for one auction. Replaces any active bid there."""
    auction_id: int
    points: List[BidPoint] = field(default_factory=list)
    bid_id: Optional[int] = None
    reason: str = ""

    def add_point(self, quantity: int, unit_price: float) -> "Bid":
        self.points.append(BidPoint(int(quantity), float(unit_price)))
        return self

    @property
    def quantity(self) -> int:
        return sum(p.quantity for p in self.points)

    def as_tuples(self) -> List[Tuple[int, float]]:
        return [(p.quantity, p.unit_price) for p in self.points]


class BidOutcomeKind(Enum):
    UPDATED = "updated"
    REJECTED = "rejected"
    ERROR = "error"


@dataclass(frozen=True)
class BidOutcome:
    bid_id: Optional[int]
    auction_id: int
    kind: BidOutcomeKind
    reason_code: Optional[int] = None
    detail: str = ""


@dataclass(frozen=True)
class Transaction:
    auction_id: int
    quantity: int        # negative when we sold
    price: float
