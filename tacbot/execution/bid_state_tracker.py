import logging
from collections import Counter
from enum import Enum
from typing import Dict, Iterable, Optional

from tacbot.execution.bid_types import Bid, BidOutcome, BidOutcomeKind

logger = logging.getLogger("BidStateTracker")


class BidState(Enum):
    NO_POSITION = "no_position"
    PENDING_BID = "pending_bid"
    SATISFIED = "satisfied"
    CLOSED = "closed"


class BidStateTracker:
    """
    Tracks the bidding state and active bid of every auction.
    CLOSED is terminal.
    """
    def __init__(self):
        self.states: Dict[int, BidState] = {}
        self.active_bids: Dict[int, Bid] = {}
        self.outcomes: Counter = Counter()
        self.last_reject: Dict[int, Optional[int]] = {}

    def state(self, auction_id: int) -> BidState:
        return self.states.get(auction_id, BidState.NO_POSITION)

    def is_closed(self, auction_id: int) -> bool:
        return self.state(auction_id) == BidState.CLOSED

    def _move(self, auction_id: int, new: BidState) -> bool:
        old = self.state(auction_id)
        if old == BidState.CLOSED:
            logger.debug("Auction %d is closed; ignoring move to %s", auction_id, new.value)
            return False
        if old != new:
            logger.debug("Auction %d: %s -> %s", auction_id, old.value, new.value)
        self.states[auction_id] = new
        return True

    def bid_submitted(self, bid: Bid) -> bool:
        if not self._move(bid.auction_id, BidState.PENDING_BID):
            return False
        self.active_bids[bid.auction_id] = bid
        return True

    def satisfied(self, auction_id: int) -> None:
        self._move(auction_id, BidState.SATISFIED)

    def closed(self, auction_id: int) -> None:
        if self.state(auction_id) != BidState.CLOSED:
            logger.info("Auction %d closed", auction_id)
        self.states[auction_id] = BidState.CLOSED
        self.active_bids.pop(auction_id, None)

    def record_outcome(self, outcome: BidOutcome) -> None:
        self.outcomes[outcome.kind] += 1
        if outcome.kind == BidOutcomeKind.REJECTED:
            self.last_reject[outcome.auction_id] = outcome.reason_code

    def active_bid(self, auction_id: int) -> Optional[Bid]:
        return self.active_bids.get(auction_id)

    def iter_pending(self) -> Iterable[int]:
        for auction_id, st in self.states.items():
            if st == BidState.PENDING_BID:
                yield auction_id

    def summary(self) -> Dict[str, int]:
        counts = Counter(st.value for st in self.states.values())
        out = {f"state_{k}": v for k, v in sorted(counts.items())}
        out.update({f"outcome_{k.value}": v for k, v in self.outcomes.items()})
        return out
