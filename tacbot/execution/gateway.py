"""
Agent Gateway
-------------
The auction server as seen by the core. The real connection (framing,
login, game discovery) lives outside this package; ``SimulatedGateway``
stands in for it in tests and replays.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from tacbot.allocation.preferences import ARRIVAL, DEPARTURE, E1, E2, E3, HOTEL_VALUE
from tacbot.execution.bid_types import Bid

logger = logging.getLogger(__name__)


class AgentGateway(ABC):
    @abstractmethod
    def get_client_preference(self, client: int, attribute: int) -> int: ...

    @abstractmethod
    def get_own(self, auction_id: int) -> int: ...

    @abstractmethod
    def get_allocation(self, auction_id: int) -> int: ...

    @abstractmethod
    def set_allocation(self, auction_id: int, qty: int) -> None: ...

    @abstractmethod
    def get_game_time(self) -> int:
        """Milliseconds since game start."""
        ...

    @abstractmethod
    def submit_bid(self, bid: Bid) -> int:
        """Fire-and-forget; returns the bid id. Outcomes arrive as events."""
        ...


class SimulatedGateway(AgentGateway):
    """
    In-memory gateway: preferences, holdings and clock are set directly,
    submitted bids are recorded in order.
    """

    def __init__(self, preferences: Optional[Sequence[Dict[str, int]]] = None):
        self.preferences: List[Dict[str, int]] = list(preferences or [])
        self.owned: Dict[int, int] = {}
        self.allocations: Dict[int, int] = {}
        self.game_time_ms: int = 0
        self.bids: List[Bid] = []
        self._next_bid_id = 1

    _ATTRS = {
        ARRIVAL: "arrival",
        DEPARTURE: "departure",
        HOTEL_VALUE: "hotel_value",
        E1: "e1",
        E2: "e2",
        E3: "e3",
    }

    def get_client_preference(self, client: int, attribute: int) -> int:
        return int(self.preferences[client][self._ATTRS[attribute]])

    def get_own(self, auction_id: int) -> int:
        return self.owned.get(auction_id, 0)

    def set_own(self, auction_id: int, qty: int) -> None:
        self.owned[auction_id] = qty

    def get_allocation(self, auction_id: int) -> int:
        return self.allocations.get(auction_id, 0)

    def set_allocation(self, auction_id: int, qty: int) -> None:
        self.allocations[auction_id] = qty

    def get_game_time(self) -> int:
        return self.game_time_ms

    def advance(self, ms: int) -> None:
        self.game_time_ms += ms

    def submit_bid(self, bid: Bid) -> int:
        bid.bid_id = self._next_bid_id
        self._next_bid_id += 1
        self.bids.append(bid)
        logger.debug("Simulated submit: auction=%d points=%s", bid.auction_id, bid.as_tuples())
        return bid.bid_id

    def bids_for(self, auction_id: int) -> List[Bid]:
        return [b for b in self.bids if b.auction_id == auction_id]

    def reset(self) -> None:
        self.owned.clear()
        self.allocations.clear()
        self.bids.clear()
        self.game_time_ms = 0
