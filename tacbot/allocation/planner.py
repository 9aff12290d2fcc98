"""
Allocation Planner
------------------
Turns the clients' preferences into target holdings per auction.

Runs exactly once per game, before any quote is processed:

    1. hotel tier threshold = truncated average hotel value;
       value >= threshold -> good hotel, else cheap
    2. one inbound flight on the arrival day, one outbound on departure
    3. one hotel night of the chosen tier for every day of the stay
    4. one ticket of the client's top-ranked entertainment type, on the
       first stay day with owned surplus, else the arrival day.
       A tie for the top score produces no entertainment target.

The resulting plan (targets, per-client packages and entertainment
statistics) is handed to the bidding engine by reference.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from tacbot.allocation.preferences import ClientPreference, PreferenceSet
from tacbot.market.auction_catalog import (
    AuctionCatalog,
    AuctionCategory,
    CHEAP_HOTEL,
    ENTERTAINMENT_TYPES,
    GOOD_HOTEL,
    INFLIGHT,
    OUTFLIGHT,
)

logger = logging.getLogger(__name__)


class TargetHoldings:
    """auction id -> desired quantity; only ever grows during planning."""

    def __init__(self):
        self._targets: Dict[int, int] = {}

    def add(self, auction_id: int, qty: int = 1) -> int:
        if qty < 0:
            raise ValueError(f"Target increments must be non-negative, got {qty}")
        self._targets[auction_id] = self._targets.get(auction_id, 0) + qty
        return self._targets[auction_id]

    def get(self, auction_id: int) -> int:
        return self._targets.get(auction_id, 0)

    def items(self) -> Iterator[Tuple[int, int]]:
        return iter(sorted(self._targets.items()))

    def as_dict(self) -> Dict[int, int]:
        return dict(sorted(self._targets.items()))

    def total(self) -> int:
        return sum(self._targets.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TargetHoldings):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"TargetHoldings({self.as_dict()})"


@dataclass(frozen=True)
class EntertainmentStats:
    """Client valuations of one entertainment type."""
    min_value: float
    max_value: float
    average: float
    total: float

    @staticmethod
    def from_scores(scores: List[int]) -> "EntertainmentStats":
        arr = np.asarray(scores, dtype=float)
        return EntertainmentStats(
            min_value=float(arr.min()),
            max_value=float(arr.max()),
            average=float(arr.mean()),
            total=float(arr.sum()),
        )


@dataclass
class ClientPackage:
    client: int
    arrival_day: int
    departure_day: int
    hotel_value: int
    hotel_type: int
    inflight_auction: int
    outflight_auction: int
    hotel_auctions: List[int] = field(default_factory=list)
    entertainment_auction: Optional[int] = None


@dataclass
class AllocationPlan:
    targets: TargetHoldings
    packages: List[ClientPackage]
    hotel_threshold: int
    best_hotel_value: int
    entertainment: Dict[int, EntertainmentStats]  # keyed by type 1..3

    def target(self, auction_id: int) -> int:
        return self.targets.get(auction_id)

    def summary(self) -> Dict[str, Any]:
        return {
            "hotel_threshold": self.hotel_threshold,
            "targets": self.targets.as_dict(),
            "untargeted_clients": [p.client for p in self.packages if p.entertainment_auction is None],
        }


class AllocationPlanner:
    """
    Deterministic, idempotent planner. Holds no state between calls.
    """

    def __init__(self, catalog: AuctionCatalog):
        self.catalog = catalog
        self.logger = logging.getLogger("AllocationPlanner")

    def plan(
        self,
        preferences: PreferenceSet,
        owned: Optional[Mapping[int, int]] = None,
    ) -> AllocationPlan:
        owned = owned or {}
        targets = TargetHoldings()
        threshold = preferences.hotel_threshold()
        packages: List[ClientPackage] = []

        for client in preferences:
            packages.append(self._plan_client(client, threshold, targets, owned))

        stats = {
            e_type: EntertainmentStats.from_scores(preferences.entertainment_scores(e_type - 1))
            for e_type in ENTERTAINMENT_TYPES
        }
        plan = AllocationPlan(
            targets=targets,
            packages=packages,
            hotel_threshold=threshold,
            best_hotel_value=preferences.best_hotel_value(),
            entertainment=stats,
        )
        self.logger.info(
            "Planned %d target units across %d auctions (hotel threshold=%d)",
            targets.total(),
            len(targets.as_dict()),
            threshold,
        )
        return plan

    def _plan_client(
        self,
        client: ClientPreference,
        threshold: int,
        targets: TargetHoldings,
        owned: Mapping[int, int],
    ) -> ClientPackage:
        cat = self.catalog
        hotel_type = GOOD_HOTEL if client.hotel_value >= threshold else CHEAP_HOTEL

        inflight = cat.auction_for(AuctionCategory.FLIGHT, INFLIGHT, client.arrival_day)
        outflight = cat.auction_for(AuctionCategory.FLIGHT, OUTFLIGHT, client.departure_day)
        targets.add(inflight)
        targets.add(outflight)

        package = ClientPackage(
            client=client.client,
            arrival_day=client.arrival_day,
            departure_day=client.departure_day,
            hotel_value=client.hotel_value,
            hotel_type=hotel_type,
            inflight_auction=inflight,
            outflight_auction=outflight,
        )

        for day in client.stay_days():
            auction = cat.auction_for(AuctionCategory.HOTEL, hotel_type, day)
            self.logger.debug("Adding hotel for day %d on %d", day, auction)
            targets.add(auction)
            package.hotel_auctions.append(auction)

        e_type = client.top_entertainment_type()
        if e_type is None:
            self.logger.info(
                "Client %d has tied top entertainment scores %s; no entertainment target",
                client.client,
                client.entertainment_scores,
            )
        else:
            auction = self._best_entertainment_day(client, e_type, targets, owned)
            self.logger.debug("Adding entertainment %d on %d", e_type, auction)
            targets.add(auction)
            package.entertainment_auction = auction

        return package

    def _best_entertainment_day(
        self,
        client: ClientPreference,
        e_type: int,
        targets: TargetHoldings,
        owned: Mapping[int, int],
    ) -> int:
        # Reuse tickets we already own before asking for new ones.
        for day in client.stay_days():
            auction = self.catalog.auction_for(AuctionCategory.ENTERTAINMENT, e_type, day)
            if targets.get(auction) < owned.get(auction, 0):
                return auction
        return self.catalog.auction_for(AuctionCategory.ENTERTAINMENT, e_type, client.arrival_day)

    @staticmethod
    def publish(plan: AllocationPlan, gateway: Any) -> None:
        """Mirror targets into the gateway's allocation memo."""
        for auction_id, qty in plan.targets.items():
            gateway.set_allocation(auction_id, qty)
