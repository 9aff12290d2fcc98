"""
Flight Feasibility
------------------
How many complete, hotel-covered stays can each flight day support?

Owned hotel rooms (either tier) are pooled per night. Clients are visited
in index order; a client whose every night still has a free room reserves
one room per night and counts as one supported stay on both its inbound and
outbound flight auctions. Flights beyond that bound could not be paired
with a room and are not bought.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, Mapping

from tacbot.allocation.planner import ClientPackage
from tacbot.market.auction_catalog import AuctionCatalog, AuctionCategory

logger = logging.getLogger(__name__)


class FlightFeasibility:
    def __init__(self, catalog: AuctionCatalog):
        self.catalog = catalog

    def rooms_per_night(self, owned: Mapping[int, int]) -> Dict[int, int]:
        pool: Dict[int, int] = defaultdict(int)
        for auction_id in self.catalog.ids(AuctionCategory.HOTEL):
            day = self.catalog.info(auction_id).day
            pool[day] += max(0, int(owned.get(auction_id, 0)))
        return pool

    def bounds(self, packages: Iterable[ClientPackage], owned: Mapping[int, int]) -> Dict[int, int]:
        pool = self.rooms_per_night(owned)
        supported: Dict[int, int] = {a: 0 for a in self.catalog.ids(AuctionCategory.FLIGHT)}

        for pkg in packages:
            nights = range(pkg.arrival_day, pkg.departure_day)
            if all(pool[d] > 0 for d in nights):
                for d in nights:
                    pool[d] -= 1
                supported[pkg.inflight_auction] += 1
                supported[pkg.outflight_auction] += 1

        logger.debug("Flight feasibility bounds: %s", supported)
        return supported

    def bound_for(self, auction_id: int, packages: Iterable[ClientPackage], owned: Mapping[int, int]) -> int:
        return self.bounds(packages, owned).get(auction_id, 0)
