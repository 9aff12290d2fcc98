"""
Auction Catalog
---------------
Total mapping between auction ids and (category, type, day).

Layout (fixed by the game server):

    0..3    inbound flights,  days 1..4
    4..7    outbound flights, days 2..5
    8..11   cheap hotel,      days 1..4
    12..15  good hotel,       days 1..4
    16..27  entertainment type 1..3, days 1..4 (four ids per type)

Every component resolves ids through this table instead of range checks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from tacbot.config import CatalogConfig
from tacbot.errors import UnknownAuctionError

logger = logging.getLogger(__name__)


class AuctionCategory(Enum):
    FLIGHT = 0
    HOTEL = 1
    ENTERTAINMENT = 2


# Flight types
OUTFLIGHT = 0
INFLIGHT = 1

# Hotel types
CHEAP_HOTEL = 0
GOOD_HOTEL = 1

# Entertainment types
ALLIGATOR_WRESTLING = 1
AMUSEMENT = 2
MUSEUM = 3

ENTERTAINMENT_TYPES = (ALLIGATOR_WRESTLING, AMUSEMENT, MUSEUM)


@dataclass(frozen=True)
class AuctionInfo:
    auction_id: int
    category: AuctionCategory
    type: int
    day: int


class AuctionCatalog:
    """
    Built once per game from CatalogConfig; immutable afterwards.
    """

    def __init__(self, config: Optional[CatalogConfig] = None):
        self.config = config or CatalogConfig()
        self._by_id: Dict[int, AuctionInfo] = {}
        self._by_key: Dict[Tuple[AuctionCategory, int, int], int] = {}
        self._build()
        self._check()

    def _register(self, category: AuctionCategory, type_: int, day: int) -> None:
        auction_id = len(self._by_id)
        info = AuctionInfo(auction_id, category, type_, day)
        self._by_id[auction_id] = info
        self._by_key[(category, type_, day)] = auction_id

    def _build(self) -> None:
        first = self.config.first_day
        days = self.config.days
        arrival_days = range(first, first + days)
        departure_days = range(first + 1, first + days + 1)

        for day in arrival_days:
            self._register(AuctionCategory.FLIGHT, INFLIGHT, day)
        for day in departure_days:
            self._register(AuctionCategory.FLIGHT, OUTFLIGHT, day)
        for hotel_type in (CHEAP_HOTEL, GOOD_HOTEL):
            for day in arrival_days:
                self._register(AuctionCategory.HOTEL, hotel_type, day)
        for e_type in range(1, self.config.entertainment_types + 1):
            for day in arrival_days:
                self._register(AuctionCategory.ENTERTAINMENT, e_type, day)

    def _check(self) -> None:
        for auction_id, info in self._by_id.items():
            back = self._by_key[(info.category, info.type, info.day)]
            if back != auction_id:
                raise UnknownAuctionError(
                    f"Catalog mapping is not invertible at auction {auction_id}"
                )
        logger.debug("Auction catalog built with %d auctions", len(self._by_id))

    # ------------------------------------------------------------------
    @property
    def auction_count(self) -> int:
        return len(self._by_id)

    @property
    def first_day(self) -> int:
        return self.config.first_day

    @property
    def last_day(self) -> int:
        """Last departure day."""
        return self.config.first_day + self.config.days

    def info(self, auction_id: int) -> AuctionInfo:
        try:
            return self._by_id[auction_id]
        except KeyError:
            raise UnknownAuctionError(f"Unknown auction id: {auction_id}") from None

    def category(self, auction_id: int) -> AuctionCategory:
        return self.info(auction_id).category

    def auction_for(self, category: AuctionCategory, type_: int, day: int) -> int:
        try:
            return self._by_key[(category, type_, day)]
        except KeyError:
            raise UnknownAuctionError(
                f"No auction for category={category.name} type={type_} day={day}"
            ) from None

    def ids(self, category: Optional[AuctionCategory] = None) -> List[int]:
        if category is None:
            return sorted(self._by_id)
        return sorted(a for a, info in self._by_id.items() if info.category == category)

    def entertainment_index(self, auction_id: int) -> int:
        """Zero-based entertainment type index (0..2) of an entertainment auction."""
        info = self.info(auction_id)
        if info.category != AuctionCategory.ENTERTAINMENT:
            raise UnknownAuctionError(f"Auction {auction_id} is not an entertainment auction")
        return info.type - 1

    def describe(self, auction_id: int) -> str:
        info = self.info(auction_id)
        return f"{info.category.name.lower()}[type={info.type},day={info.day}]#{auction_id}"
