"""
Tests for AuctionCatalog
"""

import unittest

from tacbot.errors import UnknownAuctionError
from tacbot.market.auction_catalog import (
    AuctionCatalog,
    AuctionCategory,
    AMUSEMENT,
    CHEAP_HOTEL,
    GOOD_HOTEL,
    INFLIGHT,
    MUSEUM,
    OUTFLIGHT,
)


class TestAuctionCatalog(unittest.TestCase):
    """Test cases for the auction id layout."""

    def setUp(self):
        self.catalog = AuctionCatalog()

    def test_auction_count(self):
        self.assertEqual(self.catalog.auction_count, 28)
        self.assertEqual(len(self.catalog.ids(AuctionCategory.FLIGHT)), 8)
        self.assertEqual(len(self.catalog.ids(AuctionCategory.HOTEL)), 8)
        self.assertEqual(len(self.catalog.ids(AuctionCategory.ENTERTAINMENT)), 12)

    def test_flight_ids(self):
        self.assertEqual(self.catalog.auction_for(AuctionCategory.FLIGHT, INFLIGHT, 1), 0)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.FLIGHT, INFLIGHT, 4), 3)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.FLIGHT, OUTFLIGHT, 2), 4)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.FLIGHT, OUTFLIGHT, 5), 7)

    def test_hotel_ids(self):
        self.assertEqual(self.catalog.auction_for(AuctionCategory.HOTEL, CHEAP_HOTEL, 1), 8)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.HOTEL, CHEAP_HOTEL, 4), 11)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.HOTEL, GOOD_HOTEL, 1), 12)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.HOTEL, GOOD_HOTEL, 4), 15)

    def test_entertainment_ids(self):
        self.assertEqual(self.catalog.auction_for(AuctionCategory.ENTERTAINMENT, 1, 1), 16)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.ENTERTAINMENT, AMUSEMENT, 1), 20)
        self.assertEqual(self.catalog.auction_for(AuctionCategory.ENTERTAINMENT, MUSEUM, 4), 27)

    def test_entertainment_index(self):
        self.assertEqual(self.catalog.entertainment_index(16), 0)
        self.assertEqual(self.catalog.entertainment_index(19), 0)
        self.assertEqual(self.catalog.entertainment_index(20), 1)
        self.assertEqual(self.catalog.entertainment_index(27), 2)
        with self.assertRaises(UnknownAuctionError):
            self.catalog.entertainment_index(8)

    def test_round_trip_every_id(self):
        for auction_id in self.catalog.ids():
            info = self.catalog.info(auction_id)
            self.assertEqual(
                self.catalog.auction_for(info.category, info.type, info.day),
                auction_id,
            )

    def test_unknown_ids(self):
        with self.assertRaises(UnknownAuctionError):
            self.catalog.info(28)
        with self.assertRaises(UnknownAuctionError):
            self.catalog.info(-1)
        with self.assertRaises(UnknownAuctionError):
            # no outbound flight on day 1
            self.catalog.auction_for(AuctionCategory.FLIGHT, OUTFLIGHT, 1)


if __name__ == "__main__":
    unittest.main()
