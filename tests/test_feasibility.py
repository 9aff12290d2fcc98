"""
Tests for FlightFeasibility
"""

import unittest

from tacbot.allocation.feasibility import FlightFeasibility
from tacbot.allocation.planner import AllocationPlanner
from tacbot.market.auction_catalog import AuctionCatalog

from game_fixtures import preference_set


class TestFlightFeasibility(unittest.TestCase):

    def setUp(self):
        self.catalog = AuctionCatalog()
        self.plan = AllocationPlanner(self.catalog).plan(preference_set())
        self.feasibility = FlightFeasibility(self.catalog)

    def test_no_hotels_supports_nothing(self):
        bounds = self.feasibility.bounds(self.plan.packages, {})
        self.assertTrue(all(v == 0 for v in bounds.values()))
        self.assertEqual(set(bounds), set(range(8)))

    def test_rooms_pooled_across_tiers(self):
        pool = self.feasibility.rooms_per_night({8: 1, 12: 1, 13: 1})
        self.assertEqual(pool[1], 2)
        self.assertEqual(pool[2], 1)
        self.assertEqual(pool[3], 0)

    def test_bounds_follow_client_order(self):
        # Nights 1 and 2 covered for client 0, the remaining night 1 room
        # goes to client 2 (one-night stay).
        bounds = self.feasibility.bounds(self.plan.packages, {8: 1, 12: 1, 13: 1})
        self.assertEqual(bounds[0], 2)   # inbound day 1: clients 0 and 2
        self.assertEqual(bounds[5], 1)   # outbound day 3: client 0
        self.assertEqual(bounds[4], 1)   # outbound day 2: client 2
        self.assertEqual(bounds[1], 0)
        self.assertEqual(bounds[7], 0)

    def test_full_coverage_supports_every_client(self):
        owned = {a: q for a, q in self.plan.targets.items() if 8 <= a <= 15}
        bounds = self.feasibility.bounds(self.plan.packages, owned)
        for auction_id in range(8):
            self.assertEqual(bounds[auction_id], self.plan.target(auction_id))


if __name__ == "__main__":
    unittest.main()
