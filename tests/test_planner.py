"""
Tests for AllocationPlanner
"""

import unittest

from tacbot.allocation.planner import AllocationPlanner, TargetHoldings
from tacbot.allocation.preferences import PreferenceSet
from tacbot.execution.gateway import SimulatedGateway
from tacbot.market.auction_catalog import AuctionCatalog, AuctionCategory, GOOD_HOTEL

from game_fixtures import CLIENT_RECORDS, EXPECTED_TARGETS, preference_set


class TestAllocationPlanner(unittest.TestCase):
    """Test cases for target holdings."""

    def setUp(self):
        self.catalog = AuctionCatalog()
        self.planner = AllocationPlanner(self.catalog)
        self.prefs = preference_set()

    def test_targets_for_sample_clients(self):
        plan = self.planner.plan(self.prefs)
        self.assertEqual(plan.targets.as_dict(), EXPECTED_TARGETS)
        self.assertEqual(plan.hotel_threshold, 97)

    def test_hotel_nights_cover_stay_exactly(self):
        plan = self.planner.plan(self.prefs)
        for pkg in plan.packages:
            days = [self.catalog.info(a).day for a in pkg.hotel_auctions]
            self.assertEqual(days, list(range(pkg.arrival_day, pkg.departure_day)))
            tiers = {self.catalog.info(a).type for a in pkg.hotel_auctions}
            self.assertEqual(tiers, {pkg.hotel_type})

    def test_targets_non_negative(self):
        plan = self.planner.plan(self.prefs)
        for _, qty in plan.targets.items():
            self.assertGreaterEqual(qty, 0)

    def test_idempotent(self):
        owned = {17: 1}
        first = self.planner.plan(self.prefs, owned)
        second = self.planner.plan(self.prefs, owned)
        self.assertEqual(first.targets, second.targets)

    def test_good_hotel_scenario(self):
        # Client 0: days 1 -> 3, value 120 above the average
        plan = self.planner.plan(self.prefs)
        pkg = plan.packages[0]
        self.assertEqual(pkg.hotel_type, GOOD_HOTEL)
        self.assertEqual(pkg.hotel_auctions, [12, 13])
        self.assertEqual(pkg.inflight_auction, 0)
        self.assertEqual(pkg.outflight_auction, 5)

    def test_value_equal_to_threshold_picks_good(self):
        records = [dict(r, hotel_value=100) for r in CLIENT_RECORDS]
        plan = self.planner.plan(PreferenceSet.from_records(records))
        self.assertTrue(all(p.hotel_type == GOOD_HOTEL for p in plan.packages))

    def test_tied_entertainment_gets_no_target(self):
        plan = self.planner.plan(self.prefs)
        self.assertIsNone(plan.packages[2].entertainment_auction)
        self.assertIn(2, plan.summary()["untargeted_clients"])

    def test_one_entertainment_per_client(self):
        plan = self.planner.plan(self.prefs)
        ent = self.catalog.ids(AuctionCategory.ENTERTAINMENT)
        total = sum(plan.targets.get(a) for a in ent)
        targeted = sum(1 for p in plan.packages if p.entertainment_auction is not None)
        self.assertEqual(total, targeted)

    def test_owned_surplus_reused_before_arrival_day(self):
        # One alligator-wrestling ticket already owned on day 2
        plan = self.planner.plan(self.prefs, {17: 1})
        self.assertEqual(plan.packages[0].entertainment_auction, 17)
        # The surplus is used up, so client 6 falls back to its arrival day
        self.assertEqual(plan.packages[6].entertainment_auction, 16)
        self.assertEqual(plan.targets.get(17), 1)
        self.assertEqual(plan.targets.get(16), 1)

    def test_entertainment_stats(self):
        plan = self.planner.plan(self.prefs)
        st = plan.entertainment[1]
        self.assertEqual(st.min_value, 5)
        self.assertEqual(st.max_value, 170)
        self.assertEqual(st.total, 600)
        self.assertAlmostEqual(st.average, 75.0)

    def test_publish_sets_gateway_allocations(self):
        gateway = SimulatedGateway(CLIENT_RECORDS)
        plan = self.planner.plan(self.prefs)
        self.planner.publish(plan, gateway)
        self.assertEqual(gateway.allocations, EXPECTED_TARGETS)


class TestTargetHoldings(unittest.TestCase):

    def test_add_accumulates(self):
        t = TargetHoldings()
        t.add(3)
        t.add(3, 2)
        self.assertEqual(t.get(3), 3)
        self.assertEqual(t.get(4), 0)

    def test_negative_increment_rejected(self):
        with self.assertRaises(ValueError):
            TargetHoldings().add(1, -1)


if __name__ == "__main__":
    unittest.main()
