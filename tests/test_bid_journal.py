"""
Tests for BidJournal
"""

import tempfile
import unittest
from pathlib import Path

import pandas as pd

from tacbot.journal.bid_journal import HEADERS, BidJournal


class TestBidJournal(unittest.TestCase):

    def setUp(self):
        self.journal = BidJournal()
        self.journal.append({"event": "bid", "auction_id": 9, "category": "hotel", "quantity": 2, "price": 220.0})
        self.journal.append({"event": "bid", "auction_id": 0, "category": "flight", "quantity": 3, "price": 300.0})
        self.journal.append({"event": "rejected", "auction_id": 9, "reason_code": 5})

    def test_frame_columns(self):
        df = self.journal.to_frame()
        self.assertEqual(list(df.columns), HEADERS)
        self.assertEqual(len(df), 3)

    def test_summary(self):
        summary = self.journal.summary()
        self.assertEqual(summary["bids"], 2)
        self.assertEqual(summary["by_category"], {"hotel": 1, "flight": 1})
        self.assertEqual(summary["outcomes"], {"rejected": 1})

    def test_empty_summary(self):
        self.assertEqual(BidJournal().summary(), {"bids": 0, "outcomes": {}})

    def test_flush_without_path(self):
        self.assertIsNone(self.journal.flush())

    def test_flush_writes_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = self.journal.flush(str(Path(tmp) / "reports" / "bids.csv"))
            self.assertIsNotNone(path)
            df = pd.read_csv(path)
            self.assertEqual(len(df), 3)
            self.assertEqual(df["auction_id"].tolist(), [9, 0, 9])


if __name__ == "__main__":
    unittest.main()
