"""
Tests for quote tape replay
"""

import unittest
from pathlib import Path

import pandas as pd

from tacbot.agent.travel_agent import TravelAgent
from tacbot.config import AgentConfig, FlightConfig
from tacbot.execution.gateway import SimulatedGateway
from tacbot.replay import load_quote_tape, normalize_tape, replay_game

from game_fixtures import CLIENT_RECORDS

SAMPLE_TAPE = Path(__file__).resolve().parent.parent / "data" / "sample_game" / "quotes.csv"


class TestReplay(unittest.TestCase):

    def setUp(self):
        self.gateway = SimulatedGateway(CLIENT_RECORDS)
        cfg = AgentConfig.default()
        cfg.flight = FlightConfig(hotel_gate=False)
        self.agent = TravelAgent(self.gateway, cfg)

    def test_missing_columns(self):
        with self.assertRaises(ValueError):
            normalize_tape(pd.DataFrame({"time_ms": [0], "auction": [1]}))

    def test_tape_sorted_by_time(self):
        df = normalize_tape(pd.DataFrame({
            "time_ms": [300, 100], "auction": [9, 8], "ask": [10, 20], "bid": [0, 0],
        }))
        self.assertEqual(df["auction"].tolist(), [8, 9])
        self.assertFalse(df["closed"].any())

    def test_replay_inline_tape(self):
        tape = pd.DataFrame({
            "time_ms": [10000, 20000, 500000],
            "auction": [9, 9, 7],
            "ask": [100, 120, 400],
            "bid": [50, 60, 0],
            "closed": [False, True, False],
            "own": [None, 3, None],
        })
        summary = replay_game(self.agent, self.gateway, tape)
        # opening hotel bids, one chase on auction 9, the final-phase flight
        self.assertEqual(summary["journal"]["bids"], 10)
        self.assertEqual(summary["state_closed"], 1)
        self.assertEqual(self.gateway.bids[-1].as_tuples(), [(3, 400.0)])
        self.assertFalse(self.agent.running)

    def test_sample_tape_loads(self):
        tape = load_quote_tape(SAMPLE_TAPE)
        self.assertIn("hqw", tape.columns)
        summary = replay_game(self.agent, self.gateway, tape)
        self.assertGreater(summary["journal"]["bids"], 8)


if __name__ == "__main__":
    unittest.main()
