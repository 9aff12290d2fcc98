"""
Tests for AgentConfig loading and validation
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import yaml

from tacbot.config import DEFAULT_CONFIG_PATH, AgentConfig, FlightPhase
from tacbot.errors import ConfigError
from tacbot.utils.env_loader import resolve_config_path


class TestAgentConfig(unittest.TestCase):

    def test_default_is_valid(self):
        cfg = AgentConfig.default()
        self.assertEqual(cfg.game.length_ms, 540000)
        self.assertEqual(cfg.flight.final_phase_ms, 480000)
        self.assertEqual(cfg.hotel.increment, 70.0)

    def test_packaged_yaml_matches_defaults(self):
        cfg = AgentConfig.load(DEFAULT_CONFIG_PATH)
        self.assertEqual(cfg.flight.phases, AgentConfig.default().flight.phases)
        self.assertEqual(cfg.hotel.ratio_multiplier, 100)
        self.assertIsNone(cfg.hotel.price_ceiling)

    def test_phases_must_rise(self):
        d = {"flight": {"phases": [
            {"start_ms": 0, "ceiling_fraction": 0.9},
            {"start_ms": 60000, "ceiling_fraction": 0.5},
        ]}}
        with self.assertRaises(ConfigError):
            AgentConfig.from_dict(d)

    def test_phases_must_start_at_zero(self):
        with self.assertRaises(ConfigError):
            AgentConfig.from_dict({"flight": {"phases": [{"start_ms": 1000, "ceiling_fraction": 0.9}]}})

    def test_unknown_key_rejected(self):
        with self.assertRaises(ConfigError):
            AgentConfig.from_dict({"hotel": {"bogus": 1}})

    def test_final_phase_within_game(self):
        with self.assertRaises(ConfigError):
            AgentConfig.from_dict({"flight": {"final_phase_ms": 600000}})

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            AgentConfig.load("/nonexistent/agent.yaml")

    def test_env_var_selects_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "agent.yaml"
            path.write_text(yaml.safe_dump({"hotel": {"increment": 90}}))
            with mock.patch.dict(os.environ, {"TACBOT_CONFIG": str(path)}):
                cfg = AgentConfig.load()
                self.assertEqual(resolve_config_path(), path)
        self.assertEqual(cfg.hotel.increment, 90)
        self.assertEqual(cfg.flight.phases[0], FlightPhase(0, 0.80))

    def test_explicit_path_wins(self):
        self.assertEqual(resolve_config_path("x.yaml"), Path("x.yaml"))


if __name__ == "__main__":
    unittest.main()
