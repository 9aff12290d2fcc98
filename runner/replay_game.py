# runner/replay_game.py
# Replay a recorded quote tape against a simulated server.

import json
import logging
import sys
from pathlib import Path

import yaml

from tacbot.agent.travel_agent import TravelAgent
from tacbot.config import AgentConfig
from tacbot.execution.gateway import SimulatedGateway
from tacbot.replay import load_quote_tape, replay_game
from tacbot.utils.env_loader import resolve_config_path

log = logging.getLogger("ReplayGame")


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Replay a TAC quote tape")
    parser.add_argument("--preferences", default="data/sample_game/preferences.yaml")
    parser.add_argument("--tape", default="data/sample_game/quotes.csv")
    parser.add_argument("--config", default=None, help="Agent config YAML (default: $TACBOT_CONFIG or configs/agent.yaml)")
    parser.add_argument("--journal", default=None, help="Write the bid journal CSV here")
    args = parser.parse_args(argv)

    cfg = AgentConfig.load(resolve_config_path(args.config))
    if args.journal:
        cfg.journal.csv_path = args.journal
    logging.basicConfig(
        level=getattr(logging, cfg.logging.level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    prefs = yaml.safe_load(Path(args.preferences).read_text(encoding="utf-8"))
    gateway = SimulatedGateway(prefs["clients"])
    for auction, qty in (prefs.get("owned") or {}).items():
        gateway.set_own(int(auction), int(qty))

    agent = TravelAgent(gateway, cfg)
    summary = replay_game(agent, gateway, load_quote_tape(args.tape))
    print(json.dumps(summary, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
