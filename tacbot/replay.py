"""
Quote Tape Replay
-----------------
Drives a TravelAgent through a recorded game.

Tape format (CSV): time_ms, auction, ask, bid[, closed][, hqw][, own]
``own`` (optional) sets the holding of that auction before the quote is
delivered, standing in for the server's out-of-band holdings updates.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from tacbot.agent.events import GameStarted, GameStopped, QuoteUpdated
from tacbot.agent.travel_agent import TravelAgent
from tacbot.execution.gateway import SimulatedGateway
from tacbot.market.quote_tracker import Quote

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["time_ms", "auction", "ask", "bid"]


def load_quote_tape(path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(path)
    return normalize_tape(df)


def normalize_tape(df: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Quote tape is missing columns: {missing}")
    df = df.copy()
    if "closed" not in df.columns:
        df["closed"] = False
    if "hqw" not in df.columns:
        df["hqw"] = pd.NA
    if "own" not in df.columns:
        df["own"] = pd.NA
    df["closed"] = df["closed"].fillna(False).astype(bool)
    return df.sort_values("time_ms", kind="stable").reset_index(drop=True)


def replay_game(agent: TravelAgent, gateway: SimulatedGateway, tape: pd.DataFrame, game_id: int = 0) -> Dict[str, Any]:
    tape = normalize_tape(tape)
    gateway.game_time_ms = 0
    agent.dispatch(GameStarted(game_id=game_id))

    for row in tape.itertuples(index=False):
        gateway.game_time_ms = int(row.time_ms)
        auction = int(row.auction)
        if not pd.isna(row.own):
            gateway.set_own(auction, int(row.own))
        quote = Quote(
            auction_id=auction,
            ask_price=float(row.ask),
            bid_price=float(row.bid),
            closed=bool(row.closed),
            hqw=None if pd.isna(row.hqw) else int(row.hqw),
        )
        agent.dispatch(QuoteUpdated(quote))

    agent.dispatch(GameStopped())
    logger.info("Replayed %d quotes; %d bids submitted", len(tape), len(gateway.bids))
    return agent.last_summary
