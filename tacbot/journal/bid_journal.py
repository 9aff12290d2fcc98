import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

logger = logging.getLogger(__name__)

HEADERS = [
    "ts", "game_time_ms", "event", "auction_id", "category", "bid_id",
    "quantity", "price", "reason", "reason_code",
]


class BidJournal:
    """In-memory journal of submitted bids and their outcomes for one game."""

    def __init__(self, csv_path: Optional[str] = None):
        self.csv_path = Path(csv_path) if csv_path else None
        self.rows: List[Dict[str, Any]] = []

    def append(self, row: Dict[str, Any]) -> None:
        entry = {h: None for h in HEADERS}
        entry.update(row)
        entry["ts"] = datetime.now(timezone.utc).isoformat()
        self.rows.append(entry)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows, columns=HEADERS)

    def summary(self) -> Dict[str, Any]:
        df = self.to_frame()
        if df.empty:
            return {"bids": 0, "outcomes": {}}
        bids = df[df["event"] == "bid"]
        outcomes = df[df["event"] != "bid"]["event"].value_counts().to_dict()
        return {
            "bids": int(len(bids)),
            "by_category": bids["category"].value_counts().to_dict(),
            "outcomes": {str(k): int(v) for k, v in outcomes.items()},
        }

    def flush(self, path: Optional[str] = None) -> Optional[Path]:
        """Write the journal as CSV. Returns the path written, if any."""
        target = Path(path) if path else self.csv_path
        if target is None:
            return None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self.to_frame().to_csv(target, index=False)
        except OSError as e:
            logger.error("Bid journal write failed: %s", e)
            return None
        logger.info("Bid journal written to %s (%d rows)", target, len(self.rows))
        return target

    def clear(self) -> None:
        self.rows.clear()
