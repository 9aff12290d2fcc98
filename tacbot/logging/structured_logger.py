"""
Structured Logger
----------------
JSON event lines for bids, bid outcomes, planning and errors.
"""

from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


class StructuredLogger:
    """
    Logs events in JSON format with consistent structure:
    {
        "timestamp": "ISO8601",
        "level": "INFO|WARNING|ERROR",
        "event_type": "bid|outcome|plan|error|system",
        "message": "Human readable message",
        "context": {...}
    }
    """

    def __init__(
        self,
        name: str = "tacbot.events",
        log_file: Optional[Path] = None,
        console: bool = False,
    ):
        self.name = name
        self.logger = logging.getLogger(name)
        self.log_file = Path(log_file) if log_file else None

        if self.log_file and not self._has_handler(logging.FileHandler):
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
            file_handler.setLevel(logging.DEBUG)
            self.logger.addHandler(file_handler)

        if console and not self._has_handler(logging.StreamHandler):
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            self.logger.addHandler(console_handler)

    def _has_handler(self, kind: type) -> bool:
        return any(type(h) is kind for h in self.logger.handlers)

    def _log_structured(
        self,
        level: str,
        event_type: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None,
    ) -> None:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level.upper(),
            "event_type": event_type,
            "message": message,
            "context": context or {},
        }
        if exc_info is not None:
            entry["exception"] = {
                "type": type(exc_info).__name__,
                "message": str(exc_info),
                "traceback": "".join(
                    traceback.format_exception(type(exc_info), exc_info, exc_info.__traceback__)
                ),
            }
        log_method = getattr(self.logger, level.lower(), self.logger.info)
        log_method(json.dumps(entry, default=str))

    def log_bid(
        self,
        message: str,
        auction_id: int,
        points: List[Tuple[int, float]],
        bid_id: Optional[int] = None,
        game_time_ms: Optional[int] = None,
        **kwargs,
    ) -> None:
        context = {
            "auction_id": auction_id,
            "points": [[int(q), float(p)] for q, p in points],
            "bid_id": bid_id,
            "game_time_ms": game_time_ms,
            **kwargs,
        }
        self._log_structured("INFO", "bid", message, context)

    def log_outcome(
        self,
        message: str,
        auction_id: int,
        kind: str,
        bid_id: Optional[int] = None,
        reason_code: Optional[int] = None,
        **kwargs,
    ) -> None:
        level = "DEBUG" if kind == "updated" else "WARNING"
        context = {
            "auction_id": auction_id,
            "kind": kind,
            "bid_id": bid_id,
            "reason_code": reason_code,
            **kwargs,
        }
        self._log_structured(level, "outcome", message, context)

    def log_plan(self, message: str, **kwargs) -> None:
        self._log_structured("INFO", "plan", message, kwargs)

    def log_error(self, message: str, error: Optional[BaseException] = None, **kwargs) -> None:
        self._log_structured("ERROR", "error", message, kwargs.copy(), exc_info=error)

    def log_system(self, message: str, component: Optional[str] = None, **kwargs) -> None:
        context = {"component": component, **kwargs}
        self._log_structured("INFO", "system", message, context)
