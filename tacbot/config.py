"""
Agent Configuration
-------------------
Dataclass view of configs/agent.yaml.

Phase tables, price increments and ceilings live here so that tuning a
policy never needs a code change.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from tacbot.errors import ConfigError
from tacbot.utils.config_validator import ConfigValidator
from tacbot.utils.env_loader import CONFIG_ENV_VAR

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "agent.yaml"
MINUTE_MS = 60 * 1000


@dataclass
class GameConfig:
    length_ms: int = 9 * MINUTE_MS
    clients: int = 8


@dataclass
class CatalogConfig:
    first_day: int = 1
    days: int = 4            # hotel nights / entertainment days per type
    entertainment_types: int = 3


@dataclass
class FlightPhase:
    start_ms: int
    ceiling_fraction: float  # fraction of the running max flight ask


def _default_phases() -> List[FlightPhase]:
    return [
        FlightPhase(start_ms=0, ceiling_fraction=0.80),
        FlightPhase(start_ms=2 * MINUTE_MS, ceiling_fraction=0.90),
        FlightPhase(start_ms=6 * MINUTE_MS, ceiling_fraction=1.00),
    ]


@dataclass
class FlightConfig:
    phases: List[FlightPhase] = field(default_factory=_default_phases)
    final_phase_ms: int = 8 * MINUTE_MS
    hotel_gate: bool = True


@dataclass
class HotelConfig:
    increment: float = 70.0
    ratio_multiplier: float = 100.0
    opening_price: float = 200.0
    ceiling_over_best_value: float = 700.0
    price_ceiling: Optional[float] = None  # absolute override


@dataclass
class EntertainmentConfig:
    sell_start_multiplier: float = 1.0
    sell_floor_fraction: float = 1.0
    sell_decay_ms: Optional[int] = None    # defaults to the game length
    buy_enabled: bool = True


@dataclass
class JournalConfig:
    csv_path: Optional[str] = None


@dataclass
class LoggingConfig:
    level: str = "INFO"
    structured_log_file: Optional[str] = None


@dataclass
class AgentConfig:
    game: GameConfig = field(default_factory=GameConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    flight: FlightConfig = field(default_factory=FlightConfig)
    hotel: HotelConfig = field(default_factory=HotelConfig)
    entertainment: EntertainmentConfig = field(default_factory=EntertainmentConfig)
    journal: JournalConfig = field(default_factory=JournalConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def default() -> "AgentConfig":
        cfg = AgentConfig()
        cfg.validate()
        return cfg

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "AgentConfig":
        d = d or {}
        flight = dict(d.get("flight") or {})
        if "phases" in flight:
            flight["phases"] = [FlightPhase(**p) for p in flight["phases"] or []]
        try:
            cfg = AgentConfig(
                game=GameConfig(**(d.get("game") or {})),
                catalog=CatalogConfig(**(d.get("catalog") or {})),
                flight=FlightConfig(**flight),
                hotel=HotelConfig(**(d.get("hotel") or {})),
                entertainment=EntertainmentConfig(**(d.get("entertainment") or {})),
                journal=JournalConfig(**(d.get("journal") or {})),
                logging=LoggingConfig(**(d.get("logging") or {})),
            )
        except TypeError as e:
            raise ConfigError(f"Unknown configuration key: {e}") from e
        cfg.validate()
        return cfg

    @staticmethod
    def load(path: str | Path | None = None) -> "AgentConfig":
        """
        Load configuration from YAML.

        Resolution order: explicit path, $TACBOT_CONFIG, configs/agent.yaml.
        """
        if path is None:
            path = os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        d = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        logger.info("Loaded agent config from %s", path)
        return AgentConfig.from_dict(d)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        validator = ConfigValidator()
        validator.add_rule(
            "game.length_ms",
            validator=lambda x: x > 0,
            error_message="game.length_ms must be positive",
        )
        validator.add_rule(
            "game.clients",
            validator=lambda x: x > 0,
            error_message="game.clients must be positive",
        )
        validator.add_rule(
            "catalog.days",
            validator=lambda x: x > 0,
            error_message="catalog.days must be positive",
        )
        validator.add_rule(
            "flight.phases",
            validator=_phases_ordered,
            error_message="flight.phases must be non-empty, start at 0 and rise in both start_ms and ceiling_fraction",
        )
        validator.add_rule(
            "flight.final_phase_ms",
            validator=lambda x: 0 <= x <= self.game.length_ms,
            error_message="flight.final_phase_ms must lie within the game",
        )
        validator.add_rule(
            "hotel.price_ceiling",
            required=False,
            validator=lambda x: x > 0,
            error_message="hotel.price_ceiling must be positive",
        )
        validator.add_rule(
            "entertainment.sell_floor_fraction",
            validator=lambda x: x >= 0,
            error_message="entertainment.sell_floor_fraction must be >= 0",
        )
        validator.add_rule(
            "entertainment.sell_decay_ms",
            required=False,
            validator=lambda x: x > 0,
            error_message="entertainment.sell_decay_ms must be positive",
        )

        flat = {
            "game.length_ms": self.game.length_ms,
            "game.clients": self.game.clients,
            "catalog.days": self.catalog.days,
            "flight.phases": self.flight.phases,
            "flight.final_phase_ms": self.flight.final_phase_ms,
            "hotel.price_ceiling": self.hotel.price_ceiling,
            "entertainment.sell_floor_fraction": self.entertainment.sell_floor_fraction,
            "entertainment.sell_decay_ms": self.entertainment.sell_decay_ms,
        }
        is_valid, errors = validator.validate(flat)
        if not is_valid:
            raise ConfigError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


def _phases_ordered(phases: List[FlightPhase]) -> bool:
    if not phases or phases[0].start_ms != 0:
        return False
    for prev, cur in zip(phases, phases[1:]):
        if cur.start_ms <= prev.start_ms or cur.ceiling_fraction < prev.ceiling_fraction:
            return False
    return True
