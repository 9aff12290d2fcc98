"""
Client Preferences
------------------
The eight clients' trip preferences, loaded once at game start.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from tacbot.errors import PreferenceError

logger = logging.getLogger(__name__)

# Attribute codes understood by AgentGateway.get_client_preference
ARRIVAL = 0
DEPARTURE = 1
HOTEL_VALUE = 2
E1 = 3
E2 = 4
E3 = 5


@dataclass(frozen=True)
class ClientPreference:
    client: int
    arrival_day: int
    departure_day: int
    hotel_value: int
    entertainment_scores: Tuple[int, int, int]

    def stay_days(self) -> range:
        """Nights that need a hotel room: [arrival, departure)."""
        return range(self.arrival_day, self.departure_day)

    def top_entertainment_type(self) -> Optional[int]:
        """
        Strictly highest-scoring entertainment type (1..3).

        Returns None when the top score is shared by two or more types.
        """
        scores = self.entertainment_scores
        best = max(scores)
        if scores.count(best) > 1:
            return None
        return scores.index(best) + 1


class PreferenceSet:
    """Ordered, validated collection of client preferences."""

    def __init__(self, clients: Sequence[ClientPreference], first_day: int = 1, last_day: int = 5):
        self.first_day = first_day
        self.last_day = last_day
        self._clients: List[ClientPreference] = list(clients)
        self._validate()

    def _validate(self) -> None:
        if not self._clients:
            raise PreferenceError("Preference set is empty")
        for c in self._clients:
            if not (self.first_day <= c.arrival_day < c.departure_day <= self.last_day):
                raise PreferenceError(
                    f"Client {c.client}: invalid stay {c.arrival_day}->{c.departure_day} "
                    f"(days must satisfy {self.first_day} <= arrival < departure <= {self.last_day})"
                )
            if len(c.entertainment_scores) != 3:
                raise PreferenceError(f"Client {c.client}: expected three entertainment scores")

    @classmethod
    def from_records(cls, records: Sequence[Dict[str, Any]], first_day: int = 1, last_day: int = 5) -> "PreferenceSet":
        """
        Build from dicts with keys: arrival, departure, hotel_value, e1, e2, e3.
        """
        clients = []
        for i, r in enumerate(records):
            try:
                clients.append(
                    ClientPreference(
                        client=int(r.get("client", i)),
                        arrival_day=int(r["arrival"]),
                        departure_day=int(r["departure"]),
                        hotel_value=int(r["hotel_value"]),
                        entertainment_scores=(int(r["e1"]), int(r["e2"]), int(r["e3"])),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise PreferenceError(f"Client record {i} is malformed: {e}") from e
        return cls(clients, first_day=first_day, last_day=last_day)

    @classmethod
    def from_gateway(cls, gateway: Any, clients: int = 8, first_day: int = 1, last_day: int = 5) -> "PreferenceSet":
        """Read every client attribute through gateway.get_client_preference."""
        out = []
        for i in range(clients):
            pref = gateway.get_client_preference
            out.append(
                ClientPreference(
                    client=i,
                    arrival_day=pref(i, ARRIVAL),
                    departure_day=pref(i, DEPARTURE),
                    hotel_value=pref(i, HOTEL_VALUE),
                    entertainment_scores=(pref(i, E1), pref(i, E2), pref(i, E3)),
                )
            )
        return cls(out, first_day=first_day, last_day=last_day)

    def __iter__(self) -> Iterator[ClientPreference]:
        return iter(self._clients)

    def __len__(self) -> int:
        return len(self._clients)

    def __getitem__(self, idx: int) -> ClientPreference:
        return self._clients[idx]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    def hotel_threshold(self) -> int:
        """Integer-truncated average hotel value."""
        total = sum(c.hotel_value for c in self._clients)
        return int(total / len(self._clients))

    def entertainment_scores(self, type_index: int) -> List[int]:
        return [c.entertainment_scores[type_index] for c in self._clients]

    def best_hotel_value(self) -> int:
        return max(c.hotel_value for c in self._clients)
