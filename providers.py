from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Protocol

from models import LiveResult, ParsedBet


class LiveStatsProvider(Protocol):
    """Anything that can report live values for a parsed bet."""

    def get_stats(self, bet: ParsedBet) -> LiveResult:
        ...


class ManualStatsProvider:
    """
    Provider backed by values the user types in.

    Every bet is reported as found with nothing accumulated until ``update``
    records something for it. Bets are keyed by value, so two identical bets
    share their numbers.
    """

    def __init__(self) -> None:
        self._values: Dict[ParsedBet, LiveResult] = {}

    def get_stats(self, bet: ParsedBet) -> LiveResult:
        stored = self._values.get(bet)
        if stored is not None:
            return replace(stored)
        return LiveResult(found=True, manual=True, current=0)

    def update(self, bet: ParsedBet, **fields: Any) -> LiveResult:
        current = self._values.get(bet) or LiveResult(found=True, manual=True, current=0)
        unknown = set(fields) - set(LiveResult.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown live fields: {', '.join(sorted(unknown))}")
        updated = replace(current, **{**fields, "manual": True})
        self._values[bet] = updated
        return replace(updated)

    def forget(self, bet: ParsedBet) -> None:
        self._values.pop(bet, None)
