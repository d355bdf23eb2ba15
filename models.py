from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional, Union


class League(str, Enum):
    NBA = "nba"
    NFL = "nfl"


class Direction(str, Enum):
    OVER = "over"
    UNDER = "under"


class BetType(str, Enum):
    PLAYER_PROP = "player_prop"
    TEAM_MONEYLINE = "team_moneyline"
    TEAM_SPREAD = "team_spread"
    TEAM_TOTAL = "team_total"


class FailureReason(str, Enum):
    EMPTY = "empty"
    NO_TARGET = "no_target"
    NO_STAT = "no_stat"
    NO_PLAYER = "no_player"
    NO_TEAM = "no_team"
    CROSS_LEAGUE = "cross_league"


class ProgressStatus(str, Enum):
    HITTING = "hitting"
    CLOSE = "close"
    NOT_HITTING = "not_hitting"
    PENDING = "pending"


@dataclass(frozen=True)
class Team:
    abbreviation: str
    name: str
    league: League


@dataclass(frozen=True)
class StatMatch:
    key: str
    league: League
    alias: str
    start: int
    end: int


# ═══════════════════════════════════════════════════════════════════════════════
#  Parsed bets
# ═══════════════════════════════════════════════════════════════════════════════


def _as_dict(bet: object) -> dict:
    out = {}
    for k, v in asdict(bet).items():
        out[k] = v.value if isinstance(v, Enum) else v
    return out


@dataclass(frozen=True)
class PlayerProp:
    league: League
    player_name: str
    stat_type: str
    target: float
    direction: Direction
    display_stat: str
    bet_type: BetType = field(default=BetType.PLAYER_PROP, init=False)

    def to_dict(self) -> dict:
        return _as_dict(self)


@dataclass(frozen=True)
class TeamMoneyline:
    league: League
    team_name: str
    team_abbrev: str
    bet_type: BetType = field(default=BetType.TEAM_MONEYLINE, init=False)

    def to_dict(self) -> dict:
        return _as_dict(self)


@dataclass(frozen=True)
class TeamSpread:
    league: League
    team_name: str
    team_abbrev: str
    spread: float
    bet_type: BetType = field(default=BetType.TEAM_SPREAD, init=False)

    def to_dict(self) -> dict:
        return _as_dict(self)


@dataclass(frozen=True)
class TeamTotal:
    league: League
    team1_name: str
    team1_abbrev: str
    team2_name: str
    team2_abbrev: str
    target: float
    direction: Direction
    bet_type: BetType = field(default=BetType.TEAM_TOTAL, init=False)

    def to_dict(self) -> dict:
        return _as_dict(self)


ParsedBet = Union[PlayerProp, TeamMoneyline, TeamSpread, TeamTotal]

_BET_CLASSES: dict[BetType, type] = {
    BetType.PLAYER_PROP: PlayerProp,
    BetType.TEAM_MONEYLINE: TeamMoneyline,
    BetType.TEAM_SPREAD: TeamSpread,
    BetType.TEAM_TOTAL: TeamTotal,
}


def _coerce(enum_cls: type, value: object) -> Enum:
    if isinstance(value, enum_cls):
        return value
    return enum_cls(str(value).strip().lower())


def bet_from_dict(data: dict) -> ParsedBet:
    """Rebuild a bet from its ``to_dict`` form. Raises ValueError on bad input."""
    try:
        bet_type = BetType(data.get("bet_type"))
    except ValueError as exc:
        raise ValueError(f"Unknown bet_type '{data.get('bet_type')}'") from exc

    payload = {k: v for k, v in data.items() if k != "bet_type"}
    try:
        payload["league"] = _coerce(League, payload["league"])
        if "direction" in payload:
            payload["direction"] = _coerce(Direction, payload["direction"])
        for num in ("target", "spread"):
            if num in payload:
                payload[num] = float(payload[num])
        return _BET_CLASSES[bet_type](**payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid {bet_type.value} payload: {exc}") from exc


@dataclass(frozen=True)
class FragmentResult:
    text: str
    bet: Optional[ParsedBet] = None
    reason: Optional[FailureReason] = None

    @property
    def parsed(self) -> bool:
        return self.bet is not None

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "parsed": self.parsed,
            "reason": self.reason.value if self.reason else None,
            "bet": self.bet.to_dict() if self.bet else None,
        }


# ═══════════════════════════════════════════════════════════════════════════════
#  Live tracking
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class LiveResult:
    found: bool = True
    no_game: bool = False
    not_started: bool = False
    is_live: bool = False
    is_final: bool = False
    game_status: Optional[str] = None
    game_info: Optional[str] = None
    manual: bool = False
    # player prop
    current: Optional[float] = None
    # moneyline / spread
    team_score: Optional[int] = None
    opponent_score: Optional[int] = None
    opponent_name: Optional[str] = None
    # total
    team1_score: Optional[int] = None
    team2_score: Optional[int] = None


@dataclass
class BetProgress:
    bet: ParsedBet
    status: ProgressStatus
    status_text: str
    progress: Optional[float] = None
    current: Optional[float] = None
    margin: Optional[float] = None
    covering: Optional[bool] = None
    current_total: Optional[float] = None
    winning: Optional[bool] = None
    tied: Optional[bool] = None
    game_status: Optional[str] = None
    game_info: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "bet": self.bet.to_dict(),
            "status": self.status.value,
            "status_text": self.status_text,
            "progress": self.progress,
            "current": self.current,
            "margin": self.margin,
            "covering": self.covering,
            "current_total": self.current_total,
            "winning": self.winning,
            "tied": self.tied,
            "game_status": self.game_status,
            "game_info": self.game_info,
        }
