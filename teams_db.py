"""
Local teams database: maps team names / nicknames to team identity + league.
Exact key lookup only: team names are short and ambiguous, so no partial match.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional

from models import League, Team


# ═══════════════════════════════════════════════════════════════════════════════
#  Embedded team data
# ═══════════════════════════════════════════════════════════════════════════════

_EMBEDDED_TEAMS: list[dict] = [
    # ── NBA ──────────────────────────────────────────────
    {"code": "ATL", "city": "Atlanta", "nickname": "Hawks", "league": League.NBA},
    {"code": "BOS", "city": "Boston", "nickname": "Celtics", "league": League.NBA},
    {"code": "BKN", "city": "Brooklyn", "nickname": "Nets", "league": League.NBA},
    {"code": "CHA", "city": "Charlotte", "nickname": "Hornets", "league": League.NBA},
    {"code": "CHI", "city": "Chicago", "nickname": "Bulls", "league": League.NBA},
    {"code": "CLE", "city": "Cleveland", "nickname": "Cavaliers", "league": League.NBA},
    {"code": "DAL", "city": "Dallas", "nickname": "Mavericks", "league": League.NBA},
    {"code": "DEN", "city": "Denver", "nickname": "Nuggets", "league": League.NBA},
    {"code": "DET", "city": "Detroit", "nickname": "Pistons", "league": League.NBA},
    {"code": "GSW", "city": "Golden State", "nickname": "Warriors", "league": League.NBA},
    {"code": "HOU", "city": "Houston", "nickname": "Rockets", "league": League.NBA},
    {"code": "IND", "city": "Indiana", "nickname": "Pacers", "league": League.NBA},
    {"code": "LAC", "city": "Los Angeles", "nickname": "Clippers", "league": League.NBA},
    {"code": "LAL", "city": "Los Angeles", "nickname": "Lakers", "league": League.NBA},
    {"code": "MEM", "city": "Memphis", "nickname": "Grizzlies", "league": League.NBA},
    {"code": "MIA", "city": "Miami", "nickname": "Heat", "league": League.NBA},
    {"code": "MIL", "city": "Milwaukee", "nickname": "Bucks", "league": League.NBA},
    {"code": "MIN", "city": "Minnesota", "nickname": "Timberwolves", "league": League.NBA},
    {"code": "NOP", "city": "New Orleans", "nickname": "Pelicans", "league": League.NBA},
    {"code": "NYK", "city": "New York", "nickname": "Knicks", "league": League.NBA},
    {"code": "OKC", "city": "Oklahoma City", "nickname": "Thunder", "league": League.NBA},
    {"code": "ORL", "city": "Orlando", "nickname": "Magic", "league": League.NBA},
    {"code": "PHI", "city": "Philadelphia", "nickname": "76ers", "league": League.NBA},
    {"code": "PHX", "city": "Phoenix", "nickname": "Suns", "league": League.NBA},
    {"code": "POR", "city": "Portland", "nickname": "Trail Blazers", "league": League.NBA},
    {"code": "SAC", "city": "Sacramento", "nickname": "Kings", "league": League.NBA},
    {"code": "SAS", "city": "San Antonio", "nickname": "Spurs", "league": League.NBA},
    {"code": "TOR", "city": "Toronto", "nickname": "Raptors", "league": League.NBA},
    {"code": "UTA", "city": "Utah", "nickname": "Jazz", "league": League.NBA},
    {"code": "WAS", "city": "Washington", "nickname": "Wizards", "league": League.NBA},

    # ── NFL ──────────────────────────────────────────────
    {"code": "ARI", "city": "Arizona", "nickname": "Cardinals", "league": League.NFL},
    {"code": "ATL", "city": "Atlanta", "nickname": "Falcons", "league": League.NFL},
    {"code": "BAL", "city": "Baltimore", "nickname": "Ravens", "league": League.NFL},
    {"code": "BUF", "city": "Buffalo", "nickname": "Bills", "league": League.NFL},
    {"code": "CAR", "city": "Carolina", "nickname": "Panthers", "league": League.NFL},
    {"code": "CHI", "city": "Chicago", "nickname": "Bears", "league": League.NFL},
    {"code": "CIN", "city": "Cincinnati", "nickname": "Bengals", "league": League.NFL},
    {"code": "CLE", "city": "Cleveland", "nickname": "Browns", "league": League.NFL},
    {"code": "DAL", "city": "Dallas", "nickname": "Cowboys", "league": League.NFL},
    {"code": "DEN", "city": "Denver", "nickname": "Broncos", "league": League.NFL},
    {"code": "DET", "city": "Detroit", "nickname": "Lions", "league": League.NFL},
    {"code": "GB", "city": "Green Bay", "nickname": "Packers", "league": League.NFL},
    {"code": "HOU", "city": "Houston", "nickname": "Texans", "league": League.NFL},
    {"code": "IND", "city": "Indianapolis", "nickname": "Colts", "league": League.NFL},
    {"code": "JAX", "city": "Jacksonville", "nickname": "Jaguars", "league": League.NFL},
    {"code": "KC", "city": "Kansas City", "nickname": "Chiefs", "league": League.NFL},
    {"code": "LV", "city": "Las Vegas", "nickname": "Raiders", "league": League.NFL},
    {"code": "LAC", "city": "Los Angeles", "nickname": "Chargers", "league": League.NFL},
    {"code": "LAR", "city": "Los Angeles", "nickname": "Rams", "league": League.NFL},
    {"code": "MIA", "city": "Miami", "nickname": "Dolphins", "league": League.NFL},
    {"code": "MIN", "city": "Minnesota", "nickname": "Vikings", "league": League.NFL},
    {"code": "NE", "city": "New England", "nickname": "Patriots", "league": League.NFL},
    {"code": "NO", "city": "New Orleans", "nickname": "Saints", "league": League.NFL},
    {"code": "NYG", "city": "New York", "nickname": "Giants", "league": League.NFL},
    {"code": "NYJ", "city": "New York", "nickname": "Jets", "league": League.NFL},
    {"code": "PHI", "city": "Philadelphia", "nickname": "Eagles", "league": League.NFL},
    {"code": "PIT", "city": "Pittsburgh", "nickname": "Steelers", "league": League.NFL},
    {"code": "SF", "city": "San Francisco", "nickname": "49ers", "league": League.NFL},
    {"code": "SEA", "city": "Seattle", "nickname": "Seahawks", "league": League.NFL},
    {"code": "TB", "city": "Tampa Bay", "nickname": "Buccaneers", "league": League.NFL},
    {"code": "TEN", "city": "Tennessee", "nickname": "Titans", "league": League.NFL},
    {"code": "WAS", "city": "Washington", "nickname": "Commanders", "league": League.NFL},
]


# ═══════════════════════════════════════════════════════════════════════════════
#  Nickname alias map: common variations → team code (per league)
# ═══════════════════════════════════════════════════════════════════════════════

_NICKNAME_ALIASES: dict[League, dict[str, str]] = {
    League.NBA: {
        "cavs": "CLE",
        "mavs": "DAL",
        "nugs": "DEN",
        "dubs": "GSW",
        "golden state": "GSW",
        "gs warriors": "GSW",
        "la clippers": "LAC",
        "clips": "LAC",
        "la lakers": "LAL",
        "grizz": "MEM",
        "wolves": "MIN",
        "t-wolves": "MIN",
        "twolves": "MIN",
        "pels": "NOP",
        "ny knicks": "NYK",
        "okc": "OKC",
        "okc thunder": "OKC",
        "sixers": "PHI",
        "philly": "PHI",
        "blazers": "POR",
        "trailblazers": "POR",
        "raps": "TOR",
        "wiz": "WAS",
    },
    League.NFL: {
        "niners": "SF",
        "sf 49ers": "SF",
        "bucs": "TB",
        "pats": "NE",
        "jags": "JAX",
        "ny giants": "NYG",
        "ny jets": "NYJ",
        "la rams": "LAR",
        "la chargers": "LAC",
        "bolts": "LAC",
        "kc chiefs": "KC",
        "washington football team": "WAS",
        "commies": "WAS",
        "vegas raiders": "LV",
        "lv raiders": "LV",
    },
}


# ═══════════════════════════════════════════════════════════════════════════════
#  Build lookup index
# ═══════════════════════════════════════════════════════════════════════════════

_PUNCT_RE = re.compile(r"[.'’]")


def _normalise(s: str) -> str:
    """Lowercase, drop dots/apostrophes, collapse whitespace."""
    s = _PUNCT_RE.sub("", s.strip().lower())
    return " ".join(s.split())


def _add_key(index: dict[str, Team], key: str, team: Team) -> None:
    key = _normalise(key)
    existing = index.get(key)
    if existing is not None and existing != team:
        raise ValueError(f"Duplicate {team.league.value} team key '{key}': {existing.name} / {team.name}")
    index[key] = team


def _build_index() -> tuple[dict[League, Mapping[str, Team]], dict[League, tuple[Team, ...]]]:
    """Build key→Team lookup per league. Raises on a duplicate key inside a league."""
    by_league: dict[League, dict[str, Team]] = {lg: {} for lg in League}
    by_code: dict[League, dict[str, Team]] = {lg: {} for lg in League}
    teams: dict[League, list[Team]] = {lg: [] for lg in League}

    for row in _EMBEDDED_TEAMS:
        league = row["league"]
        team = Team(
            abbreviation=row["code"],
            name=f"{row['city']} {row['nickname']}",
            league=league,
        )
        teams[league].append(team)
        by_code[league][team.abbreviation] = team
        _add_key(by_league[league], row["nickname"], team)
        _add_key(by_league[league], team.name, team)

    for league, aliases in _NICKNAME_ALIASES.items():
        for alias, code in aliases.items():
            _add_key(by_league[league], alias, by_code[league][code])

    index = {lg: MappingProxyType(keys) for lg, keys in by_league.items()}
    return index, {lg: tuple(ts) for lg, ts in teams.items()}


_INDEX, _TEAMS = _build_index()

TEAM_TABLES: Mapping[League, Mapping[str, Team]] = MappingProxyType(_INDEX)

# NFL nicknames collide less with everyday words than NBA ones ("heat",
# "magic", "jazz", "thunder"), so NFL is probed first.
DEFAULT_TEAM_ORDER: tuple[League, ...] = (League.NFL, League.NBA)


# ═══════════════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════════════


def resolve_team(text: str, league: Optional[League] = None, strict: bool = False) -> Optional[Team]:
    """
    Resolve a team phrase to its Team, or None.
    With ``league`` that league's table is probed first, then the other one;
    with ``strict`` as well, only that league's table is probed.
    """
    key = _normalise(text or "")
    if not key:
        return None
    order = DEFAULT_TEAM_ORDER
    if league is not None:
        order = (league,) if strict else (league,) + tuple(lg for lg in DEFAULT_TEAM_ORDER if lg != league)
    for lg in order:
        team = TEAM_TABLES[lg].get(key)
        if team is not None:
            return team
    return None


def teams_for(league: League) -> tuple[Team, ...]:
    return _TEAMS[league]


def team_keys(team: Team) -> list[str]:
    """All lookup keys that resolve to ``team`` inside its league."""
    return [k for k, t in TEAM_TABLES[team.league].items() if t == team]
