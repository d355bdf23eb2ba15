"""
Stat vocabulary: maps the way people type stats ("dimes", "3pm", "pass yds")
to canonical stat keys, one table per league.

Tables are built once at import and exposed read-only.
"""
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from models import League, StatMatch


# ═══════════════════════════════════════════════════════════════════════════════
#  Alias tables
# ═══════════════════════════════════════════════════════════════════════════════

_NBA_ALIASES: dict[str, str] = {
    # ── points ──
    "points": "points",
    "point": "points",
    "pts": "points",
    "pt": "points",
    "buckets": "points",
    # ── rebounds ──
    "rebounds": "rebounds",
    "rebound": "rebounds",
    "rebs": "rebounds",
    "reb": "rebounds",
    "boards": "rebounds",
    # ── assists ──
    "assists": "assists",
    "assist": "assists",
    "asts": "assists",
    "ast": "assists",
    "dimes": "assists",
    # ── threes ──
    "threes": "threes",
    "three": "threes",
    "3s": "threes",
    "3pm": "threes",
    "3-pointers": "threes",
    "3 pointers": "threes",
    "three pointers": "threes",
    "triples": "threes",
    "treys": "threes",
    # ── defense ──
    "steals": "steals",
    "steal": "steals",
    "stls": "steals",
    "stl": "steals",
    "blocks": "blocks",
    "block": "blocks",
    "blks": "blocks",
    "blk": "blocks",
    "turnovers": "turnovers",
    "turnover": "turnovers",
    "tov": "turnovers",
    "tos": "turnovers",
    # ── combos ──
    "pra": "pts+reb+ast",
    "p+r+a": "pts+reb+ast",
    "pts+reb+ast": "pts+reb+ast",
    "pts reb ast": "pts+reb+ast",
    "points rebounds assists": "pts+reb+ast",
    "pr": "pts+reb",
    "p+r": "pts+reb",
    "pts+reb": "pts+reb",
    "pts reb": "pts+reb",
    "points rebounds": "pts+reb",
    "pa": "pts+ast",
    "p+a": "pts+ast",
    "pts+ast": "pts+ast",
    "pts ast": "pts+ast",
    "points assists": "pts+ast",
    "ra": "reb+ast",
    "r+a": "reb+ast",
    "reb+ast": "reb+ast",
    "reb ast": "reb+ast",
    "rebounds assists": "reb+ast",
    "stocks": "stl+blk",
    "s+b": "stl+blk",
    "stl+blk": "stl+blk",
    "steals blocks": "stl+blk",
    "blocks steals": "stl+blk",
    # ── fantasy ──
    "fantasy": "fantasy",
    "fantasy points": "fantasy",
    "fpts": "fantasy",
    "fp": "fantasy",
}

# No fantasy aliases here: "fantasy points" stays in the NBA table so an
# unprefixed fantasy line is read as basketball. "nfl: mahomes 20+ fantasy points"
# still tags the bet as NFL through the prefix.
_NFL_ALIASES: dict[str, str] = {
    # ── passing ──
    "passing yards": "pass_yards",
    "passing yds": "pass_yards",
    "pass yards": "pass_yards",
    "pass yds": "pass_yards",
    "pass yd": "pass_yards",
    "passing tds": "pass_tds",
    "passing touchdowns": "pass_tds",
    "pass tds": "pass_tds",
    "pass td": "pass_tds",
    "passing attempts": "pass_attempts",
    "pass attempts": "pass_attempts",
    "pass att": "pass_attempts",
    "completions": "completions",
    "completion": "completions",
    "comp": "completions",
    "cmp": "completions",
    "interceptions": "interceptions",
    "interception": "interceptions",
    "ints": "interceptions",
    "picks": "interceptions",
    # ── rushing ──
    "rushing yards": "rush_yards",
    "rushing yds": "rush_yards",
    "rush yards": "rush_yards",
    "rush yds": "rush_yards",
    "rush yd": "rush_yards",
    "rushing tds": "rush_tds",
    "rushing touchdowns": "rush_tds",
    "rush tds": "rush_tds",
    "rush td": "rush_tds",
    "rushing attempts": "rush_attempts",
    "rush attempts": "rush_attempts",
    "carries": "rush_attempts",
    # ── receiving ──
    "receiving yards": "rec_yards",
    "receiving yds": "rec_yards",
    "rec yards": "rec_yards",
    "rec yds": "rec_yards",
    "receiving tds": "rec_tds",
    "receiving touchdowns": "rec_tds",
    "rec tds": "rec_tds",
    "rec td": "rec_tds",
    "receptions": "receptions",
    "reception": "receptions",
    "catches": "receptions",
    "recs": "receptions",
    "rec": "receptions",
    "longest reception": "longest_reception",
    "longest rec": "longest_reception",
    "long rec": "longest_reception",
    # ── combos ──
    "rushing receiving yards": "rush_rec_yards",
    "rushing + receiving yards": "rush_rec_yards",
    "rush+rec yards": "rush_rec_yards",
    "rush+rec yds": "rush_rec_yards",
    "rush rec yds": "rush_rec_yards",
    "scrimmage yards": "rush_rec_yards",
    # ── touchdowns ──
    "anytime td": "anytime_td",
    "anytime touchdown": "anytime_td",
    "touchdowns": "anytime_td",
    "touchdown": "anytime_td",
    "tds": "anytime_td",
    "td": "anytime_td",
}

NBA_STATS: Mapping[str, str] = MappingProxyType(_NBA_ALIASES)
NFL_STATS: Mapping[str, str] = MappingProxyType(_NFL_ALIASES)

STAT_TABLES: Mapping[League, Mapping[str, str]] = MappingProxyType({
    League.NBA: NBA_STATS,
    League.NFL: NFL_STATS,
})

# NFL phrases are more distinctive ("passing yards" never means anything in
# basketball), so they are probed first.
DEFAULT_STAT_ORDER: tuple[League, ...] = (League.NFL, League.NBA)


# ═══════════════════════════════════════════════════════════════════════════════
#  Display names
# ═══════════════════════════════════════════════════════════════════════════════

_LABELS: Mapping[str, tuple[str, str]] = MappingProxyType({
    # key: (short label, full name)
    "points": ("PTS", "Points"),
    "rebounds": ("REB", "Rebounds"),
    "assists": ("AST", "Assists"),
    "threes": ("3PM", "3-Pointers"),
    "steals": ("STL", "Steals"),
    "blocks": ("BLK", "Blocks"),
    "turnovers": ("TOV", "Turnovers"),
    "pts+reb+ast": ("PRA", "Pts + Reb + Ast"),
    "pts+reb": ("PTS+REB", "Points + Rebounds"),
    "pts+ast": ("PTS+AST", "Points + Assists"),
    "reb+ast": ("REB+AST", "Rebounds + Assists"),
    "stl+blk": ("STL+BLK", "Steals + Blocks"),
    "fantasy": ("FPTS", "Fantasy Points"),
    "pass_yards": ("PASS YDS", "Passing Yards"),
    "pass_tds": ("PASS TD", "Passing Touchdowns"),
    "pass_attempts": ("PASS ATT", "Passing Attempts"),
    "completions": ("CMP", "Completions"),
    "interceptions": ("INT", "Interceptions"),
    "rush_yards": ("RUSH YDS", "Rushing Yards"),
    "rush_attempts": ("RUSH ATT", "Rushing Attempts"),
    "rush_tds": ("RUSH TD", "Rushing Touchdowns"),
    "receptions": ("REC", "Receptions"),
    "rec_yards": ("REC YDS", "Receiving Yards"),
    "rec_tds": ("REC TD", "Receiving Touchdowns"),
    "rush_rec_yards": ("RUSH+REC YDS", "Rushing + Receiving Yards"),
    "anytime_td": ("TD", "Anytime Touchdown"),
    "longest_reception": ("LONG REC", "Longest Reception"),
})


def stat_label(key: str) -> str:
    entry = _LABELS.get(key)
    return entry[0] if entry else key.upper()


def stat_full_name(key: str) -> str:
    entry = _LABELS.get(key)
    return entry[1] if entry else key


# ═══════════════════════════════════════════════════════════════════════════════
#  Build match index
# ═══════════════════════════════════════════════════════════════════════════════


def _alias_pattern(alias: str) -> re.Pattern[str]:
    """
    Whole-word pattern; any whitespace run is accepted between words.
    A letter-initial alias may follow digits directly ("25pts"), a
    digit-initial one may not ("13s" is not "3s").
    """
    body = r"\s+".join(re.escape(word) for word in alias.split())
    before = r"(?<![a-z0-9])" if alias[0].isdigit() else r"(?<![a-z])"
    return re.compile(rf"{before}{body}(?![a-z0-9])", re.IGNORECASE)


def _specificity(item: tuple[str, str]) -> tuple[int, int, str]:
    # Longest phrase first: word count, then character count. The alias text
    # is the final tie-breaker so the order never depends on dict layout.
    alias = item[0]
    return -len(alias.split()), -len(alias), alias


def _build_index(table: Mapping[str, str]) -> tuple[tuple[str, str, re.Pattern[str]], ...]:
    ordered = sorted(table.items(), key=_specificity)
    return tuple((alias, key, _alias_pattern(alias)) for alias, key in ordered)


_INDEX: Mapping[League, tuple[tuple[str, str, re.Pattern[str]], ...]] = MappingProxyType({
    league: _build_index(table) for league, table in STAT_TABLES.items()
})


# ═══════════════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════════════


def probe_order(preferred: Optional[League] = None) -> tuple[League, ...]:
    """League order for stat probing, with ``preferred`` moved to the front."""
    if preferred is None:
        return DEFAULT_STAT_ORDER
    return (preferred,) + tuple(lg for lg in DEFAULT_STAT_ORDER if lg != preferred)


def resolve_stat(text: str, leagues: Optional[Iterable[League]] = None) -> Optional[StatMatch]:
    """
    Find the stat phrase in ``text``.

    Tables are probed in ``leagues`` order (NFL then NBA by default). Inside a
    table the longest alias wins. Returns None when nothing matches.
    """
    if not text:
        return None
    for league in (tuple(leagues) if leagues is not None else DEFAULT_STAT_ORDER):
        for alias, key, pattern in _INDEX.get(league, ()):
            m = pattern.search(text)
            if m:
                return StatMatch(key=key, league=league, alias=alias, start=m.start(), end=m.end())
    return None


def stat_keys(league: League) -> list[str]:
    """Canonical keys of one league, in table order."""
    seen: dict[str, None] = {}
    for key in STAT_TABLES[league].values():
        seen.setdefault(key, None)
    return list(seen)


def aliases_for(key: str, league: League) -> list[str]:
    return [alias for alias, k in STAT_TABLES[league].items() if k == key]
