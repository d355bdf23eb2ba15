from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple, Union

from models import (
    Direction,
    FailureReason,
    FragmentResult,
    League,
    ParsedBet,
    PlayerProp,
    Team,
    TeamMoneyline,
    TeamSpread,
    TeamTotal,
)
from stats_db import probe_order, resolve_stat, stat_label
from teams_db import resolve_team


# ═══════════════════════════════════════════════════════════════════════════════
#  Patterns
# ═══════════════════════════════════════════════════════════════════════════════

_NUM = r"\d+(?:\.\d+)?"

_LEAGUE_PREFIX_RE = re.compile(r"^\s*(nfl|nba)\s*(?::|\s)\s*", re.IGNORECASE)
_AND_RE = re.compile(r"\band\b", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[\r\n;]")

# Team bets, anchored to the full (lowercased, whitespace-collapsed) line
_MONEYLINE_RE = re.compile(r"^(?P<team>.+?)\s+(?:ml|moneyline|money line)$")
_SPREAD_RE = re.compile(rf"^(?P<team>.+?)\s+(?P<spread>[+-]{_NUM})$")
_TOTAL_LEADING_RE = re.compile(rf"^(?P<dir>over|under)\s+(?P<target>{_NUM})\s+(?P<teams>.+)$")
_TOTAL_TRAILING_RE = re.compile(rf"^(?P<teams>.+?)\s+(?P<dir>over|under)\s+(?P<target>{_NUM})$")
_VS_RE = re.compile(r"\s+vs\.?\s+")

# Player props
_DIRECTION_RE = {
    Direction.UNDER: re.compile(r"(?<!\S)under(?!\S)"),
    Direction.OVER: re.compile(r"(?<!\S)over(?!\S)"),
}
_SIGNED_TARGET_RE = re.compile(rf"(?<![\w.])({_NUM})\s*([+-])")
_BARE_TARGET_RE = re.compile(rf"(?<![\w.])({_NUM})")
_LINE_END_PUNCT_RE = re.compile(r"[.,!?;:]+$")
_TRAILING_PUNCT_RE = re.compile(r"[.,!?;:+\-]+$")
_NAME_WORD_RE = re.compile(r"\w")

Span = Tuple[int, int]


# ═══════════════════════════════════════════════════════════════════════════════
#  Input splitting
# ═══════════════════════════════════════════════════════════════════════════════


def split_league_prefix(text: str) -> tuple[Optional[League], str]:
    """Strip a leading "nfl:" / "nba " marker. Returns (forced league, rest)."""
    m = _LEAGUE_PREFIX_RE.match(text)
    if not m:
        return None, text
    return League(m.group(1).lower()), text[m.end():]


def split_fragments(text: str) -> List[str]:
    """
    Break one submission into candidate bet lines.
    "and", newlines and semicolons all act as commas.
    """
    normalized = _AND_RE.sub(",", text)
    normalized = _SEPARATOR_RE.sub(",", normalized)
    return [part.strip() for part in normalized.split(",") if part.strip()]


def _normalize_line(line: str) -> str:
    """Lowercase, collapse whitespace, drop sentence punctuation at the end ("Chiefs ML.")."""
    line = " ".join(line.lower().split())
    return _LINE_END_PUNCT_RE.sub("", line).rstrip()


# ═══════════════════════════════════════════════════════════════════════════════
#  Team bets
# ═══════════════════════════════════════════════════════════════════════════════


def _matchup_candidates(phrase: str) -> list[tuple[str, str]]:
    parts = _VS_RE.split(phrase, maxsplit=1)
    if len(parts) == 2:
        return [(parts[0], parts[1])]
    words = phrase.split()
    return [(" ".join(words[:i]), " ".join(words[i:])) for i in range(1, len(words))]


def _resolve_matchup(phrase: str, league: Optional[League]) -> Union[tuple[Team, Team], FailureReason]:
    """Find two same-league teams in ``phrase``; try every split point without "vs"."""
    crossed = False
    for first, second in _matchup_candidates(phrase):
        team1 = resolve_team(first, league, strict=True)
        team2 = resolve_team(second, league, strict=True)
        if team1 is None or team2 is None or team1 == team2:
            continue
        if team1.league != team2.league:
            crossed = True
            continue
        return team1, team2
    return FailureReason.CROSS_LEAGUE if crossed else FailureReason.NO_TEAM


def _parse_total(m: re.Match[str], league: Optional[League]) -> Union[TeamTotal, FailureReason]:
    resolved = _resolve_matchup(m.group("teams"), league)
    if isinstance(resolved, FailureReason):
        return resolved
    team1, team2 = resolved
    return TeamTotal(
        league=league or team1.league,
        team1_name=team1.name,
        team1_abbrev=team1.abbreviation,
        team2_name=team2.name,
        team2_abbrev=team2.abbreviation,
        target=float(m.group("target")),
        direction=Direction(m.group("dir")),
    )


# ═══════════════════════════════════════════════════════════════════════════════
#  Player props
# ═══════════════════════════════════════════════════════════════════════════════


def _mask(text: str, spans: Sequence[Span]) -> str:
    """Blank out consumed spans, keeping every offset in place."""
    chars = list(text)
    for start, end in spans:
        chars[start:end] = " " * (end - start)
    return "".join(chars)


def _title_words(name: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in name.split())


def _parse_player_prop(line: str, league: Optional[League]) -> Union[PlayerProp, FailureReason]:
    """
    Extract direction, stat, target and player name from spans of ``line``.
    Each step searches the line with earlier spans masked; the line itself is
    never rewritten.
    """
    consumed: list[Span] = []
    direction = Direction.OVER

    # a. direction keyword
    for keyword, pattern in _DIRECTION_RE.items():
        m = pattern.search(line)
        if m:
            direction = keyword
            consumed.append(m.span())
            break

    # b. stat phrase
    stat = resolve_stat(_mask(line, consumed), probe_order(league))
    if stat is not None:
        consumed.append((stat.start, stat.end))

    # c. target: "25+" / "25-" beats a keyword, else the first bare number
    target: Optional[float] = None
    m = _SIGNED_TARGET_RE.search(_mask(line, consumed))
    if m:
        target = float(m.group(1))
        direction = Direction.OVER if m.group(2) == "+" else Direction.UNDER
        consumed.append(m.span())
    else:
        m = _BARE_TARGET_RE.search(_mask(line, consumed))
        if m:
            target = float(m.group(1))
            consumed.append(m.span())

    # d. what is left is the player
    rest = " ".join(w for w in _mask(line, consumed).split() if _NAME_WORD_RE.search(w))
    player = _title_words(_TRAILING_PUNCT_RE.sub("", rest).strip())

    if stat is None:
        return FailureReason.NO_STAT
    if not target:
        return FailureReason.NO_TARGET
    if not player:
        return FailureReason.NO_PLAYER

    return PlayerProp(
        league=league or stat.league,
        player_name=player,
        stat_type=stat.key,
        target=target,
        direction=direction,
        display_stat=stat_label(stat.key),
    )


# ═══════════════════════════════════════════════════════════════════════════════
#  Single line
# ═══════════════════════════════════════════════════════════════════════════════


def diagnose_bet(text: str, league: Optional[League] = None) -> FragmentResult:
    """
    Classify one bet line and say why it failed when it does.

    Shapes, first success wins:
      "Lakers ML"                  → team_moneyline
      "Chiefs -3.5"                → team_spread
      "Over 45.5 Chiefs Lions"     → team_total
      "Chiefs vs Lions under 45.5" → team_total
      "lebron 25+ points"          → player_prop
    """
    raw = (text or "").strip()
    line = _normalize_line(raw)
    if not line:
        return FragmentResult(text=raw, reason=FailureReason.EMPTY)

    # ═══ Moneyline ("Lakers ML"): an unknown team fails the line ═══
    m = _MONEYLINE_RE.match(line)
    if m:
        team = resolve_team(m.group("team"), league, strict=True)
        if team is None:
            return FragmentResult(text=raw, reason=FailureReason.NO_TEAM)
        return FragmentResult(text=raw, bet=TeamMoneyline(
            league=league or team.league,
            team_name=team.name,
            team_abbrev=team.abbreviation,
        ))

    team_failure: Optional[FailureReason] = None

    # ═══ Spread ("Chiefs -3.5", "Celtics +7") ═══
    m = _SPREAD_RE.match(line)
    if m:
        team = resolve_team(m.group("team"), league, strict=True)
        if team is not None:
            return FragmentResult(text=raw, bet=TeamSpread(
                league=league or team.league,
                team_name=team.name,
                team_abbrev=team.abbreviation,
                spread=float(m.group("spread")),
            ))
        team_failure = FailureReason.NO_TEAM

    # ═══ Totals ("Over 45.5 Chiefs Lions", "Chiefs vs Lions Over 45.5") ═══
    for pattern in (_TOTAL_LEADING_RE, _TOTAL_TRAILING_RE):
        m = pattern.match(line)
        if not m:
            continue
        total = _parse_total(m, league)
        if isinstance(total, TeamTotal):
            return FragmentResult(text=raw, bet=total)
        if team_failure != FailureReason.CROSS_LEAGUE:
            team_failure = total

    # ═══ Player prop fallback ═══
    prop = _parse_player_prop(line, league)
    if isinstance(prop, PlayerProp):
        return FragmentResult(text=raw, bet=prop)
    return FragmentResult(text=raw, reason=team_failure or prop)


def parse_bet(text: str, league: Optional[League] = None) -> Optional[ParsedBet]:
    """Parse one bet line; None when it matches no known bet shape."""
    return diagnose_bet(text, league).bet


# ═══════════════════════════════════════════════════════════════════════════════
#  Whole submission
# ═══════════════════════════════════════════════════════════════════════════════


def diagnose_bets(text: str) -> List[FragmentResult]:
    """One FragmentResult per non-blank fragment, in input order."""
    if not text:
        return []
    league, body = split_league_prefix(text)
    return [diagnose_bet(fragment, league) for fragment in split_fragments(body)]


def parse_bets(text: str) -> List[ParsedBet]:
    """
    Parse a free-text submission into bets.

    Fragments that do not parse are dropped; only the successes come back, in
    the order they were typed.
    """
    return [r.bet for r in diagnose_bets(text) if r.bet is not None]
