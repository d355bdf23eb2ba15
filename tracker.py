from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional

from loguru import logger

from models import (
    BetProgress,
    BetType,
    Direction,
    LiveResult,
    ParsedBet,
    PlayerProp,
    ProgressStatus,
    TeamMoneyline,
    TeamSpread,
    TeamTotal,
)
from providers import LiveStatsProvider

# ═══════════════════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════════════════

H = ProgressStatus.HITTING
C = ProgressStatus.CLOSE
N = ProgressStatus.NOT_HITTING
P = ProgressStatus.PENDING

# Over props turn "close" at 70% of the line; unders stay comfortable below 80%.
CLOSE_RATIO_OVER = 0.7
SAFE_RATIO_UNDER = 0.8


def _p(bet: ParsedBet, live: LiveResult, status: ProgressStatus, text: str, **fields) -> BetProgress:
    """Shorthand progress builder."""
    if live.is_live and status != P:
        text = f"LIVE - {text}"
    return BetProgress(
        bet=bet,
        status=status,
        status_text=text,
        game_status=live.game_status,
        game_info=live.game_info,
        **fields,
    )


def _percent(value: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return round(min(value / target * 100, 100.0), 1)


def _signed(value: float) -> str:
    return f"{value:+g}"


def _no_game(live: LiveResult) -> bool:
    return live.no_game or not live.found


def _team_gate(bet: ParsedBet, live: LiveResult) -> Optional[BetProgress]:
    """Common pending states for team bets, in display priority order."""
    if live.not_started:
        return _p(bet, live, P, "NOT STARTED")
    if _no_game(live):
        return _p(bet, live, P, "NO GAME TODAY")
    return None


# ═══════════════════════════════════════════════════════════════════════════════
#  Per-shape evaluators
# ═══════════════════════════════════════════════════════════════════════════════


def _progress_player_prop(bet: PlayerProp, live: LiveResult) -> BetProgress:
    current = float(live.current or 0)
    progress = _percent(current, bet.target)
    if _no_game(live):
        return _p(bet, live, P, "NO GAME TODAY", current=current, progress=progress)

    if bet.direction == Direction.OVER:
        if current >= bet.target:
            status, text = H, "HITTING"
        elif current >= bet.target * CLOSE_RATIO_OVER:
            status, text = C, "CLOSE"
        else:
            status, text = N, "NEEDS MORE"
    else:
        if current < bet.target * SAFE_RATIO_UNDER:
            status, text = H, "ON PACE"
        elif current < bet.target:
            status, text = C, "CLOSE"
        else:
            status, text = N, "OVER"
    return _p(bet, live, status, text, current=current, progress=progress)


def _progress_moneyline(bet: TeamMoneyline, live: LiveResult) -> BetProgress:
    gate = _team_gate(bet, live)
    if gate is not None:
        return gate
    if live.team_score is None or live.opponent_score is None:
        return _p(bet, live, P, "NO SCORE YET")

    winning = live.team_score > live.opponent_score
    tied = live.team_score == live.opponent_score
    if winning:
        status, text = H, "WINNING"
    elif tied:
        status, text = C, "TIED"
    else:
        status, text = N, "LOSING"
    return _p(bet, live, status, text, winning=winning, tied=tied)


def _progress_spread(bet: TeamSpread, live: LiveResult) -> BetProgress:
    gate = _team_gate(bet, live)
    if gate is not None:
        return gate
    if live.team_score is None or live.opponent_score is None:
        return _p(bet, live, P, "NO SCORE YET")

    # -3.5 means the team has to win by more than 3.5
    margin = live.team_score + bet.spread - live.opponent_score
    covering = margin > 0
    text = f"COVERING ({_signed(margin)})" if covering else f"NOT COVERING ({_signed(margin)})"
    return _p(bet, live, H if covering else N, text, margin=margin, covering=covering)


def _progress_total(bet: TeamTotal, live: LiveResult) -> BetProgress:
    gate = _team_gate(bet, live)
    if gate is not None:
        return gate
    if live.team1_score is None or live.team2_score is None:
        return _p(bet, live, P, "NO SCORE YET")

    current_total = float(live.team1_score + live.team2_score)
    if bet.direction == Direction.OVER:
        hitting = current_total > bet.target
    else:
        hitting = current_total < bet.target
    return _p(
        bet, live, H if hitting else N, "ON PACE" if hitting else "OFF PACE",
        current_total=current_total, progress=_percent(current_total, bet.target),
    )


PROGRESS_EVALUATORS: dict[BetType, Callable[[ParsedBet, LiveResult], BetProgress]] = {
    BetType.PLAYER_PROP: _progress_player_prop,
    BetType.TEAM_MONEYLINE: _progress_moneyline,
    BetType.TEAM_SPREAD: _progress_spread,
    BetType.TEAM_TOTAL: _progress_total,
}


# ═══════════════════════════════════════════════════════════════════════════════
#  Orchestration
# ═══════════════════════════════════════════════════════════════════════════════


def evaluate_progress(bet: ParsedBet, live: LiveResult) -> BetProgress:
    evaluator = PROGRESS_EVALUATORS.get(bet.bet_type)
    if evaluator is None:
        raise ValueError(f"Unsupported bet type {bet.bet_type}")
    return evaluator(bet, live)


def _summarize(results: List[BetProgress]) -> dict:
    summary = {status.value: 0 for status in ProgressStatus}
    for r in results:
        summary[r.status.value] += 1
    summary["total"] = len(results)
    return summary


def track_bets(provider: LiveStatsProvider, bets: Iterable[ParsedBet]) -> dict:
    """Fetch live values for each bet, in order. A provider failure only affects its own bet."""
    results: List[BetProgress] = []

    for bet in bets:
        try:
            live = provider.get_stats(bet)
        except Exception as exc:
            logger.warning("Live stats lookup failed for {}: {}", bet.bet_type.value, exc)
            results.append(BetProgress(
                bet=bet, status=P, status_text=f"Could not fetch live stats: {exc}",
            ))
            continue
        results.append(evaluate_progress(bet, live))

    return {
        "checked_at": datetime.now(timezone.utc).isoformat(),
        "summary": _summarize(results),
        "results": [r.to_dict() for r in results],
    }
