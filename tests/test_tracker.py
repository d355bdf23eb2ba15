from __future__ import annotations

import unittest

from models import (
    Direction,
    League,
    LiveResult,
    PlayerProp,
    ProgressStatus,
    TeamMoneyline,
    TeamSpread,
    TeamTotal,
)
from providers import ManualStatsProvider
from tracker import evaluate_progress, track_bets


def _prop(target: float, direction: Direction = Direction.OVER) -> PlayerProp:
    return PlayerProp(
        league=League.NBA,
        player_name="Lebron",
        stat_type="points",
        target=target,
        direction=direction,
        display_stat="PTS",
    )


CHIEFS_ML = TeamMoneyline(league=League.NFL, team_name="Kansas City Chiefs", team_abbrev="KC")
CHIEFS_SPREAD = TeamSpread(league=League.NFL, team_name="Kansas City Chiefs", team_abbrev="KC", spread=-3.5)


def _total(direction: Direction) -> TeamTotal:
    return TeamTotal(
        league=League.NFL,
        team1_name="Kansas City Chiefs",
        team1_abbrev="KC",
        team2_name="Detroit Lions",
        team2_abbrev="DET",
        target=45.5,
        direction=direction,
    )


class StubProvider:
    def __init__(self, values: dict, failing: set | None = None) -> None:
        self.values = values
        self.failing = failing or set()

    def get_stats(self, bet) -> LiveResult:
        if bet in self.failing:
            raise ConnectionError("provider offline")
        return self.values[bet]


class PlayerPropProgressTests(unittest.TestCase):
    # ── over ──
    def test_over_hitting(self) -> None:
        result = evaluate_progress(_prop(25), LiveResult(current=25))
        self.assertEqual(result.status, ProgressStatus.HITTING)
        self.assertEqual(result.status_text, "HITTING")
        self.assertEqual(result.progress, 100.0)

    def test_over_close(self) -> None:
        result = evaluate_progress(_prop(25), LiveResult(current=18))
        self.assertEqual(result.status, ProgressStatus.CLOSE)
        self.assertEqual(result.progress, 72.0)

    def test_over_needs_more(self) -> None:
        result = evaluate_progress(_prop(25), LiveResult(current=10))
        self.assertEqual(result.status, ProgressStatus.NOT_HITTING)
        self.assertEqual(result.status_text, "NEEDS MORE")

    def test_progress_capped(self) -> None:
        self.assertEqual(evaluate_progress(_prop(20), LiveResult(current=35)).progress, 100.0)

    # ── under ──
    def test_under_states(self) -> None:
        bet = _prop(20, Direction.UNDER)
        self.assertEqual(evaluate_progress(bet, LiveResult(current=10)).status_text, "ON PACE")
        self.assertEqual(evaluate_progress(bet, LiveResult(current=17)).status, ProgressStatus.CLOSE)
        over = evaluate_progress(bet, LiveResult(current=20))
        self.assertEqual(over.status, ProgressStatus.NOT_HITTING)
        self.assertEqual(over.status_text, "OVER")

    # ── game state ──
    def test_no_game(self) -> None:
        for live in (LiveResult(found=False), LiveResult(no_game=True)):
            with self.subTest(live=live):
                result = evaluate_progress(_prop(25), live)
                self.assertEqual(result.status, ProgressStatus.PENDING)
                self.assertEqual(result.status_text, "NO GAME TODAY")

    def test_live_prefix(self) -> None:
        result = evaluate_progress(_prop(25), LiveResult(current=30, is_live=True, game_status="Q3"))
        self.assertEqual(result.status_text, "LIVE - HITTING")
        self.assertEqual(result.game_status, "Q3")

    def test_missing_current_counts_as_zero(self) -> None:
        result = evaluate_progress(_prop(25), LiveResult())
        self.assertEqual(result.current, 0.0)
        self.assertEqual(result.status, ProgressStatus.NOT_HITTING)


class TeamProgressTests(unittest.TestCase):
    # ── moneyline ──
    def test_moneyline(self) -> None:
        winning = evaluate_progress(CHIEFS_ML, LiveResult(team_score=24, opponent_score=20))
        self.assertEqual(winning.status, ProgressStatus.HITTING)
        self.assertTrue(winning.winning)

        tied = evaluate_progress(CHIEFS_ML, LiveResult(team_score=20, opponent_score=20))
        self.assertEqual(tied.status, ProgressStatus.CLOSE)
        self.assertTrue(tied.tied)

        losing = evaluate_progress(CHIEFS_ML, LiveResult(team_score=10, opponent_score=20))
        self.assertEqual(losing.status_text, "LOSING")

    def test_not_started_before_no_game(self) -> None:
        result = evaluate_progress(CHIEFS_ML, LiveResult(not_started=True, no_game=True))
        self.assertEqual(result.status_text, "NOT STARTED")
        self.assertEqual(evaluate_progress(CHIEFS_ML, LiveResult(found=False)).status_text, "NO GAME TODAY")

    def test_missing_scores_pending(self) -> None:
        result = evaluate_progress(CHIEFS_ML, LiveResult(team_score=7))
        self.assertEqual(result.status, ProgressStatus.PENDING)
        self.assertEqual(result.status_text, "NO SCORE YET")

    # ── spread ──
    def test_spread_covering(self) -> None:
        result = evaluate_progress(CHIEFS_SPREAD, LiveResult(team_score=24, opponent_score=20))
        self.assertTrue(result.covering)
        self.assertEqual(result.margin, 0.5)
        self.assertEqual(result.status_text, "COVERING (+0.5)")

    def test_spread_not_covering(self) -> None:
        result = evaluate_progress(CHIEFS_SPREAD, LiveResult(team_score=21, opponent_score=20, is_live=True))
        self.assertFalse(result.covering)
        self.assertEqual(result.status, ProgressStatus.NOT_HITTING)
        self.assertEqual(result.status_text, "LIVE - NOT COVERING (-2.5)")

    # ── totals ──
    def test_total_over_and_under(self) -> None:
        live = LiveResult(team1_score=24, team2_score=20)
        over = evaluate_progress(_total(Direction.OVER), live)
        under = evaluate_progress(_total(Direction.UNDER), live)
        self.assertEqual(over.status_text, "OFF PACE")
        self.assertEqual(under.status_text, "ON PACE")
        self.assertEqual(over.current_total, 44.0)
        self.assertEqual(over.progress, 96.7)


class TrackBetsTests(unittest.TestCase):
    def test_failure_only_affects_its_bet(self) -> None:
        good = _prop(25)
        bad = CHIEFS_ML
        provider = StubProvider({good: LiveResult(current=30)}, failing={bad})

        report = track_bets(provider, [good, bad])

        self.assertEqual(report["summary"]["total"], 2)
        self.assertEqual(report["summary"]["hitting"], 1)
        self.assertEqual(report["summary"]["pending"], 1)
        self.assertEqual(report["results"][0]["status"], "hitting")
        self.assertEqual(report["results"][1]["status"], "pending")
        self.assertIn("provider offline", report["results"][1]["status_text"])
        self.assertIn("checked_at", report)

    def test_empty(self) -> None:
        report = track_bets(StubProvider({}), [])
        self.assertEqual(report["results"], [])
        self.assertEqual(report["summary"]["total"], 0)


class ManualStatsProviderTests(unittest.TestCase):
    def test_defaults_to_zero(self) -> None:
        live = ManualStatsProvider().get_stats(_prop(25))
        self.assertTrue(live.found)
        self.assertTrue(live.manual)
        self.assertEqual(live.current, 0)

    def test_update_and_forget(self) -> None:
        provider = ManualStatsProvider()
        bet = _prop(25)
        provider.update(bet, current=12)
        self.assertEqual(provider.get_stats(bet).current, 12)

        # returned values are copies
        provider.get_stats(bet).current = 99
        self.assertEqual(provider.get_stats(bet).current, 12)

        provider.forget(bet)
        self.assertEqual(provider.get_stats(bet).current, 0)

    def test_update_rejects_unknown_field(self) -> None:
        with self.assertRaises(ValueError):
            ManualStatsProvider().update(_prop(25), points=10)

    def test_manual_flag_kept(self) -> None:
        live = ManualStatsProvider().update(CHIEFS_ML, team_score=14, opponent_score=7, manual=False)
        self.assertTrue(live.manual)

    def test_tracks_through_provider(self) -> None:
        provider = ManualStatsProvider()
        bet = _prop(10)
        provider.update(bet, current=8)
        report = track_bets(provider, [bet])
        self.assertEqual(report["results"][0]["status"], "close")


if __name__ == "__main__":
    unittest.main()
