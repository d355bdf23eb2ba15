from __future__ import annotations

import unittest

import teams_db
from models import League, Team
from stats_db import (
    NBA_STATS,
    NFL_STATS,
    STAT_TABLES,
    aliases_for,
    probe_order,
    resolve_stat,
    stat_full_name,
    stat_keys,
    stat_label,
)
from teams_db import TEAM_TABLES, resolve_team, team_keys, teams_for


class StatResolverTests(unittest.TestCase):
    def test_every_alias_resolves_alone(self):
        for league, table in STAT_TABLES.items():
            for alias, key in table.items():
                with self.subTest(alias=alias):
                    match = resolve_stat(alias, probe_order(league))
                    self.assertIsNotNone(match)
                    self.assertEqual(match.key, key)
                    self.assertEqual(match.league, league)

    def test_slang(self):
        self.assertEqual(resolve_stat("dimes").key, "assists")
        self.assertEqual(resolve_stat("boards").key, "rebounds")
        self.assertEqual(resolve_stat("stocks").key, "stl+blk")

    def test_case_and_spacing(self):
        self.assertEqual(resolve_stat("Pass Yds").key, "pass_yards")
        self.assertEqual(resolve_stat("points    rebounds").key, "pts+reb")

    def test_whole_word_only(self):
        self.assertIsNone(resolve_stat("mastery"))
        self.assertIsNone(resolve_stat("13s"))
        self.assertIsNone(resolve_stat(""))

    def test_longest_phrase_wins(self):
        self.assertEqual(resolve_stat("points rebounds assists").key, "pts+reb+ast")
        self.assertEqual(resolve_stat("rushing receiving yards").key, "rush_rec_yards")
        self.assertEqual(resolve_stat("rec yds").key, "rec_yards")

    def test_span_points_at_alias(self):
        text = "jokic 30+ pra"
        match = resolve_stat(text)
        self.assertEqual(text[match.start:match.end], "pra")
        self.assertEqual(match.alias, "pra")

    def test_league_restriction(self):
        self.assertIsNone(resolve_stat("td", [League.NBA]))
        self.assertEqual(resolve_stat("td", [League.NFL]).key, "anytime_td")

    def test_probe_order(self):
        self.assertEqual(probe_order(), (League.NFL, League.NBA))
        self.assertEqual(probe_order(League.NBA), (League.NBA, League.NFL))

    def test_labels(self):
        self.assertEqual(stat_label("pts+reb+ast"), "PRA")
        self.assertEqual(stat_label("pass_yards"), "PASS YDS")
        self.assertEqual(stat_label("unknown"), "UNKNOWN")
        self.assertEqual(stat_full_name("threes"), "3-Pointers")

    def test_every_key_has_a_label(self):
        for league in League:
            for key in stat_keys(league):
                with self.subTest(key=key):
                    self.assertNotEqual(stat_full_name(key), key)
                    self.assertTrue(aliases_for(key, league))

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            NBA_STATS["buckets"] = "rebounds"
        with self.assertRaises(TypeError):
            NFL_STATS["yds"] = "pass_yards"


class TeamResolverTests(unittest.TestCase):
    def test_nickname_and_full_name(self):
        lakers = resolve_team("lakers")
        self.assertEqual(lakers, Team(abbreviation="LAL", name="Los Angeles Lakers", league=League.NBA))
        for text in ("LA Lakers", "  los   angeles  lakers ", "Lakers."):
            with self.subTest(text=text):
                self.assertEqual(resolve_team(text), lakers)

    def test_aliases(self):
        self.assertEqual(resolve_team("49ers").abbreviation, "SF")
        self.assertEqual(resolve_team("niners").abbreviation, "SF")
        self.assertEqual(resolve_team("sixers").abbreviation, "PHI")
        self.assertEqual(resolve_team("76ers").league, League.NBA)
        self.assertEqual(resolve_team("ny giants").name, "New York Giants")

    def test_no_partial_match(self):
        self.assertIsNone(resolve_team("lake"))
        self.assertIsNone(resolve_team("new york"))
        self.assertIsNone(resolve_team(""))

    def test_league_hint_only_reorders(self):
        self.assertEqual(resolve_team("chiefs", League.NBA).league, League.NFL)

    def test_strict_league(self):
        self.assertIsNone(resolve_team("chiefs", League.NBA, strict=True))
        self.assertEqual(resolve_team("chiefs", League.NFL, strict=True).abbreviation, "KC")
        self.assertEqual(resolve_team("chiefs", strict=True).abbreviation, "KC")

    def test_team_counts(self):
        self.assertEqual(len(teams_for(League.NBA)), 30)
        self.assertEqual(len(teams_for(League.NFL)), 32)

    def test_every_team_reachable_by_its_keys(self):
        for league in League:
            for team in teams_for(league):
                keys = team_keys(team)
                self.assertTrue(keys)
                for key in keys:
                    self.assertEqual(TEAM_TABLES[league][key], team)

    def test_duplicate_key_rejected(self):
        index: dict = {}
        bulls = Team(abbreviation="CHI", name="Chicago Bulls", league=League.NBA)
        heat = Team(abbreviation="MIA", name="Miami Heat", league=League.NBA)
        teams_db._add_key(index, "Windy", bulls)
        teams_db._add_key(index, "windy", bulls)
        with self.assertRaises(ValueError):
            teams_db._add_key(index, "WINDY", heat)


if __name__ == "__main__":
    unittest.main()
