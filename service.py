from __future__ import annotations

import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator

from bet_parser import diagnose_bets, parse_bets
from log_setup import setup_logging
from models import BetType, Direction, League, LiveResult, ParsedBet, bet_from_dict
from stats_db import STAT_TABLES, aliases_for, stat_full_name, stat_keys, stat_label
from teams_db import team_keys, teams_for
from tracker import evaluate_progress

setup_logging()

DEFAULT_MAX_INPUT = 5000


def _max_input() -> int:
    raw = os.getenv("PROP_TRACKER_MAX_INPUT", "").strip()
    return int(raw) if raw.isdigit() and int(raw) > 0 else DEFAULT_MAX_INPUT


# ═══════════════════════════════════════════════════════════════════════════════
#  Pydantic models
# ═══════════════════════════════════════════════════════════════════════════════


class ParseRequest(BaseModel):
    text: str = Field(description='e.g. "lebron 25+ points, Chiefs -3.5"')

    @field_validator("text")
    @classmethod
    def check_length(cls, value: str) -> str:
        limit = _max_input()
        if len(value) > limit:
            raise ValueError(f"text is longer than {limit} characters")
        return value


class BetIn(BaseModel):
    bet_type: BetType
    league: League
    # player prop
    player_name: Optional[str] = None
    stat_type: Optional[str] = None
    display_stat: Optional[str] = None
    # moneyline / spread
    team_name: Optional[str] = None
    team_abbrev: Optional[str] = None
    spread: Optional[float] = None
    # total
    team1_name: Optional[str] = None
    team1_abbrev: Optional[str] = None
    team2_name: Optional[str] = None
    team2_abbrev: Optional[str] = None
    # prop / total
    target: Optional[float] = None
    direction: Optional[Direction] = None

    @model_validator(mode="after")
    def validate_shape(self) -> "BetIn":
        t = self.bet_type

        if t == BetType.PLAYER_PROP:
            if not self.player_name or not self.stat_type:
                raise ValueError("player_prop requires player_name and stat_type")
            if self.target is None or self.target <= 0:
                raise ValueError("player_prop requires a positive target")
            if self.direction is None:
                self.direction = Direction.OVER
            if not self.display_stat:
                self.display_stat = stat_label(self.stat_type)

        if t in {BetType.TEAM_MONEYLINE, BetType.TEAM_SPREAD}:
            if not self.team_name or not self.team_abbrev:
                raise ValueError(f"{t.value} requires team_name and team_abbrev")
        if t == BetType.TEAM_SPREAD and self.spread is None:
            raise ValueError("team_spread requires spread")

        if t == BetType.TEAM_TOTAL:
            if not all([self.team1_name, self.team1_abbrev, self.team2_name, self.team2_abbrev]):
                raise ValueError("team_total requires both teams")
            if self.target is None or self.target <= 0:
                raise ValueError("team_total requires a positive target")
            if self.direction is None:
                raise ValueError("team_total requires direction")

        return self

    def to_bet(self) -> ParsedBet:
        return bet_from_dict(self.model_dump(exclude_none=True))


class LiveIn(BaseModel):
    found: bool = True
    no_game: bool = False
    not_started: bool = False
    is_live: bool = False
    is_final: bool = False
    game_status: Optional[str] = None
    game_info: Optional[str] = None
    manual: bool = False
    current: Optional[float] = Field(default=None, ge=0)
    team_score: Optional[int] = Field(default=None, ge=0)
    opponent_score: Optional[int] = Field(default=None, ge=0)
    opponent_name: Optional[str] = None
    team1_score: Optional[int] = Field(default=None, ge=0)
    team2_score: Optional[int] = Field(default=None, ge=0)

    def to_live(self) -> LiveResult:
        return LiveResult(**self.model_dump())


class ProgressItem(BaseModel):
    bet: BetIn
    live: LiveIn = Field(default_factory=LiveIn)


class ProgressRequest(BaseModel):
    items: List[ProgressItem] = Field(min_length=1)


# ═══════════════════════════════════════════════════════════════════════════════
#  FastAPI app
# ═══════════════════════════════════════════════════════════════════════════════

app = FastAPI(title="Prop Tracker API", version="1.0.0")


def _leagues(league: Optional[League]) -> List[League]:
    return [league] if league is not None else list(League)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/vocabulary/stats")
def stat_vocabulary(league: Optional[League] = None) -> dict:
    out = {}
    for lg in _leagues(league):
        out[lg.value] = [
            {
                "key": key,
                "label": stat_label(key),
                "name": stat_full_name(key),
                "aliases": aliases_for(key, lg),
            }
            for key in stat_keys(lg)
        ]
    return {"leagues": out, "alias_count": sum(len(STAT_TABLES[lg]) for lg in _leagues(league))}


@app.get("/vocabulary/teams")
def team_vocabulary(league: Optional[League] = None) -> dict:
    out = {}
    for lg in _leagues(league):
        out[lg.value] = [
            {"abbreviation": t.abbreviation, "name": t.name, "keys": team_keys(t)}
            for t in teams_for(lg)
        ]
    return {"leagues": out}


@app.post("/parse")
def parse(payload: ParseRequest) -> dict:
    bets = parse_bets(payload.text)
    if not bets:
        logger.info("No bets recognized in {} characters of input", len(payload.text))
    else:
        logger.debug("Parsed {} bet(s)", len(bets))
    return {"count": len(bets), "bets": [b.to_dict() for b in bets]}


@app.post("/parse/diagnose")
def parse_diagnose(payload: ParseRequest) -> dict:
    fragments = diagnose_bets(payload.text)
    parsed = sum(1 for f in fragments if f.parsed)
    return {
        "fragment_count": len(fragments),
        "parsed_count": parsed,
        "fragments": [f.to_dict() for f in fragments],
    }


@app.post("/progress")
def progress(payload: ProgressRequest) -> dict:
    results = []
    for item in payload.items:
        try:
            bet = item.bet.to_bet()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        results.append(evaluate_progress(bet, item.live.to_live()).to_dict())
    return {"count": len(results), "results": results}
