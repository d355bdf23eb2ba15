from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from bet_parser import diagnose_bets, parse_bets
from log_setup import setup_logging
from providers import ManualStatsProvider
from tracker import track_bets

HINT = (
    "Could not understand the input. Try:\n"
    '- Player props: "lebron 25+ points", "mahomes 300+ passing yards"\n'
    '- Moneyline: "Chiefs ML", "Lakers moneyline"\n'
    '- Spread: "Chiefs -3.5", "Celtics +7"\n'
    '- Game total: "Over 45.5 Chiefs Lions"'
)


def load_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.input == "-":
        return sys.stdin.read()
    return Path(args.input).read_text(encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Parse free-text bets into structured records")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help='Bets as typed, e.g. "lebron 25+ points, Chiefs -3.5"')
    source.add_argument("--input", help="Path to a text file with bets ('-' for stdin)")
    parser.add_argument("--diagnose", action="store_true", help="Show every fragment with its failure reason")
    parser.add_argument("--track", action="store_true", help="Also show progress from manually entered stats")
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    text = load_text(args)

    if args.diagnose:
        fragments = diagnose_bets(text)
        bets_found = any(f.parsed for f in fragments)
        payload: object = [f.to_dict() for f in fragments]
    else:
        bets = parse_bets(text)
        bets_found = bool(bets)
        if args.track:
            payload = track_bets(ManualStatsProvider(), bets)
        else:
            payload = [b.to_dict() for b in bets]

    print(json.dumps(payload, ensure_ascii=False, indent=2))

    if text.strip() and not bets_found:
        logger.warning("No bets recognized")
        print(HINT, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
