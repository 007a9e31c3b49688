from __future__ import annotations

import argparse
import logging

from config import get_engine_settings, load_config_from_file, setup_logging
from checkers.game import GameSession, GameStatus

logger = logging.getLogger("run_game")


def parse_args() -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play a computer-vs-computer game in the console")
    ap.add_argument("--depth", type=int, default=None, help="Search depth (defaults to configuration)")
    ap.add_argument("--max-plies", type=int, default=200, help="Stop after this many turns")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    ap.add_argument("--quiet", action="store_true", help="Only print the final board")
    return ap.parse_args()


def main() -> None:
    args = parse_args()
    if args.config:
        load_config_from_file(args.config)
    setup_logging()

    depth = args.depth or get_engine_settings().default_depth
    session = GameSession(ai_depth=depth, auto_ai=False)
    session.visions_enabled = False

    plies = 0
    while session.status is GameStatus.ACTIVE and plies < args.max_plies:
        mover = session.current_player
        result = session.ai_move()
        plies += 1
        if not args.quiet and result is not None:
            print(f"{plies:3d}. {mover.name:<5} ({result.from_row},{result.from_col}) -> "
                  f"({result.move.to_row},{result.move.to_col})  score={result.score}")
            print(session.board)
            print()

    print(session.board)
    if session.status is GameStatus.ACTIVE:
        logger.info("stopped after %d plies without a result", plies)
    print(f"Result: {session.status.value} after {plies} plies")


if __name__ == "__main__":
    main()
