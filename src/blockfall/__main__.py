"""Simple ASCII demo for the blockfall engine.

Run with: `python -m blockfall`

Shapes fall straight down from the starting anchor with no input until there
is no room left for the next one.  A frame is printed every time a shape
locks, followed by a short summary.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from . import GameConfig, GameSession, format_grid


LOGGER = logging.getLogger(__name__)


def run(session: GameSession, max_ticks: int, show_frames: bool = True) -> int:
    """Play ``session`` until game over or ``max_ticks``; return lines cleared."""

    session.begin_game()
    session.new_shape()
    lines = 0
    for _ in range(max_ticks):
        result = session.tick()
        if not result.locked:
            continue
        lines += result.lines_removed
        if show_frames:
            print(format_grid(session.grid))
            print()
        if session.new_shape().no_room:
            break
    return lines


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--columns", type=int, default=GameConfig.columns)
    parser.add_argument("--rows", type=int, default=GameConfig.rows)
    parser.add_argument(
        "--max-ticks", type=int, default=2000, help="Stop after this many ticks"
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the summary")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = GameConfig(
        columns=args.columns,
        rows=args.rows,
        starting_column=max(0, args.columns // 2 - 1),
    )
    session = GameSession(config, rng=random.Random(args.seed))
    lines = run(session, args.max_ticks, show_frames=not args.quiet)
    LOGGER.info(
        "Finished: %d line(s) cleared, game over=%s", lines, session.game_over
    )


if __name__ == "__main__":
    main()
