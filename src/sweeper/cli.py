"""
Command-line launcher for the terminal Minesweeper game.

Usage:
    termsweeper [width height mines] [--preset NAME] [--seed N] [--log-file PATH]
"""
import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from .board import BoardConfig, PRESETS
from .session import run_session
from .terminal import AnsiBackend, KeyReader


logger = logging.getLogger(__name__)

INVALID_ARGUMENTS = "Invalid arguments."


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="termsweeper",
        description=(
            "Minesweeper in an ANSI terminal. Arrow keys move, Enter opens, "
            "' (apostrophe) marks a cell, Ctrl+C or q quits."
        ),
    )
    parser.add_argument(
        "dimensions",
        nargs="*",
        metavar="N",
        help="Board width, height and mine count (all three, default: 9 9 10)",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=None,
        help="Difficulty preset used when no dimensions are given",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for mine placement"
    )
    parser.add_argument(
        "--log-file", default=None, help="Write debug logs to this file"
    )
    return parser


def config_from_args(args: argparse.Namespace) -> BoardConfig:
    """
    Resolve the board configuration from parsed arguments.

    Dimensions only count when all three are given.

    Raises:
        ValueError: Non-integer or out-of-range values.
    """
    if len(args.dimensions) >= 3:
        width, height, mines = (int(value) for value in args.dimensions[:3])
        return BoardConfig(width, height, mines)
    if args.preset is not None:
        preset = PRESETS[args.preset]
        return BoardConfig(preset.width, preset.height, preset.num_mines)
    return BoardConfig()


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, play one game and return the exit code."""
    args = build_parser().parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        config = config_from_args(args)
    except ValueError as exc:
        logger.info("Rejected startup parameters %s: %s", args.dimensions, exc)
        print(INVALID_ARGUMENTS, file=sys.stderr)
        return 1

    backend = AnsiBackend()
    backend.begin(config.height)
    outcome = run_session(
        config, KeyReader(), backend, rng=np.random.default_rng(args.seed)
    )
    logger.info("Game finished: %s", outcome.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
