"""
Command-line entry point for cursed-mines.

Usage:
    cursed-mines WIDTH HEIGHT MINES [--seed N] [--log-file PATH]
"""
import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from .errors import AllocationFailure, InvalidConfiguration
from .session import Session
from .terminal import HELP, run

EXIT_OK = 0
EXIT_ALLOCATION_FAILURE = 1
EXIT_INVALID_CONFIGURATION = 3

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cursed-mines",
        description="Minesweeper in the terminal",
        epilog=HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("width", type=int, help="Number of columns")
    parser.add_argument("height", type=int, help="Number of rows")
    parser.add_argument("mines", type=int, help="Number of mines")
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for the board"
    )
    parser.add_argument(
        "--log-file", default=None, help="Write debug log records to this file"
    )
    return parser


def create_session(args: argparse.Namespace) -> Session:
    """Create the session described by parsed arguments."""
    rng = np.random.default_rng(args.seed)
    return Session.new(args.width, args.height, args.mines, rng)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, build the board and play."""
    args = build_parser().parse_args(argv)

    if args.log_file:
        logging.basicConfig(
            filename=args.log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        session = create_session(args)
    except InvalidConfiguration as exc:
        print(f"error during board initialization: {exc}", file=sys.stderr)
        return EXIT_INVALID_CONFIGURATION
    except AllocationFailure as exc:
        print(f"error during board initialization: {exc}", file=sys.stderr)
        return EXIT_ALLOCATION_FAILURE

    logger.info(
        "Starting %dx%d game with %d mines", args.width, args.height, args.mines
    )
    run(session)
    logger.info("Session ended: %s", session.game.state.name)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
