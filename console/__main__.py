"""Entry point: python -m console."""

import argparse
import sys
from decimal import Decimal
from random import Random

from blackjack.game import RoundEngine
from blackjack.log import setup_logging
from config import config
from console.shell import ConsoleShell, parse_amount


def _amount(text: str) -> Decimal:
    amount = parse_amount(text)
    if amount is None or amount < 0:
        raise argparse.ArgumentTypeError(f"invalid bankroll: {text!r}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blackjack",
        description="Console Blackjack: Hit / Stand / Double / Split against the dealer.",
    )
    parser.add_argument(
        "--bankroll",
        type=_amount,
        default=config.game.initial_bankroll,
        help="Starting bankroll (default: %(default)s)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.game.seed,
        help="Seed for reproducible shuffles",
    )
    parser.add_argument(
        "--log-level",
        default="DEBUG" if config.debug else config.logging.level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Diagnostic log level; DEBUG=true in the environment selects DEBUG (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, config.logging.format)

    engine = RoundEngine(initial_bankroll=args.bankroll, rng=Random(args.seed))
    ConsoleShell(engine).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
