"""
Command-line entry point for holecard.

Run `python -m holecard [decks [bet_limit]]` to play at the console. The
number of decks must be between 4 and 8. `--simulate N` lets a simple
automatic player play N rounds instead, and `--verify_shuffle TRIALS` runs the
shuffle uniformity check.
"""

import argparse
import logging
import random
from collections import Counter
from dataclasses import replace
from typing import List, Optional

from holecard.blackjack.rules import ConfigurationError, TableConfig
from holecard.common.io_interface import ConsoleIOInterface, DummyIOInterface
from holecard.engine import BlackjackEngine
from holecard.engine.blackjack import FAREWELL
from holecard.events import EngineEventType, EventBus
from holecard.verification import shuffle_uniformity

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Send holecard's log records to stderr, or to `log_file` when given."""
    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("holecard")
    close_logging()
    root.addHandler(handler)
    root.setLevel(level.upper())


def close_logging() -> None:
    """Detach and close the handlers installed by `configure_logging`."""
    root = logging.getLogger("holecard")
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play blackjack against the dealer.")
    parser.add_argument(
        "decks", type=int, nargs="?", default=6, help="Number of decks in the shoe (4-8)"
    )
    parser.add_argument(
        "bet_limit", type=int, nargs="?", default=100, help="Maximum bet per round"
    )
    parser.add_argument("--chips", type=int, default=500, help="Starting chips")
    parser.add_argument(
        "--pacing",
        type=float,
        default=0.6,
        help="Seconds to pause between the dealer's draws",
    )
    parser.add_argument(
        "--no_clear",
        action="store_true",
        help="Do not clear the terminal before drawing the table.",
        default=False,
    )
    parser.add_argument("--seed", type=int, help="Seed the shuffle for a replayable game")
    parser.add_argument(
        "--simulate",
        type=int,
        metavar="ROUNDS",
        help="Let an automatic player play up to ROUNDS rounds and print a summary.",
    )
    parser.add_argument(
        "--verify_shuffle",
        type=int,
        metavar="TRIALS",
        help="Run a chi-square uniformity check of the shuffle and exit.",
    )
    parser.add_argument(
        "--log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--log_file",
        type=str,
        help="Write log records to the specified file instead of stderr.",
    )
    return parser


def run_simulation(config: TableConfig, rounds: int) -> None:
    """Play `rounds` rounds with the automatic player and print the tally."""
    outcomes = Counter()
    unsubscribe = EventBus.get_instance().on(
        EngineEventType.HAND_RESULT, lambda data: outcomes.update([data["outcome"]])
    )
    try:
        engine = BlackjackEngine.from_config(
            replace(config, pacing=0.0, clear_screen=False), DummyIOInterface()
        )
        result = engine.run(max_rounds=rounds)
    finally:
        unsubscribe()

    print("Simulation completed.")
    print(f"Rounds played: {engine.round_number:,}")
    for outcome, count in sorted(outcomes.items()):
        print(f"{outcome}: {count:,}")
    print(f"Chips: {config.chips:,} -> {engine.state.chips:,}")
    print(f"Session ended: {type(result).__name__}")


def run_shuffle_check(trials: int, seed: Optional[int]) -> None:
    rng = random.Random(seed) if seed is not None else None
    report = shuffle_uniformity(trials, rng=rng)
    print(f"Shuffle uniformity over {report.trials:,} trials")
    for position, p_value in enumerate(report.p_values):
        print(f"Position {position}: p = {p_value:.4f}")
    print("Uniform" if report.is_uniform() else "NOT uniform")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse the startup arguments and run the selected mode.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    try:
        return run_mode(parser, args)
    finally:
        close_logging()


def run_mode(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.verify_shuffle is not None:
        if args.verify_shuffle < 1:
            parser.error("--verify_shuffle needs at least one trial")
        run_shuffle_check(args.verify_shuffle, args.seed)
        return 0

    config = TableConfig(
        chips=args.chips,
        bet_limit=args.bet_limit,
        decks=args.decks,
        pacing=args.pacing,
        clear_screen=not args.no_clear,
        seed=args.seed,
    )
    try:
        config.validate()
    except ConfigurationError as e:
        parser.error(str(e))

    if args.simulate is not None:
        run_simulation(config, args.simulate)
        return 0

    engine = BlackjackEngine.from_config(
        config, ConsoleIOInterface(clear_screen=config.clear_screen)
    )
    try:
        engine.run()
    except (KeyboardInterrupt, EOFError):
        print()
        print(FAREWELL)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
