"""Headless entry point: run a battle and print the report."""

import argparse
import logging
import sys

from .algorithms import ALGORITHMS, KEYS, USER_CODE
from .arrays import ARRAY_KINDS
from .battle import Battle, BattleConfig
from .errors import ConfigError
from .loader import load_sorter_file
from .settings import DEFAULT_DELAY, DEFAULT_SIZE

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sortbattle", description="Race two sorting algorithms.")
    p.add_argument("--algo1", default="bubble", choices=KEYS)
    p.add_argument("--algo2", default="quick", choices=KEYS)
    p.add_argument("--size", type=int, default=DEFAULT_SIZE, dest="array_size")
    p.add_argument("--type", default="random", choices=ARRAY_KINDS, dest="array_type")
    p.add_argument("--delay", type=int, default=DEFAULT_DELAY, help="milliseconds per step")
    p.add_argument("--user-code", metavar="FILE",
                   help="sorter source file, raced as algo1 against algo2 (sandbox mode)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--list", action="store_true", help="list the algorithms and exit")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def format_report(results) -> str:
    rows = [f"{'Algorithm':<44}{'Time (s)':>10}{'Comparisons':>13}{'Swaps':>10}{'Writes':>10}"]
    for r in results:
        if r.error is not None:
            rows.append(f"{r.name:<44}  {r.error}")
            continue
        rows.append(f"{r.name:<44}{r.time:>10.3f}{r.comparisons:>13,}{r.swaps:>10,}{r.writes:>10,}")
    return "\n".join(rows)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.list:
        for name, key, desc in ALGORITHMS:
            print(f"{key:<10} {name}\n           {desc}")
        return 0

    user_name, user_step = None, None
    if args.user_code:
        loaded, err = load_sorter_file(args.user_code)
        if err is not None:
            print(err, file=sys.stderr)
            return 1
        user_name, user_step = loaded
        logger.info("Loaded: %s", user_name)
        args.algo1 = USER_CODE

    config = BattleConfig(args.algo1, args.algo2, args.array_size, args.array_type, args.delay)
    try:
        battle = Battle(config, seed=args.seed, user_step=user_step, user_name=user_name)
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    battle.start()
    try:
        results = battle.join()
    except KeyboardInterrupt:
        battle.cancel()
        results = battle.join()

    print("Battle Report")
    print(format_report(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
