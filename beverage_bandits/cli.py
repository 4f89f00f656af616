from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from .battle import Battle, Outcome
from .components import Side
from .constants import DEFAULT_ATTACK_POWER, DEFAULT_HIT_POINTS, SEARCH_START_POWER, CombatConfig
from .errors import MapParseError, SearchExhaustedError
from .events import RoundCompleted
from .parsing import read_map
from .replay import FrameRecorder
from .search import find_minimum_power
from .textview import render_map

logger = logging.getLogger(__name__)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{text}'") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beverage-bandits",
        description="Simulate elves and goblins fighting on a grid map and print the outcome.",
    )
    parser.add_argument("map", help="map file: '#' wall, '.' open, 'E' elf, 'G' goblin")
    parser.add_argument("--elf-power", type=_positive_int, default=DEFAULT_ATTACK_POWER, help="elf attack power")
    parser.add_argument("--goblin-power", type=_positive_int, default=DEFAULT_ATTACK_POWER, help="goblin attack power")
    parser.add_argument("--hit-points", type=_positive_int, default=DEFAULT_HIT_POINTS, help="starting hit points of every unit")
    parser.add_argument(
        "--search",
        action="store_true",
        help="find the lowest elf attack power that wins without losing an elf",
    )
    parser.add_argument(
        "--search-start", type=_positive_int, default=SEARCH_START_POWER, help="first elf attack power tried by --search"
    )
    parser.add_argument("--search-limit", type=_positive_int, default=None, help="last elf attack power tried by --search")
    parser.add_argument("-q", "--quiet", action="store_true", help="only print the result, no maps")
    parser.add_argument("--show-hp", action="store_true", help="list unit hit points next to each map row")
    parser.add_argument("--view", action="store_true", help="replay the battle in a pygame window")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _print_outcome(outcome: Outcome) -> None:
    print(f"Combat ends after {outcome.rounds} full rounds")
    if outcome.winner is not None:
        print(f"{outcome.winner.label} win with {outcome.hit_points} total hit points left")
    else:
        print(f"Result: {outcome.result}")
    print(f"Outcome: {outcome.rounds} * {outcome.hit_points} = {outcome.score}")


def _simulate(lines: List[str], config: CombatConfig, args: argparse.Namespace) -> Battle:
    battle = Battle.from_lines(lines, config)
    if not args.quiet:
        print("Initial:")
        print(render_map(battle.grid, battle.world, args.show_hp))
        print()

        def _show_round(ev: RoundCompleted) -> None:
            print(f"After {ev.round} round{'s' if ev.round != 1 else ''}:")
            print(render_map(battle.grid, battle.world, args.show_hp))
            print()

        battle.bus.subscribe(RoundCompleted, _show_round)
    return battle


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        lines = read_map(args.map)
    except OSError as e:
        logger.error("cannot read %s: %s", args.map, e)
        return 1
    except MapParseError as e:
        logger.error("invalid map %s: %s", args.map, e)
        return 1

    config = CombatConfig(hit_points=args.hit_points, elf_power=args.elf_power, goblin_power=args.goblin_power)
    try:
        if args.search:
            result = find_minimum_power(lines, config, start=args.search_start, limit=args.search_limit)
            print(f"Minimum elf attack power: {result.power}")
            config = config.with_elf_power(result.power)

        battle = _simulate(lines, config, args)
    except MapParseError as e:
        logger.error("invalid map %s: %s", args.map, e)
        return 1
    except SearchExhaustedError as e:
        logger.error("%s", e)
        return 1

    recorder = None
    if args.view:
        recorder = FrameRecorder(battle.grid, battle.world)
        recorder.attach(battle.bus)

    outcome = battle.run()
    if not args.quiet:
        print("Final:")
        print(render_map(battle.grid, battle.world, args.show_hp))
        print()
    _print_outcome(outcome)
    if args.search:
        print(f"Elf casualties: {outcome.losses(Side.ELF)}")

    if recorder is not None:
        # pygame is only needed for the window
        from .app import run_viewer

        run_viewer(recorder.frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
