from __future__ import annotations

from typing import List, NamedTuple


class Scenario(NamedTuple):
    rows: List[str]
    rounds: int
    hit_points: int
    # minimum flawless elf power and the outcome at that power
    elf_power: int | None = None
    boosted_rounds: int | None = None
    boosted_hit_points: int | None = None


def rows(text: str) -> List[str]:
    return [line.strip() for line in text.strip().splitlines()]


SAMPLE = Scenario(
    rows(
        """
        #######
        #.G...#
        #...EG#
        #.#.#G#
        #..G#E#
        #.....#
        #######
        """
    ),
    47,
    590,
    15,
    29,
    172,
)

ELVES_WIN = Scenario(
    rows(
        """
        #######
        #G..#E#
        #E#E.E#
        #G.##.#
        #...#E#
        #...E.#
        #######
        """
    ),
    37,
    982,
)

MIXED = Scenario(
    rows(
        """
        #######
        #E..EG#
        #.#G.E#
        #E.##E#
        #G..#.#
        #..E#.#
        #######
        """
    ),
    46,
    859,
    4,
    33,
    948,
)

CORRIDORS = Scenario(
    rows(
        """
        #######
        #E.G#.#
        #.#G..#
        #G.#.G#
        #G..#.#
        #...E.#
        #######
        """
    ),
    35,
    793,
    15,
    37,
    94,
)

POCKETS = Scenario(
    rows(
        """
        #######
        #.E...#
        #.#..G#
        #.###.#
        #E#G#G#
        #...#G#
        #######
        """
    ),
    54,
    536,
    12,
    39,
    166,
)

OPEN_FIELD = Scenario(
    rows(
        """
        #########
        #G......#
        #.E.#...#
        #..##..G#
        #...##..#
        #...#...#
        #.G...G.#
        #.....G.#
        #########
        """
    ),
    20,
    937,
    34,
    30,
    38,
)

ALL_SCENARIOS = [SAMPLE, ELVES_WIN, MIXED, CORRIDORS, POCKETS, OPEN_FIELD]

MOVEMENT = rows(
    """
    #########
    #G..G..G#
    #.......#
    #.......#
    #G..E..G#
    #.......#
    #.......#
    #G..G..G#
    #########
    """
)

MOVEMENT_AFTER = [
    rows(
        """
        #########
        #.G...G.#
        #...G...#
        #...E..G#
        #.G.....#
        #.......#
        #G..G..G#
        #.......#
        #########
        """
    ),
    rows(
        """
        #########
        #..G.G..#
        #...G...#
        #.G.E.G.#
        #.......#
        #G..G..G#
        #.......#
        #.......#
        #########
        """
    ),
    rows(
        """
        #########
        #.......#
        #..GGG..#
        #..GEG..#
        #G..G...#
        #......G#
        #.......#
        #.......#
        #########
        """
    ),
]
