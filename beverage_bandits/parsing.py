from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from .components import Attack, Faction, Health, Position
from .constants import OPEN, UNIT_SYMBOLS, WALL, CombatConfig
from .ecs import World
from .errors import MapParseError
from .grid import Grid

logger = logging.getLogger(__name__)


def read_map(path: str | Path) -> List[str]:
    """Read a map file into its lines (line endings stripped)."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MapParseError(f"not UTF-8 text ({e.reason} at byte {e.start})") from e
    return text.splitlines()


def _clean(lines: Iterable[str]) -> List[str]:
    rows = [line.rstrip("\r\n") for line in lines]
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def parse_map(lines: Iterable[str], config: CombatConfig | None = None) -> Tuple[Grid, World]:
    """
    Build a fresh grid and unit world from map rows.

    Units are created in reading order, so entity ids follow reading order
    of the starting positions.
    """
    config = config or CombatConfig()
    rows = _clean(lines)
    if not rows:
        raise MapParseError("map is empty")

    width = len(rows[0])
    if width == 0:
        raise MapParseError("first row is empty", row=0)

    grid = Grid(width, len(rows))
    world = World()
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MapParseError(f"expected {width} cells, found {len(row)}", row=y)
        for x, ch in enumerate(row):
            if ch == WALL:
                grid.walls[y][x] = True
            elif ch == OPEN:
                continue
            elif ch in UNIT_SYMBOLS:
                side = UNIT_SYMBOLS[ch]
                eid = world.create()
                world.add(eid, Position(x, y))
                world.add(eid, Faction(side))
                world.add(eid, Health(config.hit_points, config.hit_points))
                world.add(eid, Attack(config.power_for(side)))
                grid.occupy(x, y, eid)
            else:
                raise MapParseError(f"unexpected character {ch!r}", row=y, column=x)

    logger.debug("parsed %dx%d map with %d units", grid.w, grid.h, len(grid.occupants))
    return grid, world
