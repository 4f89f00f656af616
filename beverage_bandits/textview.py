from __future__ import annotations

from typing import List

from .components import Faction, Health
from .constants import OPEN, WALL
from .ecs import World
from .grid import CellKind, Grid


def render_rows(grid: Grid, world: World, show_hp: bool = False) -> List[str]:
    """
    Map rows with unit symbols drawn over the terrain.

    With ``show_hp`` each row is followed by its units' hit points in
    reading order, e.g. ``#G.E#   G(200), E(131)``.
    """
    rows: List[str] = []
    for y in range(grid.h):
        chars: List[str] = []
        stats: List[str] = []
        for x in range(grid.w):
            cell = grid.at(x, y)
            if cell.kind is CellKind.WALL:
                chars.append(WALL)
            elif cell.kind is CellKind.OPEN:
                chars.append(OPEN)
            else:
                symbol = world.require(cell.unit, Faction).side.value
                chars.append(symbol)
                stats.append(f"{symbol}({world.require(cell.unit, Health).current})")
        row = "".join(chars)
        if show_hp and stats:
            row += "   " + ", ".join(stats)
        rows.append(row)
    return rows


def render_map(grid: Grid, world: World, show_hp: bool = False) -> str:
    return "\n".join(render_rows(grid, world, show_hp))
