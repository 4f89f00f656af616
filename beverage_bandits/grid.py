from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import OccupiedCellError, OutOfBoundsError

Coord = Tuple[int, int]


class CellKind(Enum):
    WALL = "wall"
    OPEN = "open"
    UNIT = "unit"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    unit: Optional[int] = None


WALL_CELL = Cell(CellKind.WALL)
OPEN_CELL = Cell(CellKind.OPEN)


@dataclass
class Grid:
    """
    Terrain and occupancy for one battle.

    Walls never change after construction; the only mutable state is the
    occupancy index, which maps a cell to the id of the unit standing on it.
    Unit records (position, hit points, faction) live in the World.
    """

    w: int
    h: int
    walls: List[List[bool]] = field(default_factory=list)
    occupants: Dict[Coord, int] = field(default_factory=dict)  # (x,y)->entity

    def __post_init__(self) -> None:
        if not self.walls:
            self.walls = [[False for _ in range(self.w)] for _ in range(self.h)]

    # --- Terrain ops ---
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.w and 0 <= y < self.h

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(f"({x}, {y}) is outside the {self.w}x{self.h} grid")

    def at(self, x: int, y: int) -> Cell:
        self._check(x, y)
        if self.walls[y][x]:
            return WALL_CELL
        unit = self.occupants.get((x, y))
        return OPEN_CELL if unit is None else Cell(CellKind.UNIT, unit)

    def is_wall(self, x: int, y: int) -> bool:
        self._check(x, y)
        return self.walls[y][x]

    def is_open(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and not self.walls[y][x] and (x, y) not in self.occupants

    def neighbors4(self, x: int, y: int) -> Iterator[Coord]:
        """In-bounds 4-neighbours, in reading order."""
        if y > 0:
            yield (x, y - 1)
        if x > 0:
            yield (x - 1, y)
        if x < self.w - 1:
            yield (x + 1, y)
        if y < self.h - 1:
            yield (x, y + 1)

    def open_neighbors(self, x: int, y: int) -> Iterator[Coord]:
        for nx, ny in self.neighbors4(x, y):
            if self.is_open(nx, ny):
                yield nx, ny

    # --- Occupancy (O(1)) ---
    def occupy(self, x: int, y: int, entity: int) -> None:
        """Never silently overwrite another unit or a wall."""
        self._check(x, y)
        if self.walls[y][x]:
            raise OccupiedCellError(f"({x}, {y}) is a wall")
        current = self.occupants.get((x, y))
        if current is not None and current != entity:
            raise OccupiedCellError(f"({x}, {y}) is held by unit {current}")
        self.occupants[(x, y)] = entity

    def vacate(self, x: int, y: int, entity: int) -> None:
        if self.occupants.get((x, y)) == entity:
            del self.occupants[(x, y)]

    def unit_at(self, x: int, y: int) -> Optional[int]:
        return self.occupants.get((x, y))
