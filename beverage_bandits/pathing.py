from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterable, Optional, Set, Tuple

from .errors import PathingError
from .grid import Coord, Grid


@dataclass(frozen=True)
class MovePlan:
    destination: Coord
    distance: int
    step: Coord


def reading_key(cell: Coord) -> Tuple[int, int]:
    x, y = cell
    return y, x


def distances_from(grid: Grid, start: Coord) -> Dict[Coord, int]:
    """
    Breadth-first distances over open cells on the 4-neighbourhood.
    The start cell itself may be occupied (it's where the mover stands).
    """
    sx, sy = start
    if not grid.in_bounds(sx, sy):
        return {}

    q: Deque[Coord] = deque()
    q.append(start)
    dist: Dict[Coord, int] = {start: 0}

    while q:
        x, y = q.popleft()
        cost = dist[(x, y)]
        for nxt in grid.open_neighbors(x, y):
            if nxt in dist:
                continue
            dist[nxt] = cost + 1
            q.append(nxt)
    return dist


def in_range_cells(grid: Grid, enemies: Iterable[Coord]) -> Set[Coord]:
    """Open cells next to at least one enemy."""
    out: Set[Coord] = set()
    for ex, ey in enemies:
        out.update(grid.open_neighbors(ex, ey))
    return out


def plan_move(grid: Grid, start: Coord, targets: Iterable[Coord]) -> Optional[MovePlan]:
    """
    Pick the nearest reachable target (ties by reading order) and the first
    step towards it (ties by reading order of the step cell).
    Returns None if no target can be reached.
    """
    from_start = distances_from(grid, start)
    reachable = [(from_start[t], reading_key(t), t) for t in targets if t in from_start]
    if not reachable:
        return None
    distance, _, destination = min(reachable)

    from_destination = distances_from(grid, destination)
    for step in grid.open_neighbors(*start):
        if from_destination.get(step) == distance - 1:
            return MovePlan(destination, distance, step)
    raise PathingError(f"no first step from {start} towards {destination}")
