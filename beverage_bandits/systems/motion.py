from __future__ import annotations

from typing import Tuple

from ..components import Position
from ..ecs import World
from ..errors import InvalidMoveError, OccupiedCellError
from ..events import EventBus, UnitMoved
from ..grid import Grid


class MotionSystem:
    """
    Single-step unit movement:
      - only onto an open, 4-adjacent cell
      - occupancy index and Position are updated together, never one alone
    """

    def __init__(self, world: World, grid: Grid, bus: EventBus) -> None:
        self.world = world
        self.grid = grid
        self.bus = bus

    def move_unit(self, eid: int, to: Tuple[int, int]) -> None:
        pos = self.world.get(eid, Position)
        if pos is None:
            raise InvalidMoveError(f"unit {eid} is not on the battlefield")
        tx, ty = to
        src = pos.cell
        if abs(tx - pos.x) + abs(ty - pos.y) != 1:
            raise InvalidMoveError(f"unit {eid} at {src} cannot step to {to}")
        if not self.grid.is_open(tx, ty):
            raise InvalidMoveError(f"unit {eid} cannot step onto {to}: {self.grid.at(tx, ty).kind.value}")
        self._step_to(eid, pos.x, pos.y, tx, ty)
        pos.x, pos.y = tx, ty
        self.bus.publish(UnitMoved(eid, src, to))

    def _step_to(self, eid: int, x0: int, y0: int, x1: int, y1: int) -> None:
        self.grid.vacate(x0, y0, eid)
        try:
            self.grid.occupy(x1, y1, eid)
        except OccupiedCellError:
            # Re-occupy original to keep index consistent
            self.grid.occupy(x0, y0, eid)
            raise
