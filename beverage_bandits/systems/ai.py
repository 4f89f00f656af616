from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from ..components import Faction, Position
from ..ecs import World
from ..grid import Grid
from ..pathing import in_range_cells, plan_move
from .combat import CombatSystem
from .motion import MotionSystem


class TurnResult(Enum):
    NO_TARGETS = "no_targets"  # no enemies left anywhere: combat is over
    ACTED = "acted"
    IDLE = "idle"


class TacticsAI:
    """
    One unit's turn: close in on the nearest enemy, then hit the weakest
    neighbour. Movement never happens when an enemy is already adjacent.
    """

    def __init__(self, world: World, grid: Grid, motion: MotionSystem, combat: CombatSystem) -> None:
        self.world = world
        self.grid = grid
        self.motion = motion
        self.combat = combat

    def enemy_positions(self, eid: int) -> List[Tuple[int, int]]:
        side = self.world.require(eid, Faction).side
        _, rows = self.world.view(Faction, Position)
        return [pos.cell for fac, pos in rows if fac.side is not side]

    def take_turn(self, eid: int) -> TurnResult:
        enemies = self.enemy_positions(eid)
        if not enemies:
            return TurnResult.NO_TARGETS

        moved = False
        if not self.combat.adjacent_enemies(eid):
            moved = self._advance(eid, enemies)

        attacked = self.combat.attack(eid) is not None
        return TurnResult.ACTED if moved or attacked else TurnResult.IDLE

    def _advance(self, eid: int, enemies: List[Tuple[int, int]]) -> bool:
        targets = in_range_cells(self.grid, enemies)
        if not targets:
            return False
        pos = self.world.require(eid, Position)
        plan = plan_move(self.grid, pos.cell, targets)
        if plan is None:
            return False
        self.motion.move_unit(eid, plan.step)
        return True
