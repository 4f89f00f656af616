from __future__ import annotations

import logging
from typing import List, Optional

from ..components import Attack, Faction, Health, Position
from ..ecs import World
from ..events import EventBus, UnitAttacked, UnitDied
from ..grid import Grid

logger = logging.getLogger(__name__)


class CombatSystem:
    """
    Melee resolution: picks the weakest adjacent enemy and applies damage.
    Dead units are removed from the grid and the world on the spot.
    """

    def __init__(self, world: World, grid: Grid, bus: EventBus) -> None:
        self.world = world
        self.grid = grid
        self.bus = bus

    def adjacent_enemies(self, eid: int) -> List[int]:
        pos = self.world.require(eid, Position)
        side = self.world.require(eid, Faction).side
        out: List[int] = []
        for nx, ny in self.grid.neighbors4(pos.x, pos.y):
            other = self.grid.unit_at(nx, ny)
            if other is None:
                continue
            fac = self.world.get(other, Faction)
            if fac is not None and fac.side is not side:
                out.append(other)
        return out

    def choose_target(self, eid: int) -> Optional[int]:
        """Fewest hit points first, then reading order of the target's position."""
        candidates = self.adjacent_enemies(eid)
        if not candidates:
            return None
        return min(
            candidates,
            key=lambda o: (self.world.require(o, Health).current, self.world.require(o, Position).reading_key),
        )

    def attack(self, eid: int) -> Optional[int]:
        """Strike the chosen adjacent enemy. Returns the target's id, if any."""
        target = self.choose_target(eid)
        if target is None:
            return None
        power = self.world.require(eid, Attack).power
        self.apply_damage(target, power, attacker=eid)
        return target

    def apply_damage(self, eid: int, amount: int, attacker: Optional[int] = None) -> bool:
        """Returns True if the unit died from this hit."""
        hp = self.world.require(eid, Health)
        hp.current = max(0, hp.current - amount)
        if attacker is not None:
            self.bus.publish(UnitAttacked(attacker, eid, amount, hp.current))
        if hp.alive:
            return False

        pos = self.world.require(eid, Position)
        side = self.world.require(eid, Faction).side
        self.grid.vacate(pos.x, pos.y, eid)
        self.world.destroy(eid)
        logger.debug("%s unit %d died at %s", side.label, eid, pos.cell)
        self.bus.publish(UnitDied(eid, side, pos.cell))
        return True
