from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .components import Faction, Health, Position, Side
from .ecs import World
from .events import CombatFinished, EventBus, RoundCompleted
from .grid import Grid


@dataclass(frozen=True)
class UnitSnapshot:
    x: int
    y: int
    side: Side
    hp: int
    max_hp: int


@dataclass(frozen=True)
class Frame:
    round: int
    walls: Tuple[Tuple[bool, ...], ...]
    units: Tuple[UnitSnapshot, ...]
    final: bool = False

    @property
    def size(self) -> Tuple[int, int]:
        return (len(self.walls[0]) if self.walls else 0), len(self.walls)


def snapshot(grid: Grid, world: World, round_no: int, final: bool = False) -> Frame:
    _, rows = world.view(Position, Faction, Health)
    units = tuple(
        sorted(
            (UnitSnapshot(pos.x, pos.y, fac.side, hp.current, hp.maximum) for pos, fac, hp in rows),
            key=lambda u: (u.y, u.x),
        )
    )
    walls = tuple(tuple(row) for row in grid.walls)
    return Frame(round_no, walls, units, final)


@dataclass
class FrameRecorder:
    """
    Observer that keeps an immutable picture of the battlefield after every
    completed round, plus the final state. Feeds the replay viewer.
    """

    grid: Grid
    world: World
    frames: List[Frame] = field(default_factory=list)
    outcome: Optional[CombatFinished] = None

    def attach(self, bus: EventBus) -> None:
        if not self.frames:
            self.frames.append(snapshot(self.grid, self.world, 0))
        bus.subscribe(RoundCompleted, self._on_round)
        bus.subscribe(CombatFinished, self._on_finished, once=True)

    def _on_round(self, ev: RoundCompleted) -> None:
        self.frames.append(snapshot(self.grid, self.world, ev.round))

    def _on_finished(self, ev: CombatFinished) -> None:
        self.outcome = ev
        self.frames.append(snapshot(self.grid, self.world, ev.rounds, final=True))
