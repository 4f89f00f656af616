from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .components import Faction, Health, Position, Side
from .constants import CombatConfig
from .ecs import World
from .events import CombatFinished, EventBus, RoundCompleted, UnitDied
from .grid import Grid
from .parsing import parse_map
from .systems.ai import TacticsAI, TurnResult
from .systems.combat import CombatSystem
from .systems.motion import MotionSystem

logger = logging.getLogger(__name__)


class CombatState(Enum):
    ONGOING = "ongoing"
    FINISHED = "finished"


@dataclass(frozen=True)
class Outcome:
    rounds: int
    hit_points: int
    winner: Optional[Side]
    casualties: Dict[Side, int] = field(default_factory=dict)
    aborted: bool = False
    stalemate: bool = False

    @property
    def score(self) -> int:
        return self.rounds * self.hit_points

    def losses(self, side: Side) -> int:
        return self.casualties.get(side, 0)

    @property
    def result(self) -> str:
        if self.aborted:
            return "aborted after an elf died"
        if self.stalemate:
            return "stalemate"
        if self.winner is None:
            return "no survivors"
        return f"{self.winner.label} win"


class Battle:
    """
    Round driver.

    Each round acts on a snapshot of unit ids taken in reading order at the
    start of the round; units that die before their turn are skipped. A round
    cut short because one side has no enemies left is not counted.
    """

    def __init__(self, grid: Grid, world: World, config: CombatConfig | None = None, bus: EventBus | None = None) -> None:
        self.grid = grid
        self.world = world
        self.config = config or CombatConfig()
        self.bus = bus or EventBus()

        self.motion = MotionSystem(world, grid, self.bus)
        self.combat = CombatSystem(world, grid, self.bus)
        self.ai = TacticsAI(world, grid, self.motion, self.combat)

        self.state = CombatState.ONGOING
        self.rounds = 0
        self.aborted = False
        self.stalemate = False
        self.casualties: Counter[Side] = Counter()
        self.bus.subscribe(UnitDied, self._on_death)

    @classmethod
    def from_lines(cls, lines: Iterable[str], config: CombatConfig | None = None, bus: EventBus | None = None) -> "Battle":
        grid, world = parse_map(lines, config)
        return cls(grid, world, config, bus)

    @classmethod
    def from_text(cls, text: str, config: CombatConfig | None = None, bus: EventBus | None = None) -> "Battle":
        return cls.from_lines(text.splitlines(), config, bus)

    # ---- Queries ----
    def turn_order(self) -> List[int]:
        eids, rows = self.world.view(Position, Health)
        return [eid for eid, _ in sorted(zip(eids, rows), key=lambda item: item[1][0].reading_key)]

    def survivors(self) -> Dict[Side, int]:
        """Remaining unit count per side."""
        _, rows = self.world.view(Faction, Health)
        return dict(Counter(fac.side for fac, _ in rows))

    def total_hit_points(self) -> int:
        _, rows = self.world.view(Health)
        return sum(hp.current for (hp,) in rows)

    def winner(self) -> Optional[Side]:
        sides = self.survivors()
        if len(sides) == 1:
            return next(iter(sides))
        return None

    # ---- Simulation ----
    def _on_death(self, ev: UnitDied) -> None:
        self.casualties[ev.side] += 1
        if self.config.stop_on_elf_death and ev.side is Side.ELF:
            self.aborted = True

    def fight_round(self) -> CombatState:
        if self.state is CombatState.FINISHED:
            return self.state

        order = self.turn_order()
        if not order:
            # Nobody left to enumerate enemies
            self._finish()
            return self.state

        acted = False
        for eid in order:
            if not self.world.has(eid, Health):
                continue  # died earlier this round
            result = self.ai.take_turn(eid)
            if result is TurnResult.NO_TARGETS:
                self._finish()
                return self.state
            acted = acted or result is TurnResult.ACTED
            if self.aborted:
                self._finish()
                return self.state

        if not acted:
            # Nobody can move or strike: every later round would look the same
            self.stalemate = True
            self._finish()
            return self.state

        self.rounds += 1
        logger.debug("round %d complete, %d hit points left", self.rounds, self.total_hit_points())
        self.bus.publish(RoundCompleted(self.rounds))
        return self.state

    def _finish(self) -> None:
        self.state = CombatState.FINISHED
        outcome = self.outcome()
        logger.info("combat finished after %d full rounds: %s, score %d", outcome.rounds, outcome.result, outcome.score)
        self.bus.publish(
            CombatFinished(outcome.rounds, outcome.hit_points, outcome.winner, outcome.aborted, outcome.stalemate)
        )

    def run(self) -> Outcome:
        while self.fight_round() is CombatState.ONGOING:
            pass
        return self.outcome()

    def outcome(self) -> Outcome:
        return Outcome(
            rounds=self.rounds,
            hit_points=self.total_hit_points(),
            winner=None if self.aborted or self.stalemate else self.winner(),
            casualties=dict(self.casualties),
            aborted=self.aborted,
            stalemate=self.stalemate,
        )
