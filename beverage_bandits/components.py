from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Side(Enum):
    ELF = "E"
    GOBLIN = "G"

    @property
    def enemy(self) -> "Side":
        return Side.GOBLIN if self is Side.ELF else Side.ELF

    @property
    def label(self) -> str:
        return "Elves" if self is Side.ELF else "Goblins"


# ---- Core spatial components ----
@dataclass
class Position:
    x: int
    y: int

    @property
    def cell(self) -> Tuple[int, int]:
        return self.x, self.y

    @property
    def reading_key(self) -> Tuple[int, int]:
        """Sort key for reading order: top-to-bottom, then left-to-right."""
        return self.y, self.x

    def is_adjacent_to(self, other: "Position") -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) == 1


# ---- Gameplay ----
@dataclass
class Health:
    current: int
    maximum: int

    @property
    def alive(self) -> bool:
        return self.current > 0


@dataclass
class Attack:
    power: int


@dataclass
class Faction:
    side: Side
