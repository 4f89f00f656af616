from __future__ import annotations

from dataclasses import dataclass, replace

from .components import Side
from .errors import ConfigError

# ---- Map symbols ----
WALL = "#"
OPEN = "."
UNIT_SYMBOLS = {side.value: side for side in Side}

# ---- Combat defaults ----
DEFAULT_HIT_POINTS = 200
DEFAULT_ATTACK_POWER = 3
# First elf power worth trying when searching for a flawless win
SEARCH_START_POWER = DEFAULT_ATTACK_POWER + 1


@dataclass(frozen=True)
class CombatConfig:
    hit_points: int = DEFAULT_HIT_POINTS
    elf_power: int = DEFAULT_ATTACK_POWER
    goblin_power: int = DEFAULT_ATTACK_POWER
    # Finish the battle as soon as any elf falls
    stop_on_elf_death: bool = False

    def __post_init__(self) -> None:
        # Zero power never ends a fight; negative power would heal.
        for name in ("hit_points", "elf_power", "goblin_power"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}")

    def power_for(self, side: Side) -> int:
        return self.elf_power if side is Side.ELF else self.goblin_power

    def with_elf_power(self, power: int) -> "CombatConfig":
        return replace(self, elf_power=power)


# ---- Viewer ----
WIN_W, WIN_H = 1280, 720
TILE = 24
HUD_H = 28
FIXED_DT = 1.0 / 60.0
DT_CLAMP = 0.25  # clamp long frame spikes
MAX_STEPS_PER_FRAME = 5
FRAME_DELAY = 0.2  # seconds each round stays on screen

# ---- Colors ----
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (40, 40, 45)
LIGHT_GRAY = (90, 90, 98)
WALL_COLOR = (120, 100, 70)
ELF_COLOR = (90, 230, 120)
GOBLIN_COLOR = (220, 60, 60)
HP_BACK = (70, 70, 70)
HP_FRONT = (245, 220, 80)
GRID_LINE = (0, 0, 0, 40)


@dataclass
class ViewerFlags:
    """Runtime toggles for a single viewer window."""

    show_grid: bool = True
    show_hp_bars: bool = True
    show_hud: bool = True
