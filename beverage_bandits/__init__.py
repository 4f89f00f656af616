"""
beverage_bandits – elves and goblins fighting it out on a grid.

Deterministic, round-based melee simulation; see cli.py for the entrypoint
and battle.py for the round driver.
"""
from .battle import Battle, CombatState, Outcome
from .components import Side
from .constants import CombatConfig
from .search import SearchResult, find_minimum_power

__all__ = [
    "Battle",
    "CombatConfig",
    "CombatState",
    "Outcome",
    "SearchResult",
    "Side",
    "find_minimum_power",
]
