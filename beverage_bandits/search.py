from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from .battle import Battle, Outcome
from .components import Side
from .constants import SEARCH_START_POWER, CombatConfig
from .errors import SearchExhaustedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    power: int
    outcome: Outcome
    attempts: int


def find_minimum_power(
    lines: Iterable[str],
    config: CombatConfig | None = None,
    start: int = SEARCH_START_POWER,
    limit: Optional[int] = None,
) -> SearchResult:
    """
    Smallest elf attack power at which the elves win without a single loss.

    Every attempt runs on a freshly parsed map; a run is cut short as soon
    as an elf dies. Powers are tried upwards from ``start``. The search stops
    at ``limit``, or at the goblins' hit points: from there on every elf blow
    is a kill and more power changes nothing.
    """
    rows: List[str] = list(lines)
    base = replace(config or CombatConfig(), stop_on_elf_death=True)
    if not any(Side.ELF.value in row for row in rows):
        raise SearchExhaustedError("map has no elves to boost")

    last = max(start, base.hit_points)
    if limit is not None:
        last = min(last, limit)

    attempts = 0
    for power in range(start, last + 1):
        attempts += 1
        outcome = Battle.from_lines(rows, base.with_elf_power(power)).run()
        if outcome.winner is Side.ELF and not outcome.aborted and outcome.losses(Side.ELF) == 0:
            logger.info("elves win flawlessly with attack power %d after %d attempts", power, attempts)
            return SearchResult(power, outcome, attempts)
        logger.debug("attack power %d failed after %d rounds", power, outcome.rounds)

    raise SearchExhaustedError(f"no flawless elf victory with attack power {start}..{last}")
